"""Cluster credential loading from kubeconfig files or a pod's service account.

Only static credentials are supported: bearer tokens, token files, client
certificates and basic auth. ``exec`` and ``auth-provider`` plugins are
rejected rather than silently ignored.

Examples
--------
Load the current context of the default kubeconfig::

    creds = build_credentials(default_kubeconfig_path())

Load credentials when running inside a pod::

    creds = build_credentials("")

"""

from __future__ import annotations

import base64
import binascii
import os
import typing as typ
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .connection import ClusterCredentials
from .errors import KubeconfigError

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")


class _Cluster(msgspec.Struct, kw_only=True, rename="kebab"):
    server: str
    certificate_authority: str | None = None
    certificate_authority_data: str | None = None
    insecure_skip_tls_verify: bool = False


class _User(msgspec.Struct, kw_only=True, rename="kebab"):
    token: str | None = None
    token_file: str | None = msgspec.field(default=None, name="tokenFile")
    username: str | None = None
    password: str | None = None
    client_certificate: str | None = None
    client_certificate_data: str | None = None
    client_key: str | None = None
    client_key_data: str | None = None
    exec: dict[str, typ.Any] | None = None
    auth_provider: dict[str, typ.Any] | None = None


class _Context(msgspec.Struct, kw_only=True):
    cluster: str
    user: str | None = None
    namespace: str | None = None


class _NamedCluster(msgspec.Struct, kw_only=True):
    name: str
    cluster: _Cluster


class _NamedUser(msgspec.Struct, kw_only=True):
    name: str
    user: _User = msgspec.field(default_factory=_User)


class _NamedContext(msgspec.Struct, kw_only=True):
    name: str
    context: _Context


class _Kubeconfig(msgspec.Struct, kw_only=True, rename="kebab"):
    clusters: list[_NamedCluster] = msgspec.field(default_factory=list)
    users: list[_NamedUser] = msgspec.field(default_factory=list)
    contexts: list[_NamedContext] = msgspec.field(default_factory=list)
    current_context: str | None = None


def default_kubeconfig_path() -> str:
    """Return the kubeconfig path used when none is given on the command line.

    The first entry of ``$KUBECONFIG`` wins, then ``~/.kube/config`` when a
    home directory can be determined. An empty string selects in-cluster
    credentials.
    """
    from_env = os.environ.get("KUBECONFIG", "")
    first = next((entry for entry in from_env.split(os.pathsep) if entry), "")
    if first:
        return first
    try:
        home = Path.home()
    except RuntimeError:
        return ""
    return str(home / ".kube" / "config")


def _decode_pem(data: str | None, *, field: str, path: Path) -> str | None:
    if not data:
        return None
    try:
        return base64.b64decode(data, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        msg = f"{field} is not valid base64 PEM"
        raise KubeconfigError.unreadable(path, ValueError(msg)) from exc


def _resolve(value: str | None, base: Path) -> Path | None:
    """Resolve a kubeconfig path relative to the file that names it."""
    if not value:
        return None
    candidate = Path(value).expanduser()
    return candidate if candidate.is_absolute() else base / candidate


def _read_kubeconfig(path: Path) -> _Kubeconfig:
    yaml = YAML(typ="safe")
    try:
        loaded = yaml.load(path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise KubeconfigError.unreadable(path, exc) from exc
    if loaded is None:
        raise KubeconfigError.missing("content", path)
    try:
        return msgspec.convert(loaded, type=_Kubeconfig)
    except msgspec.ValidationError as exc:
        raise KubeconfigError.unreadable(path, exc) from exc


def _select_context(
    config: _Kubeconfig, name: str | None, path: Path
) -> tuple[_Cluster, str, _User]:
    context_name = name or config.current_context
    if not context_name:
        raise KubeconfigError.missing("current-context", path)

    contexts = {entry.name: entry.context for entry in config.contexts}
    clusters = {entry.name: entry.cluster for entry in config.clusters}
    users = {entry.name: entry.user for entry in config.users}

    context = contexts.get(context_name)
    if context is None:
        raise KubeconfigError.missing(f"context {context_name!r}", path)
    cluster = clusters.get(context.cluster)
    if cluster is None:
        raise KubeconfigError.missing(f"cluster {context.cluster!r}", path)

    user_name = context.user or ""
    if context.user and context.user not in users:
        raise KubeconfigError.missing(f"user {context.user!r}", path)
    return cluster, user_name, users.get(user_name, _User())


def _read_token(user: _User, base: Path) -> str | None:
    if user.token:
        return user.token
    token_path = _resolve(user.token_file, base)
    if token_path is None:
        return None
    try:
        return token_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise KubeconfigError.unreadable(token_path, exc) from exc


def load_kubeconfig(
    path: Path | str, *, context: str | None = None
) -> ClusterCredentials:
    """Build credentials from a kubeconfig file.

    Parameters
    ----------
    path : Path | str
        Kubeconfig file to read.
    context : str | None, optional
        Context to use instead of ``current-context``.

    Returns
    -------
    ClusterCredentials
        Server URL, trust anchors and client credentials of the context.

    Raises
    ------
    KubeconfigError
        If the file cannot be parsed, names missing entries, or relies on an
        unsupported authentication plugin.

    """
    path_obj = Path(path).expanduser()
    config = _read_kubeconfig(path_obj)
    cluster, user_name, user = _select_context(config, context, path_obj)

    if user.exec is not None:
        raise KubeconfigError.unsupported_auth(user_name, "exec")
    if user.auth_provider is not None:
        raise KubeconfigError.unsupported_auth(user_name, "auth-provider")

    base = path_obj.parent
    return ClusterCredentials(
        server=cluster.server,
        token=_read_token(user, base),
        username=user.username,
        password=user.password,
        ca_file=_resolve(cluster.certificate_authority, base),
        ca_data=_decode_pem(
            cluster.certificate_authority_data,
            field="certificate-authority-data",
            path=path_obj,
        ),
        client_cert_file=_resolve(user.client_certificate, base),
        client_cert_data=_decode_pem(
            user.client_certificate_data,
            field="client-certificate-data",
            path=path_obj,
        ),
        client_key_file=_resolve(user.client_key, base),
        client_key_data=_decode_pem(
            user.client_key_data, field="client-key-data", path=path_obj
        ),
        insecure_skip_tls_verify=cluster.insecure_skip_tls_verify,
    )


def load_incluster_credentials(
    service_account_dir: Path = SERVICE_ACCOUNT_DIR,
) -> ClusterCredentials:
    """Build credentials from the service account mounted into a pod."""
    host = os.environ.get("KUBERNETES_SERVICE_HOST", "").strip()
    port = os.environ.get("KUBERNETES_SERVICE_PORT", "").strip()
    if not host or not port:
        raise KubeconfigError.not_in_cluster()

    token_path = service_account_dir / "token"
    try:
        token = token_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise KubeconfigError.unreadable(token_path, exc) from exc

    # IPv6 service hosts need brackets in a URL authority.
    authority = f"[{host}]" if ":" in host else host
    return ClusterCredentials(
        server=f"https://{authority}:{port}",
        token=token,
        ca_file=service_account_dir / "ca.crt",
    )


def build_credentials(
    kubeconfig: Path | str | None, *, context: str | None = None
) -> ClusterCredentials:
    """Load credentials from ``kubeconfig``, or in-cluster when it is empty."""
    if kubeconfig:
        return load_kubeconfig(kubeconfig, context=context)
    return load_incluster_credentials()
