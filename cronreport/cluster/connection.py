"""Connection handle for the Kubernetes API server."""

from __future__ import annotations

import dataclasses
import ssl
import tempfile
import typing as typ
from pathlib import Path

import httpx

from .errors import ClusterConnectionError, KubeconfigError, SubmissionTimeoutError

if typ.TYPE_CHECKING:
    import types

DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = "cronreport/0.1"


@dataclasses.dataclass(frozen=True, slots=True)
class ClusterCredentials:
    """Endpoint and credentials for one API server.

    PEM material may be supplied as a file path or as inline text; inline
    text wins when both are set. ``token`` and basic-auth fields are
    mutually exclusive in practice, with the token taking precedence.
    """

    server: str
    token: str | None = dataclasses.field(default=None, repr=False)
    username: str | None = None
    password: str | None = dataclasses.field(default=None, repr=False)
    ca_file: Path | None = None
    ca_data: str | None = dataclasses.field(default=None, repr=False)
    client_cert_file: Path | None = None
    client_cert_data: str | None = dataclasses.field(default=None, repr=False)
    client_key_file: Path | None = None
    client_key_data: str | None = dataclasses.field(default=None, repr=False)
    insecure_skip_tls_verify: bool = False

    @property
    def has_client_certificate(self) -> bool:
        """Return True when a client certificate and key are both configured."""
        has_cert = bool(self.client_cert_data or self.client_cert_file)
        has_key = bool(self.client_key_data or self.client_key_file)
        return has_cert and has_key


def _load_client_certificate(
    context: ssl.SSLContext, creds: ClusterCredentials
) -> None:
    """Load the client certificate chain, spilling inline PEM to a temp dir.

    ``SSLContext.load_cert_chain`` only accepts paths; the files are removed
    as soon as the chain has been read.
    """
    with tempfile.TemporaryDirectory(prefix="cronreport-") as tmp:
        cert_path = creds.client_cert_file
        key_path = creds.client_key_file
        if creds.client_cert_data:
            cert_path = Path(tmp) / "client.crt"
            cert_path.write_text(creds.client_cert_data, encoding="utf-8")
        if creds.client_key_data:
            key_path = Path(tmp) / "client.key"
            key_path.write_text(creds.client_key_data, encoding="utf-8")
            key_path.chmod(0o600)
        context.load_cert_chain(certfile=cert_path, keyfile=key_path)


def build_ssl_context(creds: ClusterCredentials) -> ssl.SSLContext:
    """Return a TLS context trusting the cluster CA and presenting client certs."""
    if creds.insecure_skip_tls_verify:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    else:
        context = ssl.create_default_context(
            cafile=str(creds.ca_file) if creds.ca_file and not creds.ca_data else None,
            cadata=creds.ca_data,
        )
    if creds.has_client_certificate:
        _load_client_certificate(context, creds)
    return context


def _auth_headers(creds: ClusterCredentials) -> dict[str, str]:
    return {"Authorization": f"Bearer {creds.token}"} if creds.token else {}


def _basic_auth(creds: ClusterCredentials) -> httpx.BasicAuth | None:
    if creds.token or creds.username is None or creds.password is None:
        return None
    return httpx.BasicAuth(creds.username, creds.password)


class ClusterConnection:
    """Capability to issue requests against one API server.

    The handle carries no per-request state and may be shared by several
    submissions. Use it as a context manager, or call :meth:`close`, to
    release the underlying HTTP pool when the handle owns it.
    """

    def __init__(
        self,
        credentials: ClusterCredentials,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialise the handle, building an HTTP client unless one is given."""
        self._server = credentials.server.rstrip("/")
        self._timeout_s = timeout_s
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=timeout_s,
            verify=build_ssl_context(credentials),
            auth=_basic_auth(credentials),
            headers={
                **_auth_headers(credentials),
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        )

    @property
    def server(self) -> str:
        """Return the API server URL."""
        return self._server

    def request(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send one request and return the raw response.

        ``timeout`` overrides the handle's default deadline for this call.

        Raises
        ------
        SubmissionTimeoutError
            If the deadline elapses before a response arrives.
        ClusterConnectionError
            If the request fails at the transport level.

        """
        effective_timeout = self._timeout_s if timeout is None else timeout
        headers = None if content is None else {"Content-Type": "application/json"}
        try:
            return self._client.request(
                method,
                f"{self._server}{path}",
                content=content,
                headers=headers,
                timeout=effective_timeout,
            )
        except httpx.TimeoutException as exc:
            raise SubmissionTimeoutError.elapsed(
                self._server, effective_timeout
            ) from exc
        except httpx.TransportError as exc:
            raise ClusterConnectionError.transport(self._server, exc) from exc

    def close(self) -> None:
        """Close the HTTP client when this handle created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ClusterConnection:
        """Return the handle for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close the handle on leaving the ``with`` block."""
        self.close()


def connect(
    credentials: ClusterCredentials, *, timeout_s: float = DEFAULT_TIMEOUT_S
) -> ClusterConnection:
    """Return a connection handle for ``credentials``.

    Raises
    ------
    KubeconfigError
        If the CA bundle or client certificate cannot be loaded.

    """
    try:
        return ClusterConnection(credentials, timeout_s=timeout_s)
    except OSError as exc:
        raise KubeconfigError.unreadable("TLS material", exc) from exc
