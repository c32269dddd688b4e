"""Create CronJobs on the cluster and look them up afterwards.

Submission is a create, never an upsert: a CronJob that already exists under
the same name is left untouched and :class:`AlreadyExistsError` is raised.
Nothing here retries or polls; the caller decides what a failure means.
"""

from __future__ import annotations

import dataclasses
import re
import typing as typ

import msgspec

from cronreport.logging import get_logger, log_info

from .errors import (
    ClusterResponseShapeError,
    SubmissionRejectedError,
    WorkloadNotFoundError,
    error_for_status,
)

if typ.TYPE_CHECKING:
    import httpx

    from cronreport.workload.models import CronJob

    from .connection import ClusterConnection

logger = get_logger(__name__)

_NAMESPACE_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
_HTTP_ERROR_STATUS_THRESHOLD = 400
_HTTP_NOT_FOUND = 404


class _ApiStatus(msgspec.Struct, kw_only=True):
    """Error body returned by the API server (``kind: Status``)."""

    message: str = ""
    reason: str | None = None


class _CreatedMetadata(msgspec.Struct, kw_only=True, rename="camel"):
    name: str
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = None


class _CreatedObject(msgspec.Struct, kw_only=True):
    metadata: _CreatedMetadata


def cronjobs_path(namespace: str, name: str | None = None) -> str:
    """Return the API path of the CronJob collection, or of one CronJob."""
    collection = f"/apis/batch/v1/namespaces/{namespace}/cronjobs"
    return collection if name is None else f"{collection}/{name}"


@dataclasses.dataclass(frozen=True, slots=True)
class WorkloadReference:
    """Identifies a CronJob created by :func:`submit_workload`."""

    namespace: str
    name: str
    uid: str | None = None
    resource_version: str | None = None

    @property
    def path(self) -> str:
        """Return the API path for fetching this CronJob."""
        return cronjobs_path(self.namespace, self.name)


def _check_namespace(namespace: str) -> None:
    if not _NAMESPACE_PATTERN.fullmatch(namespace):
        msg = f"invalid namespace {namespace!r}: must be a DNS-1123 label"
        raise SubmissionRejectedError(msg)


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the taxonomy error matching a non-2xx response."""
    if response.status_code < _HTTP_ERROR_STATUS_THRESHOLD:
        return
    try:
        status = msgspec.json.decode(response.content, type=_ApiStatus)
    except msgspec.DecodeError:
        status = _ApiStatus()
    message = status.message or (
        f"HTTP {response.status_code}: {response.text.strip() or 'no body'}"
    )
    raise error_for_status(response.status_code, message, status.reason)


def submit_workload(
    handle: ClusterConnection,
    namespace: str,
    descriptor: CronJob,
    *,
    timeout: float | None = None,
) -> WorkloadReference:
    """Create ``descriptor`` as a new CronJob in ``namespace``.

    Parameters
    ----------
    handle : ClusterConnection
        Connection to the API server.
    namespace : str
        Namespace to create the CronJob in.
    descriptor : CronJob
        Compiled descriptor; its ``identity`` becomes the resource name.
    timeout : float | None, optional
        Deadline in seconds, overriding the handle's default.

    Returns
    -------
    WorkloadReference
        Reference to the created CronJob, usable with :func:`lookup_workload`.

    Raises
    ------
    ClusterConnectionError
        If the server is unreachable, the deadline elapses
        (:class:`SubmissionTimeoutError`) or the credentials are rejected.
    AlreadyExistsError
        If a CronJob with the same name already exists in ``namespace``.
    ForbiddenError
        If the credentials may not create CronJobs in ``namespace``.
    TransientServerError
        If the server fails with a 5xx status.
    SubmissionRejectedError
        For an invalid namespace or any other client error.

    """
    _check_namespace(namespace)
    log_info(
        logger,
        "creating CronJob %s in namespace %s",
        descriptor.identity,
        namespace,
    )
    response = handle.request(
        "POST",
        cronjobs_path(namespace),
        content=descriptor.encode(),
        timeout=timeout,
    )
    _raise_for_status(response)

    try:
        created = msgspec.json.decode(response.content, type=_CreatedObject)
    except msgspec.DecodeError as exc:
        raise ClusterResponseShapeError.missing("metadata") from exc

    reference = WorkloadReference(
        namespace=created.metadata.namespace or namespace,
        name=created.metadata.name,
        uid=created.metadata.uid,
        resource_version=created.metadata.resource_version,
    )
    log_info(
        logger,
        "created CronJob %s in namespace %s (uid=%s)",
        reference.name,
        reference.namespace,
        reference.uid,
    )
    return reference


def lookup_workload(
    handle: ClusterConnection,
    reference: WorkloadReference,
    *,
    timeout: float | None = None,
) -> dict[str, typ.Any]:
    """Fetch the live manifest of a previously submitted CronJob.

    Raises
    ------
    WorkloadNotFoundError
        If the CronJob no longer exists.

    """
    response = handle.request("GET", reference.path, timeout=timeout)
    if response.status_code == _HTTP_NOT_FOUND:
        msg = f"CronJob {reference.name} not found in namespace {reference.namespace}"
        raise WorkloadNotFoundError(
            msg, status_code=_HTTP_NOT_FOUND, reason="NotFound"
        )
    _raise_for_status(response)

    try:
        manifest = msgspec.json.decode(response.content)
    except msgspec.DecodeError as exc:
        raise ClusterResponseShapeError.missing("object") from exc
    if not isinstance(manifest, dict):
        raise ClusterResponseShapeError.missing("object")
    return manifest
