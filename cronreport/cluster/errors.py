"""Errors raised while loading credentials or talking to the cluster API."""

from __future__ import annotations

import typing as typ

_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403
_HTTP_CONFLICT = 409
_HTTP_SERVER_ERROR_THRESHOLD = 500


class KubeconfigError(RuntimeError):
    """Raised when cluster credentials cannot be loaded."""

    @classmethod
    def unreadable(cls, path: object, exc: Exception) -> KubeconfigError:
        """Return an error for a kubeconfig that cannot be read or parsed."""
        return cls(f"failed to load kubeconfig {path}: {exc}")

    @classmethod
    def missing(cls, what: str, path: object) -> KubeconfigError:
        """Return an error for a kubeconfig lacking a required entry."""
        return cls(f"kubeconfig {path} has no {what}")

    @classmethod
    def unsupported_auth(cls, user: str, mechanism: str) -> KubeconfigError:
        """Return an error for credential plugins this client cannot run."""
        return cls(f"user {user!r} uses unsupported {mechanism} authentication")

    @classmethod
    def not_in_cluster(cls) -> KubeconfigError:
        """Return an error when no kubeconfig is given outside a pod."""
        return cls(
            "no kubeconfig given and KUBERNETES_SERVICE_HOST/KUBERNETES_SERVICE_PORT "
            "are not set; cannot use in-cluster credentials"
        )


class SubmissionError(RuntimeError):
    """Base class for failures reported by the cluster API.

    Attributes
    ----------
    status_code
        HTTP status returned by the API server, or ``None`` when no response
        was received.
    reason
        Machine-readable ``Status.reason`` from the response body, if any.
    retryable
        Whether a caller may reasonably retry the same request with backoff.

    """

    retryable: typ.ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        """Initialise with the platform's message and response details."""
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)


class ClusterConnectionError(SubmissionError):
    """Raised when the API server is unreachable or rejects the credentials."""

    @classmethod
    def transport(cls, server: str, exc: Exception) -> ClusterConnectionError:
        """Return an error for a request that never got a response."""
        return cls(f"cannot reach API server {server}: {exc}")


class SubmissionTimeoutError(ClusterConnectionError):
    """Raised when the API server does not answer before the deadline."""

    @classmethod
    def elapsed(cls, server: str, timeout: float | None) -> SubmissionTimeoutError:
        """Return an error for a request that exceeded its deadline."""
        return cls(f"API server {server} did not respond within {timeout}s")


class AlreadyExistsError(SubmissionError):
    """Raised when a CronJob with the same name exists in the namespace."""


class ForbiddenError(SubmissionError):
    """Raised when the credentials lack permission in the namespace."""


class TransientServerError(SubmissionError):
    """Raised for 5xx responses; the request may succeed if retried later."""

    retryable: typ.ClassVar[bool] = True


class SubmissionRejectedError(SubmissionError):
    """Raised for other client errors, such as an invalid schedule."""


class WorkloadNotFoundError(SubmissionRejectedError):
    """Raised when a looked-up CronJob does not exist."""


class ClusterResponseShapeError(SubmissionError):
    """Raised when a successful response body lacks expected fields."""

    @classmethod
    def missing(cls, field: str) -> ClusterResponseShapeError:
        """Return an error for a missing response field."""
        return cls(f"API server response missing expected field: {field}")


def error_for_status(
    status_code: int, message: str, reason: str | None = None
) -> SubmissionError:
    """Map an HTTP error status to the matching :class:`SubmissionError`."""
    error_type: type[SubmissionError]
    if status_code == _HTTP_UNAUTHORIZED:
        error_type = ClusterConnectionError
    elif status_code == _HTTP_FORBIDDEN:
        error_type = ForbiddenError
    elif status_code == _HTTP_CONFLICT and reason in {None, "AlreadyExists"}:
        error_type = AlreadyExistsError
    elif status_code >= _HTTP_SERVER_ERROR_THRESHOLD:
        error_type = TransientServerError
    else:
        error_type = SubmissionRejectedError
    return error_type(message, status_code=status_code, reason=reason)
