"""Errors raised while loading or compiling a Report definition."""

from __future__ import annotations


class ReportError(ValueError):
    """Base class for Report definition errors."""


class InvalidIdentityError(ReportError):
    """Raised when a Report name is not a usable CronJob name."""

    def __init__(self, name: str, reason: str) -> None:
        """Initialise with the rejected name and the rule it broke."""
        self.name = name
        self.reason = reason
        super().__init__(f"invalid report name {name!r}: {reason}")


class IncompleteReportSpecError(ReportError):
    """Raised when a required ReportSpec field is empty."""

    def __init__(self, report_name: str, field: str) -> None:
        """Initialise with the report name and the empty field."""
        self.report_name = report_name
        self.field = field
        super().__init__(f"report {report_name!r} is missing spec.{field}")


class ReportLoadError(ReportError):
    """Raised when a Report file cannot be read or decoded."""

    @classmethod
    def unreadable(cls, path: object, exc: Exception) -> ReportLoadError:
        """Return an error for I/O or YAML syntax failures."""
        return cls(f"failed to parse report {path}: {exc}")

    @classmethod
    def empty(cls, path: object) -> ReportLoadError:
        """Return an error for a file with no YAML document."""
        return cls(f"report file {path} is empty")

    @classmethod
    def schema(cls, path: object, exc: Exception) -> ReportLoadError:
        """Return an error for documents that do not match the Report schema."""
        return cls(f"report {path} failed schema validation: {exc}")
