"""Naming and completeness checks applied before a Report is compiled."""

from __future__ import annotations

import re
import typing as typ

from .errors import IncompleteReportSpecError, InvalidIdentityError

if typ.TYPE_CHECKING:
    from .models import Report

# DNS-1123 label: lowercase alphanumerics and '-', alphanumeric at both ends.
DNS_LABEL_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")

# Jobs spawned by a CronJob append an 11 character suffix to its name and
# must still fit in a 63 character label.
MAX_CRONJOB_NAME_LENGTH = 52


def validate_identity(name: str) -> str:
    """Return ``name`` when it is a valid CronJob name.

    Raises
    ------
    InvalidIdentityError
        If the name is empty, too long, or uses characters outside the
        DNS-1123 label grammar.

    """
    if not name:
        raise InvalidIdentityError(name, "name must not be empty")
    if len(name) > MAX_CRONJOB_NAME_LENGTH:
        raise InvalidIdentityError(
            name, f"name must be at most {MAX_CRONJOB_NAME_LENGTH} characters"
        )
    if not DNS_LABEL_PATTERN.fullmatch(name):
        raise InvalidIdentityError(
            name,
            "name must consist of lowercase alphanumerics or '-' and start "
            "and end with an alphanumeric character",
        )
    return name


def validate_report(report: Report) -> Report:
    """Check the report name and that host and port are present."""
    validate_identity(report.name)

    if not report.spec.host_text:
        raise IncompleteReportSpecError(report.name, "databaseHostName")
    if not report.spec.port_text:
        raise IncompleteReportSpecError(report.name, "databasePort")

    return report
