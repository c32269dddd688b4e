"""Report definitions: typed models, YAML loading and validation."""

from __future__ import annotations

from .errors import (
    IncompleteReportSpecError,
    InvalidIdentityError,
    ReportError,
    ReportLoadError,
)
from .loader import load_report
from .models import EXAMPLE_REPORT, Report, ReportSpec
from .validation import MAX_CRONJOB_NAME_LENGTH, validate_identity, validate_report

__all__ = [
    "EXAMPLE_REPORT",
    "MAX_CRONJOB_NAME_LENGTH",
    "IncompleteReportSpecError",
    "InvalidIdentityError",
    "Report",
    "ReportError",
    "ReportLoadError",
    "ReportSpec",
    "load_report",
    "validate_identity",
    "validate_report",
]
