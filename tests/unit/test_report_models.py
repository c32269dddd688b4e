"""Unit tests for Report models, validation and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cronreport.report import (
    EXAMPLE_REPORT,
    MAX_CRONJOB_NAME_LENGTH,
    IncompleteReportSpecError,
    InvalidIdentityError,
    Report,
    ReportLoadError,
    ReportSpec,
    load_report,
    validate_identity,
    validate_report,
)

_FIXTURES = Path(__file__).resolve().parents[1] / "fixtures" / "reports"


class TestValidateIdentity:
    """Tests for the CronJob naming grammar."""

    @pytest.mark.parametrize(
        "name",
        [
            pytest.param("example", id="plain"),
            pytest.param("nightly-sales-2", id="hyphens-and-digits"),
            pytest.param("a", id="single-char"),
            pytest.param("a" * MAX_CRONJOB_NAME_LENGTH, id="max-length"),
        ],
    )
    def test_accepts_valid_names(self, name: str) -> None:
        """Lowercase alphanumeric names with inner hyphens are accepted."""
        assert validate_identity(name) == name

    @pytest.mark.parametrize(
        "name",
        [
            pytest.param("", id="empty"),
            pytest.param("Example", id="uppercase"),
            pytest.param("nightly_sales", id="underscore"),
            pytest.param("-leading", id="leading-hyphen"),
            pytest.param("trailing-", id="trailing-hyphen"),
            pytest.param("has.dot", id="dot"),
            pytest.param("a" * (MAX_CRONJOB_NAME_LENGTH + 1), id="too-long"),
        ],
    )
    def test_rejects_invalid_names(self, name: str) -> None:
        """Names outside the grammar raise InvalidIdentityError."""
        with pytest.raises(InvalidIdentityError) as excinfo:
            validate_identity(name)
        assert excinfo.value.name == name, "Error should carry the rejected name"


class TestValidateReport:
    """Tests for whole-report validation."""

    def test_example_report_is_valid(self) -> None:
        """The built-in example report passes validation unchanged."""
        assert validate_report(EXAMPLE_REPORT) is EXAMPLE_REPORT

    @pytest.mark.parametrize(
        ("spec", "field"),
        [
            pytest.param(
                ReportSpec(database_host_name="", database_port="5432"),
                "databaseHostName",
                id="empty-host",
            ),
            pytest.param(
                ReportSpec(database_host_name="  ", database_port="5432"),
                "databaseHostName",
                id="blank-host",
            ),
            pytest.param(
                ReportSpec(database_host_name="postgres", database_port=""),
                "databasePort",
                id="empty-port",
            ),
        ],
    )
    def test_missing_connection_fields(self, spec: ReportSpec, field: str) -> None:
        """Empty host or port raise IncompleteReportSpecError."""
        report = Report(name="example", spec=spec)
        with pytest.raises(IncompleteReportSpecError) as excinfo:
            validate_report(report)
        assert excinfo.value.field == field


def test_numeric_port_renders_as_decimal_text() -> None:
    """Integer ports become decimal strings for the job environment."""
    spec = ReportSpec(database_host_name="postgres", database_port=5432)
    assert spec.port_text == "5432"


def test_surrounding_blanks_are_stripped() -> None:
    """Host and port text drop whitespace picked up from hand-edited YAML."""
    spec = ReportSpec(database_host_name="  postgres\t", database_port=" 5432 ")
    assert spec.host_text == "postgres"
    assert spec.port_text == "5432", "PGPORT must not carry blanks"


def test_report_is_immutable() -> None:
    """Reports are frozen once constructed."""
    with pytest.raises(AttributeError):
        EXAMPLE_REPORT.name = "other"  # type: ignore[misc]


class TestLoadReport:
    """Tests for loading a Report from YAML."""

    def test_loads_camel_case_fields(self) -> None:
        """Wire names follow the camelCase ReportSpec fields."""
        report = load_report(_FIXTURES / "nightly.yaml")
        assert report.name == "nightly-sales"
        assert report.spec.database_host_name == "sales-db.reports.svc"
        assert report.spec.database_port == 6432, "YAML integers stay integers"

    def test_rejects_invalid_name(self) -> None:
        """Loading runs the naming grammar check."""
        with pytest.raises(InvalidIdentityError):
            load_report(_FIXTURES / "invalid-name.yaml")

    def test_rejects_missing_field(self) -> None:
        """A document without a required field fails schema validation."""
        with pytest.raises(ReportLoadError, match="databaseHostName"):
            load_report(_FIXTURES / "missing-host.yaml")

    def test_rejects_empty_file(self, tmp_path: Path) -> None:
        """A file with no YAML document is reported as empty."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ReportLoadError, match="is empty"):
            load_report(path)

    def test_rejects_malformed_yaml(self, tmp_path: Path) -> None:
        """YAML syntax errors are wrapped in ReportLoadError."""
        path = tmp_path / "broken.yaml"
        path.write_text("name: [unterminated\n", encoding="utf-8")
        with pytest.raises(ReportLoadError, match="failed to parse"):
            load_report(path)

    def test_rejects_missing_file(self, tmp_path: Path) -> None:
        """A path that does not exist is wrapped in ReportLoadError."""
        with pytest.raises(ReportLoadError):
            load_report(tmp_path / "absent.yaml")
