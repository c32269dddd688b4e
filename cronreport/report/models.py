"""Typed Report definition structures."""

from __future__ import annotations

import msgspec


class ReportSpec(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """How the report's job reaches its database.

    Attributes
    ----------
    database_host_name : str
        Host or Kubernetes service name of the Postgres server.
    database_port : str | int
        Port of the Postgres server. Integers are rendered in decimal when
        compiled into the job environment.

    """

    database_host_name: str
    database_port: str | int

    @property
    def host_text(self) -> str:
        """Return the host as placed in ``PGHOST``, without surrounding blanks."""
        return self.database_host_name.strip()

    @property
    def port_text(self) -> str:
        """Return the port as placed in ``PGPORT``, without surrounding blanks."""
        return str(self.database_port).strip()


class Report(msgspec.Struct, kw_only=True, frozen=True):
    """A recurring data-export task.

    Attributes
    ----------
    name : str
        CronJob name the report is deployed under.
    spec : ReportSpec
        Database connection details for the job.

    """

    name: str
    spec: ReportSpec


EXAMPLE_REPORT = Report(
    name="example",
    spec=ReportSpec(database_host_name="postgres", database_port="5432"),
)
