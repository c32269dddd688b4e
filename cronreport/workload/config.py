"""Compiler defaults for the generated CronJob.

Usage
-----
Compile with the stock five-minute cadence:

>>> config = CompilerConfig()
>>> config.schedule
'*/5 * * * *'

Or pick up ``CRONREPORT_SCHEDULE`` and ``CRONREPORT_IMAGE`` overrides:

    config = CompilerConfig.from_env()

"""

from __future__ import annotations

import dataclasses as dc
import os

from .models import ConcurrencyPolicy

DEFAULT_SCHEDULE = "*/5 * * * *"
DEFAULT_IMAGE = "docker.io/postgres:14"
DEFAULT_CONTAINER_NAME = "dayreport"
DEFAULT_COMMAND: tuple[str, ...] = ("psql", "-c", "SELECT current_timestamp;")
# Name of a Kubernetes Secret resource, not a credential.
DEFAULT_SECRET_NAME = "pg-config"  # noqa: S105


@dc.dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Settings the compiler applies to every Report.

    Attributes
    ----------
    schedule
        Five-field cron expression. The platform validates it on submission.
    concurrency_policy
        Overlap policy for scheduled runs. ``Forbid`` keeps at most one run of
        a report querying the database at any time.
    image
        Container image providing ``psql``.
    container_name
        Name of the single container in the pod template.
    command
        Argument vector executed directly by the container runtime.
    secret_name
        Secret holding the database name, user and password.
    database_key, user_key, password_key
        Keys inside ``secret_name`` bound to ``PGDATABASE``, ``PGUSER`` and
        ``PGPASSWORD``.

    """

    schedule: str = DEFAULT_SCHEDULE
    concurrency_policy: ConcurrencyPolicy = ConcurrencyPolicy.FORBID
    image: str = DEFAULT_IMAGE
    container_name: str = DEFAULT_CONTAINER_NAME
    command: tuple[str, ...] = DEFAULT_COMMAND
    secret_name: str = DEFAULT_SECRET_NAME
    database_key: str = "POSTGRES_DB"
    user_key: str = "POSTGRES_USER"
    password_key: str = "POSTGRES_PASSWORD"  # noqa: S105

    @staticmethod
    def _read_env(env_var: str, default: str) -> str:
        """Return a stripped env var value, or ``default`` when blank."""
        raw = os.environ.get(env_var, "")
        return raw.strip() or default

    @classmethod
    def from_env(cls) -> CompilerConfig:
        """Create configuration from environment variables.

        Reads ``CRONREPORT_SCHEDULE`` and ``CRONREPORT_IMAGE``. The
        concurrency policy is never taken from the environment.

        Returns
        -------
        CompilerConfig
            Configuration with environment overrides applied.

        """
        return cls(
            schedule=cls._read_env("CRONREPORT_SCHEDULE", DEFAULT_SCHEDULE),
            image=cls._read_env("CRONREPORT_IMAGE", DEFAULT_IMAGE),
        )
