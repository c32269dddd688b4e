"""Translate a Report into a CronJob descriptor.

Compilation is pure: no I/O, no clock, no environment lookups. Database
credentials never appear as literal values in the output; they are bound
through ``secretKeyRef`` entries that the platform resolves when each Job
starts. Only the host and port, which carry no secret material, are
embedded as literals.
"""

from __future__ import annotations

import typing as typ

from cronreport.report.validation import validate_report

from .config import CompilerConfig
from .models import (
    Container,
    CronJob,
    CronJobSpec,
    EnvVar,
    EnvVarSource,
    JobSpec,
    JobTemplateSpec,
    ObjectMeta,
    PodSpec,
    PodTemplateSpec,
    SecretKeySelector,
)

if typ.TYPE_CHECKING:
    from cronreport.report.models import Report

_DEFAULT_CONFIG = CompilerConfig()


def _secret_env(name: str, secret_name: str, key: str) -> EnvVar:
    return EnvVar(
        name=name,
        value_from=EnvVarSource(
            secret_key_ref=SecretKeySelector(name=secret_name, key=key)
        ),
    )


def build_environment(report: Report, config: CompilerConfig) -> tuple[EnvVar, ...]:
    """Return the libpq environment bindings for ``report``.

    Variable names follow the libpq conventions so ``psql`` picks them up
    without any arguments.
    """
    return (
        _secret_env("PGDATABASE", config.secret_name, config.database_key),
        _secret_env("PGUSER", config.secret_name, config.user_key),
        _secret_env("PGPASSWORD", config.secret_name, config.password_key),
        EnvVar(name="PGHOST", value=report.spec.host_text),
        EnvVar(name="PGPORT", value=report.spec.port_text),
    )


def compile_report(report: Report, config: CompilerConfig | None = None) -> CronJob:
    """Compile ``report`` into a CronJob descriptor.

    Parameters
    ----------
    report : Report
        The report to schedule.
    config : CompilerConfig | None, optional
        Schedule, image and secret settings. Defaults to ``CompilerConfig()``.

    Returns
    -------
    CronJob
        Descriptor with exactly one container and restart policy ``Never``.

    Raises
    ------
    InvalidIdentityError
        If ``report.name`` is not a valid CronJob name.
    IncompleteReportSpecError
        If the database host or port is empty.

    """
    cfg = config or _DEFAULT_CONFIG
    validate_report(report)

    container = Container(
        name=cfg.container_name,
        image=cfg.image,
        command=tuple(cfg.command),
        env=build_environment(report, cfg),
    )
    # A failed run waits for the next tick instead of restarting in place.
    pod_spec = PodSpec(containers=(container,), restart_policy="Never")

    return CronJob(
        metadata=ObjectMeta(name=report.name),
        spec=CronJobSpec(
            schedule=cfg.schedule,
            concurrency_policy=cfg.concurrency_policy,
            job_template=JobTemplateSpec(
                spec=JobSpec(template=PodTemplateSpec(spec=pod_spec))
            ),
        ),
    )
