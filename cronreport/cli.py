"""Command-line entry point: compile one Report and create its CronJob.

Usage:
    cronreport submit                      # example report, ~/.kube/config
    cronreport submit -k kubeconfig -n reports --report nightly.yaml
    cronreport render --report nightly.yaml

Environment variables:
    KUBECONFIG            - Kubeconfig path when -k is not given
    CRONREPORT_NAMESPACE  - Target namespace (default: default)
    CRONREPORT_LOG_LEVEL  - Log level (default: INFO)
    CRONREPORT_SCHEDULE   - Cron expression for generated CronJobs
    CRONREPORT_IMAGE      - Container image for generated CronJobs
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import msgspec
from cyclopts import App, Parameter

from cronreport import __version__
from cronreport.cluster import (
    ClusterConnectionError,
    KubeconfigError,
    SubmissionError,
    build_credentials,
    connect,
    default_kubeconfig_path,
    submit_workload,
)
from cronreport.cluster.connection import DEFAULT_TIMEOUT_S
from cronreport.logging import (
    DEFAULT_LOG_LEVEL,
    configure_logging,
    get_logger,
    log_error,
    log_exception,
    log_warning,
)
from cronreport.report import EXAMPLE_REPORT, Report, ReportError, load_report
from cronreport.workload import CompilerConfig, CronJob, compile_report

DEFAULT_NAMESPACE = "default"

logger = get_logger(__name__)

app = App(
    name="cronreport",
    help="Compile a Report into a Kubernetes CronJob and create it",
    version=__version__,
)


def _setup_logging(level: str) -> None:
    applied, rejected = configure_logging(level)
    if rejected:
        log_warning(logger, "Unknown log level %r; using %s", level, applied)


def _compile(report_path: Path | None) -> CronJob:
    """Load the report (or the built-in example) and compile it."""
    report: Report = EXAMPLE_REPORT if report_path is None else load_report(report_path)
    return compile_report(report, CompilerConfig.from_env())


@app.command
def submit(
    *,
    kubeconfig: typ.Annotated[
        str | None, Parameter(name=["--kubeconfig", "-k"])
    ] = None,
    namespace: typ.Annotated[
        str,
        Parameter(name=["--namespace", "-n"], env_var="CRONREPORT_NAMESPACE"),
    ] = DEFAULT_NAMESPACE,
    report: typ.Annotated[Path | None, Parameter(name=["--report", "-r"])] = None,
    context: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_S,
    log_level: typ.Annotated[
        str, Parameter(env_var="CRONREPORT_LOG_LEVEL")
    ] = DEFAULT_LOG_LEVEL,
) -> int:
    """Create the report's CronJob in a namespace.

    Args:
        kubeconfig: Absolute path to the kubeconfig file. Defaults to
            $KUBECONFIG, then ~/.kube/config. An empty value uses in-cluster
            credentials.
        namespace: Namespace in which to create the CronJob.
        report: YAML file holding one Report. Defaults to the example report.
        context: Kubeconfig context to use instead of the current one.
        timeout: Seconds to wait for the API server before giving up.
        log_level: Log level for diagnostics.

    Returns:
        Exit code (0 for success, 1 for any failure).

    """
    _setup_logging(log_level)
    kubeconfig_path = default_kubeconfig_path() if kubeconfig is None else kubeconfig

    try:
        descriptor = _compile(report)
        credentials = build_credentials(kubeconfig_path, context=context)
        with connect(credentials, timeout_s=timeout) as handle:
            reference = submit_workload(handle, namespace, descriptor)
    except ReportError as exc:
        log_error(logger, "Invalid report: %s", exc)
        return 1
    except KubeconfigError as exc:
        log_error(logger, "Cannot load cluster credentials: %s", exc)
        return 1
    except ClusterConnectionError as exc:
        # Keep the transport traceback; TLS and DNS failures hide in the cause.
        log_exception(
            logger,
            f"Failed to create CronJob in namespace {namespace}: {exc}",
            exc,
        )
        return 1
    except SubmissionError as exc:
        log_error(
            logger,
            "Failed to create CronJob in namespace %s: %s",
            namespace,
            exc,
        )
        return 1

    print(f"created CronJob {reference.name} in namespace {reference.namespace}")
    return 0


@app.command
def render(
    *,
    report: typ.Annotated[Path | None, Parameter(name=["--report", "-r"])] = None,
    log_level: typ.Annotated[
        str, Parameter(env_var="CRONREPORT_LOG_LEVEL")
    ] = DEFAULT_LOG_LEVEL,
) -> int:
    """Print the compiled CronJob manifest as JSON without contacting a cluster.

    Args:
        report: YAML file holding one Report. Defaults to the example report.
        log_level: Log level for diagnostics.

    Returns:
        Exit code (0 for success, 1 for an invalid report).

    """
    _setup_logging(log_level)
    try:
        descriptor = _compile(report)
    except ReportError as exc:
        log_error(logger, "Invalid report: %s", exc)
        return 1

    print(msgspec.json.format(descriptor.encode(), indent=2).decode("utf-8"))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``cronreport`` console script."""
    return app(argv)


if __name__ == "__main__":
    sys.exit(main())
