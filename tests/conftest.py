"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from cronreport.report import EXAMPLE_REPORT, Report
from tests.helpers.fake_cluster import FakeCluster


@pytest.fixture
def example_report() -> Report:
    """Return the built-in example report (``example`` on postgres:5432)."""
    return EXAMPLE_REPORT


@pytest.fixture
def fake_cluster() -> typ.Iterator[FakeCluster]:
    """Yield an empty in-memory API server, closing its clients afterwards."""
    cluster = FakeCluster()
    yield cluster
    cluster.close()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for var in (
        "CRONREPORT_SCHEDULE",
        "CRONREPORT_IMAGE",
        "CRONREPORT_NAMESPACE",
        "CRONREPORT_LOG_LEVEL",
        "KUBECONFIG",
        "KUBERNETES_SERVICE_HOST",
        "KUBERNETES_SERVICE_PORT",
    ):
        monkeypatch.delenv(var, raising=False)
