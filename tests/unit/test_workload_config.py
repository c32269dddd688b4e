"""Unit tests for CompilerConfig."""

from __future__ import annotations

import dataclasses

import pytest

from cronreport.workload import CompilerConfig, ConcurrencyPolicy


class TestCompilerConfig:
    """Tests for CompilerConfig defaults and environment overrides."""

    def test_defaults(self) -> None:
        """Defaults reproduce the five-minute Forbid CronJob."""
        config = CompilerConfig()
        assert config.schedule == "*/5 * * * *", "Default schedule should be 5 min"
        assert config.concurrency_policy is ConcurrencyPolicy.FORBID
        assert config.secret_name == "pg-config"
        assert config.image == "docker.io/postgres:14"

    def test_is_frozen(self) -> None:
        """Configuration cannot be mutated after construction."""
        config = CompilerConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.schedule = "@hourly"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("env_vars", "expected_schedule", "expected_image"),
        [
            pytest.param({}, "*/5 * * * *", "docker.io/postgres:14", id="defaults"),
            pytest.param(
                {"CRONREPORT_SCHEDULE": "0 6 * * *"},
                "0 6 * * *",
                "docker.io/postgres:14",
                id="schedule",
            ),
            pytest.param(
                {"CRONREPORT_IMAGE": "registry.local/psql:16"},
                "*/5 * * * *",
                "registry.local/psql:16",
                id="image",
            ),
            pytest.param(
                {"CRONREPORT_SCHEDULE": "   ", "CRONREPORT_IMAGE": ""},
                "*/5 * * * *",
                "docker.io/postgres:14",
                id="blank-values-ignored",
            ),
        ],
    )
    def test_from_env(
        self,
        monkeypatch: pytest.MonkeyPatch,
        env_vars: dict[str, str],
        expected_schedule: str,
        expected_image: str,
    ) -> None:
        """from_env reads the schedule and image overrides."""
        for key, value in env_vars.items():
            monkeypatch.setenv(key, value)

        config = CompilerConfig.from_env()

        assert config.schedule == expected_schedule, (
            f"Expected schedule={expected_schedule!r}, got {config.schedule!r}"
        )
        assert config.image == expected_image, (
            f"Expected image={expected_image!r}, got {config.image!r}"
        )
        assert config.concurrency_policy is ConcurrencyPolicy.FORBID, (
            "Concurrency policy is never read from the environment"
        )
