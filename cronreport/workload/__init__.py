"""CronJob descriptor model, compiler defaults and the Report compiler."""

from __future__ import annotations

from .compiler import build_environment, compile_report
from .config import CompilerConfig
from .models import (
    ConcurrencyPolicy,
    Container,
    CronJob,
    EnvVar,
    SecretKeySelector,
)

__all__ = [
    "CompilerConfig",
    "ConcurrencyPolicy",
    "Container",
    "CronJob",
    "EnvVar",
    "SecretKeySelector",
    "build_environment",
    "compile_report",
]
