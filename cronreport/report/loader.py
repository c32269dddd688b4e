"""YAML loader for Report definition files."""

from __future__ import annotations

from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ReportLoadError
from .models import Report
from .validation import validate_report

YAML_VERSION = (1, 2)


def load_report(path: Path | str) -> Report:
    """Parse and validate a single Report from a YAML file.

    The document must hold exactly one report::

        name: nightly-sales
        spec:
          databaseHostName: postgres
          databasePort: 5432

    """
    path_obj = Path(path)
    try:
        loaded = _yaml().load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise ReportLoadError.unreadable(path_obj, exc) from exc

    if loaded is None:
        raise ReportLoadError.empty(path_obj)

    try:
        report = msgspec.convert(loaded, type=Report)
    except msgspec.ValidationError as exc:
        raise ReportLoadError.schema(path_obj, exc) from exc

    return validate_report(report)


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
