"""Schedule configuration loading from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation.models import ScheduleConfig

__all__ = ["load_schedule_config", "read_schedule_yaml"]


def read_schedule_yaml(path: str | Path) -> dict[str, Any]:
    """Load the YAML mapping at ``path``; relative paths are taken from the working directory."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise RotacalValueError(f"Schedule file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise RotacalValueError(f"Schedule file {path} must contain a mapping")
    return data


def load_schedule_config(path: str | Path) -> ScheduleConfig:
    """Build a :class:`ScheduleConfig` from a YAML file with ``start_date`` and ``pattern`` keys.

    Example file::

        name: North Sea crew A
        start_date: 2024-01-01
        pattern: 14/21
    """
    data = read_schedule_yaml(path)
    missing = [key for key in ("start_date", "pattern") if data.get(key) in (None, "")]
    if missing:
        raise RotacalValueError(f"Schedule file {path} is missing: {', '.join(missing)}")
    # Unquoted ISO dates arrive as ``date`` objects.
    return ScheduleConfig.from_strings(data["start_date"], str(data["pattern"]))
