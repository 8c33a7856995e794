"""JSONL run records for export commands."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from rotacal.scheduling.rotation.models import ScheduleConfig

__all__ = ["append_jsonl", "read_jsonl", "ExportRunLogger"]


def _iso_now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append ``record`` as one compact JSON line, creating parent directories as needed."""
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"), default=str)
        handle.write("\n")


def read_jsonl(path: str | Path) -> list[dict[str, Any]]:
    """Return the JSON object on each non-blank line of ``path``."""
    records: list[dict[str, Any]] = []
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                records.append(json.loads(line))
    return records


@dataclass(slots=True)
class ExportRunLogger(AbstractContextManager["ExportRunLogger"]):
    """Record one export command run as a single JSONL line.

    Parameters
    ----------
    log_path:
        JSONL file the run record is appended to.
    command:
        CLI command name (e.g. ``"export-ics"``).
    config:
        Schedule being exported; its anchor date and pattern are copied into the record.
    """

    log_path: Path
    command: str
    config: ScheduleConfig
    run_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    artifacts: list[str] = field(default_factory=list, init=False)
    metrics: dict[str, Any] = field(default_factory=dict, init=False)
    _start_time: float = field(default=0.0, init=False)
    _started_at: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)

    def __enter__(self) -> ExportRunLogger:
        self._start_time = time.perf_counter()
        self._started_at = _iso_now()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._write(status="error" if exc_type else "ok", error=repr(exc) if exc_type else None)
        return False

    def add_artifact(self, path: str | Path) -> None:
        self.artifacts.append(str(path))

    def _write(self, *, status: str, error: str | None) -> None:
        duration = time.perf_counter() - self._start_time if self._start_time else 0.0
        append_jsonl(
            self.log_path,
            {
                "record_type": "export",
                "run_id": self.run_id,
                "command": self.command,
                "start_date": self.config.anchor_date.isoformat(),
                "pattern": str(self.config.pattern),
                "status": status,
                "artifacts": list(self.artifacts),
                "metrics": dict(self.metrics),
                "error": error,
                "started_at": self._started_at,
                "finished_at": _iso_now(),
                "duration_seconds": round(duration, 3),
            },
        )
