"""Schedule repositories: in-memory and JSON-file backed."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from rotacal.core.errors import ScheduleStoreError
from rotacal.schedules.contract.models import ScheduleRecord

__all__ = [
    "DEFAULT_STORE_PATH",
    "ScheduleRepository",
    "InMemoryScheduleRepository",
    "JsonScheduleRepository",
]

DEFAULT_STORE_PATH = Path("~/.rotacal/schedules.json")


class ScheduleRepository(Protocol):
    """Interface for named schedule storage."""

    def list(self) -> list[ScheduleRecord]:
        """Return stored records, newest first."""

    def add(self, record: ScheduleRecord) -> None:
        """Store ``record`` ahead of existing entries."""

    def delete_by_id(self, schedule_id: str) -> None:
        """Remove the record with ``schedule_id``; unknown ids are ignored."""


def _newest_first(records: list[ScheduleRecord]) -> list[ScheduleRecord]:
    return sorted(records, key=lambda record: record.created_at, reverse=True)


class InMemoryScheduleRepository:
    """Process-local repository, mainly for tests and scripted use."""

    def __init__(self, records: list[ScheduleRecord] | None = None) -> None:
        self._records: list[ScheduleRecord] = list(records or [])

    def list(self) -> list[ScheduleRecord]:
        return _newest_first(self._records)

    def add(self, record: ScheduleRecord) -> None:
        self._records.insert(0, record)

    def delete_by_id(self, schedule_id: str) -> None:
        self._records = [record for record in self._records if record.id != schedule_id]

    def get(self, schedule_id: str) -> ScheduleRecord:
        for record in self._records:
            if record.id == schedule_id:
                return record
        raise KeyError(f"Unknown schedule id '{schedule_id}'")


class JsonScheduleRepository:
    """Repository persisted as a single JSON array file.

    A missing file reads as an empty store. Writes go through a temporary sibling file that
    replaces the store, so an interrupted write never truncates existing records.
    """

    def __init__(self, path: str | Path = DEFAULT_STORE_PATH) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> list[ScheduleRecord]:
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ScheduleStoreError(f"Could not read schedule store {self.path}: {exc}") from exc
        if not isinstance(payload, list):
            raise ScheduleStoreError(f"Schedule store {self.path} must contain a JSON array")
        records: list[ScheduleRecord] = []
        for index, entry in enumerate(payload):
            if not isinstance(entry, dict):
                raise ScheduleStoreError(f"Schedule store {self.path} entry {index} is not an object")
            try:
                records.append(ScheduleRecord.from_payload(entry))
            except ValidationError as exc:
                raise ScheduleStoreError(
                    f"Schedule store {self.path} entry {index} is invalid: {exc}"
                ) from exc
        return records

    def _write(self, records: list[ScheduleRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps([record.to_payload() for record in records], indent=2),
            encoding="utf-8",
        )
        tmp_path.replace(self.path)

    def list(self) -> list[ScheduleRecord]:
        return _newest_first(self._read())

    def add(self, record: ScheduleRecord) -> None:
        self._write([record, *self._read()])

    def delete_by_id(self, schedule_id: str) -> None:
        records = self._read()
        remaining = [record for record in records if record.id != schedule_id]
        if len(remaining) != len(records):
            self._write(remaining)

    def get(self, schedule_id: str) -> ScheduleRecord:
        for record in self._read():
            if record.id == schedule_id:
                return record
        raise KeyError(f"Unknown schedule id '{schedule_id}'")
