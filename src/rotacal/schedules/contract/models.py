"""Pydantic models describing persisted rotation schedules."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rotacal.core.errors import InvalidPatternError
from rotacal.scheduling.rotation.models import CyclePattern, ScheduleConfig


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ScheduleRecord(BaseModel):
    """Named schedule stored by a repository.

    The record is opaque to the engine: only ``start_date`` and ``pattern`` are projected into a
    :class:`~rotacal.scheduling.rotation.models.ScheduleConfig` via :meth:`to_config`.

    Attributes
    ----------
    id:
        Unique identifier. New records get a 12-character hex id.
    name:
        Human-readable label shown in schedule listings.
    description:
        Optional free-text note.
    start_date:
        Anchor date (first day of the first on-duty block). Serialised as ``startDate``.
    pattern:
        Canonical ``"<on>/<off>"`` pattern string, validated on construction.
    created_at:
        Creation timestamp used to order listings newest-first. Serialised as ``createdAt``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    name: str
    description: str | None = None
    start_date: date = Field(alias="startDate")
    pattern: str
    created_at: datetime = Field(default_factory=_utc_now, alias="createdAt")

    @field_validator("id", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ScheduleRecord id and name must be non-empty")
        return value

    @field_validator("pattern")
    @classmethod
    def _canonical_pattern(cls, value: str) -> str:
        try:
            return str(CyclePattern.parse(value))
        except InvalidPatternError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("created_at")
    @classmethod
    def _aware_created_at(cls, value: datetime) -> datetime:
        # Naive timestamps are read as UTC so listings can be ordered.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def to_config(self) -> ScheduleConfig:
        return ScheduleConfig(anchor_date=self.start_date, pattern=CyclePattern.parse(self.pattern))

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready mapping written by file-backed repositories."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ScheduleRecord:
        """Build a record from stored JSON, migrating entries saved before ``createdAt`` existed.

        Legacy entries only carried ``id``, ``startDate`` and ``pattern``; they get a generated
        name and description, and a creation time recovered from a millisecond-timestamp id.
        """
        if payload.get("createdAt") or payload.get("created_at"):
            return cls.model_validate(payload)
        start_date = payload.get("startDate") or payload.get("start_date")
        pattern = payload.get("pattern")
        raw_id = payload.get("id")
        migrated: dict[str, Any] = {
            "startDate": start_date,
            "pattern": pattern,
            "name": f"Rotation ({pattern})",
            "description": f"Starts on {start_date}",
            "createdAt": _legacy_created_at(raw_id),
        }
        if raw_id is not None:
            migrated["id"] = str(raw_id)
        return cls.model_validate(migrated)


def _legacy_created_at(raw_id: object) -> datetime:
    try:
        millis = int(str(raw_id))
    except (TypeError, ValueError):
        return _utc_now()
    try:
        return datetime.fromtimestamp(millis / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return _utc_now()


__all__ = ["ScheduleRecord"]
