"""Rotation value objects: cycle patterns, schedule configurations and day classifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from rotacal.core.errors import InvalidPatternError, RotacalValueError

DateLike = date | datetime | str


def as_calendar_date(value: DateLike) -> date:
    """Return the calendar date of ``value``, discarding any time-of-day component.

    ``datetime`` values (including pandas ``Timestamp``) keep their own wall-clock date; time
    zones are not converted. ISO strings may be plain dates or full timestamps.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise RotacalValueError(f"Invalid ISO date '{value}'") from exc
    raise RotacalValueError(f"Expected a date, datetime or ISO string (got {type(value).__name__})")


@dataclass(frozen=True, slots=True)
class CyclePattern:
    """Repeating on/off rotation, e.g. ``14/14`` (fourteen days on, fourteen off)."""

    on_days: int
    off_days: int

    def __post_init__(self) -> None:
        for label, value in (("on_days", self.on_days), ("off_days", self.off_days)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidPatternError(f"{label} must be an integer (got {value!r})")
            if value < 1:
                raise InvalidPatternError(f"{label} must be >= 1 (got {value})")

    @classmethod
    def parse(cls, text: str) -> CyclePattern:
        """Parse an ``"<on>/<off>"`` pattern string.

        Raises
        ------
        InvalidPatternError
            If either side is missing, non-numeric, zero or negative.
        """
        if not isinstance(text, str):
            raise InvalidPatternError(f"Pattern must be a string in on/off format (got {text!r})")
        parts = text.split("/")
        if len(parts) != 2:
            raise InvalidPatternError(f"Pattern must be in on/off format (got '{text}')")
        values: list[int] = []
        for raw in parts:
            part = raw.strip()
            if not part:
                raise InvalidPatternError(f"Pattern '{text}' is missing a component")
            # int() would also take "+3", "1_4" and non-ASCII digits.
            if not (part.isascii() and part.isdigit()):
                raise InvalidPatternError(f"Pattern component '{part}' in '{text}' is not an integer")
            values.append(int(part))
        return cls(on_days=values[0], off_days=values[1])

    @property
    def cycle_length(self) -> int:
        return self.on_days + self.off_days

    def __str__(self) -> str:
        return f"{self.on_days}/{self.off_days}"


@dataclass(frozen=True, slots=True)
class ScheduleConfig:
    """Anchor date (day 0 of the first on-duty block) plus the repeating pattern.

    ``anchor_date`` may be given as any :data:`DateLike` and ``pattern`` as a pattern string; both
    are normalised on construction, so an invalid pattern fails here and never at query time.
    """

    anchor_date: date
    pattern: CyclePattern

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor_date", as_calendar_date(self.anchor_date))
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", CyclePattern.parse(self.pattern))
        elif not isinstance(self.pattern, CyclePattern):
            raise InvalidPatternError(
                f"pattern must be a CyclePattern or pattern string (got {self.pattern!r})"
            )

    @classmethod
    def from_strings(cls, start_date: DateLike, pattern: str) -> ScheduleConfig:
        return cls(anchor_date=as_calendar_date(start_date), pattern=CyclePattern.parse(pattern))

    @property
    def cycle_length(self) -> int:
        return self.pattern.cycle_length


class DayStatus(str, Enum):
    ON_DUTY = "on-duty"
    OFF_DUTY = "off-duty"
    TRANSIT = "transit"
    UNDEFINED = "undefined"


@dataclass(frozen=True, slots=True)
class DayClassification:
    """Status of a single date relative to a :class:`ScheduleConfig`.

    Attributes
    ----------
    status:
        One of :class:`DayStatus`. ``UNDEFINED`` marks dates before the anchor.
    is_first_day_of_block / is_last_day_of_block:
        Block-boundary flags; only ever set for ``ON_DUTY`` days. A one-day block sets both.
    day_in_cycle:
        Zero-based offset within the cycle, ``None`` for undefined days.
    """

    status: DayStatus
    is_first_day_of_block: bool = False
    is_last_day_of_block: bool = False
    day_in_cycle: int | None = None

    @property
    def is_defined(self) -> bool:
        return self.status is not DayStatus.UNDEFINED


UNDEFINED_CLASSIFICATION = DayClassification(status=DayStatus.UNDEFINED)


@dataclass(frozen=True, slots=True)
class DutyBlock:
    """One on-duty block: ``start`` inclusive, ``end`` exclusive."""

    start: date
    end: date
    cycle_index: int

    @property
    def length_days(self) -> int:
        return (self.end - self.start).days


__all__ = [
    "DateLike",
    "as_calendar_date",
    "CyclePattern",
    "ScheduleConfig",
    "DayStatus",
    "DayClassification",
    "UNDEFINED_CLASSIFICATION",
    "DutyBlock",
]
