"""Status counts over date ranges, calendar months and rolling windows."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation.engine import iter_classified_days
from rotacal.scheduling.rotation.models import DateLike, DayStatus, ScheduleConfig

__all__ = [
    "DEFAULT_WINDOW_DAYS",
    "StatusCounts",
    "count_in_range",
    "count_on_duty_in_window",
    "count_in_month",
    "month_bounds",
]

DEFAULT_WINDOW_DAYS = 365


@dataclass(slots=True)
class StatusCounts:
    """Tally of classified days.

    Attributes
    ----------
    on_duty / off_duty / transit:
        Days in each status. Together they cover every date on or after the anchor.
    undefined:
        Dates before the anchor. Tracked separately so a range starting before the anchor does
        not silently under-count.
    """

    on_duty: int = 0
    off_duty: int = 0
    transit: int = 0
    undefined: int = 0

    @property
    def classified(self) -> int:
        return self.on_duty + self.off_duty + self.transit

    @property
    def total(self) -> int:
        return self.classified + self.undefined

    @property
    def on_duty_share(self) -> float:
        classified = self.classified
        return self.on_duty / classified if classified else 0.0

    def add(self, status: DayStatus) -> None:
        if status is DayStatus.ON_DUTY:
            self.on_duty += 1
        elif status is DayStatus.OFF_DUTY:
            self.off_duty += 1
        elif status is DayStatus.TRANSIT:
            self.transit += 1
        else:
            self.undefined += 1

    def to_dict(self) -> dict[str, int]:
        return {
            "on_duty": self.on_duty,
            "off_duty": self.off_duty,
            "transit": self.transit,
            "undefined": self.undefined,
        }


def count_in_range(config: ScheduleConfig, start: DateLike, end: DateLike) -> StatusCounts:
    """Count statuses for every date in the inclusive range ``[start, end]``.

    Raises
    ------
    RotacalValueError
        If ``start`` is after ``end``.
    """
    counts = StatusCounts()
    for _, classification in iter_classified_days(config, start, end):
        counts.add(classification.status)
    return counts


def count_on_duty_in_window(
    config: ScheduleConfig, window_length_days: int = DEFAULT_WINDOW_DAYS
) -> int:
    """Return on-duty days in the ``window_length_days`` days starting at the anchor."""
    if window_length_days < 0:
        raise RotacalValueError(
            f"window_length_days must be non-negative (got {window_length_days})"
        )
    if window_length_days == 0:
        return 0
    end = config.anchor_date + timedelta(days=window_length_days - 1)
    return count_in_range(config, config.anchor_date, end).on_duty


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last date of a calendar month."""
    if not 1 <= month <= 12:
        raise RotacalValueError(f"month must be between 1 and 12 (got {month})")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def count_in_month(config: ScheduleConfig, year: int, month: int) -> StatusCounts:
    first, last = month_bounds(year, month)
    return count_in_range(config, first, last)
