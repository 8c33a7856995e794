"""Rotation-status engine.

Classifies calendar dates against a :class:`~rotacal.scheduling.rotation.models.ScheduleConfig`.
Every query is a pure function of ``(date - anchor) mod cycle_length``; per-offset results are
memoised because the classification is periodic in the cycle length.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta
from functools import lru_cache

from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation.models import (
    UNDEFINED_CLASSIFICATION,
    CyclePattern,
    DateLike,
    DayClassification,
    DayStatus,
    DutyBlock,
    ScheduleConfig,
    as_calendar_date,
)

__all__ = [
    "whole_days_between",
    "classify",
    "iter_classified_days",
    "iter_on_duty_blocks",
    "next_on_duty_start",
]

_ONE_DAY = timedelta(days=1)


def whole_days_between(later: DateLike, earlier: DateLike) -> int:
    """Return the signed number of calendar days from ``earlier`` to ``later``."""
    return as_calendar_date(later).toordinal() - as_calendar_date(earlier).toordinal()


def _base_classification(day_in_cycle: int, pattern: CyclePattern) -> DayClassification:
    if day_in_cycle < pattern.on_days:
        return DayClassification(
            status=DayStatus.ON_DUTY,
            is_first_day_of_block=day_in_cycle == 0,
            is_last_day_of_block=day_in_cycle == pattern.on_days - 1,
            day_in_cycle=day_in_cycle,
        )
    return DayClassification(status=DayStatus.OFF_DUTY, day_in_cycle=day_in_cycle)


@lru_cache(maxsize=4096)
def _classify_day_in_cycle(day_in_cycle: int, pattern: CyclePattern) -> DayClassification:
    base = _base_classification(day_in_cycle, pattern)
    if base.status is DayStatus.ON_DUTY:
        return base
    # Off-duty offsets are >= on_days >= 1, so the preceding day never falls before the anchor.
    following = _base_classification((day_in_cycle + 1) % pattern.cycle_length, pattern)
    preceding = _base_classification(day_in_cycle - 1, pattern)
    if following.is_first_day_of_block or preceding.is_last_day_of_block:
        return DayClassification(status=DayStatus.TRANSIT, day_in_cycle=day_in_cycle)
    return base


def classify(day: DateLike, config: ScheduleConfig) -> DayClassification:
    """Classify ``day`` as on-duty, off-duty or transit (``undefined`` before the anchor).

    Off-duty days become transit when the next day starts an on-duty block or the previous day
    ended one; on-duty days are never re-classified.
    """
    diff = whole_days_between(day, config.anchor_date)
    if diff < 0:
        return UNDEFINED_CLASSIFICATION
    return _classify_day_in_cycle(diff % config.cycle_length, config.pattern)


def iter_classified_days(
    config: ScheduleConfig, start: DateLike, end: DateLike
) -> Iterator[tuple[date, DayClassification]]:
    """Yield ``(date, classification)`` for every date in ``[start, end]`` in ascending order."""
    current = as_calendar_date(start)
    last = as_calendar_date(end)
    if current > last:
        raise RotacalValueError(f"Range start {current} is after range end {last}")
    while current <= last:
        yield current, classify(current, config)
        current += _ONE_DAY


def iter_on_duty_blocks(config: ScheduleConfig, cycles: int) -> Iterator[DutyBlock]:
    """Yield the first ``cycles`` on-duty blocks from the anchor, in chronological order."""
    if cycles < 0:
        raise RotacalValueError(f"cycles must be non-negative (got {cycles})")
    on_length = timedelta(days=config.pattern.on_days)
    for index in range(cycles):
        start = config.anchor_date + timedelta(days=index * config.cycle_length)
        yield DutyBlock(start=start, end=start + on_length, cycle_index=index)


def next_on_duty_start(config: ScheduleConfig, day: DateLike) -> date:
    """Return the first day of the next on-duty block on or after ``day``."""
    diff = whole_days_between(day, config.anchor_date)
    if diff <= 0:
        return config.anchor_date
    cycles_elapsed = -(-diff // config.cycle_length)
    return config.anchor_date + timedelta(days=cycles_elapsed * config.cycle_length)
