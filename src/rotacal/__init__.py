"""Rotation calendar engine: on-duty, off-duty and transit days for two-phase rotations."""

from rotacal.core.errors import InvalidPatternError, RotacalValueError
from rotacal.evaluation.counts import StatusCounts, count_in_range, count_on_duty_in_window
from rotacal.scheduling.rotation import (
    CyclePattern,
    DayClassification,
    DayStatus,
    ScheduleConfig,
    classify,
)

__all__ = [
    "CyclePattern",
    "ScheduleConfig",
    "DayStatus",
    "DayClassification",
    "classify",
    "StatusCounts",
    "count_in_range",
    "count_on_duty_in_window",
    "InvalidPatternError",
    "RotacalValueError",
]
