"""Rotation patterns, schedule configurations and the day-classification engine."""

from .engine import (
    classify,
    iter_classified_days,
    iter_on_duty_blocks,
    next_on_duty_start,
    whole_days_between,
)
from .models import (
    CyclePattern,
    DateLike,
    DayClassification,
    DayStatus,
    DutyBlock,
    ScheduleConfig,
    as_calendar_date,
)
from .presets import DEFAULT_PATTERN, RotationPreset, get_preset, list_presets

__all__ = [
    "CyclePattern",
    "ScheduleConfig",
    "DayStatus",
    "DayClassification",
    "DutyBlock",
    "DateLike",
    "as_calendar_date",
    "classify",
    "whole_days_between",
    "iter_classified_days",
    "iter_on_duty_blocks",
    "next_on_duty_start",
    "RotationPreset",
    "DEFAULT_PATTERN",
    "get_preset",
    "list_presets",
]
