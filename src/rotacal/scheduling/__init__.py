"""Scheduling utilities (rotation patterns, configurations, classification engine)."""

from .rotation import CyclePattern, DayClassification, DayStatus, ScheduleConfig, classify

__all__ = ["CyclePattern", "ScheduleConfig", "DayStatus", "DayClassification", "classify"]
