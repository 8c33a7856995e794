"""Core utilities shared across rotacal modules."""

from .errors import InvalidPatternError, RotacalValueError, ScheduleStoreError

__all__ = ["RotacalValueError", "InvalidPatternError", "ScheduleStoreError"]
