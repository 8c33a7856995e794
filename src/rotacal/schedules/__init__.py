"""Named schedule records and their storage."""

from .contract import ScheduleRecord
from .io import InMemoryScheduleRepository, JsonScheduleRepository, ScheduleRepository

__all__ = [
    "ScheduleRecord",
    "ScheduleRepository",
    "InMemoryScheduleRepository",
    "JsonScheduleRepository",
]
