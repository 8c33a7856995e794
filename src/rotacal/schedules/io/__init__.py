"""Schedule persistence and configuration file loading."""

from .loaders import load_schedule_config, read_schedule_yaml
from .repository import (
    DEFAULT_STORE_PATH,
    InMemoryScheduleRepository,
    JsonScheduleRepository,
    ScheduleRepository,
)
from .share import config_from_query, share_query, share_url

__all__ = [
    "DEFAULT_STORE_PATH",
    "ScheduleRepository",
    "InMemoryScheduleRepository",
    "JsonScheduleRepository",
    "load_schedule_config",
    "read_schedule_yaml",
    "share_query",
    "share_url",
    "config_from_query",
]
