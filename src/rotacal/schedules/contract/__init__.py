"""Schedule contract models (Pydantic schemas, validators)."""

from .models import ScheduleRecord

__all__ = ["ScheduleRecord"]
