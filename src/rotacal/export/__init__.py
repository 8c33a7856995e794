"""Export helpers consuming the rotation engine (iCalendar files)."""

from .ics import DEFAULT_CYCLES, build_ics, ics_escape, write_ics

__all__ = ["DEFAULT_CYCLES", "build_ics", "write_ics", "ics_escape"]
