"""iCalendar export of on-duty blocks."""

from __future__ import annotations

from datetime import UTC, date, datetime
from pathlib import Path

from rotacal.scheduling.rotation.engine import iter_on_duty_blocks
from rotacal.scheduling.rotation.models import DutyBlock, ScheduleConfig

__all__ = [
    "DEFAULT_CYCLES",
    "DEFAULT_SUMMARY",
    "PRODID",
    "ics_escape",
    "build_ics",
    "write_ics",
]

DEFAULT_CYCLES = 50
DEFAULT_SUMMARY = "On-duty rotation"
PRODID = "-//rotacal//Rotation Calendar//EN"
_UID_DOMAIN = "rotacal"


def ics_escape(text: str) -> str:
    """Escape a TEXT property value (RFC 5545 section 3.3.11)."""
    return (
        (text or "")
        .replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def _format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def _event_lines(block: DutyBlock, config: ScheduleConfig, summary: str, dtstamp: str) -> list[str]:
    uid = f"{_format_date(block.start)}-{config.pattern.on_days}-{config.pattern.off_days}@{_UID_DOMAIN}"
    return [
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART;VALUE=DATE:{_format_date(block.start)}",
        f"DTEND;VALUE=DATE:{_format_date(block.end)}",
        f"SUMMARY:{ics_escape(summary)}",
        "TRANSP:OPAQUE",
        "END:VEVENT",
    ]


def build_ics(
    config: ScheduleConfig,
    *,
    cycles: int = DEFAULT_CYCLES,
    summary: str = DEFAULT_SUMMARY,
    calendar_name: str | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Render a VCALENDAR with one all-day event per on-duty block.

    Parameters
    ----------
    config:
        Schedule whose on-duty blocks are exported.
    cycles:
        Number of consecutive cycles from the anchor (50 covers about two years of 14/14).
    summary:
        Event title.
    calendar_name:
        Optional ``X-WR-CALNAME`` shown by calendar clients.
    generated_at:
        Timestamp used for ``DTSTAMP``; defaults to now. Naive values are taken as UTC.

    Returns
    -------
    str
        Calendar text with CRLF line endings. ``DTEND`` is exclusive, so each event spans exactly
        ``on_days`` days and consecutive events never overlap.
    """
    stamp_source = generated_at or datetime.now(UTC)
    if stamp_source.tzinfo is not None:
        stamp_source = stamp_source.astimezone(UTC)
    dtstamp = stamp_source.strftime("%Y%m%dT%H%M%SZ")

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
    ]
    if calendar_name:
        lines.append(f"X-WR-CALNAME:{ics_escape(calendar_name)}")
    for block in iter_on_duty_blocks(config, cycles):
        lines.extend(_event_lines(block, config, summary, dtstamp))
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines) + "\r\n"


def write_ics(path: str | Path, config: ScheduleConfig, **kwargs) -> Path:
    """Write :func:`build_ics` output to ``path`` and return the resolved path."""
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CRLF endings intact on every platform.
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(build_ics(config, **kwargs))
    return path
