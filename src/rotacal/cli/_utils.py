"""CLI helper utilities for rotacal."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation.models import DayStatus, ScheduleConfig, as_calendar_date
from rotacal.scheduling.rotation.presets import DEFAULT_PATTERN
from rotacal.schedules.io import (
    DEFAULT_STORE_PATH,
    JsonScheduleRepository,
    config_from_query,
    load_schedule_config,
)

STORE_ENVVAR = "ROTACAL_STORE"

StartOption = Annotated[
    str | None,
    typer.Option(
        "--start",
        help="Anchor date (YYYY-MM-DD): the first day of the first on-duty block.",
    ),
]
PatternOption = Annotated[
    str,
    typer.Option("--pattern", "-p", help="Rotation pattern as on/off days, e.g. 14/14 or 14/21."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="YAML file with start_date and pattern keys.",
    ),
]
ScheduleOption = Annotated[
    str | None,
    typer.Option("--schedule", help="Id of a schedule saved with `rotacal schedules add`."),
]
StoreOption = Annotated[
    Path | None,
    typer.Option(
        "--store",
        envvar=STORE_ENVVAR,
        dir_okay=False,
        help=f"Schedule store JSON file (defaults to {DEFAULT_STORE_PATH}).",
    ),
]
LinkOption = Annotated[
    str | None,
    typer.Option("--link", help="Shared schedule link or its start=...&pattern=... query string."),
]
TelemetryOption = Annotated[
    Path | None,
    typer.Option("--telemetry-log", help="Optional JSONL file to append an export run record to."),
]

STATUS_STYLES: dict[DayStatus, str] = {
    DayStatus.ON_DUTY: "bold dark_orange",
    DayStatus.TRANSIT: "bold cyan",
    DayStatus.OFF_DUTY: "white",
    DayStatus.UNDEFINED: "dim",
}

STATUS_MARKERS: dict[DayStatus, str] = {
    DayStatus.ON_DUTY: "W",
    DayStatus.TRANSIT: "T",
    DayStatus.OFF_DUTY: "-",
    DayStatus.UNDEFINED: " ",
}


def open_store(store: Path | None) -> JsonScheduleRepository:
    return JsonScheduleRepository(store or DEFAULT_STORE_PATH)


def parse_day(value: str | None, *, default: date | None = None) -> date:
    """Parse a CLI date argument; ``None`` or ``"today"`` fall back to ``default`` or today."""
    if value is None or value.strip().lower() == "today":
        return default or date.today()
    try:
        return as_calendar_date(value)
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def resolve_schedule_config(
    *,
    start: str | None,
    pattern: str = DEFAULT_PATTERN,
    config_path: Path | None = None,
    schedule_id: str | None = None,
    store: Path | None = None,
    link: str | None = None,
) -> ScheduleConfig:
    """Build the schedule from exactly one of ``--start``/``--config``/``--schedule``/``--link``."""
    provided = [
        flag
        for flag, value in (
            ("--start", start),
            ("--config", config_path),
            ("--schedule", schedule_id),
            ("--link", link),
        )
        if value is not None
    ]
    if not provided:
        raise typer.BadParameter("Provide a schedule with --start, --config, --schedule or --link.")
    if len(provided) > 1:
        raise typer.BadParameter(f"Options {', '.join(provided)} are mutually exclusive.")
    try:
        if config_path is not None:
            return load_schedule_config(config_path)
        if schedule_id is not None:
            return open_store(store).get(schedule_id).to_config()
        if link is not None:
            return config_from_query(link)
        return ScheduleConfig.from_strings(start, pattern)
    except KeyError as exc:
        raise typer.BadParameter(str(exc.args[0])) from exc
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def styled_status(status: DayStatus) -> str:
    return f"[{STATUS_STYLES[status]}]{status.value}[/]"


__all__ = [
    "STORE_ENVVAR",
    "StartOption",
    "PatternOption",
    "ConfigOption",
    "ScheduleOption",
    "StoreOption",
    "LinkOption",
    "TelemetryOption",
    "STATUS_STYLES",
    "STATUS_MARKERS",
    "open_store",
    "parse_day",
    "resolve_schedule_config",
    "styled_status",
]
