from __future__ import annotations

import calendar
from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rotacal.briefing import build_briefing_request
from rotacal.cli._utils import (
    STATUS_MARKERS,
    STATUS_STYLES,
    ConfigOption,
    LinkOption,
    PatternOption,
    ScheduleOption,
    StartOption,
    StoreOption,
    TelemetryOption,
    parse_day,
    resolve_schedule_config,
    styled_status,
)
from rotacal.cli.schedules import schedules_app
from rotacal.core.errors import RotacalValueError
from rotacal.evaluation import (
    DEFAULT_WINDOW_DAYS,
    count_in_month,
    count_in_range,
    count_on_duty_in_window,
    day_dataframe,
    monthly_summary_dataframe,
)
from rotacal.export import DEFAULT_CYCLES, write_ics
from rotacal.export.ics import DEFAULT_SUMMARY
from rotacal.scheduling.rotation import (
    DEFAULT_PATTERN,
    DayStatus,
    classify,
    list_presets,
    next_on_duty_start,
)
from rotacal.schedules.io import share_query, share_url
from rotacal.telemetry import ExportRunLogger

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Rotation calendar tools.")
app.add_typer(schedules_app, name="schedules")
console = Console()


@app.command("status")
def status(
    day: Annotated[
        str | None, typer.Argument(help="Date to classify (YYYY-MM-DD); defaults to today.")
    ] = None,
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
) -> None:
    """Classify a single day and show when the next hitch starts."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    target = parse_day(day)
    classification = classify(target, schedule_config)
    console.print(f"[bold]{target.isoformat()}[/]: {styled_status(classification.status)}")

    if classification.is_defined:
        details = [f"day {classification.day_in_cycle + 1} of {schedule_config.cycle_length}"]
        if classification.is_first_day_of_block:
            details.append("first day of block")
        if classification.is_last_day_of_block:
            details.append("last day of block")
        console.print(f"[cyan]Cycle:[/] pattern={schedule_config.pattern} " + ", ".join(details))
    else:
        console.print(
            f"[yellow]Before the rotation start ({schedule_config.anchor_date.isoformat()}).[/]"
        )

    search_from = target
    if classification.status is DayStatus.ON_DUTY:
        search_from = target + timedelta(days=1)
    following = next_on_duty_start(schedule_config, search_from)
    console.print(
        f"[cyan]Next hitch starts:[/] {following.isoformat()} "
        f"(in {(following - target).days} day(s))"
    )


@app.command("month")
def month_view(
    year: Annotated[int, typer.Argument(help="Calendar year.")],
    month: Annotated[int, typer.Argument(min=1, max=12, help="Calendar month (1-12).")],
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
) -> None:
    """Print a Monday-first calendar of one month with day statuses and totals."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    table = Table(title=f"{calendar.month_name[month]} {year} ({schedule_config.pattern})")
    for name in ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"):
        table.add_column(name, justify="right")

    for week in calendar.Calendar(firstweekday=calendar.MONDAY).monthdatescalendar(year, month):
        cells = []
        for day in week:
            if day.month != month:
                cells.append("")
                continue
            day_status = classify(day, schedule_config).status
            marker = STATUS_MARKERS[day_status]
            cells.append(f"[{STATUS_STYLES[day_status]}]{day.day:>2}{marker}[/]")
        table.add_row(*cells)
    console.print(table)

    counts = count_in_month(schedule_config, year, month)
    console.print(
        f"Work days: [bold]{counts.on_duty}[/]  Off days: {counts.off_duty}  "
        f"Travel days: {counts.transit}"
        + (f"  Before start: {counts.undefined}" if counts.undefined else "")
    )
    console.print(f"Work share: {counts.on_duty_share:.0%}")
    console.print("[dim]W = on-duty, T = transit, - = off-duty[/dim]")


@app.command("year")
def year_view(
    year: Annotated[int, typer.Argument(help="Calendar year.")],
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
    out_csv: Annotated[
        Path | None,
        typer.Option("--out-csv", help="Optional path to write the monthly summary as CSV."),
    ] = None,
) -> None:
    """Summarise status counts for each month of a year."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    df = monthly_summary_dataframe(schedule_config, year)

    table = Table(title=f"{year} ({schedule_config.pattern} from {schedule_config.anchor_date})")
    table.add_column("Month")
    for column in ("on_duty", "off_duty", "transit", "undefined"):
        table.add_column(column.replace("_", "-"), justify="right")
    for row in df.itertuples(index=False):
        table.add_row(
            calendar.month_abbr[int(row.month)],
            str(row.on_duty),
            str(row.off_duty),
            str(row.transit),
            str(row.undefined),
        )
    table.add_row(
        "Total",
        str(int(df["on_duty"].sum())),
        str(int(df["off_duty"].sum())),
        str(int(df["transit"].sum())),
        str(int(df["undefined"].sum())),
    )
    console.print(table)

    if out_csv:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out_csv, index=False)
        console.print(f"Wrote monthly summary to {out_csv}")


@app.command("stats")
def stats(
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
    window_days: Annotated[
        int,
        typer.Option("--window-days", min=1, help="Window length in days, counted from the anchor."),
    ] = DEFAULT_WINDOW_DAYS,
) -> None:
    """Report on-duty totals for a window starting at the rotation anchor."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    anchor = schedule_config.anchor_date
    end = anchor + timedelta(days=window_days - 1)
    counts = count_in_range(schedule_config, anchor, end)
    console.print(
        f"[bold green]{count_on_duty_in_window(schedule_config, window_days)}[/] work days "
        f"in {window_days} days ({anchor.isoformat()} to {end.isoformat()})"
    )
    console.print(
        f"[cyan]Breakdown:[/] on-duty={counts.on_duty} off-duty={counts.off_duty} "
        f"transit={counts.transit} work share={counts.on_duty_share:.1%}"
    )


@app.command("export-ics")
def export_ics(
    out: Annotated[Path, typer.Argument(dir_okay=False, help="Destination .ics file.")],
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
    cycles: Annotated[
        int, typer.Option("--cycles", min=1, help="Number of on-duty blocks to export.")
    ] = DEFAULT_CYCLES,
    summary: Annotated[str, typer.Option("--summary", help="Event title.")] = DEFAULT_SUMMARY,
    calendar_name: Annotated[
        str | None, typer.Option("--calendar-name", help="Calendar display name.")
    ] = None,
    telemetry_log: TelemetryOption = None,
) -> None:
    """Export on-duty blocks as all-day iCalendar events."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )

    def _write() -> Path:
        return write_ics(
            out, schedule_config, cycles=cycles, summary=summary, calendar_name=calendar_name
        )

    if telemetry_log:
        with ExportRunLogger(telemetry_log, "export-ics", schedule_config) as run:
            written = _write()
            run.add_artifact(written)
            run.metrics["events"] = cycles
    else:
        written = _write()
    console.print(f"Wrote {cycles} on-duty block(s) to {written}")


@app.command("export-days")
def export_days(
    out: Annotated[Path, typer.Argument(dir_okay=False, help="Destination CSV file.")],
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
    from_day: Annotated[
        str | None, typer.Option("--from", help="First date (defaults to the anchor).")
    ] = None,
    to_day: Annotated[
        str | None,
        typer.Option("--to", help="Last date, inclusive (defaults to 364 days after --from)."),
    ] = None,
    telemetry_log: TelemetryOption = None,
) -> None:
    """Write one CSV row per day with its status and block flags."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    first = parse_day(from_day, default=schedule_config.anchor_date)
    last = parse_day(to_day, default=first + timedelta(days=DEFAULT_WINDOW_DAYS - 1))
    try:
        df = day_dataframe(schedule_config, first, last)
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    def _write() -> None:
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)

    if telemetry_log:
        with ExportRunLogger(telemetry_log, "export-days", schedule_config) as run:
            _write()
            run.add_artifact(out)
            run.metrics.update(
                {status: int(count) for status, count in df["status"].value_counts().items()}
            )
    else:
        _write()
    console.print(f"Wrote {len(df)} day(s) to {out}")


@app.command("briefing")
def briefing(
    day: Annotated[
        str | None, typer.Argument(help="Date to brief (YYYY-MM-DD); defaults to today.")
    ] = None,
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
) -> None:
    """Show the briefing request a text generator would receive for a day."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    target = parse_day(day)
    classification = classify(target, schedule_config)
    try:
        request = build_briefing_request(target, classification)
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(f"[bold]{target.isoformat()}[/]: {styled_status(classification.status)}")
    console.print(f"[cyan]System:[/] {request.system_instruction}")
    console.print(f"[cyan]Query:[/] {request.user_query}")
    if request.use_search_grounding:
        console.print("[dim]Search grounding requested.[/dim]")


@app.command("share")
def share(
    start: StartOption = None,
    pattern: PatternOption = DEFAULT_PATTERN,
    config: ConfigOption = None,
    schedule: ScheduleOption = None,
    store: StoreOption = None,
    link: LinkOption = None,
    base_url: Annotated[
        str | None,
        typer.Option(
            "--base-url", help="Page URL to attach the schedule to; prints the bare query if omitted."
        ),
    ] = None,
) -> None:
    """Print a shareable link (or query string) that reopens this schedule."""
    schedule_config = resolve_schedule_config(
        start=start,
        pattern=pattern,
        config_path=config,
        schedule_id=schedule,
        store=store,
        link=link,
    )
    text = share_url(schedule_config, base_url) if base_url else share_query(schedule_config)
    typer.echo(text)


@app.command("presets")
def presets() -> None:
    """List the built-in rotation presets."""
    table = Table(title="Rotation presets")
    table.add_column("Pattern")
    table.add_column("Cycle", justify="right")
    table.add_column("Description")
    for preset in list_presets():
        table.add_row(preset.name, f"{preset.pattern.cycle_length}d", preset.description)
    console.print(table)


if __name__ == "__main__":
    app()
