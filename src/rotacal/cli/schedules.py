"""Saved-schedule CLI commands (list, add, delete)."""

from __future__ import annotations

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from rotacal.cli._utils import PatternOption, StoreOption, open_store, parse_day
from rotacal.core.errors import RotacalValueError
from rotacal.scheduling.rotation import DEFAULT_PATTERN, CyclePattern
from rotacal.schedules.contract import ScheduleRecord

console = Console()
schedules_app = typer.Typer(
    add_completion=False, no_args_is_help=True, help="Manage saved rotation schedules."
)


@schedules_app.command("list")
def list_schedules(store: StoreOption = None) -> None:
    """List saved schedules, newest first."""
    repository = open_store(store)
    try:
        records = repository.list()
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not records:
        typer.echo(f"No saved schedules in {repository.path}.")
        raise typer.Exit(0)

    table = Table(title=f"Saved schedules ({repository.path})")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Pattern")
    table.add_column("Start")
    table.add_column("Created")
    table.add_column("Description")
    for record in records:
        table.add_row(
            record.id,
            record.name,
            record.pattern,
            record.start_date.isoformat(),
            record.created_at.date().isoformat(),
            record.description or "",
        )
    console.print(table)


@schedules_app.command("add")
def add_schedule(
    start: Annotated[
        str, typer.Option("--start", help="Anchor date (YYYY-MM-DD) of the first on-duty block.")
    ],
    pattern: PatternOption = DEFAULT_PATTERN,
    name: Annotated[
        str | None, typer.Option("--name", help="Display name (defaults to 'Rotation (<pattern>)').")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Optional free-text note.")
    ] = None,
    store: StoreOption = None,
) -> None:
    """Save a schedule to the store."""
    anchor = parse_day(start)
    try:
        canonical = str(CyclePattern.parse(pattern))
        repository = open_store(store)
        record = ScheduleRecord(
            name=name or f"Rotation ({canonical})",
            description=description,
            start_date=anchor,
            pattern=canonical,
        )
        repository.add(record)
    except ValidationError as exc:
        reasons = "; ".join(error["msg"] for error in exc.errors())
        raise typer.BadParameter(reasons) from exc
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(f"[bold green]Saved[/] {record.name} as {record.id}")


@schedules_app.command("delete")
def delete_schedule(
    schedule_id: Annotated[str, typer.Argument(help="Id of the schedule to delete.")],
    store: StoreOption = None,
) -> None:
    """Delete a saved schedule by id."""
    repository = open_store(store)
    try:
        known = {record.id for record in repository.list()}
        if schedule_id not in known:
            typer.echo(f"No schedule with id {schedule_id}; nothing to delete.")
            raise typer.Exit(0)
        repository.delete_by_id(schedule_id)
    except RotacalValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(f"Deleted schedule {schedule_id}")
