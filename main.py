"""CLI entry point for the group availability calendar."""

from __future__ import annotations

import sys
from datetime import date, datetime

import click

from group_calendar.config import DEFAULT_API_URL, SessionConfig
from group_calendar.io.api_client import ApiClient, ApiError
from group_calendar.io.excel_reader import ExcelReader
from group_calendar.io.excel_writer import ExcelWriter
from group_calendar.io.schedule_store import load_schedules, save_schedules
from group_calendar.models.availability import Availability, ANY_DAY, WEEKDAY_NAMES
from group_calendar.models.schedule import MonthlySchedule, merge_schedule
from group_calendar.session import EditSession
from group_calendar.validation.collection import check_collection
from group_calendar.validation.report import generate_report


def _parse_availability(ctx, param, value):
    try:
        return Availability.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_today(ctx, param, value):
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise click.BadParameter("expected YYYY-MM-DD") from e


def _load_or_exit(schedule_file: str, strict: bool = True) -> list[MonthlySchedule]:
    try:
        return load_schedules(schedule_file, strict=strict)
    except ValueError as e:
        click.echo(f"Cannot load {schedule_file}: {e}", err=True)
        sys.exit(1)


def _open_session(schedule_file: str, offset: int, today: date,
                  config: SessionConfig | None = None) -> EditSession:
    schedules = _load_or_exit(schedule_file)
    return EditSession(config or SessionConfig(), schedules, today=today, month_offset=offset)


def _render(session: EditSession) -> str:
    lines = [f"{session.cursor.label}"]
    lines.append(" ".join(f"{d[:3]:>6}" for d in WEEKDAY_NAMES))
    for week in session.month_grid():
        cells = []
        for cell in week:
            if cell is None:
                cells.append(" " * 6)
            else:
                day, value = cell
                cells.append(f"{day:>3} {value.value:<2}")
        lines.append(" ".join(cells))
    return "\n".join(lines)


offset_option = click.option("--offset", "-m", type=int, default=0,
                             help="Months from the current month (e.g. 1 = next month)")
today_option = click.option("--today", callback=_parse_today, default=None,
                            help="Reference date YYYY-MM-DD (default: today)")


@click.group()
def cli():
    """Group availability calendar."""
    pass


@cli.command()
@click.argument("schedule_file", type=click.Path())
@offset_option
@today_option
def show(schedule_file: str, offset: int, today: date):
    """Print one month of the calendar."""
    session = _open_session(schedule_file, offset, today)
    click.echo(_render(session))


@cli.command()
@click.argument("schedule_file", type=click.Path())
@click.argument("day", type=int)
@click.argument("value", callback=_parse_availability)
@offset_option
@today_option
def toggle(schedule_file: str, day: int, value: Availability, offset: int, today: date):
    """Toggle DAY (1-based) to VALUE; choosing the current value clears it."""
    session = _open_session(schedule_file, offset, today)
    try:
        session.toggle(day - 1, value)
    except IndexError:
        raise click.BadParameter(
            f"day must be 1-{session.cursor.days_in_month}", param_hint="DAY",
        )
    save_schedules(schedule_file, session.schedules)
    click.echo(_render(session))


@cli.command()
@click.argument("schedule_file", type=click.Path())
@click.argument("value", callback=_parse_availability)
@click.option("--day", "-d", "day_filter", default=ANY_DAY,
              type=click.Choice([ANY_DAY, "any", *WEEKDAY_NAMES], case_sensitive=False),
              help="Weekday to set, or '-' for every day")
@offset_option
@today_option
def bulk(schedule_file: str, value: Availability, day_filter: str, offset: int, today: date):
    """Set VALUE on every day of the month matching --day."""
    session = _open_session(schedule_file, offset, today)
    session.bulk_apply(value, day_filter)
    save_schedules(schedule_file, session.schedules)
    click.echo(_render(session))


@cli.command()
@click.argument("schedule_file", type=click.Path(exists=True))
def validate(schedule_file: str):
    """Validate a schedules file and print a summary report."""
    schedules = _load_or_exit(schedule_file, strict=False)
    click.echo(generate_report(schedules))
    if check_collection(schedules):
        sys.exit(1)


@cli.command()
@click.argument("schedule_file", type=click.Path(exists=True))
@click.argument("output", type=click.Path())
def export(schedule_file: str, output: str):
    """Export schedules to an .xlsx workbook, one sheet per month."""
    schedules = _load_or_exit(schedule_file)
    with ExcelWriter(output) as writer:
        writer.write_schedules(schedules)
    click.echo(f"Wrote {len(schedules)} months to {output}")


@cli.command("import")
@click.argument("workbook", type=click.Path(exists=True))
@click.argument("schedule_file", type=click.Path())
def import_workbook(workbook: str, schedule_file: str):
    """Merge the month sheets of an .xlsx workbook into the schedules file.

    Months already in the file are replaced, new months are appended.
    """
    schedules = _load_or_exit(schedule_file)
    try:
        with ExcelReader(workbook) as reader:
            imported = reader.read_schedules()
    except ValueError as e:
        click.echo(f"Cannot import {workbook}: {e}", err=True)
        sys.exit(1)

    for schedule in imported:
        schedules = merge_schedule(schedules, schedule)
    save_schedules(schedule_file, schedules)
    click.echo(f"Imported {len(imported)} months into {schedule_file}")


def _remote_options(f):
    f = click.option("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")(f)
    f = click.option("--api-url", envvar="GROUP_CALENDAR_API_URL", default=DEFAULT_API_URL,
                     show_default=True)(f)
    f = click.option("--group-id", envvar="GROUP_CALENDAR_GROUP_ID", required=True)(f)
    f = click.option("--token", envvar="GROUP_CALENDAR_TOKEN", required=True,
                     help="Access token")(f)
    return f


@cli.command()
@click.argument("schedule_file", type=click.Path(exists=True))
@_remote_options
def save(schedule_file: str, token: str, group_id: str, api_url: str, timeout: float):
    """Push the whole schedules file to the group."""
    config = SessionConfig(access_token=token, group_id=group_id,
                           api_base_url=api_url, timeout=timeout)
    session = _open_session(schedule_file, 0, date.today(), config)
    client = ApiClient(config.api_base_url, timeout=config.timeout)

    click.echo(f"Saving {len(session.schedules)} months to group {group_id}...")
    result = session.save(client)
    if result.success:
        click.echo("Saved.")
    else:
        click.echo(f"Save FAILED ({result.status}): {result.error}", err=True)
        click.echo("Local edits are kept; run save again to retry.", err=True)
        sys.exit(1)


@cli.command()
@click.argument("schedule_file", type=click.Path())
@_remote_options
def pull(schedule_file: str, token: str, group_id: str, api_url: str, timeout: float):
    """Replace the schedules file with the group's stored schedules."""
    client = ApiClient(api_url, timeout=timeout)
    try:
        schedules = client.load_schedules(token, group_id)
    except (ApiError, ValueError) as e:
        click.echo(f"Pull FAILED: {e}", err=True)
        sys.exit(1)
    save_schedules(schedule_file, schedules)
    click.echo(f"Loaded {len(schedules)} months into {schedule_file}")


if __name__ == "__main__":
    cli()
