# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, NoReturn, Optional, cast

import pendulum
import typer
from rich.console import Console

from piecework.context import AppContext
from piecework.model.month import MonthKey
from piecework.service import month_index, statistics
from piecework.service.summary import build_summary
from piecework.template.entry import get_entry_template
from piecework.terminal.parse import parse_date, parse_month
from piecework.time import date_to_str
from piecework.view.views import entry as entry_report
from piecework.view.views import summary as summary_report

err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _reference_date(month: MonthKey, app_context: AppContext) -> pendulum.Date:
    """Today when viewing the current month, otherwise the first of the viewed month."""
    today = app_context.today()
    if month == month_index.month_of(today):
        return today
    return month_index.first_day(month)


def add(
    ctx: typer.Context,
    count: Annotated[str, typer.Argument(help="units completed")],
    date: Annotated[
        Optional[str],
        typer.Option(
            "--date",
            "-d",
            help="YYYY-MM-DD, today/t, yesterday/y or a day offset; default today",
        ),
    ] = None,
) -> None:
    """Log the units completed on a day. Replaces the count already logged that day."""
    app_context = cast(AppContext, ctx.obj)
    rate_model = app_context.rate_model()

    entry_date = date_to_str(parse_date(date, app_context.today()))
    unit_count = rate_model.sanitize_count(count)
    if not rate_model.is_valid_count(unit_count):
        _fail("Please enter a valid unit count (0 to 999999)")

    entry = get_entry_template(entry_date, unit_count, rate_model.earnings(unit_count))
    existed = app_context.entry_repository.get_by_date(entry_date) is not None

    if not app_context.entry_repository.save(entry):
        _fail("Failed to save entry.")

    typer.echo("Entry updated." if existed else "Entry saved.")
    saved = app_context.entry_repository.get_by_date(entry_date)
    if saved is not None:
        entry_report.single_entry_view(saved, rate_model)


def edit(
    ctx: typer.Context,
    date: Annotated[str, typer.Argument(help="date of the entry to change")],
    count: Annotated[str, typer.Argument(help="new unit count")],
) -> None:
    """Change the unit count of an existing entry."""
    app_context = cast(AppContext, ctx.obj)
    rate_model = app_context.rate_model()

    entry_date = date_to_str(parse_date(date, app_context.today()))
    unit_count = rate_model.sanitize_count(count)
    if not rate_model.is_valid_count(unit_count):
        _fail("Please enter a valid unit count (0 to 999999)")

    if not app_context.entry_repository.update(
        entry_date,
        {"unit_count": unit_count, "earnings": rate_model.earnings(unit_count)},
    ):
        _fail(f"Failed to update entry for {entry_date}.")

    typer.echo("Entry updated.")
    updated = app_context.entry_repository.get_by_date(entry_date)
    if updated is not None:
        entry_report.single_entry_view(updated, rate_model)


def delete(
    ctx: typer.Context,
    date: Annotated[str, typer.Argument(help="date of the entry to delete")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete the entry for a day."""
    app_context = cast(AppContext, ctx.obj)
    rate_model = app_context.rate_model()

    entry_date = date_to_str(parse_date(date, app_context.today()))
    entry = app_context.entry_repository.get_by_date(entry_date)
    if entry is None:
        _fail(f"No entry for {entry_date}.")

    if not yes:
        typer.confirm(
            f"Delete entry for {entry_date}? {entry['unit_count']} units - "
            f"{rate_model.format_amount(entry['earnings'])}",
            abort=True,
        )

    if not app_context.entry_repository.delete(entry_date):
        _fail("Failed to delete entry.")
    typer.echo("Entry deleted.")


def summary(
    ctx: typer.Context,
    month: Annotated[
        Optional[str], typer.Option("--month", "-m", help="YYYY-MM, default this month")
    ] = None,
) -> None:
    """Totals, weekly and monthly earnings, daily average and work streak."""
    app_context = cast(AppContext, ctx.obj)
    settings = app_context.settings_repository.get_settings()
    rate_model = app_context.rate_model()

    view_month = parse_month(month, app_context.today())
    entries = app_context.entry_repository.get_all()
    summary_data = build_summary(
        entries, _reference_date(view_month, app_context), app_context.today()
    )
    summary_report.summary_view(summary_data, rate_model, settings["user_name"])


def history(
    ctx: typer.Context,
    month: Annotated[
        Optional[str], typer.Option("--month", "-m", help="YYYY-MM, default this month")
    ] = None,
) -> None:
    """Entries of one month."""
    app_context = cast(AppContext, ctx.obj)
    settings = app_context.settings_repository.get_settings()
    rate_model = app_context.rate_model()

    view_month = parse_month(month, app_context.today())
    entries = app_context.entry_repository.get_all()
    months = month_index.available_months(entries)
    month_entries = statistics.entries_for_month(
        entries, month_index.first_day(view_month)
    )

    entry_report.history_view(
        view_month,
        month_entries,
        rate_model,
        month_index.can_go_previous(months, view_month),
        month_index.can_go_next(months, view_month),
        settings["user_name"],
    )


def months(ctx: typer.Context) -> None:
    """Months that have entries, newest first."""
    app_context = cast(AppContext, ctx.obj)
    entries = app_context.entry_repository.get_all()
    available = month_index.available_months(entries)
    if not available:
        typer.echo("No entries available.")
        return

    counts = {
        month: len(
            statistics.entries_for_month(entries, month_index.first_day(month))
        )
        for month in available
    }
    entry_report.months_view(available, counts)


def export(
    ctx: typer.Context,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="file to write, default stdout"),
    ] = None,
) -> None:
    """Export entries and settings as JSON."""
    app_context = cast(AppContext, ctx.obj)
    blob = app_context.entry_repository.export_snapshot()

    if output is None:
        typer.echo(blob)
        return

    output.write_text(blob, encoding="utf-8")
    typer.echo(f"Data exported to {output}")


def import_(
    ctx: typer.Context,
    source: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="exported JSON file")
    ],
) -> None:
    """Replace entries with those of an exported file and merge its settings."""
    app_context = cast(AppContext, ctx.obj)
    if not app_context.entry_repository.import_snapshot(
        source.read_text(encoding="utf-8")
    ):
        _fail("Failed to import data.")
    typer.echo("Data imported.")


def stats(ctx: typer.Context) -> None:
    """Storage usage."""
    app_context = cast(AppContext, ctx.obj)
    summary_report.storage_stats_view(app_context.entry_repository.get_storage_stats())


def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete every entry. Settings are kept."""
    app_context = cast(AppContext, ctx.obj)
    if not yes:
        typer.confirm("Delete all entries?", abort=True)
    if not app_context.entry_repository.clear_all():
        _fail("Failed to clear entries.")
    typer.echo("All entries deleted.")

