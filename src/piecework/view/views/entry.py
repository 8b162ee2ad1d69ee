# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from piecework.model.entry import Entry
from piecework.model.month import MonthKey
from piecework.service.rate import RateModel
from piecework.time import date_from_str, date_to_display_str
from piecework.view.views.header import header


def _entry_count_label(count: int) -> str:
    return f"{count} {'entry' if count == 1 else 'entries'}"


def history_view(
    month: MonthKey,
    entries: list[Entry],
    rate_model: RateModel,
    can_go_previous: bool,
    can_go_next: bool,
    user_name: str | None = None,
) -> None:
    """Entries of one month, newest first, with navigation hints."""
    header(f"history {month} ({_entry_count_label(len(entries))})", user_name)

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("date")
    history_table.add_column("units", justify="right")
    history_table.add_column("earnings", justify="right")

    for entry in sorted(entries, key=lambda entry: entry["date"], reverse=True):
        history_table.add_row(
            date_to_display_str(date_from_str(entry["date"])),
            str(entry["unit_count"]),
            rate_model.format_amount(entry["earnings"]),
        )

    console = Console()
    if entries:
        console.print(history_table)
    else:
        console.print(" no entries this month")

    hints = []
    if can_go_previous:
        hints.append("[dim]< older months available[/dim]")
    if can_go_next:
        hints.append("[dim]newer months available >[/dim]")
    if hints:
        console.print(" " + "   ".join(hints))


def single_entry_view(entry: Entry, rate_model: RateModel) -> None:
    header("entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("date", date_to_display_str(date_from_str(entry["date"])))
    entry_table.add_row("units", str(entry["unit_count"]))
    entry_table.add_row("earnings", rate_model.format_amount(entry["earnings"]))

    console = Console()
    console.print(entry_table)


def months_view(months: list[MonthKey], counts: dict[MonthKey, int]) -> None:
    header("months")

    months_table = Table(box=box.SIMPLE)
    months_table.add_column("month")
    months_table.add_column("entries", justify="right")
    for month in months:
        months_table.add_row(str(month), str(counts.get(month, 0)))

    console = Console()
    console.print(months_table)
