# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from piecework.model.snapshot import StorageStats
from piecework.model.summary import Summary
from piecework.service.rate import RateModel
from piecework.view.views.header import header


def summary_view(
    summary: Summary, rate_model: RateModel, user_name: str | None = None
) -> None:
    header("summary", user_name)

    months_count = summary["months_count"]
    total_label = "Total Earnings"
    if months_count > 0:
        total_label += f" ({months_count} {'month' if months_count == 1 else 'months'})"

    summary_table = Table(box=box.SIMPLE, show_header=False)
    summary_table.add_column("label", style="cyan")
    summary_table.add_column("value", justify="right", style="magenta")

    summary_table.add_row(
        total_label, rate_model.format_amount(summary["total_earnings"])
    )
    summary_table.add_row(
        summary["weekly_label"], rate_model.format_amount(summary["weekly_earnings"])
    )
    summary_table.add_row(
        summary["monthly_label"], rate_model.format_amount(summary["monthly_earnings"])
    )
    summary_table.add_row("Daily Average", str(summary["daily_average"]))
    summary_table.add_row("Work Streak", f"{summary['work_streak']} days")

    console = Console()
    console.print(summary_table)
    console.print(f" [dim]{rate_model.rate_info()['baseline']}[/dim]")


def storage_stats_view(stats: StorageStats) -> None:
    header("storage")

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("property")
    stats_table.add_column("value")

    stats_table.add_row("entries", str(stats["total_entries"]))
    stats_table.add_row(
        "storage", "✓ Available" if stats["is_supported"] else "✗ Unavailable"
    )
    stats_table.add_row("oldest", stats["oldest_entry"] or "")
    stats_table.add_row("newest", stats["newest_entry"] or "")
    stats_table.add_row("bytes used", str(stats["storage_used"]))

    console = Console()
    console.print(stats_table)
