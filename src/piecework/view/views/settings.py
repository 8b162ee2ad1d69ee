# SPDX-License-Identifier: MIT

from pathlib import Path

from rich.console import Console
from rich.table import Table

from piecework.configuration import Configuration
from piecework.model.settings import Settings
from piecework.service.rate import RateModel


def settings_view(
    settings: Settings, config: Configuration, data_path: Path
) -> None:
    """Stored business settings followed by the local app configuration."""
    rate_model = RateModel.from_settings(settings)

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("rate_per_unit", f"{settings['rate_per_unit']:.2f}")
    table.add_row("currency", f"{settings['currency']} ({rate_model.symbol.strip()})")
    table.add_row("theme", settings["theme"])
    table.add_row("date_format", settings["date_format"])
    table.add_row("user_name", settings["user_name"] or "")
    table.add_row("baseline", rate_model.rate_info()["baseline"])

    console.print(table)

    config_table = Table()
    config_table.add_column("Config", style="cyan")
    config_table.add_column("Value", style="magenta")
    config_table.add_row("data_path", str(data_path))
    config_table.add_row(
        "show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled"
    )
    config_table.add_row("log_level", config["log_level"])

    console.print(config_table)
