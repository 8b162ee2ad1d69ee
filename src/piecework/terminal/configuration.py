# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console

from piecework import configuration
from piecework.context import AppContext
from piecework.log import LOG_LEVELS
from piecework.model.settings import SettingsUpdate
from piecework.terminal.custom_typer import AliasedTyperGroup
from piecework.view.views.settings import settings_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

err_console = Console(stderr=True)


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    if log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Log level must be one of {', '.join(LOG_LEVELS)}")
    return log_level.upper()


@app.command("view, v")
def view(ctx: typer.Context) -> None:
    """Display current settings and configuration."""
    app_context = cast(AppContext, ctx.obj)
    if app_context.configuration_repository is None:
        raise typer.Exit(1)

    settings_view(
        app_context.settings_repository.get_settings(),
        app_context.configuration_repository.get_config(),
        app_context.data_path or configuration.DATA_PATH,
    )


@app.command("set, s")
def set(
    ctx: typer.Context,
    rate: Annotated[
        Optional[float],
        typer.Option("--rate", "-r", help="earnings per unit, must be positive"),
    ] = None,
    currency: Annotated[
        Optional[str],
        typer.Option("--currency", "-c", help="3 letter currency code, e.g. PHP"),
    ] = None,
    theme: Annotated[Optional[str], typer.Option("--theme")] = None,
    date_format: Annotated[Optional[str], typer.Option("--date-format")] = None,
    name: Annotated[
        Optional[str], typer.Option("--name", "-n", help="name used in greetings")
    ] = None,
    remove_name: Annotated[bool, typer.Option("--remove-name")] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--hide-header", help="show report headers"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", callback=validate_log_level),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="directory holding the entry data"),
    ] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
) -> None:
    """Update settings and configuration."""
    app_context = cast(AppContext, ctx.obj)

    update: SettingsUpdate = {}
    if rate is not None:
        update["rate_per_unit"] = rate
    if currency is not None:
        update["currency"] = currency.upper()
    if theme is not None:
        update["theme"] = theme
    if date_format is not None:
        update["date_format"] = date_format
    if name is not None:
        update["user_name"] = name.strip() or None
    if remove_name:
        update["user_name"] = None

    if update and not app_context.settings_repository.save_settings(update):
        err_console.print("[red]Failed to save settings.[/red]")
        raise typer.Exit(1)

    if app_context.configuration_repository is not None:
        app_context.configuration_repository.update_config(
            data_path=data_path,
            remove_data_path=remove_data_path,
            show_header=show_header,
            log_level=log_level,
        )

    typer.echo("Settings updated.")


@app.command("reset")
def reset(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Restore default settings. Entries are kept."""
    app_context = cast(AppContext, ctx.obj)
    if not yes:
        typer.confirm("Restore default settings?", abort=True)
    if not app_context.settings_repository.reset_settings():
        err_console.print("[red]Failed to reset settings.[/red]")
        raise typer.Exit(1)
    typer.echo("Settings reset.")
