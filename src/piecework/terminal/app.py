# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from piecework import configuration
from piecework.context import build_app_context
from piecework.initialize import initialize
from piecework.log import configure_logging
from piecework.repository.configuration import ConfigurationRepository
from piecework.terminal import configuration as configuration_commands
from piecework.terminal import entry
from piecework.terminal.custom_typer import AliasedTyperGroup
from piecework.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="piecework - piece-rate earnings tracker",
    no_args_is_help=True,
)
app.command(name="add, a", no_args_is_help=True)(entry.add)
app.command(name="edit, e", no_args_is_help=True)(entry.edit)
app.command(name="delete, d", no_args_is_help=True)(entry.delete)
app.command(name="summary, s")(entry.summary)
app.command(name="history, h")(entry.history)
app.command(name="months, m")(entry.months)
app.command(name="export, x")(entry.export)
app.command(name="import, i", no_args_is_help=True)(entry.import_)
app.command(name="stats")(entry.stats)
app.command(name="clear")(entry.clear)
app.add_typer(configuration_commands.app, name="config, c")


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    data_path: Annotated[
        Optional[Path],
        typer.Option(
            "--data-path",
            envvar="PIECEWORK_DATA_PATH",
            file_okay=False,
            help="Override the data directory for this invocation",
        ),
    ] = None,
) -> None:
    """
    piecework - piece-rate earnings tracker

    Global options that apply to all commands.
    """
    initialize()
    data_dir = data_path if data_path is not None else configuration.DATA_PATH

    configuration_repository = ConfigurationRepository()
    config = configuration_repository.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"] and not no_header)

    app_context = build_app_context(data_dir, configuration_repository)
    ctx.obj = app_context
    ctx.call_on_close(app_context.flush)

    if not app_context.is_supported:
        Console(stderr=True).print(
            "[yellow]Warning: data directory is not writable, "
            "nothing will be saved.[/yellow]"
        )


def run() -> None:
    app()
