# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timbers.configuration import load_configuration
from timbers.errors import TimbersError
from timbers.logger import configure_logging
from timbers.terminal.amend import amend
from timbers.terminal.context import AppContext
from timbers.terminal.custom_typer import OrderedAliasedTyperGroup
from timbers.terminal.export import export
from timbers.terminal.init import init
from timbers.terminal.log import log
from timbers.terminal.pending import pending
from timbers.terminal.query import query
from timbers.terminal.show import show
from timbers.terminal.status import status
from timbers.view.output import Output

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Timbers - a git-native development ledger",
    no_args_is_help=True,
)
app.command(name="init")(init)
app.command(name="status, st")(status)
app.command(name="pending, p")(pending)
app.command(name="log, l")(log)
app.command(name="show, s")(show)
app.command(name="query, q")(query)
app.command(name="amend, a")(amend)
app.command(name="export, e")(export)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: Annotated[
        bool, typer.Option("--json", help="Machine-readable JSON output")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Debug logging to stderr")
    ] = False,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colored output")
    ] = False,
) -> None:
    """
    Timbers - a git-native development ledger

    Global options that apply to all commands.
    """
    configure_logging(verbose)

    existing: Optional[AppContext] = ctx.find_object(AppContext)
    if existing is not None:
        existing.output.json_mode = existing.output.json_mode or json_output
        return

    try:
        configuration = load_configuration()
    except TimbersError as e:
        output = Output(json_mode=json_output, color=not no_color)
        output.error(e)
        raise typer.Exit(e.exit_code)

    output = Output(
        json_mode=json_output, color=configuration["color"] and not no_color
    )
    ctx.obj = AppContext(configuration, output)


def run() -> None:
    app()
