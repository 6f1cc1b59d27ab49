# SPDX-License-Identifier: MIT

import typer

from timbers.errors import TimbersError
from timbers.terminal.context import fail, get_app_context


def init(ctx: typer.Context) -> None:
    """
    Create the ledger directory in the current repository.
    """
    app_context = get_app_context(ctx)
    output = app_context.output
    ledger_dir = app_context.configuration["ledger_dir"]

    try:
        created = app_context.get_repository().ensure_dir()
    except TimbersError as e:
        raise fail(app_context, e)

    if output.json_mode:
        output.json(
            {"status": "created" if created else "exists", "ledger_dir": ledger_dir}
        )
        return

    if created:
        output.print(f"[green]Initialized[/green] {ledger_dir}/")
    else:
        output.print(f"{ledger_dir}/ already exists")
