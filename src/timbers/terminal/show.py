# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timbers.errors import TimbersError, UserError
from timbers.terminal.context import fail, get_app_context
from timbers.view.entry import single_entry_report


def show(
    ctx: typer.Context,
    id: Annotated[Optional[str], typer.Argument(help="Entry id")] = None,
    latest: Annotated[
        bool, typer.Option("--latest", help="Show the most recent entry")
    ] = False,
) -> None:
    """
    Show a single ledger entry.
    """
    app_context = get_app_context(ctx)

    try:
        if id is None and not latest:
            raise UserError("specify an entry ID or use --latest")
        if id is not None and latest:
            raise UserError("cannot use both ID argument and --latest flag")

        repository = app_context.get_repository()
        if id is not None:
            entry = repository.get_by_id(id)
        else:
            latest_entry = repository.get_latest()
            if latest_entry is None:
                raise UserError("no entries found in ledger")
            entry = latest_entry
    except TimbersError as e:
        raise fail(app_context, e)

    single_entry_report(app_context.output, entry)
