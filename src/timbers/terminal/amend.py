# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timbers.errors import TimbersError
from timbers.service.entry import amend_entry
from timbers.terminal.context import fail, get_app_context
from timbers.view.amend import amend_report


def amend(
    ctx: typer.Context,
    id: Annotated[str, typer.Argument(help="Entry id")],
    what: Annotated[Optional[str], typer.Option("--what")] = None,
    why: Annotated[Optional[str], typer.Option("--why")] = None,
    how: Annotated[Optional[str], typer.Option("--how")] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="replaces all tags, accepts multiple"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show changes without writing")
    ] = False,
) -> None:
    """
    Modify the summary or tags of an existing entry.
    """
    app_context = get_app_context(ctx)

    try:
        repository = app_context.get_repository()
        original = repository.get_by_id(id)
        amended = amend_entry(original, what=what, why=why, how=how, tags=tags)
        if not dry_run:
            repository.write(amended, force=True)
    except TimbersError as e:
        raise fail(app_context, e)

    amend_report(app_context.output, original, amended, dry_run=dry_run)
