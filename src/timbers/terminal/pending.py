# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from timbers.errors import TimbersError
from timbers.service.reconcile import STALE_ANCHOR_WARNING, resolve_pending
from timbers.terminal.context import fail, get_app_context
from timbers.view.pending import pending_report


def pending(
    ctx: typer.Context,
    count: Annotated[
        bool, typer.Option("--count", "-c", help="Show count only")
    ] = False,
) -> None:
    """
    Show commits not yet documented by any entry.
    """
    app_context = get_app_context(ctx)

    try:
        entries = app_context.get_repository().list_entries()
        result = resolve_pending(
            app_context.get_source(),
            entries,
            ledger_dir=app_context.configuration["ledger_dir"],
        )
    except TimbersError as e:
        raise fail(app_context, e)

    if result["stale_anchor_warning"]:
        app_context.output.warn(STALE_ANCHOR_WARNING)
    pending_report(app_context.output, result, count_only=count)
