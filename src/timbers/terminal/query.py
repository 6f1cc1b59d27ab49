# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timbers.errors import TimbersError, UserError
from timbers.query.entry_query import is_empty_query, run_query
from timbers.terminal.context import fail, get_app_context
from timbers.terminal.parse import parse_entry_query
from timbers.view.entry import entries_report


def query(
    ctx: typer.Context,
    last: Annotated[
        Optional[int], typer.Option("--last", "-n", help="Last N entries")
    ] = None,
    since: Annotated[
        Optional[str],
        typer.Option("--since", help="valid inputs: 24h, 7d, 2w, 1m, YYYY-MM-DD, RFC3339"),
    ] = None,
    until: Annotated[
        Optional[str],
        typer.Option("--until", help="valid inputs: 24h, 7d, 2w, 1m, YYYY-MM-DD, RFC3339"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options, matches any"),
    ] = None,
    range_str: Annotated[
        Optional[str],
        typer.Option("--range", "-r", help="Entries documenting commits in A..B"),
    ] = None,
    work_item: Annotated[
        Optional[str],
        typer.Option("--work-item", "-w", help="valid input: system or system:id"),
    ] = None,
    oneline: Annotated[
        bool, typer.Option("--oneline", help="Compact format: <id>  <what>")
    ] = False,
) -> None:
    """
    Search ledger entries.
    """
    app_context = get_app_context(ctx)

    try:
        entry_query = parse_entry_query(
            last, since, until, tags, range_str, work_item
        )
        if is_empty_query(entry_query):
            raise UserError(
                "specify --last N, --since, --until, --tag, --work-item or --range "
                "to retrieve entries"
            )
        source = app_context.get_source() if entry_query["range"] else None
        entries = run_query(
            app_context.get_repository().list_entries(), entry_query, source
        )
    except TimbersError as e:
        raise fail(app_context, e)

    entries_report(app_context.output, entries, oneline=oneline)
