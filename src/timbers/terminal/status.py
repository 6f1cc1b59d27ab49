# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from timbers.errors import TimbersError
from timbers.service.reconcile import STALE_ANCHOR_WARNING, resolve_pending
from timbers.terminal.context import fail, get_app_context
from timbers.view.status import RepositoryStatus, status_report


def status(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Include ledger file statistics"),
    ] = False,
) -> None:
    """
    Show repository, ledger and pending-commit status.
    """
    app_context = get_app_context(ctx)

    try:
        source = app_context.get_source()
        repository = app_context.get_repository()
        entries, stats = repository.list_entries_with_stats()
        head = source.head()
        pending = resolve_pending(
            source, entries, head, ledger_dir=app_context.configuration["ledger_dir"]
        )
        repository_status: RepositoryStatus = {
            "repo": str(source.repo_root()),
            "branch": source.current_branch(),
            "head": head,
            "ledger_dir": app_context.configuration["ledger_dir"],
            "initialized": repository.dir_exists(),
            "entries": len(entries),
            "pending": len(pending["commits"]),
            "stats": stats if verbose else None,
        }
    except TimbersError as e:
        raise fail(app_context, e)

    if pending["stale_anchor_warning"]:
        app_context.output.warn(STALE_ANCHOR_WARNING)
    status_report(app_context.output, repository_status)
