# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timbers.errors import NoCommitsError, TimbersError, UserError
from timbers.model.commit import Commit
from timbers.service.batch import create_batch_entries
from timbers.service.entry import EntryMode, build_entry, parse_range, parse_work_items
from timbers.service.group import GroupStrategy, group_commits
from timbers.service.reconcile import STALE_ANCHOR_WARNING, resolve_pending
from timbers.terminal.context import AppContext, fail, get_app_context
from timbers.view.batch import batch_report
from timbers.view.log import entry_created_report, entry_dry_run_report

NO_PENDING_MESSAGE = (
    "no pending commits to document; run 'timbers pending' to check status"
)


def log(
    ctx: typer.Context,
    what: Annotated[
        Optional[str], typer.Argument(help="What was done")
    ] = None,
    why: Annotated[
        Optional[str],
        typer.Option("--why", help="Why it was done (required unless --minor or --auto)"),
    ] = None,
    how: Annotated[
        Optional[str],
        typer.Option("--how", help="How it was done (required unless --minor or --auto)"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options"),
    ] = None,
    work_items: Annotated[
        Optional[list[str]],
        typer.Option(
            "--work-item", "-w", help="valid input: system:id, accepts multiple"
        ),
    ] = None,
    notes: Annotated[
        Optional[str], typer.Option("--notes", "-n", help="Free-form notes")
    ] = None,
    range_str: Annotated[
        Optional[str],
        typer.Option("--range", "-r", help="Explicit commit range A..B"),
    ] = None,
    anchor: Annotated[
        Optional[str],
        typer.Option("--anchor", help="Override the anchor commit"),
    ] = None,
    minor: Annotated[
        bool, typer.Option("--minor", help="Trivial change, why/how optional")
    ] = False,
    auto: Annotated[
        bool,
        typer.Option("--auto", help="Fill missing what/why/how from commit messages"),
    ] = False,
    batch: Annotated[
        bool,
        typer.Option("--batch", help="One auto-documented entry per commit group"),
    ] = False,
    group_by: Annotated[
        Optional[GroupStrategy],
        typer.Option("--group-by", help="Batch grouping strategy"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show what would be written")
    ] = False,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing entry")
    ] = False,
) -> None:
    """
    Record pending work as a ledger entry.
    """
    app_context = get_app_context(ctx)

    try:
        if minor and auto:
            raise UserError("--minor and --auto cannot be combined")
        if batch:
            if what or why or how or anchor:
                raise UserError(
                    "--batch derives summaries from commit messages; "
                    "WHAT, --why, --how and --anchor are not allowed"
                )
            strategy = group_by or GroupStrategy(
                app_context.configuration["group_strategy"]
            )
            _log_batch(app_context, range_str, strategy, tags, dry_run)
            return

        mode = EntryMode.MANUAL
        if minor:
            mode = EntryMode.MINOR
        elif auto:
            mode = EntryMode.AUTO

        parsed_work_items = parse_work_items(work_items)
        commits = _commits_to_document(app_context, range_str)
        entry = build_entry(
            app_context.get_source(),
            commits,
            {"what": what, "why": why, "how": how},
            mode=mode,
            anchor=anchor,
            tags=tags,
            work_items=parsed_work_items,
            notes=notes,
        )

        if dry_run:
            entry_dry_run_report(app_context.output, entry)
            return

        app_context.get_repository().write(entry, force=force)
    except TimbersError as e:
        raise fail(app_context, e)

    entry_created_report(app_context.output, entry)


def _log_batch(
    app_context: AppContext,
    range_str: Optional[str],
    strategy: GroupStrategy,
    tags: Optional[list[str]],
    dry_run: bool,
) -> None:
    commits = _commits_to_document(app_context, range_str)
    groups = group_commits(commits, strategy)
    if not groups:
        raise UserError("no groups found for batch processing")

    result = create_batch_entries(
        app_context.get_source(),
        app_context.get_repository(),
        groups,
        tags=tags,
        dry_run=dry_run,
    )
    batch_report(app_context.output, result)

    if result["failures"]:
        raise typer.Exit(max(failure["exit_code"] for failure in result["failures"]))


def _commits_to_document(
    app_context: AppContext, range_str: Optional[str]
) -> list[Commit]:
    source = app_context.get_source()
    if range_str:
        from_ref, to_ref = parse_range(range_str)
        commits = source.log(from_ref, to_ref)
    else:
        pending = resolve_pending(
            source,
            app_context.get_repository().list_entries(),
            ledger_dir=app_context.configuration["ledger_dir"],
        )
        if pending["stale_anchor_warning"]:
            app_context.output.warn(STALE_ANCHOR_WARNING)
        commits = pending["commits"]

    if not commits:
        raise NoCommitsError(NO_PENDING_MESSAGE)
    return commits
