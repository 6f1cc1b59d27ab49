# SPDX-License-Identifier: MIT

from rich import box
from rich.table import Table

from timbers.model.commit import Commit
from timbers.model.entry import Entry
from timbers.model.result import PendingResult
from timbers.time import datetime_to_rfc3339
from timbers.view.output import Output
from timbers.view.util import short_sha, truncate


def pending_report(output: Output, pending: PendingResult, count_only: bool = False) -> None:
    commits = pending["commits"]
    latest = pending["latest"]

    if output.json_mode:
        data: dict = {
            "count": len(commits),
            "last_entry": _entry_reference(latest) if latest is not None else None,
            "stale_anchor_warning": pending["stale_anchor_warning"],
        }
        if not count_only:
            data["commits"] = [_commit_to_dict(commit) for commit in commits]
        output.json(data)
        return

    if count_only:
        output.print(str(len(commits)))
        return

    if not commits:
        output.print("No pending commits")
        return

    output.header(f"pending ({len(commits)})")
    output.print(commits_table(commits))


def commits_table(commits: list[Commit]) -> Table:
    commits_table = Table(box=box.SIMPLE)
    commits_table.add_column("sha")
    commits_table.add_column("subject", overflow="ellipsis")
    commits_table.add_column("author")
    for commit in commits:
        commits_table.add_row(
            short_sha(commit["sha"]), truncate(commit["subject"], 72), commit["author"]
        )
    return commits_table


def _entry_reference(entry: Entry) -> dict:
    return {
        "id": entry["id"],
        "anchor_commit": entry["anchor_commit"],
        "created_at": datetime_to_rfc3339(entry["created_at"]),
    }


def _commit_to_dict(commit: Commit) -> dict:
    return {
        "sha": commit["sha"],
        "short_sha": commit["short_sha"],
        "subject": commit["subject"],
        "author": commit["author"],
        "date": commit["date"].isoformat(),
    }
