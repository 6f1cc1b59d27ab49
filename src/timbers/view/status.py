# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from rich import box
from rich.table import Table

from timbers.model.result import ListStats
from timbers.view.output import Output
from timbers.view.util import short_sha


class RepositoryStatus(TypedDict):
    repo: str
    branch: str
    head: str
    ledger_dir: str
    initialized: bool
    entries: int
    pending: int
    stats: Optional[ListStats]


def status_report(output: Output, status: RepositoryStatus) -> None:
    if output.json_mode:
        data = dict(status)
        if data["stats"] is None:
            del data["stats"]
        output.json(data)
        return

    output.header("status")
    status_table = Table(box=box.SIMPLE, show_header=False)
    status_table.add_column("property")
    status_table.add_column("value")
    status_table.add_row("repo", Path(status["repo"]).name)
    status_table.add_row("branch", status["branch"])
    status_table.add_row("head", short_sha(status["head"]))
    status_table.add_row(
        "ledger",
        f"{status['ledger_dir']} ({'initialized' if status['initialized'] else 'missing'})",
    )
    status_table.add_row("entries", str(status["entries"]))
    status_table.add_row("pending", str(status["pending"]))

    stats = status["stats"]
    if stats is not None:
        status_table.add_row("files", str(stats["total"]))
        status_table.add_row("parsed", str(stats["parsed"]))
        status_table.add_row(
            "skipped",
            f"{stats['skipped']} ({stats['not_timbers']} foreign, {stats['parse_errors']} unreadable)",
        )
    output.print(status_table)
