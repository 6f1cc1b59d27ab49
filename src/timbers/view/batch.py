# SPDX-License-Identifier: MIT

from rich import box
from rich.table import Table

from timbers.model.result import BatchResult
from timbers.view.output import Output
from timbers.view.util import short_sha, truncate


def batch_report(output: Output, result: BatchResult) -> None:
    if output.json_mode:
        output.json({**result, "count": len(result["entries"])})
        return

    title = "batch (dry run)" if result["status"] == "dry_run" else "batch"
    output.header(title)

    if result["entries"]:
        batch_table = Table(box=box.SIMPLE)
        for column in ("group", "id", "anchor", "what"):
            batch_table.add_column(column)
        for entry_ref in result["entries"]:
            batch_table.add_row(
                entry_ref["group_key"],
                entry_ref["id"],
                short_sha(entry_ref["anchor"]),
                truncate(entry_ref["what"], 60),
            )
        output.print(batch_table)

    for failure in result["failures"]:
        output.warn(f"group {failure['group_key']} failed: {failure['error']}")

    verb = "would create" if result["status"] == "dry_run" else "created"
    output.print(f"{verb} {len(result['entries'])} entries")
