# SPDX-License-Identifier: MIT

from typing import Any

from rich import box
from rich.table import Table

from timbers.export.json import entry_to_dict
from timbers.model.entry import Entry
from timbers.view.output import Output
from timbers.view.util import format_tags


def amend_changes(original: Entry, amended: Entry) -> dict[str, dict[str, Any]]:
    """Before/after pairs for every summary field or tag list that differs."""
    changes: dict[str, dict[str, Any]] = {}
    for field in ("what", "why", "how"):
        before = original["summary"][field]  # type: ignore[literal-required]
        after = amended["summary"][field]  # type: ignore[literal-required]
        if before != after:
            changes[field] = {"before": before, "after": after}
    if original["tags"] != amended["tags"]:
        changes["tags"] = {"before": original["tags"], "after": amended["tags"]}
    return changes


def amend_report(
    output: Output, original: Entry, amended: Entry, dry_run: bool = False
) -> None:
    changes = amend_changes(original, amended)

    if output.json_mode:
        if dry_run:
            output.json(
                {"dry_run": True, "entry": entry_to_dict(amended), "changes": changes}
            )
        else:
            output.json({"status": "amended", "id": amended["id"], "changes": changes})
        return

    output.header("amend (dry run)" if dry_run else "amend")
    output.print(f"entry {amended['id']}", markup=False)

    changes_table = Table(box=box.SIMPLE)
    changes_table.add_column("field")
    changes_table.add_column("before")
    changes_table.add_column("after")
    for field, change in changes.items():
        if field == "tags":
            changes_table.add_row(
                field, format_tags(change["before"]), format_tags(change["after"])
            )
        else:
            changes_table.add_row(field, change["before"], change["after"])
    output.print(changes_table)
