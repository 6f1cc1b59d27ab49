# SPDX-License-Identifier: MIT

from rich import box
from rich.panel import Panel
from rich.table import Table

from timbers.export.json import entry_to_dict
from timbers.model.entry import Entry
from timbers.time import datetime_to_display_str
from timbers.view.output import Output
from timbers.view.util import (
    format_diffstat,
    format_tags,
    format_work_items,
    short_sha,
    truncate,
)


def single_entry_report(output: Output, entry: Entry, title: str = "entry") -> None:
    if output.json_mode:
        output.json(entry_to_dict(entry))
        return

    output.header(title)
    output.print(_entry_table(entry))
    if entry.get("notes"):
        output.print(Panel(str(entry["notes"]), title="Notes", border_style="blue"))


def entries_report(output: Output, entries: list[Entry], oneline: bool = False) -> None:
    if output.json_mode:
        output.json([entry_to_dict(entry) for entry in entries])
        return

    if not entries:
        output.print("No entries found")
        return

    if oneline:
        for entry in entries:
            output.print(f"{entry['id']}  {entry['summary']['what']}", markup=False)
        return

    output.header("entries")
    entries_table = Table(box=box.SIMPLE)
    for column in ("id", "anchor", "commits", "what", "tags"):
        entries_table.add_column(column, overflow="fold" if column == "id" else "ellipsis")
    for entry in entries:
        entries_table.add_row(
            entry["id"],
            short_sha(entry["anchor_commit"]),
            str(len(entry["commits"])),
            truncate(entry["summary"]["what"], 60),
            format_tags(entry["tags"]),
        )
    output.print(entries_table)


def _entry_table(entry: Entry) -> Table:
    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", entry["id"])
    entry_table.add_row("what", entry["summary"]["what"])
    entry_table.add_row("why", entry["summary"]["why"])
    entry_table.add_row("how", entry["summary"]["how"])
    entry_table.add_row("anchor", short_sha(entry["anchor_commit"], 12))

    commit_count = str(len(entry["commits"]))
    if entry["range"]:
        commit_count += f" ({entry['range']})"
    entry_table.add_row("commits", commit_count)
    entry_table.add_row("diffstat", format_diffstat(entry["diffstat"]))
    entry_table.add_row("tags", format_tags(entry["tags"]))
    entry_table.add_row("work items", format_work_items(entry["work_items"]))
    entry_table.add_row("created", datetime_to_display_str(entry["created_at"]))
    entry_table.add_row("updated", datetime_to_display_str(entry["updated_at"]))
    return entry_table
