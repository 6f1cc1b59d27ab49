# SPDX-License-Identifier: MIT

from timbers.export.json import entry_to_dict
from timbers.model.entry import Entry
from timbers.view.entry import single_entry_report
from timbers.view.output import Output


def entry_created_report(output: Output, entry: Entry) -> None:
    if output.json_mode:
        output.json(
            {
                "status": "created",
                "id": entry["id"],
                "anchor": entry["anchor_commit"],
                "commits": list(entry["commits"]),
                "suggested_commands": ["timbers show --latest"],
            }
        )
        return

    output.print(f"[green]Created entry[/green] {entry['id']}")
    output.print(f"  {entry['summary']['what']}", markup=False)


def entry_dry_run_report(output: Output, entry: Entry) -> None:
    if output.json_mode:
        output.json({"status": "dry_run", "entry": entry_to_dict(entry)})
        return

    single_entry_report(output, entry, title="dry run")
