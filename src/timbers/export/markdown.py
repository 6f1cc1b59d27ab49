# SPDX-License-Identifier: MIT

from pathlib import Path

from timbers.errors import StorageError
from timbers.model.entry import Entry
from timbers.time import datetime_to_utc_date_str

EXPORT_SCHEMA = "timbers.export/v1"


def format_markdown(entry: Entry) -> str:
    return "".join(
        [
            _frontmatter(entry),
            _summary(entry),
            _evidence(entry),
        ]
    )


def _frontmatter(entry: Entry) -> str:
    lines = [
        "---",
        f"schema: {EXPORT_SCHEMA}",
        f"id: {entry['id']}",
        f"date: {datetime_to_utc_date_str(entry['created_at'])}",
        f"anchor_commit: {entry['anchor_commit'][:12]}",
        f"commit_count: {len(entry['commits'])}",
    ]
    if entry["tags"]:
        lines.append(f"tags: [{', '.join(entry['tags'])}]")
    lines.append("---")
    return "\n".join(lines) + "\n\n"


def _summary(entry: Entry) -> str:
    summary = entry["summary"]
    return (
        f"# {summary['what']}\n\n"
        f"**What:** {summary['what']}\n\n"
        f"**Why:** {summary['why']}\n\n"
        f"**How:** {summary['how']}\n\n"
    )


def _evidence(entry: Entry) -> str:
    text = "## Evidence\n\n"
    text += f"- Commits: {len(entry['commits'])}"
    commit_range = compute_commit_range(entry)
    if commit_range:
        text += f" ({commit_range})"
    text += "\n"

    diffstat = entry["diffstat"]
    if diffstat is not None:
        text += (
            f"- Files changed: {diffstat['files']} "
            f"(+{diffstat['insertions']}/-{diffstat['deletions']})\n"
        )
    return text


def compute_commit_range(entry: Entry) -> str:
    if entry["range"]:
        return entry["range"]
    if len(entry["commits"]) < 2:
        return ""
    # commits are stored newest first
    return f"{entry['commits'][-1][:7]}..{entry['commits'][0][:7]}"


def write_markdown_files(entries: list[Entry], directory: Path) -> list[Path]:
    written: list[Path] = []
    for entry in entries:
        file_path = directory / f"{entry['id']}.md"
        try:
            file_path.write_text(format_markdown(entry))
        except OSError as e:
            raise StorageError(f"failed to write file {file_path}: {e}")
        written.append(file_path)
    return written
