# SPDX-License-Identifier: MIT

from typing import Optional

from timbers.model.commit import Diffstat
from timbers.model.entry import WorkItem


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if not tags:
        return ""
    return ", ".join(tags)


def format_work_items(work_items: list[WorkItem]) -> str:
    return ", ".join(f"{item['system']}:{item['id']}" for item in work_items)


def format_diffstat(diffstat: Optional[Diffstat]) -> str:
    if diffstat is None:
        return "0 changed"
    files = diffstat["files"]
    noun = "file" if files == 1 else "files"
    return f"{files} {noun} changed, +{diffstat['insertions']} -{diffstat['deletions']}"


def short_sha(sha: str, length: int = 7) -> str:
    return sha[:length]


def truncate(text: str, max_length: int) -> str:
    text = text.replace("\n", " ")
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."
