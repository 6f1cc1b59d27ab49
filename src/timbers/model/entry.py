# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from timbers.model.commit import Diffstat
from timbers.model.entry_id import EntryId

SCHEMA_VERSION = "timbers.devlog/v1"
KIND_ENTRY = "entry"


class Summary(TypedDict):
    what: str
    why: str
    how: str


class WorkItem(TypedDict):
    system: str
    id: str


class Entry(TypedDict):
    schema: str  # SCHEMA_VERSION
    kind: str  # KIND_ENTRY
    id: EntryId
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime

    # Coverage marker: the anchor and everything before it counts as documented
    anchor_commit: str
    commits: list[str]  # newest first, never empty once written
    range: Optional[str]  # oldest-short..newest-short, only for multi-commit entries
    diffstat: Optional[Diffstat]

    summary: Summary
    tags: list[str]
    work_items: list[WorkItem]
    notes: NotRequired[Optional[str]]


class SummaryFields(TypedDict, total=False):
    """Caller-supplied summary values; missing or empty values get defaults."""

    what: Optional[str]
    why: Optional[str]
    how: Optional[str]
