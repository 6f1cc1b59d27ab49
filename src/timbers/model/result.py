# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from timbers.model.commit import Commit
from timbers.model.entry import Entry


class PendingResult(TypedDict):
    commits: list[Commit]  # newest first
    latest: Optional[Entry]  # entry used as coverage boundary
    stale_anchor_warning: bool


class BatchEntryRef(TypedDict):
    id: str
    anchor: str
    group_key: str
    what: str


class BatchFailure(TypedDict):
    group_key: str
    error: str
    exit_code: int


class BatchResult(TypedDict):
    status: str  # "created" or "dry_run"
    entries: list[BatchEntryRef]
    failures: list[BatchFailure]


class ListStats(TypedDict):
    total: int
    parsed: int
    skipped: int
    not_timbers: int
    parse_errors: int


def empty_list_stats() -> ListStats:
    return {
        "total": 0,
        "parsed": 0,
        "skipped": 0,
        "not_timbers": 0,
        "parse_errors": 0,
    }
