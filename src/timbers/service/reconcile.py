# SPDX-License-Identifier: MIT

import logging
from pathlib import PurePosixPath
from typing import Optional

from timbers.errors import UnresolvableRefError
from timbers.model.commit import Commit
from timbers.model.entry import Entry
from timbers.model.result import PendingResult
from timbers.repository.entry_store import latest_entry
from timbers.source.commit_source import CommitSource

logger = logging.getLogger(__name__)

STALE_ANCHOR_WARNING = (
    "last entry's anchor commit is no longer in git history "
    "(squash merge or rebase?); showing all reachable commits"
)


def resolve_pending(
    source: CommitSource,
    entries: list[Entry],
    head: Optional[str] = None,
    ledger_dir: Optional[str] = None,
) -> PendingResult:
    """
    Compute the commits reachable from HEAD that no entry documents yet.

    The most recently created entry's anchor is the coverage boundary: the
    anchor and all of its ancestors count as documented. When entries exist
    on diverged branches, only the latest one is considered.

    If the anchor no longer resolves (history rewritten since it was
    recorded), every commit reachable from HEAD is returned together with
    `stale_anchor_warning=True` instead of failing. Any other collaborator
    failure propagates.

    Args:
        source: Commit source to query
        entries: All stored entries
        head: HEAD sha; looked up from the source when omitted
        ledger_dir: Ledger location relative to the repository root; commits
            touching nothing but ledger files are left out when given

    Returns:
        Pending commits newest first, the boundary entry and the stale flag
    """
    if head is None:
        head = source.head()

    latest = coverage_boundary(source, entries, head)
    if latest is None:
        return {
            "commits": _without_ledger_commits(
                source, source.commits_reachable_from(head), ledger_dir
            ),
            "latest": None,
            "stale_anchor_warning": False,
        }

    anchor = latest["anchor_commit"]
    try:
        commits = source.log(anchor, head)
    except UnresolvableRefError as e:
        logger.debug("anchor %s of %s is unresolvable (%s)", anchor, latest["id"], e.ref)
        return {
            "commits": _without_ledger_commits(
                source, source.commits_reachable_from(head), ledger_dir
            ),
            "latest": latest,
            "stale_anchor_warning": True,
        }

    return {
        "commits": _without_ledger_commits(source, commits, ledger_dir),
        "latest": latest,
        "stale_anchor_warning": False,
    }


def coverage_boundary(
    source: CommitSource, entries: list[Entry], head: str
) -> Optional[Entry]:
    """
    The most recently created entry.

    Entries sharing the latest created_at (one batch run) are told apart by
    their anchor: the one with the fewest commits between it and HEAD wins.
    """
    latest = latest_entry(entries)
    if latest is None:
        return None

    tied = [entry for entry in entries if entry["created_at"] == latest["created_at"]]
    if len(tied) == 1:
        return latest

    boundary = latest
    nearest: Optional[int] = None
    for entry in tied:
        try:
            distance = len(source.log(entry["anchor_commit"], head))
        except UnresolvableRefError:
            continue
        if nearest is None or distance < nearest:
            boundary, nearest = entry, distance
    return boundary


def is_ledger_only_commit(files: Optional[list[str]], ledger_dir: str) -> bool:
    """True when every file a commit touches lives under the ledger directory."""
    if not files:
        return False
    ledger = PurePosixPath(ledger_dir)
    return all(PurePosixPath(file).is_relative_to(ledger) for file in files)


def _without_ledger_commits(
    source: CommitSource, commits: list[Commit], ledger_dir: Optional[str]
) -> list[Commit]:
    if ledger_dir is None:
        return commits
    kept: list[Commit] = []
    for commit in commits:
        if is_ledger_only_commit(source.commit_files(commit["sha"]), ledger_dir):
            logger.debug("skipping ledger-only commit %s", commit["short_sha"])
            continue
        kept.append(commit)
    return kept
