# SPDX-License-Identifier: MIT

import re
from enum import StrEnum
from typing import Optional

from timbers.model.commit import Commit, CommitGroup
from timbers.time import datetime_to_utc_date_str

UNTRACKED_GROUP_KEY = "untracked"

_WORK_ITEM_TRAILER_PATTERN = re.compile(r"^work-item:\s*(\S+:\S+)\s*$", re.IGNORECASE)
_DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class GroupStrategy(StrEnum):
    AUTO = "auto"  # work-item trailers first, calendar day otherwise
    DAY = "day"
    WORK_ITEM = "work-item"


def extract_work_item_trailer(body: str) -> Optional[str]:
    """First valid `Work-item: system:id` line in a commit body, if any."""
    for line in body.splitlines():
        match = _WORK_ITEM_TRAILER_PATTERN.match(line.strip())
        if match:
            return match.group(1)
    return None


def group_commits(
    commits: list[Commit], strategy: GroupStrategy = GroupStrategy.AUTO
) -> list[CommitGroup]:
    match strategy:
        case GroupStrategy.DAY:
            return group_commits_by_day(commits)
        case GroupStrategy.WORK_ITEM:
            return group_commits_by_trailer(commits)
        case GroupStrategy.AUTO:
            trailer_groups = group_commits_by_trailer(commits)
            if trailer_groups:
                return trailer_groups
            return group_commits_by_day(commits)
    raise ValueError(f"unknown group strategy: {strategy}")


def group_commits_by_trailer(commits: list[Commit]) -> list[CommitGroup]:
    """
    Group by work-item trailer; commits without one share the "untracked" group.

    Returns no groups at all when not a single commit carries a trailer.
    """
    groups: dict[str, list[Commit]] = {}
    untracked: list[Commit] = []

    for commit in commits:
        work_item = extract_work_item_trailer(commit["body"])
        if work_item is None:
            untracked.append(commit)
        else:
            groups.setdefault(work_item, []).append(commit)

    if not groups:
        return []

    sorted_groups = _to_sorted_groups(groups)
    if untracked:
        sorted_groups.append({"key": UNTRACKED_GROUP_KEY, "commits": untracked})
    return sorted_groups


def group_commits_by_day(commits: list[Commit]) -> list[CommitGroup]:
    groups: dict[str, list[Commit]] = {}
    for commit in commits:
        day = datetime_to_utc_date_str(commit["date"])
        groups.setdefault(day, []).append(commit)
    return _to_sorted_groups(groups)


def is_work_item_key(key: str) -> bool:
    if key == UNTRACKED_GROUP_KEY or _DATE_KEY_PATTERN.match(key):
        return False
    return ":" in key


def _to_sorted_groups(groups: dict[str, list[Commit]]) -> list[CommitGroup]:
    return [
        {"key": key, "commits": groups[key]}
        for key in sorted(groups, reverse=True)
    ]
