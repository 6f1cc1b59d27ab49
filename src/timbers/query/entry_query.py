# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from timbers.errors import UserError
from timbers.model.entry import Entry
from timbers.query.filter import (
    And,
    CreatedSince,
    CreatedUntil,
    HasAnyTag,
    HasWorkItem,
    TouchesCommits,
)
from timbers.query.sort import limit, sort_entries_by_created_at
from timbers.service.entry import parse_range
from timbers.source.commit_source import CommitSource


class EntryQuery(TypedDict, total=False):
    last: Optional[int]
    since: Optional[pendulum.DateTime]
    until: Optional[pendulum.DateTime]
    tags: Optional[list[str]]
    range: Optional[str]  # A..B
    work_item: Optional[str]  # system or system:id


def is_empty_query(query: EntryQuery) -> bool:
    return all(
        query.get(key) in (None, [])
        for key in ("last", "since", "until", "tags", "range", "work_item")
    )


def run_query(
    entries: list[Entry],
    query: EntryQuery,
    source: Optional[CommitSource] = None,
) -> list[Entry]:
    """
    Filter entries, newest first, applying `last` after every other filter.

    A `range` query keeps entries documenting any commit in A..B and needs a
    commit source to resolve the range.
    """
    last = query.get("last")
    if last is not None and last <= 0:
        raise UserError("--last must be a positive integer")

    predicate = And()
    since = query.get("since")
    if since is not None:
        predicate.add_predicate(CreatedSince(since))
    until = query.get("until")
    if until is not None:
        predicate.add_predicate(CreatedUntil(until))
    tags = query.get("tags")
    if tags:
        predicate.add_predicate(HasAnyTag(tags))
    work_item = query.get("work_item")
    if work_item:
        system, _, item_id = work_item.partition(":")
        predicate.add_predicate(HasWorkItem(system, item_id or None))
    range_str = query.get("range")
    if range_str:
        from_ref, to_ref = parse_range(range_str)
        if source is None:
            raise UserError("a commit source is required to query by --range")
        commits = source.log(from_ref, to_ref)
        predicate.add_predicate(TouchesCommits(commit["sha"] for commit in commits))

    matching = predicate.filter(entries)
    return limit(sort_entries_by_created_at(matching), last)
