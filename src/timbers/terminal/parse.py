# SPDX-License-Identifier: MIT

from typing import Optional

from timbers.query.entry_query import EntryQuery
from timbers.time import parse_since_value, parse_until_value


def parse_entry_query(
    last: Optional[int],
    since: Optional[str],
    until: Optional[str],
    tags: Optional[list[str]],
    range_str: Optional[str],
    work_item: Optional[str] = None,
) -> EntryQuery:
    return {
        "last": last,
        "since": parse_since_value(since) if since else None,
        "until": parse_until_value(until) if until else None,
        "tags": tags or None,
        "range": range_str or None,
        "work_item": work_item or None,
    }
