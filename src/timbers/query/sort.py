# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from timbers.model.entry import Entry


def sort_entries_by_created_at(
    entries: list[Entry], descending: bool = True
) -> list[Entry]:
    sorted_entries = deepcopy(entries)
    sorted_entries.sort(key=lambda entry: entry["created_at"], reverse=descending)
    return sorted_entries


def limit(entries: list[Entry], count: Optional[int]) -> list[Entry]:
    if count is None:
        return entries
    return entries[:count]
