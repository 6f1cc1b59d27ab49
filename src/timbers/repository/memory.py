# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from timbers.errors import EntryExistsError, EntryNotFoundError
from timbers.model.entry import Entry
from timbers.model.entry_id import EntryId
from timbers.model.result import ListStats, empty_list_stats
from timbers.repository.entry_store import latest_entry
from timbers.repository.validate import validate_entry


class InMemoryEntryRepository:
    def __init__(self, entries: Optional[list[Entry]] = None) -> None:
        self._entries: dict[EntryId, Entry] = {}
        for entry in entries or []:
            self._entries[entry["id"]] = deepcopy(entry)
        self.write_count = 0
        self.initialized = bool(self._entries)

    def dir_exists(self) -> bool:
        return self.initialized

    def ensure_dir(self) -> bool:
        if self.initialized:
            return False
        self.initialized = True
        return True

    def list_entries(self) -> list[Entry]:
        return deepcopy(list(self._entries.values()))

    def list_entries_with_stats(self) -> tuple[list[Entry], ListStats]:
        entries = self.list_entries()
        stats = empty_list_stats()
        stats["total"] = len(entries)
        stats["parsed"] = len(entries)
        return entries, stats

    def get_by_id(self, id: EntryId) -> Entry:
        if id not in self._entries:
            raise EntryNotFoundError(id)
        return deepcopy(self._entries[id])

    def get_latest(self) -> Optional[Entry]:
        return latest_entry(self.list_entries())

    def exists(self, id: EntryId) -> bool:
        return id in self._entries

    def write(self, entry: Entry, force: bool = False) -> None:
        validate_entry(entry)
        if not force and entry["id"] in self._entries:
            raise EntryExistsError(entry["id"])
        self._entries[entry["id"]] = deepcopy(entry)
        self.initialized = True
        self.write_count += 1
