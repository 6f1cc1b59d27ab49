# SPDX-License-Identifier: MIT

from typing import Optional, Protocol

from timbers.model.entry import Entry
from timbers.model.entry_id import EntryId
from timbers.model.result import ListStats


class EntryStore(Protocol):
    def dir_exists(self) -> bool: ...

    def ensure_dir(self) -> bool:
        """Create the ledger location; False when it already existed."""
        ...

    def list_entries(self) -> list[Entry]: ...

    def list_entries_with_stats(self) -> tuple[list[Entry], ListStats]: ...

    def get_by_id(self, id: EntryId) -> Entry:
        """Raises EntryNotFoundError when no entry has this id."""
        ...

    def get_latest(self) -> Optional[Entry]:
        """Most recently created entry, or None for an empty store."""
        ...

    def exists(self, id: EntryId) -> bool: ...

    def write(self, entry: Entry, force: bool = False) -> None:
        """Raises EntryExistsError if the id is taken and force is False."""
        ...


def latest_entry(entries: list[Entry]) -> Optional[Entry]:
    if not entries:
        return None
    return max(entries, key=lambda entry: entry["created_at"])
