# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timbers import time
from timbers.errors import EntryExistsError, EntryNotFoundError, StorageError
from timbers.model.entry import SCHEMA_VERSION, Entry
from timbers.model.entry_id import EntryId, entry_date_dir
from timbers.model.result import ListStats, empty_list_stats
from timbers.repository.entry_store import latest_entry
from timbers.repository.validate import validate_entry

logger = logging.getLogger(__name__)

ENTRY_SUFFIX = ".yaml"

type WriteHook = Callable[[Path, Entry], None]


class NotTimbersEntryError(ValueError):
    pass


class FileEntryRepository:
    """
    One YAML file per entry at <root>/YYYY/MM/DD/<id>.yaml.

    `on_write` runs after each successful write, e.g. to stage and commit the
    file.
    """

    def __init__(self, root: Path, on_write: Optional[WriteHook] = None) -> None:
        self.root = root
        self.on_write = on_write

    def dir_exists(self) -> bool:
        return self.root.is_dir()

    def ensure_dir(self) -> bool:
        if self.root.is_dir():
            return False
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / ".gitkeep").touch()
        return True

    def entry_path(self, id: EntryId) -> Path:
        return self.root / entry_date_dir(id) / f"{id}{ENTRY_SUFFIX}"

    def exists(self, id: EntryId) -> bool:
        return self.entry_path(id).is_file()

    def list_entries(self) -> list[Entry]:
        entries, _ = self.list_entries_with_stats()
        return entries

    def list_entries_with_stats(self) -> tuple[list[Entry], ListStats]:
        stats = empty_list_stats()
        entries: list[Entry] = []
        if not self.root.is_dir():
            return entries, stats

        for file_path in sorted(self.root.rglob(f"*{ENTRY_SUFFIX}")):
            if not file_path.is_file():
                continue
            stats["total"] += 1
            try:
                entry = self.__read_file(file_path)
            except NotTimbersEntryError:
                logger.debug("skipping non-timbers file %s", file_path)
                stats["skipped"] += 1
                stats["not_timbers"] += 1
                continue
            except (YAMLError, KeyError, TypeError, ValueError) as e:
                logger.warning("skipping unreadable entry file %s: %s", file_path, e)
                stats["skipped"] += 1
                stats["parse_errors"] += 1
                continue
            entries.append(entry)
            stats["parsed"] += 1

        return entries, stats

    def get_by_id(self, id: EntryId) -> Entry:
        file_path = self.entry_path(id)
        if not file_path.is_file():
            raise EntryNotFoundError(id)
        try:
            return self.__read_file(file_path)
        except OSError as e:
            raise StorageError(f"failed to read entry file {file_path}: {e}")
        except (YAMLError, KeyError, TypeError, ValueError) as e:
            raise StorageError(f"failed to parse entry {id}: {e}")

    def get_latest(self) -> Optional[Entry]:
        return latest_entry(self.list_entries())

    def write(self, entry: Entry, force: bool = False) -> None:
        validate_entry(entry)

        file_path = self.entry_path(entry["id"])
        if not force and file_path.exists():
            raise EntryExistsError(entry["id"])

        serializable_entry = convert_entry_for_serialization(deepcopy(entry))
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            self.__atomic_write(
                file_path, dump(serializable_entry, Dumper=Dumper, sort_keys=False)
            )
        except OSError as e:
            raise StorageError(f"failed to write entry {entry['id']}: {e}")

        if self.on_write is not None:
            self.on_write(file_path, entry)

    def __read_file(self, file_path: Path) -> Entry:
        raw_entry = load(file_path.read_text(), Loader=Loader)
        if not isinstance(raw_entry, dict) or raw_entry.get("schema") != SCHEMA_VERSION:
            raise NotTimbersEntryError(str(file_path))
        return convert_entry_for_deserialization(raw_entry)

    def __atomic_write(self, file_path: Path, text: str) -> None:
        descriptor, temp_name = tempfile.mkstemp(
            dir=file_path.parent, prefix=".tmp-", suffix=ENTRY_SUFFIX
        )
        try:
            with os.fdopen(descriptor, "w") as temp_file:
                temp_file.write(text)
            os.replace(temp_name, file_path)
        finally:
            if os.path.exists(temp_name):
                os.remove(temp_name)


def convert_entry_for_serialization(entry: Entry) -> dict[str, Any]:
    serializable_entry = cast(dict[str, Any], entry)
    serializable_entry["created_at"] = time.datetime_to_iso_str(entry["created_at"])
    serializable_entry["updated_at"] = time.datetime_to_iso_str(entry["updated_at"])
    if serializable_entry.get("range") is None:
        serializable_entry.pop("range", None)
    if serializable_entry.get("diffstat") is None:
        serializable_entry.pop("diffstat", None)
    if serializable_entry.get("notes") is None:
        serializable_entry.pop("notes", None)
    return serializable_entry


def convert_entry_for_deserialization(raw_entry: dict[str, Any]) -> Entry:
    deserializable_entry = raw_entry
    deserializable_entry["created_at"] = time.datetime_from_str(
        str(raw_entry["created_at"])
    )
    deserializable_entry["updated_at"] = time.datetime_from_str(
        str(raw_entry["updated_at"])
    )
    deserializable_entry["commits"] = list(raw_entry.get("commits") or [])
    deserializable_entry["range"] = raw_entry.get("range")
    deserializable_entry["diffstat"] = raw_entry.get("diffstat")
    deserializable_entry["tags"] = list(raw_entry.get("tags") or [])
    deserializable_entry["work_items"] = list(raw_entry.get("work_items") or [])
    deserializable_entry["notes"] = raw_entry.get("notes")
    if not deserializable_entry.get("anchor_commit"):
        raise KeyError("anchor_commit")
    return cast(Entry, deserializable_entry)
