# SPDX-License-Identifier: MIT

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

from timbers.errors import StorageError
from timbers.model.entry import Entry
from timbers.repository.entry import convert_entry_for_serialization


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    return convert_entry_for_serialization(deepcopy(entry))


def format_json(entries: list[Entry]) -> str:
    return json.dumps([entry_to_dict(entry) for entry in entries], indent=2)


def write_json_files(entries: list[Entry], directory: Path) -> list[Path]:
    written: list[Path] = []
    for entry in entries:
        file_path = directory / f"{entry['id']}.json"
        try:
            file_path.write_text(json.dumps(entry_to_dict(entry), indent=2))
        except OSError as e:
            raise StorageError(f"failed to write file {file_path}: {e}")
        written.append(file_path)
    return written
