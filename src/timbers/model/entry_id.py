# SPDX-License-Identifier: MIT

from pathlib import PurePath

import pendulum

from timbers.time import datetime_to_rfc3339

type EntryId = str

ENTRY_ID_PREFIX = "tb_"
SHORT_ANCHOR_LENGTH = 6


def generate_entry_id(anchor_commit: str, timestamp: pendulum.DateTime) -> EntryId:
    """
    Build `tb_<UTC RFC3339 timestamp>_<short anchor>`.

    Pure: the same anchor and timestamp always give the same id, so a dry run
    previews exactly the id that a real write would use. No validation is done
    on the anchor; an empty one yields a degenerate id.
    """
    short_anchor = anchor_commit[:SHORT_ANCHOR_LENGTH]
    return f"{ENTRY_ID_PREFIX}{datetime_to_rfc3339(timestamp)}_{short_anchor}"


def entry_date_parts(entry_id: EntryId) -> tuple[str, ...]:
    """YYYY/MM/DD components of an id, or () if the id has an unexpected shape."""
    if len(entry_id) < 13 or not entry_id.startswith(ENTRY_ID_PREFIX):
        return ()
    date_part = entry_id[len(ENTRY_ID_PREFIX) : len(ENTRY_ID_PREFIX) + 10]
    parts = date_part.split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return ()
    return tuple(parts)


def entry_date_dir(entry_id: EntryId) -> PurePath:
    return PurePath(*entry_date_parts(entry_id))
