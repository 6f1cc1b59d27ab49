# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from timbers.model.entry import KIND_ENTRY, SCHEMA_VERSION, Entry
from timbers.time import now_utc


def get_entry_template(created_at: Optional[pendulum.DateTime] = None) -> Entry:
    now = created_at if created_at is not None else now_utc()
    return {
        "schema": SCHEMA_VERSION,
        "kind": KIND_ENTRY,
        "id": "",  # Must be set
        "created_at": now,
        "updated_at": now,
        "anchor_commit": "",  # Must be set
        "commits": [],
        "range": None,
        "diffstat": None,
        "summary": {"what": "", "why": "", "how": ""},
        "tags": [],
        "work_items": [],
        "notes": None,
    }
