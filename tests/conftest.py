# SPDX-License-Identifier: MIT

from typing import Callable, Optional

import pendulum
import pytest

from timbers.model.commit import Commit
from timbers.model.entry import Entry, WorkItem
from timbers.model.entry_id import generate_entry_id
from timbers.template.entry import get_entry_template


def sha_for(name: str) -> str:
    """Deterministic 40-character SHA for a short commit name like "c1"."""
    return (name * 40)[:40]


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    def _make_commit(
        name: str,
        subject: Optional[str] = None,
        body: str = "",
        date: str = "2026-01-15T12:00:00Z",
        author: str = "Ada Lovelace",
    ) -> Commit:
        sha = sha_for(name)
        return {
            "sha": sha,
            "short_sha": sha[:7],
            "subject": subject if subject is not None else f"change {name}",
            "body": body,
            "author": author,
            "author_email": "ada@example.com",
            "date": pendulum.parse(date, tz="UTC"),  # type: ignore[typeddict-item]
        }

    return _make_commit


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    def _make_entry(
        anchor: str,
        created_at: str = "2026-01-15T12:00:00Z",
        commits: Optional[list[str]] = None,
        what: str = "Did a thing",
        why: str = "It was needed",
        how: str = "Carefully",
        tags: Optional[list[str]] = None,
        work_items: Optional[list[WorkItem]] = None,
    ) -> Entry:
        timestamp = pendulum.parse(created_at, tz="UTC")
        entry = get_entry_template(timestamp)  # type: ignore[arg-type]
        entry["id"] = generate_entry_id(anchor, timestamp)  # type: ignore[arg-type]
        entry["anchor_commit"] = anchor
        entry["commits"] = commits if commits is not None else [anchor]
        entry["diffstat"] = {"files": 1, "insertions": 2, "deletions": 3}
        entry["summary"] = {"what": what, "why": why, "how": how}
        entry["tags"] = tags or []
        entry["work_items"] = work_items or []
        return entry

    return _make_entry
