# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from timbers.errors import TimbersError
from timbers.model.commit import CommitGroup
from timbers.model.result import BatchResult
from timbers.repository.entry_store import EntryStore
from timbers.service.entry import EntryMode, build_entry
from timbers.source.commit_source import CommitSource
from timbers.time import now_utc

logger = logging.getLogger(__name__)


def create_batch_entries(
    source: CommitSource,
    store: EntryStore,
    groups: list[CommitGroup],
    tags: Optional[list[str]] = None,
    dry_run: bool = False,
    now: Optional[pendulum.DateTime] = None,
) -> BatchResult:
    """
    Build and store one auto-documented entry per commit group.

    Each group stands alone: a failure is recorded in `failures` and the
    remaining groups are still attempted.
    """
    created_at = now if now is not None else now_utc()
    result: BatchResult = {
        "status": "dry_run" if dry_run else "created",
        "entries": [],
        "failures": [],
    }

    for group in groups:
        try:
            entry = build_entry(
                source,
                group,
                {},
                mode=EntryMode.AUTO,
                tags=tags,
                now=created_at,
            )
            if not dry_run:
                store.write(entry, force=False)
        except TimbersError as e:
            logger.debug("batch group %s failed: %s", group["key"], e)
            result["failures"].append(
                {"group_key": group["key"], "error": e.message, "exit_code": e.exit_code}
            )
            continue

        result["entries"].append(
            {
                "id": entry["id"],
                "anchor": entry["anchor_commit"],
                "group_key": group["key"],
                "what": entry["summary"]["what"],
            }
        )

    return result
