# SPDX-License-Identifier: MIT

import pendulum
import pytest

from conftest import sha_for
from timbers.errors import EXIT_CONFLICT, EXIT_SYSTEM_ERROR, StorageError
from timbers.repository.entry import FileEntryRepository
from timbers.repository.memory import InMemoryEntryRepository
from timbers.service.batch import create_batch_entries
from timbers.service.group import group_commits
from timbers.service.reconcile import resolve_pending
from timbers.source.memory import InMemoryCommitSource

NOW = pendulum.datetime(2026, 1, 17, 9, 30, 0, tz="UTC")


class FailingOnceRepository(InMemoryEntryRepository):
    """Rejects writes for one anchor to simulate a filesystem failure."""

    def __init__(self, failing_anchor: str) -> None:
        super().__init__()
        self.failing_anchor = failing_anchor

    def write(self, entry, force=False):
        if entry["anchor_commit"] == self.failing_anchor:
            raise StorageError("disk full")
        super().write(entry, force)


@pytest.fixture
def commits(make_commit):
    return [
        make_commit("a", subject="Wire endpoint", body="Work-item: jira:P-2"),
        make_commit("b", subject="Model change", body="Work-item: jira:P-1"),
        make_commit("c", subject="Docs"),
    ]


def test_one_entry_per_group(commits):
    source = InMemoryCommitSource(commits)
    store = InMemoryEntryRepository()

    result = create_batch_entries(
        source, store, group_commits(commits), tags=["batch"], now=NOW
    )

    assert result["status"] == "created"
    assert result["failures"] == []
    assert [ref["group_key"] for ref in result["entries"]] == [
        "jira:P-2",
        "jira:P-1",
        "untracked",
    ]
    assert store.write_count == 3

    p1 = store.get_by_id(result["entries"][1]["id"])
    assert p1["anchor_commit"] == sha_for("b")
    assert p1["work_items"] == [{"system": "jira", "id": "P-1"}]
    assert p1["tags"] == ["batch"]
    assert p1["summary"]["what"] == "Model change"


def test_dry_run_writes_nothing(commits):
    store = InMemoryEntryRepository()

    result = create_batch_entries(
        InMemoryCommitSource(commits), store, group_commits(commits), dry_run=True
    )

    assert result["status"] == "dry_run"
    assert len(result["entries"]) == 3
    assert store.write_count == 0


def test_failed_group_does_not_stop_siblings(commits):
    store = FailingOnceRepository(failing_anchor=sha_for("b"))

    result = create_batch_entries(
        InMemoryCommitSource(commits), store, group_commits(commits), now=NOW
    )

    assert [ref["group_key"] for ref in result["entries"]] == ["jira:P-2", "untracked"]
    assert result["failures"] == [
        {"group_key": "jira:P-1", "error": "disk full", "exit_code": EXIT_SYSTEM_ERROR}
    ]
    assert store.write_count == 2


def test_existing_entry_is_reported_as_conflict(commits):
    source = InMemoryCommitSource(commits)
    store = InMemoryEntryRepository()
    groups = group_commits(commits)
    create_batch_entries(source, store, groups, now=NOW)

    result = create_batch_entries(source, store, groups, now=NOW)

    assert result["entries"] == []
    assert {failure["exit_code"] for failure in result["failures"]} == {EXIT_CONFLICT}


def test_batch_entries_on_disk_cover_every_grouped_commit(tmp_path, make_commit):
    history = [
        make_commit("c3", date="2026-01-16T10:00:00Z"),
        make_commit("c2", date="2026-01-15T15:00:00Z"),
        make_commit("c1", date="2026-01-15T09:00:00Z"),
    ]
    source = InMemoryCommitSource(history)
    store = FileEntryRepository(tmp_path / ".timbers")

    result = create_batch_entries(source, store, group_commits(history), now=NOW)
    pending = resolve_pending(source, store.list_entries())

    assert [ref["anchor"] for ref in result["entries"]] == [sha_for("c3"), sha_for("c2")]
    assert pending["commits"] == []
    assert pending["latest"]["anchor_commit"] == sha_for("c3")
