# SPDX-License-Identifier: MIT

import pendulum
import pytest

from conftest import sha_for
from timbers.errors import UnresolvableRefError, UserError
from timbers.query.entry_query import is_empty_query, run_query
from timbers.query.filter import And, HasAnyTag, HasWorkItem, Not, Or
from timbers.source.memory import InMemoryCommitSource


@pytest.fixture
def entries(make_entry):
    return [
        make_entry(
            sha_for("c1"),
            created_at="2026-01-10T10:00:00Z",
            tags=["api"],
            work_items=[{"system": "jira", "id": "P-1"}],
        ),
        make_entry(
            sha_for("c2"),
            created_at="2026-01-12T10:00:00Z",
            tags=["docs"],
        ),
        make_entry(
            sha_for("c4"),
            created_at="2026-01-14T10:00:00Z",
            commits=[sha_for("c4"), sha_for("c3")],
            tags=["api", "perf"],
        ),
    ]


def anchors(entries):
    return [entry["anchor_commit"] for entry in entries]


def test_last_returns_newest_first(entries):
    assert anchors(run_query(entries, {"last": 2})) == [sha_for("c4"), sha_for("c2")]


def test_last_must_be_positive(entries):
    with pytest.raises(UserError):
        run_query(entries, {"last": 0})


def test_since_and_until(entries):
    result = run_query(
        entries,
        {
            "since": pendulum.datetime(2026, 1, 11, tz="UTC"),
            "until": pendulum.datetime(2026, 1, 13, tz="UTC"),
        },
    )

    assert anchors(result) == [sha_for("c2")]


def test_last_applies_after_filters(entries):
    result = run_query(entries, {"tags": ["api"], "last": 1})

    assert anchors(result) == [sha_for("c4")]


def test_tags_match_any(entries):
    result = run_query(entries, {"tags": ["docs", "perf"]})

    assert anchors(result) == [sha_for("c4"), sha_for("c2")]


def test_range_keeps_entries_touching_commits(entries, make_commit):
    source = InMemoryCommitSource(
        [make_commit(name) for name in ("c4", "c3", "c2", "c1")]
    )

    result = run_query(entries, {"range": f"{sha_for('c2')}..{sha_for('c3')}"}, source)

    assert anchors(result) == [sha_for("c4")]


def test_range_with_unknown_ref(entries, make_commit):
    source = InMemoryCommitSource([make_commit("c1")])

    with pytest.raises(UnresolvableRefError):
        run_query(entries, {"range": "deadbeef..HEAD"}, source)


def test_malformed_range(entries):
    with pytest.raises(UserError):
        run_query(entries, {"range": "nope"}, InMemoryCommitSource([]))


def test_range_needs_a_source(entries):
    with pytest.raises(UserError):
        run_query(entries, {"range": "a..b"})


def test_is_empty_query():
    assert is_empty_query({})
    assert is_empty_query({"last": None, "tags": []})
    assert not is_empty_query({"last": 3})


def test_predicate_composition(entries):
    predicate = Or([HasWorkItem("jira", "P-1"), And([HasAnyTag(["perf"]), Not(HasAnyTag(["docs"]))])])

    assert anchors(predicate.filter(entries)) == [sha_for("c1"), sha_for("c4")]


def test_has_work_item_by_system_only(entries):
    assert anchors(HasWorkItem("jira").filter(entries)) == [sha_for("c1")]
    assert HasWorkItem("jira", "P-9").filter(entries) == []


def test_work_item_query(entries):
    assert anchors(run_query(entries, {"work_item": "jira:P-1"})) == [sha_for("c1")]
    assert anchors(run_query(entries, {"work_item": "jira"})) == [sha_for("c1")]
    assert run_query(entries, {"work_item": "gh"}) == []
