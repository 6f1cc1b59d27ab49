# SPDX-License-Identifier: MIT

import pytest

from conftest import sha_for
from timbers.service.group import (
    UNTRACKED_GROUP_KEY,
    GroupStrategy,
    extract_work_item_trailer,
    group_commits,
    group_commits_by_day,
    group_commits_by_trailer,
)


def keys(groups):
    return [group["key"] for group in groups]


def group_shas(group):
    return [commit["sha"] for commit in group["commits"]]


def test_trailer_groups_with_untracked_catch_all(make_commit):
    commits = [
        make_commit("a", body="Work-item: jira:P-1"),
        make_commit("b", body="Work-item: jira:P-1"),
        make_commit("c", body="no trailer"),
    ]

    groups = group_commits(commits)

    assert keys(groups) == ["jira:P-1", UNTRACKED_GROUP_KEY]
    assert group_shas(groups[0]) == [sha_for("a"), sha_for("b")]
    assert group_shas(groups[1]) == [sha_for("c")]


def test_day_groups_without_trailers(make_commit):
    commits = [
        make_commit("a", date="2026-01-16T09:00:00Z"),
        make_commit("b", date="2026-01-15T18:00:00Z"),
        make_commit("c", date="2026-01-15T08:00:00Z"),
    ]

    groups = group_commits(commits)

    assert keys(groups) == ["2026-01-16", "2026-01-15"]
    assert group_shas(groups[0]) == [sha_for("a")]
    assert group_shas(groups[1]) == [sha_for("b"), sha_for("c")]


def test_day_grouping_uses_utc_calendar_date(make_commit):
    # 2026-01-15 23:30 in New York is already the 16th in UTC
    commits = [make_commit("a", date="2026-01-15T23:30:00-05:00")]

    assert keys(group_commits_by_day(commits)) == ["2026-01-16"]


def test_any_trailer_suppresses_day_groups(make_commit):
    commits = [
        make_commit("a", date="2026-01-17T09:00:00Z"),
        make_commit("b", date="2026-01-16T09:00:00Z", body="Work-item: gh:42"),
        make_commit("c", date="2026-01-15T09:00:00Z"),
    ]

    groups = group_commits(commits)

    assert keys(groups) == ["gh:42", UNTRACKED_GROUP_KEY]
    assert group_shas(groups[1]) == [sha_for("a"), sha_for("c")]


def test_groups_partition_the_input(make_commit):
    commits = [
        make_commit("a", date="2026-01-17T09:00:00Z"),
        make_commit("b", date="2026-01-16T09:00:00Z"),
        make_commit("c", date="2026-01-16T08:00:00Z"),
        make_commit("d", date="2026-01-14T08:00:00Z"),
    ]

    groups = group_commits(commits)
    grouped = [sha for group in groups for sha in group_shas(group)]

    assert sorted(grouped) == sorted(commit["sha"] for commit in commits)
    assert len(grouped) == len(set(grouped))


def test_multiple_work_items_sort_descending(make_commit):
    commits = [
        make_commit("a", body="Work-item: jira:P-1"),
        make_commit("b", body="Work-item: jira:P-2"),
    ]

    assert keys(group_commits_by_trailer(commits)) == ["jira:P-2", "jira:P-1"]


def test_trailer_grouping_without_trailers_is_empty(make_commit):
    assert group_commits_by_trailer([make_commit("a")]) == []


def test_work_item_strategy_never_falls_back_to_days(make_commit):
    assert group_commits([make_commit("a")], GroupStrategy.WORK_ITEM) == []


def test_day_strategy_ignores_trailers(make_commit):
    commits = [make_commit("a", body="Work-item: jira:P-1", date="2026-01-15T09:00:00Z")]

    assert keys(group_commits(commits, GroupStrategy.DAY)) == ["2026-01-15"]


def test_empty_input_gives_no_groups():
    assert group_commits([]) == []


@pytest.mark.parametrize(
    "body,expected",
    [
        ("Work-item: jira:P-1", "jira:P-1"),
        ("work-item:   gh:42   ", "gh:42"),
        ("Fix thing\n\n  WORK-ITEM: linear:ABC-9", "linear:ABC-9"),
        ("Work-item: first:1\nWork-item: second:2", "first:1"),
        ("Work-item: nocolon", None),
        ("Work-item: jira:P-1 extra", None),
        ("See Work-item: jira:P-1", None),
        ("", None),
    ],
)
def test_extract_work_item_trailer(body, expected):
    assert extract_work_item_trailer(body) == expected


def test_first_valid_trailer_wins_after_malformed_one(make_commit):
    commits = [make_commit("a", body="Work-item: bogus\nWork-item: jira:P-7")]

    assert keys(group_commits(commits)) == ["jira:P-7"]
