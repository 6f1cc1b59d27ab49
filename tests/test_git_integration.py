# SPDX-License-Identifier: MIT

import json
import shutil
import subprocess

import pytest
from typer.testing import CliRunner

from timbers.configuration import get_default_configuration
from timbers.errors import UnresolvableRefError
from timbers.service.reconcile import resolve_pending
from timbers.source.git import GitCommitSource
from timbers.terminal.app import app
from timbers.terminal.context import AppContext
from timbers.view.output import Output

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(repo, *args):
    return subprocess.run(
        ["git", "-C", str(repo), *args], check=True, capture_output=True, text=True
    ).stdout.strip()


def commit_file(repo, name, content, *messages):
    (repo / name).write_text(content)
    git(repo, "add", name)
    message_args = []
    for message in messages:
        message_args += ["-m", message]
    git(repo, "commit", *message_args)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def repo(tmp_path):
    git(tmp_path, "init", "-q")
    git(tmp_path, "config", "user.name", "Ada Lovelace")
    git(tmp_path, "config", "user.email", "ada@example.com")
    git(tmp_path, "config", "commit.gpgsign", "false")
    return tmp_path


def test_git_commit_source(repo):
    first = commit_file(repo, "a.txt", "one\n", "Initial")
    second = commit_file(
        repo, "b.txt", "two\nthree\n", "Add b", "Because.\n\nWork-item: jira:P-1"
    )
    source = GitCommitSource(repo)

    assert source.is_repo()
    assert source.head() == second
    assert [commit["sha"] for commit in source.commits_reachable_from(second)] == [
        second,
        first,
    ]

    commits = source.log(first, second)
    assert [commit["sha"] for commit in commits] == [second]
    assert commits[0]["subject"] == "Add b"
    assert "Work-item: jira:P-1" in commits[0]["body"]

    assert source.diffstat(first, second) == {"files": 1, "insertions": 2, "deletions": 0}
    # root commit diffs against the empty tree
    assert source.diffstat(f"{first}^", second)["files"] == 2

    with pytest.raises(UnresolvableRefError):
        source.log("0" * 40, second)
    with pytest.raises(UnresolvableRefError):
        source.diffstat("0" * 40, second)

    assert source.commit_files(second) == ["b.txt"]
    assert source.commit_files(first) == ["a.txt"]


def test_not_a_repository(tmp_path):
    assert not GitCommitSource(tmp_path).is_repo()


def test_log_writes_and_commits_entry(repo):
    commit_file(repo, "a.txt", "one\n", "Initial")
    anchor = commit_file(repo, "b.txt", "two\n", "Add b")
    app_context = AppContext(get_default_configuration(), Output(color=False), folder=repo)

    result = CliRunner().invoke(
        app,
        ["--json", "log", "Add b", "--why", "Needed", "--how", "Wrote it"],
        obj=app_context,
    )

    assert result.exit_code == 0, result.output
    entry_id = json.loads(result.stdout)["id"]
    entry_files = list((repo / ".timbers").rglob(f"{entry_id}.yaml"))
    assert len(entry_files) == 1
    assert git(repo, "log", "-1", "--format=%s") == f"timbers: document {entry_id}"
    assert git(repo, "status", "--porcelain") == ""

    source = GitCommitSource(repo)
    entries = app_context.get_repository().list_entries()
    ledger_commit = git(repo, "rev-parse", "HEAD")
    assert source.commit_files(ledger_commit)[0].startswith(".timbers/")

    pending = resolve_pending(source, entries, ledger_dir=".timbers")
    assert pending["commits"] == []

    unfiltered = resolve_pending(source, entries)
    assert [commit["sha"] for commit in unfiltered["commits"]] == [ledger_commit]
    assert anchor not in [commit["sha"] for commit in unfiltered["commits"]]

    caught_up = CliRunner().invoke(app, ["--json", "pending"], obj=app_context)
    assert caught_up.exit_code == 0, caught_up.output
    assert json.loads(caught_up.stdout)["count"] == 0
