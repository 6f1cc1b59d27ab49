# SPDX-License-Identifier: MIT

import logging
import re
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

from timbers.errors import GitError, UnresolvableRefError
from timbers.model.commit import Commit, Diffstat, empty_diffstat
from timbers.time import datetime_from_timestamp

logger = logging.getLogger(__name__)

COMMIT_SEPARATOR = "---COMMIT-BOUNDARY---"
FIELD_SEPARATOR = "---FIELD---"

# SHA, short SHA, subject, body, author, author email, unix timestamp
LOG_FORMAT = (
    FIELD_SEPARATOR.join(["%H", "%h", "%s", "%b", "%an", "%ae", "%at"])
    + COMMIT_SEPARATOR
)

# Git's empty tree object, used as the diff base for root commits
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

_DIFFSTAT_PATTERN = re.compile(
    r"(\d+)\s+files?\s+changed"
    r"(?:,\s+(\d+)\s+insertions?\(\+\))?"
    r"(?:,\s+(\d+)\s+deletions?\(-\))?"
)


class GitCommand(Enum):
    HEAD = 0
    REPO_ROOT = 1
    CURRENT_BRANCH = 2
    VERIFY = 3
    LOG = 4
    DIFF_STAT = 5
    ADD = 6
    COMMIT = 7
    GIT_DIR = 8
    DIFF_TREE = 9


class GitCommitSource:
    """Commit source backed by the git binary, run against `folder`."""

    def __init__(self, folder: Optional[Path] = None) -> None:
        self.folder = (folder or Path.cwd()).resolve()

    def is_repo(self) -> bool:
        try:
            self.__execute_git_command(GitCommand.GIT_DIR)
        except GitError:
            return False
        return True

    def repo_root(self) -> Path:
        try:
            return Path(self.__execute_git_command(GitCommand.REPO_ROOT))
        except GitError:
            raise GitError("not in a git repository")

    def current_branch(self) -> str:
        return self.__execute_git_command(GitCommand.CURRENT_BRANCH)

    def head(self) -> str:
        try:
            return self.__execute_git_command(GitCommand.HEAD)
        except GitError as e:
            raise GitError(f"failed to get HEAD: {e.message}")

    def sha_exists(self, ref: str) -> bool:
        if ref == "":
            return False
        try:
            self.__execute_git_command(GitCommand.VERIFY, ref=ref)
        except GitError:
            return False
        return True

    def commits_reachable_from(self, sha: str) -> list[Commit]:
        output = self.__execute_git_command(GitCommand.LOG, ref=sha)
        return parse_commits(output)

    def log(self, from_ref: str, to_ref: str) -> list[Commit]:
        for ref in (from_ref, to_ref):
            if not self.sha_exists(ref):
                raise UnresolvableRefError(ref)
        output = self.__execute_git_command(GitCommand.LOG, ref=f"{from_ref}..{to_ref}")
        return parse_commits(output)

    def diffstat(self, from_ref: str, to_ref: str) -> Diffstat:
        resolved_from = from_ref
        if not self.sha_exists(from_ref):
            # only the parent of a root commit falls back to the empty tree
            base = from_ref.removesuffix("^")
            if base == from_ref or not self.sha_exists(base):
                raise UnresolvableRefError(from_ref)
            resolved_from = EMPTY_TREE_SHA
        output = self.__execute_git_command(
            GitCommand.DIFF_STAT, ref=f"{resolved_from}..{to_ref}"
        )
        return parse_diffstat(output)

    def commit_files(self, sha: str) -> Optional[list[str]]:
        output = self.__execute_git_command(GitCommand.DIFF_TREE, ref=sha)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def stage(self, path: Path) -> None:
        self.__execute_git_command(GitCommand.ADD, path=path)

    def commit_path(self, path: Path, message: str) -> None:
        self.__execute_git_command(GitCommand.COMMIT, path=path, message=message)

    def __fail_if_git_not_available(self) -> None:
        git_available = shutil.which("git")
        if git_available is None:
            raise GitError("git not found: ensure git is installed and in PATH")

    def __execute_git_command(
        self,
        command: GitCommand,
        ref: Optional[str] = None,
        path: Optional[Path] = None,
        message: Optional[str] = None,
    ) -> str:
        self.__fail_if_git_not_available()
        git_command: list[str] = ["git", "-C", str(self.folder)]

        match command:
            case GitCommand.HEAD:
                git_command += ["rev-parse", "HEAD"]
            case GitCommand.REPO_ROOT:
                git_command += ["rev-parse", "--show-toplevel"]
            case GitCommand.CURRENT_BRANCH:
                git_command += ["rev-parse", "--abbrev-ref", "HEAD"]
            case GitCommand.GIT_DIR:
                git_command += ["rev-parse", "--git-dir"]
            case GitCommand.VERIFY:
                git_command += ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"]
            case GitCommand.LOG:
                git_command += ["log", f"--pretty=format:{LOG_FORMAT}", ref or "HEAD", "--"]
            case GitCommand.DIFF_STAT:
                git_command += ["diff", "--stat", ref or "HEAD"]
            case GitCommand.DIFF_TREE:
                git_command += ["diff-tree", "--no-commit-id", "--name-only", "-r", "--root", ref or "HEAD"]
            case GitCommand.ADD:
                git_command += ["add", "--", str(path)]
            case GitCommand.COMMIT:
                git_command += ["commit", "-m", message or "", "--", str(path)]

        logger.debug("running %s", " ".join(git_command))
        result = subprocess.run(git_command, text=True, capture_output=True)
        if result.returncode != 0:
            error_message = result.stderr.strip() or f"exit status {result.returncode}"
            raise GitError(f"git command failed: {error_message}")
        return result.stdout.strip()


def parse_commits(output: str) -> list[Commit]:
    commits: list[Commit] = []
    for raw_commit in output.split(COMMIT_SEPARATOR):
        raw_commit = raw_commit.strip()
        if raw_commit == "":
            continue
        commit = parse_commit_fields(raw_commit)
        if commit is not None:
            commits.append(commit)
    return commits


def parse_commit_fields(raw_commit: str) -> Optional[Commit]:
    fields = raw_commit.split(FIELD_SEPARATOR)
    if len(fields) < 7:
        logger.debug("skipping malformed log record: %r", raw_commit[:80])
        return None

    try:
        timestamp = int(fields[6].strip())
    except ValueError:
        timestamp = 0

    return {
        "sha": fields[0].strip(),
        "short_sha": fields[1].strip(),
        "subject": fields[2].strip(),
        "body": fields[3].strip(),
        "author": fields[4].strip(),
        "author_email": fields[5].strip(),
        "date": datetime_from_timestamp(timestamp),
    }


def parse_diffstat(output: str) -> Diffstat:
    """Read the `N files changed, X insertions(+), Y deletions(-)` summary line."""
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines:
        return empty_diffstat()

    match = _DIFFSTAT_PATTERN.search(lines[-1])
    if match is None:
        return empty_diffstat()

    return {
        "files": int(match.group(1)),
        "insertions": int(match.group(2) or 0),
        "deletions": int(match.group(3) or 0),
    }
