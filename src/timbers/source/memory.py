# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from timbers.errors import GitError, UnresolvableRefError
from timbers.model.commit import Commit, Diffstat, empty_diffstat


class InMemoryCommitSource:
    """
    Commit source over a linear history held in memory, newest commit first.

    Refs are full or abbreviated SHAs of known commits, optionally followed by
    `^` for the parent. A SHA absent from the list does not resolve.
    """

    def __init__(
        self,
        commits: list[Commit],
        diffstats: Optional[dict[str, Diffstat]] = None,
        fail_diffstat: bool = False,
        branch: str = "main",
        root: Path = Path("/repo"),
        files: Optional[dict[str, list[str]]] = None,
    ) -> None:
        self.commits = list(commits)
        self.diffstats = diffstats or {}
        self.fail_diffstat = fail_diffstat
        self.log_calls: list[tuple[str, str]] = []
        self.branch = branch
        self.root = root
        self.files = files or {}

    def repo_root(self) -> Path:
        return self.root

    def current_branch(self) -> str:
        return self.branch

    def head(self) -> str:
        if not self.commits:
            raise GitError("failed to get HEAD: repository has no commits")
        return self.commits[0]["sha"]

    def commits_reachable_from(self, sha: str) -> list[Commit]:
        index = self.__resolve(sha)
        return deepcopy(self.commits[index:])

    def log(self, from_ref: str, to_ref: str) -> list[Commit]:
        self.log_calls.append((from_ref, to_ref))
        from_index = self.__resolve(from_ref)
        to_index = self.__resolve(to_ref)
        return deepcopy(self.commits[to_index:from_index])

    def diffstat(self, from_ref: str, to_ref: str) -> Diffstat:
        if self.fail_diffstat:
            raise GitError("git command failed: diff unavailable")
        to_index = self.__resolve(to_ref)
        try:
            from_index = self.__resolve(from_ref)
        except UnresolvableRefError:
            if not from_ref.endswith("^"):
                raise
            # parent of the root commit
            from_index = self.__resolve(from_ref[:-1]) + 1

        total = empty_diffstat()
        for commit in self.commits[to_index:from_index]:
            stat = self.diffstats.get(commit["sha"])
            if stat is None:
                continue
            total["files"] += stat["files"]
            total["insertions"] += stat["insertions"]
            total["deletions"] += stat["deletions"]
        return total

    def commit_files(self, sha: str) -> Optional[list[str]]:
        files = self.files.get(sha)
        return list(files) if files is not None else None

    def __resolve(self, ref: str) -> int:
        parents = 0
        while ref.endswith("^"):
            ref = ref[:-1]
            parents += 1
        if ref == "HEAD" and self.commits:
            index = 0
        else:
            matches = [
                i
                for i, commit in enumerate(self.commits)
                if ref != "" and commit["sha"].startswith(ref)
            ]
            if len(matches) != 1:
                raise UnresolvableRefError(ref + "^" * parents)
            index = matches[0]
        index += parents
        if index >= len(self.commits):
            raise UnresolvableRefError(ref + "^" * parents)
        return index
