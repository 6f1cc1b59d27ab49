# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, Protocol

from timbers.model.commit import Commit, Diffstat


class CommitSource(Protocol):
    def repo_root(self) -> Path: ...

    def current_branch(self) -> str: ...

    def head(self) -> str: ...

    def commits_reachable_from(self, sha: str) -> list[Commit]: ...

    def log(self, from_ref: str, to_ref: str) -> list[Commit]:
        """
        Commits in from_ref..to_ref, newest first (from_ref exclusive).

        Raises UnresolvableRefError if either ref cannot be resolved.
        """
        ...

    def diffstat(self, from_ref: str, to_ref: str) -> Diffstat:
        """
        Change totals for from_ref..to_ref.

        `root^` diffs against the empty tree; any other unresolvable ref
        raises UnresolvableRefError.
        """
        ...

    def commit_files(self, sha: str) -> Optional[list[str]]:
        """Paths touched by a commit, relative to the repository root; None if unknown."""
        ...
