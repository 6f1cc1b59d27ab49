# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum


class Commit(TypedDict):
    sha: str
    short_sha: str
    subject: str
    body: str
    author: str
    author_email: str
    date: pendulum.DateTime


class Diffstat(TypedDict):
    files: int
    insertions: int
    deletions: int


class CommitGroup(TypedDict):
    # work-item reference (system:id), UTC date (YYYY-MM-DD) or "untracked"
    key: str
    commits: list[Commit]  # newest first


def empty_diffstat() -> Diffstat:
    return {"files": 0, "insertions": 0, "deletions": 0}
