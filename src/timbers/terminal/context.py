# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional

import typer

from timbers.configuration import Configuration
from timbers.errors import TimbersError, UserError
from timbers.model.entry import Entry
from timbers.repository.entry import FileEntryRepository
from timbers.repository.entry_store import EntryStore
from timbers.source.commit_source import CommitSource
from timbers.source.git import GitCommitSource
from timbers.view.output import Output

logger = logging.getLogger(__name__)


class AppContext:
    """
    Everything a command needs for one invocation.

    Stored on the click context object. Collaborators are created on first
    use so commands that fail early never touch git; tests pass ready-made
    doubles instead.
    """

    def __init__(
        self,
        configuration: Configuration,
        output: Output,
        folder: Optional[Path] = None,
        source: Optional[CommitSource] = None,
        repository: Optional[EntryStore] = None,
    ) -> None:
        self.configuration = configuration
        self.output = output
        self.folder = folder
        self.source = source
        self.repository = repository
        self.__git: Optional[GitCommitSource] = None

    def get_git(self) -> GitCommitSource:
        if self.__git is None:
            git = GitCommitSource(self.folder)
            if not git.is_repo():
                raise UserError("not in a git repository")
            self.__git = git
        return self.__git

    def get_source(self) -> CommitSource:
        if self.source is None:
            self.source = self.get_git()
        return self.source

    def get_ledger_root(self) -> Path:
        return self.get_git().repo_root() / self.configuration["ledger_dir"]

    def get_repository(self) -> EntryStore:
        if self.repository is None:
            self.repository = FileEntryRepository(
                self.get_ledger_root(), on_write=self.__record_in_git
            )
        return self.repository

    def __record_in_git(self, file_path: Path, entry: Entry) -> None:
        stage = self.configuration["stage_entries"]
        commit = self.configuration["commit_entries"]
        if not stage and not commit:
            return
        git = self.get_git()
        git.stage(file_path)
        if commit:
            git.commit_path(file_path, f"timbers: document {entry['id']}")
            logger.debug("committed %s", file_path)


def get_app_context(ctx: typer.Context) -> AppContext:
    app_context = ctx.find_object(AppContext)
    if app_context is None:
        raise RuntimeError("timbers context was not initialized")
    return app_context


def fail(app_context: AppContext, error: TimbersError) -> typer.Exit:
    """Render the error and return the Exit to raise with its exit code."""
    app_context.output.error(error)
    return typer.Exit(error.exit_code)
