# SPDX-License-Identifier: MIT

from typing import Optional

EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_CONFLICT = 3


class TimbersError(Exception):
    exit_code = EXIT_USER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserError(TimbersError):
    """Bad arguments, missing fields, unknown ids."""

    exit_code = EXIT_USER_ERROR


class ValidationError(UserError):
    def __init__(self, message: str, fields: Optional[list[str]] = None) -> None:
        self.fields = fields or []
        if self.fields:
            message = f"{message}: {', '.join(self.fields)}"
        super().__init__(message)


class EntryNotFoundError(UserError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"entry not found: {entry_id}")
        self.entry_id = entry_id


class NoCommitsError(UserError):
    pass


class SystemFailure(TimbersError):
    """Git or filesystem failures."""

    exit_code = EXIT_SYSTEM_ERROR


class GitError(SystemFailure):
    pass


class UnresolvableRefError(GitError):
    def __init__(self, ref: str) -> None:
        super().__init__(f"unresolvable ref: {ref}")
        self.ref = ref


class StorageError(SystemFailure):
    pass


class ConflictError(TimbersError):
    exit_code = EXIT_CONFLICT


class EntryExistsError(ConflictError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"entry already exists: {entry_id}")
        self.entry_id = entry_id
