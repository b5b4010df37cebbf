"""Exceptions raised by Sprig operations.

Every failure a user can trigger derives from SprigError, and its message
is the single line the CLI prints.
"""


class SprigError(Exception):
    """Base class for all Sprig failures."""

    default_message = "Sprig operation failed."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class NotInitialized(SprigError):
    default_message = "Not in an initialized Sprig directory."


class AlreadyExists(SprigError):
    default_message = "A Sprig version-control system already exists in the current directory."


class NotFound(SprigError):
    default_message = "File does not exist."


class NothingStaged(SprigError):
    default_message = "No changes added to the commit."


class NothingToRemove(SprigError):
    default_message = "No reason to remove the file."


class InvalidOperands(SprigError):
    default_message = "Incorrect operands."


class ForbiddenOperation(SprigError):
    """Operation is well-formed but not allowed on the current branch."""


class UntrackedFileConflict(SprigError):
    default_message = (
        "There is an untracked file in the way; delete it, or add and commit it first."
    )


class UncommittedChanges(SprigError):
    default_message = "You have uncommitted changes."


class StorageError(SprigError):
    """Wraps an OSError raised while touching the repository or work tree."""

    @classmethod
    def from_os_error(cls, exc: OSError) -> 'StorageError':
        detail = exc.strerror or str(exc)
        if exc.filename:
            detail = f"{detail}: {exc.filename}"
        return cls(f"Storage failure: {detail}")
