"""
Custom exception hierarchy for the hash organizer.

Each error names the phase of the organisation that failed and keeps the
underlying OSError as `cause` so the log line shows what the OS reported.
"""
from pathlib import Path
from typing import Optional


class OrganiseError(Exception):
    """Base exception for all hash organizer errors."""

    action = "failed to organise file"

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is None:
            return self.action
        return f"{self.action} [{self.cause}]"


class DirectoryListError(OrganiseError):
    """Raised when the target directory cannot be listed. Aborts the run."""
    action = "failed to list files"


class FileReadError(OrganiseError):
    """Raised when a file's content or its canonical name cannot be inspected."""
    action = "failed to read file"


class DuplicateRemovalError(OrganiseError):
    """Raised when a duplicate cannot be deleted. The file is left in place."""
    action = "failed to remove duplicate file"


class RenameError(OrganiseError):
    """Raised when a new file cannot be renamed to its canonical name."""
    action = "failed to rename new file"


class LastModifiedError(OrganiseError):
    """
    Raised when the duplicate was deleted but the surviving file's
    last-modified time could not be updated. Not recoverable by re-running.
    """
    action = "failed to set last modified time on file"
