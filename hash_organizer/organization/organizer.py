import errno
import os
import time
import logging
from pathlib import Path
from typing import Optional

from ..exceptions import (
    OrganiseError,
    FileReadError,
    DuplicateRemovalError,
    RenameError,
    LastModifiedError,
)
from ..models import FileResult, Outcome
from ..scanning.hasher import FileHasher


def _last_modified_ns(path: Path) -> int:
    """
    Last-modified time of `path` in nanoseconds.
    Falls back to the current time when the metadata cannot be read.
    """
    try:
        return path.stat().st_mtime_ns
    except OSError as e:
        logging.debug(f"Could not read last modified time of {path}, using now: {e}")
        return time.time_ns()


# link() failures meaning "no hard links here", not "cannot move this file"
_LINK_UNSUPPORTED = {errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.EMLINK}


def _move_no_replace(path: Path, target: Path):
    """
    Moves `path` to `target`, failing with FileExistsError if `target`
    appeared in the meantime instead of overwriting it.

    A hard link claims the new name atomically; the old name is dropped
    afterwards. Symlinks are linked as themselves, not as what they point to.
    """
    try:
        os.link(path, target, follow_symlinks=False)
    except NotImplementedError:
        logging.debug(f"Hard links unavailable for {path}, falling back to rename")
        path.rename(target)
        return
    except OSError as e:
        if e.errno not in _LINK_UNSUPPORTED:
            raise
        logging.debug(f"Hard links unavailable for {path}, falling back to rename: {e}")
        path.rename(target)
        return

    path.unlink()


class FileOrganizer:
    """
    Converges a single file towards its canonical (fingerprint) name.

    Files are handled independently; the only thing shared between two
    calls is the directory itself.
    """

    def __init__(self, hasher: Optional[FileHasher] = None, dry_run: bool = False):
        self.hasher = hasher or FileHasher()
        self.dry_run = dry_run

    def organise(self, path: Path) -> FileResult:
        """Processes `path`, turning any OrganiseError into a failed result."""
        try:
            return self.process(path)
        except OrganiseError as e:
            return FileResult(path=path, error=e, dry_run=self.dry_run)

    def process(self, path: Path) -> FileResult:
        """
        1. Fingerprint the content.
        2. Derive the canonical path.
        3. Already there -> UNCHANGED.
        4. Canonical path taken -> delete this copy and stamp the survivor
           with this copy's mtime (DUPLICATE_REMOVED); otherwise rename (RENAMED).

        Raises:
            OrganiseError subclass naming the phase that failed.
        """
        try:
            fingerprint = self.hasher.compute_fingerprint(path)
        except OSError as e:
            raise FileReadError(path, e) from e

        target = self.hasher.canonical_path(path, fingerprint)

        if target == path:
            return FileResult(path=path, target=target, outcome=Outcome.UNCHANGED, dry_run=self.dry_run)

        try:
            target_exists = target.exists()
        except OSError as e:
            raise FileReadError(target, e) from e

        if target_exists:
            outcome = Outcome.DUPLICATE_REMOVED
            if not self.dry_run:
                self._remove_duplicate(path, target)
        else:
            outcome = Outcome.RENAMED
            if not self.dry_run:
                try:
                    _move_no_replace(path, target)
                except OSError as e:
                    raise RenameError(path, e) from e

        return FileResult(path=path, target=target, outcome=outcome, dry_run=self.dry_run)

    def _remove_duplicate(self, path: Path, survivor: Path):
        mtime_ns = _last_modified_ns(path)

        try:
            path.unlink()
        except OSError as e:
            raise DuplicateRemovalError(path, e) from e

        # Only the mtime is carried over; the survivor keeps its own atime.
        try:
            atime_ns = survivor.stat().st_atime_ns
            os.utime(survivor, ns=(atime_ns, mtime_ns))
        except OSError as e:
            raise LastModifiedError(survivor, e) from e
