from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import OrganiseError


class ScanMode(Enum):
    """
    FAST: only files that do not already look organised (by name) are scanned.
    FULL: every file is scanned, regardless of its name.
    """
    FAST = "fast"
    FULL = "full"

    @classmethod
    def parse(cls, value: str) -> "ScanMode":
        return cls(value.strip().lower())


class StemClass(Enum):
    """Result of checking a filename stem against the fingerprint pattern."""
    CANONICAL = "canonical"
    NOT_CANONICAL = "not_canonical"
    UNDECIDABLE = "undecidable"  # stem is not valid text; treated as not organised


class Outcome(Enum):
    UNCHANGED = "unchanged"
    DUPLICATE_REMOVED = "duplicate_removed"
    RENAMED = "renamed"


@dataclass
class FileResult:
    """
    What happened to one file during a run.
    Exactly one of `outcome` / `error` is set.
    """
    path: Path
    target: Optional[Path] = None   # canonical path, once the fingerprint is known
    outcome: Optional[Outcome] = None
    error: Optional[OrganiseError] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunSummary:
    directory: Path
    mode: ScanMode
    discovered: int = 0
    elapsed: float = 0.0
    results: List[FileResult] = field(default_factory=list)

    @property
    def failures(self) -> List[FileResult]:
        return [r for r in self.results if not r.ok]

    def counts(self) -> Dict[str, int]:
        counts = {outcome.value: 0 for outcome in Outcome}
        counts["failed"] = 0
        for result in self.results:
            if result.ok:
                counts[result.outcome.value] += 1
            else:
                counts["failed"] += 1
        return counts
