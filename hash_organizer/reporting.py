import csv
import logging
from pathlib import Path
from typing import Iterable

from .models import FileResult, Outcome, RunSummary


def describe(result: FileResult) -> str:
    """One human-readable line for a single file's result."""
    if not result.ok:
        return f"Failed to organise file <{result.path}>: {result.error}."

    if result.outcome is Outcome.RENAMED:
        line = f"Organised new file <{result.path}> as <{result.target.name}>."
    elif result.outcome is Outcome.DUPLICATE_REMOVED:
        line = f"Deleted duplicate file <{result.path}> of <{result.target.name}>."
    else:
        line = f"File <{result.path}> is already organised."

    if result.dry_run:
        line = f"[DRY RUN] {line}"
    return line


def log_results(summary: RunSummary):
    """
    Logs one line per file followed by a summary line.
    Failures are errors, unchanged files are only shown with --verbose.
    """
    for result in summary.results:
        if not result.ok:
            logging.error(describe(result))
        elif result.outcome is Outcome.UNCHANGED:
            logging.debug(describe(result))
        else:
            logging.info(describe(result))

    counts = summary.counts()
    logging.info(
        f"Renamed {counts[Outcome.RENAMED.value]}, "
        f"removed {counts[Outcome.DUPLICATE_REMOVED.value]} duplicates, "
        f"left {counts[Outcome.UNCHANGED.value]} unchanged, "
        f"{counts['failed']} failed in {summary.elapsed:.3f}s."
    )


def write_csv_report(results: Iterable[FileResult], output_csv: Path):
    """Writes a CSV with one row per processed file."""
    headers = ["Source Path", "Outcome", "Canonical Path", "Error"]

    with open(output_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(headers)

        for result in sorted(results, key=lambda r: str(r.path)):
            outcome = result.outcome.value if result.ok else "failed"
            target = str(result.target) if result.target else ""
            error = str(result.error) if result.error else ""
            writer.writerow([str(result.path), outcome, target, error])

    logging.info(f"Report written to {output_csv}")
