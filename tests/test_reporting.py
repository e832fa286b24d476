import csv
import logging
from pathlib import Path

from hash_organizer.exceptions import RenameError
from hash_organizer.models import FileResult, Outcome, RunSummary, ScanMode
from hash_organizer.reporting import describe, log_results, write_csv_report

FP = "d41d8cd98f00b204e9800998ecf8427e"


def sample_results(tmp_path):
    return [
        FileResult(path=tmp_path / "a.txt", target=tmp_path / f"{FP}.txt", outcome=Outcome.RENAMED),
        FileResult(path=tmp_path / "b.txt", target=tmp_path / f"{FP}.txt", outcome=Outcome.DUPLICATE_REMOVED),
        FileResult(path=tmp_path / f"{FP}.md", target=tmp_path / f"{FP}.md", outcome=Outcome.UNCHANGED),
        FileResult(path=tmp_path / "c.txt",
                   error=RenameError(tmp_path / "c.txt", PermissionError(13, "Permission denied"))),
    ]


def test_describe_lines(tmp_path):
    renamed, removed, unchanged, failed = sample_results(tmp_path)

    assert describe(renamed) == f"Organised new file <{tmp_path / 'a.txt'}> as <{FP}.txt>."
    assert describe(removed).startswith("Deleted duplicate file")
    assert "already organised" in describe(unchanged)
    assert describe(failed) == (
        f"Failed to organise file <{tmp_path / 'c.txt'}>: "
        f"failed to rename new file [[Errno 13] Permission denied]."
    )


def test_describe_marks_dry_run(tmp_path):
    result = FileResult(path=tmp_path / "a.txt", target=tmp_path / f"{FP}.txt",
                        outcome=Outcome.RENAMED, dry_run=True)
    assert describe(result).startswith("[DRY RUN] ")


def test_log_results_levels(tmp_path, caplog):
    caplog.set_level(logging.DEBUG)

    summary = RunSummary(directory=tmp_path, mode=ScanMode.FAST, discovered=4,
                         elapsed=0.25, results=sample_results(tmp_path))
    log_results(summary)

    by_level = {}
    for record in caplog.records:
        by_level.setdefault(record.levelno, []).append(record.getMessage())

    assert len(by_level[logging.ERROR]) == 1
    assert "c.txt" in by_level[logging.ERROR][0]
    assert len(by_level[logging.DEBUG]) == 1
    assert "Renamed 1, removed 1 duplicates, left 1 unchanged, 1 failed in 0.250s." in by_level[logging.INFO]


def test_write_csv_report(tmp_path):
    output = tmp_path / "report.csv"

    write_csv_report(sample_results(tmp_path), output)

    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))

    assert rows[0] == ["Source Path", "Outcome", "Canonical Path", "Error"]
    by_path = {Path(r[0]).name: r for r in rows[1:]}
    assert by_path["a.txt"][1] == "renamed"
    assert by_path["b.txt"][1] == "duplicate_removed"
    assert by_path[f"{FP}.md"][1] == "unchanged"
    assert by_path["c.txt"][1] == "failed"
    assert by_path["c.txt"][2] == ""
    assert "failed to rename new file" in by_path["c.txt"][3]
