import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .core import HashOrganizerApp
from .exceptions import DirectoryListError
from .models import ScanMode
from .reporting import write_csv_report


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, to a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format=config.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        description="Hash Organizer: rename files to their content fingerprint and remove duplicates"
    )

    p.add_argument("-d", "--dir", type=Path, required=True, help="Directory to organise")
    p.add_argument(
        "-m", "--mode",
        type=ScanMode.parse,
        default=ScanMode.FAST,
        choices=list(ScanMode),
        metavar="{fast,full}",
        help="fast: skip files already named like a fingerprint (default); full: scan every file",
    )

    p.add_argument("-w", "--workers", type=int, default=config.DEFAULT_MAX_WORKERS,
                   help=f"Number of parallel workers (default: {config.DEFAULT_MAX_WORKERS})")
    p.add_argument("--dry-run", action="store_true", help="Report what would happen without modifying disk")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file CSV report to this path")
    p.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    app = HashOrganizerApp()

    try:
        summary = app.organize(
            directory=args.dir,
            mode=args.mode,
            max_workers=args.workers,
            dry_run=args.dry_run,
            show_progress=not args.no_progress,
        )
    except DirectoryListError as e:
        logging.error(f"Failed to organise directory: {e}.")
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception as e:
        logging.exception("Fatal error during organisation.")
        logging.error(f"Failed to organise directory: {e}.")
        return 1

    # The directory is already organised; a report that cannot be written
    # is logged but does not turn the run into a failure.
    if args.report_csv:
        try:
            write_csv_report(summary.results, args.report_csv)
        except OSError as e:
            logging.error(f"Failed to write report {args.report_csv}: {e}")

    logging.info("Successfully organised directory.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
