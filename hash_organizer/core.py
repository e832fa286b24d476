import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List

from tqdm import tqdm

from . import config
from .exceptions import OrganiseError
from .models import FileResult, RunSummary, ScanMode
from .organization.organizer import FileOrganizer
from .reporting import log_results
from .scanning.filesystem import DirectoryScanner


class HashOrganizerApp:
    def __init__(self):
        self.scanner = DirectoryScanner()

    def organize(self,
                 directory: Path,
                 mode: ScanMode = ScanMode.FAST,
                 max_workers: int = config.DEFAULT_MAX_WORKERS,
                 dry_run: bool = False,
                 show_progress: bool = True) -> RunSummary:
        """
        Renames every file in `directory` to its content fingerprint and
        removes duplicates.
        1. Discover (single-threaded, completes before any file is touched)
        2. Organise each file in parallel
        3. Report per-file results

        Args:
            max_workers: Number of parallel workers for file processing

        Raises:
            DirectoryListError: the directory could not be listed; nothing was changed.
        """
        logging.info(f"Discovering files in <{directory}>...")
        start = time.perf_counter()

        files = self.scanner.list_entries(directory, mode)

        logging.info(f"Discovered {len(files)} files in {time.perf_counter() - start:.3f}s.")
        logging.info(f"Organising {len(files)} files (Mode={mode.name}, DryRun={dry_run})...")

        organizer = FileOrganizer(dry_run=dry_run)
        if max_workers <= 1:
            results = self._organise_sequential(organizer, files, show_progress)
        else:
            results = self._organise_parallel(organizer, files, max_workers, show_progress)

        summary = RunSummary(
            directory=directory,
            mode=mode,
            discovered=len(files),
            elapsed=time.perf_counter() - start,
            results=results,
        )

        # Reporting happens here, once every worker has finished.
        log_results(summary)
        return summary

    def _organise_sequential(self,
                             organizer: FileOrganizer,
                             files: List[Path],
                             show_progress: bool) -> List[FileResult]:
        return [
            self._organise_isolated(organizer, path)
            for path in tqdm(files, desc="Organising", disable=not show_progress)
        ]

    def _organise_parallel(self,
                           organizer: FileOrganizer,
                           files: List[Path],
                           max_workers: int,
                           show_progress: bool) -> List[FileResult]:
        results = []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_path = {
                executor.submit(self._organise_isolated, organizer, path): path
                for path in files
            }
            for future in tqdm(as_completed(future_to_path),
                               total=len(future_to_path),
                               desc="Organising",
                               disable=not show_progress):
                results.append(future.result())
        return results

    def _organise_isolated(self, organizer: FileOrganizer, path: Path) -> FileResult:
        """Runs one file; nothing raised here may reach sibling files."""
        try:
            return organizer.organise(path)
        except Exception as e:
            logging.exception(f"Unexpected error while organising {path}")
            return FileResult(path=path, error=OrganiseError(path, e), dry_run=organizer.dry_run)
