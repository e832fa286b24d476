import os
import logging
import re
from pathlib import Path
from typing import List

from .. import config
from ..exceptions import DirectoryListError
from ..models import ScanMode, StemClass


class DirectoryScanner:
    def __init__(self):
        self.fingerprint_pattern = re.compile(config.FINGERPRINT_PATTERN)

    def list_entries(self, directory: Path, mode: ScanMode = ScanMode.FAST) -> List[Path]:
        """
        Lists the files directly inside `directory` that should be organised.

        The whole listing is read before anything is returned, so a listing
        failure never leaves a partial result behind.
        In FAST mode, files whose stem already looks like a fingerprint are skipped.

        Raises:
            DirectoryListError: if the directory cannot be read.
        """
        try:
            with os.scandir(directory) as it:
                entries = list(it)
            files = []
            for e in entries:
                # Symlinks to files count; their own name is what gets organised.
                if e.is_file():
                    files.append(Path(e.path))
                else:
                    logging.debug(f"Skipping non-file entry: {e.path}")
        except OSError as e:
            raise DirectoryListError(Path(directory), e) from e

        if mode is ScanMode.FULL:
            return files

        return [p for p in files if self.classify_stem(p.stem) is not StemClass.CANONICAL]

    def classify_stem(self, stem: str) -> StemClass:
        """
        Decides whether a filename stem is already a fingerprint.

        Names that are not valid text (undecodable bytes surface as lone
        surrogates) cannot be confirmed either way and are UNDECIDABLE,
        which callers treat as "not organised yet".
        """
        try:
            stem.encode('utf-8')
        except UnicodeEncodeError:
            return StemClass.UNDECIDABLE

        if self.fingerprint_pattern.fullmatch(stem):
            return StemClass.CANONICAL
        return StemClass.NOT_CANONICAL
