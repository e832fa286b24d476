import hashlib
from pathlib import Path

from .. import config


class FileHasher:
    def compute_fingerprint(self, path: Path) -> str:
        """
        Computes the content fingerprint of a file.

        MD5 over the full byte content, as 32 lowercase hex characters.
        Chosen for speed: identical fingerprints are treated as identical
        content, with no second byte-by-byte comparison.
        """
        h = hashlib.md5()
        with open(path, 'rb') as f:
            while chunk := f.read(config.HASH_CHUNK_SIZE):
                h.update(chunk)
        return h.hexdigest()

    def canonical_path(self, path: Path, fingerprint: str) -> Path:
        """
        The name a file should have once organised: `<fingerprint><suffix>`
        in the same directory. Only the last extension is kept
        (`a.tar.gz` -> `<fp>.gz`); `LICENSE` and `.bashrc` get the bare fingerprint.
        """
        suffix = path.suffix
        # `weird.` has suffix "." on newer Pythons; it has no extension to keep.
        if suffix == ".":
            suffix = ""
        return path.with_name(fingerprint + suffix)
