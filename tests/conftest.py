import os

import pytest


@pytest.fixture
def make_file(tmp_path):
    """Creates a file in tmp_path with the given content and, optionally, mtime."""
    def _make(name: str, data: bytes = b"", mtime: float = None):
        p = tmp_path / name
        p.write_bytes(data)
        if mtime is not None:
            os.utime(p, (mtime, mtime))
        return p
    return _make
