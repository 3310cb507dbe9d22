"""Shared test fixtures."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from reclaim.models import FileRecord


@pytest.fixture
def make_file():
    """Create a file of a given size, filled with a repeated byte."""

    def _make(path: Path, size: int, fill: bytes = b"x", atime: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(fill * size)
        if atime is not None:
            st = path.stat()
            os.utime(path, (atime, st.st_mtime))
        return path

    return _make


@pytest.fixture
def make_sparse_file():
    """Create a sparse file of a given size without writing its content."""

    def _make(path: Path, size: int) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.truncate(size)
        return path

    return _make


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Point the config lookup at an empty temp directory."""
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "reclaim" / "config.json"


@pytest.fixture
def overflowing_timestamps():
    """Make FileRecord.from_stat fail with OverflowError for paths named 'overflow*'."""
    real_from_stat = FileRecord.from_stat

    def _from_stat(path, stat):
        if os.path.basename(path).startswith("overflow"):
            raise OverflowError("timestamp out of range for platform time_t")
        return real_from_stat(path, stat)

    with patch.object(FileRecord, "from_stat", side_effect=_from_stat):
        yield
