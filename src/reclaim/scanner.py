"""Size and age based file scanners for reclaim."""

import logging
import time
from pathlib import Path

from reclaim.models import FileRecord
from reclaim.walker import ProgressCallback, iter_files, to_record

log = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def find_large_files(
    root: str | Path,
    min_size_mb: int = 100,
    progress_callback: ProgressCallback | None = None,
) -> list[FileRecord]:
    """
    Find files of at least min_size_mb.

    Args:
        root: Directory to search
        min_size_mb: Minimum file size in MB (default: 100)
        progress_callback: Optional callback(path, visited) for progress updates

    Returns:
        List of FileRecords sorted by size, largest first
    """
    min_size_bytes = min_size_mb * 1024 * 1024
    large_files = []

    for entry, stat in iter_files(root, progress_callback=progress_callback):
        if stat.st_size >= min_size_bytes:
            record = to_record(entry, stat)
            if record is not None:
                large_files.append(record)

    large_files.sort(key=lambda f: f.size_bytes, reverse=True)
    log.info("Found %d files of at least %d MB under %s", len(large_files), min_size_mb, root)
    return large_files


def find_old_files(
    root: str | Path,
    days: int = 180,
    now: float | None = None,
    progress_callback: ProgressCallback | None = None,
) -> list[FileRecord]:
    """
    Find files not accessed in the last `days` days.

    The reference time is captured once before the walk starts so every file
    is judged against the same threshold. Files with an access time in the
    future are skipped.

    Args:
        root: Directory to search
        days: Number of days since last access (default: 180)
        now: Reference time as epoch seconds (default: current time)
        progress_callback: Optional callback(path, visited) for progress updates

    Returns:
        List of FileRecords sorted by size, largest first
    """
    if now is None:
        now = time.time()
    threshold = days * SECONDS_PER_DAY
    old_files = []

    for entry, stat in iter_files(root, progress_callback=progress_callback):
        age = now - stat.st_atime
        if age < 0:
            log.debug("Access time in the future, skipping: %s", entry.path)
            continue
        if age >= threshold:
            record = to_record(entry, stat)
            if record is not None:
                old_files.append(record)

    old_files.sort(key=lambda f: f.size_bytes, reverse=True)
    log.info("Found %d files not accessed in %d days under %s", len(old_files), days, root)
    return old_files
