"""Analysis and reclaimable-space estimation for reclaim."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable

from reclaim.cache_dirs import find_cache_directories
from reclaim.duplicates import find_duplicates
from reclaim.models import (
    AnalysisConfig,
    CacheDirectoryRecord,
    DiskAnalysis,
    DuplicateGroup,
    FileRecord,
)
from reclaim.scanner import find_large_files, find_old_files

log = logging.getLogger(__name__)

StepCallback = Callable[[str, int, int], None]

SCAN_STEPS = (
    "large files",
    "stale files",
    "duplicates",
    "cache directories",
)


def estimate_reclaimable(
    duplicate_groups: list[DuplicateGroup],
    cache_directories: list[CacheDirectoryRecord],
    stale_files: list[FileRecord],
) -> int:
    """
    Estimate total bytes that can be freed.

    Keeps one copy per duplicate group and counts every cache directory and
    stale file in full. The categories overlap, so a file that is a duplicate,
    stale and inside a cache directory is counted up to three times.

    Returns:
        Total bytes that could be freed
    """
    duplicate_bytes = sum(g.files[0].size_bytes * (len(g.files) - 1) for g in duplicate_groups)
    cache_bytes = sum(c.size_bytes for c in cache_directories)
    stale_bytes = sum(f.size_bytes for f in stale_files)
    return duplicate_bytes + cache_bytes + stale_bytes


def analyze_disk(
    root: str | Path,
    config: AnalysisConfig | None = None,
    progress_callback: StepCallback | None = None,
) -> DiskAnalysis:
    """
    Perform full disk analysis of one root.

    The caller is expected to have checked that root exists.

    Args:
        root: Directory to analyze
        config: Analysis options (default: AnalysisConfig())
        progress_callback: Optional callback(step_name, current, total)

    Returns:
        DiskAnalysis with every category and the reclaimable total
    """
    config = config or AnalysisConfig()
    root_str = os.path.abspath(root)
    total = len(SCAN_STEPS)

    def step(index: int) -> None:
        if progress_callback:
            name = SCAN_STEPS[index] if index < total else "done"
            progress_callback(name, index, total)

    log.info("Analyzing %s", root_str)

    step(0)
    large_files = find_large_files(root_str, config.min_size_mb)
    step(1)
    # Before hashing, which reads content and can refresh access times
    stale_files = find_old_files(root_str, config.stale_days)
    step(2)
    duplicate_groups = find_duplicates(root_str)
    step(3)
    cache_directories = find_cache_directories(root_str, max_depth=config.cache_max_depth)
    step(total)

    return DiskAnalysis(
        root=root_str,
        timestamp=datetime.now(),
        config=config,
        large_files=large_files,
        duplicate_groups=duplicate_groups,
        stale_files=stale_files,
        cache_directories=cache_directories,
        total_reclaimable_bytes=estimate_reclaimable(
            duplicate_groups, cache_directories, stale_files
        ),
    )
