"""Discovery of build output and package cache directories."""

import logging
import os
from pathlib import Path, PurePath

from reclaim.models import CacheDirectoryRecord
from reclaim.walker import ProgressCallback, directory_size, walk

log = logging.getLogger(__name__)

# Checked in order; the first matching pattern names the directory.
# A pattern matches when it equals the trailing components of a path.
CACHE_PATTERNS: list[tuple[str, str]] = [
    ("node_modules", "npm/yarn packages"),
    (".npm/_cacache", "npm cache"),
    (".yarn/cache", "Yarn cache"),
    (".cargo/registry", "Cargo registry"),
    ("target", "Rust/Cargo build output"),
    ("__pycache__", "Python bytecode"),
    (".pytest_cache", "pytest"),
    (".mypy_cache", "mypy"),
    (".ruff_cache", "Ruff"),
    (".tox", "tox environments"),
    (".gradle", "Gradle"),
    (".next", "Next.js build output"),
    (".parcel-cache", "Parcel cache"),
    (".cache", "Generic cache"),
    ("build", "Build output"),
    ("dist", "Distribution"),
]

DEFAULT_MAX_DEPTH = 10

_PATTERN_PARTS: list[tuple[tuple[str, ...], str]] = [
    (PurePath(pattern).parts, label) for pattern, label in CACHE_PATTERNS
]


def match_cache_pattern(path: str | Path) -> str | None:
    """
    Match a directory path against the cache pattern table.

    Args:
        path: Directory path

    Returns:
        Label of the first matching pattern, or None
    """
    parts = PurePath(path).parts
    for pattern_parts, label in _PATTERN_PARTS:
        if len(pattern_parts) <= len(parts) and parts[-len(pattern_parts) :] == pattern_parts:
            return label
    return None


def _is_cache_dir(entry: os.DirEntry) -> bool:
    return match_cache_pattern(entry.path) is not None


def find_cache_directories(
    root: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    progress_callback: ProgressCallback | None = None,
) -> list[CacheDirectoryRecord]:
    """
    Find known cache and build directories below root.

    Matched directories are not searched further, so a node_modules nested
    inside another node_modules counts towards the outer one only.

    Args:
        root: Directory to search
        max_depth: Maximum depth to search (deeper caches are not found)
        progress_callback: Optional callback(path, visited) for progress updates

    Returns:
        List of CacheDirectoryRecords sorted by size, largest first
    """
    results: list[CacheDirectoryRecord] = []
    seen_paths: set[str] = set()

    for entry in walk(
        root,
        max_depth=max_depth,
        prune=_is_cache_dir,
        progress_callback=progress_callback,
    ):
        try:
            if not entry.is_dir(follow_symlinks=False):
                continue
        except OSError:
            continue

        label = match_cache_pattern(entry.path)
        if label is None:
            continue

        dir_str = os.path.abspath(entry.path)
        if dir_str in seen_paths:
            continue
        seen_paths.add(dir_str)

        size = directory_size(dir_str)
        if size <= 0:
            log.debug("Skipping empty cache directory %s", dir_str)
            continue

        results.append(CacheDirectoryRecord(path=dir_str, label=label, size_bytes=size))

    results.sort(key=lambda r: r.size_bytes, reverse=True)
    log.info("Found %d cache directories under %s", len(results), root)
    return results
