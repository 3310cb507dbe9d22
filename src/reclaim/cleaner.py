"""Cleanup planning and execution for reclaim."""

import logging
import os
import shutil
from pathlib import Path
from typing import Callable

from reclaim.models import CleanupPlan, CleanupResult, CleanupSelection, DiskAnalysis
from reclaim.walker import directory_size

log = logging.getLogger(__name__)

# Paths that should NEVER be deleted
BLOCKED_PATHS = [
    "/",
    "~",
    "/bin",
    "/boot",
    "/etc",
    "/home",
    "/lib",
    "/opt",
    "/sbin",
    "/usr",
    "/var",
    "/System",
    "/Library",
    "/Applications",
    "/Users",
]


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def is_path_safe(path: str | Path) -> bool:
    """
    Check if a path is safe to delete.

    Args:
        path: Path to check

    Returns:
        True if safe to delete, False otherwise
    """
    path_str = os.path.abspath(path)

    for blocked in BLOCKED_PATHS:
        if path_str == os.path.abspath(expand_path(blocked)):
            return False

    return True


def _is_inside(path: str, directory: str) -> bool:
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)


def plan_cleanup(analysis: DiskAnalysis, selection: CleanupSelection) -> CleanupPlan:
    """
    Turn a reviewed analysis and a user selection into a deletion plan.

    For duplicate groups the first copy outside every planned directory is
    kept and the rest are planned; a group that lives entirely inside planned
    directories is left to the directory removal. Files inside a planned
    directory are left to the directory removal.

    Args:
        analysis: Analysis the user reviewed
        selection: Categories and files the user chose

    Returns:
        CleanupPlan with unique file and directory paths
    """
    directories: list[str] = []
    if selection.caches:
        for cache in analysis.cache_directories:
            if cache.path not in directories:
                directories.append(cache.path)

    candidates: list[str] = []
    if selection.duplicates:
        for group in analysis.duplicate_groups:
            keep = next(
                (p for p in group.paths if not any(_is_inside(p, d) for d in directories)),
                None,
            )
            if keep is None:
                continue
            candidates.extend(p for p in group.paths if p != keep)
    if selection.stale:
        candidates.extend(record.path for record in analysis.stale_files)
    candidates.extend(os.path.abspath(p) for p in selection.large_files)

    files: list[str] = []
    seen: set[str] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        if any(_is_inside(path, d) for d in directories):
            continue
        files.append(path)

    return CleanupPlan(files=files, directories=directories)


def delete_file(path: str | Path) -> int:
    """
    Delete a single file.

    Returns:
        Bytes freed

    Raises:
        OSError: Whatever the filesystem reports (permission denied, missing, ...)
    """
    path = Path(path)
    size = path.lstat().st_size
    path.unlink()
    return size


def delete_directory(path: str | Path) -> int:
    """
    Delete a directory tree.

    Returns:
        Bytes freed

    Raises:
        OSError: Whatever the filesystem reports (permission denied, missing, ...)
    """
    path = Path(path)
    if path.is_symlink() or (path.exists() and not path.is_dir()):
        raise NotADirectoryError(f"Not a directory: {path}")
    size = directory_size(path)
    shutil.rmtree(path)
    return size


def _measure(path: str, is_directory: bool) -> int:
    if is_directory:
        if not os.path.isdir(path):
            raise FileNotFoundError(f"No such directory: {path}")
        return directory_size(path)
    return os.lstat(path).st_size


def execute_cleanup(
    plan: CleanupPlan,
    dry_run: bool = False,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> list[CleanupResult]:
    """
    Delete everything in a plan, one item at a time.

    A failing item is recorded in its CleanupResult and the remaining items
    are still processed.

    Args:
        plan: Plan produced by plan_cleanup
        dry_run: If True, only measure what would be freed
        progress_callback: Optional callback(path, current, total)

    Returns:
        One CleanupResult per planned path
    """
    items = [(d, True) for d in plan.directories] + [(f, False) for f in plan.files]
    results = []
    total = len(items)

    for i, (path, is_directory) in enumerate(items):
        if progress_callback:
            progress_callback(path, i + 1, total)

        if not is_path_safe(path):
            results.append(
                CleanupResult(
                    path=path,
                    is_directory=is_directory,
                    success=False,
                    error=f"Blocked path: {path}",
                    dry_run=dry_run,
                )
            )
            continue

        try:
            if dry_run:
                freed = _measure(path, is_directory)
            elif is_directory:
                freed = delete_directory(path)
            else:
                freed = delete_file(path)
        except PermissionError as e:
            log.warning("Could not delete %s: %s", path, e)
            results.append(
                CleanupResult(
                    path=path,
                    is_directory=is_directory,
                    success=False,
                    error=f"Permission denied: {e}",
                    dry_run=dry_run,
                )
            )
            continue
        except OSError as e:
            log.warning("Could not delete %s: %s", path, e)
            results.append(
                CleanupResult(
                    path=path,
                    is_directory=is_directory,
                    success=False,
                    error=f"OS error: {e}",
                    dry_run=dry_run,
                )
            )
            continue

        results.append(
            CleanupResult(
                path=path,
                is_directory=is_directory,
                bytes_freed=freed,
                dry_run=dry_run,
            )
        )

    return results
