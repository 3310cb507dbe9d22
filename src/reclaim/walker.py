"""Directory traversal used by every scanner.

The walker is built on os.scandir rather than Path.rglob() so that symlinks
are never followed and an unreadable directory only costs its own subtree.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Generator

from reclaim.filters import is_excluded
from reclaim.models import FileRecord

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]

PROGRESS_INTERVAL = 100


def walk(
    root: str | Path,
    max_depth: int | None = None,
    prune: Callable[[os.DirEntry], bool] | None = None,
    progress_callback: ProgressCallback | None = None,
    progress_interval: int = PROGRESS_INTERVAL,
) -> Generator[os.DirEntry, None, None]:
    """
    Lazily yield every entry below root.

    The root itself is not yielded. Excluded paths (see filters.is_excluded)
    are neither yielded nor descended into.

    Args:
        root: Directory to walk
        max_depth: Deepest level to yield (1 = direct children), None for unbounded
        prune: Optional predicate; a directory for which it returns True is
            yielded but not descended into
        progress_callback: Optional callback(path, visited) for progress updates
        progress_interval: Number of entries between progress callbacks

    Yields:
        os.DirEntry objects, directories before their contents
    """
    root_path = os.path.abspath(root)
    if is_excluded(root_path):
        log.debug("Root is excluded, nothing to walk: %s", root_path)
        return

    visited = 0

    def _walk(directory: str, depth: int) -> Generator[os.DirEntry, None, None]:
        nonlocal visited
        if max_depth is not None and depth > max_depth:
            return
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if is_excluded(entry.path):
                        continue

                    visited += 1
                    if progress_callback and visited % progress_interval == 0:
                        progress_callback(entry.path, visited)

                    try:
                        is_dir = entry.is_dir(follow_symlinks=False)
                    except OSError as e:
                        log.debug("Cannot inspect %s: %s", entry.path, e)
                        continue

                    yield entry

                    if is_dir and not (prune and prune(entry)):
                        yield from _walk(entry.path, depth + 1)
        except OSError as e:
            # PermissionError included: skip the subtree, keep going
            log.debug("Cannot read directory %s: %s", directory, e)

    yield from _walk(root_path, 1)


def iter_files(
    root: str | Path,
    max_depth: int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> Generator[tuple[os.DirEntry, os.stat_result], None, None]:
    """
    Yield (entry, stat) for every regular file below root.

    Files whose metadata cannot be read are skipped.
    """
    for entry in walk(root, max_depth=max_depth, progress_callback=progress_callback):
        try:
            if not entry.is_file(follow_symlinks=False):
                continue
            stat = entry.stat(follow_symlinks=False)
        except OSError as e:
            log.debug("Cannot stat %s: %s", entry.path, e)
            continue
        yield entry, stat


def to_record(entry: os.DirEntry, stat: os.stat_result) -> FileRecord | None:
    """Build a FileRecord, or None when the timestamps cannot be represented."""
    try:
        return FileRecord.from_stat(entry.path, stat)
    except (OverflowError, ValueError, OSError) as e:
        log.debug("Unusable timestamps on %s: %s", entry.path, e)
        return None


def directory_size(path: str | Path) -> int:
    """
    Sum the sizes of all regular files below a directory.

    Symlinks are not followed and unreadable entries are skipped.

    Args:
        path: Directory to measure

    Returns:
        Total size in bytes
    """
    total_size = 0

    def _scan(p: str):
        nonlocal total_size
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            _scan(entry.path)
                    except OSError:
                        continue
        except OSError:
            pass

    _scan(os.fspath(path))
    return total_size
