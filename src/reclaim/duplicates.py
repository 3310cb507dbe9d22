"""Duplicate file detection.

Files are first bucketed by exact size; only files that share a size are
hashed, so the expensive content pass touches a small fraction of the tree.
"""

import hashlib
import logging
from collections import defaultdict
from pathlib import Path

from reclaim.models import DuplicateGroup, FileRecord
from reclaim.walker import PROGRESS_INTERVAL, ProgressCallback, iter_files, to_record

log = logging.getLogger(__name__)

# Files at or below this size are never reported as duplicates
MIN_DUPLICATE_SIZE = 1024

_CHUNK_SIZE = 65_536  # 64 KB


def hash_file(path: str | Path, chunk_size: int = _CHUNK_SIZE) -> str:
    """
    Compute the SHA-256 digest of a file using chunked reads.

    Raises:
        OSError: If the file cannot be opened or read
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            h.update(chunk)
    return h.hexdigest()


def group_by_size(
    root: str | Path,
    progress_callback: ProgressCallback | None = None,
) -> dict[int, list[FileRecord]]:
    """
    Bucket every file larger than MIN_DUPLICATE_SIZE by exact size.

    Returns:
        Dict of size -> FileRecords, only for sizes shared by 2+ files
    """
    by_size: dict[int, list[FileRecord]] = defaultdict(list)

    for entry, stat in iter_files(root, progress_callback=progress_callback):
        if stat.st_size > MIN_DUPLICATE_SIZE:
            record = to_record(entry, stat)
            if record is not None:
                by_size[stat.st_size].append(record)

    return {size: records for size, records in by_size.items() if len(records) > 1}


def find_duplicates(
    root: str | Path,
    progress_callback: ProgressCallback | None = None,
) -> list[DuplicateGroup]:
    """
    Find byte-identical files below root.

    Args:
        root: Directory to search
        progress_callback: Optional callback(path, count) for progress updates,
            called during both the size pass and the hashing pass

    Returns:
        List of DuplicateGroups sorted by reclaimable space, largest first
    """
    candidates = group_by_size(root, progress_callback=progress_callback)
    total_to_hash = sum(len(records) for records in candidates.values())
    log.info("Hashing %d candidate files in %d size groups", total_to_hash, len(candidates))

    groups: list[DuplicateGroup] = []
    hashed = 0

    for size, records in candidates.items():
        by_digest: dict[str, list[FileRecord]] = defaultdict(list)

        for record in records:
            hashed += 1
            if progress_callback and hashed % PROGRESS_INTERVAL == 0:
                progress_callback(record.path, hashed)
            try:
                digest = hash_file(record.path)
            except OSError as e:
                # Vanished or unreadable since the size pass
                log.debug("Cannot hash %s: %s", record.path, e)
                continue
            by_digest[digest].append(record)

        for digest, members in by_digest.items():
            if len(members) >= 2:
                groups.append(DuplicateGroup(size_bytes=size, digest=digest, files=tuple(members)))

    groups.sort(key=lambda g: g.reclaimable_bytes, reverse=True)
    return groups
