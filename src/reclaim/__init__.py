"""reclaim - find large, duplicate, stale and cache files to reclaim disk space."""

from reclaim.analyzer import analyze_disk
from reclaim.cache_dirs import find_cache_directories
from reclaim.duplicates import find_duplicates
from reclaim.scanner import find_large_files, find_old_files

__version__ = "0.1.0"

__all__ = [
    "analyze_disk",
    "find_cache_directories",
    "find_duplicates",
    "find_large_files",
    "find_old_files",
]
