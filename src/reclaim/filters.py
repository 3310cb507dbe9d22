"""Path exclusion rules shared by every scanner."""

from pathlib import PurePath

# Virtual filesystems and OS-managed volumes, only excluded directly below the
# filesystem root so that e.g. ~/projects/sys is still scanned.
ROOT_EXCLUSIONS = frozenset(
    {
        "proc",
        "sys",
        "dev",
        "run",
        "System",
        "Volumes",
    }
)

# Component sequences excluded wherever they appear in a path.
ANYWHERE_EXCLUSIONS: tuple[tuple[str, ...], ...] = (
    (".git",),
    (".Trash",),
    (".Trashes",),
    ("$RECYCLE.BIN",),
    ("Library", "Caches"),
    (".local", "share", "Trash"),
)


def _contains_run(parts: tuple[str, ...], run: tuple[str, ...]) -> bool:
    size = len(run)
    return any(parts[i : i + size] == run for i in range(len(parts) - size + 1))


def is_excluded(path) -> bool:
    """
    Check whether a file or directory must be skipped.

    Comparison is done on whole path components, so ``/sys/kernel`` is
    excluded while ``/home/me/mysys/data`` is not.

    Args:
        path: Path to check (str or Path)

    Returns:
        True if the path should not be scanned
    """
    pure = PurePath(path)
    parts = pure.parts
    if not parts:
        return False

    if pure.anchor and len(parts) > 1 and parts[1] in ROOT_EXCLUSIONS:
        return True

    return any(_contains_run(parts, run) for run in ANYWHERE_EXCLUSIONS)
