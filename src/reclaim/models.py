"""Data models for reclaim."""

import os
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


class FileRecord(BaseModel):
    """One regular file discovered during a walk."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the file")
    size_bytes: int = Field(..., ge=0, description="Size in bytes")
    last_accessed: datetime = Field(..., description="Last access time")
    last_modified: datetime = Field(..., description="Last modification time")

    @classmethod
    def from_stat(cls, path: str | Path, stat: os.stat_result) -> "FileRecord":
        """Build a record from a stat result taken without following symlinks."""
        return cls(
            path=os.path.abspath(path),
            size_bytes=stat.st_size,
            last_accessed=datetime.fromtimestamp(stat.st_atime),
            last_modified=datetime.fromtimestamp(stat.st_mtime),
        )

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)


class CacheDirectoryRecord(BaseModel):
    """A directory matched against the cache pattern table."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the directory")
    label: str = Field(..., description="Tool or ecosystem that owns the directory")
    size_bytes: int = Field(..., gt=0, description="Total size of contained files")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)


class DuplicateGroup(BaseModel):
    """Two or more files with identical size and SHA-256 digest."""

    model_config = ConfigDict(frozen=True)

    size_bytes: int = Field(..., description="Size shared by every member")
    digest: str = Field(..., description="SHA-256 hex digest shared by every member")
    files: tuple[FileRecord, ...] = Field(..., description="Members in hashing order")

    @model_validator(mode="after")
    def check_members(self) -> "DuplicateGroup":
        if len(self.files) < 2:
            raise ValueError("a duplicate group needs at least two files")
        for record in self.files:
            if record.size_bytes != self.size_bytes:
                raise ValueError(f"{record.path} does not match group size {self.size_bytes}")
        return self

    @property
    def count(self) -> int:
        """Number of copies."""
        return len(self.files)

    @property
    def reclaimable_bytes(self) -> int:
        """Bytes freed by keeping exactly one copy."""
        return self.files[0].size_bytes * (len(self.files) - 1)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]


class AnalysisConfig(BaseModel):
    """Options for a disk analysis."""

    model_config = ConfigDict(frozen=True)

    min_size_mb: int = Field(100, ge=0, description="Minimum size in MB for the large-file scan")
    stale_days: int = Field(180, ge=0, description="Days since last access to count as stale")
    max_large_files: int = Field(
        10, gt=0, description="How many large files to surface (presentation only)"
    )
    cache_max_depth: int = Field(10, gt=0, description="Depth bound of the cache-directory walk")


class DiskAnalysis(BaseModel):
    """Complete result of analyzing one root."""

    root: str = Field(..., description="Root that was analyzed")
    timestamp: datetime = Field(default_factory=datetime.now)
    config: AnalysisConfig = Field(default_factory=AnalysisConfig)
    large_files: list[FileRecord] = Field(default_factory=list)
    duplicate_groups: list[DuplicateGroup] = Field(default_factory=list)
    stale_files: list[FileRecord] = Field(default_factory=list)
    cache_directories: list[CacheDirectoryRecord] = Field(default_factory=list)
    total_reclaimable_bytes: int = Field(0, description="Estimated bytes that could be freed")

    @property
    def duplicate_reclaimable_bytes(self) -> int:
        """Bytes freed by keeping one copy of every duplicate group."""
        return sum(g.reclaimable_bytes for g in self.duplicate_groups)

    @property
    def cache_reclaimable_bytes(self) -> int:
        """Bytes freed by removing every cache directory."""
        return sum(c.size_bytes for c in self.cache_directories)

    @property
    def stale_reclaimable_bytes(self) -> int:
        """Bytes freed by removing every stale file."""
        return sum(f.size_bytes for f in self.stale_files)

    @property
    def top_large_files(self) -> list[FileRecord]:
        """Large files truncated to the configured display limit."""
        return self.large_files[: self.config.max_large_files]

    @property
    def is_empty(self) -> bool:
        return not (
            self.large_files or self.duplicate_groups or self.stale_files or self.cache_directories
        )


class CleanupSelection(BaseModel):
    """Which parts of an analysis the user chose to remove."""

    duplicates: bool = Field(False, description="Remove all but one copy of each duplicate group")
    caches: bool = Field(False, description="Remove every cache directory")
    stale: bool = Field(False, description="Remove every stale file")
    large_files: list[str] = Field(
        default_factory=list, description="Explicitly chosen large files to remove"
    )


class CleanupPlan(BaseModel):
    """Files and directories to delete."""

    files: list[str] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.directories


class CleanupResult(BaseModel):
    """Result of deleting a single path."""

    path: str = Field(..., description="Path that was deleted")
    is_directory: bool = Field(False, description="Whether the path was a directory")
    bytes_freed: int = Field(0, description="Bytes freed by the deletion")
    success: bool = Field(True, description="Whether the deletion succeeded")
    error: str | None = Field(None, description="Error message if failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")
