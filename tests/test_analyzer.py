"""Tests for analyzer module."""

import os
import time
from datetime import datetime

from reclaim.analyzer import SCAN_STEPS, analyze_disk, estimate_reclaimable
from reclaim.models import (
    AnalysisConfig,
    CacheDirectoryRecord,
    DuplicateGroup,
    FileRecord,
)
from reclaim.scanner import SECONDS_PER_DAY

MB = 1024 * 1024


def make_record(path: str, size: int) -> FileRecord:
    """Helper to create file records."""
    return FileRecord(
        path=path,
        size_bytes=size,
        last_accessed=datetime(2020, 1, 1),
        last_modified=datetime(2020, 1, 1),
    )


class TestEstimateReclaimable:
    def test_sums_three_contributions(self):
        groups = [
            DuplicateGroup(
                size_bytes=100,
                digest="a" * 64,
                files=(make_record("/a", 100), make_record("/b", 100), make_record("/c", 100)),
            )
        ]
        caches = [CacheDirectoryRecord(path="/proj/node_modules", label="npm", size_bytes=1000)]
        stale = [make_record("/old1", 7), make_record("/old2", 3)]

        assert estimate_reclaimable(groups, caches, stale) == 200 + 1000 + 10

    def test_empty(self):
        assert estimate_reclaimable([], [], []) == 0

    def test_counts_overlapping_categories_twice(self):
        shared = make_record("/proj/node_modules/old.bin", 500)
        caches = [CacheDirectoryRecord(path="/proj/node_modules", label="npm", size_bytes=500)]
        assert estimate_reclaimable([], caches, [shared]) == 1000


class TestAnalyzeDisk:
    def test_exact_total(self, tmp_path, make_file):
        make_file(tmp_path / "docs" / "report.pdf", 5000, fill=b"r")
        make_file(tmp_path / "backup" / "report.pdf", 5000, fill=b"r")
        make_file(tmp_path / "web" / "node_modules" / "lib.js", 7000, fill=b"n")
        make_file(
            tmp_path / "archive" / "notes.txt",
            3000,
            fill=b"s",
            atime=time.time() - 400 * SECONDS_PER_DAY,
        )

        analysis = analyze_disk(tmp_path, AnalysisConfig(min_size_mb=0, stale_days=180))

        assert len(analysis.duplicate_groups) == 1
        assert [c.size_bytes for c in analysis.cache_directories] == [7000]
        assert [f.path for f in analysis.stale_files] == [str(tmp_path / "archive" / "notes.txt")]
        assert analysis.duplicate_reclaimable_bytes == 5000
        assert analysis.cache_reclaimable_bytes == 7000
        assert analysis.stale_reclaimable_bytes == 3000
        assert analysis.total_reclaimable_bytes == 5000 + 7000 + 3000

    def test_large_files_use_config(self, tmp_path, make_sparse_file):
        make_sparse_file(tmp_path / "big.iso", 3 * MB)
        make_sparse_file(tmp_path / "small.iso", MB)

        analysis = analyze_disk(tmp_path, AnalysisConfig(min_size_mb=2))
        assert [f.path for f in analysis.large_files] == [str(tmp_path / "big.iso")]

    def test_default_config(self, tmp_path):
        analysis = analyze_disk(tmp_path)
        assert analysis.config == AnalysisConfig()
        assert analysis.is_empty
        assert analysis.total_reclaimable_bytes == 0

    def test_root_is_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        analysis = analyze_disk(".")
        assert analysis.root == os.path.abspath(tmp_path)

    def test_progress_callback(self, tmp_path):
        calls = []
        analyze_disk(tmp_path, progress_callback=lambda name, cur, total: calls.append((name, cur)))

        assert [c[1] for c in calls] == [0, 1, 2, 3, 4]
        assert [c[0] for c in calls[:4]] == list(SCAN_STEPS)
        assert calls[-1] == ("done", 4)

    def test_stale_file_survives_duplicate_hashing(self, tmp_path, make_file):
        old = time.time() - 400 * SECONDS_PER_DAY
        make_file(tmp_path / "a.dat", 4096, fill=b"d", atime=old)
        make_file(tmp_path / "b.dat", 4096, fill=b"d", atime=old)

        analysis = analyze_disk(tmp_path, AnalysisConfig(min_size_mb=0))
        assert len(analysis.stale_files) == 2
        assert len(analysis.duplicate_groups) == 1
        assert analysis.total_reclaimable_bytes == 4096 + 2 * 4096
