"""Tests for path exclusion rules."""

from pathlib import Path

import pytest

from reclaim.filters import is_excluded


class TestVirtualFilesystems:
    @pytest.mark.parametrize("path", ["/proc/1/status", "/sys/kernel", "/dev/null", "/run/user"])
    def test_excludes_mounts_below_root(self, path):
        assert is_excluded(path)

    def test_excludes_the_mount_itself(self):
        assert is_excluded("/proc")

    def test_does_not_match_inside_other_names(self):
        assert not is_excluded("/home/me/mysys/data")
        assert not is_excluded("/home/me/procurement/report.pdf")

    def test_does_not_match_nested_directory_with_same_name(self):
        assert not is_excluded("/home/me/project/sys/data")
        assert not is_excluded("/tmp/proc")

    def test_relative_paths_are_not_anchored(self):
        assert not is_excluded("sys/data")


class TestAnywhereExclusions:
    def test_excludes_git_directory(self):
        assert is_excluded("/home/me/project/.git")

    def test_excludes_files_inside_git(self):
        assert is_excluded("/home/me/project/.git/objects/ab/cdef")

    def test_does_not_match_similar_names(self):
        assert not is_excluded("/home/me/project/.gitignore")
        assert not is_excluded("/home/me/project/my.git.backup")

    def test_excludes_trash(self):
        assert is_excluded("/home/me/.local/share/Trash/files/old.txt")
        assert is_excluded("/Users/me/.Trash/old.txt")

    def test_excludes_library_caches_sequence(self):
        assert is_excluded("/Users/me/Library/Caches/com.example")

    def test_requires_full_sequence(self):
        assert not is_excluded("/Users/me/Library/Preferences")
        assert not is_excluded("/Users/me/Caches/file")

    def test_accepts_path_objects(self):
        assert is_excluded(Path("/repo/.git/HEAD"))
        assert not is_excluded(Path("/repo/src/main.py"))

    def test_empty_path(self):
        assert not is_excluded("")
