"""Tests for directory scanning."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from dejunk.categories import get_category
from dejunk.models import ItemKind
from dejunk.scanner import (
    find_empty_directories,
    find_matching_entries,
    get_directory_size,
    matches_pattern,
    scan_category,
    to_display_path,
)


def touch(path: Path, size: int = 0) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


class TestMatchesPattern:
    def test_exact_name(self):
        assert matches_pattern("Thumbs.db", "Thumbs.db")
        assert not matches_pattern("Thumbs.dbx", "Thumbs.db")

    def test_suffix_wildcard(self):
        assert matches_pattern("notes.bak", "*.bak")
        assert matches_pattern("file~", "*~")

    def test_prefix_wildcard(self):
        assert matches_pattern("._photo.jpg", "._*")
        assert matches_pattern(".nfs000123", ".nfs*")

    def test_contains_wildcard(self):
        assert matches_pattern("report.pdf:Zone.Identifier", "*Zone.Identifier")

    def test_case_sensitive_by_default(self):
        assert not matches_pattern("thumbs.db", "Thumbs.db")

    def test_case_insensitive(self):
        assert matches_pattern("thumbs.DB", "Thumbs.db", case_sensitive=False)
        assert matches_pattern("BUILD.LOG", "*.log", case_sensitive=False)


class TestToDisplayPath:
    def test_relative_to_root(self, tmp_path):
        assert to_display_path(tmp_path / "src" / "a.log", tmp_path) == "./src/a.log"

    def test_outside_root(self, tmp_path):
        outside = Path("/elsewhere/a.log")
        assert to_display_path(outside, tmp_path) == "/elsewhere/a.log"


class TestGetDirectorySize:
    def test_sums_nested_files(self, tmp_path):
        touch(tmp_path / "a.bin", 100)
        touch(tmp_path / "sub" / "b.bin", 50)
        touch(tmp_path / "sub" / "deeper" / "c.bin", 25)
        assert get_directory_size(tmp_path) == 175

    def test_empty_directory(self, tmp_path):
        assert get_directory_size(tmp_path) == 0

    def test_unreadable_counts_zero(self, tmp_path):
        with patch("os.scandir", side_effect=PermissionError("Access denied")):
            assert get_directory_size(tmp_path) == 0


class TestFindMatchingEntries:
    def test_finds_nested_files(self, tmp_path):
        touch(tmp_path / "a.log")
        touch(tmp_path / "x" / "y" / "b.log")
        touch(tmp_path / "x" / "keep.txt")

        found = sorted(find_matching_entries(tmp_path, ["*.log"], ItemKind.FILE))
        assert found == sorted([tmp_path / "a.log", tmp_path / "x" / "y" / "b.log"])

    def test_files_do_not_match_directories(self, tmp_path):
        (tmp_path / "logs.log").mkdir()
        assert list(find_matching_entries(tmp_path, ["*.log"], ItemKind.FILE)) == []

    def test_directories_do_not_match_files(self, tmp_path):
        touch(tmp_path / "build")
        assert list(find_matching_entries(tmp_path, ["build"], ItemKind.DIRECTORY)) == []

    def test_does_not_descend_into_matches(self, tmp_path):
        outer = tmp_path / "project" / "node_modules"
        (outer / "pkg" / "node_modules").mkdir(parents=True)

        found = list(find_matching_entries(tmp_path, ["node_modules"], ItemKind.DIRECTORY))
        assert found == [outer]

    def test_skips_git_metadata(self, tmp_path):
        touch(tmp_path / ".git" / "something.tmp")
        assert list(find_matching_entries(tmp_path, ["*.tmp"], ItemKind.FILE)) == []

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_ignores_symlinks(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        touch(real / "a.log")
        (tmp_path / "link").symlink_to(real, target_is_directory=True)
        (tmp_path / "alias.log").symlink_to(real / "a.log")

        found = list(find_matching_entries(tmp_path, ["*.log"], ItemKind.FILE))
        assert found == [real / "a.log"]

    def test_handles_permission_error(self, tmp_path):
        touch(tmp_path / "a.log")
        with patch("os.scandir", side_effect=PermissionError("Access denied")):
            assert list(find_matching_entries(tmp_path, ["*.log"], ItemKind.FILE)) == []

    def test_case_insensitive_scan(self, tmp_path):
        touch(tmp_path / "THUMBS.DB")
        found = list(
            find_matching_entries(tmp_path, ["Thumbs.db"], ItemKind.FILE, case_sensitive=False)
        )
        assert found == [tmp_path / "THUMBS.DB"]


class TestFindEmptyDirectories:
    def test_finds_empty_directory(self, tmp_path):
        (tmp_path / "empty").mkdir()
        touch(tmp_path / "full" / "file.txt")
        assert list(find_empty_directories(tmp_path)) == [tmp_path / "empty"]

    def test_root_never_reported(self, tmp_path):
        assert list(find_empty_directories(tmp_path)) == []

    def test_hidden_entries_count(self, tmp_path):
        touch(tmp_path / "dir" / ".keep")
        assert list(find_empty_directories(tmp_path)) == []

    def test_reports_topmost_of_empty_chain(self, tmp_path):
        (tmp_path / "a" / "b" / "c").mkdir(parents=True)
        touch(tmp_path / "other.txt")
        assert list(find_empty_directories(tmp_path)) == [tmp_path / "a"]

    def test_mixed_subtree(self, tmp_path):
        (tmp_path / "a" / "empty1").mkdir(parents=True)
        (tmp_path / "a" / "empty2" / "inner").mkdir(parents=True)
        touch(tmp_path / "a" / "file.txt")
        assert sorted(find_empty_directories(tmp_path)) == [
            tmp_path / "a" / "empty1",
            tmp_path / "a" / "empty2",
        ]

    def test_all_empty_children_of_root(self, tmp_path):
        (tmp_path / "x").mkdir()
        (tmp_path / "y" / "z").mkdir(parents=True)
        assert sorted(find_empty_directories(tmp_path)) == [tmp_path / "x", tmp_path / "y"]

    def test_git_directory_is_left_alone(self, tmp_path):
        (tmp_path / ".git" / "refs" / "tags").mkdir(parents=True)
        assert list(find_empty_directories(tmp_path)) == []


class TestScanCategory:
    def test_one_candidate_per_file(self, tmp_path):
        # debug.log matches both '*.log' and 'debug.log'
        touch(tmp_path / "debug.log", 12)
        touch(tmp_path / "npm-debug.log", 3)

        candidates = list(scan_category(tmp_path, get_category("log_files")))
        paths = sorted(c.display_path for c in candidates)
        assert paths == ["./debug.log", "./npm-debug.log"]

    def test_candidate_metadata(self, tmp_path):
        touch(tmp_path / "src" / "Thumbs.db", 10)

        (candidate,) = scan_category(tmp_path, get_category("windows_files"))
        assert candidate.absolute_path == tmp_path / "src" / "Thumbs.db"
        assert candidate.display_path == "./src/Thumbs.db"
        assert candidate.size_bytes == 10
        assert candidate.kind == ItemKind.FILE

    def test_directory_candidate_size(self, tmp_path):
        touch(tmp_path / "node_modules" / "a.js", 300)
        touch(tmp_path / "node_modules" / "lib" / "b.js", 200)

        (candidate,) = scan_category(tmp_path, get_category("build_dirs"))
        assert candidate.kind == ItemKind.DIRECTORY
        assert candidate.size_bytes == 500

    def test_empty_directories_category(self, tmp_path):
        (tmp_path / "nothing").mkdir()
        (candidate,) = scan_category(tmp_path, get_category("empty_dirs"))
        assert candidate.display_path == "./nothing"
        assert candidate.size_bytes == 0

    def test_is_lazy(self, tmp_path):
        touch(tmp_path / "a.bak")
        result = scan_category(tmp_path, get_category("editor_backup_files"))
        assert not isinstance(result, list)
        assert next(result).display_path == "./a.bak"

    def test_no_matches(self, tmp_path):
        touch(tmp_path / "README.md")
        assert list(scan_category(tmp_path, get_category("macos_files"))) == []
