"""Tests for cleanup categories."""

import pytest

from dejunk.categories import (
    CATEGORIES,
    categories_for_run,
    get_all_categories,
    get_categories_by_group,
    get_category,
)
from dejunk.models import CategoryGroup, ItemKind, RunConfiguration


@pytest.fixture
def config_factory(tmp_path):
    def _make(**flags):
        return RunConfiguration(target_root=tmp_path, **flags)

    return _make


def ids(categories):
    return [c.id for c in categories]


class TestCategories:
    def test_categories_not_empty(self):
        assert len(CATEGORIES) == 14

    def test_all_categories_have_required_fields(self):
        for cat_id, cat in CATEGORIES.items():
            assert cat.id == cat_id
            assert cat.name
            assert len(cat.patterns) > 0, f"{cat_id} has no patterns"
            assert cat.kind in ItemKind
            assert cat.description

    def test_get_category_exists(self):
        cat = get_category("build_dirs")
        assert cat is not None
        assert cat.kind == ItemKind.DIRECTORY
        assert "node_modules" in cat.patterns

    def test_get_category_not_exists(self):
        assert get_category("nonexistent_category") is None

    def test_get_all_categories(self):
        assert len(get_all_categories()) == len(CATEGORIES)

    def test_only_junk_files_untrack(self):
        for cat in get_all_categories():
            assert cat.untrack == (cat.group == CategoryGroup.JUNK_FILES)

    def test_junk_file_names_contain_files(self):
        for cat in get_categories_by_group(CategoryGroup.JUNK_FILES):
            assert "Files" in cat.name
            assert cat.kind == ItemKind.FILE

    def test_build_group_names(self):
        names = [c.name for c in get_categories_by_group(CategoryGroup.BUILD)]
        assert names == ["Build Directories", "Cache Directories"]

    def test_empty_dirs_is_computed(self):
        cat = get_category("empty_dirs")
        assert cat.is_computed
        assert cat.kind == ItemKind.DIRECTORY

    def test_windows_files_patterns(self):
        cat = get_category("windows_files")
        assert cat.patterns == [
            "Thumbs.db",
            "ehthumbs.db",
            "ehthumbs_vista.db",
            "Desktop.ini",
            "*.lnk",
            "*.stackdump",
        ]


class TestCategoriesForRun:
    def test_default_order(self, config_factory):
        selected = ids(categories_for_run(config_factory()))
        assert selected[:7] == ids(get_categories_by_group(CategoryGroup.JUNK_FILES))
        assert selected[7:11] == ["build_dirs", "cache_dirs", "system_dirs", "ide_dirs"]
        assert selected[11:] == ["compiled_files", "archive_files", "empty_dirs"]

    def test_empty_dirs_always_last(self, config_factory):
        for flags in ({}, {"only_system_files": True}, {"only_build_files": True}):
            assert ids(categories_for_run(config_factory(**flags)))[-1] == "empty_dirs"

    def test_only_system_files(self, config_factory):
        selected = categories_for_run(config_factory(only_system_files=True))
        groups = {c.group for c in selected}
        assert groups == {CategoryGroup.JUNK_FILES, CategoryGroup.EMPTY}

    def test_only_build_files(self, config_factory):
        selected = ids(categories_for_run(config_factory(only_build_files=True)))
        assert selected == [
            "build_dirs",
            "cache_dirs",
            "compiled_files",
            "archive_files",
            "empty_dirs",
        ]

    def test_skip_archives(self, config_factory):
        assert "archive_files" not in ids(categories_for_run(config_factory(skip_archives=True)))

    def test_skip_empty_dirs(self, config_factory):
        assert "empty_dirs" not in ids(categories_for_run(config_factory(skip_empty_dirs=True)))
