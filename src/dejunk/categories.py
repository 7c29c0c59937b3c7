"""Cleanup category definitions for dejunk."""

from dejunk.models import Category, CategoryGroup, ItemKind, RunConfiguration

# Placeholder pattern for the computed empty-directory category
EMPTY_DIRECTORY_PATTERN = "<empty>"

# All cleanup categories, in processing order within each group
CATEGORIES: dict[str, Category] = {
    # =============================================================================
    # JUNK FILES - OS leftovers, editor backups, logs and caches
    # =============================================================================
    "windows_files": Category(
        id="windows_files",
        name="Windows System Files",
        kind=ItemKind.FILE,
        patterns=["Thumbs.db", "ehthumbs.db", "ehthumbs_vista.db", "Desktop.ini", "*.lnk", "*.stackdump"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Thumbnail caches, folder settings, shortcuts and Cygwin stack dumps",
    ),
    "macos_files": Category(
        id="macos_files",
        name="macOS Files",
        kind=ItemKind.FILE,
        patterns=[".DS_Store", "._*", ".Spotlight-V100", ".Trashes", ".fseventsd", ".localized"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Finder metadata and AppleDouble resource forks",
    ),
    "linux_files": Category(
        id="linux_files",
        name="Linux/WSL Files",
        kind=ItemKind.FILE,
        patterns=["*~", ".nfs*"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Editor tilde backups and stale NFS handles",
    ),
    "zone_identifier_files": Category(
        id="zone_identifier_files",
        name="Zone Identifier Files",
        kind=ItemKind.FILE,
        patterns=["*Zone.Identifier", "*.Zone.Identifier"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Download markers copied across from Windows into WSL",
    ),
    "editor_backup_files": Category(
        id="editor_backup_files",
        name="Editor Backup Files",
        kind=ItemKind.FILE,
        patterns=["*.bak", "*.old", "*.orig", "*.swp", "*.swo", "*.tmp", "*.temp"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Backup, swap and merge leftover files",
    ),
    "log_files": Category(
        id="log_files",
        name="Development Log Files",
        kind=ItemKind.FILE,
        patterns=["*.log", "npm-debug.log*", "yarn-debug.log*", "yarn-error.log*", "debug.log"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Tool and package manager logs",
    ),
    "cache_files": Category(
        id="cache_files",
        name="Cache Files",
        kind=ItemKind.FILE,
        patterns=[".eslintcache", ".sass-cache", "*.cache", ".nyc_output", ".coverage"],
        group=CategoryGroup.JUNK_FILES,
        untrack=True,
        description="Linter, test coverage and preprocessor caches",
    ),
    # =============================================================================
    # DIRECTORIES - build output, caches, OS and IDE folders
    # =============================================================================
    "build_dirs": Category(
        id="build_dirs",
        name="Build Directories",
        kind=ItemKind.DIRECTORY,
        patterns=[
            "node_modules",
            "__pycache__",
            ".pytest_cache",
            "target",
            "build",
            "dist",
            "bin",
            "obj",
            ".next",
            ".nuxt",
        ],
        group=CategoryGroup.BUILD,
        description="Dependency installs and compiler output",
    ),
    "cache_dirs": Category(
        id="cache_dirs",
        name="Cache Directories",
        kind=ItemKind.DIRECTORY,
        patterns=[".cache", "cache", ".tmp", "tmp", "temp", ".sass-cache", ".parcel-cache"],
        group=CategoryGroup.BUILD,
        description="Tool caches and scratch directories",
    ),
    "system_dirs": Category(
        id="system_dirs",
        name="System Directories",
        kind=ItemKind.DIRECTORY,
        patterns=[
            ".Trash-*",
            ".AppleDouble",
            ".LSOverride",
            "$RECYCLE.BIN",
            "System Volume Information",
        ],
        group=CategoryGroup.WORKSPACE,
        description="Trash folders and OS-reserved directories",
    ),
    "ide_dirs": Category(
        id="ide_dirs",
        name="IDE Directories",
        kind=ItemKind.DIRECTORY,
        patterns=[".vscode", ".idea", ".settings", ".metadata", ".vs", ".venv", "venv", ".tox"],
        group=CategoryGroup.WORKSPACE,
        description="Editor settings and virtual environments",
    ),
    # =============================================================================
    # COMPILED AND ARCHIVE FILES
    # =============================================================================
    "compiled_files": Category(
        id="compiled_files",
        name="Compiled Files",
        kind=ItemKind.FILE,
        patterns=["*.pyc", "*.pyo", "*.class", "*.o", "*.obj", "*.exe", "*.dll", "*.so", "*.a"],
        group=CategoryGroup.COMPILED,
        description="Bytecode, object files and binaries",
    ),
    "archive_files": Category(
        id="archive_files",
        name="Archive Files",
        kind=ItemKind.FILE,
        patterns=["*.zip", "*.rar", "*.7z", "*.tar", "*.gz", "*.bz2", "*.xz"],
        group=CategoryGroup.ARCHIVE,
        description="Compressed archives",
    ),
    # =============================================================================
    # EMPTY DIRECTORIES - computed, must run last
    # =============================================================================
    "empty_dirs": Category(
        id="empty_dirs",
        name="Empty Directories",
        kind=ItemKind.DIRECTORY,
        patterns=[EMPTY_DIRECTORY_PATTERN],
        group=CategoryGroup.EMPTY,
        is_computed=True,
        description="Directories left with nothing in them",
    ),
}


def get_category(category_id: str) -> Category | None:
    """Get a category by ID."""
    return CATEGORIES.get(category_id)


def get_all_categories() -> list[Category]:
    """Get all categories."""
    return list(CATEGORIES.values())


def get_categories_by_group(group: CategoryGroup) -> list[Category]:
    """Get all categories in a group, in catalog order."""
    return [c for c in CATEGORIES.values() if c.group == group]


def categories_for_run(config: RunConfiguration) -> list[Category]:
    """
    Select and order the categories one run processes.

    Junk files come first, then directories, compiled files, archives,
    and empty directories last so that folders emptied by earlier
    deletions are picked up in the same run.

    Args:
        config: Run configuration with mode flags

    Returns:
        Categories in processing order
    """
    selected: list[Category] = []

    if not config.only_build_files:
        selected += get_categories_by_group(CategoryGroup.JUNK_FILES)

    if not config.only_system_files:
        selected += get_categories_by_group(CategoryGroup.BUILD)
        if not config.only_build_files:
            selected += get_categories_by_group(CategoryGroup.WORKSPACE)
        selected += get_categories_by_group(CategoryGroup.COMPILED)
        if not config.skip_archives:
            selected += get_categories_by_group(CategoryGroup.ARCHIVE)

    if not config.skip_empty_dirs:
        selected += get_categories_by_group(CategoryGroup.EMPTY)

    return selected
