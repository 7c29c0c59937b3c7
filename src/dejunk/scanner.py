"""Directory scanning for dejunk.

Walks the target root with os.scandir and yields the entries that match a
category. Permission errors and entries that vanish mid-scan are skipped
silently; they are never counted as run errors.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Generator, Iterable, Iterator

from dejunk.models import Candidate, Category, ItemKind

logger = logging.getLogger(__name__)

# Version control metadata is never scanned or cleaned
SKIP_DIRECTORIES = frozenset({".git", ".svn", ".hg"})

# Recursion guard for pathological trees
MAX_DEPTH = 256


def matches_pattern(name: str, pattern: str, case_sensitive: bool = True) -> bool:
    """
    Match a base name against a glob pattern or exact name.

    Args:
        name: Base name of the entry (never a full path)
        pattern: Exact name or shell-style wildcard pattern
        case_sensitive: False to compare case-insensitively (Windows targets)

    Returns:
        True if the name matches
    """
    if case_sensitive:
        return fnmatch.fnmatchcase(name, pattern)
    return fnmatch.fnmatchcase(name.lower(), pattern.lower())


def matches_any(name: str, patterns: Iterable[str], case_sensitive: bool = True) -> bool:
    """Check a base name against several patterns."""
    return any(matches_pattern(name, p, case_sensitive) for p in patterns)


def to_display_path(path: Path, root: Path) -> str:
    """Root-relative path with forward slashes, e.g. ./src/Thumbs.db."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        return path.as_posix()
    return f"./{relative.as_posix()}"


def _list_directory(directory: str) -> list[os.DirEntry] | None:
    """List a directory sorted by name, or None if it cannot be read."""
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda e: e.name)
    except (PermissionError, OSError) as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return None


def _is_real_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _is_real_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file(follow_symlinks=False)
    except OSError:
        return False


def get_directory_size(path: Path) -> int:
    """
    Calculate the total size of the files below a directory.

    Best-effort: unreadable subtrees and files that vanish count as 0.

    Returns:
        Total bytes
    """
    total_size = 0

    def _scan(p: str, depth: int) -> None:
        nonlocal total_size
        if depth > MAX_DEPTH:
            return
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            _scan(entry.path, depth + 1)
                    except (PermissionError, OSError):
                        continue
        except (PermissionError, OSError):
            pass

    _scan(str(path), 0)
    return total_size


def find_matching_entries(
    root: Path,
    patterns: list[str],
    kind: ItemKind,
    case_sensitive: bool = True,
    max_depth: int = MAX_DEPTH,
) -> Generator[Path, None, None]:
    """
    Find files or directories whose base name matches any pattern.

    Symlinks are neither followed nor matched. Matched directories are not
    descended into, since their content goes with them.

    Args:
        root: Directory to start searching from
        patterns: Names or glob patterns
        kind: Whether to yield files or directories
        case_sensitive: Pattern case sensitivity
        max_depth: Maximum depth to search

    Yields:
        Paths of matching entries
    """
    if max_depth <= 0:
        return

    entries = _list_directory(str(root))
    if entries is None:
        return

    for entry in entries:
        if _is_real_dir(entry):
            if kind == ItemKind.DIRECTORY and matches_any(entry.name, patterns, case_sensitive):
                yield Path(entry.path)
                continue
            if entry.name in SKIP_DIRECTORIES:
                continue
            yield from find_matching_entries(
                Path(entry.path), patterns, kind, case_sensitive, max_depth - 1
            )
        elif kind == ItemKind.FILE and _is_real_file(entry):
            if matches_any(entry.name, patterns, case_sensitive):
                yield Path(entry.path)


def _iter_empty(directory: str, is_root: bool, depth: int) -> Generator[Path, None, bool]:
    """Yield the topmost empty directories below *directory*.

    Returns True when *directory* holds nothing but empty directories, in
    which case the caller decides whether to report it or its parent.
    """
    entries = _list_directory(directory)
    if entries is None or depth > MAX_DEPTH:
        return False

    pending: list[Path] = []
    only_empty = True
    for entry in entries:
        if _is_real_dir(entry) and entry.name not in SKIP_DIRECTORIES:
            child_empty = yield from _iter_empty(entry.path, False, depth + 1)
            if child_empty:
                pending.append(Path(entry.path))
                continue
        only_empty = False

    if only_empty and not is_root:
        return True
    yield from pending
    return False


def find_empty_directories(root: Path) -> Generator[Path, None, None]:
    """
    Find directories that contain no files at any depth.

    A directory qualifies when it has no entries (hidden ones included), or
    only directories that qualify themselves. Only the topmost qualifying
    directory of a chain is yielded; the root itself never is.

    Yields:
        Paths of empty directories
    """
    yield from _iter_empty(str(root), True, 0)


def _make_candidate(path: Path, root: Path, kind: ItemKind) -> Candidate | None:
    try:
        if kind == ItemKind.FILE:
            size = path.stat().st_size
        else:
            size = get_directory_size(path)
    except (PermissionError, OSError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None
    return Candidate(
        absolute_path=path,
        display_path=to_display_path(path, root),
        size_bytes=size,
        kind=kind,
    )


def scan_category(
    root: Path,
    category: Category,
    case_sensitive: bool = True,
) -> Iterator[Candidate]:
    """
    Lazily scan the target root for a category's candidates.

    Args:
        root: Absolute target root
        category: Category to match
        case_sensitive: Pattern case sensitivity

    Yields:
        One Candidate per matching path
    """
    if category.is_computed:
        found = find_empty_directories(root)
    else:
        found = find_matching_entries(root, category.patterns, category.kind, case_sensitive)

    seen_paths: set[str] = set()
    for path in found:
        key = str(path)
        if key in seen_paths:
            continue
        seen_paths.add(key)

        candidate = _make_candidate(path, root, category.kind)
        if candidate is not None:
            yield candidate
