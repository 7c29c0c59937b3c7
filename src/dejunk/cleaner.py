"""Cleanup execution for dejunk."""

import logging
import subprocess
from pathlib import Path

from dejunk.adapter import FilesystemAdapter, default_adapter
from dejunk.display import Reporter
from dejunk.models import Candidate, Category, ItemKind, RunConfiguration, RunStatistics

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 60


def delete_path(
    path: Path,
    kind: ItemKind,
    adapter: FilesystemAdapter | None = None,
) -> tuple[int, str | None]:
    """
    Delete a file or a directory tree.

    Args:
        path: Path to delete
        kind: Whether the path is a file or a directory
        adapter: Platform delete primitives

    Returns:
        Tuple of (bytes_freed, error_message). Directories free 0 bytes here;
        only directly deleted files are counted.
    """
    adapter = adapter or default_adapter()

    try:
        if kind == ItemKind.FILE:
            size = path.stat().st_size
            adapter.remove_file(path)
            return size, None

        adapter.remove_tree(path)
        return 0, None

    except PermissionError as e:
        return 0, f"Permission denied: {e}"
    except OSError as e:
        return 0, f"OS error: {e}"


def delete_candidates(
    candidates: list[Candidate],
    config: RunConfiguration,
    stats: RunStatistics,
    reporter: Reporter,
    adapter: FilesystemAdapter | None = None,
) -> None:
    """
    Delete approved candidates, or report what would go in a dry run.

    Failures are counted and reported; they never stop the loop.

    Args:
        candidates: Items approved by the gatekeeper
        config: Run configuration
        stats: Run statistics, updated in place
        reporter: Output sink
        adapter: Platform delete primitives
    """
    adapter = adapter or default_adapter()

    for item in candidates:
        path = item.absolute_path

        # Removed by an earlier delete or by someone else
        if not path.exists():
            continue

        if item.kind == ItemKind.FILE:
            try:
                current_size = path.stat().st_size
            except OSError:
                continue
            if config.exceeds_size_limit(current_size):
                continue

        if config.dry_run:
            reporter.info(f"Would delete: {item.display_path}", "yellow")
            continue

        bytes_freed, error = delete_path(path, item.kind, adapter)

        if error:
            stats.errors += 1
            label = "folder" if item.kind == ItemKind.DIRECTORY else "file"
            reporter.error(f"Failed {label}: {item.display_path} ({error})")
        elif item.kind == ItemKind.DIRECTORY:
            stats.folders_deleted += 1
            reporter.info(f"Deleted folder: {item.display_path}", "red")
        else:
            stats.files_deleted += 1
            stats.bytes_freed += bytes_freed
            reporter.info(f"Deleted: {item.display_path}", "red")


def is_git_repository(root: Path) -> bool:
    """Whether the target root is the top of a git work tree."""
    return (root / ".git").exists()


def untrack_pattern(root: Path, pattern: str) -> bool:
    """
    Remove paths matching a pattern from the git index, keeping them on disk.

    Args:
        root: Repository work tree
        pattern: Pathspec glob, e.g. '*.log'

    Returns:
        True if git removed at least one entry
    """
    try:
        result = subprocess.run(
            ["git", "rm", "-r", "--cached", "--quiet", "--", pattern],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("git rm for %s failed: %s", pattern, e)
        return False

    if result.returncode != 0:
        logger.debug("git rm for %s: %s", pattern, result.stderr.strip())
        return False
    return True


def untrack_patterns(
    category: Category,
    config: RunConfiguration,
    stats: RunStatistics,
    reporter: Reporter,
) -> None:
    """
    Untrack a category's patterns from git.

    Does nothing for dry runs, with skip_git, or outside a repository.
    Failures are ignored; only successes are counted.
    """
    if config.skip_git or config.dry_run or not category.untrack:
        return
    if not is_git_repository(config.target_root):
        return

    for pattern in category.patterns:
        if untrack_pattern(config.target_root, pattern):
            stats.git_entries_untracked += 1
            reporter.verbose(f"Removed from Git: {pattern}", "cyan")


def clean_category(
    category: Category,
    candidates: list[Candidate],
    config: RunConfiguration,
    stats: RunStatistics,
    reporter: Reporter,
    adapter: FilesystemAdapter | None = None,
) -> None:
    """Delete a category's approved candidates, then untrack its patterns."""
    delete_candidates(candidates, config, stats, reporter, adapter)
    untrack_patterns(category, config, stats, reporter)
