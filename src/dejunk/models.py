"""Data models for dejunk."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dejunk.exceptions import TargetPathError

MIB = 1024 * 1024


def format_size(size_bytes: int) -> str:
    """Format bytes to a compact human-readable string (binary units)."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < MIB:
        return f"{size_bytes / 1024:.1f}KB"
    else:
        return f"{size_bytes / MIB:.1f}MB"


def resolve_target(path: str | Path) -> Path:
    """
    Expand and resolve the target root.

    Args:
        path: Path given by the user (may contain ~)

    Returns:
        Absolute path of an existing directory

    Raises:
        TargetPathError: If the path is missing or not a directory
    """
    expanded = Path(path).expanduser()
    if not expanded.exists():
        raise TargetPathError(str(path))
    if not expanded.is_dir():
        raise TargetPathError(str(path), "is not a directory")
    return expanded.resolve()


class ItemKind(str, Enum):
    """What a category matches on disk."""

    FILE = "file"
    DIRECTORY = "directory"


class CategoryGroup(str, Enum):
    """Classification tag used for mode filtering."""

    JUNK_FILES = "junk_files"  # OS, editor, log and cache files
    BUILD = "build"  # build output and cache directories
    WORKSPACE = "workspace"  # OS and IDE directories
    COMPILED = "compiled"
    ARCHIVE = "archive"
    EMPTY = "empty"


class Category(BaseModel):
    """Definition of a cleanup category."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for the category")
    name: str = Field(..., description="Human-readable name")
    kind: ItemKind = Field(..., description="Whether the category matches files or directories")
    patterns: list[str] = Field(..., description="Glob patterns or exact names, matched on base names")
    group: CategoryGroup = Field(..., description="Group used for mode filtering")
    untrack: bool = Field(
        default=False,
        description="Also remove approved patterns from the git index",
    )
    is_computed: bool = Field(
        default=False,
        description="Matches are computed by a predicate instead of patterns",
    )
    description: str = Field("", description="What this category contains")

    @field_validator("patterns")
    @classmethod
    def _require_patterns(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("a category needs at least one pattern")
        # Keep first occurrence order
        return list(dict.fromkeys(value))

    @property
    def item_label(self) -> str:
        """Plural noun used in previews."""
        return "files" if self.kind == ItemKind.FILE else "folders"


class Candidate(BaseModel):
    """A filesystem entry that matched a category during a scan."""

    absolute_path: Path = Field(..., description="Absolute path of the entry")
    display_path: str = Field(..., description="Root-relative path with forward slashes")
    size_bytes: int = Field(0, description="File size, or recursive size for directories")
    kind: ItemKind = Field(..., description="File or directory")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)


class RunConfiguration(BaseModel):
    """Immutable options for one cleanup run."""

    model_config = ConfigDict(frozen=True)

    target_root: Path = Field(..., description="Directory to clean")
    dry_run: bool = False
    force: bool = False
    verbose: bool = False
    quiet: bool = False
    only_system_files: bool = False
    only_build_files: bool = False
    skip_git: bool = False
    skip_archives: bool = False
    skip_empty_dirs: bool = False
    max_file_size_bytes: Optional[int] = Field(
        None, ge=0, description="Files larger than this are never deleted"
    )
    log_file: Optional[Path] = Field(None, description="Append a timestamped log here")
    case_sensitive: Optional[bool] = Field(
        None, description="Pattern case sensitivity; None uses the platform default"
    )

    @field_validator("target_root")
    @classmethod
    def _check_target_root(cls, value: Path) -> Path:
        # TargetPathError is not a ValueError, so it is raised as-is
        return resolve_target(value)

    @classmethod
    def from_cli(
        cls,
        path: str,
        max_file_size_mb: Optional[float] = None,
        log_file: Optional[str] = None,
        **flags: bool,
    ) -> "RunConfiguration":
        """Build a configuration from command-line values."""
        max_bytes = int(max_file_size_mb * MIB) if max_file_size_mb is not None else None
        return cls(
            target_root=Path(path),
            max_file_size_bytes=max_bytes,
            log_file=Path(log_file).expanduser() if log_file else None,
            **flags,
        )

    def is_protected(self, path: Path) -> bool:
        """Whether deleting this path would remove the run's own log file."""
        if self.log_file is None:
            return False
        log_path = self.log_file.resolve()
        return path == log_path or path in log_path.parents

    def exceeds_size_limit(self, size_bytes: int) -> bool:
        """Whether a file of this size must be left alone."""
        return self.max_file_size_bytes is not None and size_bytes > self.max_file_size_bytes

    @property
    def active_options(self) -> list[str]:
        """Names of the enabled mode flags, for the run header."""
        names = {
            "force": "Force",
            "verbose": "Verbose",
            "only_system_files": "OnlySystemFiles",
            "only_build_files": "OnlyBuildFiles",
            "skip_git": "SkipGit",
            "skip_archives": "SkipArchives",
            "skip_empty_dirs": "SkipEmptyDirs",
        }
        options = [label for attr, label in names.items() if getattr(self, attr)]
        if self.max_file_size_bytes is not None:
            options.append(f"MaxFileSize={format_size(self.max_file_size_bytes)}")
        return options


class RunStatistics(BaseModel):
    """Counters for one run. Only the executor mutates these."""

    files_deleted: int = 0
    folders_deleted: int = 0
    bytes_freed: int = Field(0, description="Sum of directly deleted file sizes")
    git_entries_untracked: int = 0
    errors: int = Field(0, description="Failed delete operations")
    started_at: datetime = Field(default_factory=datetime.now)

    def elapsed_seconds(self, now: Optional[datetime] = None) -> float:
        """Seconds since the run started."""
        return ((now or datetime.now()) - self.started_at).total_seconds()

    @property
    def is_empty(self) -> bool:
        """True when nothing was deleted, untracked or failed."""
        return not (
            self.files_deleted
            or self.folders_deleted
            or self.bytes_freed
            or self.git_entries_untracked
            or self.errors
        )

    @property
    def exit_code(self) -> int:
        """Process exit status: 1 if any delete failed."""
        return 1 if self.errors > 0 else 0
