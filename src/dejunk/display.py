"""Rich terminal display and log mirroring for dejunk."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from dejunk.exceptions import LogFileError
from dejunk.models import Category, ItemKind, RunConfiguration, RunStatistics, format_size

__all__ = [
    "Reporter",
    "console",
    "format_size",
    "show_catalog",
    "show_header",
    "show_summary",
]

console = Console()

RUN_LOGGER = "dejunk.run"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Reporter:
    """Writes status lines to the console and mirrors them to the log file.

    The console honours quiet and verbose; errors are always shown. The log
    file, when configured, receives every message.
    """

    def __init__(
        self,
        output: Optional[Console] = None,
        quiet: bool = False,
        verbose: bool = False,
        log_file: Optional[Path] = None,
    ) -> None:
        self.console = output if output is not None else console
        self.quiet = quiet
        self.verbose_enabled = verbose
        self.log_file = log_file
        self._logger = logging.getLogger(RUN_LOGGER)
        self._handler: Optional[logging.FileHandler] = None

        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                self._handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            except OSError as e:
                raise LogFileError(str(log_file), e.strerror or str(e)) from e
            self._handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            self._logger.addHandler(self._handler)
            self._logger.setLevel(logging.INFO)
            self._logger.propagate = False

    @classmethod
    def for_config(cls, config: RunConfiguration, console: Optional[Console] = None) -> "Reporter":
        return cls(
            output=console,
            quiet=config.quiet,
            verbose=config.verbose,
            log_file=config.log_file,
        )

    def _emit(self, level: int, message: str, style: Optional[str], show: bool) -> None:
        if show:
            self.console.print(Text(message, style=style or ""), soft_wrap=True)
        if self._handler is not None:
            self._logger.log(level, message.strip("\n"))

    def info(self, message: str, style: Optional[str] = None) -> None:
        """Normal status line, hidden in quiet mode."""
        self._emit(logging.INFO, message, style, not self.quiet)

    def verbose(self, message: str, style: Optional[str] = None) -> None:
        """Detail line, shown only in verbose mode."""
        self._emit(logging.INFO, message, style, self.verbose_enabled and not self.quiet)

    def error(self, message: str) -> None:
        """Error line, always shown."""
        self._emit(logging.ERROR, message, "red", True)

    def log_only(self, message: str) -> None:
        """Write to the log file without touching the console."""
        if self._handler is not None:
            self._logger.info(message)

    def close(self) -> None:
        """Detach and close the log file handler."""
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None


def show_header(config: RunConfiguration, reporter: Reporter) -> None:
    """Display the run header and start the log file."""
    reporter.log_only(f"=== Cleanup Started: {datetime.now():%c} ===")
    reporter.log_only(
        f"Parameters: DryRun={config.dry_run}, Force={config.force}, Path={config.target_root}"
    )

    reporter.info("=== PROJECT JUNK CLEANUP ===", "bold cyan")
    reporter.info(f"Target: {config.target_root}", "yellow")
    if config.dry_run:
        reporter.info("Mode: DRY RUN (Preview Only)", "magenta")
    else:
        reporter.info("Mode: LIVE CLEANUP", "red")

    options = config.active_options
    if options:
        reporter.info(f"Options: {', '.join(options)}", "cyan")
    reporter.info("=" * 50, "cyan")


def show_summary(config: RunConfiguration, stats: RunStatistics, reporter: Reporter) -> None:
    """Display final statistics and close out the log file."""
    elapsed = stats.elapsed_seconds()

    reporter.info("\n=== CLEANUP SUMMARY ===", "bold cyan")
    reporter.info(f"Files deleted: {stats.files_deleted}")
    reporter.info(f"Folders deleted: {stats.folders_deleted}")
    reporter.info(f"Space freed: {format_size(stats.bytes_freed)}")
    if not config.skip_git:
        reporter.info(f"Git entries untracked: {stats.git_entries_untracked}")
    reporter.info(f"Errors: {stats.errors}", "red" if stats.errors else None)
    reporter.info(f"Time: {elapsed:.0f} seconds")

    if config.dry_run:
        reporter.info(
            "\nDRY RUN - No files were deleted. Run without --dry-run to clean.", "magenta"
        )
    else:
        reporter.info("\nCleanup completed!", "green")
        if stats.git_entries_untracked > 0:
            reporter.info(
                "Next steps: git status, then git commit -m 'Remove junk files'", "yellow"
            )

    if reporter.log_file is not None:
        reporter.log_only(f"=== Cleanup Completed: {datetime.now():%c} ===")
        reporter.log_only(
            f"Statistics: Files={stats.files_deleted}, Folders={stats.folders_deleted}, "
            f"Errors={stats.errors}"
        )
        reporter.info(f"Log saved to: {reporter.log_file}", "cyan")


def show_catalog(categories: list[Category], out: Optional[Console] = None) -> None:
    """Display the category catalog."""
    out = out or console
    table = Table(title="Cleanup Categories", show_header=True, header_style="bold")
    table.add_column("ID", style="bold")
    table.add_column("Category")
    table.add_column("Kind")
    table.add_column("Patterns")

    for cat in categories:
        kind = "[cyan]folders[/cyan]" if cat.kind == ItemKind.DIRECTORY else "files"
        patterns = cat.description if cat.is_computed else ", ".join(cat.patterns)
        table.add_row(cat.id, cat.name, kind, patterns)

    out.print(table)
