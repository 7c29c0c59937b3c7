"""CLI interface for dejunk."""

from typing import NoReturn, Optional

import typer

from dejunk import __version__
from dejunk.categories import get_all_categories
from dejunk.display import console, show_catalog
from dejunk.exceptions import DejunkError
from dejunk.models import RunConfiguration
from dejunk.runner import run_cleanup

# Create Typer app
app = typer.Typer(
    name="dejunk",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _fail(error: DejunkError) -> NoReturn:
    """Print a fatal error and exit with status 1."""
    console.print(
        f"Error: {error}", style="red", markup=False, highlight=False, soft_wrap=True
    )
    raise typer.Exit(1)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dejunk version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Preview what would be deleted (recommended first)"
    ),
    force: bool = typer.Option(False, "--force", help="Skip all confirmation prompts"),
    path: str = typer.Option(".", "--path", help="Target directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed file operations"),
    quiet: bool = typer.Option(False, "--quiet", help="Minimal output (errors only)"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Append a timestamped log to FILE"
    ),
    only_system_files: bool = typer.Option(
        False, "--only-system-files", help="Clean only OS and editor junk files"
    ),
    only_build_files: bool = typer.Option(
        False, "--only-build-files", help="Clean only build artifacts and caches"
    ),
    skip_git: bool = typer.Option(False, "--skip-git", help="Don't remove files from Git tracking"),
    skip_archives: bool = typer.Option(False, "--skip-archives", help="Don't delete archive files"),
    skip_empty_dirs: bool = typer.Option(
        False, "--skip-empty-dirs", help="Don't remove empty directories"
    ),
    max_file_size_mb: Optional[float] = typer.Option(
        None, "--max-file-size-mb", min=0, help="Don't delete files larger than N MB"
    ),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Remove OS junk, build artifacts and caches from a project tree.

    Each category is previewed, then deleted unless you answer 'n' within
    5 seconds. With no answer the cleanup PROCEEDS. Run with --dry-run first.
    """
    if ctx.invoked_subcommand is not None:
        return

    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet cannot be combined")
    if only_system_files and only_build_files:
        raise typer.BadParameter("--only-system-files and --only-build-files cannot be combined")

    try:
        config = RunConfiguration.from_cli(
            path,
            max_file_size_mb=max_file_size_mb,
            log_file=log_file,
            dry_run=dry_run,
            force=force,
            verbose=verbose,
            quiet=quiet,
            only_system_files=only_system_files,
            only_build_files=only_build_files,
            skip_git=skip_git,
            skip_archives=skip_archives,
            skip_empty_dirs=skip_empty_dirs,
        )
    except DejunkError as e:
        _fail(e)

    try:
        stats = run_cleanup(config)
    except DejunkError as e:
        _fail(e)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    raise typer.Exit(stats.exit_code)


@app.command(name="list")
def list_categories() -> None:
    """List all cleanup categories."""
    show_catalog(get_all_categories())
    console.print()
    console.print("[dim]Empty directories are always processed last.[/dim]")


if __name__ == "__main__":
    app()
