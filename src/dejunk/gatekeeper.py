"""Preview and confirmation stage for dejunk.

Each category is shown in full, then approved or skipped as a whole. The
interactive prompt waits PROMPT_TIMEOUT seconds and proceeds with the
deletion when nothing is typed.
"""

import io
import logging
import os
import sys
import time
from typing import Iterable, Optional, Protocol

from rich.console import Console

from dejunk.display import Reporter, console
from dejunk.models import Candidate, Category, ItemKind, RunConfiguration

logger = logging.getLogger(__name__)

PROMPT_TIMEOUT = 5.0


class PromptProvider(Protocol):
    """Something that can ask a yes/no question with a timeout."""

    def ask(self, message: str, timeout: float) -> Optional[str]:
        """Return the typed answer, or None if the timeout expired."""
        ...


class TimedPrompt:
    """Reads one answer from the terminal, giving up after a timeout."""

    def __init__(self, output: Optional[Console] = None) -> None:
        self.console = output if output is not None else console

    def ask(self, message: str, timeout: float) -> Optional[str]:
        self.console.print(message, style="cyan", end="", markup=False, highlight=False)
        try:
            if os.name == "nt":
                return self._read_windows(timeout)
            return self._read_posix(timeout)
        except (OSError, ValueError, io.UnsupportedOperation) as e:
            # No usable terminal; behave like a timeout
            logger.debug("Cannot read prompt answer: %s", e)
            return None

    @staticmethod
    def _read_posix(timeout: float) -> Optional[str]:
        import select

        ready, _, _ = select.select([sys.stdin], [], [], timeout)
        if not ready:
            return None
        return sys.stdin.readline().strip()

    @staticmethod
    def _read_windows(timeout: float) -> Optional[str]:
        import msvcrt

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():
                return msvcrt.getwche().strip()
            time.sleep(0.05)
        return None


class ScriptedPrompt:
    """Returns canned answers instantly, for tests and automation.

    Once the answers run out every further question times out.
    """

    def __init__(self, answers: Iterable[Optional[str]] = ()) -> None:
        self._answers = list(answers)
        self.questions: list[str] = []

    def ask(self, message: str, timeout: float) -> Optional[str]:
        self.questions.append(message)
        if not self._answers:
            return None
        return self._answers.pop(0)


def show_preview(
    category: Category,
    candidates: list[Candidate],
    config: RunConfiguration,
    reporter: Reporter,
) -> None:
    """Display every candidate of a category with its size."""
    reporter.info(f"\n--- {category.name} ---", "bold green")
    reporter.info(f"Found {len(candidates)} {category.item_label}:", "yellow")

    for item in candidates:
        if item.kind == ItemKind.FILE and config.exceeds_size_limit(item.size_bytes):
            reporter.verbose(f"  ⚠ Skipped (too large): {item.display_path}", "yellow")
            continue
        reporter.info(f"  → {item.display_path} ({item.size_human})")


def review_category(
    category: Category,
    candidates: list[Candidate],
    config: RunConfiguration,
    reporter: Reporter,
    prompt: PromptProvider,
    timeout: float = PROMPT_TIMEOUT,
) -> bool:
    """
    Preview a category and decide whether to clean it.

    Args:
        category: Category being processed
        candidates: Scan results for the category
        config: Run configuration
        reporter: Output sink
        prompt: Source of the interactive answer
        timeout: Seconds to wait for an answer

    Returns:
        True to proceed with the whole category, False to skip it
    """
    if not candidates:
        return False

    show_preview(category, candidates, config, reporter)

    if config.dry_run or config.force:
        return True

    answer = prompt.ask(
        f"Delete all items in '{category.name}'? You have {timeout:.0f} seconds to decide "
        f"(default: Yes)...\nPress 'n' and Enter to skip, or wait to proceed: ",
        timeout,
    )

    if answer is None:
        reporter.info("\nTime expired - proceeding with cleanup...", "green")
        return True
    if answer[:1] in ("n", "N"):
        reporter.info(f"Skipped {category.name}", "yellow")
        return False
    return True
