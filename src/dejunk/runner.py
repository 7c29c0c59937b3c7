"""Run orchestration for dejunk.

One run walks every selected category in order:

    scan -> preview/confirm -> delete (-> untrack)

and finishes with the summary. Categories are processed strictly one after
another; empty directories always come last.
"""

import logging
from enum import Enum

from dejunk.adapter import FilesystemAdapter, default_adapter
from dejunk.categories import categories_for_run
from dejunk.cleaner import clean_category
from dejunk.display import Reporter, show_header, show_summary
from dejunk.gatekeeper import PromptProvider, TimedPrompt, review_category
from dejunk.models import Candidate, Category, RunConfiguration, RunStatistics
from dejunk.scanner import scan_category

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Stages a run moves through."""

    INIT = "init"
    SCANNING = "scanning"
    PROMPTING = "prompting"
    EXECUTING = "executing"
    REPORTING = "reporting"
    TERMINAL = "terminal"


class CleanupRun:
    """A single cleanup invocation.

    Attributes:
        config: Immutable run options.
        stats: Counters, updated by the executor only.
        state: Current stage, for progress reporting and tests.
    """

    def __init__(
        self,
        config: RunConfiguration,
        reporter: Reporter,
        prompt: PromptProvider | None = None,
        adapter: FilesystemAdapter | None = None,
    ) -> None:
        self.config = config
        self.reporter = reporter
        self.prompt = prompt or TimedPrompt(reporter.console)
        self.adapter = adapter or default_adapter()
        self.stats = RunStatistics()
        self.state = RunState.INIT

    @property
    def case_sensitive(self) -> bool:
        if self.config.case_sensitive is not None:
            return self.config.case_sensitive
        return self.adapter.case_sensitive

    def _set_state(self, state: RunState, category: Category | None = None) -> None:
        self.state = state
        if category is not None:
            logger.debug("%s: %s", state.value, category.id)

    def _protects(self, item: Candidate) -> bool:
        if self.config.is_protected(item.absolute_path):
            logger.debug("Keeping %s: holds the log file", item.display_path)
            return True
        return False

    def process_category(self, category: Category) -> bool:
        """
        Scan, confirm and clean one category.

        Returns:
            True if the category was approved
        """
        self._set_state(RunState.SCANNING, category)
        candidates = [
            item
            for item in scan_category(self.config.target_root, category, self.case_sensitive)
            if not self._protects(item)
        ]

        self._set_state(RunState.PROMPTING, category)
        if not review_category(category, candidates, self.config, self.reporter, self.prompt):
            return False

        self._set_state(RunState.EXECUTING, category)
        clean_category(category, candidates, self.config, self.stats, self.reporter, self.adapter)
        return True

    def run(self) -> RunStatistics:
        """Process every selected category and print the summary."""
        show_header(self.config, self.reporter)
        self.reporter.verbose(
            f"Platform: {self.adapter.name} "
            f"(case-{'sensitive' if self.case_sensitive else 'insensitive'} matching)",
            "cyan",
        )
        self.reporter.info("Starting cleanup process...", "yellow")

        for category in categories_for_run(self.config):
            self.process_category(category)

        self._set_state(RunState.REPORTING)
        show_summary(self.config, self.stats, self.reporter)
        self._set_state(RunState.TERMINAL)
        return self.stats


def run_cleanup(
    config: RunConfiguration,
    reporter: Reporter | None = None,
    prompt: PromptProvider | None = None,
    adapter: FilesystemAdapter | None = None,
) -> RunStatistics:
    """
    Run a complete cleanup.

    Args:
        config: Run configuration
        reporter: Output sink; built from the config if omitted
        prompt: Confirmation provider; the terminal prompt if omitted
        adapter: Platform primitives; detected if omitted

    Returns:
        Final statistics. Use stats.exit_code for the process status.
    """
    owns_reporter = reporter is None
    reporter = reporter or Reporter.for_config(config)
    try:
        return CleanupRun(config, reporter, prompt, adapter).run()
    finally:
        if owns_reporter:
            reporter.close()
