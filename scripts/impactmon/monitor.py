"""
Poll-diff-alert runner.

Loads the last-check timestamp, runs every checker, sends one digest if
anything fired and persists the new timestamp.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from .checkers.base import CheckResult, SignalChecker
from .checkers.registry import run_checkers
from .digest import DigestDispatcher
from .state import RunState, StateStore, utc_now

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Outcome of a single monitor run."""

    started_at: datetime
    last_check: datetime
    results: List[CheckResult] = field(default_factory=list)
    digest_sent: bool = False
    saved_state: Optional[RunState] = None

    @property
    def alerts(self) -> List[str]:
        return [alert for result in self.results for alert in result.alerts]

    @property
    def errors(self) -> List[str]:
        return [error for result in self.results for error in result.errors]

    def __str__(self) -> str:
        return (
            f"{len(self.alerts)} alert(s) from {len(self.results)} checker(s)"
            f"{f' ({len(self.errors)} errors)' if self.errors else ''}"
            f"{', digest sent' if self.digest_sent else ''}"
        )


class Monitor:
    """Runs one full poll-diff-alert cycle."""

    def __init__(
        self,
        store: StateStore,
        checkers: List[SignalChecker],
        dispatcher: DigestDispatcher,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.checkers = checkers
        self.dispatcher = dispatcher
        self._now = now or utc_now

    def run(self, dry_run: bool = False) -> RunSummary:
        """
        Run all checkers and dispatch the digest.

        Args:
            dry_run: Collect alerts only; do not send or persist state.

        Returns:
            RunSummary with per-checker results.
        """
        state = self.store.load()
        summary = RunSummary(started_at=self._now(), last_check=state.last_check)
        logger.info("Monitor run started (last check %s)", state.last_check.isoformat())

        try:
            summary.results = run_checkers(self.checkers, state.last_check)
            if not dry_run:
                summary.digest_sent = self.dispatcher.dispatch(summary.alerts, generated_at=self._now())
        finally:
            if not dry_run:
                summary.saved_state = self.store.save(self._now())

        logger.info("Monitor run complete: %s", summary)
        return summary


def build_monitor(cfg=None) -> Monitor:
    """Wire the default store, checkers and email channel from configuration."""
    if cfg is None:
        from .config import config as cfg

    from .checkers.registry import get_all_checkers
    from .emailer import Emailer

    rules = cfg.rules()
    dispatcher = DigestDispatcher(Emailer.from_config(cfg, rules.ticker), rules)
    return Monitor(StateStore(cfg.state_path), get_all_checkers(cfg), dispatcher)
