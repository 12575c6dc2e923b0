"""Accumulate test-completion events into a run summary."""

import logging
from dataclasses import dataclass, field

from run_report_notifier.models.event import OutcomeCategory, TestOutcomeEvent
from run_report_notifier.models.summary import OutcomeCounts, RunSummary

log = logging.getLogger(__name__)


class RunAlreadyFinalizedError(Exception):
    """Raised when a run is finalized more than once."""


@dataclass(kw_only=True)
class RunAggregator:
    """Mutable per-run state, fed synchronously by the test host."""

    _outcomes: dict[str, OutcomeCategory] = field(default_factory=dict, init=False)
    _start_time: int | None = field(default=None, init=False)
    _passed: int = field(default=0, init=False)
    _failed: int = field(default=0, init=False)
    _summary: RunSummary | None = field(default=None, init=False, repr=False)

    @property
    def summary(self) -> RunSummary | None:
        """The frozen summary, once the run has been finalized."""
        return self._summary

    def record_event(self, event: TestOutcomeEvent) -> None:
        """Record a finished test. The latest outcome per test id wins."""
        if self._summary is not None:
            log.warning("Ignoring result for %s reported after run end", event.test_id)
            return

        self._outcomes[event.test_id] = event.outcome
        if self._start_time is None or event.start_time < self._start_time:
            self._start_time = event.start_time

        if event.passed:
            self._passed += 1
        else:
            self._failed += 1

    def finalize(self, run_end_time: int) -> RunSummary:
        """Freeze the run and compute its outcome counts.

        Raises:
            RunAlreadyFinalizedError: If the run was already finalized

        """
        if self._summary is not None:
            raise RunAlreadyFinalizedError("Run summary has already been finalized")

        start_time = self._start_time if self._start_time is not None else run_end_time
        self._summary = RunSummary(
            counts=OutcomeCounts.from_outcomes(self._outcomes.values()),
            start_time=start_time,
            end_time=run_end_time,
            passed=self._passed,
            failed=self._failed,
        )
        log.info(
            "Run finalized: %d test(s), %d passed, %d failed",
            self._summary.counts.total,
            self._passed,
            self._failed,
        )
        return self._summary
