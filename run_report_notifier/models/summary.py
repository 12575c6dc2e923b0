"""Models for a finalized test run."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, TypeAlias

from run_report_notifier.duration import elapsed
from run_report_notifier.models.event import OutcomeCategory

RunStatus: TypeAlias = Literal["Success", "Fail"]


@dataclass(frozen=True, kw_only=True)
class OutcomeCounts:
    """Number of distinct tests per outcome category."""

    expected: int = 0
    unexpected: int = 0
    flaky: int = 0
    skipped: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[OutcomeCategory]) -> "OutcomeCounts":
        """Count outcomes in a single pass."""
        counter = Counter(outcomes)
        return cls(
            expected=counter["expected"],
            unexpected=counter["unexpected"],
            flaky=counter["flaky"],
            skipped=counter["skipped"],
        )

    @property
    def total(self) -> int:
        """Total number of tests counted."""
        return self.expected + self.unexpected + self.flaky + self.skipped


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Frozen summary of a run, produced once when the run finishes."""

    counts: OutcomeCounts
    start_time: int
    end_time: int
    passed: int
    failed: int

    @property
    def duration(self) -> int:
        """Run duration in milliseconds."""
        return elapsed(self.start_time, self.end_time)

    @property
    def status(self) -> RunStatus:
        """Overall status: any non-passing test fails the run."""
        return "Success" if self.failed == 0 else "Fail"
