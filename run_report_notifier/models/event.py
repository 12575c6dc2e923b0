"""Models for test-completion events reported by the test host."""

from dataclasses import dataclass
from typing import Literal

OutcomeCategory = Literal["expected", "unexpected", "flaky", "skipped"]
TestStatus = Literal["passed", "failed", "skipped"]

OUTCOME_CATEGORIES: tuple[OutcomeCategory, ...] = (
    "expected",
    "unexpected",
    "flaky",
    "skipped",
)


@dataclass(frozen=True, kw_only=True)
class TestOutcomeEvent:
    """A single finished test as reported by the host.

    ``start_time`` is an epoch timestamp in milliseconds. ``status`` is the
    status of the final attempt; only ``"passed"`` counts as a pass.
    """

    __test__ = False

    test_id: str
    outcome: OutcomeCategory
    start_time: int
    status: TestStatus

    @property
    def passed(self) -> bool:
        """Whether the final attempt passed."""
        return self.status == "passed"
