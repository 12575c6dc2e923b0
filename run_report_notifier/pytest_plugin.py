"""pytest plugin reporting each test session to a webhook.

Enabled by passing ``--run-report-config`` with a JSON ``NotifierConfig``::

    pytest --run-report-config='{"webhook_url": "https://hooks.example.com/x"}'
"""

import asyncio
import logging
import time
from collections.abc import Sequence

import pytest
from pydantic import ValidationError

from run_report_notifier.config import NotifierConfig
from run_report_notifier.dispatcher import DeliveryResult
from run_report_notifier.models.event import (
    OutcomeCategory,
    TestOutcomeEvent,
    TestStatus,
)
from run_report_notifier.reporter import SummaryReporter

log = logging.getLogger(__name__)

PLUGIN_NAME = "run-report-notifier"


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def classify(reports: Sequence[pytest.TestReport]) -> tuple[OutcomeCategory, TestStatus]:
    """Map the phase reports of one test to its outcome and final status."""
    outcomes = {report.outcome for report in reports}

    if "failed" in outcomes:
        return "unexpected", "failed"
    if "skipped" in outcomes:
        if any(hasattr(report, "wasxfail") for report in reports):
            return "expected", "skipped"
        return "skipped", "skipped"
    # pytest-rerunfailures reports failed attempts as "rerun"
    if "rerun" in outcomes:
        return "flaky", "passed"
    return "expected", "passed"


class RunReportPlugin:
    """Feeds pytest's test lifecycle into a SummaryReporter."""

    def __init__(self, reporter: SummaryReporter) -> None:
        self.reporter = reporter
        self.results: Sequence[DeliveryResult] = ()
        self._start_times: dict[str, int] = {}
        self._reports: dict[str, list[pytest.TestReport]] = {}

    def pytest_runtest_logstart(self, nodeid: str) -> None:
        """Remember when the test started."""
        self._start_times.setdefault(nodeid, now_ms())

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        """Collect the report of one phase (setup, call, teardown or rerun)."""
        self._reports.setdefault(report.nodeid, []).append(report)

    def pytest_runtest_logfinish(self, nodeid: str) -> None:
        """Record one event for the finished test."""
        reports = self._reports.pop(nodeid, [])
        start_time = self._start_times.pop(nodeid, now_ms())
        if not reports:
            return

        outcome, status = classify(reports)
        self.reporter.record_event(
            TestOutcomeEvent(
                test_id=nodeid,
                outcome=outcome,
                start_time=start_time,
                status=status,
            )
        )

    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        """Send the run notification and wait for its delivery."""
        self.results = asyncio.run(self.reporter.complete(now_ms()))

    def pytest_terminal_summary(
        self, terminalreporter: pytest.TerminalReporter
    ) -> None:
        """Show the delivery outcome in the terminal summary."""
        terminalreporter.write_sep("-", "run report notification")
        for result in self.results:
            if result.delivered:
                terminalreporter.write_line("notification delivered")
            else:
                terminalreporter.write_line(
                    f"notification failed: {result.message}", red=True
                )


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the --run-report-config option."""
    group = parser.getgroup("run-report", "test run summary notification")
    group.addoption(
        "--run-report-config",
        default=None,
        help="JSON configuration for the run report notification",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Enable the reporter when a configuration is given.

    Raises:
        pytest.UsageError: If the configuration is not valid JSON or fails
            validation, so the session stops before any test runs

    """
    raw_config = config.getoption("run_report_config")
    # only the xdist controller sees the whole run
    if not raw_config or hasattr(config, "workerinput"):
        return

    try:
        notifier_config = NotifierConfig.model_validate_json(raw_config)
    except ValidationError as e:
        raise pytest.UsageError(
            f"--run-report-config: invalid configuration: {e}"
        ) from e

    reporter = SummaryReporter.from_config(notifier_config)
    config.pluginmanager.register(RunReportPlugin(reporter), PLUGIN_NAME)
    log.debug("Run report notification enabled")
