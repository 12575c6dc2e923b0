"""Tests for the pytest host adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock, patch

import pytest

from run_report_notifier import pytest_plugin
from run_report_notifier.dispatcher import DeliveryResult
from run_report_notifier.models.event import TestOutcomeEvent
from run_report_notifier.pytest_plugin import RunReportPlugin, classify
from run_report_notifier.reporter import SummaryReporter


def report(nodeid: str = "test_x.py::test_x", **kwargs: object) -> SimpleNamespace:
    """Create a stand-in for a phase TestReport."""
    return SimpleNamespace(nodeid=nodeid, **kwargs)


@pytest.mark.parametrize(
    ("reports", "expected"),
    [
        (
            [report(outcome="passed"), report(outcome="passed")],
            ("expected", "passed"),
        ),
        (
            [report(outcome="passed"), report(outcome="failed")],
            ("unexpected", "failed"),
        ),
        (
            [report(outcome="failed")],
            ("unexpected", "failed"),
        ),
        (
            [report(outcome="skipped")],
            ("skipped", "skipped"),
        ),
        (
            [report(outcome="passed"), report(outcome="skipped", wasxfail="bug")],
            ("expected", "skipped"),
        ),
        (
            [report(outcome="passed"), report(outcome="passed", wasxfail="bug")],
            ("expected", "passed"),
        ),
        (
            [report(outcome="rerun"), report(outcome="passed")],
            ("flaky", "passed"),
        ),
        (
            [report(outcome="rerun"), report(outcome="failed")],
            ("unexpected", "failed"),
        ),
    ],
)
def test_classify(
    reports: list[SimpleNamespace], expected: tuple[str, str]
) -> None:
    """Maps phase reports to outcome and status."""
    assert classify(reports) == expected  # type: ignore[arg-type]


@pytest.fixture
def reporter_mock() -> Mock:
    """Create mock reporter."""
    return Mock(spec=SummaryReporter)


@pytest.fixture
def plugin(reporter_mock: Mock) -> RunReportPlugin:
    """Create plugin with mock reporter."""
    return RunReportPlugin(reporter_mock)


def test_records_one_event_per_test(
    plugin: RunReportPlugin, reporter_mock: Mock
) -> None:
    """All phases of a test produce a single event."""
    nodeid = "test_x.py::test_x"
    with patch("run_report_notifier.pytest_plugin.now_ms", return_value=1_234):
        plugin.pytest_runtest_logstart(nodeid)
    for outcome in ("passed", "failed", "passed"):
        plugin.pytest_runtest_logreport(report(nodeid, outcome=outcome))  # type: ignore[arg-type]
    plugin.pytest_runtest_logfinish(nodeid)

    reporter_mock.record_event.assert_called_once_with(
        TestOutcomeEvent(
            test_id=nodeid, outcome="unexpected", start_time=1_234, status="failed"
        )
    )


def test_ignores_tests_without_reports(
    plugin: RunReportPlugin, reporter_mock: Mock
) -> None:
    """Nothing is recorded for a test that produced no reports."""
    plugin.pytest_runtest_logstart("test_x.py::test_x")
    plugin.pytest_runtest_logfinish("test_x.py::test_x")

    reporter_mock.record_event.assert_not_called()


def test_session_finish_completes_run(
    plugin: RunReportPlugin, reporter_mock: Mock
) -> None:
    """Session end runs the reporter to completion and keeps the results."""
    results = [DeliveryResult(delivered=True, status_code=200)]
    reporter_mock.complete = AsyncMock(return_value=results)

    with patch("run_report_notifier.pytest_plugin.now_ms", return_value=99_000):
        plugin.pytest_sessionfinish(Mock(spec=pytest.Session))

    reporter_mock.complete.assert_awaited_once_with(99_000)
    assert plugin.results == results


@pytest.mark.parametrize(
    "hook",
    [
        pytest_plugin.pytest_addoption,
        pytest_plugin.pytest_configure,
        RunReportPlugin.pytest_runtest_logstart,
        RunReportPlugin.pytest_runtest_logreport,
        RunReportPlugin.pytest_runtest_logfinish,
        RunReportPlugin.pytest_sessionfinish,
        RunReportPlugin.pytest_terminal_summary,
    ],
)
def test_hooks_are_documented(hook: object) -> None:
    """Every hook carries a docstring."""
    assert hook.__doc__
