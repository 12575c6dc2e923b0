"""Orchestrates summary, launch lookup and notification for one test run."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from run_report_notifier.aggregator import RunAggregator
from run_report_notifier.config import NotifierConfig
from run_report_notifier.dispatcher import DeliveryResult, NotificationDispatcher
from run_report_notifier.launch.resolver import LaunchResolver
from run_report_notifier.models.event import TestOutcomeEvent
from run_report_notifier.models.summary import RunSummary
from run_report_notifier.payload import build_payload

log = logging.getLogger(__name__)


class RunNotFinalizedError(Exception):
    """Raised when a notification is requested before the run was finalized."""


class NotificationAlreadySentError(Exception):
    """Raised when a second notification is requested for the same run."""


@dataclass(kw_only=True)
class SummaryReporter:
    """Turns a stream of test outcomes into one webhook notification per run.

    Notifications are fire-and-track: ``on_run_complete`` starts delivery
    without waiting for it, and ``await_all_notifications`` is the barrier
    the caller must await before shutting the event loop down. ``complete``
    runs the whole sequence including the barrier.
    """

    config: NotifierConfig
    resolver: LaunchResolver = field(default_factory=LaunchResolver)
    dispatcher: NotificationDispatcher = field(default_factory=NotificationDispatcher)
    aggregator: RunAggregator = field(default_factory=RunAggregator)
    _pending: set[asyncio.Task[DeliveryResult]] = field(
        default_factory=set, init=False, repr=False
    )
    _results: list[DeliveryResult] = field(default_factory=list, init=False, repr=False)
    _notified: bool = field(default=False, init=False)

    @classmethod
    def from_config(cls, config: NotifierConfig) -> "SummaryReporter":
        """Create a reporter with default collaborators."""
        return cls(config=config)

    @property
    def pending_count(self) -> int:
        """Number of notifications that have not settled yet."""
        return sum(1 for task in self._pending if not task.done())

    def record_event(self, event: TestOutcomeEvent) -> None:
        """Record a finished test."""
        self.aggregator.record_event(event)

    def finalize(self, run_end_time: int) -> RunSummary:
        """Freeze the run summary."""
        return self.aggregator.finalize(run_end_time)

    async def on_run_complete(self) -> None:
        """Resolve the launch link, build the payload and start its delivery.

        Raises:
            RunNotFinalizedError: If ``finalize`` has not been called
            NotificationAlreadySentError: If called twice for the same run

        """
        summary = self.aggregator.summary
        if summary is None:
            raise RunNotFinalizedError("Run must be finalized before notifying")
        if self._notified:
            raise NotificationAlreadySentError("Run notification already dispatched")
        self._notified = True

        launch_url = await self.resolver.resolve(self.config.launch_service)

        payload = build_payload(
            summary.counts,
            summary.duration,
            launch_url,
            summary.status,
            environment=self.config.environment,
            timezone=self.config.timezone,
            activity_image=self.config.activity_image,
        )

        log.info("Dispatching %s run notification", summary.status)
        task = self.dispatcher.dispatch(self.config.webhook_url, payload)
        self._pending.add(task)

    async def await_all_notifications(self) -> Sequence[DeliveryResult]:
        """Wait until every dispatched notification has settled.

        Returns:
            Results of every notification dispatched by this reporter

        """
        while self._pending:
            tasks = list(self._pending)
            self._pending.difference_update(tasks)
            for result in await asyncio.gather(*tasks, return_exceptions=True):
                self._results.append(self._process_result(result))
        return list(self._results)

    def _process_result(self, result: DeliveryResult | BaseException) -> DeliveryResult:
        if isinstance(result, DeliveryResult):
            return result
        log.error("Notification task failed: %s", result, exc_info=result)
        return DeliveryResult(delivered=False, message=str(result))

    async def complete(self, run_end_time: int) -> Sequence[DeliveryResult]:
        """Finalize the run, notify, and wait for delivery to settle."""
        self.finalize(run_end_time)
        await self.on_run_complete()
        return await self.await_all_notifications()
