"""Deliver notification payloads to a webhook sink."""

import asyncio
import logging
from dataclasses import dataclass

import aiohttp

from run_report_notifier.models.payload import NotificationPayload

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class DeliveryResult:
    """Settled state of a single delivery attempt."""

    delivered: bool
    status_code: int | None = None
    message: str | None = None


@dataclass(frozen=True, kw_only=True)
class NotificationDispatcher:
    """Posts notifications to a webhook, one attempt per payload."""

    timeout: aiohttp.ClientTimeout | None = None

    def dispatch(
        self, sink_url: str, payload: NotificationPayload
    ) -> asyncio.Task[DeliveryResult]:
        """Start delivering ``payload`` and return the pending task.

        Must be called from a running event loop. The task settles with a
        DeliveryResult; delivery failures never surface as exceptions.
        """
        return asyncio.create_task(self.deliver(sink_url, payload))

    async def deliver(
        self, sink_url: str, payload: NotificationPayload
    ) -> DeliveryResult:
        """POST the payload and report the outcome."""
        session_kwargs: dict[str, aiohttp.ClientTimeout] = {}
        if self.timeout is not None:
            session_kwargs["timeout"] = self.timeout
        try:
            async with aiohttp.ClientSession(**session_kwargs) as session:
                async with session.post(sink_url, json=payload.to_wire()) as response:
                    if 200 <= response.status < 300:
                        log.info("Notification sent to webhook")
                        return DeliveryResult(
                            delivered=True, status_code=response.status
                        )
                    text = await response.text()
        except (aiohttp.ClientError, TimeoutError) as e:
            log.error("Failed to send notification to webhook: %s", e)
            return DeliveryResult(delivered=False, message=str(e) or type(e).__name__)

        log.error(
            "Failed to send notification to webhook: %s %s", response.status, text
        )
        return DeliveryResult(
            delivered=False,
            status_code=response.status,
            message=f"{response.status} {text}",
        )
