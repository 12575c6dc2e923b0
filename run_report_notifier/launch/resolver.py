"""Resolve the dashboard URL of the most recent launch."""

import logging
import re
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import TypeAlias

import aiohttp

from run_report_notifier.config import LaunchServiceConfig
from run_report_notifier.launch.client import ReportPortalClient

log = logging.getLogger(__name__)

API_VERSION_SEGMENT = re.compile(r"/api/v\d+")

ClientFactory: TypeAlias = Callable[
    [LaunchServiceConfig], AbstractAsyncContextManager[ReportPortalClient]
]


def build_launch_url(endpoint: str, project: str, launch_id: int) -> str:
    """Build the UI link of a launch from the versioned API endpoint."""
    base_url = API_VERSION_SEGMENT.sub("", endpoint, count=1).rstrip("/")
    return f"{base_url}/ui/#{project}/launches/all/{launch_id}"


@dataclass(frozen=True, kw_only=True)
class LaunchResolver:
    """Looks up the latest launch of a project.

    Resolution never raises: losing the link degrades the notification but
    must not lose it, so every failure is logged and reported as ``None``.
    """

    client_factory: ClientFactory = ReportPortalClient.from_config

    async def resolve(self, config: LaunchServiceConfig | None) -> str | None:
        """Return the dashboard URL of the most recent launch, or None."""
        if config is None:
            log.info("No launch service configured, skipping launch lookup")
            return None

        try:
            return await self._resolve(config)
        except (aiohttp.ClientError, TimeoutError) as e:
            log.warning("Error connecting to launch service: %s", e)
        except (RuntimeError, ValueError) as e:
            log.warning("Failed to resolve launch URL: %s", e)
        except Exception as e:
            log.warning("Unexpected error resolving launch URL: %s", e, exc_info=e)
        return None

    async def _resolve(self, config: LaunchServiceConfig) -> str | None:
        async with self.client_factory(config) as client:
            user = await client.check_connect()
            log.info("Connected to launch service as %s", user.full_name)

            page = await client.list_launches(config.project)

        if not page.content:
            log.warning("No launches found for project %s", config.project)
            return None

        latest = max(page.content, key=lambda launch: launch.id)
        launch_url = build_launch_url(config.endpoint, config.project, latest.id)
        log.info("Launch URL: %s", launch_url)
        return launch_url
