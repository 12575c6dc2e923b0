"""HTTP client for the ReportPortal launch-tracking API."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from urllib.parse import quote

import aiohttp

from run_report_notifier.config import LaunchServiceConfig
from run_report_notifier.launch.models import LaunchPage, UserInfo

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ReportPortalClient:
    """Client authenticated with a bearer API key against the versioned API root."""

    config: LaunchServiceConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: LaunchServiceConfig
    ) -> AsyncGenerator["ReportPortalClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.api_key.get_secret_value()}",
            "Accept": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.endpoint.rstrip("/") + "/",
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def check_connect(self) -> UserInfo:
        """Verify the credentials and return the account they belong to."""
        async with self.session.get("user") as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(f"Failed to authenticate: {response.status} {text}")
            data = await response.json()

        return UserInfo.model_validate(data)

    async def list_launches(self, project: str) -> LaunchPage:
        """List launches of a project."""
        url = f"{quote(project, safe='')}/launch"

        async with self.session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(f"Failed to list launches: {response.status} {text}")
            data = await response.json()

        page = LaunchPage.model_validate(data)
        log.debug("Fetched %d launch(es) for project %s", len(page.content), project)
        return page
