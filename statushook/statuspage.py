"""
Status page client.

Fetches the Statuspage v2 JSON feeds over a shared aiohttp session.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import aiohttp

from statushook.models import FeedKind


class StatusPageClient:
    def __init__(self, base_url: str, session: aiohttp.ClientSession, timeout: float = 30) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def feed_url(self, feed_kind: FeedKind) -> str:
        return f"{self.base_url}{feed_kind.path}"

    async def fetch(self, feed_kind: FeedKind) -> Optional[Dict[str, Any]]:
        """
        GET one feed and return the decoded JSON body.

        Raises:
            aiohttp.ClientError: On transport errors or a non-2xx status.
        """
        async with self._session.get(
            self.feed_url(feed_kind),
            headers={"Accept": "application/json"},
            timeout=self._timeout,
        ) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)
