"""
Outgoing webhook client.

Posts embeds to a Discord-style webhook and edits earlier messages by
id. ``?wait=true`` makes the webhook return the created message so its
id can be stored.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from statushook.models import Embed, WebhookConfig


class WebhookError(Exception):
    """A send or edit did not go through."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class WebhookClient:
    def __init__(
        self,
        config: WebhookConfig,
        session: aiohttp.ClientSession,
        timeout: float = 30,
    ) -> None:
        self.config = config
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def _payload(self, embed: Embed) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "embeds": [embed.to_dict()],
            "allowed_mentions": {"parse": []},
        }
        if self.config.username:
            payload["username"] = self.config.username
        if self.config.avatar_url:
            payload["avatar_url"] = self.config.avatar_url
        return payload

    async def _request(self, method: str, url: str, payload: Dict[str, Any], **kwargs: Any) -> str:
        try:
            async with self._session.request(
                method, url, json=payload, timeout=self._timeout, **kwargs
            ) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise WebhookError(
                        f"Webhook {method} returned {resp.status}: {body[:200]}",
                        status=resp.status,
                    )
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise WebhookError(f"Webhook {method} failed: {exc}") from exc

        if not isinstance(data, dict) or not data.get("id"):
            raise WebhookError(f"Webhook {method} response has no message id")
        return str(data["id"])

    async def send(self, embed: Embed) -> str:
        """Post a new message and return its id."""
        return await self._request(
            "POST", self.config.url, self._payload(embed), params={"wait": "true"}
        )

    async def edit(self, message_id: str, embed: Embed) -> str:
        """Replace the embed of an earlier message and return its id."""
        url = f"{self.config.url.rstrip('/')}/messages/{message_id}"
        return await self._request("PATCH", url, self._payload(embed))
