"""
Incident tracker — the core engine.

Watches one status page and mirrors its incidents and scheduled
maintenances into webhook messages. It uses:
  - A persisted incident -> message mapping so updates edit the
    original message instead of posting a new one
  - Provider update timestamps to detect changed incidents
  - One asyncio task per feed, serialized by a single lock

A failed fetch or webhook call is logged and retried on the next tick.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable, List, Optional

from statushook import console
from statushook.config import Config
from statushook.feed_parser import parse_feed
from statushook.models import FeedKind, RemoteIncident, TrackedIncident
from statushook.render import render
from statushook.statuspage import StatusPageClient
from statushook.store import IncidentStore, StoreError
from statushook.translations import MessageKind, format_message
from statushook.webhook import WebhookClient


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IncidentTracker:
    """
    Mirrors one status page into one webhook.

    Attributes:
        config: Page, webhook, colour and translation configuration.
        store: Persistence for the tracked incidents.
        incidents: In-memory copy of the store.
    """

    def __init__(
        self,
        config: Config,
        store: IncidentStore,
        client: StatusPageClient,
        webhook: WebhookClient,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config
        self.store = store
        self.client = client
        self.webhook = webhook
        self._clock = clock

        self.incidents: List[TrackedIncident] = []
        self._lock = asyncio.Lock()
        self._tasks: List[asyncio.Task] = []
        self._stopping = False

    def _msg(self, kind: MessageKind, **params: str) -> str:
        params.setdefault("name", self.config.page.name)
        return format_message(kind, self.config.translations, **params)

    def load(self) -> None:
        """Seed the store on first run and read it into memory."""
        if self.store.ensure():
            console.debug(f"Created incident store at {self.store.path}")
        self.incidents = self.store.load()
        console.log(self._msg(MessageKind.LISTENING_ON, url=self.config.page.url))

    def find(self, incident_id: str) -> Optional[TrackedIncident]:
        for tracked in self.incidents:
            if tracked.incident_id == incident_id:
                return tracked
        return None

    async def check(self, feed_kind: FeedKind) -> bool:
        """
        Run one check cycle for a feed.

        Returns:
            False if the feed could not be fetched or parsed, or the store
            could not be written; True otherwise.
        """
        async with self._lock:
            return await self._check(feed_kind)

    async def _check(self, feed_kind: FeedKind) -> bool:
        console.log(self._msg(MessageKind.CHECKING))

        try:
            payload = await self.client.fetch(feed_kind)
            remote = parse_feed(payload, feed_kind)
        except Exception as exc:
            console.error(self._msg(MessageKind.FAILED_TO_CHECK))
            console.error(f"{feed_kind.value}: {exc}")
            console.error(self._msg(MessageKind.WAITING_FOR_NEXT_CHECK))
            return False

        saved = True
        changes = 0

        # Provider lists are newest-first
        for incident in reversed(remote):
            tracked = self.find(incident.id)
            message_id: Optional[str] = None

            if tracked is None:
                console.log(self._msg(MessageKind.NEW_INCIDENT, id=incident.id))
            else:
                changed = incident.last_changed
                if changed is None or changed <= tracked.last_update:
                    continue
                console.log(self._msg(MessageKind.NEW_INCIDENT_UPDATE, id=incident.id))
                message_id = tracked.message_id

            changes += 1
            try:
                await self.update_incident(incident, message_id)
            except StoreError as exc:
                saved = False
                console.error(self._msg(MessageKind.FAILED_TO_SAVE))
                console.error(str(exc))

        if not changes:
            console.debug(self._msg(MessageKind.NO_CHANGES))
        return saved

    async def update_incident(
        self,
        incident: RemoteIncident,
        message_id: Optional[str] = None,
    ) -> Optional[TrackedIncident]:
        """
        Send (or edit, when ``message_id`` is given) the incident message
        and record it.

        Returns:
            The new TrackedIncident, or None if the webhook call failed.

        Raises:
            StoreError: If the message went out but the store write failed.
                The in-memory list already holds the new entry.
        """
        embed = render(
            incident,
            palette=self.config.colors,
            translations=self.config.translations,
            base_url=self.config.page.url,
        )

        try:
            if message_id:
                new_message_id = await self.webhook.edit(message_id, embed)
            else:
                new_message_id = await self.webhook.send(embed)
        except Exception as exc:
            if message_id:
                console.error(
                    self._msg(MessageKind.FAILED_TO_EDIT, id=incident.id, mid=message_id)
                )
            else:
                console.error(self._msg(MessageKind.FAILED_TO_SEND, id=incident.id))
            console.error(str(exc))
            return None

        console.success(
            self._msg(MessageKind.NEW_INCIDENT_MESSAGE, id=incident.id, mid=new_message_id)
        )

        # Never record a time at or before the provider's own change time
        last_update = self._clock()
        if incident.last_changed is not None and incident.last_changed > last_update:
            last_update = incident.last_changed

        tracked = TrackedIncident(
            incident_id=incident.id,
            last_update=last_update,
            message_id=new_message_id,
            resolved=incident.resolved,
        )
        self.incidents = [i for i in self.incidents if i.incident_id != incident.id]
        self.incidents.append(tracked)
        self.store.save(self.incidents)
        return tracked

    async def watch(self, feed_kind: FeedKind) -> None:
        """Check a feed now, then again every ``check_interval`` seconds."""
        interval = self.config.settings.check_interval
        while True:
            try:
                await self.check(feed_kind)
                await asyncio.sleep(interval)
            except asyncio.CancelledError:
                break
            except Exception as exc:
                console.error(f"Unexpected error while checking {feed_kind.value}: {exc!r}")
                console.error(self._msg(MessageKind.WAITING_FOR_NEXT_CHECK))
                await asyncio.sleep(interval)

    async def run(self) -> None:
        """Load the store and watch both feeds until cancelled."""
        self.load()
        if self._stopping:
            return
        self._tasks = [
            asyncio.create_task(self.watch(kind), name=f"watch-{kind.value}")
            for kind in FeedKind
        ]
        try:
            await asyncio.gather(*self._tasks)
        except asyncio.CancelledError:
            pass

    def shutdown(self) -> None:
        """Cancel the watch tasks, or stop them from starting."""
        self._stopping = True
        for task in self._tasks:
            task.cancel()
