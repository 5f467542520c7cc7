"""
Data models for the status-page webhook bridge.

Defines the provider-side incident shape, the locally tracked record
that maps an incident to its webhook message, the rendered embed, and
the configuration objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from dateutil import parser as dateutil_parser

# Statuses that close an incident or maintenance
RESOLVED_STATUSES = frozenset({"postmortem", "resolved", "completed"})


class FeedKind(str, Enum):
    """The two feeds a status page exposes."""

    INCIDENTS = "incidents"
    MAINTENANCES = "scheduled-maintenances"

    @property
    def path(self) -> str:
        return f"/api/v2/{self.value}.json"

    @property
    def list_key(self) -> str:
        """Key holding the incident list in the feed payload."""
        return "incidents" if self is FeedKind.INCIDENTS else "scheduled_maintenances"


def is_resolved(status: str) -> bool:
    return status in RESOLVED_STATUSES


def parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into an aware UTC datetime."""
    if not raw:
        return None
    try:
        parsed = dateutil_parser.isoparse(raw)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format as ``2024-05-01T12:00:00.000Z``."""
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Component:
    """A single affected status-page component."""

    name: str
    status: str = ""


@dataclass(frozen=True)
class IncidentUpdate:
    """One entry of an incident's update history."""

    status: str
    body: str
    created_at: Optional[datetime]


@dataclass(frozen=True)
class RemoteIncident:
    """
    An incident or scheduled maintenance as published by the provider.

    Attributes:
        id: Provider incident ID.
        name: Human-readable title.
        status: investigating, identified, scheduled, completed, ...
        impact: none, minor, major, critical or maintenance.
        created_at: When the incident was opened.
        updated_at: When it last changed, if ever.
        started_at: When the incident (or maintenance) began.
        shortlink: Public URL of the incident page.
        components: Affected components.
        updates: Update history, newest first as the provider sends it.
    """

    id: str
    name: str
    status: str
    impact: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    scheduled_for: Optional[datetime] = None
    scheduled_until: Optional[datetime] = None
    shortlink: str = ""
    components: List[Component] = field(default_factory=list)
    updates: List[IncidentUpdate] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return is_resolved(self.status)

    @property
    def last_changed(self) -> Optional[datetime]:
        """Provider-side change time, preferring ``updated_at``."""
        return self.updated_at or self.created_at

    @property
    def component_names(self) -> List[str]:
        return [c.name for c in self.components]


@dataclass(frozen=True)
class TrackedIncident:
    """
    Local record of an announced incident.

    Serialized with camelCase keys so existing store files stay readable.
    """

    incident_id: str
    last_update: datetime
    message_id: str
    resolved: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "incidentId": self.incident_id,
            "lastUpdate": format_timestamp(self.last_update),
            "messageId": self.message_id,
            "resolved": self.resolved,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TrackedIncident":
        last_update = parse_timestamp(raw.get("lastUpdate"))
        if last_update is None:
            raise ValueError(f"Invalid lastUpdate for incident {raw.get('incidentId')!r}")
        return cls(
            incident_id=str(raw["incidentId"]),
            last_update=last_update,
            message_id=str(raw["messageId"]),
            resolved=bool(raw.get("resolved", False)),
        )


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str


@dataclass
class Embed:
    """A webhook embed, built by the renderer and posted as JSON."""

    title: str
    url: str
    color: int
    footer: str
    description: str = ""
    timestamp: Optional[datetime] = None
    fields: List[EmbedField] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "color": self.color,
            "footer": {"text": self.footer},
            "fields": [{"name": f.name, "value": f.value} for f in self.fields],
        }
        if self.url:
            payload["url"] = self.url
        if self.description:
            payload["description"] = self.description
        if self.timestamp is not None:
            payload["timestamp"] = format_timestamp(self.timestamp)
        return payload


@dataclass
class PageConfig:
    """The status page being watched."""

    name: str
    url: str


@dataclass
class WebhookConfig:
    url: str = ""
    username: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass
class ColorPalette:
    """Embed colours keyed by severity."""

    resolved: int = 0x57F287
    critical: int = 0xED4245
    major: int = 0xE67E22
    minor: int = 0xFEE75C
    scheduled: int = 0x3498DB
    unknown: int = 0x95A5A6


@dataclass
class TrackerSettings:
    """Global tracker settings."""

    check_interval: int = 300  # seconds
    db: str = "db/incidents.json"
    log_level: str = "INFO"
    request_timeout: int = 30
    health_port: int = 10000
