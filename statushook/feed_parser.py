"""
Statuspage v2 JSON parser.

Turns the ``incidents.json`` / ``scheduled-maintenances.json`` payloads
into RemoteIncident objects, extracting:
  - Incident id, name, status, impact and timestamps
  - Affected components
  - The update history (status, body, timestamp)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from statushook.models import (
    Component,
    FeedKind,
    IncidentUpdate,
    RemoteIncident,
    parse_timestamp,
)


class FeedError(ValueError):
    """Raised when a feed payload has no usable incident list."""


def _parse_components(raw: Any) -> List[Component]:
    components: List[Component] = []
    if not isinstance(raw, list):
        return components
    for entry in raw:
        if not isinstance(entry, dict) or not entry.get("name"):
            continue
        components.append(Component(name=str(entry["name"]), status=str(entry.get("status") or "")))
    return components


def _parse_updates(raw: Any) -> List[IncidentUpdate]:
    updates: List[IncidentUpdate] = []
    if not isinstance(raw, list):
        return updates
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        updates.append(
            IncidentUpdate(
                status=str(entry.get("status") or ""),
                body=str(entry.get("body") or ""),
                created_at=parse_timestamp(entry.get("created_at")),
            )
        )
    return updates


def parse_incident(raw: Dict[str, Any]) -> RemoteIncident:
    """
    Parse a single incident (or maintenance) object.

    Raises:
        FeedError: If the object has no id.
    """
    if not isinstance(raw, dict) or not raw.get("id"):
        raise FeedError("Incident without an id")

    return RemoteIncident(
        id=str(raw["id"]),
        name=str(raw.get("name") or ""),
        status=str(raw.get("status") or ""),
        impact=str(raw.get("impact") or "none"),
        created_at=parse_timestamp(raw.get("created_at")),
        updated_at=parse_timestamp(raw.get("updated_at")),
        started_at=parse_timestamp(raw.get("started_at")),
        resolved_at=parse_timestamp(raw.get("resolved_at")),
        scheduled_for=parse_timestamp(raw.get("scheduled_for")),
        scheduled_until=parse_timestamp(raw.get("scheduled_until")),
        shortlink=str(raw.get("shortlink") or ""),
        components=_parse_components(raw.get("components")),
        updates=_parse_updates(raw.get("incident_updates")),
    )


# ─── Public API ───────────────────────────────────────────────


def parse_feed(payload: Optional[Dict[str, Any]], feed_kind: FeedKind) -> List[RemoteIncident]:
    """
    Extract the incident list of a feed payload.

    Args:
        payload: Decoded JSON body.
        feed_kind: Which feed the payload came from.

    Returns:
        RemoteIncident objects in provider order (newest first).

    Raises:
        FeedError: If the payload or its incident list is missing.
    """
    if not isinstance(payload, dict):
        raise FeedError("Feed payload is empty")

    raw_incidents = payload.get(feed_kind.list_key)
    if not isinstance(raw_incidents, list):
        raise FeedError(f"Feed payload has no '{feed_kind.list_key}' list")

    return [parse_incident(raw) for raw in raw_incidents]
