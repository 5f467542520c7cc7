"""
Embed renderer.

Builds the webhook embed for a RemoteIncident. Rendering is pure: the
same incident always yields the same embed.
"""

from __future__ import annotations

import re
from typing import List, Mapping, Optional

from statushook.models import ColorPalette, Embed, EmbedField, RemoteIncident
from statushook.translations import MessageKind, format_message

# Webhook embed limits
MAX_TITLE = 256
MAX_FIELD_NAME = 256
MAX_FIELD_VALUE = 1024
MAX_FIELDS = 25

_EMPTY_VALUE = "\u200b"
_WORD_RE = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+")


def start_case(text: str) -> str:
    """``in_progress`` -> ``In Progress``."""
    return " ".join(word[:1].upper() + word[1:] for word in _WORD_RE.findall(text))


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def pick_color(incident: RemoteIncident, palette: ColorPalette) -> int:
    """First matching rule wins; resolution outranks impact."""
    if incident.resolved:
        return palette.resolved
    if incident.impact == "critical":
        return palette.critical
    if incident.impact == "major":
        return palette.major
    if incident.impact == "minor" or incident.status == "in_progress":
        return palette.minor
    if incident.status == "scheduled":
        return palette.scheduled
    return palette.unknown


def _update_fields(incident: RemoteIncident) -> List[EmbedField]:
    result: List[EmbedField] = []
    for update in reversed(incident.updates):
        name = start_case(update.status) or "Update"
        if update.created_at is not None:
            name = f"{name} (<t:{int(update.created_at.timestamp())}:R>)"
        result.append(
            EmbedField(
                name=_truncate(name, MAX_FIELD_NAME),
                value=_truncate(update.body, MAX_FIELD_VALUE) or _EMPTY_VALUE,
            )
        )
    # Keep the newest updates when the history is too long
    return result[-MAX_FIELDS:]


def render(
    incident: RemoteIncident,
    palette: Optional[ColorPalette] = None,
    translations: Optional[Mapping[MessageKind, str]] = None,
    base_url: str = "",
) -> Embed:
    """
    Render an incident as an embed.

    Args:
        incident: The provider incident.
        palette: Severity colours.
        translations: Label overrides.
        base_url: Status page URL, used when the incident has no shortlink.
    """
    palette = palette or ColorPalette()

    url = incident.shortlink
    if not url and base_url:
        url = f"{base_url.rstrip('/')}/incidents/{incident.id}"

    description = [
        f"- **{format_message(MessageKind.IMPACT, translations)}**: {incident.impact}"
    ]
    if incident.component_names:
        label = format_message(MessageKind.AFFECTED_COMPONENTS, translations)
        description.append(f"- **{label}**: {', '.join(incident.component_names)}")

    return Embed(
        title=_truncate(incident.name, MAX_TITLE),
        url=url,
        color=pick_color(incident, palette),
        footer=format_message(MessageKind.INCIDENT_ID, translations, id=incident.id),
        description="\n".join(description),
        timestamp=incident.started_at or incident.created_at,
        fields=_update_fields(incident),
    )
