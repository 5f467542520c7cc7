"""
Translatable message templates.

Every log line and embed label goes through ``format_message`` so a
deployment can swap the wording (or the language) from config without
touching the code. Templates use ``{{URL}}``, ``{{NAME}}``, ``{{ID}}``
and ``{{MID}}`` placeholders.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Optional


class MessageKind(str, Enum):
    LISTENING_ON = "LISTENING_ON"
    CHECKING = "CHECKING"
    NEW_INCIDENT = "NEW_INCIDENT"
    NEW_INCIDENT_UPDATE = "NEW_INCIDENT_UPDATE"
    NEW_INCIDENT_MESSAGE = "NEW_INCIDENT_MESSAGE"
    NO_CHANGES = "NO_CHANGES"
    FAILED_TO_CHECK = "FAILED_TO_CHECK"
    WAITING_FOR_NEXT_CHECK = "WAITING_FOR_NEXT_CHECK"
    FAILED_TO_SEND = "FAILED_TO_SEND"
    FAILED_TO_EDIT = "FAILED_TO_EDIT"
    FAILED_TO_SAVE = "FAILED_TO_SAVE"
    IMPACT = "IMPACT"
    AFFECTED_COMPONENTS = "AFFECTED_COMPONENTS"
    INCIDENT_ID = "INCIDENT_ID"


DEFAULT_TRANSLATIONS: Dict[MessageKind, str] = {
    MessageKind.LISTENING_ON: "Listening on {{URL}}",
    MessageKind.CHECKING: "Checking {{NAME}} for new incidents...",
    MessageKind.NEW_INCIDENT: "New incident on {{NAME}}: {{ID}}",
    MessageKind.NEW_INCIDENT_UPDATE: "New update for {{NAME}} incident {{ID}}",
    MessageKind.NEW_INCIDENT_MESSAGE: "Posted message {{MID}} for {{NAME}} incident {{ID}}",
    MessageKind.NO_CHANGES: "{{NAME}}: no changes",
    MessageKind.FAILED_TO_CHECK: "Failed to check {{NAME}}",
    MessageKind.WAITING_FOR_NEXT_CHECK: "Waiting for the next check...",
    MessageKind.FAILED_TO_SEND: "Failed to send message for {{NAME}} incident {{ID}}",
    MessageKind.FAILED_TO_EDIT: "Failed to edit message {{MID}} for {{NAME}} incident {{ID}}",
    MessageKind.FAILED_TO_SAVE: "Failed to save incidents for {{NAME}}",
    MessageKind.IMPACT: "Impact",
    MessageKind.AFFECTED_COMPONENTS: "Affected Components",
    MessageKind.INCIDENT_ID: "Incident ID: {{ID}}",
}

_PLACEHOLDERS = {
    "url": "{{URL}}",
    "name": "{{NAME}}",
    "id": "{{ID}}",
    "mid": "{{MID}}",
}


def format_message(
    kind: MessageKind,
    translations: Optional[Mapping[MessageKind, str]] = None,
    **params: str,
) -> str:
    """
    Render a message template.

    Args:
        kind: Which message to render.
        translations: Overrides; kinds missing here use the defaults.
        **params: Values for ``url``, ``name``, ``id`` and ``mid``.

    Returns:
        The template with every known placeholder substituted.
    """
    template = DEFAULT_TRANSLATIONS[kind]
    if translations and kind in translations:
        template = translations[kind]

    for key, value in params.items():
        token = _PLACEHOLDERS.get(key)
        if token is None:
            raise KeyError(f"Unknown placeholder parameter: {key}")
        template = template.replace(token, str(value))
    return template
