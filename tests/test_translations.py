"""
Tests for message formatting.
"""

import pytest

from statushook.translations import DEFAULT_TRANSLATIONS, MessageKind, format_message


class TestFormatMessage:
    def test_every_kind_has_a_default(self):
        assert set(DEFAULT_TRANSLATIONS) == set(MessageKind)

    def test_substitutes_placeholders(self):
        message = format_message(MessageKind.FAILED_TO_EDIT, name="Acme", id="abc", mid="42")
        assert message == "Failed to edit message 42 for Acme incident abc"

    def test_url(self):
        assert format_message(MessageKind.LISTENING_ON, url="https://x.test") == (
            "Listening on https://x.test"
        )

    def test_override(self):
        translations = {MessageKind.NEW_INCIDENT: "{{NAME}} meldet {{ID}} ({{ID}})"}
        message = format_message(MessageKind.NEW_INCIDENT, translations, name="Acme", id="a1")
        assert message == "Acme meldet a1 (a1)"

    def test_override_only_applies_to_its_kind(self):
        translations = {MessageKind.NEW_INCIDENT: "neu"}
        assert format_message(MessageKind.IMPACT, translations) == "Impact"

    def test_unused_placeholders_are_left(self):
        assert format_message(MessageKind.NEW_INCIDENT, name="Acme") == (
            "New incident on Acme: {{ID}}"
        )

    def test_unknown_parameter(self):
        with pytest.raises(KeyError):
            format_message(MessageKind.CHECKING, page="Acme")
