"""
Telegram Input Normalization Tests

Test conversion of Telegram updates to InboundMessage.
"""

import pytest
from pydantic import ValidationError

from transport.telegram import InboundMessage, TelegramUpdate, normalize_message


def parse(message):
    return TelegramUpdate.model_validate({"update_id": 1, "message": message}).message


class TestNormalization:

    def test_text_message(self):
        message = parse({
            "message_id": 1,
            "date": 1676817600,
            "chat": {"id": -100123, "type": "group", "title": "Jobs"},
            "from": {"id": 987654321, "first_name": "Test", "username": "testuser"},
            "text": "  Hello  ",
        })

        result = normalize_message(message)

        assert result == InboundMessage(chat_id=-100123, user_id=987654321, username="testuser", text="  Hello  ")

    def test_missing_username_is_empty(self):
        message = parse({"chat": {"id": 1}, "from": {"id": 2, "first_name": "NoHandle"}, "text": "hi"})

        assert normalize_message(message).username == ""

    def test_non_text_message_has_empty_text(self):
        message = parse({"chat": {"id": 1}, "from": {"id": 2}, "sticker": {"file_id": "s"}})

        assert normalize_message(message).text == ""

    def test_no_sender(self):
        assert normalize_message(parse({"chat": {"id": 1}, "text": "hi"})) is None

    def test_no_chat(self):
        assert normalize_message(parse({"from": {"id": 2}, "text": "hi"})) is None

    def test_no_message(self):
        assert normalize_message(None) is None

    def test_inbound_message_is_frozen(self):
        message = InboundMessage(chat_id=1, user_id=2, text="hi")

        with pytest.raises(ValidationError):
            message.text = "changed"  # type: ignore
