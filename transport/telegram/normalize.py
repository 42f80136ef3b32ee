"""
Telegram Input Normalization

PURE CONVERSION - NO LOGIC, NO NETWORK CALLS

Converts a Telegram message into InboundMessage.
Messages without a sender or chat cannot be answered and yield None.
"""

from typing import Optional

from .schemas import InboundMessage, TelegramMessage


def normalize_message(message: Optional[TelegramMessage]) -> Optional[InboundMessage]:
    """
    Convert a Telegram message into InboundMessage.

    Non-text messages (photos, stickers, documents) normalize to empty text.

    Args:
        message: The `message` field of a Telegram update

    Returns:
        InboundMessage, or None when sender or chat context is missing
    """
    if message is None or message.from_ is None or message.chat is None:
        return None

    return InboundMessage(
        chat_id=message.chat.id,
        user_id=message.from_.id,
        username=message.from_.username or "",
        text=message.text or "",
    )
