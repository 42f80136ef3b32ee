"""
Telegram Transport Module

Pure I/O layer for Telegram messaging.
"""

from .normalize import normalize_message
from .schemas import (
    InboundMessage,
    TelegramChat,
    TelegramMessage,
    TelegramUpdate,
    TelegramUser,
)
from .sender import (
    TelegramTransport,
    TelegramTransportError,
    create_telegram_transport,
)

__all__ = [
    # Schemas
    "InboundMessage",
    "TelegramUpdate",
    "TelegramMessage",
    "TelegramChat",
    "TelegramUser",
    # Normalization
    "normalize_message",
    # Sender
    "TelegramTransport",
    "TelegramTransportError",
    "create_telegram_transport",
]
