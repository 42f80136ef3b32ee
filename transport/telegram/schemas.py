"""
Telegram Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the subset of the Bot API update object the relay reads,
plus the normalized message the relay works with.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ============================================================================
# NORMALIZED MESSAGE (THE CONTRACT)
# ============================================================================

class InboundMessage(BaseModel):
    """
    Chat message reduced to what the relay needs.

    Derived per update, never persisted.
    """

    chat_id: int = Field(..., description="Telegram chat id (reply target)")
    user_id: int = Field(..., description="Telegram user id (backend identity)")
    username: str = Field("", description="Telegram @username, empty if unset")
    text: str = Field("", description="Raw message text, empty for non-text messages")

    class Config:
        """Pydantic config."""
        frozen = True


# ============================================================================
# TELEGRAM UPDATE SCHEMAS (INPUT)
# ============================================================================

class TelegramUser(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None


class TelegramChat(BaseModel):
    id: int
    type: Optional[str] = None  # private, group, supergroup, channel
    title: Optional[str] = None
    username: Optional[str] = None


class TelegramMessage(BaseModel):
    message_id: Optional[int] = None
    date: Optional[int] = None
    chat: Optional[TelegramChat] = None
    from_: Optional[TelegramUser] = Field(None, alias="from")
    text: Optional[str] = None

    class Config:
        populate_by_name = True


class TelegramUpdate(BaseModel):
    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None
