"""
Telegram Bot API Sender

Pure I/O: sends messages and documents to Telegram chats.
No formatting intelligence. No retries. No logic.
Every failed call raises TelegramTransportError so callers can
decide per call whether a failure matters.
"""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from config import Config

logger = logging.getLogger(__name__)

# Bot API hard limits
MAX_MESSAGE_LENGTH = 4096
MAX_CAPTION_LENGTH = 1024

SEND_TIMEOUT_SECONDS = 30.0

ChatId = Union[int, str]


class TelegramTransportError(Exception):
    """Telegram Bot API call failed."""
    pass


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[: limit - 1] + "…"
    return text


class TelegramTransport:
    """
    Telegram transport layer.

    Wraps a single long-lived httpx.AsyncClient, safe for concurrent use
    by any number of requests.
    """

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not token:
            raise ValueError("TELEGRAM_BOT_TOKEN not set")

        self.api_url = f"{api_base.rstrip('/')}/bot{token}"
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=SEND_TIMEOUT_SECONDS)
        return self._client

    async def _call(self, method: str, payload: Dict[str, Any]) -> Any:
        """POST a Bot API method and return its `result` field."""
        try:
            response = await self.client.post(f"{self.api_url}/{method}", json=payload)
        except httpx.HTTPError as e:
            # str(e) never carries the request URL, so the token stays out of logs
            raise TelegramTransportError(f"{method} request failed: {e.__class__.__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.status_code != 200 or not data.get("ok"):
            description = data.get("description") or response.text
            raise TelegramTransportError(
                f"{method} failed with {response.status_code}: {description}"
            )

        return data.get("result")

    async def send_message(self, chat_id: ChatId, text: str) -> Dict[str, Any]:
        """
        Send a text message.

        Args:
            chat_id: Telegram chat ID
            text: Message text, truncated to the Bot API limit

        Returns:
            The sent Message object

        Raises:
            TelegramTransportError: network failure or API error
        """
        result = await self._call(
            "sendMessage",
            {"chat_id": chat_id, "text": _truncate(text, MAX_MESSAGE_LENGTH)},
        )
        logger.info(f"Sent message to {chat_id}: {text[:80]}")
        return result

    async def send_document(
        self,
        chat_id: ChatId,
        document: str,
        caption: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a document by Telegram file_id or by HTTP URL.

        Telegram fetches URLs itself, so no bytes pass through the relay.

        Raises:
            TelegramTransportError: network failure or API error
        """
        payload: Dict[str, Any] = {"chat_id": chat_id, "document": document}
        if caption:
            payload["caption"] = _truncate(caption, MAX_CAPTION_LENGTH)

        result = await self._call("sendDocument", payload)
        logger.info(f"Sent document to {chat_id}")
        return result

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> Any:
        """Register the webhook URL (and optional secret token) with Telegram."""
        payload: Dict[str, Any] = {"url": url}
        if secret_token:
            payload["secret_token"] = secret_token
        return await self._call("setWebhook", payload)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def create_telegram_transport() -> TelegramTransport:
    """Factory function to create Telegram transport."""
    return TelegramTransport(Config.TELEGRAM_BOT_TOKEN, api_base=Config.TELEGRAM_API_BASE)
