"""
Outbound client singletons shared by all webhook handlers.

Created lazily on first use, closed once on application shutdown.
"""

import logging

from transport.backend import BackendClient, create_backend_client
from transport.telegram import TelegramTransport, create_telegram_transport

logger = logging.getLogger(__name__)

# Storage for clients (initialized once)
_transport = None
_backend = None


def get_telegram_transport() -> TelegramTransport:
    """Get or create Telegram transport (singleton)."""
    global _transport
    if _transport is None:
        _transport = create_telegram_transport()
    return _transport


def get_backend_client() -> BackendClient:
    """Get or create backend client (singleton)."""
    global _backend
    if _backend is None:
        _backend = create_backend_client()
    return _backend


async def close_clients() -> None:
    """Close both HTTP clients if they were ever created."""
    global _transport, _backend
    if _transport is not None:
        await _transport.aclose()
        _transport = None
    if _backend is not None:
        await _backend.aclose()
        _backend = None
    logger.debug("Outbound HTTP clients closed")
