"""
Webhook Shared-Secret Verification

SECURITY BOUNDARY - check the caller's shared secret for a route.
No retries. No logic beyond the comparison and the 403 it implies.
"""

import hmac
import logging
from typing import Literal, Optional

from fastapi import Request, Response

from config import Config

logger = logging.getLogger(__name__)

Route = Literal["platform", "backend"]

# Header Telegram sends when the webhook was registered with a secret_token
PLATFORM_SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"
BACKEND_SECRET_HEADER = "x-api-key"


def verify_secret(route: Route, provided: Optional[str]) -> bool:
    """
    Compare a provided shared secret against the route's configured secret.

    "platform" checks TELEGRAM_WEBHOOK_SECRET and is open when that is unset.
    "backend" checks BACKEND_SECRET and is always enforced.

    Args:
        route: Which inbound path is being authenticated
        provided: Header value sent by the caller (None if absent)

    Returns:
        True if the caller may proceed

    Raises:
        ValueError: Unknown route
    """
    if route == "platform":
        expected = Config.TELEGRAM_WEBHOOK_SECRET
        if not expected:
            return True
    elif route == "backend":
        expected = Config.BACKEND_SECRET
    else:
        raise ValueError(f"Unknown webhook route: {route}")

    if not provided or not expected:
        return False

    # Constant-time comparison
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def client_host(request: Request) -> str:
    """Best-effort caller address for auth-failure logs."""
    return request.client.host if request.client else "unknown"


def authorize_backend(request: Request, route: str) -> Optional[Response]:
    """403 response when the caller lacks the backend secret, else None."""
    if verify_secret("backend", request.headers.get(BACKEND_SECRET_HEADER)):
        return None
    logger.warning(f"Unauthorized {route} call from {client_host(request)}")
    return Response(status_code=403)
