"""
Configuration management for the resume relay bot.

Loads environment variables from .env file and provides typed access to configuration.
"""

import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

logger = logging.getLogger(__name__)


class Config:
    """Configuration class for the relay server."""

    # Telegram Bot Configuration
    TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_WEBHOOK_SECRET = os.getenv("TELEGRAM_WEBHOOK_SECRET", "")
    TELEGRAM_API_BASE = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org")

    # Public HTTPS URL this server is reachable at (webhook registration)
    PUBLIC_URL = os.getenv("PUBLIC_URL", "")

    # Resume backend
    BACKEND_URL = os.getenv("BACKEND_URL", "")
    BACKEND_SECRET = os.getenv("BACKEND_SECRET", "")
    BACKEND_TIMEOUT_SECONDS = float(os.getenv("BACKEND_TIMEOUT_SECONDS", "10"))

    # Server
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    REQUIRED = ["TELEGRAM_BOT_TOKEN", "PUBLIC_URL", "BACKEND_URL", "BACKEND_SECRET"]

    @classmethod
    def missing(cls) -> List[str]:
        """Names of required settings that are unset or empty."""
        return [key for key in cls.REQUIRED if not getattr(cls, key)]

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        missing = cls.missing()

        if missing:
            logger.error(f"Missing required environment variables: {', '.join(missing)}")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  Telegram Bot Token: {'✓ Set' if Config.TELEGRAM_BOT_TOKEN else '✗ Missing'}")
    print(f"  Webhook Secret: {'✓ Set' if Config.TELEGRAM_WEBHOOK_SECRET else '- Not set (open)'}")
    print(f"  Public URL: {Config.PUBLIC_URL or '✗ Missing'}")
    print(f"  Backend URL: {Config.BACKEND_URL or '✗ Missing'}")
    print(f"  Backend Secret: {'✓ Set' if Config.BACKEND_SECRET else '✗ Missing'}")
    print(f"  Port: {Config.PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
