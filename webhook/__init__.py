"""
Webhook module - FastAPI route handlers for both relay directions.

Includes:
- telegram.py: Telegram → backend (job descriptions)
- resume_ready.py: backend → Telegram (generated resumes)
- admin.py: manual document resend
"""

from webhook.admin import router as admin_router
from webhook.resume_ready import router as resume_router
from webhook.telegram import router as telegram_router

__all__ = ["telegram_router", "resume_router", "admin_router"]
