"""
FastAPI Application Entry Point

Integrates:
  - Telegram webhook handler (/tg-webhook)
  - Backend callback handlers (/resume-ready, /admin/resend)
  - Health check
  - Middleware for access logging, body limits & security headers

Run: uvicorn main:app --host 0.0.0.0 --port 3000
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Config
from webhook import admin_router, resume_router, telegram_router
from webhook.clients import close_clients, get_telegram_transport

# Setup logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

BODY_METHODS = {"POST", "PUT", "PATCH"}


async def ensure_webhook() -> None:
    """
    Register PUBLIC_URL/tg-webhook with Telegram.

    Not fatal: the webhook can always be registered by hand.
    """
    webhook_url = f"{Config.PUBLIC_URL.rstrip('/')}/tg-webhook"
    try:
        await get_telegram_transport().set_webhook(
            webhook_url,
            secret_token=Config.TELEGRAM_WEBHOOK_SECRET or None,
        )
        logger.info(f"Webhook registered: {webhook_url}")
    except Exception as e:
        logger.error(f"Failed to set webhook automatically: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    if not Config.validate():
        raise RuntimeError(f"Missing required configuration: {', '.join(Config.missing())}")

    logger.info("=" * 60)
    logger.info("Resume relay bot starting up...")
    logger.info(f"Backend: {Config.BACKEND_URL}")
    logger.info(f"Telegram webhook secret: {'set' if Config.TELEGRAM_WEBHOOK_SECRET else 'not set (open)'}")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info("=" * 60)

    await ensure_webhook()

    yield

    # Shutdown
    logger.info("Resume relay bot shutting down...")
    await close_clients()


# Create FastAPI app
app = FastAPI(
    title="Resume Relay Bot",
    description="Relays job descriptions from Telegram to the resume backend and resumes back",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject bodies above MAX_BODY_BYTES before routing."""
    content_length = request.headers.get("content-length")
    if content_length is None and request.method in BODY_METHODS:
        # chunked upload: read it here, the route gets the cached body
        body_size = len(await request.body())
    elif content_length and content_length.isdigit():
        body_size = int(content_length)
    else:
        body_size = 0

    if body_size > Config.MAX_BODY_BYTES:
        logger.warning(f"Rejected {request.method} {request.url.path}: body of {body_size} bytes")
        return JSONResponse(status_code=413, content={"error": "request entity too large"})
    return await call_next(request)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        response = JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response


# Include routers
app.include_router(telegram_router)
app.include_router(resume_router)
app.include_router(admin_router)


@app.get("/health")
async def health():
    """Liveness check, always 200."""
    return {"ok": True, "ts": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn

    if not Config.validate():
        sys.exit(1)

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=Config.PORT,
    )
