"""
Resume-Ready Webhook Handler

Endpoint the backend calls once a resume is ready (or failed).

Security: x-api-key header must equal BACKEND_SECRET.

Unlike /tg-webhook, the response is held until every send finishes, so
the backend learns whether the user actually got the resume.
"""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from transport.backend import CompletionNotice
from webhook.clients import get_telegram_transport
from webhook.delivery import deliver_failure_notice, deliver_resume, notify_delivery_failure
from webhook.payloads import InvalidBody, error_response, read_json_object
from webhook.security import authorize_backend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["backend"])


@router.post("/resume-ready")
async def resume_ready(request: Request):
    """
    Relay a completion or failure notice from the backend to the user.

    Returns:
        403 bad x-api-key, 400 invalid body or missing userId,
        200 {"ok": true} once relayed, 500 when delivery fails
    """
    try:
        rejected = authorize_backend(request, "resume-ready")
        if rejected is not None:
            return rejected

        try:
            body = await read_json_object(request)
        except InvalidBody as e:
            logger.warning(f"resume-ready invalid body: {e}")
            return error_response(400, "invalid JSON")

        if not body.get("userId"):
            logger.warning("resume-ready missing userId")
            return error_response(400, "missing userId")

        try:
            notice = CompletionNotice.model_validate(body)
        except ValidationError as e:
            logger.warning(f"resume-ready invalid payload: {e}")
            return error_response(400, "invalid payload")

        transport = get_telegram_transport()

        if not notice.completed:
            await deliver_failure_notice(transport, notice)
            logger.info(f"Relayed failure (status={notice.status}) of job {notice.job_id} to user {notice.user_id}")
            return {"ok": True}

        try:
            await deliver_resume(transport, notice)
        except Exception as e:
            logger.error(f"Error sending document to user {notice.user_id}: {e}", exc_info=True)
            await notify_delivery_failure(transport, notice.user_id)
            return error_response(500, "failed to deliver resume")

        logger.info(f"Delivered resume for job {notice.job_id} to user {notice.user_id}")
        return {"ok": True}

    except Exception as e:
        logger.error(f"Error in /resume-ready: {e}", exc_info=True)
        return error_response(500, "internal error")
