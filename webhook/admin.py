"""
Admin Resend Endpoint

Manually re-send a resume document to a user (testing, support).
Secured with the same x-api-key as /resume-ready. Sends only the
document: no HR contact or job id follow-ups, no failure notice to the user.
"""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from transport.backend import ResendRequest
from webhook.clients import get_telegram_transport
from webhook.delivery import resend_document
from webhook.payloads import InvalidBody, error_response, read_json_object
from webhook.security import authorize_backend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/resend")
async def admin_resend(request: Request):
    rejected = authorize_backend(request, "admin/resend")
    if rejected is not None:
        return rejected

    try:
        body = await read_json_object(request)
    except InvalidBody as e:
        logger.warning(f"admin resend invalid body: {e}")
        return error_response(400, "invalid JSON")

    if not body.get("userId"):
        return error_response(400, "missing userId")

    try:
        resend = ResendRequest.model_validate(body)
    except ValidationError as e:
        logger.warning(f"admin resend invalid payload: {e}")
        return error_response(400, "invalid payload")

    if not resend.document_ref:
        return error_response(400, "no file provided")

    try:
        await resend_document(get_telegram_transport(), resend)
    except Exception as e:
        logger.error(f"admin resend error for user {resend.user_id}: {e}", exc_info=True)
        return error_response(500, "failed")

    logger.info(f"Resent document to user {resend.user_id}")
    return {"ok": True}
