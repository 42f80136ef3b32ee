"""
Resume delivery to Telegram chats.

Shared by /resume-ready and /admin/resend. Functions here raise
TelegramTransportError on the first failed send; the route decides what a
failure means for its HTTP response.
"""

import logging
from typing import Optional

from transport.backend import CompletionNotice, ResendRequest
from transport.telegram import TelegramTransport

logger = logging.getLogger(__name__)

RESUME_CAPTION = "Your resume (generated)."
RESUME_CAPTION_WITH_HR = "Your resume (HR Contact: {hr_contact})"
RESEND_CAPTION = "Resent resume"
HR_CONTACT_TEXT = "🔎 HR Contact found: {hr_contact}"
JOB_ID_TEXT = "Job ID: {job_id}"
MISSING_FILE_TEXT = "⚠️ Backend reported completion but did not provide a file."
DELIVERY_FAILED_TEXT = "⚠️ Failed to send generated resume to your chat. The team has been notified."


def resume_caption(hr_contact: Optional[str]) -> str:
    if hr_contact:
        return RESUME_CAPTION_WITH_HR.format(hr_contact=hr_contact)
    return RESUME_CAPTION


def failure_text(job_id) -> str:
    if job_id:
        return f"❌ Resume generation failed for job {job_id}. Please try again or contact support."
    return "❌ Resume generation failed. Please try again or contact support."


async def deliver_failure_notice(transport: TelegramTransport, notice: CompletionNotice) -> None:
    """Tell the user the backend could not generate their resume."""
    await transport.send_message(notice.user_id, failure_text(notice.job_id))


async def deliver_resume(transport: TelegramTransport, notice: CompletionNotice) -> None:
    """
    Deliver a completed resume as up to three separate sends, in order:

      1. the document (file_id preferred, URL otherwise), or an apology
         when the backend sent neither
      2. the HR contact, when present (also after the apology)
      3. the job id, when present

    A completion without a document is a soft success: the user gets the
    apology, the backend still gets its 200.
    """
    chat_id = notice.user_id
    document = notice.document_ref

    if document:
        await transport.send_document(chat_id, document, caption=resume_caption(notice.hr_contact))
    else:
        await transport.send_message(chat_id, MISSING_FILE_TEXT)
        logger.warning(
            f"resume-ready missing file for user {chat_id}, payload: "
            f"{notice.model_dump(by_alias=True, exclude_none=True)}"
        )

    if notice.hr_contact:
        await transport.send_message(chat_id, HR_CONTACT_TEXT.format(hr_contact=notice.hr_contact))

    if notice.job_id:
        await transport.send_message(chat_id, JOB_ID_TEXT.format(job_id=notice.job_id))


async def notify_delivery_failure(transport: TelegramTransport, chat_id) -> None:
    """Best-effort notice that delivery broke; its own failure is only logged."""
    try:
        await transport.send_message(chat_id, DELIVERY_FAILED_TEXT)
    except Exception as e:
        logger.warning(f"Could not notify user {chat_id} about failed delivery: {e}")


async def resend_document(transport: TelegramTransport, request: ResendRequest) -> None:
    """Send only the document again, no follow-up messages."""
    await transport.send_document(
        request.user_id,
        request.document_ref,
        caption=request.caption or RESEND_CAPTION,
    )
