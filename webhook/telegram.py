"""
Telegram Webhook Handler

Receives Telegram updates and forwards job descriptions to the resume backend.

Security:
  - X-Telegram-Bot-Api-Secret-Token checked when TELEGRAM_WEBHOOK_SECRET is set

Update Flow:
  webhook → verify → parse_update → normalize → classify → acknowledge
  → (after the response is sent) submit to backend

The backend submission runs as a background task. Telegram gets its 200
as soon as the acknowledgement is sent, however slow or unreachable the
backend is.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from fastapi import APIRouter, BackgroundTasks, Request, Response
from pydantic import ValidationError

from transport.backend import JobSubmission
from transport.telegram import InboundMessage, TelegramUpdate, normalize_message
from webhook.clients import get_backend_client, get_telegram_transport
from webhook.security import PLATFORM_SECRET_HEADER, client_host, verify_secret

# Setup logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=["telegram"])

PROMPT_TEXT = "Please send the Job Description text (paste JD or use /apply <JD>)."
USAGE_TEXT = "Usage: /apply <paste the job description here>"
ACK_TEXT = (
    "✅ Received the Job Description. Generating an ATS-optimized resume — "
    "this may take ~20–40 seconds. I will send it here once ready."
)
SUBMIT_FAILED_TEXT = "⚠️ Failed to submit the job to the backend. Please try again later."

# "/apply", also in the "/apply@SomeBot" form Telegram uses in group chats
APPLY_COMMAND = re.compile(r"^/apply(@\w+)?")


class Intent(str, Enum):
    PROMPT = "prompt"
    USAGE = "usage"
    JOB = "job"


@dataclass(frozen=True)
class Classification:
    intent: Intent
    job_description: str = ""


def classify_text(text: str) -> Classification:
    """
    Decide what an incoming chat text asks for.

    Empty text (including non-text messages) asks for the instruction prompt,
    a bare /apply asks for the usage hint, anything else is a job description.
    """
    text = (text or "").strip()
    if not text:
        return Classification(Intent.PROMPT)

    match = APPLY_COMMAND.match(text)
    if match:
        job_description = text[match.end():].strip()
        if not job_description:
            return Classification(Intent.USAGE)
        return Classification(Intent.JOB, job_description)

    return Classification(Intent.JOB, text)


@router.post("/tg-webhook")
async def telegram_webhook(request: Request, background_tasks: BackgroundTasks):
    """
    Receive Telegram webhook updates.

    Returns:
        401 when the secret token does not match
        500 when the body cannot be parsed
        {"status": "ok"} otherwise, including for ignored updates
    """
    if not verify_secret("platform", request.headers.get(PLATFORM_SECRET_HEADER)):
        logger.warning(f"Invalid telegram webhook secret token from {client_host(request)}")
        return Response(status_code=401)

    try:
        payload = await request.json()
    except Exception as e:
        logger.error(f"Error processing /tg-webhook body: {e}")
        return Response(status_code=500)

    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed Telegram update ({e.error_count()} errors)")
        return {"status": "ok"}

    message = normalize_message(update.message)
    if message is None:
        logger.debug(f"Update {update.update_id} has no message with sender and chat, skipping")
        return {"status": "ok"}

    try:
        await handle_message(message, background_tasks)
    except Exception as e:
        # Still return 200 to Telegram, a retry would replay the same failure
        logger.error(f"Error in message handler for chat {message.chat_id}: {e}", exc_info=True)

    return {"status": "ok"}


async def handle_message(message: InboundMessage, background_tasks: BackgroundTasks) -> None:
    """
    Classify one message, reply, and schedule the backend submission.

    The acknowledgement is sent before the submission is scheduled, so the
    user always hears back before the backend is contacted.
    """
    transport = get_telegram_transport()
    result = classify_text(message.text)

    if result.intent is Intent.PROMPT:
        await transport.send_message(message.chat_id, PROMPT_TEXT)
        return

    if result.intent is Intent.USAGE:
        await transport.send_message(message.chat_id, USAGE_TEXT)
        return

    logger.info(
        f"Received job description from {message.username or message.user_id} "
        f"({len(result.job_description)} chars)"
    )
    await transport.send_message(message.chat_id, ACK_TEXT)

    submission = JobSubmission.from_message(message, result.job_description)
    background_tasks.add_task(submit_job_description, submission, message.chat_id)


async def submit_job_description(submission: JobSubmission, chat_id: int) -> None:
    """
    Forward a job description to the backend, detached from the webhook.

    Never raises: failures are logged and the user gets a best-effort notice.
    """
    try:
        result = await get_backend_client().submit_job(submission)
    except Exception as e:
        logger.error(f"Error sending JD to backend for user {submission.user_id}: {e}")
        try:
            await get_telegram_transport().send_message(chat_id, SUBMIT_FAILED_TEXT)
        except Exception as notify_error:
            logger.warning(f"Could not notify chat {chat_id} about failed submission: {notify_error}")
        return

    job_id = result.get("jobId") if isinstance(result, dict) else None
    if job_id:
        logger.info(f"Backend accepted job {job_id} for user {submission.user_id}")
    else:
        logger.info(f"Backend response (no jobId) for user {submission.user_id}: {result}")
