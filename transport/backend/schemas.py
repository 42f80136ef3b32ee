"""
Resume Backend - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Wire contract between the relay and the resume-generation backend,
in both directions.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from transport.telegram.schemas import InboundMessage


ChatId = Union[int, str]


def _blank_to_none(value: Any) -> Any:
    if value == "":
        return None
    return value


def _falsy_to_none(value: Any) -> Any:
    # 0, false and "" all mean "not provided"
    if isinstance(value, (str, int, float)) and not value:
        return None
    return value


def _scalar_to_str(value: Any) -> Any:
    """Numbers and booleans arrive as text; objects and lists are left to fail."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


# ============================================================================
# RELAY -> BACKEND
# ============================================================================

class JobMeta(BaseModel):
    username: str = ""
    chat_id: int = Field(..., alias="chatId")

    class Config:
        populate_by_name = True
        frozen = True


class JobSubmission(BaseModel):
    """Body of POST {backend}/apply."""

    user_id: int = Field(..., alias="userId")
    jd: str = Field(..., min_length=1, description="Job description text")
    meta: JobMeta

    class Config:
        populate_by_name = True
        frozen = True

    @classmethod
    def from_message(cls, message: InboundMessage, jd: str) -> "JobSubmission":
        return cls(
            user_id=message.user_id,
            jd=jd,
            meta=JobMeta(username=message.username, chat_id=message.chat_id),
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# ============================================================================
# BACKEND -> RELAY
# ============================================================================

class CompletionNotice(BaseModel):
    """
    Body of POST /resume-ready.

    `userId` doubles as the Telegram chat id: there is no separate
    user-to-chat mapping anywhere in the relay.
    """

    user_id: ChatId = Field(..., alias="userId")
    status: str = "completed"
    job_id: Optional[Union[str, int]] = Field(None, alias="jobId")
    tg_pdf_id: Optional[str] = None
    tg_latex_id: Optional[str] = None  # accepted for compatibility, never sent
    pdf_url: Optional[str] = None
    hr_email: Optional[str] = Field(None, alias="hrEmail")
    hr_contact_fallback: Optional[str] = Field(None, alias="hr_contact")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return _scalar_to_str(value or "completed")

    @field_validator("job_id", mode="before")
    @classmethod
    def _empty_job_id(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator(
        "tg_pdf_id", "tg_latex_id", "pdf_url", "hr_email", "hr_contact_fallback",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _scalar_to_str(_falsy_to_none(value))

    @property
    def completed(self) -> bool:
        return self.status == "completed"

    @property
    def hr_contact(self) -> Optional[str]:
        return self.hr_email or self.hr_contact_fallback

    @property
    def document_ref(self) -> Optional[str]:
        """Native file id first (no re-upload), then external URL."""
        return self.tg_pdf_id or self.pdf_url


class ResendRequest(BaseModel):
    """Body of POST /admin/resend."""

    user_id: ChatId = Field(..., alias="userId")
    tg_pdf_id: Optional[str] = Field(None, alias="tgPdfId")
    pdf_url: Optional[str] = Field(None, alias="pdfUrl")
    caption: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("tg_pdf_id", "pdf_url", "caption", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _scalar_to_str(_falsy_to_none(value))

    @property
    def document_ref(self) -> Optional[str]:
        return self.tg_pdf_id or self.pdf_url
