"""Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from meetscribe.services.mailer import has_line_break
from meetscribe.workflow.controller import validate_recipient


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UploadResponse(CamelModel):
    """Response schema for an accepted transcript upload."""

    filename: str
    size: int
    content: str


class GenerateSummaryRequest(CamelModel):
    """Request schema for summary generation.

    Both fields are optional here so that a missing one is reported with
    the same message as a blank one.
    """

    transcript: str | None = None
    prompt: str | None = None


class GenerateSummaryResponse(CamelModel):
    """Response schema for summary generation."""

    summary_id: str
    summary: str


class UpdateSummaryRequest(CamelModel):
    """Request schema for saving an edit."""

    edited_summary: str | None = None


class SummaryResponse(CamelModel):
    """Response schema for a stored summary."""

    id: str
    original_transcript: str
    custom_prompt: str
    generated_summary: str
    edited_summary: str | None
    created_at: datetime


class SendEmailRequest(CamelModel):
    """Request schema for emailing a summary."""

    summary_id: str
    recipients: list[str] = Field(min_length=1)
    subject: str
    message: str | None = None

    @field_validator("recipients")
    @classmethod
    def _check_recipients(cls, value: list[str]) -> list[str]:
        cleaned = [r.strip() for r in value]
        for address in cleaned:
            if not validate_recipient(address):
                raise ValueError(f"Invalid email address: {address}")
        return cleaned

    @field_validator("subject")
    @classmethod
    def _check_subject(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Email subject is required")
        if has_line_break(value):
            raise ValueError("Email subject must be a single line")
        return value.strip()


class EmailShareResponse(CamelModel):
    """Response schema for a recorded email share."""

    id: str
    summary_id: str
    recipients: list[str]
    subject: str
    message: str | None
    sent_at: datetime


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
