"""Server-side summary operations: generate, edit, share."""

import logging
from collections.abc import Sequence

from meetscribe.config import get_settings
from meetscribe.domain.email_share import EmailShare, EmailShareDraft
from meetscribe.domain.summary import Summary, SummaryDraft
from meetscribe.domain.transcript import Transcript
from meetscribe.errors import NotFoundError, ValidationError
from meetscribe.repositories.base import TranscriptStore
from meetscribe.services.mailer import EmailDispatcher
from meetscribe.services.summarizer import SummaryGenerator, get_prompt_templates

logger = logging.getLogger(__name__)


class SummaryService:
    """Combines the store, the AI generator and the mail dispatcher.

    Every method is a single request's worth of work; nothing is retried.
    """

    def __init__(
        self,
        store: TranscriptStore,
        generator: SummaryGenerator,
        dispatcher: EmailDispatcher,
        max_upload_bytes: int | None = None,
    ) -> None:
        """Initialize service with its collaborators."""
        self.store = store
        self.generator = generator
        self.dispatcher = dispatcher
        self.max_upload_bytes = max_upload_bytes or get_settings().max_upload_bytes

    async def list_templates(self) -> dict[str, str]:
        """Named instruction presets."""
        return get_prompt_templates()

    async def read_upload(self, filename: str | None, data: bytes) -> Transcript:
        """Validate an uploaded transcript file and extract its text."""
        transcript = Transcript.from_upload(filename, data, self.max_upload_bytes)
        logger.info(f"Accepted transcript {transcript.filename} ({transcript.size} bytes)")
        return transcript

    async def generate_summary(self, transcript: str, prompt: str) -> Summary:
        """Generate a summary and persist it.

        Nothing is stored when generation fails.
        """
        if not transcript or not transcript.strip() or not prompt or not prompt.strip():
            raise ValidationError("Transcript and prompt are required")

        html = await self.generator.generate(transcript, prompt)

        return await self.store.create_summary(
            SummaryDraft(
                original_transcript=transcript,
                custom_prompt=prompt,
                generated_summary=html,
                edited_summary=None,
            )
        )

    async def get_summary(self, summary_id: str) -> Summary:
        """Get a summary or raise NotFoundError."""
        summary = await self.store.get_summary(summary_id)
        if summary is None:
            raise NotFoundError()
        return summary

    async def save_edit(self, summary_id: str, edited_summary: str | None) -> Summary:
        """Replace the edited content of a summary."""
        if not edited_summary:
            raise ValidationError("Edited summary is required")

        updated = await self.store.update_summary(summary_id, edited_summary=edited_summary)
        if updated is None:
            raise NotFoundError()
        return updated

    async def send_email(
        self,
        summary_id: str,
        recipients: Sequence[str],
        subject: str,
        message: str | None = None,
    ) -> EmailShare:
        """Email the summary's effective content and record the share.

        The share is recorded only after the mail server accepted the
        message. An unknown summary id fails before any mail is sent.
        """
        summary = await self.get_summary(summary_id)
        message = message.strip() if message else None

        await self.dispatcher.send(
            recipients=list(recipients),
            subject=subject,
            message=message,
            summary_html=summary.effective_content,
        )

        return await self.store.create_email_share(
            EmailShareDraft(
                summary_id=summary.id,
                recipients=tuple(recipients),
                subject=subject,
                message=message,
            )
        )

    async def list_email_shares(self, summary_id: str) -> list[EmailShare]:
        """List shares of an existing summary, oldest first."""
        await self.get_summary(summary_id)
        return await self.store.get_email_shares_by_summary_id(summary_id)
