"""Workflow controller for the upload, instruct, review, share sequence."""

import logging
import re
from collections.abc import Sequence
from typing import Protocol

from meetscribe.domain.email_share import EmailShare
from meetscribe.domain.summary import Summary
from meetscribe.domain.transcript import Transcript
from meetscribe.errors import MeetScribeError, ValidationError, WorkflowError
from meetscribe.services.mailer import has_line_break
from meetscribe.workflow.state import SessionState, WorkflowStep

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Meeting Summary - AI Generated"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class WorkflowBackend(Protocol):
    """Operations the controller drives. SummaryService and MeetScribeClient both fit."""

    async def list_templates(self) -> dict[str, str]: ...

    async def read_upload(self, filename: str | None, data: bytes) -> Transcript: ...

    async def generate_summary(self, transcript: str, prompt: str) -> Summary: ...

    async def save_edit(self, summary_id: str, edited_summary: str | None) -> Summary: ...

    async def send_email(
        self,
        summary_id: str,
        recipients: Sequence[str],
        subject: str,
        message: str | None = None,
    ) -> EmailShare | None: ...


def validate_recipient(address: str) -> bool:
    """Check an address is shaped like local-part@domain.tld."""
    return bool(EMAIL_PATTERN.match(address))


def add_recipient(recipients: list[str], address: str) -> list[str]:
    """Return recipients with address appended.

    Raises:
        ValidationError: Malformed or duplicate address
    """
    address = address.strip()
    if not validate_recipient(address):
        raise ValidationError("Please enter a valid email address")
    if address in recipients:
        raise ValidationError("This email is already in the list")
    return [*recipients, address]


class WorkflowController:
    """Drives one session through the summary workflow.

    Steps:
    - UPLOAD: accept a transcript file
    - INSTRUCT: pick or write instructions, then generate
    - REVIEW: edit the generated summary, or go back to regenerate
    - SHARE: email the summary
    - DONE: sent; reset to start over

    The controller keeps no state of its own. Each action receives the
    session's SessionState, and a failed backend call leaves the step
    unchanged.
    """

    _BACK = {
        WorkflowStep.INSTRUCT: WorkflowStep.UPLOAD,
        WorkflowStep.REVIEW: WorkflowStep.INSTRUCT,
        WorkflowStep.SHARE: WorkflowStep.REVIEW,
    }

    def __init__(self, backend: WorkflowBackend) -> None:
        self.backend = backend

    @staticmethod
    def _require_step(state: SessionState, *steps: WorkflowStep) -> None:
        if state.step not in steps:
            allowed = ", ".join(s.name for s in steps)
            raise WorkflowError(f"Action requires step {allowed}, session is at {state.step.name}")

    @staticmethod
    def _record_failure(state: SessionState, error: MeetScribeError) -> None:
        state.last_error = error.message
        logger.warning(f"Workflow action failed at {state.step.name}: {error.message}")

    async def templates(self) -> dict[str, str]:
        """Named instruction presets offered in INSTRUCT."""
        return await self.backend.list_templates()

    async def accept_upload(self, state: SessionState, filename: str | None, data: bytes) -> Transcript:
        """Accept a transcript file. The session stays in UPLOAD until proceed_to_instruct."""
        self._require_step(state, WorkflowStep.UPLOAD)
        scope = state.scope
        state.last_error = None
        try:
            transcript = await scope.run(self.backend.read_upload(filename, data))
        except MeetScribeError as e:
            if not scope.cancelled:
                self._record_failure(state, e)
            raise

        state.transcript_content = transcript.content
        state.transcript_filename = transcript.filename
        return transcript

    def proceed_to_instruct(self, state: SessionState) -> None:
        """UPLOAD -> INSTRUCT, once a transcript has been accepted."""
        self._require_step(state, WorkflowStep.UPLOAD)
        if not state.transcript_content:
            raise WorkflowError("Upload a transcript first")
        state.step = WorkflowStep.INSTRUCT

    def back(self, state: SessionState) -> None:
        """Return to the previous step without discarding anything."""
        previous = self._BACK.get(state.step)
        if previous is None:
            raise WorkflowError(f"Cannot go back from {state.step.name}")
        state.step = previous

    async def generate(self, state: SessionState, instruction: str) -> Summary:
        """INSTRUCT -> REVIEW through one generation call.

        While the call is pending the session is marked as generating and a
        second generate is refused.
        """
        self._require_step(state, WorkflowStep.INSTRUCT)
        if state.is_generating:
            raise WorkflowError("A summary is already being generated")
        if not instruction or not instruction.strip():
            raise ValidationError("Please enter instructions for how to summarize the transcript")

        scope = state.scope
        state.instruction = instruction
        state.last_error = None
        state.is_generating = True
        try:
            summary = await scope.run(
                self.backend.generate_summary(state.transcript_content, instruction)
            )
        except MeetScribeError as e:
            if not scope.cancelled:
                self._record_failure(state, e)
            raise
        finally:
            if not scope.cancelled:
                state.is_generating = False

        state.summary_id = summary.id
        state.summary_content = summary.effective_content
        state.saved_content = summary.effective_content
        state.step = WorkflowStep.REVIEW
        logger.info(f"Session moved to REVIEW with summary {summary.id}")
        return summary

    def regenerate(self, state: SessionState) -> None:
        """REVIEW -> INSTRUCT. The stored summary is kept."""
        self._require_step(state, WorkflowStep.REVIEW)
        state.step = WorkflowStep.INSTRUCT

    def edit(self, state: SessionState, content: str) -> None:
        """Replace the in-memory summary content."""
        self._require_step(state, WorkflowStep.REVIEW)
        state.summary_content = content

    async def save(self, state: SessionState) -> bool:
        """Persist local edits if they differ from the last saved content.

        Returns:
            True if the store was updated
        """
        self._require_step(state, WorkflowStep.REVIEW)
        assert state.summary_id is not None, "REVIEW requires a summary id"

        if not state.has_unsaved_edits:
            return False

        scope = state.scope
        state.last_error = None
        try:
            updated = await scope.run(
                self.backend.save_edit(state.summary_id, state.summary_content)
            )
        except MeetScribeError as e:
            if not scope.cancelled:
                self._record_failure(state, e)
            raise

        state.saved_content = updated.effective_content
        return True

    async def proceed_to_share(self, state: SessionState) -> None:
        """REVIEW -> SHARE, saving edits first."""
        await self.save(state)
        state.step = WorkflowStep.SHARE

    async def send(
        self,
        state: SessionState,
        recipients: Sequence[str],
        subject: str = DEFAULT_SUBJECT,
        message: str | None = None,
    ) -> None:
        """SHARE -> DONE once the email was accepted and the share recorded."""
        self._require_step(state, WorkflowStep.SHARE)
        assert state.summary_id is not None, "SHARE requires a summary id"

        if not recipients:
            raise ValidationError("Please add at least one email recipient")
        invalid = [r for r in recipients if not validate_recipient(r)]
        if invalid:
            raise ValidationError(f"Invalid email address: {invalid[0]}")
        if not subject or not subject.strip():
            raise ValidationError("Please enter an email subject")
        if has_line_break(subject):
            raise ValidationError("Email subject must be a single line")

        scope = state.scope
        state.last_error = None
        try:
            await scope.run(
                self.backend.send_email(
                    state.summary_id,
                    list(recipients),
                    subject.strip(),
                    message.strip() if message and message.strip() else None,
                )
            )
        except MeetScribeError as e:
            if not scope.cancelled:
                self._record_failure(state, e)
            raise

        state.step = WorkflowStep.DONE
        logger.info(f"Summary {state.summary_id} sent to {len(recipients)} recipient(s)")

    def reset(self, state: SessionState) -> None:
        """Start over from UPLOAD, abandoning any pending call."""
        state.reset()
