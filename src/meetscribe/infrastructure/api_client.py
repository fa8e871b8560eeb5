"""Async client for the MeetScribe HTTP API."""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from meetscribe.config import get_settings
from meetscribe.domain.summary import Summary
from meetscribe.domain.transcript import Transcript
from meetscribe.errors import (
    EmailError,
    GenerationError,
    MeetScribeError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[MeetScribeError]] = {
    400: ValidationError,
    404: NotFoundError,
}


def _parse_summary(data: dict[str, Any]) -> Summary:
    """Create Summary from an API record."""
    return Summary(
        id=data["id"],
        original_transcript=data["originalTranscript"],
        custom_prompt=data["customPrompt"],
        generated_summary=data["generatedSummary"],
        edited_summary=data.get("editedSummary"),
        created_at=datetime.fromisoformat(data["createdAt"]),
    )


class MeetScribeClient:
    """Remote backend for the workflow controller.

    Mirrors SummaryService over HTTP so a session can run against a
    separate server process. Single attempt per call, no retries.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: API base URL including the /api prefix (defaults to config)
            timeout_seconds: Total request timeout; aiohttp's default when None
        """
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")
        self.timeout = ClientTimeout(total=timeout_seconds) if timeout_seconds else None
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "MeetScribeClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            if self.timeout is not None:
                self._session = aiohttp.ClientSession(timeout=self.timeout)
            else:
                self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(
        self,
        method: str,
        path: str,
        error_class: type[MeetScribeError] = MeetScribeError,
        **kwargs: Any,
    ) -> Any:
        """Send one request and decode its JSON body.

        Args:
            method: HTTP method
            path: Path below the base URL
            error_class: Error raised for server-side (5xx) and transport failures
            **kwargs: Passed through to aiohttp (json=, data=)

        Returns:
            Decoded JSON response
        """
        url = f"{self.base_url}{path}"
        session = await self._get_session()

        try:
            async with session.request(method, url, **kwargs) as response:
                if response.status < 400:
                    return await response.json()

                try:
                    body = await response.json()
                    message = body.get("message") if isinstance(body, dict) else None
                except (aiohttp.ContentTypeError, ValueError):
                    message = None

                exc_class = _STATUS_ERRORS.get(response.status, error_class)
                logger.error(f"HTTP {response.status} for {method} {url}: {message}")
                raise exc_class(message)
        except TimeoutError as e:
            logger.error(f"Timeout calling {method} {url}")
            raise error_class(f"Request timed out: {method} {path}") from e
        except aiohttp.ClientError as e:
            logger.error(f"Client error calling {method} {url}: {e}")
            raise error_class(str(e)) from e

    async def list_templates(self) -> dict[str, str]:
        """Get the named instruction templates."""
        return await self._request("GET", "/templates")

    async def read_upload(self, filename: str | None, data: bytes) -> Transcript:
        """Upload a transcript file and get its extracted text back."""
        if not filename:
            raise ValidationError("No file uploaded")

        form = aiohttp.FormData()
        form.add_field("transcript", data, filename=filename)
        body = await self._request("POST", "/upload", data=form)
        return Transcript(filename=body["filename"], size=body["size"], content=body["content"])

    async def get_summary(self, summary_id: str) -> Summary:
        """Get a stored summary."""
        return _parse_summary(await self._request("GET", f"/summaries/{summary_id}"))

    async def generate_summary(self, transcript: str, prompt: str) -> Summary:
        """Generate a summary, then read back the stored record."""
        body = await self._request(
            "POST",
            "/generate-summary",
            error_class=GenerationError,
            json={"transcript": transcript, "prompt": prompt},
        )
        return await self.get_summary(body["summaryId"])

    async def save_edit(self, summary_id: str, edited_summary: str | None) -> Summary:
        """Save an edited summary."""
        body = await self._request(
            "PATCH",
            f"/summaries/{summary_id}",
            json={"editedSummary": edited_summary},
        )
        return _parse_summary(body)

    async def send_email(
        self,
        summary_id: str,
        recipients: Sequence[str],
        subject: str,
        message: str | None = None,
    ) -> None:
        """Ask the server to email a summary."""
        payload: dict[str, Any] = {
            "summaryId": summary_id,
            "recipients": list(recipients),
            "subject": subject,
        }
        if message:
            payload["message"] = message
        await self._request("POST", "/send-email", error_class=EmailError, json=payload)
        logger.info(f"Server sent summary {summary_id} to {len(recipients)} recipient(s)")
