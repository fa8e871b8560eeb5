"""Summary domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SummaryDraft:
    """Inputs of one generation cycle, before the store assigns identity."""

    original_transcript: str
    custom_prompt: str
    generated_summary: str
    edited_summary: str | None = None


@dataclass(frozen=True)
class Summary:
    """Represents one AI-generated meeting summary and its user edit."""

    id: str
    original_transcript: str
    custom_prompt: str
    generated_summary: str
    edited_summary: str | None
    created_at: datetime

    @property
    def effective_content(self) -> str:
        """Content used downstream: the edit if there is one, else the AI output."""
        if self.edited_summary is not None:
            return self.edited_summary
        return self.generated_summary

    @classmethod
    def from_draft(cls, draft: SummaryDraft, id: str, created_at: datetime) -> "Summary":
        """Create Summary from a draft plus store-assigned identity."""
        return cls(
            id=id,
            original_transcript=draft.original_transcript,
            custom_prompt=draft.custom_prompt,
            generated_summary=draft.generated_summary,
            edited_summary=draft.edited_summary,
            created_at=created_at,
        )
