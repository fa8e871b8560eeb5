"""EmailShare domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class EmailShareDraft:
    """Inputs of one send event, recorded after the mail was accepted."""

    summary_id: str
    recipients: tuple[str, ...]
    subject: str
    message: str | None = None


@dataclass(frozen=True)
class EmailShare:
    """Append-only record of one successful email dispatch."""

    id: str
    summary_id: str
    recipients: tuple[str, ...]
    subject: str
    message: str | None
    sent_at: datetime

    @classmethod
    def from_draft(cls, draft: EmailShareDraft, id: str, sent_at: datetime) -> "EmailShare":
        """Create EmailShare from a draft plus store-assigned identity."""
        return cls(
            id=id,
            summary_id=draft.summary_id,
            recipients=tuple(draft.recipients),
            subject=draft.subject,
            message=draft.message or None,
            sent_at=sent_at,
        )
