"""Volatile in-memory transcript store."""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import UTC, datetime

from meetscribe.domain.email_share import EmailShare, EmailShareDraft
from meetscribe.domain.summary import Summary, SummaryDraft
from meetscribe.repositories.base import TranscriptStore

logger = logging.getLogger(__name__)


class InMemoryTranscriptStore(TranscriptStore):
    """Lock-protected dict store. Contents are lost on process restart."""

    def __init__(self) -> None:
        """Initialize empty maps."""
        self._lock = threading.Lock()
        self._summaries: dict[str, Summary] = {}
        self._email_shares: dict[str, EmailShare] = {}

    async def create_summary(self, draft: SummaryDraft) -> Summary:
        summary = Summary.from_draft(
            draft, id=str(uuid.uuid4()), created_at=datetime.now(UTC)
        )
        with self._lock:
            self._summaries[summary.id] = summary
        logger.info(f"Created summary {summary.id}")
        return summary

    async def get_summary(self, summary_id: str) -> Summary | None:
        with self._lock:
            return self._summaries.get(summary_id)

    async def update_summary(self, summary_id: str, **fields: str | None) -> Summary | None:
        self._check_update_fields(fields)
        with self._lock:
            existing = self._summaries.get(summary_id)
            if existing is None:
                return None
            updated = replace(existing, **fields)
            self._summaries[summary_id] = updated
        logger.info(f"Updated summary {summary_id}")
        return updated

    async def create_email_share(self, draft: EmailShareDraft) -> EmailShare:
        share = EmailShare.from_draft(
            draft, id=str(uuid.uuid4()), sent_at=datetime.now(UTC)
        )
        with self._lock:
            self._email_shares[share.id] = share
        logger.info(f"Recorded email share {share.id} for summary {share.summary_id}")
        return share

    async def get_email_shares_by_summary_id(self, summary_id: str) -> list[EmailShare]:
        # dicts preserve insertion order
        with self._lock:
            return [s for s in self._email_shares.values() if s.summary_id == summary_id]
