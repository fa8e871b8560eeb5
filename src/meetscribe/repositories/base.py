"""Transcript store contract."""

from abc import ABC, abstractmethod

from meetscribe.domain.email_share import EmailShare, EmailShareDraft
from meetscribe.domain.summary import Summary, SummaryDraft

UPDATABLE_SUMMARY_FIELDS = frozenset({"edited_summary"})


class TranscriptStore(ABC):
    """Keyed record store for summaries and their email shares.

    Implementations must keep every mutation a single write so that a
    failed request never leaves a partially updated record behind.
    """

    @abstractmethod
    async def create_summary(self, draft: SummaryDraft) -> Summary:
        """Assign id and creation time, store and return the record."""

    @abstractmethod
    async def get_summary(self, summary_id: str) -> Summary | None:
        """Get a summary by its id."""

    @abstractmethod
    async def update_summary(self, summary_id: str, **fields: str | None) -> Summary | None:
        """Replace the given fields of a summary.

        Returns:
            The merged record, or None if the id is unknown
        """

    @abstractmethod
    async def create_email_share(self, draft: EmailShareDraft) -> EmailShare:
        """Assign id and send time, append and return the record."""

    @abstractmethod
    async def get_email_shares_by_summary_id(self, summary_id: str) -> list[EmailShare]:
        """List shares referencing a summary, in insertion order."""

    @staticmethod
    def _check_update_fields(fields: dict) -> None:
        unknown = set(fields) - UPDATABLE_SUMMARY_FIELDS
        if unknown:
            raise ValueError(f"Summary fields are not updatable: {sorted(unknown)}")
