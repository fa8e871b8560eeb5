"""SQL-backed transcript store."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from meetscribe.domain.email_share import EmailShare, EmailShareDraft
from meetscribe.domain.summary import Summary, SummaryDraft
from meetscribe.infrastructure.models import EmailShareModel, SummaryModel
from meetscribe.repositories.base import TranscriptStore

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; timestamps are always stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_summary(model: SummaryModel) -> Summary:
    return Summary(
        id=model.id,
        original_transcript=model.original_transcript,
        custom_prompt=model.custom_prompt,
        generated_summary=model.generated_summary,
        edited_summary=model.edited_summary,
        created_at=_as_utc(model.created_at),
    )


def _to_email_share(model: EmailShareModel) -> EmailShare:
    return EmailShare(
        id=model.id,
        summary_id=model.summary_id,
        recipients=tuple(model.recipients),
        subject=model.subject,
        message=model.message,
        sent_at=_as_utc(model.sent_at),
    )


class SqlTranscriptStore(TranscriptStore):
    """Transcript store persisted through SQLAlchemy.

    Every call runs in its own session and commits before returning.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory."""
        self.session_factory = session_factory

    async def create_summary(self, draft: SummaryDraft) -> Summary:
        model = SummaryModel(
            id=str(uuid.uuid4()),
            original_transcript=draft.original_transcript,
            custom_prompt=draft.custom_prompt,
            generated_summary=draft.generated_summary,
            edited_summary=draft.edited_summary,
            created_at=datetime.now(UTC),
        )
        async with self.session_factory() as session:
            session.add(model)
            await session.commit()
        logger.info(f"Created summary {model.id}")
        return _to_summary(model)

    async def get_summary(self, summary_id: str) -> Summary | None:
        async with self.session_factory() as session:
            model = await session.get(SummaryModel, summary_id)
            return _to_summary(model) if model else None

    async def update_summary(self, summary_id: str, **fields: str | None) -> Summary | None:
        self._check_update_fields(fields)
        async with self.session_factory() as session:
            model = await session.get(SummaryModel, summary_id)
            if model is None:
                return None
            for name, value in fields.items():
                setattr(model, name, value)
            await session.commit()
        logger.info(f"Updated summary {summary_id}")
        return _to_summary(model)

    async def create_email_share(self, draft: EmailShareDraft) -> EmailShare:
        model = EmailShareModel(
            id=str(uuid.uuid4()),
            summary_id=draft.summary_id,
            recipients=list(draft.recipients),
            subject=draft.subject,
            message=draft.message or None,
            sent_at=datetime.now(UTC),
        )
        async with self.session_factory() as session:
            session.add(model)
            await session.commit()
        logger.info(f"Recorded email share {model.id} for summary {model.summary_id}")
        return _to_email_share(model)

    async def get_email_shares_by_summary_id(self, summary_id: str) -> list[EmailShare]:
        stmt = (
            select(EmailShareModel)
            .where(EmailShareModel.summary_id == summary_id)
            .order_by(EmailShareModel.seq)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [_to_email_share(m) for m in result.scalars().all()]
