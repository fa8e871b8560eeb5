"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SummaryModel(Base):
    """SQLAlchemy model for summaries table."""

    __tablename__ = "summaries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    original_transcript: Mapped[str] = mapped_column(Text, nullable=False)
    custom_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    generated_summary: Mapped[str] = mapped_column(Text, nullable=False)
    edited_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class EmailShareModel(Base):
    """SQLAlchemy model for email_shares table.

    summary_id is a lookup key, not a foreign key: shares are an
    append-only log and never cascade.
    """

    __tablename__ = "email_shares"

    # Autoincrement key keeps insertion order queryable
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    summary_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    recipients: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
