"""Tests for SqlTranscriptStore against in-memory SQLite."""

from datetime import UTC

import pytest

from meetscribe.domain.email_share import EmailShareDraft
from meetscribe.domain.summary import SummaryDraft
from meetscribe.repositories.sql_store import SqlTranscriptStore


@pytest.fixture
def sql_store(test_session_factory) -> SqlTranscriptStore:
    return SqlTranscriptStore(test_session_factory)


def _make_draft() -> SummaryDraft:
    return SummaryDraft(
        original_transcript="Q1 planning notes...",
        custom_prompt="summarize in bullet points",
        generated_summary="<ul><li>Decision A</li></ul>",
    )


class TestSqlSummaries:
    """Tests for summary persistence."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, sql_store):
        created = await sql_store.create_summary(_make_draft())
        fetched = await sql_store.get_summary(created.id)

        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.generated_summary == "<ul><li>Decision A</li></ul>"
        assert fetched.edited_summary is None
        assert fetched.created_at.tzinfo is not None
        assert fetched.created_at.astimezone(UTC).replace(microsecond=0) == (
            created.created_at.replace(microsecond=0)
        )

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, sql_store):
        assert await sql_store.get_summary("00000000-0000-0000-0000-000000000000") is None

    @pytest.mark.asyncio
    async def test_update_persists(self, sql_store):
        created = await sql_store.create_summary(_make_draft())

        updated = await sql_store.update_summary(created.id, edited_summary="<p>edited</p>")
        fetched = await sql_store.get_summary(created.id)

        assert updated.edited_summary == "<p>edited</p>"
        assert fetched.edited_summary == "<p>edited</p>"
        assert fetched.effective_content == "<p>edited</p>"

    @pytest.mark.asyncio
    async def test_update_unknown_returns_none(self, sql_store):
        assert await sql_store.update_summary("missing", edited_summary="<p>x</p>") is None

    @pytest.mark.asyncio
    async def test_update_rejects_immutable_fields(self, sql_store):
        created = await sql_store.create_summary(_make_draft())
        with pytest.raises(ValueError):
            await sql_store.update_summary(created.id, custom_prompt="other")


class TestSqlEmailShares:
    """Tests for share persistence."""

    @pytest.mark.asyncio
    async def test_shares_round_trip_in_order(self, sql_store):
        summary = await sql_store.create_summary(_make_draft())

        first = await sql_store.create_email_share(
            EmailShareDraft(summary.id, ("alice@co.com",), "Summary", None)
        )
        second = await sql_store.create_email_share(
            EmailShareDraft(summary.id, ("bob@co.com", "carol@co.com"), "Again", "See below")
        )

        shares = await sql_store.get_email_shares_by_summary_id(summary.id)

        assert [s.id for s in shares] == [first.id, second.id]
        assert shares[0].recipients == ("alice@co.com",)
        assert shares[1].recipients == ("bob@co.com", "carol@co.com")
        assert shares[1].message == "See below"
        assert shares[0].message is None

    @pytest.mark.asyncio
    async def test_unknown_summary_has_no_shares(self, sql_store):
        assert await sql_store.get_email_shares_by_summary_id("missing") == []
