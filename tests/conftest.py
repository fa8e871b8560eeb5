"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from meetscribe.api.dependencies import get_email_dispatcher, get_summary_generator
from meetscribe.infrastructure.models import Base
from meetscribe.main import app
from meetscribe.repositories import get_store
from meetscribe.repositories.memory_store import InMemoryTranscriptStore
from meetscribe.services.mailer import EmailDispatcher
from meetscribe.services.summaries import SummaryService
from meetscribe.services.summarizer import SummaryGenerator

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

GENERATED_HTML = "<ul><li>Decision A</li></ul>"


@pytest.fixture
def store() -> InMemoryTranscriptStore:
    """Fresh in-memory store."""
    return InMemoryTranscriptStore()


@pytest.fixture
def generator() -> MagicMock:
    """SummaryGenerator double returning a fixed HTML summary."""
    mock = MagicMock(spec=SummaryGenerator)
    mock.generate = AsyncMock(return_value=GENERATED_HTML)
    return mock


@pytest.fixture
def dispatcher() -> MagicMock:
    """EmailDispatcher double that accepts every message."""
    mock = MagicMock(spec=EmailDispatcher)
    mock.send = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def service(store, generator, dispatcher) -> SummaryService:
    """SummaryService wired to the in-memory store and doubles."""
    return SummaryService(store, generator, dispatcher, max_upload_bytes=10 * 1024 * 1024)


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Create test session factory."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def client(store, generator, dispatcher) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with the store and external services replaced."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_summary_generator] = lambda: generator
    app.dependency_overrides[get_email_dispatcher] = lambda: dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
