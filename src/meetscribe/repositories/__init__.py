"""Transcript store implementations."""

from meetscribe.config import get_settings
from meetscribe.repositories.base import TranscriptStore
from meetscribe.repositories.memory_store import InMemoryTranscriptStore
from meetscribe.repositories.sql_store import SqlTranscriptStore

__all__ = [
    "InMemoryTranscriptStore",
    "SqlTranscriptStore",
    "TranscriptStore",
    "get_store",
]

# Singleton instance
_store: TranscriptStore | None = None


def get_store() -> TranscriptStore:
    """Get or create the store selected by STORE_BACKEND."""
    global _store
    if _store is None:
        if get_settings().store_backend == "database":
            from meetscribe.infrastructure.database import get_session_factory

            _store = SqlTranscriptStore(get_session_factory())
        else:
            _store = InMemoryTranscriptStore()
    return _store
