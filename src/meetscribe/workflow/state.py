"""Transient per-session workflow state."""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import TypeVar

from meetscribe.errors import WorkflowCancelled

T = TypeVar("T")


class WorkflowStep(IntEnum):
    """Steps of the summary workflow, in display order."""

    UPLOAD = 1
    INSTRUCT = 2
    REVIEW = 3
    SHARE = 4
    DONE = 5


class CancelScope:
    """Request scope shared by every backend call of one session.

    Cancelling the scope cancels pending calls, and any call that completes
    afterwards raises WorkflowCancelled instead of returning its result.
    """

    def __init__(self) -> None:
        self.cancelled = False
        self._tasks: set[asyncio.Future] = set()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await a backend call inside this scope."""
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise WorkflowCancelled()

        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        try:
            result = await task
        except asyncio.CancelledError:
            if self.cancelled:
                raise WorkflowCancelled() from None
            raise
        finally:
            self._tasks.discard(task)

        if self.cancelled:
            raise WorkflowCancelled()
        return result

    def cancel(self) -> None:
        """Cancel the scope and every call still pending in it."""
        self.cancelled = True
        for task in list(self._tasks):
            task.cancel()

    @property
    def pending(self) -> int:
        return len(self._tasks)


@dataclass
class SessionState:
    """Everything one user session holds between actions. Never persisted."""

    step: WorkflowStep = WorkflowStep.UPLOAD
    transcript_content: str = ""
    transcript_filename: str = ""
    instruction: str = ""
    summary_id: str | None = None
    summary_content: str = ""
    saved_content: str = ""
    is_generating: bool = False
    last_error: str | None = None
    scope: CancelScope = field(default_factory=CancelScope)

    @property
    def has_unsaved_edits(self) -> bool:
        return self.summary_content != self.saved_content

    def reset(self) -> None:
        """Cancel in-flight calls and return every field to its initial value."""
        self.scope.cancel()
        fresh = SessionState()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))
