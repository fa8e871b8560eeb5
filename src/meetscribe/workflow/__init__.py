"""Step-sequencing workflow for one summarization session."""

from meetscribe.workflow.controller import (
    DEFAULT_SUBJECT,
    WorkflowBackend,
    WorkflowController,
    add_recipient,
    validate_recipient,
)
from meetscribe.workflow.state import CancelScope, SessionState, WorkflowStep

__all__ = [
    "DEFAULT_SUBJECT",
    "CancelScope",
    "SessionState",
    "WorkflowBackend",
    "WorkflowController",
    "WorkflowStep",
    "add_recipient",
    "validate_recipient",
]
