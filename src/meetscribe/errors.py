"""Exception hierarchy shared by services, transport and workflow."""


class MeetScribeError(Exception):
    """Base class for all MeetScribe errors.

    Each subclass carries the HTTP status the transport layer answers with.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MeetScribeError):
    """Missing or malformed input: request fields, file type or size."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(MeetScribeError):
    """Unknown summary id."""

    status_code = 404
    default_message = "Summary not found"


class GenerationError(MeetScribeError):
    """The AI service errored, timed out or returned nothing."""

    default_message = "Failed to generate summary"


class EmailError(MeetScribeError):
    """The mail submission channel rejected or failed the message."""

    default_message = "Failed to send email"


class WorkflowError(MeetScribeError):
    """An action was issued in a step that does not allow it."""

    status_code = 409
    default_message = "Action not allowed in the current step"


class WorkflowCancelled(WorkflowError):
    """A pending call completed after its session was reset."""

    default_message = "Session was reset while the request was in flight"
