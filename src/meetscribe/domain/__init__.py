"""Domain entities."""

from meetscribe.domain.email_share import EmailShare, EmailShareDraft
from meetscribe.domain.summary import Summary, SummaryDraft
from meetscribe.domain.transcript import Transcript

__all__ = [
    "EmailShare",
    "EmailShareDraft",
    "Summary",
    "SummaryDraft",
    "Transcript",
]
