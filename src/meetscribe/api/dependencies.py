"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends

from meetscribe.repositories import TranscriptStore, get_store
from meetscribe.services.mailer import EmailDispatcher
from meetscribe.services.summaries import SummaryService
from meetscribe.services.summarizer import SummaryGenerator

_generator: SummaryGenerator | None = None
_dispatcher: EmailDispatcher | None = None


def get_summary_generator() -> SummaryGenerator:
    """Provide the shared SummaryGenerator."""
    global _generator
    if _generator is None:
        _generator = SummaryGenerator()
    return _generator


def get_email_dispatcher() -> EmailDispatcher:
    """Provide the shared EmailDispatcher."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = EmailDispatcher()
    return _dispatcher


StoreDep = Annotated[TranscriptStore, Depends(get_store)]
GeneratorDep = Annotated[SummaryGenerator, Depends(get_summary_generator)]
DispatcherDep = Annotated[EmailDispatcher, Depends(get_email_dispatcher)]


def get_summary_service(
    store: StoreDep,
    generator: GeneratorDep,
    dispatcher: DispatcherDep,
) -> SummaryService:
    """Provide SummaryService instance."""
    return SummaryService(store, generator, dispatcher)


SummaryServiceDep = Annotated[SummaryService, Depends(get_summary_service)]
