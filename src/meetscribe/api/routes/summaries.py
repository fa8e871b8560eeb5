"""Summary generation, editing and sharing endpoints."""

from fastapi import APIRouter

from meetscribe.api.dependencies import SummaryServiceDep
from meetscribe.api.routes.schemas import (
    EmailShareResponse,
    GenerateSummaryRequest,
    GenerateSummaryResponse,
    MessageResponse,
    SendEmailRequest,
    SummaryResponse,
    UpdateSummaryRequest,
)

router = APIRouter(tags=["summaries"])


@router.post("/generate-summary", response_model=GenerateSummaryResponse)
async def generate_summary(
    request: GenerateSummaryRequest,
    service: SummaryServiceDep,
) -> GenerateSummaryResponse:
    """Generate an HTML summary of a transcript and store it."""
    summary = await service.generate_summary(request.transcript or "", request.prompt or "")
    return GenerateSummaryResponse(summary_id=summary.id, summary=summary.generated_summary)


@router.get("/summaries/{summary_id}", response_model=SummaryResponse)
async def get_summary(summary_id: str, service: SummaryServiceDep) -> SummaryResponse:
    """Get a single summary by ID."""
    summary = await service.get_summary(summary_id)
    return SummaryResponse.model_validate(summary)


@router.patch("/summaries/{summary_id}", response_model=SummaryResponse)
async def update_summary(
    summary_id: str,
    request: UpdateSummaryRequest,
    service: SummaryServiceDep,
) -> SummaryResponse:
    """Save the user's edit of a summary."""
    summary = await service.save_edit(summary_id, request.edited_summary)
    return SummaryResponse.model_validate(summary)


@router.get("/summaries/{summary_id}/shares", response_model=list[EmailShareResponse])
async def list_email_shares(
    summary_id: str,
    service: SummaryServiceDep,
) -> list[EmailShareResponse]:
    """List the email shares recorded for a summary."""
    shares = await service.list_email_shares(summary_id)
    return [EmailShareResponse.model_validate(s) for s in shares]


@router.post("/send-email", response_model=MessageResponse)
async def send_email(
    request: SendEmailRequest,
    service: SummaryServiceDep,
) -> MessageResponse:
    """Email a summary to recipients and record the share."""
    await service.send_email(
        summary_id=request.summary_id,
        recipients=request.recipients,
        subject=request.subject,
        message=request.message,
    )
    return MessageResponse(message="Email sent successfully")
