"""Transcript upload and prompt template endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from meetscribe.api.dependencies import SummaryServiceDep
from meetscribe.api.routes.schemas import UploadResponse
from meetscribe.errors import ValidationError

router = APIRouter(tags=["transcripts"])


@router.get("/templates", response_model=dict[str, str])
async def list_templates(service: SummaryServiceDep) -> dict[str, str]:
    """Get the named instruction templates."""
    return await service.list_templates()


@router.post("/upload", response_model=UploadResponse)
async def upload_transcript(
    service: SummaryServiceDep,
    transcript: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """Accept a .txt or .docx transcript and return its text."""
    if transcript is None:
        raise ValidationError("No file uploaded")

    # One byte past the limit is enough to detect an oversize file
    data = await transcript.read(service.max_upload_bytes + 1)
    result = await service.read_upload(transcript.filename, data)
    return UploadResponse.model_validate(result)
