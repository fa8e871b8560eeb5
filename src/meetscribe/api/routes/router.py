"""API router aggregator."""

from fastapi import APIRouter

from meetscribe.api.routes.summaries import router as summaries_router
from meetscribe.api.routes.uploads import router as uploads_router

router = APIRouter(prefix="/api")
router.include_router(uploads_router)
router.include_router(summaries_router)
