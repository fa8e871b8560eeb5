"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meetscribe.api.routes.router import router as api_router
from meetscribe.config import get_settings
from meetscribe.errors import MeetScribeError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting MeetScribe application...")
    logger.info(f"Environment: {settings.environment}, store: {settings.store_backend}")

    if settings.store_backend == "database":
        from meetscribe.infrastructure.database import init_models

        await init_models()

    yield

    if settings.store_backend == "database":
        from meetscribe.infrastructure.database import dispose_engine

        await dispose_engine()
    logger.info("Shutting down MeetScribe application...")


def _format_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def meetscribe_error_handler(request: Request, exc: MeetScribeError) -> JSONResponse:
    """Answer domain errors with their status and a message body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors (400), not 422."""
    message = _format_validation_error(exc)
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse({"message": message}, status_code=400)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="MeetScribe",
        description="Turn meeting transcripts into AI-written, editable, shareable summaries",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    app.add_exception_handler(MeetScribeError, meetscribe_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Lightweight health check."""
        return JSONResponse({"status": "healthy", "store": settings.store_backend})

    return app


# Create app instance
app = create_app()
