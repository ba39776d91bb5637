"""FastAPI application factory for the transcript REST API."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yt_transcript import __version__
from yt_transcript.api.routes import router as api_router
from yt_transcript.utils.constant import API_CORS_ORIGINS
from yt_transcript.utils.logging_config import get_logger

logger = get_logger(__name__)


def create_app(*, cors_origins: str | None = None) -> FastAPI:
    """Create the FastAPI application exposing the transcript routes.

    Args:
        cors_origins: Comma-separated allowed origins; ``API_CORS_ORIGINS``
            when omitted. CORS is disabled when empty.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="yt-transcript API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        redoc_url="/redoc",
    )
    app.include_router(api_router)

    raw_origins = API_CORS_ORIGINS if cors_origins is None else cors_origins
    origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    if origins:
        logger.info("CORS enabled for origins: %s", ", ".join(origins))
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Return a minimal health status payload."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Return service metadata for root requests.

        Returns:
            Metadata containing docs and health endpoint paths.
        """
        return {
            "service": "yt-transcript-api",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app
