"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.routes import admin, summarize
from app.core.config import Settings, get_settings, validate_required_settings
from app.core.exceptions import (
    ConfigurationError,
    SummarizerServiceError,
    summarizer_exception_handler,
    validation_exception_handler,
)
from app.middleware.rate_limit import RateLimiter, rate_limit_middleware
from app.services.pipeline import SummaryPipeline
from app.services.summarizer import SummarizerClient, create_summarizer

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def resolve_static_dir(settings: Settings) -> Path:
    """Resolve the static directory, relative paths against the project root."""
    static_dir = Path(settings.static_dir)
    if not static_dir.is_absolute():
        static_dir = PROJECT_ROOT / static_dir
    return static_dir


def create_app(
    settings: Optional[Settings] = None,
    summarizer: Optional[SummarizerClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings override; defaults to the cached environment settings.
        summarizer: Pre-built summarizer; when omitted one is created against
            Vertex AI during startup.
    """
    settings = settings or get_settings()
    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Refuse to start without the Google Cloud configuration
        validate_required_settings(settings)
        logger.info(f"Starting {settings.app_name}")

        client = summarizer or create_summarizer(settings)
        app.state.pipeline = SummaryPipeline(client, max_prompt_chars=settings.max_prompt_chars)
        logger.info(
            f"Summarizer ready: model {client.model}, "
            f"max upload {settings.max_upload_bytes} bytes"
        )

        yield

        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Academic summaries of uploaded PDF and DOCX documents",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    # Add rate limiting middleware
    app.middleware("http")(rate_limit_middleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(SummarizerServiceError, summarizer_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register routers
    app.include_router(summarize.router)
    app.include_router(admin.router)

    static_dir = resolve_static_dir(settings)
    index_file = static_dir / "index.html"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        if index_file.is_file():
            return FileResponse(index_file)
        return JSONResponse(
            {
                "service": settings.app_name,
                "version": "0.1.0",
                "docs": "/docs",
            }
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": str(exc)},
        )

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Validate configuration and serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    try:
        validate_required_settings(settings)
    except ConfigurationError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    logger.info(f"Server running on http://localhost:{settings.port}")
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
