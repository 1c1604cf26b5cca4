"""Operational API routes."""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies import get_app_settings, get_pipeline
from app.core.config import Settings
from app.services.pipeline import SummaryPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = {"protected_namespaces": ()}

    status: str
    model: str
    max_upload_mb: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
    pipeline: Annotated[SummaryPipeline, Depends(get_pipeline)],
) -> HealthResponse:
    """Check service health."""
    return HealthResponse(
        status="healthy",
        model=pipeline.summarizer.model,
        max_upload_mb=settings.max_upload_bytes // (1024 * 1024),
    )


@router.get("/config")
async def get_config(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Dict[str, Any]:
    """Get current configuration (non-sensitive values only)."""
    return {
        "app_name": settings.app_name,
        "debug": settings.debug,
        "gcloud_project_id": settings.gcloud_project_id,
        "gcloud_location": settings.gcloud_location,
        "gemini_model": settings.gemini_model,
        "credentials_configured": bool(settings.google_application_credentials),
        "max_upload_bytes": settings.max_upload_bytes,
        "max_prompt_chars": settings.max_prompt_chars,
        "generation_timeout_seconds": settings.generation_timeout_seconds,
        "rate_limit_max_requests": settings.rate_limit_max_requests,
        "rate_limit_window_seconds": settings.rate_limit_window_seconds,
    }
