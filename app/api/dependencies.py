"""Request-scoped access to objects built at application startup."""

from fastapi import Request

from app.core.config import Settings
from app.services.pipeline import SummaryPipeline


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_pipeline(request: Request) -> SummaryPipeline:
    """Get the pipeline built during application startup."""
    return request.app.state.pipeline
