"""Pydantic models package."""

from app.models.document import MediaType, UploadedFile
from app.models.summary import (
    ErrorResponse,
    GenerationConfig,
    SafetySetting,
    SummaryResult,
)

__all__ = [
    # Document models
    "MediaType",
    "UploadedFile",
    # Summary models
    "GenerationConfig",
    "SafetySetting",
    "SummaryResult",
    "ErrorResponse",
]
