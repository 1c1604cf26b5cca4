"""Uploaded document models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class MediaType(str, Enum):
    """Document media types accepted for summarization."""

    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class UploadedFile(BaseModel):
    """A document that has passed admission control."""

    filename: Optional[str] = Field(default=None, description="Client-side file name")
    media_type: MediaType = Field(..., description="Declared media type")
    content: bytes = Field(..., description="Raw document bytes")
    size: int = Field(default=-1, description="Size in bytes")

    @model_validator(mode="after")
    def _default_size(self) -> "UploadedFile":
        if self.size < 0:
            self.size = len(self.content)
        return self
