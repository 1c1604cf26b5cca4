"""Summary generation models."""

from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SafetySetting(BaseModel):
    """A harm category and the severity at which it is blocked."""

    model_config = ConfigDict(frozen=True)

    category: str
    threshold: str


class GenerationConfig(BaseModel):
    """Process-wide generation parameters, fixed at startup."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str = Field(..., description="Model identifier")
    temperature: float = Field(default=0.5)
    top_p: float = Field(default=0.95, description="Nucleus sampling threshold")
    max_output_tokens: int = Field(default=65535)
    safety_settings: Tuple[SafetySetting, ...] = Field(default_factory=tuple)


class SummaryResult(BaseModel):
    """Successful summarization response."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(..., description="Generated summary text")
    status: Literal["success"] = Field(default="success")
    file_size: str = Field(
        ...,
        alias="fileSize",
        description="Original file size in megabytes, e.g. '2.00 MB'",
    )


class ErrorResponse(BaseModel):
    """Error payload returned for any failed request."""

    error: str = Field(..., description="Short error category")
    message: str = Field(..., description="Human-readable explanation")
