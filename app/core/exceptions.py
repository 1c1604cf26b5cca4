"""Custom exceptions and exception handlers."""

from enum import Enum
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ConfigurationError(Exception):
    """Required process configuration is missing or invalid."""

    pass


class SummarizerServiceError(Exception):
    """Base exception for errors reported to the caller."""

    error = "File processing failed"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        if error is not None:
            self.error = error
        super().__init__(message)


# Admission errors


class NoFileError(SummarizerServiceError):
    """Request carried no file."""

    def __init__(self):
        super().__init__(
            "Please upload a PDF or DOCX file",
            status_code=status.HTTP_400_BAD_REQUEST,
            error="No file uploaded",
        )


class UnsupportedMediaTypeError(SummarizerServiceError):
    """Uploaded file is neither PDF nor DOCX."""

    def __init__(self, media_type: Optional[str] = None):
        self.media_type = media_type
        super().__init__(
            "Only PDF and DOCX files are allowed",
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            error="Invalid file type",
        )


class FileTooLargeError(SummarizerServiceError):
    """Uploaded file exceeds the size ceiling."""

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"File too large. Maximum size is {max_size / (1024 * 1024):g} MB.",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            error="File too large",
        )


# Pipeline-internal errors


class ExtractionFailure(str, Enum):
    """Why text extraction failed."""

    PARSE_FAILURE = "parse_failure"
    EMPTY_CONTENT = "empty_content"


class ExtractionError(Exception):
    """Text could not be extracted from a document."""

    def __init__(self, reason: ExtractionFailure, cause: Optional[str] = None):
        self.reason = reason
        self.cause = cause
        message = cause if cause else reason.value.replace("_", " ")
        super().__init__(message)


class BackendFailure(str, Enum):
    """Why the generation request failed."""

    BACKEND_FAILURE = "backend_failure"
    MALFORMED_RESPONSE = "malformed_response"
    TIMEOUT = "timeout"


class BackendError(Exception):
    """Generation backend failed or returned an unusable response."""

    def __init__(self, reason: BackendFailure, cause: Optional[str] = None):
        self.reason = reason
        self.cause = cause
        message = cause if cause else reason.value.replace("_", " ")
        super().__init__(message)


# Pipeline errors surfaced to the caller


class EmptyDocumentError(SummarizerServiceError):
    """Document parsed but holds no readable text."""

    def __init__(self):
        super().__init__(
            "The file contains no readable text",
            status_code=status.HTTP_400_BAD_REQUEST,
            error="Empty file",
        )


class DocumentTooLongError(SummarizerServiceError):
    """Extracted text is too long to send to the model."""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Document text is too long to summarize "
            f"({length} characters, maximum is {max_length})",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            error="Document too long",
        )


class FileProcessingError(SummarizerServiceError):
    """Generic processing failure carrying the underlying cause."""

    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def summarizer_exception_handler(
    request: Request, exc: SummarizerServiceError
) -> JSONResponse:
    """Handle SummarizerServiceError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors in the service's error shape.

    A ``file`` field that is not an upload is treated as a missing file.
    """
    errors = exc.errors()
    if any(tuple(error.get("loc", ()))[:2] == ("body", "file") for error in errors):
        return await summarizer_exception_handler(request, NoFileError())

    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in errors
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request", "message": message or "Invalid request"},
    )
