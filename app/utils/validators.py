"""Admission control for uploaded documents."""

from typing import Optional

from app.core.exceptions import FileTooLargeError, NoFileError, UnsupportedMediaTypeError
from app.models.document import MediaType, UploadedFile

ALLOWED_MEDIA_TYPES = {media_type.value for media_type in MediaType}


def validate_media_type(content_type: Optional[str]) -> MediaType:
    if content_type not in ALLOWED_MEDIA_TYPES:
        raise UnsupportedMediaTypeError(content_type)
    return MediaType(content_type)


def validate_file_size(file_size: int, max_size: int) -> None:
    if file_size > max_size:
        raise FileTooLargeError(file_size, max_size)


def admit_upload(
    filename: Optional[str],
    content_type: Optional[str],
    content: Optional[bytes],
    max_size: int,
) -> UploadedFile:
    """Check an upload's presence, type and size before it reaches the pipeline.

    Raises:
        NoFileError: No file was sent.
        UnsupportedMediaTypeError: Type is not PDF or DOCX.
        FileTooLargeError: Payload exceeds ``max_size`` bytes.
    """
    if content is None:
        raise NoFileError()

    media_type = validate_media_type(content_type)
    validate_file_size(len(content), max_size)

    return UploadedFile(
        filename=filename,
        media_type=media_type,
        content=content,
        size=len(content),
    )
