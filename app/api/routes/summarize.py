"""Document summarization API routes."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.dependencies import get_app_settings, get_pipeline
from app.core.config import Settings
from app.models.summary import ErrorResponse, SummaryResult
from app.services.pipeline import SummaryPipeline
from app.utils.validators import admit_upload, validate_file_size, validate_media_type

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summarize"])


@router.post(
    "/summarizeFile",
    response_model=SummaryResult,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def summarize_file(
    settings: Annotated[Settings, Depends(get_app_settings)],
    pipeline: Annotated[SummaryPipeline, Depends(get_pipeline)],
    file: Annotated[
        Optional[UploadFile], File(description="PDF or DOCX document to summarize")
    ] = None,
) -> SummaryResult:
    """Summarize an uploaded PDF or DOCX document.

    Args:
        file: Document file (multipart/form-data field ``file``).

    Returns:
        Summary text, status marker and the original file size.
    """
    content = None
    if file is not None:
        # Reject early when the multipart parser already knows the size
        validate_media_type(file.content_type)
        if file.size is not None:
            validate_file_size(file.size, settings.max_upload_bytes)
        content = await file.read()

    upload = admit_upload(
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        content=content,
        max_size=settings.max_upload_bytes,
    )

    logger.info(
        f"Summarizing '{upload.filename}' ({upload.media_type.name}), "
        f"size: {upload.size} bytes"
    )
    return await pipeline.run(upload)
