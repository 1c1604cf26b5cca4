"""Summary pipeline - extraction, prompt construction and generation."""

import asyncio
import logging
import time
from typing import Optional

from app.core.exceptions import (
    BackendError,
    DocumentTooLongError,
    EmptyDocumentError,
    ExtractionError,
    ExtractionFailure,
    FileProcessingError,
    SummarizerServiceError,
)
from app.models.document import UploadedFile
from app.models.summary import SummaryResult
from app.services.extractor import extract_text
from app.services.prompt_builder import build_prompt
from app.services.summarizer import SummarizerClient

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def format_file_size(num_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals, e.g. '2.00 MB'."""
    return f"{num_bytes / BYTES_PER_MB:.2f} MB"


class SummaryPipeline:
    """Turns an admitted upload into a summary."""

    def __init__(
        self,
        summarizer: SummarizerClient,
        max_prompt_chars: Optional[int] = None,
    ):
        self.summarizer = summarizer
        self.max_prompt_chars = max_prompt_chars

    async def run(self, upload: UploadedFile) -> SummaryResult:
        """Summarize an uploaded document.

        Args:
            upload: File that already passed type and size admission.

        Returns:
            Summary result with the formatted file size.

        Raises:
            SummarizerServiceError: EmptyDocumentError, DocumentTooLongError
                or FileProcessingError. Nothing else escapes.
        """
        start_time = time.time()
        try:
            summary = await self._summarize(upload)
        except SummarizerServiceError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error processing '{upload.filename}': {e}")
            raise FileProcessingError(str(e))

        logger.info(
            f"Summarized '{upload.filename}' in {int((time.time() - start_time) * 1000)}ms, "
            f"summary length: {len(summary)} chars"
        )
        return SummaryResult(summary=summary, file_size=format_file_size(upload.size))

    async def _summarize(self, upload: UploadedFile) -> str:
        # Parsing is CPU bound; keep it off the event loop
        try:
            text = await asyncio.to_thread(extract_text, upload.content, upload.media_type)
        except ExtractionError as e:
            if e.reason == ExtractionFailure.EMPTY_CONTENT:
                logger.warning(f"No readable text in '{upload.filename}'")
                raise EmptyDocumentError()
            logger.error(f"Failed to extract text from '{upload.filename}': {e}")
            raise FileProcessingError(str(e))

        logger.info(f"Extracted {len(text)} chars from '{upload.filename}'")

        prompt = build_prompt(text)
        if self.max_prompt_chars is not None and len(prompt) > self.max_prompt_chars:
            logger.warning(
                f"Prompt for '{upload.filename}' is {len(prompt)} chars, "
                f"limit is {self.max_prompt_chars}"
            )
            raise DocumentTooLongError(len(prompt), self.max_prompt_chars)

        try:
            return await self.summarizer.summarize(prompt)
        except BackendError as e:
            logger.error(f"Summary generation failed ({e.reason.value}): {e}")
            raise FileProcessingError(str(e))
