"""Plain-text extraction from uploaded PDF and DOCX documents."""

import io
import logging
from typing import Callable, Dict, List

import docx
from docx.table import Table
from pypdf import PdfReader

from app.core.exceptions import ExtractionError, ExtractionFailure
from app.models.document import MediaType

logger = logging.getLogger(__name__)


def extract_pdf_text(content: bytes) -> str:
    """Concatenate the text layer of every page in a PDF."""
    reader = PdfReader(io.BytesIO(content))
    pages: List[str] = []
    for page in reader.pages:
        pages.append(page.extract_text() or "")
    return "\n\n".join(pages)


def _table_text(table: Table) -> List[str]:
    blocks: List[str] = []
    for row in table.rows:
        for cell in row.cells:
            for paragraph in cell.paragraphs:
                blocks.append(paragraph.text)
            for nested in cell.tables:
                blocks.extend(_table_text(nested))
    return blocks


def extract_docx_text(content: bytes) -> str:
    """Convert a DOCX body to plain text.

    Paragraphs and table cells are emitted in document order, one block per
    paragraph, separated by blank lines. Formatting and images are dropped.
    """
    document = docx.Document(io.BytesIO(content))
    blocks: List[str] = []
    for item in document.iter_inner_content():
        if isinstance(item, Table):
            blocks.extend(_table_text(item))
        else:
            blocks.append(item.text)
    return "\n\n".join(blocks)


HANDLERS: Dict[MediaType, Callable[[bytes], str]] = {
    MediaType.PDF: extract_pdf_text,
    MediaType.DOCX: extract_docx_text,
}


def extract_text(content: bytes, media_type: MediaType) -> str:
    """Extract plain text from a document buffer.

    Args:
        content: Raw document bytes. Not modified.
        media_type: Declared media type selecting the format handler.

    Returns:
        The extracted text, guaranteed to contain non-whitespace characters.

    Raises:
        ExtractionError: PARSE_FAILURE if the parser rejects the buffer,
            EMPTY_CONTENT if it yields no readable text.
    """
    try:
        media_type = MediaType(media_type)
    except ValueError:
        raise ExtractionError(
            ExtractionFailure.PARSE_FAILURE,
            cause=f"Unsupported media type: {media_type}",
        )
    handler = HANDLERS[media_type]

    try:
        text = handler(content)
    except Exception as e:
        logger.warning(f"Failed to parse {media_type.name} document: {e}")
        raise ExtractionError(ExtractionFailure.PARSE_FAILURE, cause=str(e))

    if not text or not text.strip():
        raise ExtractionError(ExtractionFailure.EMPTY_CONTENT)

    logger.debug(f"Extracted {len(text)} chars from {media_type.name} document")
    return text
