"""Pytest configuration and fixtures."""

import io
from types import SimpleNamespace
from typing import Callable, Generator, List, Optional
from unittest.mock import AsyncMock, MagicMock

import docx
import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from app.core.config import Settings
from app.services.summarizer import SummarizerClient, build_generation_config

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines: List[str]) -> bytes:
    """Build a single-page PDF with one Helvetica text line per entry."""
    operations = ["BT", "/F1 12 Tf", "72 720 Td"]
    for i, line in enumerate(lines):
        if i:
            operations.append("0 -16 Td")
        operations.append(f"({_pdf_escape(line)}) Tj")
    operations.append("ET")
    stream = "\n".join(operations).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(f"{number} 0 obj\n".encode() + body + b"\nendobj\n")

    xref_offset = out.tell()
    out.write(f"xref\n0 {len(objects) + 1}\n".encode())
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(f"{offset:010d} 00000 n \n".encode())
    out.write(
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n".encode()
    )
    return out.getvalue()


def build_blank_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    out = io.BytesIO()
    writer.write(out)
    return out.getvalue()


def build_docx(paragraphs: List[str], table: Optional[List[List[str]]] = None) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    if table:
        t = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                t.cell(r, c).text = value
    out = io.BytesIO()
    document.save(out)
    return out.getvalue()


def make_response(text: Optional[str] = "This is a summary.", finish_reason: str = "STOP"):
    """Fake generate_content response with a single candidate."""
    return SimpleNamespace(
        candidates=[
            SimpleNamespace(
                content=SimpleNamespace(parts=[SimpleNamespace(text=text)]),
                finish_reason=finish_reason,
            )
        ],
        prompt_feedback=None,
    )


@pytest.fixture
def settings() -> Settings:
    """Settings with dummy Google Cloud configuration."""
    return Settings(
        _env_file=None,
        gcloud_project_id="test-project",
        gcloud_location="us-central1",
        google_application_credentials="/tmp/test-credentials.json",
        gemini_model="gemini-test",
        rate_limit_max_requests=1000,
    )


@pytest.fixture
def pdf_factory() -> Callable[[List[str]], bytes]:
    return build_pdf


@pytest.fixture
def docx_factory() -> Callable[..., bytes]:
    return build_docx


@pytest.fixture
def hello_pdf() -> bytes:
    return build_pdf(["Hello world."])


@pytest.fixture
def blank_pdf() -> bytes:
    return build_blank_pdf()


@pytest.fixture
def response_factory() -> Callable[..., SimpleNamespace]:
    return make_response


@pytest.fixture
def genai_client() -> MagicMock:
    """Mock google-genai client returning a fixed summary."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=make_response())
    return client


@pytest.fixture
def summarizer(genai_client: MagicMock, settings: Settings) -> SummarizerClient:
    return SummarizerClient(
        genai_client,
        build_generation_config(settings),
        timeout_seconds=5,
    )


@pytest.fixture
def app_client(
    settings: Settings, summarizer: SummarizerClient
) -> Generator[TestClient, None, None]:
    """Create test client around a stubbed summarizer."""
    from app.main import create_app

    app = create_app(settings=settings, summarizer=summarizer)
    with TestClient(app) as client:
        yield client
