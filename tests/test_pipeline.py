"""Tests for the summary pipeline."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.exceptions import (
    BackendError,
    BackendFailure,
    DocumentTooLongError,
    EmptyDocumentError,
    ExtractionError,
    ExtractionFailure,
    FileProcessingError,
)
from app.models.document import MediaType, UploadedFile
from app.services.pipeline import SummaryPipeline, format_file_size
from app.services.prompt_builder import COVERAGE_ASPECTS


@pytest.fixture
def stub_summarizer():
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock(return_value="This is a summary.")
    return summarizer


class TestFormatFileSize:
    """Tests for format_file_size."""

    @pytest.mark.parametrize(
        "num_bytes,expected",
        [
            (0, "0.00 MB"),
            (1024 * 1024, "1.00 MB"),
            (2_097_152, "2.00 MB"),
            (1_572_864, "1.50 MB"),
            (50 * 1024 * 1024, "50.00 MB"),
            (12_345, "0.01 MB"),
        ],
    )
    def test_format(self, num_bytes, expected):
        assert format_file_size(num_bytes) == expected


class TestSummaryPipeline:
    """Tests for SummaryPipeline.run."""

    @pytest.mark.asyncio
    async def test_hello_world_scenario(self, stub_summarizer):
        """Test a 1 MB PDF whose text is 'Hello world.' produces the expected result."""
        upload = UploadedFile(
            filename="hello.pdf",
            media_type=MediaType.PDF,
            content=b"%" * (1024 * 1024),
        )
        pipeline = SummaryPipeline(stub_summarizer)

        with patch("app.services.pipeline.extract_text", return_value="Hello world."):
            result = await pipeline.run(upload)

        prompt = stub_summarizer.summarize.await_args.args[0]
        assert "Hello world." in prompt
        for aspect in COVERAGE_ASPECTS:
            assert aspect in prompt

        assert result.model_dump(by_alias=True) == {
            "summary": "This is a summary.",
            "status": "success",
            "fileSize": "1.00 MB",
        }

    @pytest.mark.asyncio
    async def test_real_pdf(self, stub_summarizer, hello_pdf):
        upload = UploadedFile(filename="hello.pdf", media_type=MediaType.PDF, content=hello_pdf)

        result = await SummaryPipeline(stub_summarizer).run(upload)

        assert result.summary == "This is a summary."
        assert "Hello world." in stub_summarizer.summarize.await_args.args[0]

    @pytest.mark.asyncio
    async def test_real_docx(self, stub_summarizer, docx_factory):
        content = docx_factory(["Chapter one", "Some argument."])
        upload = UploadedFile(filename="doc.docx", media_type=MediaType.DOCX, content=content)

        result = await SummaryPipeline(stub_summarizer).run(upload)

        assert result.status == "success"
        assert result.file_size == format_file_size(len(content))
        assert "Some argument." in stub_summarizer.summarize.await_args.args[0]

    @pytest.mark.asyncio
    async def test_empty_document_never_calls_backend(self, stub_summarizer, blank_pdf):
        upload = UploadedFile(media_type=MediaType.PDF, content=blank_pdf)

        with pytest.raises(EmptyDocumentError) as exc_info:
            await SummaryPipeline(stub_summarizer).run(upload)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error == "Empty file"
        stub_summarizer.summarize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parse_failure_carries_cause(self, stub_summarizer):
        upload = UploadedFile(media_type=MediaType.DOCX, content=b"not a docx")

        with patch(
            "app.services.pipeline.extract_text",
            side_effect=ExtractionError(ExtractionFailure.PARSE_FAILURE, cause="bad zip"),
        ):
            with pytest.raises(FileProcessingError) as exc_info:
                await SummaryPipeline(stub_summarizer).run(upload)

        assert exc_info.value.message == "bad zip"
        assert exc_info.value.error == "File processing failed"
        assert exc_info.value.status_code == 500
        stub_summarizer.summarize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_backend_error_becomes_processing_failure(self, stub_summarizer, hello_pdf):
        stub_summarizer.summarize.side_effect = BackendError(
            BackendFailure.MALFORMED_RESPONSE, cause="Model returned no candidates"
        )
        upload = UploadedFile(media_type=MediaType.PDF, content=hello_pdf)

        with pytest.raises(FileProcessingError) as exc_info:
            await SummaryPipeline(stub_summarizer).run(upload)

        assert exc_info.value.message == "Model returned no candidates"

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_processing_failure(self, stub_summarizer, hello_pdf):
        stub_summarizer.summarize.side_effect = ValueError("unexpected")
        upload = UploadedFile(media_type=MediaType.PDF, content=hello_pdf)

        with pytest.raises(FileProcessingError) as exc_info:
            await SummaryPipeline(stub_summarizer).run(upload)

        assert exc_info.value.message == "unexpected"

    @pytest.mark.asyncio
    async def test_prompt_too_long_rejected_before_backend(self, stub_summarizer):
        upload = UploadedFile(media_type=MediaType.PDF, content=b"%PDF")
        pipeline = SummaryPipeline(stub_summarizer, max_prompt_chars=500)

        with patch("app.services.pipeline.extract_text", return_value="x" * 1000):
            with pytest.raises(DocumentTooLongError) as exc_info:
                await pipeline.run(upload)

        assert exc_info.value.status_code == 413
        assert exc_info.value.max_length == 500
        stub_summarizer.summarize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_limit_passes_long_text_untruncated(self, stub_summarizer):
        text = "y" * 100_000
        upload = UploadedFile(media_type=MediaType.PDF, content=b"%PDF")

        with patch("app.services.pipeline.extract_text", return_value=text):
            await SummaryPipeline(stub_summarizer).run(upload)

        assert stub_summarizer.summarize.await_args.args[0].endswith(text)
