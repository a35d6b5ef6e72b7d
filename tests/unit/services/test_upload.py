"""Tests for the resume upload service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_ranker_agents.services.upload import ResumeUploadService
from resume_ranker_core.exceptions import (
    CostLimitExceededError,
    FileTooLargeError,
    InvalidFileError,
    LatexConversionFailedError,
    ScannedPDFError,
    StructuringFailedError,
)
from resume_ranker_core.models.resume import ResumeLatexConversion
from resume_ranker_core.models.run import EvaluationResult, Operation
from resume_ranker_infra.storage.files import write_bytes
from resume_ranker_infra.storage.resume_store import ResumeStore
from tests.mocks.mock_factories import RESUME_TEXT, make_structured_entry

PDF_BYTES = b"%PDF-1.4 fake content"


def _pipeline_result(
    resume_id: str, total_tokens: int = 0, cost: float = 0.0
) -> EvaluationResult:
    return EvaluationResult(
        run_id="run_test",
        operation=Operation.PARSE_RESUMES,
        structured_resumes=[make_structured_entry(resume_id)],
        total_tokens=total_tokens,
        estimated_cost_usd=cost,
    )


def _service(
    settings: MagicMock, text: str = RESUME_TEXT, pipeline_error: Exception | None = None
) -> ResumeUploadService:
    pipeline = MagicMock()
    if pipeline_error is not None:
        pipeline.run = AsyncMock(side_effect=pipeline_error)
    else:

        async def _run(request: object) -> EvaluationResult:
            return _pipeline_result(request.resumes[0].id)  # type: ignore[attr-defined]

        pipeline.run = AsyncMock(side_effect=_run)
    parser = MagicMock()
    parser.extract_text = AsyncMock(return_value=text)
    return ResumeUploadService(settings, pipeline=pipeline, pdf_parser=parser)


@pytest.mark.unit
class TestUploadValidation:
    """Rejections before anything is written."""

    @pytest.mark.asyncio
    async def test_non_pdf_rejected(self, mock_settings: MagicMock) -> None:
        with pytest.raises(InvalidFileError, match="Only PDF"):
            await _service(mock_settings).upload("cv.docx", PDF_BYTES)

    @pytest.mark.asyncio
    async def test_oversize_rejected(self, mock_settings: MagicMock) -> None:
        mock_settings.max_upload_bytes = 10
        with pytest.raises(FileTooLargeError):
            await _service(mock_settings).upload("cv.pdf", PDF_BYTES)
        assert not mock_settings.storage_dir.exists()

    @pytest.mark.asyncio
    async def test_empty_rejected(self, mock_settings: MagicMock) -> None:
        with pytest.raises(InvalidFileError, match="empty"):
            await _service(mock_settings).upload("cv.pdf", b"")


@pytest.mark.unit
class TestUploadFlow:
    """Successful uploads and fail-and-clean-up."""

    @pytest.mark.asyncio
    async def test_upload_stores_pdf_and_record(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings)

        summary = await service.upload("Jane Doe.pdf", PDF_BYTES)

        assert summary.id == "Jane_Doe.pdf"
        assert summary.size_bytes == len(PDF_BYTES)
        assert summary.is_editable is False
        assert summary.has_latex is False
        assert (mock_settings.storage_dir / "Jane_Doe.pdf").read_bytes() == PDF_BYTES

        record = ResumeStore(mock_settings.storage_dir).get("Jane_Doe.pdf")
        assert record is not None
        assert record.text == RESUME_TEXT
        assert record.structured is not None

        request = service.pipeline.run.call_args.args[0]
        assert request.operation == Operation.PARSE_RESUMES

    @pytest.mark.asyncio
    async def test_name_collision_gets_timestamp_prefix(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings)
        first = await service.upload("cv.pdf", PDF_BYTES)
        second = await service.upload("cv.pdf", PDF_BYTES)

        assert first.id == "cv.pdf"
        assert second.id != "cv.pdf"
        assert second.id.endswith("_cv.pdf")

    @pytest.mark.asyncio
    async def test_scanned_pdf_is_removed(self, mock_settings: MagicMock) -> None:
        with pytest.raises(ScannedPDFError):
            await _service(mock_settings, text="").upload("scan.pdf", PDF_BYTES)

        assert not (mock_settings.storage_dir / "scan.pdf").exists()
        assert ResumeStore(mock_settings.storage_dir).list_all() == []

    @pytest.mark.asyncio
    async def test_structuring_failure_is_removed(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings, pipeline_error=StructuringFailedError("bad"))
        with pytest.raises(StructuringFailedError):
            await service.upload("cv.pdf", PDF_BYTES)

        assert not (mock_settings.storage_dir / "cv.pdf").exists()

    @pytest.mark.asyncio
    async def test_editable_upload_writes_latex(self, mock_settings: MagicMock) -> None:
        conversion = ResumeLatexConversion(latex="\\documentclass{article}", template="classic")
        with patch(
            "resume_ranker_agents.services.upload.ResumeLatexConverterAgent"
        ) as mock_converter_cls:
            mock_converter_cls.return_value.convert = AsyncMock(return_value=conversion)
            summary = await _service(mock_settings).upload("cv.pdf", PDF_BYTES, editable=True)

        latex_file = mock_settings.storage_dir / "latex" / "cv.tex"
        assert summary.is_editable is True
        assert summary.has_latex is True
        assert latex_file.read_text() == "\\documentclass{article}"
        record = ResumeStore(mock_settings.storage_dir).get("cv.pdf")
        assert record is not None
        assert record.latex_path == str(latex_file)

    @pytest.mark.asyncio
    async def test_latex_failure_removes_pdf(self, mock_settings: MagicMock) -> None:
        with patch(
            "resume_ranker_agents.services.upload.ResumeLatexConverterAgent"
        ) as mock_converter_cls:
            mock_converter_cls.return_value.convert = AsyncMock(
                side_effect=LatexConversionFailedError("nope")
            )
            with pytest.raises(LatexConversionFailedError):
                await _service(mock_settings).upload("cv.pdf", PDF_BYTES, editable=True)

        assert not (mock_settings.storage_dir / "cv.pdf").exists()
        assert not (mock_settings.storage_dir / "latex" / "cv.tex").exists()

    @pytest.mark.asyncio
    async def test_latex_call_tracks_cost_from_structuring(
        self, mock_settings: MagicMock
    ) -> None:
        """The converter receives a state seeded with the structuring spend."""
        conversion = ResumeLatexConversion(latex="\\documentclass{article}", template="classic")
        service = _service(mock_settings)
        service.pipeline.run = AsyncMock(
            return_value=_pipeline_result("cv.pdf", total_tokens=900, cost=0.25)
        )
        with patch(
            "resume_ranker_agents.services.upload.ResumeLatexConverterAgent"
        ) as mock_converter_cls:
            mock_converter_cls.return_value.convert = AsyncMock(return_value=conversion)
            await service.upload("cv.pdf", PDF_BYTES, editable=True)

        state = mock_converter_cls.return_value.convert.call_args.kwargs["state"]
        assert state.total_tokens == 900
        assert state.total_cost_usd == 0.25
        assert state.request.operation == Operation.PARSE_RESUMES

    @pytest.mark.asyncio
    async def test_cost_limit_during_latex_removes_files(self, mock_settings: MagicMock) -> None:
        with patch(
            "resume_ranker_agents.services.upload.ResumeLatexConverterAgent"
        ) as mock_converter_cls:
            mock_converter_cls.return_value.convert = AsyncMock(
                side_effect=CostLimitExceededError("over budget")
            )
            with pytest.raises(CostLimitExceededError):
                await _service(mock_settings).upload("cv.pdf", PDF_BYTES, editable=True)

        assert not (mock_settings.storage_dir / "cv.pdf").exists()
        assert ResumeStore(mock_settings.storage_dir).list_all() == []

    @pytest.mark.asyncio
    async def test_blocking_writes_run_in_worker_threads(
        self, mock_settings: MagicMock
    ) -> None:
        """PDF and store writes are handed to asyncio.to_thread."""
        service = _service(mock_settings)
        with patch(
            "resume_ranker_agents.services.upload.asyncio.to_thread",
            wraps=asyncio.to_thread,
        ) as mock_to_thread:
            await service.upload("cv.pdf", PDF_BYTES)

        offloaded = [c.args[0] for c in mock_to_thread.call_args_list]
        assert write_bytes in offloaded
        assert service.resume_store.upsert in offloaded


@pytest.mark.unit
class TestListResumes:
    """Listing merges disk state with the store."""

    @pytest.mark.asyncio
    async def test_lists_uploaded_with_flags(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings)
        await service.upload("a.pdf", PDF_BYTES)
        stray = Path(mock_settings.storage_dir) / "stray.pdf"
        stray.write_bytes(b"%PDF")

        listing = {r.id: r for r in service.list_resumes()}

        assert set(listing) == {"a.pdf", "stray.pdf"}
        assert listing["stray.pdf"].is_editable is False
        assert listing["stray.pdf"].has_latex is False
