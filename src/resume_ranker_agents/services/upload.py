"""Resume upload: store the PDF, extract, structure, optionally render LaTeX."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from resume_ranker_agents.agents.latex_converter import ResumeLatexConverterAgent
from resume_ranker_agents.orchestrator.pipeline import Pipeline
from resume_ranker_agents.tools.pdf_parser import PDFParser
from resume_ranker_core.exceptions import (
    FileTooLargeError,
    InvalidFileError,
    ScannedPDFError,
)
from resume_ranker_core.models.resume import ParsedResume, ResumeInput, ResumeSummary
from resume_ranker_core.models.run import EvaluationRequest, Operation
from resume_ranker_core.state import PipelineState
from resume_ranker_infra.storage.files import (
    latex_path_for,
    list_uploaded_pdfs,
    safe_delete,
    sanitize_filename,
    unique_pdf_path,
    write_bytes,
    write_text_atomic,
)
from resume_ranker_infra.storage.resume_store import ResumeStore

if TYPE_CHECKING:
    from resume_ranker_core.config.settings import Settings

logger = structlog.get_logger()


class ResumeUploadService:
    """Accepts resume PDFs and keeps the parsed-resume store in sync."""

    def __init__(
        self,
        settings: Settings,
        pipeline: Pipeline | None = None,
        pdf_parser: PDFParser | None = None,
        resume_store: ResumeStore | None = None,
    ) -> None:
        self.settings = settings
        self.pipeline = pipeline or Pipeline(settings)
        self.pdf_parser = pdf_parser or PDFParser()
        self.resume_store = resume_store or ResumeStore(settings.storage_dir)

    async def upload(self, filename: str, data: bytes, editable: bool = False) -> ResumeSummary:
        """Store and parse one uploaded PDF.

        Any failure after the PDF is written removes the PDF and any LaTeX
        file produced, then re-raises.

        Raises:
            InvalidFileError: Not a .pdf name, or empty content.
            FileTooLargeError: Content exceeds max_upload_mb.
            ScannedPDFError: The PDF has no extractable text.
        """
        if not filename or not filename.lower().endswith(".pdf"):
            msg = "Only PDF files are supported."
            raise InvalidFileError(msg)
        if not data:
            msg = "Uploaded file is empty."
            raise InvalidFileError(msg)
        if len(data) > self.settings.max_upload_bytes:
            msg = f"File exceeds the {self.settings.max_upload_mb} MB upload limit."
            raise FileTooLargeError(msg)

        storage_dir = self.settings.storage_dir
        pdf_path = unique_pdf_path(storage_dir, sanitize_filename(filename))
        latex_path: Path | None = None
        uploaded_at = datetime.now(UTC)

        await asyncio.to_thread(write_bytes, pdf_path, data)
        logger.info("upload_saved", resume_id=pdf_path.name, size_bytes=len(data))

        try:
            text = await self.pdf_parser.extract_text(pdf_path)
            if not text:
                msg = (
                    f"No text could be extracted from '{filename}'. "
                    "It may be a scanned image; upload a text-based PDF."
                )
                raise ScannedPDFError(msg)

            request = EvaluationRequest(
                operation=Operation.PARSE_RESUMES,
                resumes=[ResumeInput(id=pdf_path.name, text=text)],
            )
            result = await self.pipeline.run(request)
            structured = result.structured_resumes[0].structured_resume

            latex_updated_at = None
            if editable:
                # Seeded with the structuring spend so the cost limit covers the whole upload
                state = PipelineState(
                    request=request,
                    total_tokens=result.total_tokens,
                    total_cost_usd=result.estimated_cost_usd,
                )
                converter = ResumeLatexConverterAgent(self.settings)
                conversion = await converter.convert(text, structured, state=state)
                logger.info(
                    "upload_latex_cost",
                    resume_id=pdf_path.name,
                    total_tokens=state.total_tokens,
                    total_cost_usd=round(state.total_cost_usd, 4),
                )
                latex_path = latex_path_for(storage_dir, pdf_path.name)
                await asyncio.to_thread(write_text_atomic, latex_path, conversion.latex)
                latex_updated_at = datetime.now(UTC)

            record = ParsedResume(
                id=pdf_path.name,
                filename=pdf_path.name,
                size_bytes=len(data),
                uploaded_at=uploaded_at,
                text=text,
                structured=structured,
                is_editable=editable,
                latex_path=str(latex_path) if latex_path else None,
                latex_updated_at=latex_updated_at,
            )
            await asyncio.to_thread(self.resume_store.upsert, record)
        except Exception as e:
            logger.error(
                "upload_failed",
                resume_id=pdf_path.name,
                error_type=type(e).__name__,
                error=str(e),
            )
            safe_delete(pdf_path)
            safe_delete(latex_path)
            raise

        return ResumeSummary(
            id=record.id,
            filename=record.filename,
            size_bytes=record.size_bytes,
            uploaded_at=record.uploaded_at,
            is_editable=record.is_editable,
            has_latex=latex_path is not None,
        )

    def list_resumes(self) -> list[ResumeSummary]:
        """Uploaded PDFs, newest first, with editability from the store."""
        records = {r.id: r for r in self.resume_store.list_all()}
        summaries: list[ResumeSummary] = []
        for pdf in list_uploaded_pdfs(self.settings.storage_dir):
            record = records.get(pdf.name)
            has_latex = bool(
                record and record.latex_path and Path(record.latex_path).exists()
            )
            summaries.append(
                ResumeSummary(
                    id=pdf.name,
                    filename=pdf.name,
                    size_bytes=pdf.size_bytes,
                    uploaded_at=pdf.modified_at,
                    is_editable=bool(record and record.is_editable),
                    has_latex=has_latex,
                )
            )
        return summaries
