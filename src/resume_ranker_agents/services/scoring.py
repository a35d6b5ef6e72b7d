"""Scoring entry points shared by the HTTP API and the CLI."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from resume_ranker_agents.orchestrator.pipeline import Pipeline
from resume_ranker_agents.tools.pdf_parser import PDFParser
from resume_ranker_core.exceptions import ResumeNotFoundError, ScannedPDFError
from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.resume import ResumeInput
from resume_ranker_core.models.run import EvaluationRequest, EvaluationResult, Operation
from resume_ranker_core.models.scoring import ScorerOutput
from resume_ranker_infra.storage.files import resolve_resume_id
from resume_ranker_infra.storage.resume_store import ResumeStore
from resume_ranker_infra.storage.run_state_store import RunStateStore

if TYPE_CHECKING:
    from resume_ranker_core.config.settings import Settings

logger = structlog.get_logger()


class ScoringService:
    """Resolves stored resumes, runs the pipeline and records the latest run."""

    def __init__(
        self,
        settings: Settings,
        pipeline: Pipeline | None = None,
        pdf_parser: PDFParser | None = None,
        resume_store: ResumeStore | None = None,
        run_state_store: RunStateStore | None = None,
    ) -> None:
        self.settings = settings
        self.pipeline = pipeline or Pipeline(settings)
        self.pdf_parser = pdf_parser or PDFParser()
        self.resume_store = resume_store or ResumeStore(settings.storage_dir)
        self.run_state_store = run_state_store or RunStateStore(settings.storage_dir)

    async def parse_job(self, job_posting_text: str) -> JobPosting:
        """Extract a JobPosting from raw text."""
        result = await self.pipeline.run(
            EvaluationRequest(operation=Operation.PARSE_JOB, job_posting_text=job_posting_text)
        )
        assert result.job_posting is not None
        return result.job_posting

    async def score(
        self,
        job_posting: JobPosting | None,
        threshold: float | None = None,
        resumes: list[ResumeInput] | None = None,
        resume_ids: list[str] | None = None,
    ) -> ScorerOutput:
        """Score resumes against an already-parsed job posting."""
        request = EvaluationRequest(
            operation=Operation.SCORE,
            job_posting=job_posting,
            resumes=await self.resolve_resumes(resumes, resume_ids),
            threshold=self._threshold(threshold),
        )
        result = await self.pipeline.run(request)
        await self._save_latest(result)
        assert result.scoring_result is not None
        return result.scoring_result

    async def evaluate(
        self,
        job_posting: JobPosting | None = None,
        job_posting_text: str | None = None,
        threshold: float | None = None,
        resumes: list[ResumeInput] | None = None,
        resume_ids: list[str] | None = None,
    ) -> EvaluationResult:
        """Run the full pipeline: parse, structure, score, normalize."""
        request = EvaluationRequest(
            operation=Operation.EVALUATE,
            job_posting=job_posting,
            job_posting_text=job_posting_text,
            resumes=await self.resolve_resumes(resumes, resume_ids),
            threshold=self._threshold(threshold),
        )
        result = await self.pipeline.run(request)
        await self._save_latest(result)
        return result

    async def resolve_resumes(
        self,
        resumes: list[ResumeInput] | None,
        resume_ids: list[str] | None,
    ) -> list[ResumeInput]:
        """Use inline resumes when given, else load stored ones by id.

        Ids are reduced to their basename. Stored text is preferred; without a
        store record the stored PDF is extracted again.

        Raises:
            ResumeNotFoundError: An id matches no stored PDF.
            ScannedPDFError: A stored PDF has no text layer.
        """
        if resumes:
            return list(resumes)

        resolved: list[ResumeInput] = []
        for raw_id in resume_ids or []:
            resume_id = resolve_resume_id(raw_id)
            record = await asyncio.to_thread(self.resume_store.get, resume_id)
            if record is not None and record.text.strip():
                resolved.append(ResumeInput(id=resume_id, text=record.text))
                continue

            path = self.settings.storage_dir / resume_id
            if not resume_id or not path.is_file() or path.suffix.lower() != ".pdf":
                msg = f"Resume not found: {resume_id}"
                raise ResumeNotFoundError(msg)

            text = await self.pdf_parser.extract_text(path)
            if not text:
                msg = f"No text could be extracted from stored resume '{resume_id}'."
                raise ScannedPDFError(msg)
            resolved.append(ResumeInput(id=resume_id, text=text))

        logger.debug("resumes_resolved", count=len(resolved))
        return resolved

    def _threshold(self, threshold: float | None) -> float:
        return self.settings.default_threshold if threshold is None else threshold

    async def _save_latest(self, result: EvaluationResult) -> None:
        if result.job_posting is None or result.scoring_result is None:
            return
        await asyncio.to_thread(
            self.run_state_store.save_latest, result.job_posting, result.scoring_result
        )
