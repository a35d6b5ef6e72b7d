"""Tests for the scoring service."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_ranker_agents.scoring.normalizer import normalize_scoring_result
from resume_ranker_agents.services.scoring import ScoringService
from resume_ranker_core.exceptions import ResumeNotFoundError, ScannedPDFError
from resume_ranker_core.models.run import EvaluationRequest, EvaluationResult, Operation
from resume_ranker_infra.storage.resume_store import ResumeStore
from resume_ranker_infra.storage.run_state_store import RunStateStore
from tests.mocks.mock_factories import (
    JOB_TEXT,
    RESUME_TEXT,
    make_job_posting,
    make_parsed_resume,
    make_resume_input,
    make_resume_score,
    make_scorer_output,
)


def _result(request: EvaluationRequest) -> EvaluationResult:
    scores = normalize_scoring_result(
        make_scorer_output([make_resume_score(r.id) for r in request.resumes]),
        request.threshold,
    )
    return EvaluationResult(
        run_id=request.run_id,
        operation=request.operation,
        job_posting=request.job_posting or make_job_posting(),
        scoring_result=scores,
    )


def _service(settings: MagicMock, pdf_text: str = RESUME_TEXT) -> ScoringService:
    pipeline = MagicMock()
    pipeline.run = AsyncMock(side_effect=_result)
    parser = MagicMock()
    parser.extract_text = AsyncMock(return_value=pdf_text)
    return ScoringService(settings, pipeline=pipeline, pdf_parser=parser)


@pytest.mark.unit
class TestResolveResumes:
    """Resume id resolution."""

    @pytest.mark.asyncio
    async def test_inline_resumes_win(self, mock_settings: MagicMock) -> None:
        inline = [make_resume_input("inline.pdf")]
        resolved = await _service(mock_settings).resolve_resumes(inline, ["other.pdf"])
        assert resolved == inline

    @pytest.mark.asyncio
    async def test_stored_text_preferred(self, mock_settings: MagicMock) -> None:
        ResumeStore(mock_settings.storage_dir).upsert(make_parsed_resume("jane.pdf"))
        service = _service(mock_settings)

        resolved = await service.resolve_resumes(None, ["../../jane.pdf"])

        assert resolved == [make_resume_input("jane.pdf")]
        service.pdf_parser.extract_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_pdf_extraction(self, mock_settings: MagicMock) -> None:
        mock_settings.storage_dir.mkdir(parents=True)
        (mock_settings.storage_dir / "raw.pdf").write_bytes(b"%PDF")
        service = _service(mock_settings)

        resolved = await service.resolve_resumes(None, ["raw.pdf"])

        assert resolved[0].id == "raw.pdf"
        assert resolved[0].text == RESUME_TEXT

    @pytest.mark.asyncio
    async def test_unknown_id_raises(self, mock_settings: MagicMock) -> None:
        with pytest.raises(ResumeNotFoundError, match="ghost.pdf"):
            await _service(mock_settings).resolve_resumes(None, ["ghost.pdf"])

    @pytest.mark.asyncio
    async def test_stored_pdf_without_text_raises(self, mock_settings: MagicMock) -> None:
        mock_settings.storage_dir.mkdir(parents=True)
        (mock_settings.storage_dir / "scan.pdf").write_bytes(b"%PDF")
        with pytest.raises(ScannedPDFError):
            await _service(mock_settings, pdf_text="").resolve_resumes(None, ["scan.pdf"])


@pytest.mark.unit
class TestScoringService:
    """score / evaluate / parse_job entry points."""

    @pytest.mark.asyncio
    async def test_score_runs_score_operation_and_saves(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings)
        posting = make_job_posting()

        result = await service.score(posting, threshold=60, resumes=[make_resume_input()])

        request = service.pipeline.run.call_args.args[0]
        assert request.operation == Operation.SCORE
        assert request.threshold == 60
        assert result.threshold == 60
        saved = RunStateStore(mock_settings.storage_dir).get_latest()
        assert saved is not None
        assert saved.scoring_results == result

    @pytest.mark.asyncio
    async def test_default_threshold_from_settings(self, mock_settings: MagicMock) -> None:
        mock_settings.default_threshold = 55.0
        service = _service(mock_settings)
        await service.score(make_job_posting(), resumes=[make_resume_input()])
        assert service.pipeline.run.call_args.args[0].threshold == 55.0

    @pytest.mark.asyncio
    async def test_evaluate_passes_job_text(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings)

        result = await service.evaluate(job_posting_text=JOB_TEXT, resumes=[make_resume_input()])

        request = service.pipeline.run.call_args.args[0]
        assert request.operation == Operation.EVALUATE
        assert request.job_posting_text == JOB_TEXT
        assert result.scoring_result is not None
        assert RunStateStore(mock_settings.storage_dir).get_latest() is not None

    @pytest.mark.asyncio
    async def test_parse_job_does_not_save_run_state(self, mock_settings: MagicMock) -> None:
        service = _service(mock_settings)
        posting = make_job_posting()
        service.pipeline.run = AsyncMock(
            return_value=EvaluationResult(
                run_id="r", operation=Operation.PARSE_JOB, job_posting=posting
            )
        )

        assert await service.parse_job(JOB_TEXT) == posting
        assert RunStateStore(mock_settings.storage_dir).get_latest() is None

    @pytest.mark.asyncio
    async def test_store_io_runs_in_worker_threads(self, mock_settings: MagicMock) -> None:
        """Store lookups and the latest-run write are handed to asyncio.to_thread."""
        ResumeStore(mock_settings.storage_dir).upsert(make_parsed_resume("jane.pdf"))
        service = _service(mock_settings)

        with patch(
            "resume_ranker_agents.services.scoring.asyncio.to_thread",
            wraps=asyncio.to_thread,
        ) as mock_to_thread:
            await service.score(make_job_posting(), resume_ids=["jane.pdf"])

        offloaded = [c.args[0] for c in mock_to_thread.call_args_list]
        assert service.resume_store.get in offloaded
        assert service.run_state_store.save_latest in offloaded
