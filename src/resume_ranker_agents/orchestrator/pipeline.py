"""Operation-gated async pipeline: parse job, structure resumes, score, normalize."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Protocol

import structlog

from resume_ranker_agents.agents.job_parser import JobParserAgent
from resume_ranker_agents.agents.resume_scorer import ResumeScorerAgent
from resume_ranker_agents.agents.resume_structurer import ResumeStructurerAgent
from resume_ranker_agents.observability import bind_run_context, clear_run_context
from resume_ranker_agents.scoring.normalizer import normalize_scoring_result
from resume_ranker_core.exceptions import (
    InputValidationError,
    MissingJobPostingError,
    MissingResumesError,
    StageTimeoutError,
)
from resume_ranker_core.models.run import EvaluationRequest, EvaluationResult, Operation
from resume_ranker_core.state import PipelineState
from resume_ranker_core.text_guard import validate_job_posting_text, validate_resume_text

if TYPE_CHECKING:
    from resume_ranker_core.config.settings import Settings

logger = structlog.get_logger()


class PipelineStep(Protocol):
    """Anything the pipeline can run: built from settings, mutates state."""

    def __init__(self, settings: Settings) -> None: ...

    async def run(self, state: PipelineState) -> PipelineState: ...


class ScoreNormalizerStep:
    """Deterministic step that recomputes composites, flags and ordering."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def run(self, state: PipelineState) -> PipelineState:
        if state.scoring_result is None:
            return state
        state.scoring_result = normalize_scoring_result(state.scoring_result, state.threshold)
        return state


PIPELINE_STEPS: list[tuple[str, type[PipelineStep]]] = [
    ("parse_job", JobParserAgent),
    ("structure_resumes", ResumeStructurerAgent),
    ("score_resumes", ResumeScorerAgent),
    ("normalize_scores", ScoreNormalizerStep),
]

OPERATION_STEPS: dict[Operation, frozenset[str]] = {
    Operation.PARSE_JOB: frozenset({"parse_job"}),
    Operation.PARSE_RESUMES: frozenset({"structure_resumes"}),
    Operation.SCORE: frozenset({"parse_job", "score_resumes", "normalize_scores"}),
    Operation.EVALUATE: frozenset(
        {"parse_job", "structure_resumes", "score_resumes", "normalize_scores"}
    ),
}

_NEEDS_RESUMES = frozenset({Operation.PARSE_RESUMES, Operation.SCORE, Operation.EVALUATE})
_NEEDS_JOB = frozenset({Operation.PARSE_JOB, Operation.SCORE, Operation.EVALUATE})


def validate_request(request: EvaluationRequest) -> None:
    """Check an operation's inputs before any model call is made.

    Raises:
        MissingResumesError: The operation needs resumes and none were given.
        MissingJobPostingError: The operation needs a job posting and neither
            a parsed posting nor posting text was given.
        InputValidationError: A text fails its length guard, or resume ids
            are not unique.
    """
    operation = request.operation

    if operation in _NEEDS_RESUMES and not request.resumes:
        msg = f"Operation '{operation}' requires at least one resume."
        raise MissingResumesError(msg)

    if operation in _NEEDS_JOB and request.job_posting is None:
        text = request.job_posting_text
        if not text or not text.strip():
            msg = f"Operation '{operation}' requires job_posting or job_posting_text."
            raise MissingJobPostingError(msg)
        error = validate_job_posting_text(text)
        if error:
            raise InputValidationError(error)

    if operation in _NEEDS_RESUMES:
        seen: set[str] = set()
        for resume in request.resumes:
            if resume.id in seen:
                msg = f"Duplicate resume id '{resume.id}'."
                raise InputValidationError(msg)
            seen.add(resume.id)
            error = validate_resume_text(resume.text, label=f"Resume '{resume.id}'")
            if error:
                raise InputValidationError(error)


class Pipeline:
    """Runs the steps an operation needs, in fixed order, all-or-nothing."""

    def __init__(self, settings: Settings) -> None:
        """Initialize with application settings."""
        self.settings = settings

    async def run(self, request: EvaluationRequest) -> EvaluationResult:
        """Execute the steps gated by request.operation."""
        start = time.monotonic()
        bind_run_context(request.run_id, operation=str(request.operation))

        try:
            logger.info(
                "pipeline_start",
                operation=str(request.operation),
                resumes_count=len(request.resumes),
                job_posting_supplied=request.job_posting is not None,
            )
            validate_request(request)

            state = PipelineState(request=request)
            enabled = OPERATION_STEPS[request.operation]

            for step_name, step_cls in PIPELINE_STEPS:
                if step_name not in enabled:
                    continue
                if step_name == "parse_job" and state.job_posting is not None:
                    logger.info("step_skipped", step=step_name, reason="job_posting_supplied")
                    continue
                state = await self._run_step(step_name, step_cls, state)

            duration = time.monotonic() - start
            self._log_cost_summary(state, duration)
            return state.build_result(duration_seconds=duration)
        except Exception as e:
            logger.error(
                "pipeline_failed",
                error_type=type(e).__name__,
                error=str(e),
                duration_seconds=round(time.monotonic() - start, 2),
            )
            raise
        finally:
            clear_run_context()

    async def _run_step(
        self,
        step_name: str,
        step_cls: type[PipelineStep],
        state: PipelineState,
    ) -> PipelineState:
        """Run one step under the per-step timeout."""
        logger.info("step_start", step=step_name)
        step_start = time.monotonic()
        step = step_cls(self.settings)
        try:
            state = await asyncio.wait_for(
                step.run(state),
                timeout=self.settings.agent_timeout_seconds,
            )
        except TimeoutError as e:
            logger.error(
                "agent_timeout",
                step=step_name,
                timeout=self.settings.agent_timeout_seconds,
            )
            msg = (
                f"Step '{step_name}' timed out after "
                f"{self.settings.agent_timeout_seconds}s"
            )
            raise StageTimeoutError(msg) from e

        logger.info(
            "step_end",
            step=step_name,
            duration_seconds=round(time.monotonic() - step_start, 2),
        )
        return state

    @staticmethod
    def _log_cost_summary(state: PipelineState, duration: float) -> None:
        """Log a structured cost and performance summary."""
        logger.info(
            "pipeline_summary",
            total_tokens=state.total_tokens,
            total_cost_usd=round(state.total_cost_usd, 4),
            duration_seconds=round(duration, 2),
            structured_count=len(state.structured_resumes),
            scores_count=len(state.scoring_result.scores) if state.scoring_result else 0,
        )
