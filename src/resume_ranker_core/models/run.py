"""Pipeline request, result and persisted run-state models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from resume_ranker_core.constants import DEFAULT_THRESHOLD, RUN_STATE_VERSION
from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.resume import ResumeInput, StructuredResumeEntry
from resume_ranker_core.models.scoring import ScorerOutput


class Operation(StrEnum):
    """Pipeline operations, each running a subset of the steps."""

    PARSE_JOB = "parse_job"
    PARSE_RESUMES = "parse_resumes"
    SCORE = "score"
    EVALUATE = "evaluate"


class EvaluationRequest(BaseModel):
    """Input for a single pipeline run."""

    run_id: str = Field(
        default_factory=lambda: f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}",
        description="Unique run identifier",
    )
    operation: Operation = Field(default=Operation.EVALUATE, description="Which steps to run")
    job_posting_text: str | None = Field(default=None, description="Raw job posting text")
    job_posting: JobPosting | None = Field(
        default=None, description="Pre-parsed job posting; skips extraction when set"
    )
    resumes: list[ResumeInput] = Field(default_factory=list, description="Resumes to process")
    threshold: float = Field(
        default=DEFAULT_THRESHOLD, ge=0, le=100, description="Minimum composite score to match"
    )


class EvaluationResult(BaseModel):
    """Output of a pipeline run. Fields for steps that did not run stay empty."""

    run_id: str
    operation: Operation
    job_posting: JobPosting | None = None
    structured_resumes: list[StructuredResumeEntry] = Field(default_factory=list)
    scoring_result: ScorerOutput | None = None
    total_tokens: int = 0
    estimated_cost_usd: float = 0.0
    duration_seconds: float = 0.0


class LatestRunState(BaseModel):
    """Single-slot record of the most recent scoring run."""

    version: int = RUN_STATE_VERSION
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    job_posting: JobPosting
    scoring_results: ScorerOutput
