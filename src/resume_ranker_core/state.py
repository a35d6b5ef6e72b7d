"""Pipeline state: request-scoped state passed through the pipeline steps."""

from __future__ import annotations

from dataclasses import dataclass, field

from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.resume import StructuredResumeEntry
from resume_ranker_core.models.run import EvaluationRequest, EvaluationResult
from resume_ranker_core.models.scoring import ScorerOutput


@dataclass
class PipelineState:
    """State owned by one pipeline run. Never shared across runs."""

    request: EvaluationRequest

    # Step outputs
    job_posting: JobPosting | None = None
    structured_resumes: list[StructuredResumeEntry] = field(default_factory=list)
    scoring_result: ScorerOutput | None = None

    # Cross-cutting
    total_tokens: int = 0
    total_cost_usd: float = 0.0

    def __post_init__(self) -> None:
        if self.job_posting is None:
            self.job_posting = self.request.job_posting

    @property
    def threshold(self) -> float:
        """Caller-supplied threshold for this run."""
        return self.request.threshold

    def build_result(self, duration_seconds: float) -> EvaluationResult:
        """Assemble the run result from whatever the steps produced."""
        return EvaluationResult(
            run_id=self.request.run_id,
            operation=self.request.operation,
            job_posting=self.job_posting,
            structured_resumes=list(self.structured_resumes),
            scoring_result=self.scoring_result,
            total_tokens=self.total_tokens,
            estimated_cost_usd=self.total_cost_usd,
            duration_seconds=duration_seconds,
        )
