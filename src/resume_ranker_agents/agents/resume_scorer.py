"""Resume scorer agent: scores resumes against a job posting in one LLM call."""

from __future__ import annotations

import html
import time

import structlog

from resume_ranker_agents.agents.base import BaseAgent
from resume_ranker_agents.prompts.hardening import wrap_untrusted_text
from resume_ranker_agents.prompts.resume_scorer import (
    RESUME_SCORER_SYSTEM,
    RESUME_SCORER_USER,
)
from resume_ranker_core.exceptions import (
    MissingJobPostingError,
    ResumeRankerError,
    ScoringFailedError,
)
from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.resume import ResumeInput
from resume_ranker_core.models.scoring import ScorerOutput
from resume_ranker_core.state import PipelineState

logger = structlog.get_logger()


class ResumeScorerAgent(BaseAgent):
    """Score all resumes of a request against its job posting.

    The output is schema-valid but its arithmetic, ordering and flags are not
    trusted; the normalize step recomputes them.
    """

    agent_name = "resume_scorer"

    async def run(self, state: PipelineState) -> PipelineState:
        """Score the request's resumes against the resolved job posting."""
        if state.job_posting is None:
            msg = "A parsed job posting is required before scoring."
            raise MissingJobPostingError(msg)

        resumes = state.request.resumes
        self._log_start({"resumes_count": len(resumes), "threshold": state.threshold})
        start = time.monotonic()

        result = await self.score(state.job_posting, resumes, state.threshold, state=state)

        state.scoring_result = result
        self._log_end(time.monotonic() - start, {"scores_count": len(result.scores)})
        return state

    async def score(
        self,
        job_posting: JobPosting,
        resumes: list[ResumeInput],
        threshold: float,
        state: PipelineState | None = None,
    ) -> ScorerOutput:
        """Call the model constrained to the ScorerOutput schema.

        Raises:
            ScoringFailedError: On any provider or schema failure, or when no
                score entries come back.
        """
        try:
            result = await self._call_llm(
                messages=[
                    {
                        "role": "user",
                        "content": self._build_prompt(job_posting, resumes, threshold),
                    },
                ],
                model=self.settings.sonnet_model,
                response_model=ScorerOutput,
                system=RESUME_SCORER_SYSTEM,
                state=state,
            )
        except ResumeRankerError:
            raise
        except Exception as e:
            msg = f"Resume scoring failed: {e}"
            raise ScoringFailedError(msg) from e

        if not result.scores:
            msg = "Scoring returned zero score entries."
            raise ScoringFailedError(msg)

        returned_ids = {s.id for s in result.scores}
        expected_ids = {r.id for r in resumes}
        if returned_ids != expected_ids:
            logger.warning(
                "scorer_id_mismatch",
                missing=sorted(expected_ids - returned_ids),
                unexpected=sorted(returned_ids - expected_ids),
            )
        return result

    @staticmethod
    def _build_prompt(
        job_posting: JobPosting, resumes: list[ResumeInput], threshold: float
    ) -> str:
        """Serialize the job posting and each resume under its stable id."""
        blocks = [
            f'<resume index="{i + 1}" id="{html.escape(resume.id, quote=True)}">\n'
            f"{wrap_untrusted_text('resume', resume.text)}\n"
            f"</resume>"
            for i, resume in enumerate(resumes)
        ]
        return RESUME_SCORER_USER.format(
            resume_count=len(resumes),
            threshold=threshold,
            job_posting_json=job_posting.model_dump_json(indent=2),
            resumes_block="\n\n".join(blocks),
        )
