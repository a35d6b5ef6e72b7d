"""Job parser agent: extracts a structured JobPosting from raw text."""

from __future__ import annotations

import time

import structlog

from resume_ranker_agents.agents.base import BaseAgent
from resume_ranker_agents.prompts.hardening import wrap_untrusted_text
from resume_ranker_agents.prompts.job_parser import JOB_PARSER_SYSTEM, JOB_PARSER_USER
from resume_ranker_core.exceptions import (
    ExtractionFailedError,
    MissingJobPostingError,
    ResumeRankerError,
)
from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.state import PipelineState

logger = structlog.get_logger()


class JobParserAgent(BaseAgent):
    """Parse raw job posting text into a schema-validated JobPosting."""

    agent_name = "job_parser"

    async def run(self, state: PipelineState) -> PipelineState:
        """Extract the job posting unless one was supplied with the request."""
        if state.job_posting is not None:
            logger.info("job_posting_supplied", agent=self.agent_name)
            return state

        text = state.request.job_posting_text
        if not text:
            msg = "A job posting or job_posting_text is required."
            raise MissingJobPostingError(msg)

        self._log_start({"text_length": len(text)})
        start = time.monotonic()

        posting = await self.extract_job_posting(text, state=state)

        state.job_posting = posting
        self._log_end(
            time.monotonic() - start,
            {
                "job_title": posting.job_title,
                "skills_count": len(posting.skills),
                "required_count": len(posting.required_skills),
            },
        )
        return state

    async def extract_job_posting(
        self, text: str, state: PipelineState | None = None
    ) -> JobPosting:
        """Call the model constrained to the JobPosting schema.

        Raises:
            ExtractionFailedError: On any provider or schema-validation failure.
        """
        try:
            return await self._call_llm(
                messages=[
                    {
                        "role": "user",
                        "content": JOB_PARSER_USER.format(
                            job_posting_block=wrap_untrusted_text("job_posting", text)
                        ),
                    },
                ],
                model=self.settings.sonnet_model,
                response_model=JobPosting,
                system=JOB_PARSER_SYSTEM,
                state=state,
            )
        except ResumeRankerError:
            raise
        except Exception as e:
            msg = f"Job posting extraction failed: {e}"
            raise ExtractionFailedError(msg) from e
