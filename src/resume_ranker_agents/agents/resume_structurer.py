"""Resume structurer agent: turns raw resume text into StructuredResume records."""

from __future__ import annotations

import asyncio
import time

import structlog
from pydantic import ValidationError

from resume_ranker_agents.agents.base import BaseAgent
from resume_ranker_agents.prompts.hardening import wrap_untrusted_text
from resume_ranker_agents.prompts.resume_structurer import (
    RESUME_STRUCTURER_SYSTEM,
    RESUME_STRUCTURER_USER,
)
from resume_ranker_agents.tools.json_recovery import extract_json_object
from resume_ranker_agents.tools.resume_normalizer import normalize_structured_resume
from resume_ranker_core.exceptions import ResumeRankerError, StructuringFailedError
from resume_ranker_core.models.resume import (
    ResumeInput,
    StructuredResume,
    StructuredResumeEntry,
)
from resume_ranker_core.state import PipelineState

logger = structlog.get_logger()


class ResumeStructurerAgent(BaseAgent):
    """Structure every resume in the request, concurrently and in input order."""

    agent_name = "resume_structurer"

    async def run(self, state: PipelineState) -> PipelineState:
        """Structure all resumes; any single failure fails the whole step."""
        resumes = state.request.resumes
        self._log_start({"resumes_count": len(resumes)})
        start = time.monotonic()

        semaphore = asyncio.Semaphore(self.settings.max_concurrent_structurers)

        async def _structure_one(resume: ResumeInput) -> StructuredResumeEntry:
            async with semaphore:
                structured = await self.structure_resume(resume.text, state=state)
            return StructuredResumeEntry(id=resume.id, structured_resume=structured)

        tasks = [asyncio.create_task(_structure_one(r)) for r in resumes]
        try:
            entries = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            raise

        state.structured_resumes = list(entries)
        self._log_end(
            time.monotonic() - start,
            {"structured_count": len(entries)},
        )
        return state

    async def structure_resume(
        self, text: str, state: PipelineState | None = None
    ) -> StructuredResume:
        """Structure one resume from its raw text.

        Raises:
            StructuringFailedError: If the call fails, no JSON object can be
                recovered, or the normalized record does not validate.
        """
        try:
            output = await self._call_llm_text(
                messages=[
                    {
                        "role": "user",
                        "content": RESUME_STRUCTURER_USER.format(
                            resume_block=wrap_untrusted_text("resume", text)
                        ),
                    },
                ],
                model=self.settings.haiku_model,
                system=RESUME_STRUCTURER_SYSTEM,
                max_tokens=self.settings.structurer_max_tokens,
                state=state,
            )
        except ResumeRankerError:
            raise
        except Exception as e:
            msg = f"Resume structuring call failed: {e}"
            raise StructuringFailedError(msg) from e

        parsed = extract_json_object(output)
        try:
            return normalize_structured_resume(parsed)
        except ValidationError as e:
            logger.error("structured_resume_invalid", agent=self.agent_name, error=str(e))
            msg = f"Normalized resume failed validation: {e}"
            raise StructuringFailedError(msg) from e
