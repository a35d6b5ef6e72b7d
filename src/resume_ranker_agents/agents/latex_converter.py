"""LaTeX converter agent: renders an uploaded resume as a .tex document."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from resume_ranker_agents.agents.base import BaseAgent
from resume_ranker_agents.prompts.hardening import wrap_untrusted_text
from resume_ranker_agents.prompts.latex_converter import (
    LATEX_CONVERTER_SYSTEM,
    LATEX_CONVERTER_USER,
)
from resume_ranker_core.exceptions import LatexConversionFailedError, ResumeRankerError
from resume_ranker_core.models.resume import ResumeLatexConversion, StructuredResume

if TYPE_CHECKING:
    from resume_ranker_core.state import PipelineState


class ResumeLatexConverterAgent(BaseAgent):
    """Convert resume text (plus its structured form, when known) into LaTeX."""

    agent_name = "latex_converter"

    async def convert(
        self,
        resume_text: str,
        structured_resume: StructuredResume | None = None,
        state: PipelineState | None = None,
    ) -> ResumeLatexConversion:
        """Generate a LaTeX rendition of the resume.

        Token usage is added to state, and its cost limit enforced, when given.

        Raises:
            LatexConversionFailedError: On any provider or schema failure.
        """
        self._log_start({"text_length": len(resume_text)})
        start = time.monotonic()

        if structured_resume is not None:
            structured_block = wrap_untrusted_text(
                "structured_resume", structured_resume.model_dump_json(indent=2)
            )
        else:
            structured_block = "No structured resume was provided."

        try:
            conversion = await self._call_llm(
                messages=[
                    {
                        "role": "user",
                        "content": LATEX_CONVERTER_USER.format(
                            structured_block=structured_block,
                            resume_block=wrap_untrusted_text("raw_resume_text", resume_text),
                        ),
                    },
                ],
                model=self.settings.sonnet_model,
                response_model=ResumeLatexConversion,
                system=LATEX_CONVERTER_SYSTEM,
                state=state,
            )
        except ResumeRankerError:
            raise
        except Exception as e:
            msg = f"LaTeX conversion failed: {e}"
            raise LatexConversionFailedError(msg) from e

        self._log_end(
            time.monotonic() - start,
            {"template": conversion.template, "warnings": len(conversion.warnings)},
        )
        return conversion
