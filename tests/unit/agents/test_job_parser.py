"""Tests for the job parser agent."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from resume_ranker_agents.agents.job_parser import JobParserAgent
from resume_ranker_core.exceptions import (
    CostLimitExceededError,
    ExtractionFailedError,
    MissingJobPostingError,
)
from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.run import Operation
from tests.mocks.mock_factories import JOB_TEXT, make_job_posting, make_pipeline_state, make_request
from tests.mocks.mock_settings import make_settings


@pytest.mark.unit
class TestJobParserAgent:
    """Test JobParserAgent."""

    @pytest.mark.asyncio
    async def test_run_extracts_posting(self) -> None:
        """Agent stores the extracted posting on state."""
        posting = make_job_posting()
        state = make_pipeline_state()

        with patch.object(
            JobParserAgent, "_call_llm", new_callable=AsyncMock, return_value=posting
        ) as mock_llm:
            result = await JobParserAgent(make_settings()).run(state)

        assert result.job_posting == posting
        kwargs = mock_llm.call_args.kwargs
        assert kwargs["response_model"] is JobPosting
        assert kwargs["model"] == "claude-sonnet-4-5-20250929"
        assert "<untrusted_job_posting>" in kwargs["messages"][0]["content"]
        assert JOB_TEXT in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_run_skips_when_posting_supplied(self) -> None:
        """A supplied posting is used as-is with no model call."""
        supplied = make_job_posting(job_title="Supplied Title")
        state = make_pipeline_state(request=make_request(job_posting=supplied))

        with patch.object(JobParserAgent, "_call_llm", new_callable=AsyncMock) as mock_llm:
            result = await JobParserAgent(make_settings()).run(state)

        mock_llm.assert_not_called()
        assert result.job_posting is not None
        assert result.job_posting.job_title == "Supplied Title"

    @pytest.mark.asyncio
    async def test_run_without_text_raises(self) -> None:
        """Neither posting nor text is a precondition failure."""
        state = make_pipeline_state(
            request=make_request(operation=Operation.PARSE_JOB, job_posting_text=None)
        )
        with pytest.raises(MissingJobPostingError):
            await JobParserAgent(make_settings()).run(state)

    @pytest.mark.asyncio
    async def test_provider_error_becomes_extraction_failed(self) -> None:
        """Arbitrary call failures are wrapped and chained."""
        with patch.object(
            JobParserAgent,
            "_call_llm",
            new_callable=AsyncMock,
            side_effect=RuntimeError("503 overloaded"),
        ):
            with pytest.raises(ExtractionFailedError, match="503 overloaded") as exc_info:
                await JobParserAgent(make_settings()).extract_job_posting(JOB_TEXT)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_schema_violation_becomes_extraction_failed(self) -> None:
        """A validation error after instructor retries is an extraction failure."""
        try:
            JobPosting.model_validate({"job_title": "x"})
        except ValidationError as e:
            validation_error = e

        with patch.object(
            JobParserAgent,
            "_call_llm",
            new_callable=AsyncMock,
            side_effect=validation_error,
        ):
            with pytest.raises(ExtractionFailedError):
                await JobParserAgent(make_settings()).extract_job_posting(JOB_TEXT)

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self) -> None:
        """Cost guardrail errors are not rewrapped."""
        with patch.object(
            JobParserAgent,
            "_call_llm",
            new_callable=AsyncMock,
            side_effect=CostLimitExceededError("over budget"),
        ):
            with pytest.raises(CostLimitExceededError):
                await JobParserAgent(make_settings()).extract_job_posting(JOB_TEXT)
