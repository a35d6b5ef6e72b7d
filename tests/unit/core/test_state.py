"""Tests for PipelineState."""

from __future__ import annotations

import pytest

from resume_ranker_core.models.run import Operation
from resume_ranker_core.state import PipelineState
from tests.mocks.mock_factories import (
    make_job_posting,
    make_request,
    make_scorer_output,
    make_structured_entry,
)


@pytest.mark.unit
class TestPipelineState:
    """Test PipelineState initialization and result assembly."""

    def test_supplied_job_posting_is_adopted(self) -> None:
        """A request-supplied posting becomes the state's posting."""
        posting = make_job_posting()
        state = PipelineState(request=make_request(job_posting=posting))
        assert state.job_posting == posting

    def test_threshold_comes_from_request(self) -> None:
        """threshold mirrors the request."""
        state = PipelineState(request=make_request(threshold=55))
        assert state.threshold == 55

    def test_build_result_carries_outputs(self) -> None:
        """build_result copies every produced output and the cost totals."""
        state = PipelineState(request=make_request(operation=Operation.EVALUATE))
        state.job_posting = make_job_posting()
        state.structured_resumes = [make_structured_entry()]
        state.scoring_result = make_scorer_output()
        state.total_tokens = 1500
        state.total_cost_usd = 0.02

        result = state.build_result(duration_seconds=1.5)

        assert result.run_id == "test-run-001"
        assert result.operation == Operation.EVALUATE
        assert result.job_posting == state.job_posting
        assert len(result.structured_resumes) == 1
        assert result.scoring_result == state.scoring_result
        assert result.total_tokens == 1500
        assert result.duration_seconds == 1.5

    def test_build_result_leaves_unrun_fields_empty(self) -> None:
        """Fields for steps that never ran stay empty."""
        state = PipelineState(request=make_request(operation=Operation.PARSE_RESUMES))
        result = state.build_result(duration_seconds=0.1)
        assert result.job_posting is None
        assert result.structured_resumes == []
        assert result.scoring_result is None
