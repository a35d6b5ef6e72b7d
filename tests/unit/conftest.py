"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.state import PipelineState
from tests.mocks.mock_factories import make_job_posting, make_pipeline_state
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings(tmp_path: Path) -> MagicMock:
    """Return a MagicMock Settings whose storage_dir is a fresh tmp dir."""
    return make_settings(storage_dir=tmp_path / "resumes")


@pytest.fixture
def pipeline_state() -> PipelineState:
    """Return a fresh PipelineState with the default evaluate request."""
    return make_pipeline_state()


@pytest.fixture
def sample_job_posting() -> JobPosting:
    """Return a minimal valid JobPosting."""
    return make_job_posting()
