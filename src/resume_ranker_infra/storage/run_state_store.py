"""Single-slot JSON store for the most recent scoring run."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from resume_ranker_core.constants import LATEST_RUN_STATE_FILENAME
from resume_ranker_core.exceptions import StorageError
from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.run import LatestRunState
from resume_ranker_core.models.scoring import ScorerOutput
from resume_ranker_infra.storage.files import write_text_atomic

logger = structlog.get_logger()


class RunStateStore:
    """Persists the job posting and results of the latest scoring run."""

    def __init__(self, storage_dir: Path) -> None:
        """Initialize with the storage directory."""
        self._path = storage_dir / LATEST_RUN_STATE_FILENAME

    def save_latest(self, job_posting: JobPosting, scoring_results: ScorerOutput) -> LatestRunState:
        """Overwrite the latest run state."""
        state = LatestRunState(job_posting=job_posting, scoring_results=scoring_results)
        write_text_atomic(self._path, state.model_dump_json(indent=2))
        logger.info("run_state_saved", scores_count=len(scoring_results.scores))
        return state

    def get_latest(self) -> LatestRunState | None:
        """Load the latest run state, or None if no run has been saved."""
        if not self._path.exists():
            return None

        try:
            return LatestRunState.model_validate(
                json.loads(self._path.read_text(encoding="utf-8"))
            )
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            msg = f"Failed to load run state {self._path}: {e}"
            raise StorageError(msg) from e
