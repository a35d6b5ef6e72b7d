"""Request bodies accepted by the JSON API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from resume_ranker_core.models.job_posting import JobPosting
from resume_ranker_core.models.resume import ResumeInput


class ParseJobBody(BaseModel):
    job_posting_text: str = ""


class ScoreBody(BaseModel):
    """Body of POST /api/score. Inline resumes win over resume_ids."""

    job_posting: JobPosting | None = None
    resumes: list[ResumeInput] | None = None
    resume_ids: list[str] | None = None
    threshold: float | None = Field(default=None, ge=0, le=100)


class EvaluateBody(ScoreBody):
    """Body of POST /api/evaluate."""

    job_posting_text: str | None = None
