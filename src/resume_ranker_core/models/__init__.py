"""Domain models for resume-ranker."""

from resume_ranker_core.models.job_posting import JobPosting, JobSkill
from resume_ranker_core.models.resume import (
    Certification,
    EducationEntry,
    ParsedResume,
    Project,
    ResumeInput,
    ResumeLatexConversion,
    ResumeSkill,
    ResumeSummary,
    StructuredResume,
    StructuredResumeEntry,
    WorkExperience,
)
from resume_ranker_core.models.run import (
    EvaluationRequest,
    EvaluationResult,
    LatestRunState,
    Operation,
)
from resume_ranker_core.models.scoring import ResumeScore, ScorerOutput

__all__ = [
    "Certification",
    "EducationEntry",
    "EvaluationRequest",
    "EvaluationResult",
    "JobPosting",
    "JobSkill",
    "LatestRunState",
    "Operation",
    "ParsedResume",
    "Project",
    "ResumeInput",
    "ResumeLatexConversion",
    "ResumeScore",
    "ResumeSkill",
    "ResumeSummary",
    "ScorerOutput",
    "StructuredResume",
    "StructuredResumeEntry",
    "WorkExperience",
]
