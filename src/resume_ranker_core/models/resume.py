"""Resume input, structured resume and stored resume models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from resume_ranker_core.constants import ROLE_SUMMARY_PLACEHOLDER
from resume_ranker_core.models.job_posting import ExperienceLevel, SkillCategory

SkillProficiency = Literal["foundational", "working", "advanced", "expert", "unspecified"]
ResumeEducationLevel = Literal[
    "high_school",
    "associates",
    "bachelors",
    "masters",
    "phd",
    "bootcamp",
    "certificate",
    "unspecified",
]


class ResumeInput(BaseModel):
    """Raw resume text with a request-unique identifier."""

    id: str = Field(description="Unique identifier for this resume, e.g. the filename")
    text: str = Field(description="Plain text content extracted from the resume PDF")


class ResumeSkill(BaseModel):
    """A skill demonstrated in a resume."""

    name: str
    category: SkillCategory = "technical"
    proficiency: SkillProficiency = "unspecified"
    years_experience: float | None = None


class WorkExperience(BaseModel):
    """One position in the candidate's work history."""

    company: str | None = None
    title: str = ""
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    summary: str = ""
    accomplishments: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)


class Project(BaseModel):
    """A project listed on the resume."""

    name: str = ""
    role: str | None = None
    summary: str = ""
    technologies: list[str] = Field(default_factory=list)
    outcomes: list[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    """Educational background entry."""

    institution: str | None = None
    degree: str | None = None
    field_of_study: str | None = None
    education_level: ResumeEducationLevel = "unspecified"
    start_year: float | None = None
    end_year: float | None = None


class Certification(BaseModel):
    """A professional certification."""

    name: str = ""
    issuer: str | None = None
    issued_year: float | None = None
    expires_year: float | None = None


class StructuredResume(BaseModel):
    """Normalized candidate profile built from raw resume text."""

    candidate_name: str | None = None
    headline: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    role_summary: str = ROLE_SUMMARY_PLACEHOLDER
    experience_level: ExperienceLevel = "unspecified"
    total_years_experience: float | None = None
    skills: list[ResumeSkill] = Field(default_factory=list)
    core_skills: list[str] = Field(default_factory=list)
    tools_and_technologies: list[str] = Field(default_factory=list)
    domain_expertise: list[str] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class StructuredResumeEntry(BaseModel):
    """A structured resume paired with the id of its input."""

    id: str
    structured_resume: StructuredResume


class ParsedResume(BaseModel):
    """An uploaded resume as persisted in the parsed-resume store."""

    id: str = Field(description="Stored filename, used as the resume id")
    filename: str
    size_bytes: int = Field(ge=0)
    uploaded_at: datetime
    text: str = Field(description="Extracted plain text")
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    structured: StructuredResume | None = None
    is_editable: bool = False
    latex_path: str | None = None
    latex_updated_at: datetime | None = None


class ResumeLatexConversion(BaseModel):
    """LaTeX rendition of a resume."""

    latex: str = Field(
        min_length=1,
        description="Full .tex document including preamble and document environment",
    )
    template: str = Field(
        min_length=1, description="Short template identifier, e.g. 'modern-professional'"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Caveats where details were unclear"
    )


class ResumeSummary(BaseModel):
    """Listing entry for an uploaded resume."""

    id: str
    filename: str
    size_bytes: int = Field(ge=0)
    uploaded_at: datetime
    is_editable: bool = False
    has_latex: bool = False
