"""Structured job posting model extracted from free text."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

ExperienceLevel = Literal["entry", "mid", "senior", "lead", "executive", "unspecified"]
JobEducationLevel = Literal[
    "none_required", "high_school", "associates", "bachelors", "masters", "phd", "unspecified"
]
EmploymentType = Literal["full_time", "part_time", "contract", "internship", "unspecified"]
SkillCategory = Literal["technical", "soft", "domain", "tool", "language", "certification"]


class JobSkill(BaseModel):
    """A skill named in a job posting."""

    name: str = Field(description="Canonical skill name, e.g. 'TypeScript', 'React', 'AWS'")
    category: SkillCategory = Field(description="Broad category this skill belongs to")
    required: bool = Field(
        description="True if explicitly required, false if listed as nice-to-have"
    )
    years_required: float | None = Field(
        default=None,
        description="Minimum years of experience requested for this skill, null if not stated",
    )


class JobPosting(BaseModel):
    """Structured requirements extracted from a job posting."""

    job_title: str = Field(description="Exact job title as stated in the posting")
    company: str | None = Field(default=None, description="Company name, null if not found")
    location: str | None = Field(
        default=None, description="Location or 'Remote' / 'Hybrid', null if not stated"
    )
    employment_type: EmploymentType = Field(
        default="unspecified", description="Type of employment"
    )
    role_summary: str = Field(
        description="2-4 sentence neutral summary of what the role does and why it exists"
    )
    experience_level: ExperienceLevel = Field(
        default="unspecified", description="Seniority level inferred from the posting"
    )
    experience_years_min: float | None = Field(
        default=None, description="Minimum years of total experience required"
    )
    experience_years_max: float | None = Field(
        default=None, description="Maximum years stated (e.g. '3-5 years')"
    )
    education_level: JobEducationLevel = Field(
        default="unspecified", description="Minimum education level required or preferred"
    )
    education_fields: list[str] = Field(
        default_factory=list, description="Relevant fields of study mentioned"
    )
    skills: list[JobSkill] = Field(
        default_factory=list, description="All skills extracted from the posting"
    )
    required_skills: list[str] = Field(
        default_factory=list, description="Skill names where required is true"
    )
    nice_to_have_skills: list[str] = Field(
        default_factory=list, description="Skill names where required is false"
    )
    keywords: list[str] = Field(
        default_factory=list,
        description="Terms useful for ATS matching: technologies, methodologies, domain terms",
    )
    responsibilities: list[str] = Field(
        default_factory=list, description="Key responsibilities, one sentence each"
    )
    salary_min: float | None = Field(
        default=None, description="Minimum annual salary in local currency"
    )
    salary_max: float | None = Field(default=None, description="Maximum annual salary")
    currency: str | None = Field(default=None, description="ISO 4217 currency code, e.g. 'USD'")

    @model_validator(mode="after")
    def validate_experience_range(self) -> JobPosting:
        """Ensure experience_years_min <= experience_years_max when both are set."""
        if (
            self.experience_years_min is not None
            and self.experience_years_max is not None
            and self.experience_years_min > self.experience_years_max
        ):
            msg = (
                f"experience_years_min ({self.experience_years_min}) > "
                f"experience_years_max ({self.experience_years_max})"
            )
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_salary_range(self) -> JobPosting:
        """Ensure salary_min <= salary_max when both are set."""
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            msg = f"salary_min ({self.salary_min}) > salary_max ({self.salary_max})"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_skill_lists(self) -> JobPosting:
        """Derived skill lists must be subsets of skills with a matching required flag."""
        flags: dict[str, set[bool]] = {}
        for skill in self.skills:
            flags.setdefault(skill.name, set()).add(skill.required)

        for name in self.required_skills:
            if True not in flags.get(name, set()):
                msg = f"required_skills entry '{name}' is not a required skill in skills"
                raise ValueError(msg)
        for name in self.nice_to_have_skills:
            if False not in flags.get(name, set()):
                msg = f"nice_to_have_skills entry '{name}' is not an optional skill in skills"
                raise ValueError(msg)
        return self
