"""Resume scoring models: per-resume scores and the scorer output."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResumeScore(BaseModel):
    """Multi-dimensional fit score for one resume."""

    id: str = Field(description="Matches the id field from the input resume")

    skills_match_score: float = Field(description="Skills match score between 0 and 100")
    skills_match_weight: float = Field(default=0.40, description="Fixed weighting: 0.40")
    skills_match_reasoning: str = Field(
        description="1-2 sentence explanation of the skills match score"
    )

    experience_relevance_score: float = Field(
        description="Experience relevance score between 0 and 100"
    )
    experience_relevance_weight: float = Field(default=0.30, description="Fixed weighting: 0.30")
    experience_relevance_reasoning: str = Field(
        description="1-2 sentence explanation of the experience relevance score"
    )

    education_match_score: float = Field(description="Education match score between 0 and 100")
    education_match_weight: float = Field(default=0.15, description="Fixed weighting: 0.15")
    education_match_reasoning: str = Field(
        description="1-2 sentence explanation of the education match score"
    )

    keyword_density_score: float = Field(description="Keyword density score between 0 and 100")
    keyword_density_weight: float = Field(default=0.15, description="Fixed weighting: 0.15")
    keyword_density_reasoning: str = Field(
        description="1-2 sentence explanation of the keyword density score"
    )

    composite_score: float = Field(
        description="Weighted composite across all dimensions, rounded to one decimal place"
    )
    summary: str = Field(
        description="2-3 sentence plain-English summary of the candidate's fit for the role"
    )
    matched_skills: list[str] = Field(
        default_factory=list, description="Required skills from the posting found in the resume"
    )
    missing_skills: list[str] = Field(
        default_factory=list,
        description="Required skills from the posting NOT found in the resume",
    )
    matched_keywords: list[str] = Field(
        default_factory=list, description="ATS keywords from the posting found in the resume"
    )
    meets_threshold: bool = Field(description="True if composite_score >= the threshold")


class ScorerOutput(BaseModel):
    """Ranked scoring result for a set of resumes."""

    scores: list[ResumeScore] = Field(
        description="Scored results for every resume, sorted by composite_score descending"
    )
    best_match: ResumeScore = Field(description="The resume with the highest composite_score")
    best_match_meets_threshold: bool = Field(
        description="True if the best match's composite_score meets the threshold"
    )
    threshold: float = Field(description="The threshold used for this scoring run")

