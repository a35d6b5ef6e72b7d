"""Deterministic post-processing of LLM scoring output.

The scoring model is treated as a noisy source of the four dimension scores
and their reasoning only. Composite arithmetic, threshold flags, ordering and
the best match are recomputed here, so identical inputs always produce the
identical ranking.
"""

from __future__ import annotations

import math

from resume_ranker_core.constants import MAX_SCORE, MIN_SCORE, SCORING_WEIGHTS
from resume_ranker_core.exceptions import NoScoresProducedError
from resume_ranker_core.models.scoring import ResumeScore, ScorerOutput


def clamp_score(value: float) -> float:
    """Clamp a dimension score to [0, 100]. NaN becomes 0."""
    if math.isnan(value):
        return MIN_SCORE
    return min(MAX_SCORE, max(MIN_SCORE, value))


def round1(value: float) -> float:
    """Round to one decimal place, halves rounding up."""
    return math.floor(value * 10 + 0.5) / 10


def compute_composite_score(
    skills: float, experience: float, education: float, keywords: float
) -> float:
    """Weighted composite of four clamped dimension scores, rounded to one decimal."""
    return round1(
        clamp_score(skills) * SCORING_WEIGHTS["skills_match"]
        + clamp_score(experience) * SCORING_WEIGHTS["experience_relevance"]
        + clamp_score(education) * SCORING_WEIGHTS["education_match"]
        + clamp_score(keywords) * SCORING_WEIGHTS["keyword_density"]
    )


def normalize_score(score: ResumeScore, threshold: float) -> ResumeScore:
    """Return a copy of score with clamped dimensions, canonical weights and
    a recomputed composite and threshold flag."""
    skills = clamp_score(score.skills_match_score)
    experience = clamp_score(score.experience_relevance_score)
    education = clamp_score(score.education_match_score)
    keywords = clamp_score(score.keyword_density_score)
    composite = compute_composite_score(skills, experience, education, keywords)

    return score.model_copy(
        update={
            "skills_match_score": skills,
            "skills_match_weight": SCORING_WEIGHTS["skills_match"],
            "experience_relevance_score": experience,
            "experience_relevance_weight": SCORING_WEIGHTS["experience_relevance"],
            "education_match_score": education,
            "education_match_weight": SCORING_WEIGHTS["education_match"],
            "keyword_density_score": keywords,
            "keyword_density_weight": SCORING_WEIGHTS["keyword_density"],
            "composite_score": composite,
            "meets_threshold": composite >= threshold,
        }
    )


def rank_scores(scores: list[ResumeScore]) -> list[ResumeScore]:
    """Sort by composite score descending, ties broken by id ascending."""
    return sorted(scores, key=lambda s: (-s.composite_score, s.id))


def normalize_scoring_result(result: ScorerOutput, threshold: float) -> ScorerOutput:
    """Recompute every mechanical field of a scoring result.

    Pure and idempotent: normalizing an already-normalized result with the
    same threshold returns an equal result.

    Raises:
        NoScoresProducedError: If the result has no score entries.
    """
    ranked = rank_scores([normalize_score(s, threshold) for s in result.scores])
    if not ranked:
        msg = "Scoring returned no score items."
        raise NoScoresProducedError(msg)

    best = ranked[0]
    return ScorerOutput(
        scores=ranked,
        best_match=best,
        best_match_meets_threshold=best.meets_threshold,
        threshold=threshold,
    )
