"""Length and token-estimate guards applied to text before any LLM call."""

from __future__ import annotations

import math
from dataclasses import dataclass

from resume_ranker_core.constants import CHARS_PER_TOKEN_ESTIMATE


@dataclass(frozen=True)
class TextLimits:
    """Bounds for a piece of input text."""

    min_chars: int
    max_chars: int
    max_estimated_tokens: int


JOB_TEXT_LIMITS = TextLimits(min_chars=50, max_chars=30_000, max_estimated_tokens=7_500)
RESUME_TEXT_LIMITS = TextLimits(min_chars=100, max_chars=40_000, max_estimated_tokens=10_000)


def estimate_tokens(text: str) -> int:
    """Coarse token estimate: one token per four characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE)


def validate_text(text: str, limits: TextLimits, label: str) -> str | None:
    """Return a human-readable error if text violates limits, else None."""
    trimmed = text.strip()
    char_count = len(trimmed)

    if char_count < limits.min_chars:
        return (
            f"{label} is too short ({char_count} chars). "
            f"Minimum is {limits.min_chars} characters."
        )

    if char_count > limits.max_chars:
        return (
            f"{label} is too long ({char_count} chars). "
            f"Maximum is {limits.max_chars} characters."
        )

    estimated = estimate_tokens(trimmed)
    if estimated > limits.max_estimated_tokens:
        return (
            f"{label} is too long (~{estimated} estimated tokens). "
            f"Maximum is {limits.max_estimated_tokens} estimated tokens."
        )

    return None


def validate_job_posting_text(text: str) -> str | None:
    """Validate raw job posting text."""
    return validate_text(text, JOB_TEXT_LIMITS, "job_posting_text")


def validate_resume_text(text: str, label: str = "resume text") -> str | None:
    """Validate raw resume text."""
    return validate_text(text, RESUME_TEXT_LIMITS, label)
