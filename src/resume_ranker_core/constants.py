"""Shared constants for resume-ranker."""

from __future__ import annotations

# Prompt versions: increment when prompt templates change
JOB_PARSER_PROMPT_VERSION = "v1"
RESUME_STRUCTURER_PROMPT_VERSION = "v1"
RESUME_SCORER_PROMPT_VERSION = "v1"
LATEX_CONVERTER_PROMPT_VERSION = "v1"

# LLM token pricing (USD per 1M tokens)
TOKEN_PRICES: dict[str, dict[str, float]] = {
    "claude-haiku-4-5-20251001": {"input": 0.80, "output": 4.00},
    "claude-sonnet-4-5-20250929": {"input": 3.00, "output": 15.00},
}

# Scoring weight dimensions (sum to 1.0)
SCORING_WEIGHTS: dict[str, float] = {
    "skills_match": 0.40,
    "experience_relevance": 0.30,
    "education_match": 0.15,
    "keyword_density": 0.15,
}

DEFAULT_THRESHOLD = 70.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0

# Text guard
CHARS_PER_TOKEN_ESTIMATE = 4

# Storage
PARSED_RESUMES_FILENAME = "parsed-resumes.json"
LATEST_RUN_STATE_FILENAME = "latest-run-state.json"
LATEX_DIRNAME = "latex"
RESUME_STORE_VERSION = 2
RUN_STATE_VERSION = 1

ROLE_SUMMARY_PLACEHOLDER = "Profile summary unavailable."
