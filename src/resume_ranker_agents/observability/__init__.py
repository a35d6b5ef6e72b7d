"""Observability: structured logging and LLM cost tracking."""

from resume_ranker_agents.observability.cost_tracker import (
    estimate_cost_usd,
    extract_token_usage,
)
from resume_ranker_agents.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)

__all__ = [
    "bind_run_context",
    "clear_run_context",
    "configure_logging",
    "estimate_cost_usd",
    "extract_token_usage",
]
