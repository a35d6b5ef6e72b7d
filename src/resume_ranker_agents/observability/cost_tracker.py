"""LLM token usage extraction and cost estimation."""

from __future__ import annotations

from resume_ranker_core.constants import TOKEN_PRICES


def extract_token_usage(response: object) -> tuple[int, int]:
    """Extract input/output token counts from an LLM response.

    Instructor wraps the raw Anthropic response in `_raw_response`; a plain
    Anthropic message carries `usage` directly. Falls back to (0, 0) if the
    attribute chain is missing.
    """
    raw = getattr(response, "_raw_response", None)
    usage = getattr(raw if raw is not None else response, "usage", None)
    if usage is None:
        return (0, 0)

    input_tokens = getattr(usage, "input_tokens", 0) or 0
    output_tokens = getattr(usage, "output_tokens", 0) or 0
    return (int(input_tokens), int(output_tokens))


def estimate_cost_usd(model: str, input_tokens: int, output_tokens: int) -> float:
    """Estimate the USD cost of a call. Unknown models cost 0."""
    prices = TOKEN_PRICES.get(model)
    if not prices:
        return 0.0
    return (
        input_tokens * prices["input"] / 1_000_000
        + output_tokens * prices["output"] / 1_000_000
    )
