"""Base agent with LLM calling, cost tracking, and step logging."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, TypeVar

import instructor
import structlog
from anthropic import AsyncAnthropic
from pydantic import BaseModel
from tenacity import retry, stop_after_attempt, wait_exponential

from resume_ranker_agents.observability.cost_tracker import (
    estimate_cost_usd,
    extract_token_usage,
)
from resume_ranker_core.exceptions import ConfigurationError, CostLimitExceededError

if TYPE_CHECKING:
    from resume_ranker_core.config.settings import Settings
    from resume_ranker_core.state import PipelineState

T = TypeVar("T", bound=BaseModel)

logger = structlog.get_logger()


class BaseAgent:
    """Base class for all LLM-backed agents."""

    agent_name: str = "base"

    def __init__(self, settings: Settings) -> None:
        """Initialize with settings and build the Anthropic clients."""
        self.settings = settings
        if settings.anthropic_api_key is None:
            msg = "RR_ANTHROPIC_API_KEY is not configured"
            raise ConfigurationError(msg)
        self._client = AsyncAnthropic(
            api_key=settings.anthropic_api_key.get_secret_value()
        )
        self._instructor = instructor.from_anthropic(self._client)

    def _log_start(self, context: dict[str, object] | None = None) -> None:
        """Log agent execution start."""
        logger.info(
            "agent_start",
            agent=self.agent_name,
            **(context or {}),
        )

    def _log_end(
        self, duration: float, context: dict[str, object] | None = None
    ) -> None:
        """Log agent execution end with duration."""
        logger.info(
            "agent_end",
            agent=self.agent_name,
            duration_seconds=round(duration, 2),
            **(context or {}),
        )

    async def _call_llm(
        self,
        messages: list[dict[str, str]],
        model: str,
        response_model: type[T],
        system: str | None = None,
        max_retries: int | None = None,
        state: PipelineState | None = None,
    ) -> T:
        """Call LLM with structured output via instructor.

        Tracks token usage and cost if state is provided.
        """
        attempts = max_retries or self.settings.llm_max_retries

        @retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )
        async def _do_call() -> T:
            kwargs: dict[str, object] = {
                "model": model,
                "max_tokens": self.settings.llm_max_tokens,
                "messages": messages,
                "response_model": response_model,
            }
            if system:
                kwargs["system"] = system
            response: T = await self._instructor.messages.create(**kwargs)
            return response

        start = time.monotonic()
        result = await _do_call()
        elapsed = time.monotonic() - start

        input_tokens, output_tokens = extract_token_usage(result)
        if state is not None:
            self._track_cost(state, input_tokens, output_tokens, model)

        logger.debug(
            "llm_call_complete",
            agent=self.agent_name,
            model=model,
            duration=round(elapsed, 2),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
        return result

    async def _call_llm_text(
        self,
        messages: list[dict[str, str]],
        model: str,
        system: str | None = None,
        max_tokens: int | None = None,
        max_retries: int | None = None,
        state: PipelineState | None = None,
    ) -> str:
        """Call LLM for free-form text output and return the concatenated text blocks."""
        attempts = max_retries or self.settings.llm_max_retries

        @retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )
        async def _do_call() -> object:
            kwargs: dict[str, object] = {
                "model": model,
                "max_tokens": max_tokens or self.settings.llm_max_tokens,
                "messages": messages,
            }
            if system:
                kwargs["system"] = system
            return await self._client.messages.create(**kwargs)

        start = time.monotonic()
        response = await _do_call()
        elapsed = time.monotonic() - start

        input_tokens, output_tokens = extract_token_usage(response)
        if state is not None:
            self._track_cost(state, input_tokens, output_tokens, model)

        logger.debug(
            "llm_call_complete",
            agent=self.agent_name,
            model=model,
            duration=round(elapsed, 2),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

        blocks = getattr(response, "content", None) or []
        return "".join(
            block.text for block in blocks if getattr(block, "type", None) == "text"
        )

    def _track_cost(
        self,
        state: PipelineState,
        input_tokens: int,
        output_tokens: int,
        model: str,
    ) -> None:
        """Track token usage and enforce cost guardrail."""
        state.total_tokens += input_tokens + output_tokens
        state.total_cost_usd += estimate_cost_usd(model, input_tokens, output_tokens)

        if state.total_cost_usd > self.settings.max_cost_per_run_usd:
            raise CostLimitExceededError(
                f"Run cost ${state.total_cost_usd:.2f} exceeds limit "
                f"${self.settings.max_cost_per_run_usd:.2f}"
            )

        if state.total_cost_usd > self.settings.warn_cost_threshold_usd:
            logger.warning(
                "cost_warning",
                current_cost=round(state.total_cost_usd, 3),
                limit=self.settings.max_cost_per_run_usd,
            )
