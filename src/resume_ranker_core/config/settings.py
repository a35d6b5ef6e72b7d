"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for resume-ranker."""

    model_config = SettingsConfigDict(env_prefix="RR_", env_file=".env")

    # --- LLM ---
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Anthropic API key for Claude models",
    )
    haiku_model: str = Field(
        default="claude-haiku-4-5-20251001",
        description="Model ID for per-resume structuring calls",
    )
    sonnet_model: str = Field(
        default="claude-sonnet-4-5-20250929",
        description="Model ID for job parsing, scoring and LaTeX conversion",
    )
    llm_max_tokens: int = Field(
        default=4096,
        description="Max output tokens for structured LLM calls",
    )
    structurer_max_tokens: int = Field(
        default=8192,
        description="Max output tokens for the free-text resume structuring call",
    )
    llm_max_retries: int = Field(
        default=3,
        description="Attempts per LLM call before the stage fails",
    )

    # --- Pipeline ---
    agent_timeout_seconds: int = Field(
        default=300,
        description="Timeout per pipeline step in seconds",
    )
    max_concurrent_structurers: int = Field(
        default=4,
        description="Maximum concurrent resume structuring calls",
    )
    default_threshold: float = Field(
        default=70.0,
        description="Composite score a resume must reach to count as a match",
    )

    # --- Storage ---
    storage_dir: Path = Field(
        default=Path("./resumes"),
        description="Directory for uploaded PDFs, parsed-resume store and run state",
    )
    max_upload_mb: int = Field(
        default=5,
        description="Maximum accepted resume upload size in MB",
    )

    # --- Cost Guardrails ---
    max_cost_per_run_usd: float = Field(
        default=2.0,
        description="Hard stop if estimated cost exceeds this (USD)",
    )
    warn_cost_threshold_usd: float = Field(
        default=1.0,
        description="Log warning at this cost threshold (USD)",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )

    # --- Web ---
    web_host: str = Field(
        default="127.0.0.1",
        description="Host for the HTTP API",
    )
    web_port: int = Field(
        default=8000,
        description="Port for the HTTP API",
    )

    @property
    def max_upload_bytes(self) -> int:
        """Upload size limit in bytes."""
        return self.max_upload_mb * 1024 * 1024

    @model_validator(mode="after")
    def validate_cost_guardrails(self) -> Settings:
        """Ensure the warning threshold does not exceed the hard limit."""
        if self.warn_cost_threshold_usd > self.max_cost_per_run_usd:
            msg = (
                f"warn_cost_threshold_usd ({self.warn_cost_threshold_usd}) cannot exceed "
                f"max_cost_per_run_usd ({self.max_cost_per_run_usd})"
            )
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_default_threshold(self) -> Settings:
        """Threshold must be a composite score between 0 and 100."""
        if not 0 <= self.default_threshold <= 100:
            msg = f"default_threshold {self.default_threshold} outside valid range 0-100"
            raise ValueError(msg)
        return self
