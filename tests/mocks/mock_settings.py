"""Shared mock Settings factory."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock


def make_settings(**overrides: object) -> MagicMock:
    """Create a mock Settings with sensible defaults.

    All agents, the pipeline and the services rely on these fields. Override
    any attribute via keyword arguments; pass anthropic_api_key=None to
    simulate a missing key.
    """
    settings = MagicMock()
    settings.anthropic_api_key = MagicMock()
    settings.anthropic_api_key.get_secret_value.return_value = "test-key"
    settings.haiku_model = "claude-haiku-4-5-20251001"
    settings.sonnet_model = "claude-sonnet-4-5-20250929"
    settings.llm_max_tokens = 4096
    settings.structurer_max_tokens = 8192
    settings.llm_max_retries = 1
    settings.agent_timeout_seconds = 300
    settings.max_concurrent_structurers = 4
    settings.default_threshold = 70.0
    settings.storage_dir = Path("/tmp/resume-ranker-test")
    settings.max_upload_mb = 5
    settings.max_upload_bytes = 5 * 1024 * 1024
    settings.max_cost_per_run_usd = 5.0
    settings.warn_cost_threshold_usd = 2.0
    settings.log_level = "INFO"
    settings.log_format = "console"
    settings.web_host = "127.0.0.1"
    settings.web_port = 8000

    for key, value in overrides.items():
        setattr(settings, key, value)

    return settings
