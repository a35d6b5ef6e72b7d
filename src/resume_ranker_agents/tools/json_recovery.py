"""Layered recovery of a JSON object from free-form LLM output."""

from __future__ import annotations

import json
import re

from resume_ranker_core.exceptions import StructuringFailedError

_FENCED_BLOCK_RE = re.compile(r"```[ \t]*[\w+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)


def _loads_object(candidate: str) -> dict[str, object] | None:
    """Parse candidate as JSON, returning it only if it is an object."""
    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


def extract_json_object(text: str) -> dict[str, object]:
    """Extract a JSON object from model output.

    Strategies, in order:
    1. the whole text as JSON;
    2. the content of the first fenced code block (with or without a language tag);
    3. the slice between the first '{' and the last '}'.

    Raises:
        StructuringFailedError: If the text is empty or no strategy yields an object.
    """
    trimmed = text.strip()
    if not trimmed:
        msg = "Resume structurer returned empty output."
        raise StructuringFailedError(msg)

    parsed = _loads_object(trimmed)
    if parsed is not None:
        return parsed

    fenced = _FENCED_BLOCK_RE.search(trimmed)
    if fenced:
        parsed = _loads_object(fenced.group(1).strip())
        if parsed is not None:
            return parsed

    first_brace = trimmed.find("{")
    last_brace = trimmed.rfind("}")
    if first_brace >= 0 and last_brace > first_brace:
        parsed = _loads_object(trimmed[first_brace : last_brace + 1])
        if parsed is not None:
            return parsed

    msg = "Resume structurer did not return valid JSON."
    raise StructuringFailedError(msg)
