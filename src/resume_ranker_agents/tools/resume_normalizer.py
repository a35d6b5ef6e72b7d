"""Field-by-field tolerant normalization of raw structured-resume JSON.

Every field is coerced independently: wrong-typed strings become "" or None,
non-finite or non-numeric numbers become None, arrays keep only well-typed
elements, and enum-like values fall back to a default instead of failing.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from resume_ranker_core.constants import ROLE_SUMMARY_PLACEHOLDER
from resume_ranker_core.models.resume import StructuredResume

if TYPE_CHECKING:
    from collections.abc import Callable

_SKILL_CATEGORIES = frozenset(
    {"technical", "soft", "domain", "tool", "language", "certification"}
)
_SKILL_CATEGORY_ALIASES: dict[str, str] = {
    "framework": "technical",
    "cloud": "technical",
    "backend": "technical",
    "database": "technical",
    "architecture": "technical",
    "ai": "technical",
}
_PROFICIENCIES = frozenset({"foundational", "working", "advanced", "expert"})
_PROFICIENCY_ALIASES: dict[str, str] = {"intermediate": "working"}
_EXPERIENCE_LEVELS = frozenset({"entry", "mid", "senior", "lead", "executive"})
_EDUCATION_LEVELS = frozenset(
    {"high_school", "associates", "bachelors", "masters", "phd", "bootcamp", "certificate"}
)


def as_string(value: object, fallback: str = "") -> str:
    """Return value if it is a string, else fallback."""
    return value if isinstance(value, str) else fallback


def as_nullable_string(value: object) -> str | None:
    """Return value if it is a string, else None."""
    return value if isinstance(value, str) else None


def as_nullable_number(value: object) -> float | None:
    """Return value as float if it is a finite number (bools excluded), else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def as_bool(value: object) -> bool:
    """Return value if it is a bool, else False."""
    return value if isinstance(value, bool) else False


def as_string_list(value: object) -> list[str]:
    """Keep only the string elements of a list; anything else becomes []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def as_enum(
    value: object,
    allowed: frozenset[str],
    default: str,
    aliases: dict[str, str] | None = None,
) -> str:
    """Lower-case value and match it against allowed (then aliases), else default."""
    raw = value.strip().lower() if isinstance(value, str) else ""
    if raw in allowed:
        return raw
    if aliases and raw in aliases:
        return aliases[raw]
    return default


def _objects(value: object) -> list[dict[str, Any]]:
    """Keep only the dict elements of a list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _map_objects(
    value: object, mapper: Callable[[dict[str, Any]], dict[str, object] | None]
) -> list[dict[str, object]]:
    """Map dict elements through mapper, dropping entries it rejects."""
    mapped = (mapper(item) for item in _objects(value))
    return [item for item in mapped if item is not None]


def _skill(item: dict[str, Any]) -> dict[str, object] | None:
    name = as_string(item.get("name")).strip()
    if not name:
        return None
    return {
        "name": name,
        "category": as_enum(
            item.get("category"), _SKILL_CATEGORIES, "technical", _SKILL_CATEGORY_ALIASES
        ),
        "proficiency": as_enum(
            item.get("proficiency"), _PROFICIENCIES, "unspecified", _PROFICIENCY_ALIASES
        ),
        "years_experience": as_nullable_number(item.get("years_experience")),
    }


def _work_experience(item: dict[str, Any]) -> dict[str, object]:
    return {
        "company": as_nullable_string(item.get("company")),
        "title": as_string(item.get("title")),
        "location": as_nullable_string(item.get("location")),
        "start_date": as_nullable_string(item.get("start_date")),
        "end_date": as_nullable_string(item.get("end_date")),
        "is_current": as_bool(item.get("is_current")),
        "summary": as_string(item.get("summary")),
        "accomplishments": as_string_list(item.get("accomplishments")),
        "technologies": as_string_list(item.get("technologies")),
    }


def _project(item: dict[str, Any]) -> dict[str, object]:
    return {
        "name": as_string(item.get("name")),
        "role": as_nullable_string(item.get("role")),
        "summary": as_string(item.get("summary")),
        "technologies": as_string_list(item.get("technologies")),
        "outcomes": as_string_list(item.get("outcomes")),
    }


def _education(item: dict[str, Any]) -> dict[str, object]:
    return {
        "institution": as_nullable_string(item.get("institution")),
        "degree": as_nullable_string(item.get("degree")),
        "field_of_study": as_nullable_string(item.get("field_of_study")),
        "education_level": as_enum(item.get("education_level"), _EDUCATION_LEVELS, "unspecified"),
        "start_year": as_nullable_number(item.get("start_year")),
        "end_year": as_nullable_number(item.get("end_year")),
    }


def _certification(item: dict[str, Any]) -> dict[str, object]:
    return {
        "name": as_string(item.get("name")),
        "issuer": as_nullable_string(item.get("issuer")),
        "issued_year": as_nullable_number(item.get("issued_year")),
        "expires_year": as_nullable_number(item.get("expires_year")),
    }


def normalize_structured_resume(raw: object) -> StructuredResume:
    """Build a fully populated StructuredResume from untrusted parsed JSON.

    Validation of the normalized record is expected to always pass; a
    ValidationError here means the defaults above are wrong, not the input.
    """
    source: dict[str, Any] = raw if isinstance(raw, dict) else {}

    normalized: dict[str, object] = {
        "candidate_name": as_nullable_string(source.get("candidate_name")),
        "headline": as_nullable_string(source.get("headline")),
        "email": as_nullable_string(source.get("email")),
        "phone": as_nullable_string(source.get("phone")),
        "location": as_nullable_string(source.get("location")),
        "linkedin_url": as_nullable_string(source.get("linkedin_url")),
        "github_url": as_nullable_string(source.get("github_url")),
        "portfolio_url": as_nullable_string(source.get("portfolio_url")),
        "role_summary": as_string(source.get("role_summary")).strip()
        or ROLE_SUMMARY_PLACEHOLDER,
        "experience_level": as_enum(
            source.get("experience_level"), _EXPERIENCE_LEVELS, "unspecified"
        ),
        "total_years_experience": as_nullable_number(source.get("total_years_experience")),
        "skills": _map_objects(source.get("skills"), _skill),
        "core_skills": as_string_list(source.get("core_skills")),
        "tools_and_technologies": as_string_list(source.get("tools_and_technologies")),
        "domain_expertise": as_string_list(source.get("domain_expertise")),
        "work_experience": _map_objects(source.get("work_experience"), _work_experience),
        "projects": _map_objects(source.get("projects"), _project),
        "education": _map_objects(source.get("education"), _education),
        "certifications": _map_objects(source.get("certifications"), _certification),
        "achievements": as_string_list(source.get("achievements")),
        "keywords": as_string_list(source.get("keywords")),
    }

    return StructuredResume.model_validate(normalized)
