"""Validates engine output against the analysis contract.

Two entry points:
- ``validate_and_build`` enforces the field invariants on already-decoded
  data and raises MalformedResponseError on the first violation.
- ``interpret_response`` accepts whatever the engine returned, strips a
  markdown code fence from free text, and degrades to a FallbackResult when
  the output cannot be read, so the caller always has something to show.
"""

import json
import re
from typing import Any

from policy_compass.analysis.exceptions import MalformedResponseError
from policy_compass.analysis.formatting import render_markdown_html
from policy_compass.analysis.models import (
    COMPLIANCE_LEVELS,
    EFFORTS,
    PRIORITIES,
    AnalysisResult,
    FallbackResult,
    RemediationItem,
    StructuredResult,
)
from policy_compass.logging.logger import Log

_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?(?P<body>.*?)\n?[ \t]*```$", re.DOTALL)
_ITEM_TEXT_FIELDS = ("id", "title", "description", "timeline")
_FALLBACK_NOTE = (
    "The analysis could not be parsed into a structured result. "
    "The raw response is shown below."
)


def interpret_response(raw: Any) -> AnalysisResult:
    """Turn a raw engine response into a StructuredResult or FallbackResult.

    Raises:
        MalformedResponseError: if the response is neither structured data
            nor text, leaving nothing to show.
    """
    if isinstance(raw, dict):
        try:
            return validate_and_build(raw)
        except MalformedResponseError as exc:
            return _fallback(json.dumps(raw, indent=2, default=str), str(exc))
    if isinstance(raw, str):
        cleaned = strip_code_fence(raw)
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            return _fallback(cleaned, f"Invalid JSON response: {exc}")
        if not isinstance(parsed, dict):
            return _fallback(cleaned, "JSON response must be an object")
        try:
            return validate_and_build(parsed)
        except MalformedResponseError as exc:
            return _fallback(cleaned, str(exc))
    raise MalformedResponseError(
        f"Unsupported engine response type: {type(raw).__name__}"
    )


def strip_code_fence(text: str) -> str:
    """Remove a single markdown code fence wrapping the whole text."""
    cleaned = text.strip()
    match = _FENCE_RE.match(cleaned)
    if match is None:
        return cleaned
    return match.group("body").strip()


def validate_and_build(data: dict[str, Any]) -> StructuredResult:
    """Validate decoded JSON and build a StructuredResult.

    Raises:
        MalformedResponseError: on any contract violation.
    """
    for field in ("overallScore", "complianceLevel", "summary", "actionItems"):
        if field not in data:
            raise MalformedResponseError(f"Missing required top-level field: {field}")
    return StructuredResult(
        overall_score=_build_score(data["overallScore"]),
        compliance_level=_build_choice(data["complianceLevel"], "complianceLevel", COMPLIANCE_LEVELS),
        summary=_build_summary(data["summary"]),
        action_items=_build_items(data["actionItems"]),
    )


def _build_score(raw: Any) -> int:
    if isinstance(raw, bool):
        raise MalformedResponseError("'overallScore' must be an integer")
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    if not isinstance(raw, int):
        raise MalformedResponseError("'overallScore' must be an integer")
    if not 0 <= raw <= 100:
        raise MalformedResponseError(f"'overallScore' must be within 0-100, got {raw}")
    return raw


def _build_choice(raw: Any, name: str, allowed: tuple[str, ...]) -> str:
    if not isinstance(raw, str):
        raise MalformedResponseError(f"'{name}' must be a string")
    for option in allowed:
        if raw.strip().lower() == option.lower():
            return option
    raise MalformedResponseError(f"'{name}' must be one of {list(allowed)}, got {raw!r}")


def _build_summary(raw: Any) -> str:
    if not isinstance(raw, str):
        raise MalformedResponseError("'summary' must be a string")
    return raw.strip()


def _build_items(raw: Any) -> tuple[RemediationItem, ...]:
    if not isinstance(raw, list):
        raise MalformedResponseError("'actionItems' must be a list")
    seen_ids: set[str] = set()
    items: list[RemediationItem] = []
    for i, entry in enumerate(raw):
        item = _build_item(entry, i)
        if item.id in seen_ids:
            raise MalformedResponseError(f"Duplicate action item id: {item.id}")
        seen_ids.add(item.id)
        items.append(item)
    return tuple(items)


def _build_item(raw: Any, index: int) -> RemediationItem:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Action item at index {index} must be an object")
    values: dict[str, str] = {}
    for field in _ITEM_TEXT_FIELDS:
        value = raw.get(field)
        if isinstance(value, int) and not isinstance(value, bool) and field == "id":
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise MalformedResponseError(
                f"Action item at index {index}: '{field}' must be a non-empty string"
            )
        values[field] = value.strip()
    if "priority" not in raw or "effort" not in raw or "controls" not in raw:
        missing = [f for f in ("priority", "effort", "controls") if f not in raw]
        raise MalformedResponseError(
            f"Action item at index {index}: missing fields {missing}"
        )
    return RemediationItem(
        id=values["id"],
        title=values["title"],
        description=values["description"],
        priority=_build_choice(raw["priority"], f"actionItems[{index}].priority", PRIORITIES),
        effort=_build_choice(raw["effort"], f"actionItems[{index}].effort", EFFORTS),
        timeline=values["timeline"],
        controls=_build_controls(raw["controls"], index),
    )


def _build_controls(raw: Any, index: int) -> tuple[str, ...]:
    """Split comma-grouped entries so every control is its own identifier."""
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise MalformedResponseError(
            f"Action item at index {index}: 'controls' must be a list of strings"
        )
    controls: list[str] = []
    for entry in raw:
        if not isinstance(entry, str):
            raise MalformedResponseError(
                f"Action item at index {index}: 'controls' must be a list of strings"
            )
        controls.extend(part.strip() for part in entry.split(",") if part.strip())
    return tuple(controls)


def _fallback(raw_text: str, reason: str) -> FallbackResult:
    Log.warning(f"Analysis response could not be parsed, using fallback: {reason}")
    return FallbackResult(
        note=_FALLBACK_NOTE,
        raw_text=raw_text,
        html=render_markdown_html(raw_text),
        reason=reason,
    )
