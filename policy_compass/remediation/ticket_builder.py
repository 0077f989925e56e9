"""Maps a remediation item onto issue-tracker fields."""

import re
from collections.abc import Mapping
from typing import Any

from policy_compass.remediation.exceptions import TicketValidationError

FIXED_LABELS = ("policy-compass", "compliance-remediation")
DEFAULT_PRIORITY = "Medium"

_PRIORITY_MAP = {
    "high": "High",
    "medium": "Medium",
    "low": "Low",
}
_LABEL_UNSAFE_RE = re.compile(r"[\W_]+")
_MAX_SUMMARY_LENGTH = 255


def map_priority(priority: object) -> str:
    """Translate an item priority to the tracker vocabulary, defaulting to Medium."""
    if not isinstance(priority, str):
        return DEFAULT_PRIORITY
    return _PRIORITY_MAP.get(priority.strip().lower(), DEFAULT_PRIORITY)


def sanitize_label(value: str) -> str:
    """Case-fold and collapse non-alphanumeric runs to a single hyphen."""
    return _LABEL_UNSAFE_RE.sub("-", value.casefold()).strip("-")


def build_labels(item: Mapping[str, Any]) -> list[str]:
    labels = list(FIXED_LABELS)
    labels.append(f"priority-{map_priority(item.get('priority')).lower()}")
    controls = item.get("controls") or []
    if isinstance(controls, str):
        controls = controls.split(",")
    for control in controls:
        if not isinstance(control, str):
            continue
        token = sanitize_label(control)
        if token:
            label = f"control-{token}"
            if label not in labels:
                labels.append(label)
    return labels


def build_summary(item: Mapping[str, Any]) -> str:
    title = item.get("title")
    if isinstance(title, str) and title.strip():
        summary = title.strip()
    else:
        summary = f"Remediation item {item.get('id') or 'unknown'}"
    return summary[:_MAX_SUMMARY_LENGTH]


def build_description(item: Mapping[str, Any]) -> dict[str, Any]:
    """Build an Atlassian Document Format body with one paragraph per section."""
    sections = [
        ("Description", item.get("description") or "No description provided."),
        ("Priority", item.get("priority") or DEFAULT_PRIORITY),
        ("Effort", item.get("effort") or "Not estimated"),
        ("Timeline", item.get("timeline") or "Not specified"),
    ]
    return {
        "type": "doc",
        "version": 1,
        "content": [_paragraph(label, str(value)) for label, value in sections],
    }


def build_issue_fields(
    item: Mapping[str, Any],
    *,
    project_key: str,
    issue_type: str,
) -> dict[str, Any]:
    """Build the ``fields`` object of a create-issue request.

    Raises:
        TicketValidationError: if the item is not a mapping.
    """
    if not isinstance(item, Mapping):
        raise TicketValidationError(
            f"Action item must be an object, got {type(item).__name__}"
        )
    return {
        "project": {"key": project_key},
        "issuetype": {"name": issue_type},
        "summary": build_summary(item),
        "description": build_description(item),
        "priority": {"name": map_priority(item.get("priority"))},
        "labels": build_labels(item),
    }


def _paragraph(label: str, value: str) -> dict[str, Any]:
    return {
        "type": "paragraph",
        "content": [
            {"type": "text", "text": f"{label}: ", "marks": [{"type": "strong"}]},
            {"type": "text", "text": value},
        ],
    }
