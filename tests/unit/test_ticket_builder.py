import pytest

from policy_compass.remediation.exceptions import TicketValidationError
from policy_compass.remediation.ticket_builder import (
    FIXED_LABELS,
    build_description,
    build_issue_fields,
    build_labels,
    build_summary,
    map_priority,
    sanitize_label,
)


def _item(**overrides: object) -> dict[str, object]:
    item: dict[str, object] = {
        "id": "7",
        "title": "Enforce MFA",
        "description": "Require MFA for admins.",
        "priority": "High",
        "effort": "Low",
        "timeline": "2 weeks",
        "controls": ["NIST-3.5.3", "ISO 27001 A.9.2.3"],
    }
    item.update(overrides)
    return item


class TestMapPriority:
    @pytest.mark.parametrize(("raw", "expected"), [("High", "High"), ("low", "Low"), (" MEDIUM ", "Medium")])
    def test_known_values(self, raw: str, expected: str) -> None:
        assert map_priority(raw) == expected

    @pytest.mark.parametrize("raw", ["Urgent", "", None, 3])
    def test_unknown_defaults_to_medium(self, raw: object) -> None:
        assert map_priority(raw) == "Medium"


class TestLabels:
    def test_sanitize_label(self) -> None:
        assert sanitize_label("ISO 27001 A.9.2.3") == "iso-27001-a-9-2-3"
        assert sanitize_label("--NIST_3.5.3--") == "nist-3-5-3"

    def test_sanitize_label_keeps_accented_letters(self) -> None:
        assert sanitize_label("Ünïcode-Ç") == "ünïcode-ç"
        assert sanitize_label("DSGVO Art. 32 Maßnahmen") == "dsgvo-art-32-massnahmen"

    def test_fixed_priority_and_control_labels(self) -> None:
        labels = build_labels(_item())
        assert labels[: len(FIXED_LABELS)] == list(FIXED_LABELS)
        assert "priority-high" in labels
        assert "control-nist-3-5-3" in labels
        assert "control-iso-27001-a-9-2-3" in labels

    def test_labels_never_contain_spaces(self) -> None:
        assert all(" " not in label for label in build_labels(_item()))

    def test_missing_priority_uses_default_label(self) -> None:
        item = _item()
        del item["priority"]
        assert "priority-medium" in build_labels(item)

    def test_duplicate_and_empty_controls_skipped(self) -> None:
        labels = build_labels(_item(controls=["CIS 6.5", "cis-6.5", "***"]))
        assert labels.count("control-cis-6-5") == 1
        assert not any(label == "control-" for label in labels)


class TestSummaryAndDescription:
    def test_summary_from_title(self) -> None:
        assert build_summary(_item()) == "Enforce MFA"

    def test_summary_synthesized_from_id(self) -> None:
        assert build_summary(_item(title="  ")) == "Remediation item 7"

    def test_description_has_four_paragraphs(self) -> None:
        doc = build_description(_item())
        assert doc["type"] == "doc"
        texts = [p["content"][0]["text"] for p in doc["content"]]
        assert texts == ["Description: ", "Priority: ", "Effort: ", "Timeline: "]
        assert doc["content"][3]["content"][1]["text"] == "2 weeks"


class TestBuildIssueFields:
    def test_full_payload(self) -> None:
        fields = build_issue_fields(_item(), project_key="SEC", issue_type="Task")
        assert fields["project"] == {"key": "SEC"}
        assert fields["issuetype"] == {"name": "Task"}
        assert fields["summary"] == "Enforce MFA"
        assert fields["priority"] == {"name": "High"}

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(TicketValidationError, match="must be an object"):
            build_issue_fields("just a string", project_key="SEC", issue_type="Task")  # type: ignore[arg-type]
