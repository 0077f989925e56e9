"""Tests for analysis response validation and repair."""

import json
from typing import Any

import pytest

from policy_compass.analysis.exceptions import MalformedResponseError
from policy_compass.analysis.models import FallbackResult, StructuredResult
from policy_compass.analysis.validator import (
    interpret_response,
    strip_code_fence,
    validate_and_build,
)


def _item(**overrides: Any) -> dict[str, Any]:
    item: dict[str, Any] = {
        "id": "1",
        "title": "Enforce MFA",
        "description": "Require MFA for privileged accounts.",
        "priority": "High",
        "effort": "Medium",
        "timeline": "30 days",
        "controls": ["NIST-3.5.3", "ISO-27001-A.9.2.3"],
    }
    item.update(overrides)
    return item


def _valid_data(items: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "overallScore": 72,
        "complianceLevel": "Good",
        "summary": "Solid baseline with gaps in review cadence.",
        "actionItems": [_item()] if items is None else items,
    }


class TestValidateAndBuild:
    def test_builds_structured_result(self) -> None:
        result = validate_and_build(_valid_data())
        assert isinstance(result, StructuredResult)
        assert result.overall_score == 72
        assert result.compliance_level == "Good"
        assert result.action_items[0].controls == ("NIST-3.5.3", "ISO-27001-A.9.2.3")

    def test_preserves_item_order(self) -> None:
        items = [_item(id=str(i), title=f"Item {i}") for i in (3, 1, 2)]
        result = validate_and_build(_valid_data(items))
        assert [item.id for item in result.action_items] == ["3", "1", "2"]

    def test_splits_comma_grouped_controls(self) -> None:
        data = _valid_data([_item(controls=["NIST-3.5.3, ISO-27001-A.9.2.3", "CIS-6.5"])])
        result = validate_and_build(data)
        assert result.action_items[0].controls == ("NIST-3.5.3", "ISO-27001-A.9.2.3", "CIS-6.5")

    def test_single_string_controls_become_list(self) -> None:
        data = _valid_data([_item(controls="NIST-3.5.3,ISO-27001-A.9.2.3")])
        result = validate_and_build(data)
        assert result.action_items[0].controls == ("NIST-3.5.3", "ISO-27001-A.9.2.3")

    def test_enum_values_are_case_normalized(self) -> None:
        data = _valid_data([_item(priority="high", effort="LOW")])
        data["complianceLevel"] = "excellent"
        result = validate_and_build(data)
        assert result.compliance_level == "Excellent"
        assert result.action_items[0].priority == "High"
        assert result.action_items[0].effort == "Low"

    def test_integral_float_score_accepted(self) -> None:
        data = _valid_data()
        data["overallScore"] = 80.0
        assert validate_and_build(data).overall_score == 80

    @pytest.mark.parametrize("score", [-1, 101, 55.5, "80", True, None])
    def test_invalid_score_rejected(self, score: object) -> None:
        data = _valid_data()
        data["overallScore"] = score
        with pytest.raises(MalformedResponseError, match="overallScore"):
            validate_and_build(data)

    def test_unknown_compliance_level_rejected(self) -> None:
        data = _valid_data()
        data["complianceLevel"] = "Unknown"
        with pytest.raises(MalformedResponseError, match="complianceLevel"):
            validate_and_build(data)

    @pytest.mark.parametrize(
        "missing", ["id", "title", "description", "priority", "effort", "timeline", "controls"]
    )
    def test_item_missing_any_field_rejects_whole_result(self, missing: str) -> None:
        item = _item()
        del item[missing]
        with pytest.raises(MalformedResponseError, match=missing):
            validate_and_build(_valid_data([_item(id="0"), item]))

    def test_duplicate_item_ids_rejected(self) -> None:
        with pytest.raises(MalformedResponseError, match="Duplicate"):
            validate_and_build(_valid_data([_item(), _item(title="Other")]))

    def test_invalid_priority_rejected(self) -> None:
        with pytest.raises(MalformedResponseError, match="priority"):
            validate_and_build(_valid_data([_item(priority="Urgent")]))

    def test_missing_top_level_field(self) -> None:
        data = _valid_data()
        del data["summary"]
        with pytest.raises(MalformedResponseError, match="summary"):
            validate_and_build(data)


class TestStripCodeFence:
    def test_json_fence(self) -> None:
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self) -> None:
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_single_line_fence(self) -> None:
        assert strip_code_fence('```{"a": 1}```') == '{"a": 1}'

    def test_unfenced_text_is_only_trimmed(self) -> None:
        assert strip_code_fence('  {"a": 1}\n') == '{"a": 1}'


class TestInterpretResponse:
    def test_structured_dict(self) -> None:
        result = interpret_response(_valid_data())
        assert isinstance(result, StructuredResult)

    def test_json_text(self) -> None:
        result = interpret_response(json.dumps(_valid_data()))
        assert isinstance(result, StructuredResult)

    @pytest.mark.parametrize("opening", ["```json\n", "```\n", "```JSON\n"])
    def test_fenced_text_parses_like_unfenced(self, opening: str) -> None:
        raw = json.dumps(_valid_data())
        assert interpret_response(f"{opening}{raw}\n```") == interpret_response(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "I could not analyze this document.",
            "[1, 2, 3]",
            json.dumps({"overallScore": 50}),
            "",
            '{"overallScore": 50,',
        ],
    )
    def test_malformed_text_degrades_to_fallback(self, raw: str) -> None:
        result = interpret_response(raw)
        assert isinstance(result, FallbackResult)
        assert result.overall_score == 0
        assert result.compliance_level == "Unknown"
        assert result.action_items == ()
        assert result.note

    def test_malformed_dict_degrades_to_fallback(self) -> None:
        data = _valid_data([_item(controls=None)])
        result = interpret_response(data)
        assert isinstance(result, FallbackResult)
        assert "controls" in result.reason

    def test_fallback_renders_raw_text(self) -> None:
        result = interpret_response("**Score:** unknown")
        assert isinstance(result, FallbackResult)
        assert result.raw_text == "**Score:** unknown"
        assert "<strong>Score:</strong>" in result.html

    @pytest.mark.parametrize("raw", [None, 42, ["a"]])
    def test_non_text_non_object_raises(self, raw: object) -> None:
        with pytest.raises(MalformedResponseError):
            interpret_response(raw)
