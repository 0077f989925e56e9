from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from policy_compass.auth.identity import Identity

COMPLIANCE_LEVELS = ("Excellent", "Good", "Fair", "Poor", "Critical")
PRIORITIES = ("High", "Medium", "Low")
EFFORTS = ("Low", "Medium", "High")
UNKNOWN_COMPLIANCE_LEVEL = "Unknown"


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything the engine receives for one analysis call."""

    identity: Identity
    document_text: str
    variant: str | None = None
    parameters: MappingProxyType[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def payload(self) -> dict[str, str]:
        """Auxiliary parameters plus the document text and variant, which always win."""
        data = dict(self.parameters)
        data["documentText"] = self.document_text
        if self.variant:
            data["requestVariant"] = self.variant
        return data


@dataclass(frozen=True)
class RemediationItem:
    """One actionable recommendation. ``id`` is unique within its result only."""

    id: str
    title: str
    description: str
    priority: str
    effort: str
    timeline: str
    controls: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "effort": self.effort,
            "timeline": self.timeline,
            "controls": list(self.controls),
        }


@dataclass(frozen=True)
class StructuredResult:
    overall_score: int
    compliance_level: str
    summary: str
    action_items: tuple[RemediationItem, ...] = ()
    kind: Literal["structured"] = "structured"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "overallScore": self.overall_score,
            "complianceLevel": self.compliance_level,
            "summary": self.summary,
            "actionItems": [item.to_dict() for item in self.action_items],
        }


@dataclass(frozen=True)
class FallbackResult:
    """Degraded result shown when the engine output could not be parsed."""

    note: str
    reason: str = ""
    raw_text: str = ""
    html: str = ""
    overall_score: int = 0
    compliance_level: str = UNKNOWN_COMPLIANCE_LEVEL
    summary: str = ""
    action_items: tuple[RemediationItem, ...] = ()
    kind: Literal["fallback"] = "fallback"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "overallScore": self.overall_score,
            "complianceLevel": self.compliance_level,
            "summary": self.summary,
            "actionItems": [],
            "note": self.note,
            "reason": self.reason,
            "rawText": self.raw_text,
            "html": self.html,
        }


AnalysisResult = StructuredResult | FallbackResult
