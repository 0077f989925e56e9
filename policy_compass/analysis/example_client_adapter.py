"""Example analysis client adapter.

Returns a fixed, schema-conformant result without network calls. Useful for
local development and tests. Implement BaseAnalysisClient and register the
provider in AnalyzerFactory to add a real engine.
"""

import copy
from collections.abc import Mapping
from typing import ClassVar

from policy_compass.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Offline adapter that answers with pre-structured data."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "overallScore": 62,
        "complianceLevel": "Fair",
        "summary": (
            "The policy defines acceptable use and requires MFA for privileged "
            "accounts, but lacks review cadence and enforcement details."
        ),
        "actionItems": [
            {
                "id": "1",
                "title": "Extend MFA to all remote access",
                "description": "Require multi-factor authentication for every remote session.",
                "priority": "High",
                "effort": "Medium",
                "timeline": "30 days",
                "controls": ["NIST-3.5.3", "ISO-27001-A.9.2.3"],
            },
            {
                "id": "2",
                "title": "Define an annual policy review",
                "description": "Assign an owner and schedule a yearly review of this policy.",
                "priority": "Medium",
                "effort": "Low",
                "timeline": "60 days",
                "controls": ["ISO-27001-A.5.1.2"],
            },
        ],
    }

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        parameters: Mapping[str, str] | None = None,
    ) -> str | dict[str, object]:
        _ = model, temperature, system_prompt, user_prompt, json_schema, parameters
        return copy.deepcopy(self.DEFAULT_RESPONSE)
