"""Policy analysis through an external generative engine."""

import json
from collections.abc import Mapping
from pathlib import Path

from policy_compass.analysis.client_base import BaseAnalysisClient
from policy_compass.analysis.models import AnalysisRequest, AnalysisResult, FallbackResult
from policy_compass.analysis.prompt_loader import load_json_schema, load_prompt_template
from policy_compass.analysis.request_builder import build_analysis_request
from policy_compass.analysis.validator import interpret_response
from policy_compass.auth.identity import Identity
from policy_compass.logging.logger import Log

_SYSTEM_PROMPT = (
    "You evaluate organisational security policies and answer only with JSON "
    "that follows the provided schema."
)


class Analyzer:
    """Scores policy text and proposes remediation items.

    The rubric lives entirely in the prompt variant; this class only enforces
    the response shape.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.0,
        default_variant: str = "strict",
        prompt_dir: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = _SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._default_variant = default_variant
        self._prompt_dir = prompt_dir
        self._system_prompt = system_prompt
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def analyze(
        self,
        identity: Identity | None,
        text: str | None,
        variant: str | None = None,
        parameters: Mapping[str, str] | None = None,
    ) -> AnalysisResult:
        """Analyze document text on behalf of an identity.

        ``parameters`` are forwarded to the engine client unmodified.

        Raises:
            UnauthenticatedError: before any engine call if identity is missing.
            EmptyInputError: if the text is empty or whitespace-only.
            InvalidArgumentError: if the variant is unknown.
            AnalysisError: engine failures (quota, safety, malformed, internal).
            FailedPreconditionError: engine or credential misconfiguration.
        """
        request = build_analysis_request(
            identity, text, variant or self._default_variant, parameters
        )
        return self.run(request)

    def run(self, request: AnalysisRequest) -> AnalysisResult:
        """Send a prepared request to the engine unmodified and interpret the answer."""
        prompt = self._build_prompt(request)
        Log.debug(f"Analysis prompt:\n{prompt}")

        raw_response = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
            parameters=request.parameters,
        )
        Log.debug(f"Engine raw response:\n{raw_response}")

        result = interpret_response(raw_response)
        if isinstance(result, FallbackResult):
            Log.warning(f"Analysis for user {request.identity.user_id} degraded to fallback")
        else:
            Log.info(
                f"Analysis complete: score {result.overall_score} "
                f"({result.compliance_level}), {len(result.action_items)} action items"
            )
        return result

    def _build_prompt(self, request: AnalysisRequest) -> str:
        template = load_prompt_template(
            request.variant or self._default_variant, self._prompt_dir
        )
        return template.format(
            document_text=request.document_text,
            json_schema=self._json_schema,
        )
