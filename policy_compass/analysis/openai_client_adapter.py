from collections.abc import Mapping

import httpx
import openai

from policy_compass.analysis.client_base import BaseAnalysisClient
from policy_compass.analysis.exceptions import (
    AnalysisNetworkError,
    InternalError,
    ResourceExhaustedError,
    SafetyRejectedError,
)
from policy_compass.errors import FailedPreconditionError

_SAFETY_MARKERS = ("safety", "content policy", "blocked", "prohibited")


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat API.

    Also serves Gemini through its OpenAI-compatible endpoint.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        extra: dict[str, object] = {}
        if parameters:
            extra["metadata"] = dict(parameters)
        try:
            response = self._client.chat.completions.create(
                **extra,
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "policy_analysis",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"Analysis engine network error: {exc}") from exc
        except (
            openai.AuthenticationError,
            openai.PermissionDeniedError,
            openai.NotFoundError,
        ) as exc:
            raise FailedPreconditionError(
                f"Analysis engine rejected the configured credentials or model: {exc}"
            ) from exc
        except openai.RateLimitError as exc:
            raise ResourceExhaustedError(f"Analysis engine quota exhausted: {exc}") from exc
        except openai.BadRequestError as exc:
            if _mentions_safety(str(exc)):
                raise SafetyRejectedError(f"Analysis engine refused the content: {exc}") from exc
            raise InternalError(f"Analysis engine rejected the request: {exc}") from exc
        except openai.APIError as exc:
            raise InternalError(f"Analysis engine API error: {exc}") from exc

        if not response.choices:
            raise InternalError("Analysis engine returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise SafetyRejectedError("Analysis engine blocked the response by content filter")
        refusal = getattr(choice.message, "refusal", None)
        if refusal:
            raise SafetyRejectedError(f"Analysis engine refused: {refusal}")
        content = choice.message.content
        if content is None:
            raise InternalError("Analysis engine returned empty response")
        return content


def _mentions_safety(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in _SAFETY_MARKERS)
