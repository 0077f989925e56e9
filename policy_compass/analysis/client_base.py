from abc import ABC, abstractmethod
from collections.abc import Mapping


class BaseAnalysisClient(ABC):
    """Contract for provider-specific analysis engine clients."""

    @abstractmethod
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
        """Return the engine response, either pre-structured data or free text.

        ``parameters`` are the caller's auxiliary request parameters and must
        reach the engine unmodified.

        Raises:
            AnalysisError: mapped from provider-specific failures.
            FailedPreconditionError: on credential or model misconfiguration.
        """
