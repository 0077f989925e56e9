from typing import ClassVar

from policy_compass.analysis.analyzer import Analyzer
from policy_compass.analysis.example_client_adapter import ExampleClientAdapter
from policy_compass.analysis.openai_client_adapter import OpenAIClientAdapter
from policy_compass.config.settings import Settings
from policy_compass.errors import FailedPreconditionError


class AnalyzerFactory:
    """Creates the configured analyzer."""

    DEFAULT_BASE_URLS: ClassVar[dict[str, str | None]] = {
        "openai": None,
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    }

    @classmethod
    def create(cls, settings: Settings) -> Analyzer:
        """Create an analyzer from application settings.

        Raises:
            ValueError: if the provider is unknown.
            FailedPreconditionError: if the provider lacks credentials.
        """
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return Analyzer(
                client=ExampleClientAdapter(),
                model="example",
                default_variant=settings.analysis_default_variant,
            )
        base_url = cls._resolve_base_url(provider, settings)
        if not settings.analysis_api_key.strip():
            raise FailedPreconditionError(
                f"analysis_api_key is required for analysis_provider={provider}"
            )
        if not settings.analysis_model_name.strip():
            raise FailedPreconditionError(
                f"analysis_model_name is required for analysis_provider={provider}"
            )
        client = OpenAIClientAdapter(
            api_key=settings.analysis_api_key,
            timeout_seconds=settings.analysis_timeout_seconds,
            base_url=base_url,
        )
        return Analyzer(
            client=client,
            model=settings.analysis_model_name,
            temperature=settings.analysis_temperature,
            default_variant=settings.analysis_default_variant,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.analysis_base_url.strip()
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "analysis_base_url is required for analysis_provider=openai_compatible"
                )
            return override
        if provider not in cls.DEFAULT_BASE_URLS:
            supported = ["example", "openai_compatible", *sorted(cls.DEFAULT_BASE_URLS)]
            raise ValueError(
                f"Unknown analysis provider '{provider}'. Choose from: {supported}"
            )
        return override or cls.DEFAULT_BASE_URLS[provider]
