from unittest.mock import MagicMock, patch

import pytest

from policy_compass.analysis.analyzer import Analyzer
from policy_compass.analysis.factory import AnalyzerFactory
from policy_compass.config.settings import Settings
from policy_compass.errors import FailedPreconditionError


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "analysis_provider": "gemini",
        "analysis_api_key": "key",
        "analysis_model_name": "gemini-2.5-flash",
        "analysis_base_url": "",
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


class TestAnalyzerFactory:
    def test_example_provider_needs_no_credentials(self) -> None:
        analyzer = AnalyzerFactory.create(_settings(analysis_provider="example", analysis_api_key=""))
        assert isinstance(analyzer, Analyzer)

    def test_gemini_uses_openai_compatible_endpoint(self) -> None:
        with patch("policy_compass.analysis.factory.OpenAIClientAdapter") as adapter_cls:
            adapter_cls.return_value = MagicMock()
            AnalyzerFactory.create(_settings())
        assert adapter_cls.call_args.kwargs["base_url"].startswith(
            "https://generativelanguage.googleapis.com"
        )

    def test_openai_uses_default_endpoint(self) -> None:
        with patch("policy_compass.analysis.factory.OpenAIClientAdapter") as adapter_cls:
            AnalyzerFactory.create(_settings(analysis_provider="openai"))
        assert adapter_cls.call_args.kwargs["base_url"] is None

    def test_base_url_override(self) -> None:
        with patch("policy_compass.analysis.factory.OpenAIClientAdapter") as adapter_cls:
            AnalyzerFactory.create(
                _settings(analysis_provider="openai_compatible", analysis_base_url="http://llm:8000/v1")
            )
        assert adapter_cls.call_args.kwargs["base_url"] == "http://llm:8000/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="analysis_base_url"):
            AnalyzerFactory.create(_settings(analysis_provider="openai_compatible"))

    def test_missing_api_key_is_failed_precondition(self) -> None:
        with pytest.raises(FailedPreconditionError, match="analysis_api_key"):
            AnalyzerFactory.create(_settings(analysis_api_key=""))

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown analysis provider"):
            AnalyzerFactory.create(_settings(analysis_provider="mystery"))
