from unittest.mock import MagicMock

import pytest

from policy_compass.analysis.models import StructuredResult
from policy_compass.auth.identity import Identity
from policy_compass.config.settings import Settings
from policy_compass.errors import FailedPreconditionError, UnauthenticatedError
from policy_compass.extraction.exceptions import TooSmallError
from policy_compass.extraction.models import ExtractionProgress, SourceDocument
from policy_compass.service import PolicyCompass, build_service


@pytest.fixture()
def service() -> PolicyCompass:
    settings = Settings(
        analysis_provider="example",
        min_document_bytes=1,
        jira_base_url="",
        jira_email="",
        jira_api_token="",
    )
    return build_service(settings)


class TestPolicyCompass:
    def test_extract_then_analyze(
        self, service: PolicyCompass, identity: Identity, sample_pdf_bytes: bytes
    ) -> None:
        progress: list[ExtractionProgress] = []
        document = SourceDocument(content=sample_pdf_bytes, filename="aup.pdf")
        extracted = service.extract(document, on_progress=progress.append)
        result = service.analyze(identity, extracted.text)
        assert [p.percent for p in progress] == [100]
        assert isinstance(result, StructuredResult)
        assert result.action_items[0].controls == ("NIST-3.5.3", "ISO-27001-A.9.2.3")

    def test_progress_stream_ends_with_document(
        self, service: PolicyCompass, multi_page_pdf_bytes: bytes
    ) -> None:
        events = list(service.extract_progress(SourceDocument(content=multi_page_pdf_bytes, filename="p.pdf")))
        assert [e.pages_done for e in events] == [1, 2, 3, 3]
        assert events[-1].document is not None

    def test_extract_enforces_configured_minimum(self, identity: Identity) -> None:
        service = build_service(Settings(analysis_provider="example"))
        with pytest.raises(TooSmallError):
            service.extract(SourceDocument(content=b"%PDF-1.4", media_type="application/pdf"))

    def test_analyze_without_identity(self, service: PolicyCompass) -> None:
        with pytest.raises(UnauthenticatedError):
            service.analyze(None, "Acceptable Use Policy")

    def test_dispatch_without_jira_credentials(self, service: PolicyCompass, identity: Identity) -> None:
        with pytest.raises(FailedPreconditionError):
            service.dispatch_remediation(identity, [])

    def test_analyze_forwards_parameters(self, identity: Identity) -> None:
        analyzer = MagicMock()
        service = PolicyCompass(extractor=MagicMock(), analyzer=analyzer, dispatcher=MagicMock())
        service.analyze(identity, "Policy text", "baseline", {"locale": "en"})
        analyzer.analyze.assert_called_once_with(identity, "Policy text", "baseline", {"locale": "en"})

    def test_context_manager_closes_dispatcher(self) -> None:
        dispatcher = MagicMock()
        with PolicyCompass(extractor=MagicMock(), analyzer=MagicMock(), dispatcher=dispatcher):
            pass
        dispatcher.close.assert_called_once()
