"""Caller-facing surface: extract, analyze, dispatch_remediation."""

from collections.abc import Iterator, Mapping
from types import TracebackType
from typing import Any

from policy_compass.analysis.analyzer import Analyzer
from policy_compass.analysis.factory import AnalyzerFactory
from policy_compass.analysis.models import AnalysisResult
from policy_compass.auth.identity import Identity
from policy_compass.config.settings import Settings
from policy_compass.extraction.extractor import DocumentExtractor, ProgressCallback
from policy_compass.extraction.factory import PdfEngineFactory
from policy_compass.extraction.models import (
    ExtractedDocument,
    ExtractionProgress,
    Liveness,
    SourceDocument,
)
from policy_compass.remediation.dispatcher import RemediationDispatcher
from policy_compass.remediation.factory import DispatcherFactory
from policy_compass.remediation.models import DispatchReport


class PolicyCompass:
    """The three operations a UI layer consumes."""

    def __init__(
        self,
        *,
        extractor: DocumentExtractor,
        analyzer: Analyzer,
        dispatcher: RemediationDispatcher,
    ) -> None:
        self._extractor = extractor
        self._analyzer = analyzer
        self._dispatcher = dispatcher

    def extract(
        self,
        document: SourceDocument,
        on_progress: ProgressCallback | None = None,
        liveness: Liveness | None = None,
    ) -> ExtractedDocument:
        return self._extractor.extract(document, on_progress, liveness)

    def extract_progress(self, document: SourceDocument) -> Iterator[ExtractionProgress]:
        """Progress as a lazy event stream; the final event carries the document."""
        return self._extractor.iter_progress(document)

    def analyze(
        self,
        identity: Identity | None,
        text: str | None,
        variant: str | None = None,
        parameters: Mapping[str, str] | None = None,
    ) -> AnalysisResult:
        return self._analyzer.analyze(identity, text, variant, parameters)

    def dispatch_remediation(self, identity: Identity | None, items: Any) -> DispatchReport:
        return self._dispatcher.dispatch(identity, items)

    def close(self) -> None:
        self._dispatcher.close()

    def __enter__(self) -> "PolicyCompass":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def build_extractor(settings: Settings) -> DocumentExtractor:
    return DocumentExtractor(
        PdfEngineFactory.create(settings),
        min_bytes=settings.min_document_bytes,
        max_bytes=settings.max_document_bytes,
        preview_scale=settings.preview_scale,
    )


def build_service(settings: Settings) -> PolicyCompass:
    """Wire the service from settings."""
    return PolicyCompass(
        extractor=build_extractor(settings),
        analyzer=AnalyzerFactory.create(settings),
        dispatcher=DispatcherFactory.create(settings),
    )
