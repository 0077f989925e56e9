from policy_compass.analysis.analyzer import Analyzer
from policy_compass.analysis.models import StructuredResult
from policy_compass.extraction.extractor import DocumentExtractor, ProgressCallback
from policy_compass.logging.logger import Log
from policy_compass.processor.pipeline import PipelineContext, PipelineStep
from policy_compass.remediation.dispatcher import RemediationDispatcher


class ExtractStep(PipelineStep):
    def __init__(
        self,
        extractor: DocumentExtractor,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._extractor = extractor
        self._on_progress = on_progress

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extracted = self._extractor.extract(context.document, self._on_progress)
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: Analyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before analysis")
        context.analysis = self._analyzer.analyze(
            context.identity,
            context.extracted.text,
            context.variant,
        )
        return context


class DispatchStep(PipelineStep):
    def __init__(self, dispatcher: RemediationDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.dispatch_tickets:
            return context
        if not isinstance(context.analysis, StructuredResult):
            Log.warning("Skipping ticket dispatch: no structured analysis result")
            return context
        context.dispatch_report = self._dispatcher.dispatch(
            context.identity,
            list(context.analysis.action_items),
        )
        return context

    def close(self) -> None:
        self._dispatcher.close()


class ReportFailureStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(f"Pipeline failed [{context.error_code}]: {context.error_message}")
        return context
