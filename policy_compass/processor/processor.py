from policy_compass.analysis.factory import AnalyzerFactory
from policy_compass.config.settings import Settings
from policy_compass.errors import PolicyCompassError
from policy_compass.extraction.extractor import ProgressCallback
from policy_compass.logging.logger import Log
from policy_compass.processor.pipeline import PipelineContext, PipelineStep
from policy_compass.processor.steps import (
    AnalyzeStep,
    DispatchStep,
    ExtractStep,
    ReportFailureStep,
)
from policy_compass.remediation.factory import DispatcherFactory
from policy_compass.service import build_extractor


class Processor:
    """Runs pipeline steps in order: extract -> analyze -> dispatch."""

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, context: PipelineContext) -> PipelineContext:
        """Run every step; on a reportable error record it, run the failure step, re-raise."""
        Log.info(f"Processing '{context.document.filename or 'unnamed'}'")
        try:
            for step in self._steps:
                context = step.run(context)
        except PolicyCompassError as exc:
            context.error_code = exc.code
            context.error_message = str(exc)
            self._failed_step.run(context)
            raise
        return context

    def close(self) -> None:
        for step in self._steps:
            step.close()


def build_processor(
    settings: Settings,
    on_progress: ProgressCallback | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    steps: list[PipelineStep] = [
        ExtractStep(build_extractor(settings), on_progress),
        AnalyzeStep(AnalyzerFactory.create(settings)),
        DispatchStep(DispatcherFactory.create(settings)),
    ]
    return Processor(steps=steps, failed_step=ReportFailureStep())
