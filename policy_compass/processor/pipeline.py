from abc import ABC, abstractmethod
from dataclasses import dataclass

from policy_compass.analysis.models import AnalysisResult
from policy_compass.auth.identity import Identity
from policy_compass.extraction.models import ExtractedDocument, SourceDocument
from policy_compass.remediation.models import DispatchReport


@dataclass(slots=True)
class PipelineContext:
    identity: Identity | None
    document: SourceDocument
    variant: str | None = None
    dispatch_tickets: bool = False
    extracted: ExtractedDocument | None = None
    analysis: AnalysisResult | None = None
    dispatch_report: DispatchReport | None = None
    error_code: str = ""
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step."""
