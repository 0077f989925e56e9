from policy_compass.analysis.analyzer import Analyzer
from policy_compass.analysis.factory import AnalyzerFactory
from policy_compass.analysis.models import AnalysisResult, FallbackResult, StructuredResult

__all__ = ["AnalysisResult", "Analyzer", "AnalyzerFactory", "FallbackResult", "StructuredResult"]
