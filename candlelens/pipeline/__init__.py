"""End-to-end chart analysis pipeline."""

from candlelens.pipeline.analyzer import ChartAnalyzer
from candlelens.pipeline.config import CONFIG_VERSION, DEFAULT_ANALYZER_CONFIG, AnalyzerConfig
from candlelens.pipeline.events import ProgressCallback, ProgressEvent, Stage
from candlelens.pipeline.models import AnalysisResult

__all__ = [
    "ChartAnalyzer",
    "CONFIG_VERSION",
    "DEFAULT_ANALYZER_CONFIG",
    "AnalyzerConfig",
    "ProgressCallback",
    "ProgressEvent",
    "Stage",
    "AnalysisResult",
]
