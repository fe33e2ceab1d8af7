"""candlelens — candlestick chart image analysis.

Reconstructs an approximate OHLC series from a chart image, detects
candlestick patterns and technical-indicator signals, and fuses them
into a BUY / SELL / WAIT recommendation.
"""

from candlelens.errors import ChartAnalysisError
from candlelens.fusion import Action, Recommendation, SignalFusion
from candlelens.pipeline import AnalysisResult, AnalyzerConfig, ChartAnalyzer, ProgressEvent, Stage
from candlelens.signals import Signal

__version__ = "1.0.0"

__all__ = [
    "Action",
    "AnalysisResult",
    "AnalyzerConfig",
    "ChartAnalysisError",
    "ChartAnalyzer",
    "ProgressEvent",
    "Recommendation",
    "Signal",
    "SignalFusion",
    "Stage",
]
