"""Candlestick pattern recognition over a reconstructed candle series."""

from candlelens.patterns.config import DEFAULT_PATTERN_CONFIG, PatternConfig, PatternType
from candlelens.patterns.detector import PatternDetector
from candlelens.patterns.models import Pattern

__all__ = [
    "DEFAULT_PATTERN_CONFIG",
    "PatternConfig",
    "PatternType",
    "PatternDetector",
    "Pattern",
]
