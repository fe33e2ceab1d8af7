"""Candle extraction: pixel-column scanning into a chronological candle series."""

from candlelens.extraction.config import (
    DEFAULT_EXTRACTION_CONFIG,
    ColorChannel,
    ColorRule,
    ExtractionConfig,
)
from candlelens.extraction.extractor import CandleExtractor
from candlelens.extraction.models import Candle, ExtractionResult

__all__ = [
    "DEFAULT_EXTRACTION_CONFIG",
    "ColorChannel",
    "ColorRule",
    "ExtractionConfig",
    "CandleExtractor",
    "Candle",
    "ExtractionResult",
]
