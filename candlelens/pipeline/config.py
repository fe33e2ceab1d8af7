"""Configuration for the end-to-end chart analyzer."""

from dataclasses import dataclass, field
from typing import Optional

from candlelens.extraction.config import ExtractionConfig
from candlelens.fusion.config import FusionConfig
from candlelens.imaging.config import SamplerConfig
from candlelens.indicators.config import IndicatorConfig
from candlelens.patterns.config import PatternConfig

CONFIG_VERSION = "1.0"


@dataclass(frozen=True)
class AnalyzerConfig:
    """Versioned configuration passed by value to every stage.

    Attributes:
        version: Configuration schema version, reported with each result.
        parallel_indicators: Evaluate indicators on a thread pool.
        timeout_seconds: Abort a run that takes longer; None disables.
        record_outcomes: Record every detected pattern in the accuracy
            store after fusion.
    """
    version: str = CONFIG_VERSION
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    patterns: PatternConfig = field(default_factory=PatternConfig)
    indicators: IndicatorConfig = field(default_factory=IndicatorConfig)
    fusion: FusionConfig = field(default_factory=FusionConfig)
    parallel_indicators: bool = False
    timeout_seconds: Optional[float] = None
    record_outcomes: bool = False


DEFAULT_ANALYZER_CONFIG = AnalyzerConfig()
