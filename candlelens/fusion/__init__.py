"""Signal fusion: weighted BUY/SELL/WAIT decision with profit targets.

Combines candlestick patterns (scaled by their tracked accuracy) and
technical indicator signals into one Recommendation.
"""

from candlelens.fusion.accuracy import (
    InMemoryAccuracyStore,
    JsonFileAccuracyStore,
    NullAccuracyStore,
    PatternAccuracyStore,
    PatternStats,
)
from candlelens.fusion.config import (
    DEFAULT_FUSION_CONFIG,
    DEFAULT_INDICATOR_WEIGHTS,
    DEFAULT_PATTERN_SCORES,
    DEFAULT_PROFIT_TIERS,
    FusionConfig,
    ProfitTier,
    TargetAdjustment,
)
from candlelens.fusion.engine import SignalFusion, round_half_up
from candlelens.fusion.models import Action, Factor, Recommendation

__all__ = [
    # Accuracy
    "InMemoryAccuracyStore",
    "JsonFileAccuracyStore",
    "NullAccuracyStore",
    "PatternAccuracyStore",
    "PatternStats",
    # Config
    "DEFAULT_FUSION_CONFIG",
    "DEFAULT_INDICATOR_WEIGHTS",
    "DEFAULT_PATTERN_SCORES",
    "DEFAULT_PROFIT_TIERS",
    "FusionConfig",
    "ProfitTier",
    "TargetAdjustment",
    # Engine
    "SignalFusion",
    "round_half_up",
    # Models
    "Action",
    "Factor",
    "Recommendation",
]
