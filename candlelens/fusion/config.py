"""Configuration for signal fusion."""

from dataclasses import dataclass, field
from enum import Enum

from candlelens.indicators.config import IndicatorName
from candlelens.patterns.config import PatternType


# ── Default pattern base scores ───────────────────────────────────────

DEFAULT_PATTERN_SCORES: dict[PatternType, float] = {
    PatternType.DOJI: 1.5,
    PatternType.HAMMER: 3.0,
    PatternType.HANGING_MAN: 3.0,
    PatternType.INVERTED_HAMMER: 3.0,
    PatternType.SHOOTING_STAR: 3.0,
    PatternType.BULLISH_MARUBOZU: 3.0,
    PatternType.BEARISH_MARUBOZU: 3.0,
    PatternType.SPINNING_TOP: 1.5,
    PatternType.BULLISH_ENGULFING: 4.0,
    PatternType.BEARISH_ENGULFING: 4.0,
    PatternType.BULLISH_HARAMI: 3.5,
    PatternType.BEARISH_HARAMI: 3.5,
    PatternType.PIERCING_LINE: 3.5,
    PatternType.DARK_CLOUD_COVER: 3.5,
    PatternType.TWEEZER_TOP: 3.0,
    PatternType.TWEEZER_BOTTOM: 3.0,
    PatternType.GAP_UP: 2.5,
    PatternType.GAP_DOWN: 2.5,
    PatternType.MORNING_STAR: 5.0,
    PatternType.EVENING_STAR: 5.0,
    PatternType.THREE_WHITE_SOLDIERS: 4.5,
    PatternType.THREE_BLACK_CROWS: 4.5,
    PatternType.THREE_INSIDE_UP: 4.0,
    PatternType.THREE_INSIDE_DOWN: 4.0,
    PatternType.THREE_OUTSIDE_UP: 4.5,
    PatternType.THREE_OUTSIDE_DOWN: 4.5,
    PatternType.UPSIDE_GAP_TWO_CROWS: 3.5,
    PatternType.BULLISH_ABANDONED_BABY: 5.0,
    PatternType.BEARISH_ABANDONED_BABY: 5.0,
}


# ── Default indicator weights ─────────────────────────────────────────

DEFAULT_INDICATOR_WEIGHTS: dict[IndicatorName, float] = {
    IndicatorName.SUPPORT_RESISTANCE: 5.0,
    IndicatorName.DONCHIAN: 4.0,
    IndicatorName.TREND: 3.5,
    IndicatorName.QUANTITATIVE: 3.0,
    IndicatorName.MOVING_AVERAGES: 3.0,
    IndicatorName.MACD: 2.5,
}


class TargetAdjustment(str, Enum):
    """Profit-target multipliers applied after tier selection."""
    VOLATILITY = "volatility"
    TREND_STRENGTH = "trend_strength"
    RSI_EXTREME = "rsi_extreme"
    MA_ALIGNMENT = "ma_alignment"


@dataclass(frozen=True)
class ProfitTier:
    """Profit target and risk (fractions) for a confidence band."""
    name: str
    min_confidence: int
    target: float
    risk: float


DEFAULT_PROFIT_TIERS: tuple[ProfitTier, ...] = (
    ProfitTier("aggressive", 85, 0.05, 0.02),
    ProfitTier("moderate", 75, 0.035, 0.015),
    ProfitTier("conservative", 0, 0.02, 0.01),
)


@dataclass(frozen=True)
class FusionConfig:
    """Configuration for the BUY/SELL/WAIT decision.

    Attributes:
        pattern_scores: Base score per pattern type.
        default_pattern_score: Score for pattern types missing from the table.
        indicator_weights: Weight per directional indicator.
        min_separation: Minimum |buy - sell| for a directional call.
        wait_confidence: Confidence reported when there is no clear signal.
        confidence_threshold: Directional calls below this become WAIT.
        max_confidence: Cap on computed confidence.
        profit_tiers: Tiers checked in order; the first whose
            ``min_confidence`` is met is used.
        adjustment_order: Order the target multipliers are applied in.
        top_factors: Number of contributing factors returned.
        outcome_confidence: Recorded pattern outcomes count as correct
            above this confidence.
    """
    pattern_scores: dict[PatternType, float] = field(
        default_factory=lambda: dict(DEFAULT_PATTERN_SCORES)
    )
    default_pattern_score: float = 2.0
    indicator_weights: dict[IndicatorName, float] = field(
        default_factory=lambda: dict(DEFAULT_INDICATOR_WEIGHTS)
    )
    min_separation: float = 1.0
    wait_confidence: int = 45
    confidence_threshold: int = 65
    max_confidence: int = 95
    profit_tiers: tuple[ProfitTier, ...] = DEFAULT_PROFIT_TIERS
    high_volatility: float = 0.03
    high_volatility_multiplier: float = 0.7
    medium_volatility: float = 0.02
    medium_volatility_multiplier: float = 0.85
    strong_trend: float = 0.5
    strong_trend_multiplier: float = 1.2
    rsi_extreme_high: float = 80.0
    rsi_extreme_low: float = 20.0
    rsi_extreme_multiplier: float = 0.9
    ma_agree_multiplier: float = 1.1
    ma_contradict_multiplier: float = 0.85
    adjustment_order: tuple[TargetAdjustment, ...] = (
        TargetAdjustment.VOLATILITY,
        TargetAdjustment.TREND_STRENGTH,
        TargetAdjustment.RSI_EXTREME,
        TargetAdjustment.MA_ALIGNMENT,
    )
    top_factors: int = 8
    outcome_confidence: int = 70

    def pattern_score(self, pattern_type: PatternType) -> float:
        return self.pattern_scores.get(pattern_type, self.default_pattern_score)

    def indicator_weight(self, name: IndicatorName) -> float:
        return self.indicator_weights.get(name, 0.0)

    def tier_for(self, confidence: int) -> ProfitTier:
        for tier in self.profit_tiers:
            if confidence >= tier.min_confidence:
                return tier
        return self.profit_tiers[-1]


DEFAULT_FUSION_CONFIG = FusionConfig()
