"""Configuration for candlestick pattern detection."""

from dataclasses import dataclass
from enum import Enum


class PatternType(str, Enum):
    """Recognized candlestick formations."""
    # Single candle
    DOJI = "doji"
    HAMMER = "hammer"
    HANGING_MAN = "hanging_man"
    INVERTED_HAMMER = "inverted_hammer"
    SHOOTING_STAR = "shooting_star"
    BULLISH_MARUBOZU = "bullish_marubozu"
    BEARISH_MARUBOZU = "bearish_marubozu"
    SPINNING_TOP = "spinning_top"
    # Two candles
    BULLISH_ENGULFING = "bullish_engulfing"
    BEARISH_ENGULFING = "bearish_engulfing"
    BULLISH_HARAMI = "bullish_harami"
    BEARISH_HARAMI = "bearish_harami"
    PIERCING_LINE = "piercing_line"
    DARK_CLOUD_COVER = "dark_cloud_cover"
    TWEEZER_TOP = "tweezer_top"
    TWEEZER_BOTTOM = "tweezer_bottom"
    GAP_UP = "gap_up"
    GAP_DOWN = "gap_down"
    # Three candles
    MORNING_STAR = "morning_star"
    EVENING_STAR = "evening_star"
    THREE_WHITE_SOLDIERS = "three_white_soldiers"
    THREE_BLACK_CROWS = "three_black_crows"
    THREE_INSIDE_UP = "three_inside_up"
    THREE_INSIDE_DOWN = "three_inside_down"
    THREE_OUTSIDE_UP = "three_outside_up"
    THREE_OUTSIDE_DOWN = "three_outside_down"
    UPSIDE_GAP_TWO_CROWS = "upside_gap_two_crows"
    BULLISH_ABANDONED_BABY = "bullish_abandoned_baby"
    BEARISH_ABANDONED_BABY = "bearish_abandoned_baby"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class PatternConfig:
    """Geometric thresholds for pattern predicates.

    Attributes:
        doji_body_ratio: Body/range below this is a doji.
        small_body_ratio: Body/range below this is a small body
            (hammer family, spinning top, star middle candle).
        wick_ratio: Dominant wick must exceed the other wick by this factor.
        marubozu_body_ratio: Body/range above this is a marubozu.
        spinning_wick_ratio: Both wick ratios above this for a spinning top.
        strong_body_ratio: Body/range at or above this is a strong candle.
        tweezer_tolerance: Allowed high/low mismatch as a fraction of the
            prior candle's range.
    """
    doji_body_ratio: float = 0.1
    small_body_ratio: float = 0.3
    wick_ratio: float = 2.0
    marubozu_body_ratio: float = 0.9
    spinning_wick_ratio: float = 0.2
    strong_body_ratio: float = 0.5
    tweezer_tolerance: float = 0.02


DEFAULT_PATTERN_CONFIG = PatternConfig()
