"""Candlestick Pattern Detection.

Rule-based recognizer for one-, two- and three-candle formations on the
most recent candles of a chronological series. Predicates work in price
space (larger = higher), so bullish means close above open.
"""

import logging
from typing import Optional, Sequence

from candlelens.extraction.models import Candle
from candlelens.patterns.config import (
    DEFAULT_PATTERN_CONFIG,
    PatternConfig,
    PatternType,
)
from candlelens.patterns.models import Pattern
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


class PatternDetector:
    """Detects candlestick patterns on the latest one to three candles.

    Patterns are not mutually exclusive; every match is returned and the
    caller decides how to weight them.
    """

    def __init__(self, config: Optional[PatternConfig] = None) -> None:
        self.config = config or DEFAULT_PATTERN_CONFIG

    def detect_all(self, candles: Sequence[Candle]) -> list[Pattern]:
        """Run all pattern detectors.

        Args:
            candles: Chronological candles, oldest first.

        Returns:
            Matched patterns sorted by strength (descending).
        """
        patterns: list[Pattern] = []
        n = len(candles)
        if n >= 1:
            patterns.extend(self.detect_single(candles[-1]))
        if n >= 2:
            patterns.extend(self.detect_double(candles[-2], candles[-1]))
        if n >= 3:
            patterns.extend(self.detect_triple(candles[-3], candles[-2], candles[-1]))

        patterns.sort(key=lambda p: p.strength, reverse=True)
        if patterns:
            logger.debug(
                f"Detected {len(patterns)} patterns",
                extra={"extra_data": [p.name for p in patterns]},
            )
        return patterns

    def detect_single(self, c0: Candle) -> list[Pattern]:
        """Single-candle formations on the latest candle."""
        cfg = self.config
        found: list[Pattern] = []

        if c0.body_ratio < cfg.doji_body_ratio:
            found.append(_pattern(PatternType.DOJI, Signal.HOLD, 0.6,
                                  "Market indecision", "Neutral"))

        small_body = c0.body_ratio < cfg.small_body_ratio
        lower_dominant = c0.lower_wick > c0.upper_wick * cfg.wick_ratio
        upper_dominant = c0.upper_wick > c0.lower_wick * cfg.wick_ratio

        if small_body and lower_dominant:
            if c0.is_green:
                found.append(_pattern(PatternType.HAMMER, Signal.BUY, 0.8,
                                      "Bullish reversal", "Oversold"))
            else:
                found.append(_pattern(PatternType.HANGING_MAN, Signal.SELL, 0.7,
                                      "Bearish reversal signal", "Uptrend"))

        if small_body and upper_dominant:
            if c0.is_green:
                found.append(_pattern(PatternType.INVERTED_HAMMER, Signal.BUY, 0.7,
                                      "Bullish reversal signal", "Downtrend"))
            else:
                found.append(_pattern(PatternType.SHOOTING_STAR, Signal.SELL, 0.8,
                                      "Bearish reversal", "Overbought"))

        if c0.body_ratio > cfg.marubozu_body_ratio:
            if c0.is_green:
                found.append(_pattern(PatternType.BULLISH_MARUBOZU, Signal.BUY, 0.85,
                                      "Strong trend continuation", "Bullish"))
            else:
                found.append(_pattern(PatternType.BEARISH_MARUBOZU, Signal.SELL, 0.85,
                                      "Strong trend continuation", "Bearish"))

        if (
            small_body
            and c0.upper_wick_ratio > cfg.spinning_wick_ratio
            and c0.lower_wick_ratio > cfg.spinning_wick_ratio
        ):
            found.append(_pattern(PatternType.SPINNING_TOP, Signal.HOLD, 0.5,
                                  "Market indecision", "Neutral"))

        return found

    def detect_double(self, c1: Candle, c0: Candle) -> list[Pattern]:
        """Two-candle formations; c1 is the previous candle, c0 the latest."""
        cfg = self.config
        found: list[Pattern] = []

        if (
            c0.is_green and c1.is_red
            and c0.close > c1.open and c0.open < c1.close
            and c0.body_height > c1.body_height
        ):
            found.append(_pattern(PatternType.BULLISH_ENGULFING, Signal.BUY, 0.9,
                                  "Strong bullish reversal", "Downtrend", 2))

        if (
            c0.is_red and c1.is_green
            and c0.open > c1.close and c0.close < c1.open
            and c0.body_height > c1.body_height
        ):
            found.append(_pattern(PatternType.BEARISH_ENGULFING, Signal.SELL, 0.9,
                                  "Strong bearish reversal", "Uptrend", 2))

        if (
            c1.is_red and c0.is_green
            and c0.open > c1.close and c0.close < c1.open
            and c0.body_height < c1.body_height
        ):
            found.append(_pattern(PatternType.BULLISH_HARAMI, Signal.BUY, 0.7,
                                  "Trend reversal signal", "Downtrend", 2))

        if (
            c1.is_green and c0.is_red
            and c0.open < c1.close and c0.close > c1.open
            and c0.body_height < c1.body_height
        ):
            found.append(_pattern(PatternType.BEARISH_HARAMI, Signal.SELL, 0.7,
                                  "Trend reversal signal", "Uptrend", 2))

        if (
            c1.is_red and c0.is_green
            and c0.open < c1.close
            and c1.body_mid < c0.close < c1.open
        ):
            found.append(_pattern(PatternType.PIERCING_LINE, Signal.BUY, 0.75,
                                  "Bullish reversal", "Downtrend", 2))

        if (
            c1.is_green and c0.is_red
            and c0.open > c1.close
            and c1.open < c0.close < c1.body_mid
        ):
            found.append(_pattern(PatternType.DARK_CLOUD_COVER, Signal.SELL, 0.75,
                                  "Bearish reversal", "Uptrend", 2))

        tolerance = (c1.high - c1.low) * cfg.tweezer_tolerance
        if abs(c1.high - c0.high) <= tolerance and c1.is_green and c0.is_red:
            found.append(_pattern(PatternType.TWEEZER_TOP, Signal.SELL, 0.7,
                                  "Bearish reversal pattern", "Overbought", 2))
        if abs(c1.low - c0.low) <= tolerance and c1.is_red and c0.is_green:
            found.append(_pattern(PatternType.TWEEZER_BOTTOM, Signal.BUY, 0.7,
                                  "Bullish reversal pattern", "Oversold", 2))

        if c0.low > c1.high:
            found.append(_pattern(PatternType.GAP_UP, Signal.BUY, 0.65,
                                  "Price gapped above the prior range", "Bullish", 2))
        if c0.high < c1.low:
            found.append(_pattern(PatternType.GAP_DOWN, Signal.SELL, 0.65,
                                  "Price gapped below the prior range", "Bearish", 2))

        return found

    def detect_triple(self, c2: Candle, c1: Candle, c0: Candle) -> list[Pattern]:
        """Three-candle formations; c2 is two candles back."""
        cfg = self.config
        found: list[Pattern] = []

        if (
            c2.is_red and c2.body_ratio >= cfg.strong_body_ratio
            and c1.body_ratio < cfg.small_body_ratio
            and c0.is_green and c0.body_ratio >= cfg.strong_body_ratio
            and c0.close > c2.open
        ):
            found.append(_pattern(PatternType.MORNING_STAR, Signal.BUY, 0.95,
                                  "Powerful bullish reversal", "Oversold", 3))

        if (
            c2.is_green and c2.body_ratio >= cfg.strong_body_ratio
            and c1.body_ratio < cfg.small_body_ratio
            and c0.is_red and c0.body_ratio >= cfg.strong_body_ratio
            and c0.close < c2.open
        ):
            found.append(_pattern(PatternType.EVENING_STAR, Signal.SELL, 0.95,
                                  "Powerful bearish reversal", "Overbought", 3))

        if (
            c2.is_green and c1.is_green and c0.is_green
            and c2.close < c1.close < c0.close
            and c2.open < c1.open < c0.open
        ):
            found.append(_pattern(PatternType.THREE_WHITE_SOLDIERS, Signal.BUY, 0.85,
                                  "Strong bullish trend", "Continuation", 3))

        if (
            c2.is_red and c1.is_red and c0.is_red
            and c2.close > c1.close > c0.close
            and c2.open > c1.open > c0.open
        ):
            found.append(_pattern(PatternType.THREE_BLACK_CROWS, Signal.SELL, 0.85,
                                  "Strong bearish trend", "Continuation", 3))

        if (
            c2.is_red and c1.is_green
            and c1.open > c2.close and c1.close < c2.open
            and c0.is_green and c0.close > c1.close
        ):
            found.append(_pattern(PatternType.THREE_INSIDE_UP, Signal.BUY, 0.8,
                                  "Bullish continuation", "Uptrend", 3))

        if (
            c2.is_green and c1.is_red
            and c1.open < c2.close and c1.close > c2.open
            and c0.is_red and c0.close < c1.close
        ):
            found.append(_pattern(PatternType.THREE_INSIDE_DOWN, Signal.SELL, 0.8,
                                  "Bearish continuation", "Downtrend", 3))

        if (
            c2.is_red and c1.is_green
            and c1.open < c2.close and c1.close > c2.open
            and c0.is_green and c0.close > c1.close
        ):
            found.append(_pattern(PatternType.THREE_OUTSIDE_UP, Signal.BUY, 0.85,
                                  "Strong bullish reversal", "Oversold", 3))

        if (
            c2.is_green and c1.is_red
            and c1.open > c2.close and c1.close < c2.open
            and c0.is_red and c0.close < c1.close
        ):
            found.append(_pattern(PatternType.THREE_OUTSIDE_DOWN, Signal.SELL, 0.85,
                                  "Strong bearish reversal", "Overbought", 3))

        if (
            c2.is_green and c1.is_red and c0.is_red
            and c1.close > c2.close
            and c0.open > c1.open and c0.close < c1.close
            and c0.close > c2.close
        ):
            found.append(_pattern(PatternType.UPSIDE_GAP_TWO_CROWS, Signal.SELL, 0.75,
                                  "Bearish reversal pattern", "Overbought", 3))

        if (
            c2.is_red and c1.body_ratio < cfg.doji_body_ratio and c0.is_green
            and c1.high < c2.low and c0.low > c1.high
        ):
            found.append(_pattern(PatternType.BULLISH_ABANDONED_BABY, Signal.BUY, 0.9,
                                  "Rare bullish reversal", "Oversold", 3))

        if (
            c2.is_green and c1.body_ratio < cfg.doji_body_ratio and c0.is_red
            and c1.low > c2.high and c0.high < c1.low
        ):
            found.append(_pattern(PatternType.BEARISH_ABANDONED_BABY, Signal.SELL, 0.9,
                                  "Rare bearish reversal", "Overbought", 3))

        return found


def _pattern(
    pattern_type: PatternType,
    signal: Signal,
    strength: float,
    description: str,
    context: str,
    candles_used: int = 1,
) -> Pattern:
    return Pattern(
        pattern_type=pattern_type,
        signal=signal,
        strength=strength,
        description=description,
        context=context,
        candles_used=candles_used,
    )
