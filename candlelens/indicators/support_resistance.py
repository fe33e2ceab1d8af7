"""Support & Resistance Detection.

Clusters every candle's high and low into price levels, weighting recent
candles more heavily, adds swing levels from 5- and 15-candle bars, and
signals when price sits in a level's reaction zone.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from candlelens.extraction.models import Candle
from candlelens.indicators.config import DEFAULT_SR_CONFIG, SRConfig, SRType
from candlelens.indicators.models import Level, SupportResistanceResult
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Touch:
    price: float
    weight: float
    index: int


class SupportResistanceAnalyzer:
    """Finds support/resistance levels and their signal."""

    def __init__(self, config: Optional[SRConfig] = None) -> None:
        self.config = config or DEFAULT_SR_CONFIG

    def analyze(
        self,
        candles: Sequence[Candle],
        image_height: float,
    ) -> SupportResistanceResult:
        """Compute levels and the proximity signal.

        Args:
            candles: Chronological candles.
            image_height: Height used to scale the pixel tolerances.

        Returns:
            SupportResistanceResult; neutral when history is too short.
        """
        if len(candles) < self.config.min_candles:
            return SupportResistanceResult()

        baseline = candles[-1].baseline
        levels = self.find_levels(candles, image_height)
        if self.config.multi_timeframe:
            levels += self.timeframe_levels(candles)
        current = candles[-1].close

        supports = sorted(
            (self._level(p, t, s, SRType.SUPPORT, baseline) for p, t, s in levels if p < current),
            key=lambda lv: lv.price,
            reverse=True,
        )
        resistances = sorted(
            (self._level(p, t, s, SRType.RESISTANCE, baseline) for p, t, s in levels if p > current),
            key=lambda lv: lv.price,
        )

        signal, strength, false_breakout = self._signal(
            candles, supports[:1], resistances[:1], image_height
        )
        return SupportResistanceResult(
            signal=signal,
            strength=strength,
            supports=tuple(supports),
            resistances=tuple(resistances),
            false_breakout=false_breakout,
        )

    def find_levels(
        self,
        candles: Sequence[Candle],
        image_height: float,
    ) -> list[tuple[float, int, float]]:
        """Cluster touch points into (price, touches, strength) levels."""
        n = len(candles)
        touches: list[_Touch] = []
        for i, c in enumerate(candles):
            weight = min(1.0 + i / n, 2.0)
            touches.append(_Touch(c.high, weight, i))
            touches.append(_Touch(c.low, weight, i))
        touches.sort(key=lambda t: t.price)

        clusters: list[list[_Touch]] = []
        current = [touches[0]]
        for touch in touches[1:]:
            tolerance = image_height * self.config.cluster_tolerance * (1 - 0.5 * touch.index / n)
            if touch.price - current[-1].price < tolerance:
                current.append(touch)
            else:
                clusters.append(current)
                current = [touch]
        clusters.append(current)

        levels: list[tuple[float, int, float]] = []
        for cluster in clusters:
            count = len(cluster)
            if count < self.config.min_touches:
                continue
            total_weight = sum(t.weight for t in cluster)
            price = sum(t.price * t.weight for t in cluster) / total_weight
            avg_weight = total_weight / count
            strength = min(1.0, min(count / 5.0, 1.0) * avg_weight / 1.5)
            levels.append((price, count, strength))

        # Drop levels shadowed by a stronger one nearby
        band = image_height * self.config.cluster_tolerance * 2
        return [
            lv for lv in levels
            if not any(
                other is not lv and other[2] > lv[2] and abs(other[0] - lv[0]) < band
                for other in levels
            )
        ]

    def timeframe_levels(self, candles: Sequence[Candle]) -> list[tuple[float, int, float]]:
        """Swing highs and lows of candles grouped into higher timeframes.

        Each timeframe folds consecutive candles into one bar (a trailing
        partial group is dropped). A bar whose high (low) is strictly above
        (below) both neighbours becomes a single-touch level carrying the
        timeframe's strength.
        """
        highs = np.array([c.high for c in candles], dtype=float)
        lows = np.array([c.low for c in candles], dtype=float)

        levels: list[tuple[float, int, float]] = []
        for size, strength in self.config.timeframes:
            bars = len(candles) // size
            if bars < 3:
                continue
            bar_highs = highs[:bars * size].reshape(bars, size).max(axis=1)
            bar_lows = lows[:bars * size].reshape(bars, size).min(axis=1)

            for i in range(1, bars - 1):
                if bar_highs[i] > bar_highs[i - 1] and bar_highs[i] > bar_highs[i + 1]:
                    levels.append((float(bar_highs[i]), 1, strength))
                if bar_lows[i] < bar_lows[i - 1] and bar_lows[i] < bar_lows[i + 1]:
                    levels.append((float(bar_lows[i]), 1, strength))
        return levels

    def zone(self, level: Level, image_height: float) -> float:
        """Reaction zone half-width; stronger levels react from further away."""
        return image_height * self.config.zone_proximity * (1 + 0.5 * level.strength)

    def _signal(
        self,
        candles: Sequence[Candle],
        supports: list[Level],
        resistances: list[Level],
        image_height: float,
    ) -> tuple[Signal, float, bool]:
        support = supports[0] if supports else None
        resistance = resistances[0] if resistances else None
        last = candles[-1]

        if len(candles) >= self.config.false_breakout_min_candles:
            prev = candles[-2]
            if resistance and prev.close > resistance.price > last.close:
                logger.debug("False breakout above resistance", extra={"extra_data": resistance.to_dict()})
                return Signal.SELL, self.config.false_breakout_strength, True
            if support and prev.close < support.price < last.close:
                logger.debug("False breakout below support", extra={"extra_data": support.to_dict()})
                return Signal.BUY, self.config.false_breakout_strength, True

        recent = candles[-self.config.confirmation_candles:]

        if resistance:
            zone = self.zone(resistance, image_height)
            if abs(last.close - resistance.price) < zone and any(
                abs(c.high - resistance.price) <= zone for c in recent
            ):
                return Signal.SELL, resistance.strength, False

        if support:
            zone = self.zone(support, image_height)
            if abs(last.close - support.price) < zone and any(
                abs(c.low - support.price) <= zone for c in recent
            ):
                return Signal.BUY, support.strength, False

        return Signal.HOLD, 0.0, False

    @staticmethod
    def _level(
        price: float,
        touches: int,
        strength: float,
        level_type: SRType,
        baseline: float,
    ) -> Level:
        return Level(
            price=price,
            row=baseline - price,
            touches=touches,
            strength=strength,
            level_type=level_type,
        )
