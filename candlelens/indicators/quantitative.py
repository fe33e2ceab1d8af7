"""Quantitative vote over RSI, momentum and trend strength."""

from typing import Optional

from candlelens.indicators.config import DEFAULT_QUANT_CONFIG, QuantConfig
from candlelens.indicators.models import QuantitativeResult
from candlelens.signals import Signal


class QuantitativeAnalyzer:
    """Each oscillator votes +1 (bullish), -1 (bearish) or 0.

    Signal follows the sign of the vote sum; strength is ``|sum| / 3``.
    """

    def __init__(self, config: Optional[QuantConfig] = None) -> None:
        self.config = config or DEFAULT_QUANT_CONFIG

    def analyze(
        self,
        rsi: float,
        momentum: float,
        trend_strength: float,
    ) -> QuantitativeResult:
        cfg = self.config
        votes = 0

        if rsi < cfg.rsi_oversold:
            votes += 1
        elif rsi > cfg.rsi_overbought:
            votes -= 1

        if momentum > cfg.momentum_threshold:
            votes += 1
        elif momentum < -cfg.momentum_threshold:
            votes -= 1

        if trend_strength > cfg.trend_threshold:
            votes += 1
        elif trend_strength < -cfg.trend_threshold:
            votes -= 1

        if votes > 0:
            signal = Signal.BUY
        elif votes < 0:
            signal = Signal.SELL
        else:
            signal = Signal.HOLD

        return QuantitativeResult(signal=signal, strength=abs(votes) / 3, votes=votes)
