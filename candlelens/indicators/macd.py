"""MACD momentum signal."""

import logging
from typing import Optional, Sequence

import numpy as np

from candlelens.extraction.models import Candle
from candlelens.indicators.config import DEFAULT_MACD_CONFIG, MACDConfig
from candlelens.indicators.models import MACDResult
from candlelens.indicators.series import closes, ema
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


class MACDAnalyzer:
    """MACD line, signal line and histogram.

    The signal line period shrinks to the number of MACD values available
    so short charts still get a reading once the slow EMA exists.
    """

    def __init__(self, config: Optional[MACDConfig] = None) -> None:
        self.config = config or DEFAULT_MACD_CONFIG

    def analyze(self, candles: Sequence[Candle]) -> MACDResult:
        cfg = self.config
        prices = closes(candles)
        if len(prices) < cfg.slow_period:
            return MACDResult()

        line = ema(prices, cfg.fast_period) - ema(prices, cfg.slow_period)
        line = line[~np.isnan(line)]
        period = min(cfg.signal_period, len(line))
        signal_line = ema(line, period)
        histogram = line - signal_line

        macd_value = float(line[-1])
        signal_value = float(signal_line[-1])
        hist = float(histogram[-1])

        signal = Signal.HOLD
        if macd_value > 0 and hist > 0:
            signal = Signal.BUY
        elif macd_value < 0 and hist < 0:
            signal = Signal.SELL

        strength = 0.0
        if signal is not Signal.HOLD:
            strength = cfg.base_strength + cfg.histogram_weight * min(1.0, abs(hist) / abs(macd_value))
            if len(histogram) >= 2 and not np.isnan(histogram[-2]) and abs(hist) > abs(histogram[-2]):
                strength += cfg.expansion_bonus
            strength = min(strength, 1.0)

        return MACDResult(
            signal=signal,
            strength=strength,
            macd=macd_value,
            signal_line=signal_value,
            histogram=hist,
        )
