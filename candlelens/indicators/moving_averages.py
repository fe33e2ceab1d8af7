"""Moving Average crossovers and alignment."""

import logging
from typing import Optional, Sequence

import numpy as np

from candlelens.extraction.models import Candle
from candlelens.indicators.config import DEFAULT_MA_CONFIG, MAConfig, MAType
from candlelens.indicators.models import MovingAverageResult
from candlelens.indicators.series import closes, ema, last_value, sma
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


class MovingAverageAnalyzer:
    """Short/medium/long moving averages.

    A fresh crossover of the short average over the medium one takes
    precedence; otherwise full alignment of all three averages signals
    a weaker continuation.
    """

    def __init__(self, config: Optional[MAConfig] = None) -> None:
        self.config = config or DEFAULT_MA_CONFIG

    @property
    def periods(self) -> tuple[int, int, int]:
        cfg = self.config
        return cfg.short_period, cfg.medium_period, cfg.long_period

    def analyze(self, candles: Sequence[Candle]) -> MovingAverageResult:
        prices = closes(candles)
        sma_series = {p: sma(prices, p) for p in self.periods}
        ema_series = {p: ema(prices, p) for p in self.periods}
        sma_values = {p: last_value(s) for p, s in sma_series.items()}
        ema_values = {p: last_value(s) for p, s in ema_series.items()}

        series = ema_series if self.config.ma_type is MAType.EMA else sma_series
        short, medium, long_ = (series[p] for p in self.periods)

        alignment = self._alignment(short, medium, long_)
        crossover = self._crossover(short, medium)

        signal, strength = Signal.HOLD, 0.0
        if crossover == "bullish":
            signal, strength = Signal.BUY, self.config.crossover_strength
        elif crossover == "bearish":
            signal, strength = Signal.SELL, self.config.crossover_strength
        elif alignment > 0:
            signal, strength = Signal.BUY, self.config.alignment_strength
        elif alignment < 0:
            signal, strength = Signal.SELL, self.config.alignment_strength

        return MovingAverageResult(
            signal=signal,
            strength=strength,
            sma=sma_values,
            ema=ema_values,
            alignment=alignment,
            crossover=crossover,
        )

    @staticmethod
    def _alignment(short: np.ndarray, medium: np.ndarray, long_: np.ndarray) -> int:
        s, m, lg = last_value(short), last_value(medium), last_value(long_)
        if s is None or m is None or lg is None:
            return 0
        if s > m > lg:
            return 1
        if s < m < lg:
            return -1
        return 0

    @staticmethod
    def _crossover(short: np.ndarray, medium: np.ndarray) -> Optional[str]:
        if len(short) < 2:
            return None
        prev_s, prev_m = short[-2], medium[-2]
        cur_s, cur_m = short[-1], medium[-1]
        if np.isnan([prev_s, prev_m, cur_s, cur_m]).any():
            return None

        if prev_s <= prev_m and cur_s > cur_m:
            return "bullish"
        if prev_s >= prev_m and cur_s < cur_m:
            return "bearish"
        return None
