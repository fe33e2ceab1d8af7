"""Trend Analysis.

EMA trend filter, directional movement (ADX / +DI / -DI) and a simple
reversal detector based on higher lows or lower highs after a prior
opposite trend.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from candlelens.extraction.models import Candle
from candlelens.indicators.config import DEFAULT_TREND_CONFIG, TrendConfig
from candlelens.indicators.models import ADXReading, TrendResult
from candlelens.indicators.oscillators import trend_strength
from candlelens.indicators.series import closes, ema, last_value, to_frame
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


def adx(candles: Sequence[Candle], period: int = 14) -> Optional[ADXReading]:
    """Average Directional Index with Wilder-smoothed +DI/-DI.

    ADX is the simple average of the last ``period`` DX values.

    Returns:
        ADXReading, or None when fewer than ``2 * period`` candles.
    """
    n = len(candles)
    if period <= 0 or n < 2 * period:
        return None

    frame = to_frame(candles)
    high = frame["high"].to_numpy()
    low = frame["low"].to_numpy()
    close = frame["close"].to_numpy()

    up_move = high[1:] - high[:-1]
    down_move = low[:-1] - low[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = np.maximum.reduce([
        high[1:] - low[1:],
        np.abs(high[1:] - close[:-1]),
        np.abs(low[1:] - close[:-1]),
    ])

    smooth_plus = plus_dm[:period].sum()
    smooth_minus = minus_dm[:period].sum()
    smooth_tr = tr[:period].sum()
    plus_di: list[float] = []
    minus_di: list[float] = []

    for i in range(period - 1, len(plus_dm)):
        if i >= period:
            smooth_plus = smooth_plus - smooth_plus / period + plus_dm[i]
            smooth_minus = smooth_minus - smooth_minus / period + minus_dm[i]
            smooth_tr = smooth_tr - smooth_tr / period + tr[i]
        plus_di.append(smooth_plus / smooth_tr * 100 if smooth_tr != 0 else 0.0)
        minus_di.append(smooth_minus / smooth_tr * 100 if smooth_tr != 0 else 0.0)

    dx = []
    for p, m in zip(plus_di, minus_di):
        total = p + m
        dx.append(abs(p - m) / total * 100 if total != 0 else 0.0)

    return ADXReading(
        adx=float(np.mean(dx[-period:])),
        plus_di=float(plus_di[-1]),
        minus_di=float(minus_di[-1]),
    )


class TrendAnalyzer:
    """Fast/slow EMA trend signal scaled by ADX."""

    def __init__(self, config: Optional[TrendConfig] = None) -> None:
        self.config = config or DEFAULT_TREND_CONFIG

    def analyze(self, candles: Sequence[Candle]) -> TrendResult:
        cfg = self.config
        if len(candles) < cfg.slow_period:
            return TrendResult()

        prices = closes(candles)
        fast = last_value(ema(prices, cfg.fast_period))
        slow = last_value(ema(prices, cfg.slow_period))
        reading = adx(candles, cfg.adx_period)
        reversal = self.detect_reversal(candles)
        current = float(prices[-1])

        signal, strength = Signal.HOLD, 0.0
        if fast is not None and slow is not None and slow > 0:
            if current > fast and current > slow and fast > slow:
                signal = Signal.BUY
                strength = min((fast / slow - 1) * cfg.spread_scale, 1.0)
            elif current < fast and current < slow and fast < slow:
                signal = Signal.SELL
                strength = min((1 - fast / slow) * cfg.spread_scale, 1.0)

        if reading is not None:
            if reading.adx > cfg.strong_adx:
                strength *= cfg.strong_adx_multiplier
            elif reading.adx < cfg.weak_adx:
                strength *= cfg.weak_adx_multiplier

        if reversal is not None and cfg.reversal_overrides:
            logger.debug(f"Trend reversal overrides EMA signal: {reversal}")
            signal = reversal
            strength = cfg.reversal_confidence

        return TrendResult(
            signal=signal,
            strength=min(strength, 1.0),
            fast_ema=fast,
            slow_ema=slow,
            adx=reading,
            reversal=reversal,
        )

    def detect_reversal(self, candles: Sequence[Candle]) -> Optional[Signal]:
        """Higher lows after a downtrend (BUY) or lower highs after an uptrend (SELL).

        Returns:
            The reversal direction, or None.
        """
        window = self.config.reversal_window
        if len(candles) < 2 * window + 1:
            return None

        recent = candles[-window:]
        prior = closes(candles[-(2 * window + 1):-window])
        prior_trend = trend_strength(prior, window)

        higher_lows = all(b.low >= a.low for a, b in zip(recent, recent[1:]))
        if higher_lows and prior_trend < -self.config.reversal_trend_threshold:
            return Signal.BUY

        lower_highs = all(b.high <= a.high for a, b in zip(recent, recent[1:]))
        if lower_highs and prior_trend > self.config.reversal_trend_threshold:
            return Signal.SELL

        return None
