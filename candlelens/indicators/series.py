"""Price-series helpers shared by the indicator engines."""

from typing import Sequence

import numpy as np
import pandas as pd

from candlelens.extraction.models import Candle


def to_frame(candles: Sequence[Candle]) -> pd.DataFrame:
    """OHLC frame in price space, oldest row first."""
    return pd.DataFrame(
        {
            "open": [c.open for c in candles],
            "high": [c.high for c in candles],
            "low": [c.low for c in candles],
            "close": [c.close for c in candles],
        },
        dtype=float,
    )


def closes(candles: Sequence[Candle]) -> np.ndarray:
    return np.array([c.close for c in candles], dtype=float)


def sma(values: np.ndarray, period: int) -> np.ndarray:
    """Simple moving average; NaN until ``period`` values are available."""
    return pd.Series(values, dtype=float).rolling(period).mean().to_numpy()


def ema(values: np.ndarray, period: int) -> np.ndarray:
    """Exponential moving average seeded with the SMA of the first window.

    Positions before the seed are NaN. Returns all-NaN when fewer than
    ``period`` values are given.
    """
    values = np.asarray(values, dtype=float)
    out = np.full(len(values), np.nan)
    if period <= 0 or len(values) < period:
        return out

    k = 2.0 / (period + 1)
    out[period - 1] = values[:period].mean()
    for i in range(period, len(values)):
        out[i] = values[i] * k + out[i - 1] * (1 - k)
    return out


def last_value(series: np.ndarray):
    """Latest value as float, or None when undefined."""
    if len(series) == 0 or np.isnan(series[-1]):
        return None
    return float(series[-1])
