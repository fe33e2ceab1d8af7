"""Scalar oscillators over close prices.

All functions take closes oldest first and return a neutral value when
the history is too short.
"""

import numpy as np


def rsi(closes, period: int = 14) -> float:
    """Relative Strength Index from simple average gain/loss.

    Returns 50.0 when there are not more closes than the period, and
    100.0 when the average loss over the window is zero.
    """
    prices = np.asarray(closes, dtype=float)
    if len(prices) <= period:
        return 50.0

    changes = np.diff(prices[-(period + 1):])
    avg_gain = changes[changes > 0].sum() / period
    avg_loss = -changes[changes < 0].sum() / period
    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return float(100.0 - 100.0 / (1.0 + rs))


def volatility(closes, period: int = 20) -> float:
    """Coefficient of variation (population stddev / mean)."""
    prices = np.asarray(closes, dtype=float)
    if len(prices) < period:
        return 0.0
    window = prices[-period:]
    mean = window.mean()
    if mean == 0:
        return 0.0
    return float(window.std() / mean)


def trend_strength(closes, period: int = 10) -> float:
    """(#up - #down) / period over the last ``period`` changes, in [-1, 1]."""
    prices = np.asarray(closes, dtype=float)
    if len(prices) <= period:
        return 0.0
    changes = np.diff(prices[-(period + 1):])
    up = int((changes > 0).sum())
    down = int((changes < 0).sum())
    return (up - down) / period


def momentum(closes, period: int = 10) -> float:
    """Percent change from the close ``period`` bars back."""
    prices = np.asarray(closes, dtype=float)
    if len(prices) <= period:
        return 0.0
    base = prices[-(period + 1)]
    if base == 0:
        return 0.0
    return float((prices[-1] - base) / base * 100.0)
