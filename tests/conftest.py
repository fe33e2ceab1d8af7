"""Pytest configuration and shared fixtures."""

import io
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

GREEN = (0, 200, 0)
RED = (220, 0, 0)
BACKGROUND = (255, 255, 255)


def _render_chart(
    bars,
    height: int = 200,
    candle_width: int = 7,
    gap: int = 5,
    margin: int = 10,
) -> np.ndarray:
    """Draw candles onto a white RGB canvas.

    Each bar is (high_row, body_top, body_bottom, low_row, is_green) in
    pixel rows, inclusive. Wicks are one column wide at the candle center;
    bodies span the full candle width.
    """
    width = margin * 2 + len(bars) * (candle_width + gap)
    img = np.full((height, width, 3), BACKGROUND, dtype=np.uint8)
    for i, (high, top, bottom, low, green) in enumerate(bars):
        x0 = margin + i * (candle_width + gap)
        color = GREEN if green else RED
        center = x0 + candle_width // 2
        img[high:low + 1, center] = color
        img[top:bottom + 1, x0:x0 + candle_width] = color
    return img


def _trend_bars(n: int, start: int, step: int, green: bool):
    """Steadily moving candles; a positive step moves price up (rows up)."""
    bars = []
    for i in range(n):
        mid = start - i * step
        bars.append((mid - 6, mid - 3, mid + 3, mid + 6, green))
    return bars


def _to_png(array: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(array).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def render():
    """Chart renderer: render(bars, height=200, ...) -> RGB array."""
    return _render_chart


@pytest.fixture
def to_png():
    return _to_png


@pytest.fixture
def uptrend_chart() -> np.ndarray:
    return _render_chart(_trend_bars(60, start=150, step=2, green=True))


@pytest.fixture
def downtrend_chart() -> np.ndarray:
    return _render_chart(_trend_bars(60, start=32, step=-2, green=False))


@pytest.fixture
def blank_chart() -> np.ndarray:
    return np.full((200, 300, 3), BACKGROUND, dtype=np.uint8)


@pytest.fixture
def uptrend_png(uptrend_chart) -> bytes:
    return _to_png(uptrend_chart)
