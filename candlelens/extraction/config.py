"""Configuration for candle extraction."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class ColorChannel(str, Enum):
    """RGB channel that must dominate for a pixel to match."""
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


_CHANNEL_INDEX = {ColorChannel.RED: 0, ColorChannel.GREEN: 1, ColorChannel.BLUE: 2}


@dataclass(frozen=True)
class ColorRule:
    """Ratio/threshold pixel classifier.

    A pixel matches when the dominant channel exceeds each other channel
    by ``dominance`` times and is brighter than ``min_intensity``.
    """
    channel: ColorChannel = ColorChannel.GREEN
    dominance: float = 1.2
    min_intensity: int = 80

    def __call__(self, r: int, g: int, b: int) -> bool:
        mask = self.mask(np.array([[[r, g, b]]], dtype=np.int32))
        return bool(mask[0, 0])

    def mask(self, rgb: np.ndarray) -> np.ndarray:
        """Vectorized match over an (h, w, 3) integer array."""
        idx = _CHANNEL_INDEX[self.channel]
        others = [i for i in range(3) if i != idx]
        primary = rgb[:, :, idx].astype(np.float64)
        return (
            (primary > rgb[:, :, others[0]] * self.dominance)
            & (primary > rgb[:, :, others[1]] * self.dominance)
            & (primary > self.min_intensity)
        )


@dataclass(frozen=True)
class ExtractionConfig:
    """Candle extraction settings.

    Attributes:
        chart_area_ratio: Top fraction of the image treated as plot area.
        min_candle_width: Minimum column span (x_end - x_start) of a candle.
        max_candles: Scanning stops after this many candles (newest first).
        body_width_ratio: Fraction of the candle's columns a row must fill
            in the candle's own color to count as body rather than wick.
        bullish: Pixel rule for rising candles.
        bearish: Pixel rule for falling candles.
    """
    chart_area_ratio: float = 0.85
    min_candle_width: int = 3
    max_candles: int = 100
    body_width_ratio: float = 0.6
    bullish: ColorRule = field(default_factory=lambda: ColorRule(ColorChannel.GREEN))
    bearish: ColorRule = field(default_factory=lambda: ColorRule(ColorChannel.RED))


DEFAULT_EXTRACTION_CONFIG = ExtractionConfig()
