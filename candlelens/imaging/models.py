"""Data models for image sampling."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Immutable RGBA pixel grid.

    Attributes:
        pixels: Array of shape (height, width, 4), dtype uint8, read-only.
        scale: Downscale factor applied to the source image (1.0 = none).
        source_size: Original (width, height) before downscaling.
    """

    pixels: np.ndarray
    scale: float = 1.0
    source_size: tuple[int, int] = (0, 0)

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"pixels must have shape (h, w, 4), got {self.pixels.shape}")
        if self.pixels.flags.writeable:
            frozen = self.pixels.copy()
            frozen.flags.writeable = False
            object.__setattr__(self, "pixels", frozen)
        if self.source_size == (0, 0):
            object.__setattr__(self, "source_size", (self.width, self.height))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def rgb(self) -> np.ndarray:
        """Red, green and blue channels as int32 for overflow-free arithmetic."""
        return self.pixels[:, :, :3].astype(np.int32)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "scale": round(self.scale, 6),
            "source_size": list(self.source_size),
        }
