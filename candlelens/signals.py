"""Directional signal shared by patterns, indicators and fusion."""

from enum import Enum


class Signal(str, Enum):
    """Direction a pattern or indicator points to."""
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

    def __str__(self) -> str:
        return self.value

    @property
    def sign(self) -> int:
        """+1 for BUY, -1 for SELL, 0 for HOLD."""
        if self is Signal.BUY:
            return 1
        if self is Signal.SELL:
            return -1
        return 0
