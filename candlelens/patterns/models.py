"""Data models for candlestick patterns."""

from dataclasses import dataclass

from candlelens.patterns.config import PatternType
from candlelens.signals import Signal


@dataclass(frozen=True)
class Pattern:
    """A matched candlestick formation on the latest candles."""

    pattern_type: PatternType
    signal: Signal
    strength: float
    description: str = ""
    context: str = ""
    candles_used: int = 1

    @property
    def name(self) -> str:
        return self.pattern_type.label

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.pattern_type.value,
            "signal": self.signal.value,
            "strength": self.strength,
            "description": self.description,
            "context": self.context,
            "candles_used": self.candles_used,
        }
