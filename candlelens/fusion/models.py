"""Data models for the fused recommendation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Action(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    WAIT = "WAIT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Factor:
    """One contribution to the decision.

    Attributes:
        label: Human-readable description.
        impact: Signed score, positive bullish and negative bearish.
    """

    label: str
    impact: float

    @property
    def direction(self) -> str:
        if self.impact > 0:
            return "bullish"
        if self.impact < 0:
            return "bearish"
        return "neutral"

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "impact": round(self.impact, 2),
            "direction": self.direction,
        }


@dataclass(frozen=True)
class Recommendation:
    """Final BUY/SELL/WAIT call.

    Attributes:
        action: BUY, SELL or WAIT.
        confidence: 0-100.
        profit_target_pct: Suggested target in percent (0.0 for WAIT).
        risk_pct: Suggested risk in percent (0.0 for WAIT).
        factors: Top contributions sorted by descending |impact|.
        buy_score: Accumulated bullish score.
        sell_score: Accumulated bearish score.
        reasoning: Short explanations of the main drivers.
    """

    action: Action
    confidence: int
    profit_target_pct: float = 0.0
    risk_pct: float = 0.0
    factors: tuple[Factor, ...] = ()
    buy_score: float = 0.0
    sell_score: float = 0.0
    reasoning: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return {
            "action": self.action.value,
            "confidence": self.confidence,
            "profit_target_pct": self.profit_target_pct,
            "risk_pct": self.risk_pct,
            "factors": [f.to_dict() for f in self.factors],
            "buy_score": round(self.buy_score, 2),
            "sell_score": round(self.sell_score, 2),
            "reasoning": list(self.reasoning),
        }
