"""Data models for technical indicators.

Every result carries ``signal`` and ``strength``; a HOLD result with zero
strength is the neutral value returned when history is insufficient.
"""

from dataclasses import dataclass, field
from typing import Optional

from candlelens.indicators.config import ChannelPosition, IndicatorName, SRType
from candlelens.signals import Signal


def _opt_round(value: Optional[float], digits: int = 4) -> Optional[float]:
    return None if value is None else round(value, digits)


@dataclass(frozen=True)
class Level:
    """Support or resistance level."""

    price: float
    row: float
    touches: int
    strength: float
    level_type: SRType

    def to_dict(self) -> dict:
        return {
            "price": round(self.price, 2),
            "row": round(self.row, 2),
            "touches": self.touches,
            "strength": round(self.strength, 3),
            "type": self.level_type.value,
        }


@dataclass(frozen=True)
class SupportResistanceResult:
    signal: Signal = Signal.HOLD
    strength: float = 0.0
    supports: tuple[Level, ...] = ()
    resistances: tuple[Level, ...] = ()
    false_breakout: bool = False

    @property
    def nearest_support(self) -> Optional[Level]:
        return self.supports[0] if self.supports else None

    @property
    def nearest_resistance(self) -> Optional[Level]:
        return self.resistances[0] if self.resistances else None

    def to_dict(self) -> dict:
        return {
            "signal": self.signal.value,
            "strength": round(self.strength, 4),
            "supports": [lv.to_dict() for lv in self.supports],
            "resistances": [lv.to_dict() for lv in self.resistances],
            "false_breakout": self.false_breakout,
        }


@dataclass(frozen=True)
class DonchianChannel:
    """Channel over one lookback period."""

    period: int
    highest: float
    lowest: float
    signal: Signal = Signal.HOLD
    strength: float = 0.0
    position: ChannelPosition = ChannelPosition.MIDDLE

    @property
    def middle(self) -> float:
        return (self.highest + self.lowest) / 2

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "highest": self.highest,
            "lowest": self.lowest,
            "middle": self.middle,
            "signal": self.signal.value,
            "strength": self.strength,
            "position": self.position.value,
        }


@dataclass(frozen=True)
class DonchianResult:
    signal: Signal = Signal.HOLD
    strength: float = 0.0
    position: ChannelPosition = ChannelPosition.MIDDLE
    channels: tuple[DonchianChannel, ...] = ()

    def to_dict(self) -> dict:
        return {
            "signal": self.signal.value,
            "strength": self.strength,
            "position": self.position.value,
            "channels": [c.to_dict() for c in self.channels],
        }


@dataclass(frozen=True)
class MovingAverageResult:
    """Latest SMA/EMA values keyed by period, plus the MA signal.

    Attributes:
        alignment: +1 when short > medium > long, -1 for the reverse,
            0 otherwise or when the long average is unavailable.
        crossover: "bullish" or "bearish" when the short average crossed
            the medium one on the latest bar.
    """

    signal: Signal = Signal.HOLD
    strength: float = 0.0
    sma: dict[int, Optional[float]] = field(default_factory=dict)
    ema: dict[int, Optional[float]] = field(default_factory=dict)
    alignment: int = 0
    crossover: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "signal": self.signal.value,
            "strength": self.strength,
            "sma": {str(k): _opt_round(v) for k, v in self.sma.items()},
            "ema": {str(k): _opt_round(v) for k, v in self.ema.items()},
            "alignment": self.alignment,
            "crossover": self.crossover,
        }


@dataclass(frozen=True)
class MACDResult:
    signal: Signal = Signal.HOLD
    strength: float = 0.0
    macd: float = 0.0
    signal_line: float = 0.0
    histogram: float = 0.0

    def to_dict(self) -> dict:
        return {
            "signal": self.signal.value,
            "strength": round(self.strength, 4),
            "macd": round(self.macd, 4),
            "signal_line": round(self.signal_line, 4),
            "histogram": round(self.histogram, 4),
        }


@dataclass(frozen=True)
class ADXReading:
    adx: float
    plus_di: float
    minus_di: float

    def to_dict(self) -> dict:
        return {
            "adx": round(self.adx, 2),
            "plus_di": round(self.plus_di, 2),
            "minus_di": round(self.minus_di, 2),
        }


@dataclass(frozen=True)
class TrendResult:
    signal: Signal = Signal.HOLD
    strength: float = 0.0
    fast_ema: Optional[float] = None
    slow_ema: Optional[float] = None
    adx: Optional[ADXReading] = None
    reversal: Optional[Signal] = None

    def to_dict(self) -> dict:
        return {
            "signal": self.signal.value,
            "strength": round(self.strength, 4),
            "fast_ema": _opt_round(self.fast_ema),
            "slow_ema": _opt_round(self.slow_ema),
            "adx": self.adx.to_dict() if self.adx else None,
            "reversal": self.reversal.value if self.reversal else None,
        }


@dataclass(frozen=True)
class QuantitativeResult:
    """Vote of RSI, momentum and trend strength."""

    signal: Signal = Signal.HOLD
    strength: float = 0.0
    votes: int = 0

    def to_dict(self) -> dict:
        return {
            "signal": self.signal.value,
            "strength": round(self.strength, 4),
            "votes": self.votes,
        }


@dataclass(frozen=True)
class IndicatorSuiteResult:
    """All indicator outputs for one candle series."""

    support_resistance: SupportResistanceResult = field(default_factory=SupportResistanceResult)
    donchian: DonchianResult = field(default_factory=DonchianResult)
    moving_averages: MovingAverageResult = field(default_factory=MovingAverageResult)
    macd: MACDResult = field(default_factory=MACDResult)
    trend: TrendResult = field(default_factory=TrendResult)
    quantitative: QuantitativeResult = field(default_factory=QuantitativeResult)
    rsi: float = 50.0
    volatility: float = 0.0
    trend_strength: float = 0.0
    momentum: float = 0.0
    adx: Optional[ADXReading] = None

    def signals(self) -> list[tuple[IndicatorName, Signal, float]]:
        """(indicator, signal, strength) for every directional indicator."""
        return [
            (IndicatorName.SUPPORT_RESISTANCE, self.support_resistance.signal,
             self.support_resistance.strength),
            (IndicatorName.DONCHIAN, self.donchian.signal, self.donchian.strength),
            (IndicatorName.TREND, self.trend.signal, self.trend.strength),
            (IndicatorName.QUANTITATIVE, self.quantitative.signal, self.quantitative.strength),
            (IndicatorName.MOVING_AVERAGES, self.moving_averages.signal,
             self.moving_averages.strength),
            (IndicatorName.MACD, self.macd.signal, self.macd.strength),
        ]

    def to_dict(self) -> dict:
        return {
            "support_resistance": self.support_resistance.to_dict(),
            "donchian": self.donchian.to_dict(),
            "moving_averages": self.moving_averages.to_dict(),
            "macd": self.macd.to_dict(),
            "trend": self.trend.to_dict(),
            "quantitative": self.quantitative.to_dict(),
            "rsi": round(self.rsi, 2),
            "volatility": round(self.volatility, 6),
            "trend_strength": round(self.trend_strength, 4),
            "momentum": round(self.momentum, 4),
            "adx": self.adx.to_dict() if self.adx else None,
        }
