"""Configuration for technical indicators."""

from dataclasses import dataclass, field
from enum import Enum


class IndicatorName(str, Enum):
    """Indicators that produce a directional signal."""
    SUPPORT_RESISTANCE = "support_resistance"
    DONCHIAN = "donchian"
    MOVING_AVERAGES = "moving_averages"
    MACD = "macd"
    TREND = "trend"
    QUANTITATIVE = "quantitative"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    IndicatorName.SUPPORT_RESISTANCE: "Support/Resistance",
    IndicatorName.DONCHIAN: "Donchian Channel",
    IndicatorName.MOVING_AVERAGES: "Moving Averages",
    IndicatorName.MACD: "MACD",
    IndicatorName.TREND: "Trend",
    IndicatorName.QUANTITATIVE: "Quantitative",
}


class SRType(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"


class ChannelPosition(str, Enum):
    MIDDLE = "middle"
    UPPER_BREAKOUT = "upper_breakout"
    LOWER_BREAKOUT = "lower_breakout"


class MAType(str, Enum):
    SMA = "sma"
    EMA = "ema"


@dataclass(frozen=True)
class SRConfig:
    """Support/resistance clustering.

    Tolerances are fractions of the chart height so the same settings
    work across image sizes.
    """
    cluster_tolerance: float = 0.015
    min_touches: int = 3
    zone_proximity: float = 0.02
    confirmation_candles: int = 3
    min_candles: int = 5
    false_breakout_min_candles: int = 10
    false_breakout_strength: float = 0.8
    multi_timeframe: bool = True
    # (candles per bar, level strength) for each higher timeframe
    timeframes: tuple[tuple[int, float], ...] = ((5, 0.7), (15, 0.9))


@dataclass(frozen=True)
class DonchianConfig:
    periods: tuple[int, ...] = (20, 50)
    breakout_threshold: float = 0.02
    confirmation_bars: int = 3
    breakout_strength: float = 0.8


@dataclass(frozen=True)
class MAConfig:
    short_period: int = 9
    medium_period: int = 20
    long_period: int = 50
    ma_type: MAType = MAType.EMA
    crossover_strength: float = 0.8
    alignment_strength: float = 0.6


@dataclass(frozen=True)
class MACDConfig:
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9
    base_strength: float = 0.5
    histogram_weight: float = 0.3
    expansion_bonus: float = 0.2


@dataclass(frozen=True)
class OscillatorConfig:
    """Lookbacks for RSI, volatility, trend strength and momentum."""
    rsi_period: int = 14
    volatility_period: int = 20
    trend_strength_period: int = 10
    momentum_period: int = 10


@dataclass(frozen=True)
class TrendConfig:
    """EMA trend filter scaled by ADX.

    Attributes:
        spread_scale: Multiplier turning the relative EMA spread into a
            0-1 strength.
        reversal_window: Bars checked for higher lows / lower highs.
        reversal_trend_threshold: Prior trend strength that must be
            exceeded (in the opposite direction) for a reversal.
        reversal_overrides: Derived; a detected reversal replaces the EMA
            signal only when its confidence beats ``reversal_override``.
    """
    fast_period: int = 20
    slow_period: int = 50
    adx_period: int = 14
    spread_scale: float = 10.0
    strong_adx: float = 25.0
    weak_adx: float = 20.0
    strong_adx_multiplier: float = 1.2
    weak_adx_multiplier: float = 0.8
    reversal_window: int = 10
    reversal_trend_threshold: float = 0.3
    reversal_confidence: float = 0.8
    reversal_override: float = 0.7
    reversal_overrides: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "reversal_overrides", self.reversal_confidence > self.reversal_override
        )


@dataclass(frozen=True)
class QuantConfig:
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    momentum_threshold: float = 1.0
    trend_threshold: float = 0.3


@dataclass(frozen=True)
class IndicatorConfig:
    """Top-level indicator configuration."""
    support_resistance: SRConfig = field(default_factory=SRConfig)
    donchian: DonchianConfig = field(default_factory=DonchianConfig)
    moving_averages: MAConfig = field(default_factory=MAConfig)
    macd: MACDConfig = field(default_factory=MACDConfig)
    oscillators: OscillatorConfig = field(default_factory=OscillatorConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)
    quantitative: QuantConfig = field(default_factory=QuantConfig)
    max_workers: int = 4


DEFAULT_SR_CONFIG = SRConfig()
DEFAULT_DONCHIAN_CONFIG = DonchianConfig()
DEFAULT_MA_CONFIG = MAConfig()
DEFAULT_MACD_CONFIG = MACDConfig()
DEFAULT_OSCILLATOR_CONFIG = OscillatorConfig()
DEFAULT_TREND_CONFIG = TrendConfig()
DEFAULT_QUANT_CONFIG = QuantConfig()
DEFAULT_INDICATOR_CONFIG = IndicatorConfig()
