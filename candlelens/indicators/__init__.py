"""Technical indicators over a reconstructed candle series.

Support/resistance clustering, Donchian breakouts, moving averages, MACD,
EMA trend with ADX, the RSI / volatility / trend-strength / momentum
oscillators and a quantitative vote, bundled by IndicatorSuite.
"""

from candlelens.indicators.config import (
    DEFAULT_INDICATOR_CONFIG,
    ChannelPosition,
    DonchianConfig,
    IndicatorConfig,
    IndicatorName,
    MACDConfig,
    MAConfig,
    MAType,
    OscillatorConfig,
    QuantConfig,
    SRConfig,
    SRType,
    TrendConfig,
)
from candlelens.indicators.donchian import DonchianAnalyzer
from candlelens.indicators.macd import MACDAnalyzer
from candlelens.indicators.models import (
    ADXReading,
    DonchianChannel,
    DonchianResult,
    IndicatorSuiteResult,
    Level,
    MACDResult,
    MovingAverageResult,
    QuantitativeResult,
    SupportResistanceResult,
    TrendResult,
)
from candlelens.indicators.moving_averages import MovingAverageAnalyzer
from candlelens.indicators.oscillators import momentum, rsi, trend_strength, volatility
from candlelens.indicators.quantitative import QuantitativeAnalyzer
from candlelens.indicators.suite import IndicatorSuite
from candlelens.indicators.support_resistance import SupportResistanceAnalyzer
from candlelens.indicators.trend import TrendAnalyzer, adx

__all__ = [
    # Config
    "DEFAULT_INDICATOR_CONFIG",
    "ChannelPosition",
    "DonchianConfig",
    "IndicatorConfig",
    "IndicatorName",
    "MACDConfig",
    "MAConfig",
    "MAType",
    "OscillatorConfig",
    "QuantConfig",
    "SRConfig",
    "SRType",
    "TrendConfig",
    # Models
    "ADXReading",
    "DonchianChannel",
    "DonchianResult",
    "IndicatorSuiteResult",
    "Level",
    "MACDResult",
    "MovingAverageResult",
    "QuantitativeResult",
    "SupportResistanceResult",
    "TrendResult",
    # Engines
    "DonchianAnalyzer",
    "IndicatorSuite",
    "MACDAnalyzer",
    "MovingAverageAnalyzer",
    "QuantitativeAnalyzer",
    "SupportResistanceAnalyzer",
    "TrendAnalyzer",
    # Functions
    "adx",
    "momentum",
    "rsi",
    "trend_strength",
    "volatility",
]
