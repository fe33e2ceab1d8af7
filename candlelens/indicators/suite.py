"""Indicator Suite.

Runs every indicator over one candle series. The indicators are pure
functions of the same immutable tuple, so they can run on a thread pool
without changing the outcome.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from candlelens.extraction.models import Candle
from candlelens.indicators.config import DEFAULT_INDICATOR_CONFIG, IndicatorConfig
from candlelens.indicators.donchian import DonchianAnalyzer
from candlelens.indicators.macd import MACDAnalyzer
from candlelens.indicators.models import IndicatorSuiteResult
from candlelens.indicators.moving_averages import MovingAverageAnalyzer
from candlelens.indicators.oscillators import momentum, rsi, trend_strength, volatility
from candlelens.indicators.quantitative import QuantitativeAnalyzer
from candlelens.indicators.series import closes
from candlelens.indicators.support_resistance import SupportResistanceAnalyzer
from candlelens.indicators.trend import TrendAnalyzer, adx

logger = logging.getLogger(__name__)


class IndicatorSuite:
    """Evaluates all technical indicators for a candle series."""

    def __init__(self, config: Optional[IndicatorConfig] = None) -> None:
        self.config = config or DEFAULT_INDICATOR_CONFIG
        self.support_resistance = SupportResistanceAnalyzer(self.config.support_resistance)
        self.donchian = DonchianAnalyzer(self.config.donchian)
        self.moving_averages = MovingAverageAnalyzer(self.config.moving_averages)
        self.macd = MACDAnalyzer(self.config.macd)
        self.trend = TrendAnalyzer(self.config.trend)
        self.quantitative = QuantitativeAnalyzer(self.config.quantitative)

    def run(
        self,
        candles: Sequence[Candle],
        image_height: float,
        parallel: bool = False,
    ) -> IndicatorSuiteResult:
        """Compute every indicator.

        Args:
            candles: Chronological candles.
            image_height: Height used to scale support/resistance tolerances.
            parallel: Evaluate the independent indicators on a thread pool.

        Returns:
            IndicatorSuiteResult; indicators without enough history are neutral.
        """
        candles = tuple(candles)
        if not candles:
            return IndicatorSuiteResult()

        tasks: dict[str, Callable[[], object]] = {
            "support_resistance": lambda: self.support_resistance.analyze(candles, image_height),
            "donchian": lambda: self.donchian.analyze(candles),
            "moving_averages": lambda: self.moving_averages.analyze(candles),
            "macd": lambda: self.macd.analyze(candles),
            "trend": lambda: self.trend.analyze(candles),
            "adx": lambda: adx(candles, self.config.trend.adx_period),
            "oscillators": lambda: self._oscillators(candles),
        }

        if parallel:
            results = self._run_parallel(tasks)
        else:
            results = {name: task() for name, task in tasks.items()}

        osc = results["oscillators"]
        quant = self.quantitative.analyze(
            rsi=osc["rsi"],
            momentum=osc["momentum"],
            trend_strength=osc["trend_strength"],
        )

        return IndicatorSuiteResult(
            support_resistance=results["support_resistance"],
            donchian=results["donchian"],
            moving_averages=results["moving_averages"],
            macd=results["macd"],
            trend=results["trend"],
            quantitative=quant,
            rsi=osc["rsi"],
            volatility=osc["volatility"],
            trend_strength=osc["trend_strength"],
            momentum=osc["momentum"],
            adx=results["adx"],
        )

    def _oscillators(self, candles: Sequence[Candle]) -> dict[str, float]:
        cfg = self.config.oscillators
        prices = closes(candles)
        return {
            "rsi": rsi(prices, cfg.rsi_period),
            "volatility": volatility(prices, cfg.volatility_period),
            "trend_strength": trend_strength(prices, cfg.trend_strength_period),
            "momentum": momentum(prices, cfg.momentum_period),
        }

    def _run_parallel(self, tasks: dict[str, Callable[[], object]]) -> dict[str, object]:
        max_workers = max(1, min(len(tasks), self.config.max_workers))
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {pool.submit(task): name for name, task in tasks.items()}
            results = {}
            for future in futures:
                results[futures[future]] = future.result()
        logger.debug(f"Evaluated {len(results)} indicator groups on {max_workers} workers")
        return results
