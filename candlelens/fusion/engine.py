"""Signal Fusion — merges patterns and indicators into one decision.

Patterns contribute ``base score x historical accuracy x strength`` and
directional indicators ``weight x strength`` to BUY and SELL totals. The
score separation sets the confidence; calls below the confidence
threshold are downgraded to WAIT. Directional calls get a profit target
and risk from the confidence tier, with the target scaled by market
conditions.
"""

import logging
import math
from typing import Optional, Sequence

from candlelens.fusion.accuracy import NullAccuracyStore, PatternAccuracyStore
from candlelens.fusion.config import (
    DEFAULT_FUSION_CONFIG,
    FusionConfig,
    TargetAdjustment,
)
from candlelens.fusion.models import Action, Factor, Recommendation
from candlelens.indicators.config import IndicatorName
from candlelens.indicators.models import IndicatorSuiteResult
from candlelens.patterns.models import Pattern
from candlelens.signals import Signal

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (Python's round() goes to even)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class SignalFusion:
    """Produces a Recommendation from patterns and indicator results.

    Args:
        config: Scores, weights, thresholds and profit tiers.
        accuracy_store: Pattern accuracy lookups; the null store reports
            0.5 for every pattern.

    Example:
        fusion = SignalFusion()
        rec = fusion.fuse(patterns, indicators)
        print(rec.action, rec.confidence)
    """

    def __init__(
        self,
        config: Optional[FusionConfig] = None,
        accuracy_store: Optional[PatternAccuracyStore] = None,
    ) -> None:
        self.config = config or DEFAULT_FUSION_CONFIG
        self.accuracy_store = accuracy_store or NullAccuracyStore()

    def fuse(
        self,
        patterns: Sequence[Pattern],
        indicators: Optional[IndicatorSuiteResult] = None,
    ) -> Recommendation:
        """Score every input and decide.

        Args:
            patterns: Matched patterns, strongest first.
            indicators: Indicator results; None counts as all HOLD.

        Returns:
            Recommendation. Never raises on valid inputs.
        """
        buy, sell, factors = self.score(patterns, indicators)
        return self.decide(
            buy,
            sell,
            factors=factors,
            indicators=indicators,
            reasoning=self.reasoning(patterns, indicators),
        )

    def record_outcomes(self, patterns: Sequence[Pattern], recommendation: Recommendation) -> int:
        """Feed a finished run back into the accuracy store.

        Every detected pattern is counted once; it counts as correct when
        the recommendation's confidence exceeds ``outcome_confidence``.

        Returns:
            Number of patterns recorded.
        """
        correct = recommendation.confidence > self.config.outcome_confidence
        for pattern in patterns:
            self.accuracy_store.record(pattern.name, correct)
        if patterns:
            logger.debug(
                f"Recorded {len(patterns)} pattern outcomes (correct={correct})",
                extra={"extra_data": {"confidence": recommendation.confidence}},
            )
        return len(patterns)

    # ── Scoring ──────────────────────────────────────────────────────

    def score(
        self,
        patterns: Sequence[Pattern],
        indicators: Optional[IndicatorSuiteResult] = None,
    ) -> tuple[float, float, list[Factor]]:
        """Accumulate BUY and SELL scores with one factor per contribution."""
        buy = sell = 0.0
        factors: list[Factor] = []

        for pattern in patterns:
            if pattern.signal is Signal.HOLD:
                continue
            accuracy = self.accuracy_store.get(pattern.name).accuracy
            value = self.config.pattern_score(pattern.pattern_type) * accuracy * pattern.strength
            if pattern.signal is Signal.BUY:
                buy += value
            else:
                sell += value
            label = f"{pattern.name}: {pattern.description}" if pattern.description else pattern.name
            factors.append(Factor(label, value * pattern.signal.sign))

        if indicators is not None:
            for name, signal, strength in indicators.signals():
                if signal is Signal.HOLD:
                    continue
                value = self.config.indicator_weight(name) * strength
                if signal is Signal.BUY:
                    buy += value
                else:
                    sell += value
                factors.append(Factor(_indicator_label(name, signal), value * signal.sign))

        return buy, sell, factors

    # ── Decision ─────────────────────────────────────────────────────

    def decide(
        self,
        buy_score: float,
        sell_score: float,
        factors: Sequence[Factor] = (),
        indicators: Optional[IndicatorSuiteResult] = None,
        reasoning: Sequence[str] = (),
    ) -> Recommendation:
        """Turn accumulated scores into a Recommendation."""
        cfg = self.config
        factors = list(factors)
        total = buy_score + sell_score
        diff = abs(buy_score - sell_score)

        if total == 0 or diff < cfg.min_separation:
            action = Action.WAIT
            confidence = cfg.wait_confidence
        else:
            raw = 50 + diff / total * 50
            confidence = min(cfg.max_confidence, int(round_half_up(raw)))
            action = Action.BUY if buy_score > sell_score else Action.SELL

        factors.sort(key=lambda f: abs(f.impact), reverse=True)
        if confidence < cfg.confidence_threshold:
            action = Action.WAIT
            # The threshold note always survives the cap
            factors = factors[:max(cfg.top_factors - 1, 0)]
            factors.append(Factor(
                f"Confidence below {cfg.confidence_threshold}% threshold", 0.0,
            ))
        else:
            factors = factors[:cfg.top_factors]

        profit_target = risk = 0.0
        if action is not Action.WAIT:
            tier = cfg.tier_for(confidence)
            target = self.adjust_target(tier.target, action, indicators)
            profit_target = round_half_up(target * 100, 1)
            risk = round_half_up(tier.risk * 100, 1)

        logger.debug(
            f"Fusion decided {action.value} at {confidence}",
            extra={"extra_data": {"buy": round(buy_score, 3), "sell": round(sell_score, 3)}},
        )
        return Recommendation(
            action=action,
            confidence=confidence,
            profit_target_pct=profit_target,
            risk_pct=risk,
            factors=tuple(factors),
            buy_score=buy_score,
            sell_score=sell_score,
            reasoning=tuple(reasoning),
        )

    def adjust_target(
        self,
        target: float,
        action: Action,
        indicators: Optional[IndicatorSuiteResult],
    ) -> float:
        """Scale a tier's profit target by market conditions.

        Each adjustment is a multiplier, so ``adjustment_order`` does not
        change the result.
        """
        if indicators is None:
            return target
        for adjustment in self.config.adjustment_order:
            target *= self._multiplier(adjustment, action, indicators)
        return target

    def _multiplier(
        self,
        adjustment: TargetAdjustment,
        action: Action,
        indicators: IndicatorSuiteResult,
    ) -> float:
        cfg = self.config
        if adjustment is TargetAdjustment.VOLATILITY:
            if indicators.volatility > cfg.high_volatility:
                return cfg.high_volatility_multiplier
            if indicators.volatility > cfg.medium_volatility:
                return cfg.medium_volatility_multiplier
        elif adjustment is TargetAdjustment.TREND_STRENGTH:
            if abs(indicators.trend_strength) > cfg.strong_trend:
                return cfg.strong_trend_multiplier
        elif adjustment is TargetAdjustment.RSI_EXTREME:
            if indicators.rsi > cfg.rsi_extreme_high or indicators.rsi < cfg.rsi_extreme_low:
                return cfg.rsi_extreme_multiplier
        elif adjustment is TargetAdjustment.MA_ALIGNMENT:
            direction = 1 if action is Action.BUY else -1
            alignment = indicators.moving_averages.alignment
            if alignment == direction:
                return cfg.ma_agree_multiplier
            if alignment == -direction:
                return cfg.ma_contradict_multiplier
        return 1.0

    # ── Reasoning ────────────────────────────────────────────────────

    @staticmethod
    def reasoning(
        patterns: Sequence[Pattern],
        indicators: Optional[IndicatorSuiteResult],
    ) -> list[str]:
        """Short explanations of the main pattern, levels, trend and RSI."""
        reasons: list[str] = []
        if patterns:
            main = patterns[0]
            reasons.append(f"Candlestick pattern: {main.name} ({main.description})")

        if indicators is None:
            return reasons

        sr = indicators.support_resistance
        if sr.signal is not Signal.HOLD:
            side = "support" if sr.signal is Signal.BUY else "resistance"
            if sr.false_breakout:
                reasons.append(f"Support/Resistance: false breakout through {side}")
            else:
                reasons.append(f"Support/Resistance: price near {side} level")

        if indicators.trend.signal is not Signal.HOLD:
            mood = "Bullish" if indicators.trend.signal is Signal.BUY else "Bearish"
            reasons.append(f"Trend: {mood} trend detected")

        if indicators.rsi > 70:
            reasons.append("RSI: Overbought conditions")
        elif indicators.rsi < 30:
            reasons.append("RSI: Oversold conditions")

        return reasons


def _indicator_label(name: IndicatorName, signal: Signal) -> str:
    bullish = signal is Signal.BUY
    if name is IndicatorName.SUPPORT_RESISTANCE:
        return "Strong support level" if bullish else "Strong resistance level"
    if name is IndicatorName.DONCHIAN:
        return "Donchian upper breakout" if bullish else "Donchian lower breakout"
    return f"{name.label}: {signal.value}"
