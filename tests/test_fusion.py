"""Tests for signal fusion and pattern accuracy stores."""

import itertools
import json

import pytest

from candlelens.fusion import (
    DEFAULT_FUSION_CONFIG,
    Action,
    Factor,
    FusionConfig,
    InMemoryAccuracyStore,
    JsonFileAccuracyStore,
    NullAccuracyStore,
    PatternAccuracyStore,
    PatternStats,
    Recommendation,
    SignalFusion,
    TargetAdjustment,
    round_half_up,
)
from candlelens.indicators import (
    IndicatorSuiteResult,
    MovingAverageResult,
    SupportResistanceResult,
    TrendResult,
)
from candlelens.patterns import Pattern, PatternType
from candlelens.signals import Signal


def _hammer(strength: float = 0.8) -> Pattern:
    return Pattern(PatternType.HAMMER, Signal.BUY, strength, "Bullish reversal", "Oversold")


def _conditions(**overrides) -> IndicatorSuiteResult:
    values = dict(
        volatility=0.025,
        trend_strength=0.6,
        rsi=85.0,
        moving_averages=MovingAverageResult(alignment=1),
    )
    values.update(overrides)
    return IndicatorSuiteResult(**values)


# ── Helpers ──


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3.0
        assert round_half_up(0.5) == 1.0
        assert round_half_up(72.5) == 73.0

    def test_digits(self):
        assert round_half_up(5.049, 1) == pytest.approx(5.0)
        assert round_half_up(1.26, 1) == pytest.approx(1.3)


# ── Decision ──


class TestDecide:
    def test_strong_buy(self):
        rec = SignalFusion().decide(10.0, 0.0)
        assert rec.action == Action.BUY
        assert rec.confidence == 95
        assert rec.profit_target_pct == 5.0
        assert rec.risk_pct == 2.0

    def test_strong_sell(self):
        rec = SignalFusion().decide(0.0, 8.0)
        assert rec.action == Action.SELL
        assert rec.confidence == 95

    def test_narrow_margin_below_threshold(self):
        rec = SignalFusion().decide(5.0, 4.0)
        assert rec.action == Action.WAIT
        assert rec.confidence == 56
        assert rec.profit_target_pct == 0.0
        assert rec.risk_pct == 0.0
        assert any("65% threshold" in f.label for f in rec.factors)

    def test_no_signal(self):
        rec = SignalFusion().decide(0.0, 0.0)
        assert rec.action == Action.WAIT
        assert rec.confidence == 45
        assert [f.label for f in rec.factors] == ["Confidence below 65% threshold"]

    def test_insufficient_separation(self):
        rec = SignalFusion().decide(3.0, 2.5)
        assert rec.action == Action.WAIT
        assert rec.confidence == 45

    def test_midpoint_rounds_up(self):
        rec = SignalFusion().decide(14.5, 5.5)
        assert rec.confidence == 73
        assert rec.action == Action.BUY

    def test_moderate_tier(self):
        rec = SignalFusion().decide(8.0, 2.0)
        assert rec.confidence == 80
        assert rec.profit_target_pct == 3.5
        assert rec.risk_pct == 1.5

    def test_conservative_tier(self):
        rec = SignalFusion().decide(7.0, 3.0)
        assert rec.confidence == 70
        assert rec.profit_target_pct == 2.0
        assert rec.risk_pct == 1.0

    def test_confidence_capped(self):
        rec = SignalFusion(FusionConfig(max_confidence=90)).decide(10.0, 0.0)
        assert rec.confidence == 90

    def test_custom_threshold(self):
        rec = SignalFusion(FusionConfig(confidence_threshold=50)).decide(5.0, 4.0)
        assert rec.action == Action.BUY
        assert not any("threshold" in f.label for f in rec.factors)


# ── Profit target adjustments ──


class TestTargetAdjustment:
    def test_all_conditions(self):
        fusion = SignalFusion()
        target = fusion.adjust_target(0.05, Action.BUY, _conditions())
        assert target == pytest.approx(0.05 * 0.85 * 1.2 * 0.9 * 1.1)

    def test_no_indicators_leaves_target(self):
        assert SignalFusion().adjust_target(0.05, Action.BUY, None) == 0.05

    def test_high_volatility(self):
        indicators = IndicatorSuiteResult(volatility=0.04)
        assert SignalFusion().adjust_target(0.05, Action.BUY, indicators) == pytest.approx(0.035)

    def test_alignment_contradicts_sell(self):
        indicators = IndicatorSuiteResult(moving_averages=MovingAverageResult(alignment=1))
        target = SignalFusion().adjust_target(0.05, Action.SELL, indicators)
        assert target == pytest.approx(0.05 * 0.85)

    def test_order_does_not_matter(self):
        indicators = _conditions()
        baseline = SignalFusion().decide(10.0, 0.0, indicators=indicators)
        for order in itertools.permutations(DEFAULT_FUSION_CONFIG.adjustment_order):
            fusion = SignalFusion(FusionConfig(adjustment_order=order))
            assert fusion.adjust_target(0.05, Action.BUY, indicators) == pytest.approx(
                0.05 * 0.85 * 1.2 * 0.9 * 1.1
            )
            rec = fusion.decide(10.0, 0.0, indicators=indicators)
            assert rec.profit_target_pct == baseline.profit_target_pct

    def test_subset_of_adjustments(self):
        config = FusionConfig(adjustment_order=(TargetAdjustment.TREND_STRENGTH,))
        target = SignalFusion(config).adjust_target(0.05, Action.BUY, _conditions())
        assert target == pytest.approx(0.06)


# ── Scoring ──


class TestScoring:
    def test_neutral_accuracy(self):
        buy, sell, factors = SignalFusion().score([_hammer()])
        assert buy == pytest.approx(3.0 * 0.5 * 0.8)
        assert sell == 0.0
        assert factors[0].impact == pytest.approx(1.2)
        assert factors[0].label == "Hammer: Bullish reversal"

    def test_accuracy_scales_contribution(self):
        store = InMemoryAccuracyStore()
        for correct in (True, True, True, False):
            store.record("Hammer", correct)
        buy, _, _ = SignalFusion(accuracy_store=store).score([_hammer()])
        assert buy == pytest.approx(3.0 * 0.75 * 0.8)

    def test_hold_patterns_ignored(self):
        doji = Pattern(PatternType.DOJI, Signal.HOLD, 0.6, "Market indecision", "Neutral")
        buy, sell, factors = SignalFusion().score([doji])
        assert buy == sell == 0.0
        assert factors == []

    def test_sell_pattern_has_negative_impact(self):
        star = Pattern(PatternType.SHOOTING_STAR, Signal.SELL, 0.8, "Bearish reversal")
        _, sell, factors = SignalFusion().score([star])
        assert sell == pytest.approx(1.2)
        assert factors[0].impact == pytest.approx(-1.2)
        assert factors[0].direction == "bearish"

    def test_unlisted_pattern_uses_default_score(self):
        config = FusionConfig(pattern_scores={})
        buy, _, _ = SignalFusion(config).score([_hammer(1.0)])
        assert buy == pytest.approx(2.0 * 0.5)

    def test_indicator_contributions(self):
        indicators = IndicatorSuiteResult(
            trend=TrendResult(signal=Signal.BUY, strength=0.5),
            support_resistance=SupportResistanceResult(signal=Signal.SELL, strength=0.8),
        )
        buy, sell, factors = SignalFusion().score([], indicators)
        assert buy == pytest.approx(3.5 * 0.5)
        assert sell == pytest.approx(5.0 * 0.8)
        labels = {f.label for f in factors}
        assert "Strong resistance level" in labels
        assert "Trend: BUY" in labels

    def test_hold_indicators_ignored(self):
        buy, sell, factors = SignalFusion().score([], IndicatorSuiteResult())
        assert (buy, sell, factors) == (0.0, 0.0, [])


# ── Fuse ──


class TestFuse:
    def test_empty_inputs(self):
        rec = SignalFusion().fuse([], None)
        assert rec.action == Action.WAIT
        assert rec.confidence == 45
        assert rec.reasoning == ()

    def test_factors_sorted_and_capped(self):
        patterns = [_hammer(0.1 * i) for i in range(1, 11)]
        rec = SignalFusion().fuse(patterns)
        assert rec.action == Action.BUY
        assert len(rec.factors) == 8
        impacts = [abs(f.impact) for f in rec.factors]
        assert impacts == sorted(impacts, reverse=True)

    def test_threshold_factor_survives_cap(self):
        buys = [_hammer(0.1 * i) for i in range(1, 6)]
        sells = [
            Pattern(PatternType.SHOOTING_STAR, Signal.SELL, 0.1 * i, "Bearish reversal", "Overbought")
            for i in range(1, 6)
        ]
        rec = SignalFusion().fuse(buys + sells)
        assert rec.action == Action.WAIT
        assert len(rec.factors) == 8
        assert rec.factors[-1].label == "Confidence below 65% threshold"
        impacts = [abs(f.impact) for f in rec.factors[:-1]]
        assert impacts == sorted(impacts, reverse=True)

    def test_record_outcomes(self):
        store = InMemoryAccuracyStore()
        fusion = SignalFusion(accuracy_store=store)
        patterns = [_hammer(), _hammer(0.5)]
        assert fusion.record_outcomes(patterns, fusion.decide(10.0, 0.0)) == 2
        assert store.get("Hammer").occurrences == 2
        assert store.get("Hammer").accuracy == 1.0

        fusion.record_outcomes(patterns[:1], fusion.decide(7.0, 3.0))
        assert store.get("Hammer").occurrences == 3
        assert store.get("Hammer").correct == 2

    def test_reasoning(self):
        indicators = IndicatorSuiteResult(
            trend=TrendResult(signal=Signal.BUY, strength=0.9),
            support_resistance=SupportResistanceResult(signal=Signal.BUY, strength=0.9),
            rsi=25.0,
        )
        rec = SignalFusion().fuse([_hammer()], indicators)
        assert rec.reasoning[0] == "Candlestick pattern: Hammer (Bullish reversal)"
        assert "Support/Resistance: price near support level" in rec.reasoning
        assert "Trend: Bullish trend detected" in rec.reasoning
        assert "RSI: Oversold conditions" in rec.reasoning

    def test_false_breakout_reasoning(self):
        indicators = IndicatorSuiteResult(
            support_resistance=SupportResistanceResult(
                signal=Signal.SELL, strength=0.8, false_breakout=True,
            ),
        )
        reasons = SignalFusion.reasoning([], indicators)
        assert reasons == ["Support/Resistance: false breakout through resistance"]

    def test_deterministic(self):
        indicators = _conditions(trend=TrendResult(signal=Signal.BUY, strength=0.7))
        fusion = SignalFusion()
        assert fusion.fuse([_hammer()], indicators) == fusion.fuse([_hammer()], indicators)

    def test_to_dict(self):
        rec = SignalFusion().decide(10.0, 0.0, factors=[Factor("Hammer", 1.234)])
        d = rec.to_dict()
        assert d["action"] == "BUY"
        assert d["confidence"] == 95
        assert d["factors"] == [{"label": "Hammer", "impact": 1.23, "direction": "bullish"}]
        assert isinstance(rec, Recommendation)


# ── Accuracy stores ──


class TestAccuracyStores:
    def test_pattern_stats(self):
        assert PatternStats().accuracy == 0.5
        stats = PatternStats().recorded(True).recorded(False).recorded(True)
        assert stats.occurrences == 3
        assert stats.correct == 2
        assert stats.accuracy == pytest.approx(2 / 3)

    def test_protocol(self):
        assert isinstance(NullAccuracyStore(), PatternAccuracyStore)
        assert isinstance(InMemoryAccuracyStore(), PatternAccuracyStore)

    def test_null_store(self):
        store = NullAccuracyStore()
        store.record("Hammer", True)
        assert store.get("Hammer").accuracy == 0.5

    def test_in_memory_store(self):
        store = InMemoryAccuracyStore()
        store.record("Doji", False)
        assert store.get("Doji").accuracy == 0.0
        assert set(store.snapshot()) == {"Doji"}
        store.clear()
        assert store.get("Doji").occurrences == 0

    def test_json_store_round_trip(self, tmp_path):
        path = tmp_path / "accuracy.json"
        store = JsonFileAccuracyStore(path)
        store.record("Hammer", True)
        store.record("Hammer", False)

        data = json.loads(path.read_text())
        assert data["patterns"]["Hammer"]["occurrences"] == 2

        reloaded = JsonFileAccuracyStore(path)
        assert reloaded.get("Hammer").correct == 1
        assert reloaded.get("Hammer").accuracy == 0.5

    def test_json_store_ignores_corrupt_file(self, tmp_path):
        path = tmp_path / "accuracy.json"
        path.write_text("{not json")
        store = JsonFileAccuracyStore(path)
        assert store.snapshot() == {}

    @pytest.mark.parametrize("content", [
        "[1, 2]",
        '"patterns"',
        '{"patterns": [1, 2]}',
    ])
    def test_json_store_ignores_unexpected_layout(self, tmp_path, content):
        path = tmp_path / "accuracy.json"
        path.write_text(content)
        store = JsonFileAccuracyStore(path)
        assert store.snapshot() == {}

    def test_json_store_skips_malformed_entries(self, tmp_path):
        path = tmp_path / "accuracy.json"
        path.write_text(json.dumps({"patterns": {
            "Hammer": {"occurrences": 4, "correct": 3},
            "Doji": [1, 2],
            "Engulfing": {"occurrences": "many"},
        }}))
        store = JsonFileAccuracyStore(path)
        assert set(store.snapshot()) == {"Hammer"}
        assert store.get("Hammer").accuracy == 0.75
