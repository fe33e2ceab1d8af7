"""Data models for a complete analysis run."""

from dataclasses import dataclass
from typing import Any

from candlelens.extraction.models import Candle
from candlelens.fusion.models import Recommendation
from candlelens.indicators.models import IndicatorSuiteResult
from candlelens.patterns.models import Pattern


@dataclass(frozen=True)
class AnalysisResult:
    """Everything a presentation layer needs to render one analysis.

    Attributes:
        candles: Chronological candles.
        patterns: Matched patterns, strongest first.
        indicators: Indicator results.
        recommendation: Final decision.
        image_size: (width, height) of the analyzed pixel buffer.
        scale: Downscale factor applied to the source image.
        dropped_candles: Candles discarded during extraction.
        run_id: ID bound to the run's log entries.
        config_version: Version of the AnalyzerConfig used.
    """

    candles: tuple[Candle, ...]
    patterns: tuple[Pattern, ...]
    indicators: IndicatorSuiteResult
    recommendation: Recommendation
    image_size: tuple[int, int] = (0, 0)
    scale: float = 1.0
    dropped_candles: int = 0
    run_id: str = ""
    config_version: str = ""

    @property
    def action(self) -> str:
        return self.recommendation.action.value

    @property
    def confidence(self) -> int:
        return self.recommendation.confidence

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return {
            "run_id": self.run_id,
            "config_version": self.config_version,
            "image_size": list(self.image_size),
            "scale": round(self.scale, 4),
            "dropped_candles": self.dropped_candles,
            "candle_count": len(self.candles),
            "candles": [c.to_dict() for c in self.candles],
            "patterns": [p.to_dict() for p in self.patterns],
            "indicators": self.indicators.to_dict(),
            "recommendation": self.recommendation.to_dict(),
        }
