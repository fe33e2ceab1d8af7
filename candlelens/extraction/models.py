"""Data models for candle extraction."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Candle:
    """One bar reconstructed from a vertical pixel run.

    Geometry is kept in pixel rows (row 0 = top of the image, so a
    smaller row is a higher price). Prices are ``baseline - row``, which
    makes larger values higher and lets pattern and indicator logic use
    ordinary price comparisons.
    """

    x_start: int
    x_end: int
    high_row: float
    low_row: float
    body_top: float
    body_bottom: float
    is_green: bool
    baseline: float

    @classmethod
    def from_ohlc(
        cls,
        open_: float,
        high: float,
        low: float,
        close: float,
        baseline: float = 1000.0,
        x: int = 0,
        width: int = 4,
    ) -> "Candle":
        """Build a candle from price values (close == open counts as red)."""
        return cls(
            x_start=x,
            x_end=x + width,
            high_row=baseline - high,
            low_row=baseline - low,
            body_top=baseline - max(open_, close),
            body_bottom=baseline - min(open_, close),
            is_green=close > open_,
            baseline=baseline,
        )

    @property
    def is_red(self) -> bool:
        return not self.is_green

    # -- price view ------------------------------------------------------

    @property
    def high(self) -> float:
        return self.baseline - self.high_row

    @property
    def low(self) -> float:
        return self.baseline - self.low_row

    @property
    def open(self) -> float:
        row = self.body_bottom if self.is_green else self.body_top
        return self.baseline - row

    @property
    def close(self) -> float:
        row = self.body_top if self.is_green else self.body_bottom
        return self.baseline - row

    @property
    def body_mid(self) -> float:
        return (self.open + self.close) / 2

    # -- geometry --------------------------------------------------------

    @property
    def total_height(self) -> float:
        return self.low_row - self.high_row

    @property
    def body_height(self) -> float:
        return max(0.0, self.body_bottom - self.body_top)

    @property
    def upper_wick(self) -> float:
        return max(0.0, self.body_top - self.high_row)

    @property
    def lower_wick(self) -> float:
        return max(0.0, self.low_row - self.body_bottom)

    @property
    def body_ratio(self) -> float:
        return self.body_height / max(1.0, self.total_height)

    @property
    def upper_wick_ratio(self) -> float:
        return self.upper_wick / max(1.0, self.total_height)

    @property
    def lower_wick_ratio(self) -> float:
        return self.lower_wick / max(1.0, self.total_height)

    @property
    def is_consistent(self) -> bool:
        return self.high_row <= self.body_top <= self.body_bottom <= self.low_row

    def to_dict(self) -> dict:
        return {
            "x_start": self.x_start,
            "x_end": self.x_end,
            "high_row": self.high_row,
            "low_row": self.low_row,
            "body_top": self.body_top,
            "body_bottom": self.body_bottom,
            "color": "green" if self.is_green else "red",
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "body_ratio": round(self.body_ratio, 4),
            "upper_wick_ratio": round(self.upper_wick_ratio, 4),
            "lower_wick_ratio": round(self.lower_wick_ratio, 4),
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Chronological candle series plus extraction bookkeeping.

    Attributes:
        candles: Candles ordered oldest first.
        dropped: Candles discarded for zero height or inconsistent bounds.
        chart_height: Number of pixel rows scanned (also the price baseline).
        runs_found: Column runs that qualified as candles before filtering.
    """

    candles: tuple[Candle, ...]
    dropped: int = 0
    chart_height: int = 0
    runs_found: int = 0

    def to_dict(self) -> dict:
        return {
            "candles": [c.to_dict() for c in self.candles],
            "dropped": self.dropped,
            "chart_height": self.chart_height,
            "runs_found": self.runs_found,
        }
