"""Candle Extraction.

Segments candles from a rasterized chart by scanning pixel columns
right-to-left and measures each candle's silhouette, color and body.
"""

import logging
import math
from typing import Optional

import numpy as np

from candlelens.errors import NoCandlesDetectedError, NoValidCandlesError
from candlelens.extraction.config import DEFAULT_EXTRACTION_CONFIG, ExtractionConfig
from candlelens.extraction.models import Candle, ExtractionResult
from candlelens.imaging.models import PixelBuffer

logger = logging.getLogger(__name__)


class CandleExtractor:
    """Reconstructs a chronological candle series from a PixelBuffer."""

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or DEFAULT_EXTRACTION_CONFIG

    def extract(self, buffer: PixelBuffer) -> ExtractionResult:
        """Run the full extraction.

        Args:
            buffer: Decoded chart image.

        Returns:
            ExtractionResult with candles ordered oldest first.

        Raises:
            NoCandlesDetectedError: No column run qualified as a candle.
            NoValidCandlesError: Every candle was discarded by validation.
        """
        chart_height = self.chart_height(buffer.height)
        rgb = buffer.rgb[:chart_height]
        bullish = self.config.bullish.mask(rgb)
        bearish = self.config.bearish.mask(rgb)

        runs = self.find_runs(bullish | bearish)
        if not runs:
            raise NoCandlesDetectedError()

        candles: list[Candle] = []
        dropped = 0
        for x_start, x_end in runs:
            candle = self._measure(bullish, bearish, x_start, x_end, chart_height)
            if candle.total_height <= 0 or not candle.is_consistent:
                dropped += 1
                logger.debug(
                    f"Dropped candle at columns {x_start}-{x_end}",
                    extra={"extra_data": {"total_height": candle.total_height}},
                )
                continue
            candles.append(candle)

        # Runs were collected newest (rightmost) first
        candles.reverse()

        if not candles:
            raise NoValidCandlesError(dropped=dropped)

        logger.info(
            f"Extracted {len(candles)} candles",
            extra={"candles": len(candles), "dropped": dropped},
        )
        return ExtractionResult(
            candles=tuple(candles),
            dropped=dropped,
            chart_height=chart_height,
            runs_found=len(runs),
        )

    def chart_height(self, image_height: int) -> int:
        """Number of rows treated as plot area."""
        rows = math.ceil(image_height * self.config.chart_area_ratio)
        return max(1, min(image_height, rows))

    def find_runs(self, matches: np.ndarray) -> list[tuple[int, int]]:
        """Find candle column runs, scanning from the right edge.

        Args:
            matches: Boolean (rows, cols) mask of candle-colored pixels.

        Returns:
            (x_start, x_end) pairs, newest (rightmost) first.
        """
        column_hit = matches.any(axis=0)
        runs: list[tuple[int, int]] = []
        run_end: Optional[int] = None
        run_start = 0

        for x in range(len(column_hit) - 1, -1, -1):
            if column_hit[x]:
                if run_end is None:
                    run_end = x
                run_start = x
                continue
            if run_end is not None:
                if run_end - run_start >= self.config.min_candle_width:
                    runs.append((run_start, run_end))
                    if len(runs) >= self.config.max_candles:
                        return runs
                run_end = None

        # A run touching the left edge has no terminating column
        if run_end is not None and run_end - run_start >= self.config.min_candle_width:
            runs.append((run_start, run_end))

        return runs

    def _measure(
        self,
        bullish: np.ndarray,
        bearish: np.ndarray,
        x_start: int,
        x_end: int,
        chart_height: int,
    ) -> Candle:
        mid = (x_start + x_end + 1) // 2
        column = bullish[:, mid] | bearish[:, mid]
        rows = np.flatnonzero(column)
        high_row = int(rows[0])
        low_row = int(rows[-1])

        green = int(bullish[high_row:low_row + 1, mid].sum())
        red = int(bearish[high_row:low_row + 1, mid].sum())
        is_green = green > red

        own = bullish if is_green else bearish
        body_top, body_bottom = self._find_body(own, x_start, x_end, mid, high_row, low_row)

        return Candle(
            x_start=x_start,
            x_end=x_end,
            high_row=high_row,
            low_row=low_row,
            body_top=body_top,
            body_bottom=body_bottom,
            is_green=is_green,
            baseline=chart_height,
        )

    def _find_body(
        self,
        own: np.ndarray,
        x_start: int,
        x_end: int,
        mid: int,
        high_row: int,
        low_row: int,
    ) -> tuple[int, int]:
        """Locate the first contiguous run of body rows.

        A body row is own-colored at the representative column and filled
        across at least ``body_width_ratio`` of the candle's columns. The
        first gap ends the body.
        """
        span = own[high_row:low_row + 1, x_start:x_end + 1]
        fill = span.mean(axis=1)
        at_mid = own[high_row:low_row + 1, mid]
        is_body = at_mid & (fill >= self.config.body_width_ratio)

        hits = np.flatnonzero(is_body)
        if len(hits) == 0:
            first_own = int(np.flatnonzero(at_mid)[0]) + high_row
            return first_own, first_own

        start = int(hits[0])
        end = start
        while end + 1 < len(is_body) and is_body[end + 1]:
            end += 1
        return start + high_row, end + high_row
