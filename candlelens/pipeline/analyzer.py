"""Chart Analyzer — end-to-end pipeline.

Wires ImageSampler -> CandleExtractor -> {PatternDetector, IndicatorSuite}
-> SignalFusion, reporting progress through an optional callback and
binding a run ID to every log line emitted during the run.
"""

import asyncio
import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

import numpy as np

from candlelens.errors import AnalysisTimeoutError, ChartAnalysisError
from candlelens.extraction.extractor import CandleExtractor
from candlelens.fusion.accuracy import PatternAccuracyStore
from candlelens.fusion.engine import SignalFusion
from candlelens.imaging.models import PixelBuffer
from candlelens.imaging.sampler import ImageSampler, ImageSource
from candlelens.indicators.suite import IndicatorSuite
from candlelens.logging_config import AnalysisContext, PerformanceTimer, log_performance
from candlelens.patterns.detector import PatternDetector
from candlelens.pipeline.config import DEFAULT_ANALYZER_CONFIG, AnalyzerConfig
from candlelens.pipeline.events import ProgressCallback, ProgressEvent, Stage
from candlelens.pipeline.models import AnalysisResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChartAnalyzer:
    """Analyzes a candlestick chart image into a Recommendation.

    Args:
        config: Versioned configuration for every stage.
        accuracy_store: Pattern accuracy collaborator for fusion.
        progress: Callback receiving a ProgressEvent after each stage.

    Example:
        analyzer = ChartAnalyzer()
        result = analyzer.analyze_file("chart.png")
        print(result.recommendation.action, result.recommendation.confidence)
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        accuracy_store: Optional[PatternAccuracyStore] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.config = config or DEFAULT_ANALYZER_CONFIG
        self.progress = progress
        self.sampler = ImageSampler(self.config.sampler)
        self.extractor = CandleExtractor(self.config.extraction)
        self.detector = PatternDetector(self.config.patterns)
        self.indicators = IndicatorSuite(self.config.indicators)
        self.fusion = SignalFusion(self.config.fusion, accuracy_store)

    # ── Entry points ─────────────────────────────────────────────────

    def analyze(self, source: Union[ImageSource, np.ndarray]) -> AnalysisResult:
        """Analyze bytes, a path, a Pillow image or a pixel array.

        Raises:
            ImageDecodeError: The image cannot be decoded.
            ExtractionError: No usable candles were found.
            AnalysisTimeoutError: The run exceeded ``timeout_seconds``.
        """
        if isinstance(source, np.ndarray):
            return self._with_timeout(lambda: self._run(lambda: self.sampler.from_array(source)))
        return self._with_timeout(lambda: self._run(lambda: self.sampler.load(source)))

    def analyze_bytes(self, data: bytes) -> AnalysisResult:
        return self._with_timeout(lambda: self._run(lambda: self.sampler.from_bytes(data)))

    def analyze_file(self, path: Union[str, Path]) -> AnalysisResult:
        return self._with_timeout(lambda: self._run(lambda: self.sampler.from_path(path)))

    def analyze_buffer(self, buffer: PixelBuffer) -> AnalysisResult:
        """Analyze an already-decoded PixelBuffer."""
        return self._with_timeout(lambda: self._run(lambda: buffer))

    async def analyze_file_async(self, path: Union[str, Path]) -> AnalysisResult:
        """Decode and analyze a file without blocking the event loop."""
        return await asyncio.to_thread(self.analyze_file, path)

    # ── Pipeline ─────────────────────────────────────────────────────

    @log_performance(logger_name=__name__)
    def _run(self, load: Callable[[], PixelBuffer]) -> AnalysisResult:
        with AnalysisContext() as ctx:
            try:
                return self._stages(load, ctx)
            except ChartAnalysisError as exc:
                logger.warning(
                    f"Analysis aborted: {exc.message}",
                    extra={"error_code": exc.error_code.value},
                )
                raise

    def _stages(self, load: Callable[[], PixelBuffer], ctx: AnalysisContext) -> AnalysisResult:
        with PerformanceTimer(Stage.LOAD.value):
            buffer = load()
        self._emit(Stage.LOAD, f"Loaded {buffer.width}x{buffer.height} image")

        with PerformanceTimer(Stage.EXTRACT.value):
            extraction = self.extractor.extract(buffer)
        candles = extraction.candles
        ctx.bind(candles=len(candles))
        self._emit(Stage.EXTRACT, f"Extracted {len(candles)} candles")

        with PerformanceTimer(Stage.PATTERNS.value):
            patterns = tuple(self.detector.detect_all(candles))
        self._emit(Stage.PATTERNS, f"Detected {len(patterns)} patterns")

        with PerformanceTimer(Stage.INDICATORS.value):
            indicators = self.indicators.run(
                candles,
                image_height=buffer.height,
                parallel=self.config.parallel_indicators,
            )
        self._emit(Stage.INDICATORS, "Computed technical indicators")

        with PerformanceTimer(Stage.FUSION.value):
            recommendation = self.fusion.fuse(patterns, indicators)
            if self.config.record_outcomes:
                self.fusion.record_outcomes(patterns, recommendation)
        self._emit(Stage.FUSION, f"Recommendation: {recommendation.action.value}")

        logger.info(
            f"Analysis complete: {recommendation.action.value} ({recommendation.confidence}%)",
            extra={
                "duration_ms": round(ctx.elapsed_ms, 2),
                "candles": len(candles),
                "dropped": extraction.dropped,
            },
        )
        return AnalysisResult(
            candles=candles,
            patterns=patterns,
            indicators=indicators,
            recommendation=recommendation,
            image_size=(buffer.width, buffer.height),
            scale=buffer.scale,
            dropped_candles=extraction.dropped,
            run_id=ctx.run_id,
            config_version=self.config.version,
        )

    def _emit(self, stage: Stage, message: str) -> None:
        if self.progress is not None:
            self.progress(ProgressEvent.for_stage(stage, message))

    def _with_timeout(self, fn: Callable[[], T]) -> T:
        timeout = self.config.timeout_seconds
        if timeout is None:
            return fn()

        # Run in a single worker so the caller can stop waiting
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(contextvars.copy_context().run, fn)
            return future.result(timeout=timeout)
        except FuturesTimeoutError:
            error = AnalysisTimeoutError(timeout)
            logger.warning(
                f"Analysis aborted: {error.message}",
                extra={"error_code": error.error_code.value},
            )
            raise error from None
        finally:
            executor.shutdown(wait=False)
