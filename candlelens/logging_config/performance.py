"""Performance Logging.

Decorator and context manager for timing pipeline stages and logging
slow ones. The slow threshold defaults to the value installed by
``configure_logging``.
"""

import functools
import logging
import time
from typing import Any, Callable, Optional

from candlelens.logging_config.config import DEFAULT_LOGGING_CONFIG

logger = logging.getLogger(__name__)

_slow_threshold_ms = DEFAULT_LOGGING_CONFIG.slow_threshold_ms


def set_slow_threshold(threshold_ms: float) -> None:
    """Set the default threshold above which timed work logs at WARNING."""
    global _slow_threshold_ms
    _slow_threshold_ms = threshold_ms


def get_slow_threshold() -> float:
    return _slow_threshold_ms


def log_performance(
    threshold_ms: Optional[float] = None,
    logger_name: Optional[str] = None,
) -> Callable:
    """Decorator that logs function execution time.

    Logs all calls at DEBUG level and slow calls (above threshold) at WARNING.

    Example:
        @log_performance(threshold_ms=250)
        def extract(self, buffer):
            ...
    """

    def decorator(func: Callable) -> Callable:
        _logger = logging.getLogger(logger_name or func.__module__)
        func_name = f"{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            threshold = _slow_threshold_ms if threshold_ms is None else threshold_ms
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start) * 1000
                _logger.debug(
                    f"{func_name} failed after {duration_ms:.1f}ms: {type(exc).__name__}",
                    extra={"duration_ms": round(duration_ms, 2)},
                )
                raise
            finally:
                duration_ms = (time.perf_counter() - start) * 1000
                extra = {"duration_ms": round(duration_ms, 2)}
                if duration_ms >= threshold:
                    _logger.warning(
                        f"Slow operation: {func_name} took {duration_ms:.1f}ms",
                        extra=extra,
                    )
                else:
                    _logger.debug(
                        f"{func_name} completed in {duration_ms:.1f}ms",
                        extra=extra,
                    )
        return wrapper

    return decorator


class PerformanceTimer:
    """Context manager timing one pipeline stage.

    Example:
        with PerformanceTimer("indicators") as timer:
            suite.run(candles, height)
        print(f"Indicators took {timer.duration_ms:.1f}ms")
    """

    def __init__(self, operation_name: str, threshold_ms: Optional[float] = None):
        self.operation_name = operation_name
        self.threshold_ms = _slow_threshold_ms if threshold_ms is None else threshold_ms
        self.start_time: float = 0
        self.duration_ms: float = 0

    def __enter__(self) -> "PerformanceTimer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000
        extra = {"duration_ms": round(self.duration_ms, 2), "stage": self.operation_name}

        if exc_type is not None:
            logger.debug(
                f"{self.operation_name} failed after {self.duration_ms:.1f}ms: {exc_type.__name__}",
                extra=extra,
            )
        elif self.duration_ms >= self.threshold_ms:
            logger.warning(
                f"Slow operation: {self.operation_name} took {self.duration_ms:.1f}ms",
                extra=extra,
            )
        else:
            logger.debug(
                f"{self.operation_name} completed in {self.duration_ms:.1f}ms",
                extra=extra,
            )
