"""Structured Logging & Run Tracing.

Provides JSON/console logging, run ID propagation, and stage timing
for the analysis pipeline.
"""

from candlelens.logging_config.config import (
    DEFAULT_LOGGING_CONFIG,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from candlelens.logging_config.context import AnalysisContext, generate_run_id, get_run_id
from candlelens.logging_config.performance import (
    PerformanceTimer,
    get_slow_threshold,
    log_performance,
    set_slow_threshold,
)
from candlelens.logging_config.setup import (
    RUN_FIELDS,
    ConsoleFormatter,
    StructuredFormatter,
    configure_logging,
    run_fields,
)

__all__ = [
    "DEFAULT_LOGGING_CONFIG",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "AnalysisContext",
    "generate_run_id",
    "get_run_id",
    "PerformanceTimer",
    "get_slow_threshold",
    "log_performance",
    "set_slow_threshold",
    "RUN_FIELDS",
    "ConsoleFormatter",
    "StructuredFormatter",
    "configure_logging",
    "run_fields",
]
