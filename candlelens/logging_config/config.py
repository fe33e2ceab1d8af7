"""Logging Configuration.

Log level, output format and the slow-stage threshold.
"""

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    """Log level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging configuration.

    Attributes:
        slow_threshold_ms: Timed stages slower than this log at WARNING.
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    slow_threshold_ms: float = 1000.0


DEFAULT_LOGGING_CONFIG = LoggingConfig()
