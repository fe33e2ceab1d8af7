"""Logging Setup.

One-call configuration for analysis logging. Every line carries the
run it belongs to and, for timed work, the pipeline stage and its
duration, either as JSON keys or as a console tag.
"""

import json
import logging
import os
import sys
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional

from candlelens.logging_config.config import DEFAULT_LOGGING_CONFIG, LogFormat, LoggingConfig, LogLevel
from candlelens.logging_config.context import get_context_dict
from candlelens.logging_config.performance import set_slow_threshold

# Pipeline attributes promoted from ``extra`` to top-level keys
RUN_FIELDS = ("stage", "duration_ms", "candles", "dropped", "error_code")


def run_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Bound run context plus the pipeline fields set on the record."""
    fields = get_context_dict()
    for key in RUN_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            fields[key] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: ``ts``, ``level``, ``logger``, ``msg``, then ``run_id`` and any
    bound run fields, ``stage`` / ``duration_ms`` for timed stages,
    ``error_code`` for aborted runs, ``data`` for ad-hoc payloads and
    ``source`` for warnings and errors.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(run_fields(record))

        data = getattr(record, "extra_data", None)
        if data is not None:
            entry["data"] = data

        if record.levelno >= logging.WARNING:
            entry["source"] = f"{record.module}.{record.funcName}:{record.lineno}"

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Readable single-line format: ``time LEVEL [run stage] logger: msg (ms) k=v``."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        fields = run_fields(record)
        run_id = fields.pop("run_id", "")
        stage = fields.pop("stage", "")
        duration = fields.pop("duration_ms", None)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S.%f")[:-3]
        tag = " ".join(part for part in (run_id[:8], stage) if part)
        line = f"{timestamp} {level} "
        if tag:
            line += f"[{tag}] "
        line += f"{record.name}: {record.getMessage()}"
        if duration is not None:
            line += f" ({duration:.1f}ms)"
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(config: Optional[LoggingConfig] = None) -> LoggingConfig:
    """Configure logging for candlelens.

    Sets up the root logger with the JSON or console formatter, the log
    level and the slow-stage threshold used by stage timers.

    Args:
        config: Logging configuration. Uses defaults if not provided.
                Level can be overridden with CANDLELENS_LOG_LEVEL,
                format with CANDLELENS_LOG_FORMAT.

    Returns:
        The effective configuration after environment overrides.
    """
    config = config or DEFAULT_LOGGING_CONFIG

    env_level = os.environ.get("CANDLELENS_LOG_LEVEL", "").upper()
    if env_level and env_level in LogLevel.__members__:
        config = replace(config, level=LogLevel(env_level))

    env_format = os.environ.get("CANDLELENS_LOG_FORMAT", "").lower()
    if env_format and env_format in [f.value for f in LogFormat]:
        config = replace(config, format=LogFormat(env_format))

    if config.format == LogFormat.JSON:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = ConsoleFormatter(use_color=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.level.value))
    set_slow_threshold(config.slow_threshold_ms)

    # Pillow logs every plugin it tries at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)

    return config
