"""Centralized runtime settings for candlelens.

Uses pydantic-settings to load from environment variables (prefixed
CANDLELENS_). Components never read these directly; the settings are
turned into an AnalyzerConfig and passed in by value.
"""

from dataclasses import replace
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

from candlelens.fusion.accuracy import (
    JsonFileAccuracyStore,
    NullAccuracyStore,
    PatternAccuracyStore,
)
from candlelens.logging_config import LogFormat, LoggingConfig, LogLevel
from candlelens.pipeline.config import AnalyzerConfig


class Settings(BaseSettings):
    """candlelens settings loaded from environment variables."""

    # --- Logging ---
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.JSON
    slow_threshold_ms: float = 1000.0

    # --- Image sampling ---
    max_image_width: int = 1200
    max_image_height: int = 800
    max_input_bytes: int = 20 * 1024 * 1024

    # --- Pipeline ---
    parallel_indicators: bool = False
    timeout_seconds: Optional[float] = None

    # --- Pattern accuracy ---
    accuracy_store_path: Optional[str] = None  # JSON file; unset keeps the neutral store
    record_outcomes: bool = False

    model_config = {
        "env_prefix": "CANDLELENS_",
        "env_file": ".env",
        "extra": "ignore",
    }

    def analyzer_config(self, base: Optional[AnalyzerConfig] = None) -> AnalyzerConfig:
        """Build an AnalyzerConfig with these settings applied."""
        base = base or AnalyzerConfig()
        sampler = replace(
            base.sampler,
            max_width=self.max_image_width,
            max_height=self.max_image_height,
            max_input_bytes=self.max_input_bytes,
        )
        return replace(
            base,
            sampler=sampler,
            parallel_indicators=self.parallel_indicators,
            timeout_seconds=self.timeout_seconds,
            record_outcomes=self.record_outcomes,
        )

    def logging_config(self) -> LoggingConfig:
        return LoggingConfig(
            level=self.log_level,
            format=self.log_format,
            slow_threshold_ms=self.slow_threshold_ms,
        )

    def accuracy_store(self) -> PatternAccuracyStore:
        if self.accuracy_store_path:
            return JsonFileAccuracyStore(self.accuracy_store_path)
        return NullAccuracyStore()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
