"""Tests for environment settings and the command-line entry point."""

import json
import logging
import struct
import zlib

import pytest

from candlelens.cli import EXIT_ANALYSIS_ERROR, format_summary, main, parse_args
from candlelens.fusion import JsonFileAccuracyStore, NullAccuracyStore
from candlelens.logging_config import LogFormat, LogLevel, get_slow_threshold, set_slow_threshold
from candlelens.pipeline import AnalyzerConfig, ChartAnalyzer
from candlelens.settings import Settings, get_settings


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Isolate settings from the process environment and any .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("LOG_LEVEL", "LOG_FORMAT", "PARALLEL_INDICATORS", "TIMEOUT_SECONDS",
                 "ACCURACY_STORE_PATH", "MAX_IMAGE_WIDTH", "RECORD_OUTCOMES"):
        monkeypatch.delenv(f"CANDLELENS_{name}", raising=False)
    get_settings.cache_clear()
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    threshold = get_slow_threshold()
    yield monkeypatch
    get_settings.cache_clear()
    root.handlers[:] = handlers
    root.setLevel(level)
    set_slow_threshold(threshold)


# ── Settings ──


class TestSettings:
    def test_defaults(self, clean_settings):
        settings = Settings()
        assert settings.log_level == LogLevel.INFO
        assert settings.log_format == LogFormat.JSON
        assert settings.max_image_width == 1200
        assert settings.parallel_indicators is False
        assert settings.timeout_seconds is None

    def test_env_prefix(self, clean_settings):
        clean_settings.setenv("CANDLELENS_LOG_LEVEL", "DEBUG")
        clean_settings.setenv("CANDLELENS_PARALLEL_INDICATORS", "true")
        clean_settings.setenv("CANDLELENS_TIMEOUT_SECONDS", "2.5")
        clean_settings.setenv("CANDLELENS_MAX_IMAGE_WIDTH", "640")
        settings = Settings()
        assert settings.log_level == LogLevel.DEBUG
        assert settings.parallel_indicators is True
        assert settings.timeout_seconds == 2.5
        assert settings.max_image_width == 640

    def test_analyzer_config(self, clean_settings):
        config = Settings(max_image_width=640, parallel_indicators=True).analyzer_config()
        assert isinstance(config, AnalyzerConfig)
        assert config.sampler.max_width == 640
        assert config.sampler.max_height == 800
        assert config.parallel_indicators is True
        assert config.record_outcomes is False
        assert Settings(record_outcomes=True).analyzer_config().record_outcomes is True

    def test_logging_config(self, clean_settings):
        config = Settings(log_format=LogFormat.CONSOLE, slow_threshold_ms=250).logging_config()
        assert config.format == LogFormat.CONSOLE
        assert config.slow_threshold_ms == 250

    def test_accuracy_store(self, clean_settings, tmp_path):
        assert isinstance(Settings().accuracy_store(), NullAccuracyStore)
        path = tmp_path / "acc.json"
        store = Settings(accuracy_store_path=str(path)).accuracy_store()
        assert isinstance(store, JsonFileAccuracyStore)
        assert store.path == path

    def test_get_settings_cached(self, clean_settings):
        assert get_settings() is get_settings()


# ── CLI ──


class TestCli:
    def test_parse_args(self):
        args = parse_args(["analyze", "chart.png", "--json", "--timeout", "3"])
        assert args.command == "analyze"
        assert args.image == "chart.png"
        assert args.json is True
        assert args.timeout == 3.0
        assert args.parallel is False

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_summary(self, uptrend_chart):
        text = format_summary(ChartAnalyzer().analyze(uptrend_chart))
        assert text.startswith("Action:")
        assert "Candles:       60 (dropped 0)" in text

    def test_analyze_json(self, clean_settings, tmp_path, uptrend_png, capsys):
        path = tmp_path / "chart.png"
        path.write_bytes(uptrend_png)
        assert main(["analyze", str(path), "--json", "--parallel"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["candle_count"] == 60
        assert payload["recommendation"]["action"] in ("BUY", "SELL", "WAIT")

    def test_analyze_summary(self, clean_settings, tmp_path, uptrend_png, capsys):
        path = tmp_path / "chart.png"
        path.write_bytes(uptrend_png)
        assert main(["analyze", str(path), "--log-level", "WARNING"]) == 0
        assert "Confidence:" in capsys.readouterr().out

    def test_missing_file(self, clean_settings, tmp_path, capsys):
        code = main(["analyze", str(tmp_path / "missing.png")])
        assert code == EXIT_ANALYSIS_ERROR
        assert "could not be loaded" in capsys.readouterr().err

    def test_blank_image(self, clean_settings, tmp_path, blank_chart, to_png, capsys):
        path = tmp_path / "blank.png"
        path.write_bytes(to_png(blank_chart))
        assert main(["analyze", str(path)]) == EXIT_ANALYSIS_ERROR
        assert "No candles detected" in capsys.readouterr().err

    def test_oversized_image_header(self, clean_settings, tmp_path, capsys):
        ihdr = struct.pack(">IIBBBBB", 30000, 30000, 8, 2, 0, 0, 0)
        chunks = b"".join(
            struct.pack(">I", len(payload)) + kind + payload
            + struct.pack(">I", zlib.crc32(kind + payload) & 0xFFFFFFFF)
            for kind, payload in ((b"IHDR", ihdr), (b"IDAT", b""), (b"IEND", b""))
        )
        path = tmp_path / "huge.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + chunks)
        assert main(["analyze", str(path)]) == EXIT_ANALYSIS_ERROR
        assert "could not be loaded" in capsys.readouterr().err

    def test_record_updates_accuracy_file(self, clean_settings, tmp_path, uptrend_png):
        image = tmp_path / "chart.png"
        image.write_bytes(uptrend_png)
        store_path = tmp_path / "accuracy.json"
        clean_settings.setenv("CANDLELENS_ACCURACY_STORE_PATH", str(store_path))

        assert main(["analyze", str(image), "--json"]) == 0
        assert not store_path.exists()

        assert main(["analyze", str(image), "--json", "--record"]) == 0
        patterns = json.loads(store_path.read_text())["patterns"]
        assert patterns
        assert all(entry["occurrences"] >= 1 for entry in patterns.values())

    def test_malformed_accuracy_file(self, clean_settings, tmp_path, uptrend_png):
        image = tmp_path / "chart.png"
        image.write_bytes(uptrend_png)
        store_path = tmp_path / "accuracy.json"
        store_path.write_text("[1, 2]")
        clean_settings.setenv("CANDLELENS_ACCURACY_STORE_PATH", str(store_path))
        assert main(["analyze", str(image), "--json"]) == 0
