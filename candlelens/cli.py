"""Command-line entry point.

Usage:
    candlelens analyze chart.png
    candlelens analyze chart.png --json
    candlelens analyze chart.png --parallel --log-level DEBUG
    CANDLELENS_ACCURACY_STORE_PATH=acc.json candlelens analyze chart.png --record
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from candlelens.errors import ChartAnalysisError
from candlelens.logging_config import LogLevel, configure_logging
from candlelens.pipeline import AnalysisResult, ChartAnalyzer
from candlelens.settings import get_settings

logger = logging.getLogger("candlelens.cli")

EXIT_ANALYSIS_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="candlelens",
        description="Candlestick chart image analyzer",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a chart image file")
    analyze.add_argument("image", type=str, help="Path to the chart image")
    analyze.add_argument(
        "--json", action="store_true", default=False,
        help="Print the full analysis as JSON",
    )
    analyze.add_argument(
        "--parallel", action="store_true", default=False,
        help="Evaluate indicators on a thread pool",
    )
    analyze.add_argument(
        "--timeout", type=float, default=None,
        help="Abort the analysis after this many seconds",
    )
    analyze.add_argument(
        "--record", action="store_true", default=False,
        help="Record detected patterns in the accuracy store",
    )
    analyze.add_argument(
        "--log-level", type=str, default=None,
        choices=[lv.value for lv in LogLevel],
        help="Logging level (default: from CANDLELENS_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def format_summary(result: AnalysisResult) -> str:
    """Human-readable summary of a recommendation."""
    rec = result.recommendation
    lines = [
        f"Action:        {rec.action.value}",
        f"Confidence:    {rec.confidence}%",
        f"Profit target: {rec.profit_target_pct:.1f}%",
        f"Risk:          {rec.risk_pct:.1f}%",
        f"Candles:       {len(result.candles)} (dropped {result.dropped_candles})",
    ]
    if result.patterns:
        lines.append("Patterns:      " + ", ".join(p.name for p in result.patterns))
    if rec.factors:
        lines.append("Factors:")
        for factor in rec.factors:
            lines.append(f"  {factor.impact:+6.2f}  {factor.label}")
    if rec.reasoning:
        lines.append("Reasoning:")
        for reason in rec.reasoning:
            lines.append(f"  - {reason}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    log_config = settings.logging_config()
    if args.log_level:
        log_config = replace(log_config, level=LogLevel(args.log_level))
    configure_logging(log_config)

    config = settings.analyzer_config()
    if args.parallel:
        config = replace(config, parallel_indicators=True)
    if args.timeout is not None:
        config = replace(config, timeout_seconds=args.timeout)
    if args.record:
        config = replace(config, record_outcomes=True)

    analyzer = ChartAnalyzer(config, accuracy_store=settings.accuracy_store())
    try:
        result = analyzer.analyze_file(args.image)
    except ChartAnalysisError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return EXIT_ANALYSIS_ERROR

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_summary(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
