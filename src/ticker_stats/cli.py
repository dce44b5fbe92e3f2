"""Command line interface for ticker-stats.

Usage:
    ticker-stats -t AAPL,MSFT max
    ticker-stats -t AAPL -f 2024-01-02 sma --window 5
    ticker-stats -t AAPL,MSFT,GOOG sum
"""

import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Optional, Sequence

from pydantic import ValidationError

from src.ticker_stats.config import Settings, get_settings
from src.ticker_stats.data import create_fetcher
from src.ticker_stats.engine import Operation, Orchestrator
from src.ticker_stats.reporting import (
    SUMMARY_HEADER,
    format_summary_line,
    render_differences,
    render_prices,
    render_sma,
)
from src.ticker_stats.utils import (
    ConfigurationError,
    EmptySummaryError,
    InsufficientDataError,
    setup_logging,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


class ExitCode(IntEnum):
    """Process exit status."""

    OK = 0
    UNKNOWN_COMMAND = 1
    BAD_ARGUMENT = 2
    INSUFFICIENT_DATA = 3
    DATA_SOURCE_ERROR = 4


def start_date(value: str) -> datetime:
    """Parse a YYYY-MM-DD start date as UTC midnight, rejecting future dates."""
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Can not parse <START DATE> to a valid date. {e}"
        ) from e

    if parsed.date() > datetime.now(timezone.utc).date():
        raise argparse.ArgumentTypeError("Start date is in the future.")
    return parsed


def ticker_list(value: str) -> list[str]:
    """Split a comma separated list of ticker symbols."""
    tickers = [ticker.strip() for ticker in value.split(",") if ticker.strip()]
    if not tickers:
        raise argparse.ArgumentTypeError("At least one ticker symbol is required.")
    return tickers


def window_size(value: str) -> int:
    """Parse the sliding window size, which must be a positive number of days."""
    try:
        window = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Can not parse parameter value of window to a number. {e}"
        ) from e
    if window <= 0:
        raise argparse.ArgumentTypeError("Window size must be at least 1 day.")
    return window


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticker-stats",
        description="Read stock quotes from a given start date and compute statistics",
    )
    parser.add_argument(
        "-t",
        "--ticker",
        dest="tickers",
        metavar="SYMBOL",
        type=ticker_list,
        required=True,
        help="comma separated ticker symbols of the stock papers",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="start",
        metavar="START DATE",
        type=start_date,
        help="start date (YYYY-MM-DD) from which to collect the data. "
        "Defaults to the configured lookback (30 days).",
    )
    parser.add_argument(
        "--source",
        choices=["yahoo", "ccxt"],
        help="data source, overrides TICKER_STATS_DATA_SOURCE",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level, overrides TICKER_STATS_LOG_LEVEL",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(Operation.MAX.value, help="maximum adjusted closing price in the period")
    subparsers.add_parser(Operation.MIN.value, help="minimum adjusted closing price in the period")
    sma_parser = subparsers.add_parser(
        Operation.SMA.value, help="sliding window average for n days in the period"
    )
    sma_parser.add_argument(
        "-w",
        "--window",
        metavar="DAYS",
        type=window_size,
        required=True,
        help="size of sliding window in days",
    )
    subparsers.add_parser(
        Operation.DIFF.value, help="percentage and absolute price difference for the period"
    )
    subparsers.add_parser(Operation.SUMMARY.value, help="summary line per ticker")
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Fetch quotes, compute the selected operation and print the report."""
    operation = Operation(args.command)
    start = args.start or datetime.now(timezone.utc) - timedelta(days=settings.lookback_days)
    window = getattr(args, "window", None)

    try:
        fetcher = create_fetcher(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return ExitCode.DATA_SOURCE_ERROR

    async with fetcher:
        orchestrator = Orchestrator(fetcher, granularity=settings.granularity)
        try:
            result = await orchestrator.run(operation, args.tickers, start, window=window)
        except InsufficientDataError as e:
            logger.error(f"Sliding window did not return a result: {e}")
            return ExitCode.INSUFFICIENT_DATA

    if operation is Operation.MAX:
        lines = render_prices("Max prices", result)
    elif operation is Operation.MIN:
        lines = render_prices("Min prices", result)
    elif operation is Operation.SMA:
        lines = render_sma(window, result)
    elif operation is Operation.DIFF:
        lines = render_differences(result)
    else:
        lines = [SUMMARY_HEADER]
        for summary in result.values():
            try:
                lines.append(format_summary_line(summary))
            except (EmptySummaryError, InsufficientDataError) as e:
                logger.error(f"Skipping summary of {summary.symbol}: {e}")

    for line in lines:
        print(line)
    return ExitCode.OK


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on bad arguments and 0 on --help
        return int(e.code or 0)

    try:
        settings = settings or get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return ExitCode.BAD_ARGUMENT

    overrides = {}
    if args.source:
        overrides["data_source"] = args.source
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings.log_level, settings.log_dir)

    if args.command is None:
        logger.error("Unknown command!")
        parser.print_usage()
        return ExitCode.UNKNOWN_COMMAND

    return int(asyncio.run(run(args, settings)))
