"""Shared utilities for ticker-stats."""

from src.ticker_stats.utils.exceptions import (
    ConfigurationError,
    EmptySummaryError,
    FetchError,
    InsufficientDataError,
    TickerStatsError,
)
from src.ticker_stats.utils.logging_config import setup_logging

__all__ = [
    "ConfigurationError",
    "EmptySummaryError",
    "FetchError",
    "InsufficientDataError",
    "TickerStatsError",
    "setup_logging",
]
