"""Statistics and aggregation over quote series."""

from src.ticker_stats.analytics.statistics import (
    average,
    max_price,
    min_price,
    n_window_sma,
    price_difference,
)
from src.ticker_stats.analytics.summary import TickerSummary

__all__ = [
    "TickerSummary",
    "average",
    "max_price",
    "min_price",
    "n_window_sma",
    "price_difference",
]
