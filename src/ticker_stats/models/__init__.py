"""Models for ticker-stats."""

from src.ticker_stats.models.chart import ChartResponse
from src.ticker_stats.models.granularity import Granularity
from src.ticker_stats.models.quote import (
    Quote,
    QuoteSeries,
    adjusted_closes,
)
from src.ticker_stats.models.request import FetchWindow

__all__ = [
    # Chart
    "ChartResponse",
    # Granularity
    "Granularity",
    # Quote
    "Quote",
    "QuoteSeries",
    "adjusted_closes",
    # Request
    "FetchWindow",
]
