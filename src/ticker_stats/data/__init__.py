"""Quote fetchers for ticker-stats."""

from src.ticker_stats.data.fetchers.base import BaseFetcher
from src.ticker_stats.data.fetchers.ccxt_fetcher import CCXTFetcher
from src.ticker_stats.data.fetchers.factory import create_fetcher
from src.ticker_stats.data.fetchers.yahoo_fetcher import YahooFetcher

__all__ = [
    "BaseFetcher",
    "CCXTFetcher",
    "YahooFetcher",
    "create_fetcher",
]
