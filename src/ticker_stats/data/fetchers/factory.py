"""Build the fetcher selected by configuration."""

from src.ticker_stats.config.settings import Settings
from src.ticker_stats.data.fetchers.base import BaseFetcher
from src.ticker_stats.data.fetchers.ccxt_fetcher import CCXTFetcher
from src.ticker_stats.data.fetchers.yahoo_fetcher import YahooFetcher
from src.ticker_stats.utils.exceptions import ConfigurationError


def create_fetcher(settings: Settings) -> BaseFetcher:
    """Create the fetcher for ``settings.data_source``.

    Raises:
        ConfigurationError: If the source or exchange is unknown.
    """
    source = settings.data_source.lower()

    if source == "yahoo":
        return YahooFetcher(
            base_url=settings.yahoo_base_url, timeout=settings.request_timeout
        )
    if source == "ccxt":
        try:
            return CCXTFetcher(settings.exchange_id, sandbox=settings.sandbox)
        except AttributeError as e:
            raise ConfigurationError(
                f"Unknown ccxt exchange: {settings.exchange_id}"
            ) from e

    raise ConfigurationError(
        f"Unsupported data source: {settings.data_source}. Must be 'yahoo' or 'ccxt'"
    )
