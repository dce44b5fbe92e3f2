"""Custom exceptions for ticker-stats."""


class TickerStatsError(Exception):
    """Base exception for ticker-stats."""

    pass


class FetchError(TickerStatsError):
    """Transport or parse failure while fetching quotes for one ticker."""

    def __init__(self, symbol: str, message: str):
        self.symbol = symbol
        super().__init__(f"{symbol}: {message}")


class InsufficientDataError(TickerStatsError):
    """Not enough data points to compute the requested statistic."""

    pass


class EmptySummaryError(TickerStatsError):
    """A ticker summary was read before it absorbed any quote."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Summary for {symbol} has no data to report")


class ConfigurationError(TickerStatsError):
    """Invalid configuration value or data source."""

    pass
