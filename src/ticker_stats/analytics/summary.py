"""Incremental per-ticker summary of absorbed quotes."""

import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from src.ticker_stats.models import Quote

EPSILON = sys.float_info.epsilon


class TickerSummary:
    """Running min/max/average and first/last price of one ticker.

    Quotes may arrive in any order and in several batches. First and last
    price are chosen by timestamp, never by arrival order; on equal
    timestamps the quote seen first wins. Duplicate samples are not
    deduplicated and count twice toward the average.

    Min and max start unset rather than at 0.0, so any real price, including
    exactly 0, is recorded by the first absorbed quote.

    Attributes:
        symbol: Ticker symbol the summary belongs to.
        observed_count: Number of quotes absorbed so far.
        running_sum: Sum of adjusted closes absorbed so far.
        max_high: Highest ``high`` seen, None until a quote is absorbed.
        min_low: Lowest ``low`` seen, None until a quote is absorbed.
    """

    def __init__(self, symbol: str) -> None:
        self._symbol = symbol
        self.observed_count: int = 0
        self.running_sum: float = 0.0
        self.max_high: Optional[float] = None
        self.min_low: Optional[float] = None
        self.first_price: Optional[float] = None
        self.first_timestamp: Optional[int] = None
        self.last_price: Optional[float] = None
        self.last_timestamp: Optional[int] = None

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def is_empty(self) -> bool:
        return self.observed_count == 0

    @property
    def last_date(self) -> Optional[datetime]:
        """UTC time of the latest absorbed quote."""
        if self.last_timestamp is None:
            return None
        return datetime.fromtimestamp(self.last_timestamp, tz=timezone.utc)

    def absorb(self, quotes: Iterable[Quote]) -> None:
        """Fold a batch of quotes into the running state in a single pass.

        An empty batch leaves the summary unchanged.
        """
        for quote in quotes:
            if self.max_high is None or quote.high > self.max_high:
                self.max_high = quote.high
            if self.min_low is None or quote.low < self.min_low:
                self.min_low = quote.low

            self.running_sum += quote.adjusted_close
            self.observed_count += 1

            if self.last_timestamp is None or quote.timestamp > self.last_timestamp:
                self.last_timestamp = quote.timestamp
                self.last_price = quote.adjusted_close
            if self.first_timestamp is None or quote.timestamp < self.first_timestamp:
                self.first_timestamp = quote.timestamp
                self.first_price = quote.adjusted_close

    def average(self) -> Optional[float]:
        """Mean adjusted close, or None without data."""
        if self.is_empty:
            return None
        return self.running_sum / self.observed_count

    def absolute_difference(self) -> Optional[float]:
        """Last price minus first price, or None without data."""
        if self.is_empty:
            return None
        return self.last_price - self.first_price

    def percentage_difference(self) -> Optional[float]:
        """Last price as a percentage of the first price.

        None without data or when the first price is zero.
        """
        if self.is_empty or abs(self.first_price) < EPSILON:
            return None
        return self.last_price * 100.0 / self.first_price

    def change_percent(self) -> Optional[float]:
        """Relative change in percent, e.g. 5.0 for a 5% gain."""
        percentage = self.percentage_difference()
        if percentage is None:
            return None
        return percentage - 100.0

    def __repr__(self) -> str:
        return (
            f"TickerSummary({self.symbol}: n={self.observed_count}, "
            f"min={self.min_low}, max={self.max_high}, last={self.last_price})"
        )
