"""Concurrent fan-out of quote fetches over a batch of tickers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime, timezone
from typing import Any, Optional, TypeVar

from src.ticker_stats.analytics import (
    TickerSummary,
    max_price,
    min_price,
    n_window_sma,
    price_difference,
)
from src.ticker_stats.data import BaseFetcher
from src.ticker_stats.engine.operations import FetchFailure, Operation
from src.ticker_stats.models import FetchWindow, Granularity, QuoteSeries, adjusted_closes
from src.ticker_stats.utils.exceptions import FetchError, InsufficientDataError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Orchestrator:
    """Dispatch one fetch per ticker concurrently and reduce into a result map.

    Every ticker of a batch shares one immutable ``FetchWindow`` ending at
    the time the batch starts. A ticker whose fetch fails is logged, recorded
    in ``failures`` and left out of the result map; the other tickers are
    unaffected. The result map is only assembled once every fetch resolved.

    Attributes:
        fetcher: Source of historical quotes.
        granularity: Sampling interval requested for every ticker.
        failures: Fetch failures of the most recent batch.
    """

    def __init__(
        self,
        fetcher: BaseFetcher,
        granularity: Granularity = Granularity.DAY,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.fetcher = fetcher
        self.granularity = granularity
        self._clock = clock
        self.failures: list[FetchFailure] = []

    def make_window(self, start: datetime) -> FetchWindow:
        """Build the shared request window from ``start`` until now."""
        return FetchWindow(start=start, end=self._clock(), granularity=self.granularity)

    async def run(
        self,
        operation: Operation,
        symbols: Iterable[str],
        start: datetime,
        window: Optional[int] = None,
    ) -> dict[str, Any]:
        """Run a batch operation over the given tickers.

        Args:
            operation: Statistic to compute per ticker.
            symbols: Ticker symbols. Duplicates are fetched independently and
                the last result wins.
            start: Start of the requested history.
            window: Window size, required for ``Operation.SMA``.

        Returns:
            Mapping of ticker symbol to the operation's result.

        Raises:
            ValueError: If ``operation`` is SMA and ``window`` is missing or not positive.
            InsufficientDataError: If an SMA window exceeds any ticker's history.
        """
        if operation is Operation.MAX:
            return await self.get_max_prices(symbols, start)
        if operation is Operation.MIN:
            return await self.get_min_prices(symbols, start)
        if operation is Operation.SMA:
            if window is None:
                raise ValueError("Missing parameter window for sma")
            return await self.get_sma_windows(symbols, start, window)
        if operation is Operation.DIFF:
            return await self.get_price_differences(symbols, start)
        if operation is Operation.SUMMARY:
            return await self.get_ticker_summaries(symbols, start)
        raise ValueError(f"Unknown operation: {operation}")

    async def fetch_all(
        self, symbols: Iterable[str], start: datetime
    ) -> dict[str, QuoteSeries]:
        """Fetch the quote series of every ticker concurrently."""
        return await self._scatter(symbols, start, self._fetch)

    async def get_max_prices(
        self, symbols: Iterable[str], start: datetime
    ) -> dict[str, float]:
        """Highest adjusted close per ticker. Tickers without quotes are skipped."""
        return self._reduce_prices(await self.fetch_all(symbols, start), max_price, "max")

    async def get_min_prices(
        self, symbols: Iterable[str], start: datetime
    ) -> dict[str, float]:
        """Lowest adjusted close per ticker. Tickers without quotes are skipped."""
        return self._reduce_prices(await self.fetch_all(symbols, start), min_price, "min")

    async def get_sma_windows(
        self, symbols: Iterable[str], start: datetime, window: int
    ) -> dict[str, list[float]]:
        """Sliding window averages per ticker.

        Unlike the other operations, a ticker with fewer quotes than the
        window fails the whole batch.

        Raises:
            ValueError: If ``window`` is not positive.
            InsufficientDataError: If any fetched ticker has fewer quotes than ``window``.
        """
        if window <= 0:
            raise ValueError(f"Window size must be positive, got {window}")

        result: dict[str, list[float]] = {}
        for symbol, quotes in (await self.fetch_all(symbols, start)).items():
            sma = n_window_sma(window, adjusted_closes(quotes))
            if sma is None:
                raise InsufficientDataError(
                    f"Sliding window of {window} days does not fit the "
                    f"{len(quotes)} quotes available for {symbol}"
                )
            result[symbol] = sma
        return result

    async def get_price_differences(
        self, symbols: Iterable[str], start: datetime
    ) -> dict[str, tuple[float, float]]:
        """Percentage and absolute price change per ticker.

        Tickers with fewer than two quotes or a non-positive first price are skipped.
        """
        result: dict[str, tuple[float, float]] = {}
        for symbol, quotes in (await self.fetch_all(symbols, start)).items():
            difference = price_difference(adjusted_closes(quotes))
            if difference is None:
                logger.warning(f"Could not calculate difference for {symbol}. Skipping!")
                continue
            result[symbol] = difference
        return result

    async def get_ticker_summaries(
        self, symbols: Iterable[str], start: datetime
    ) -> dict[str, TickerSummary]:
        """Summary of every successfully fetched ticker.

        A ticker whose fetch succeeded with no quotes still gets an (empty)
        summary; rendering it is the caller's decision.
        """
        return await self._scatter(symbols, start, self._summarize)

    async def _fetch(self, symbol: str, window: FetchWindow) -> QuoteSeries:
        return await self.fetcher.fetch_quotes(
            symbol, window.start, window.end, window.granularity
        )

    async def _summarize(self, symbol: str, window: FetchWindow) -> TickerSummary:
        summary = TickerSummary(symbol)
        async for batch in self.fetcher.fetch_quote_batches(
            symbol, window.start, window.end, window.granularity
        ):
            summary.absorb(batch)
        return summary

    async def _scatter(
        self,
        symbols: Iterable[str],
        start: datetime,
        task: Callable[[str, FetchWindow], Awaitable[T]],
    ) -> dict[str, T]:
        """Start one task per symbol, wait for all of them, then collect results.

        Fetch errors are recorded per symbol. Any other exception is re-raised
        once every task has resolved.
        """
        symbols = list(symbols)
        window = self.make_window(start)
        self.failures = []

        logger.info(
            f"Fetching {len(symbols)} tickers from {window.start.date()} "
            f"at {window.granularity.value} granularity"
        )
        results = await asyncio.gather(
            *(task(symbol, window) for symbol in symbols), return_exceptions=True
        )

        collected: dict[str, T] = {}
        for symbol, result in zip(symbols, results):
            if isinstance(result, FetchError):
                logger.warning(f"Failed to retrieve quotes for ticker {symbol}: {result}")
                self.failures.append(FetchFailure(symbol=symbol, error=str(result)))
            elif isinstance(result, BaseException):
                raise result
            else:
                collected[symbol] = result
        return collected

    def _reduce_prices(
        self,
        quotes_by_symbol: dict[str, QuoteSeries],
        statistic: Callable[[list[float]], Optional[float]],
        label: str,
    ) -> dict[str, float]:
        result: dict[str, float] = {}
        for symbol, quotes in quotes_by_symbol.items():
            value = statistic(adjusted_closes(quotes))
            if value is None:
                logger.warning(f"No quotes to compute {label} price for {symbol}. Skipping!")
                continue
            result[symbol] = value
        return result
