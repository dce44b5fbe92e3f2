"""CCXT-based quote fetcher implementation."""

import logging
from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

import ccxt.async_support as ccxt
from pydantic import ValidationError

from src.ticker_stats.data.fetchers.base import BaseFetcher
from src.ticker_stats.models import Granularity, Quote
from src.ticker_stats.utils.exceptions import FetchError

logger = logging.getLogger(__name__)


class CCXTFetcher(BaseFetcher):
    """Fetch exchange OHLCV candles as quotes.

    Exchanges report no adjusted close, so the close is used for it.
    """

    def __init__(self, exchange_id: str, sandbox: bool = False, page_limit: int = 200):
        """Initialize the CCXT fetcher.

        Args:
            exchange_id: The ccxt exchange identifier (e.g., 'bitget', 'binance').
            sandbox: Whether to use the exchange's sandbox/testnet mode.
            page_limit: Maximum number of candles requested per call.
        """
        super().__init__(exchange_id)
        self.exchange_id = exchange_id
        self.sandbox = sandbox
        self.page_limit = page_limit
        exchange_class = getattr(ccxt, exchange_id)
        self.exchange = exchange_class({"enableRateLimit": True})
        if sandbox:
            self.exchange.set_sandbox_mode(True)

    async def fetch_quotes(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        granularity: Granularity = Granularity.DAY,
    ) -> list[Quote]:
        """Fetch all quotes in the range, concatenating every page."""
        quotes: list[Quote] = []
        async for batch in self.fetch_quote_batches(symbol, start, end, granularity):
            quotes.extend(batch)
        return quotes

    async def fetch_quote_batches(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        granularity: Granularity = Granularity.DAY,
    ) -> AsyncGenerator[list[Quote], None]:
        """Yield one page of quotes per exchange request.

        Uses manual pagination. Candles outside the range are dropped.

        Args:
            symbol: Trading pair symbol (e.g., 'BTC/USDT').
            start: Start of the range.
            end: End of the range.
            granularity: Sampling interval, used as the ccxt timeframe.

        Raises:
            FetchError: If the exchange request fails.
        """
        start_ms = int(start.timestamp() * 1000)
        end_ms = int(end.timestamp() * 1000)
        current_since = start_ms

        while current_since < end_ms:
            try:
                candles = await self.exchange.fetch_ohlcv(
                    symbol, granularity.value, current_since, self.page_limit
                )
            except ccxt.BaseError as e:
                raise FetchError(symbol, f"{type(e).__name__}: {e}") from e

            if not candles:
                break

            try:
                filtered = [c for c in candles if start_ms <= c[0] <= end_ms]
                quotes = self._to_quotes(filtered)
                last_ts = int(candles[-1][0])
            except (TypeError, ValueError, IndexError, ValidationError) as e:
                raise FetchError(symbol, f"Malformed candle: {e}") from e

            if last_ts < current_since:
                logger.warning(f"Exchange returned no newer candles for {symbol}. Stopping")
                break

            logger.debug(f"Fetched page of {len(quotes)} candles for {symbol}")
            yield quotes

            if last_ts >= end_ms:
                break

            # Advance past the last candle
            current_since = last_ts + 1

    def _to_quotes(self, candles: list[Any]) -> list[Quote]:
        """Convert [timestamp_ms, open, high, low, close, volume] rows to quotes."""
        return [
            Quote(
                timestamp=int(c[0]) // 1000,
                open=float(c[1]),
                high=float(c[2]),
                low=float(c[3]),
                close=float(c[4]),
                adjusted_close=float(c[4]),
                volume=int(c[5] or 0),
            )
            for c in candles
        ]

    async def close(self) -> None:
        """Close the exchange connection and release resources."""
        await self.exchange.close()
