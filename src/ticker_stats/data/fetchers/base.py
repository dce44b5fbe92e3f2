from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

from src.ticker_stats.models import Granularity, Quote


class BaseFetcher(ABC):
    """Abstract base class for historical quote fetchers.

    Attributes:
        source_id (str): Name of the data source (e.g., 'yahoo', 'bitget').
    """

    def __init__(self, source_id: str):
        """Initialize the fetcher.

        Args:
            source_id: The unique identifier for the data source.
        """
        self.source_id = source_id

    @abstractmethod
    async def fetch_quotes(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        granularity: Granularity = Granularity.DAY,
    ) -> list[Quote]:
        """Fetch historical quotes for a symbol.

        Args:
            symbol: The ticker symbol (e.g., 'AAPL', 'BTC/USDT').
            start: Start of the range (inclusive).
            end: End of the range (inclusive).
            granularity: Sampling interval.

        Returns:
            list[Quote]: Quotes in the range, possibly empty. No ordering is promised.

        Raises:
            FetchError: On transport or parse failure.
        """
        pass

    async def fetch_quote_batches(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        granularity: Granularity = Granularity.DAY,
    ) -> AsyncGenerator[list[Quote], None]:
        """Yield the quotes of a range one page at a time.

        Sources that paginate should override this. By default the whole
        range is a single page.

        Raises:
            FetchError: On transport or parse failure.
        """
        yield await self.fetch_quotes(symbol, start, end, granularity)

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the fetcher (e.g., HTTP sessions)."""
        pass

    async def __aenter__(self) -> "BaseFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()
