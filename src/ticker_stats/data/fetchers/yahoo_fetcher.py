"""Yahoo Finance chart API fetcher."""

import logging
from datetime import datetime

import httpx
from pydantic import ValidationError

from src.ticker_stats.data.fetchers.base import BaseFetcher
from src.ticker_stats.models import ChartResponse, Granularity, Quote
from src.ticker_stats.models.chart import ChartResult
from src.ticker_stats.utils.exceptions import FetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://query1.finance.yahoo.com"

# The chart endpoint rejects requests without a browser-like agent.
DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; ticker-stats)"}


class YahooFetcher(BaseFetcher):
    """Fetch daily or minute quotes from the Yahoo Finance chart API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the Yahoo fetcher.

        Args:
            base_url: Root of the Yahoo Finance API.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client. The fetcher closes it on ``close()``.
        """
        super().__init__("yahoo")
        self.client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=DEFAULT_HEADERS
        )

    async def fetch_quotes(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        granularity: Granularity = Granularity.DAY,
    ) -> list[Quote]:
        """Fetch quotes for a symbol from the chart endpoint.

        Args:
            symbol: Ticker symbol (e.g., 'AAPL').
            start: Start of the range.
            end: End of the range.
            granularity: Sampling interval.

        Returns:
            Quotes in the order returned by Yahoo. Samples with a missing
            price are dropped.

        Raises:
            FetchError: On HTTP errors, a reported chart error or a malformed body.
        """
        params = {
            "period1": int(start.timestamp()),
            "period2": int(end.timestamp()),
            "interval": granularity.value,
            "includePrePost": "false",
            "events": "div|split",
        }
        logger.debug(f"Requesting {symbol} chart with {params}")

        try:
            response = await self.client.get(f"/v8/finance/chart/{symbol}", params=params)
            response.raise_for_status()
            chart = ChartResponse.model_validate(response.json()).chart
        except httpx.HTTPStatusError as e:
            raise FetchError(
                symbol, f"HTTP {e.response.status_code} from data source"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(symbol, f"Request failed: {e}") from e
        except (ValidationError, ValueError) as e:
            raise FetchError(symbol, f"Malformed chart response: {e}") from e

        if chart.error is not None:
            raise FetchError(
                symbol, f"{chart.error.code}: {chart.error.description}"
            )
        if not chart.result:
            raise FetchError(symbol, "Chart response contains no result")

        quotes = self._to_quotes(chart.result[0])
        logger.debug(f"Parsed {len(quotes)} quotes for {symbol}")
        return quotes

    def _to_quotes(self, result: ChartResult) -> list[Quote]:
        """Zip the parallel chart arrays into quotes."""
        if not result.timestamp or not result.indicators.quote:
            return []

        ohlcv = result.indicators.quote[0]
        adjclose = ohlcv.close
        if result.indicators.adjclose and result.indicators.adjclose[0].adjclose:
            adjclose = result.indicators.adjclose[0].adjclose

        quotes = []
        for i, timestamp in enumerate(result.timestamp):
            row = [
                _at(ohlcv.open, i),
                _at(ohlcv.high, i),
                _at(ohlcv.low, i),
                _at(ohlcv.close, i),
                _at(adjclose, i),
            ]
            if any(value is None for value in row):
                continue
            volume = _at(ohlcv.volume, i)
            quotes.append(
                Quote(
                    timestamp=timestamp,
                    open=row[0],
                    high=row[1],
                    low=row[2],
                    close=row[3],
                    adjusted_close=row[4],
                    volume=volume or 0,
                )
            )
        return quotes

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()


def _at(values: list, index: int):
    return values[index] if index < len(values) else None
