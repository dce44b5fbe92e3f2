"""Tests for CCXTFetcher with mocked pagination."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

from ccxt.base.errors import BadSymbol, BaseError
import pytest

from src.ticker_stats.analytics import TickerSummary
from src.ticker_stats.data.fetchers.ccxt_fetcher import CCXTFetcher
from src.ticker_stats.models import Granularity, Quote
from src.ticker_stats.utils.exceptions import FetchError

DAY_MS = 86_400_000


@pytest.fixture
def mock_exchange():
    """Create a mock exchange with common setup."""
    exchange = MagicMock()
    exchange.fetch_ohlcv = AsyncMock()
    exchange.close = AsyncMock()
    exchange.set_sandbox_mode = MagicMock()
    return exchange


@pytest.fixture
def mock_ccxt(mock_exchange):
    """Patch the ccxt module while keeping its real error classes."""
    with patch("src.ticker_stats.data.fetchers.ccxt_fetcher.ccxt") as mocked:
        mocked.bitget = MagicMock(return_value=mock_exchange)
        mocked.BaseError = BaseError
        yield mocked


def generate_candles(start_ms: int, count: int, interval_ms: int = DAY_MS) -> list:
    """Generate mock OHLCV candles.

    Args:
        start_ms: Starting timestamp in milliseconds.
        count: Number of candles to generate.
        interval_ms: Time interval between candles (default 1 day).

    Returns:
        List of [timestamp, open, high, low, close, volume] candles.
    """
    candles = []
    for i in range(count):
        ts = start_ms + (i * interval_ms)
        price = 50000 + i
        candles.append([ts, price, price + 10, price - 10, price + 5, 1.5])
    return candles


def to_datetime(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


class TestCCXTFetcherInit:
    """Tests for CCXTFetcher initialization."""

    def test_init_creates_exchange(self, mock_ccxt):
        """Test that __init__ creates exchange instance."""
        fetcher = CCXTFetcher("bitget", sandbox=False)

        mock_ccxt.bitget.assert_called_once_with({"enableRateLimit": True})
        assert fetcher.exchange_id == "bitget"
        assert fetcher.source_id == "bitget"
        assert fetcher.sandbox is False

    def test_init_with_sandbox_mode(self, mock_ccxt, mock_exchange):
        """Test that sandbox mode is enabled when specified."""
        fetcher = CCXTFetcher("bitget", sandbox=True)

        mock_exchange.set_sandbox_mode.assert_called_once_with(True)
        assert fetcher.sandbox is True


class TestFetchQuotes:
    """Tests for fetch_quotes with pagination."""

    @pytest.mark.asyncio
    async def test_single_page_converts_candles(self, mock_ccxt, mock_exchange):
        """Test that candles become quotes with second timestamps."""
        start_ms = 1_700_006_400_000
        mock_exchange.fetch_ohlcv.side_effect = [generate_candles(start_ms, 3)]

        fetcher = CCXTFetcher("bitget")
        result = await fetcher.fetch_quotes(
            "BTC/USDT", to_datetime(start_ms), to_datetime(start_ms + 2 * DAY_MS)
        )

        assert len(result) == 3
        assert all(isinstance(quote, Quote) for quote in result)
        assert result[0].timestamp == start_ms // 1000
        assert result[0].high == 50010.0
        assert result[0].low == 49990.0
        assert result[0].adjusted_close == result[0].close == 50005.0
        assert result[0].volume == 1
        mock_exchange.fetch_ohlcv.assert_called_once_with(
            "BTC/USDT", "1d", start_ms, 200
        )

    @pytest.mark.asyncio
    async def test_pagination_multiple_pages(self, mock_ccxt, mock_exchange):
        """Test that fetch_quotes correctly paginates across multiple pages."""
        start_ms = 1_600_000_000_000
        page_size = 200
        total = 450
        end_ms = start_ms + (total - 1) * DAY_MS

        page1 = generate_candles(start_ms, page_size)
        page2 = generate_candles(start_ms + page_size * DAY_MS, page_size)
        page3 = generate_candles(start_ms + 2 * page_size * DAY_MS, 50)
        mock_exchange.fetch_ohlcv.side_effect = [page1, page2, page3]

        fetcher = CCXTFetcher("bitget")
        result = await fetcher.fetch_quotes(
            "BTC/USDT", to_datetime(start_ms), to_datetime(end_ms)
        )

        assert mock_exchange.fetch_ohlcv.call_count == 3
        assert len(result) == total
        second_call = mock_exchange.fetch_ohlcv.call_args_list[1]
        assert second_call.args[2] == page1[-1][0] + 1

    @pytest.mark.asyncio
    async def test_filters_beyond_end(self, mock_ccxt, mock_exchange):
        """Test that candles beyond the end of the range are dropped."""
        start_ms = 1_600_000_000_000
        end_ms = start_ms + 50 * DAY_MS
        mock_exchange.fetch_ohlcv.return_value = generate_candles(start_ms, 100)

        fetcher = CCXTFetcher("bitget")
        result = await fetcher.fetch_quotes(
            "BTC/USDT", to_datetime(start_ms), to_datetime(end_ms)
        )

        assert len(result) == 51
        assert max(quote.timestamp for quote in result) <= end_ms // 1000
        mock_exchange.fetch_ohlcv.assert_called_once()

    @pytest.mark.asyncio
    async def test_handles_empty_response(self, mock_ccxt, mock_exchange):
        """Test that an empty exchange response yields no quotes."""
        mock_exchange.fetch_ohlcv.return_value = []

        fetcher = CCXTFetcher("bitget")
        result = await fetcher.fetch_quotes(
            "BTC/USDT", to_datetime(1_000_000_000), to_datetime(2_000_000_000)
        )

        assert result == []

    @pytest.mark.asyncio
    async def test_uses_granularity_as_timeframe(self, mock_ccxt, mock_exchange):
        mock_exchange.fetch_ohlcv.return_value = []

        fetcher = CCXTFetcher("bitget")
        await fetcher.fetch_quotes(
            "BTC/USDT",
            to_datetime(1_000_000_000),
            to_datetime(2_000_000_000),
            Granularity.MINUTE,
        )

        assert mock_exchange.fetch_ohlcv.call_args.args[1] == "1m"

    @pytest.mark.asyncio
    async def test_exchange_error_becomes_fetch_error(self, mock_ccxt, mock_exchange):
        """Test that ccxt errors are wrapped in FetchError."""
        mock_exchange.fetch_ohlcv.side_effect = BadSymbol("bitget does not have market symbol FOO/USDT")

        fetcher = CCXTFetcher("bitget")
        with pytest.raises(FetchError, match="FOO/USDT: BadSymbol"):
            await fetcher.fetch_quotes(
                "FOO/USDT", to_datetime(1_000_000_000), to_datetime(2_000_000_000)
            )

    @pytest.mark.asyncio
    async def test_malformed_candle_becomes_fetch_error(self, mock_ccxt, mock_exchange):
        """Test that a candle with null prices is reported as a fetch failure."""
        start_ms = 1_600_000_000_000
        mock_exchange.fetch_ohlcv.return_value = [
            [start_ms, None, None, None, None, None]
        ]

        fetcher = CCXTFetcher("bitget")
        with pytest.raises(FetchError, match="BAD/USDT: Malformed candle"):
            await fetcher.fetch_quotes(
                "BAD/USDT", to_datetime(start_ms), to_datetime(start_ms + DAY_MS)
            )

    @pytest.mark.asyncio
    async def test_stops_when_exchange_ignores_since(self, mock_ccxt, mock_exchange):
        """Test that a repeated stale page ends pagination instead of looping."""
        start_ms = 1_600_000_000_000
        mock_exchange.fetch_ohlcv.return_value = generate_candles(start_ms, 3)

        fetcher = CCXTFetcher("bitget")
        result = await fetcher.fetch_quotes(
            "BTC/USDT", to_datetime(start_ms), to_datetime(start_ms + 30 * DAY_MS)
        )

        assert mock_exchange.fetch_ohlcv.call_count == 2
        assert len(result) == 3


class TestFetchQuoteBatches:
    """Tests for page-by-page fetching."""

    @pytest.mark.asyncio
    async def test_yields_one_batch_per_page(self, mock_ccxt, mock_exchange):
        """Test that every exchange page becomes one batch for a summary."""
        start_ms = 1_600_000_000_000
        page1 = generate_candles(start_ms, 200)
        page2 = generate_candles(start_ms + 200 * DAY_MS, 10)
        mock_exchange.fetch_ohlcv.side_effect = [page1, page2]
        end_ms = page2[-1][0]

        fetcher = CCXTFetcher("bitget")
        summary = TickerSummary("BTC/USDT")
        batches = 0
        async for batch in fetcher.fetch_quote_batches(
            "BTC/USDT", to_datetime(start_ms), to_datetime(end_ms)
        ):
            summary.absorb(batch)
            batches += 1

        assert batches == 2
        assert summary.observed_count == 210
        assert summary.first_timestamp == start_ms // 1000
        assert summary.last_timestamp == end_ms // 1000


class TestClose:
    """Tests for close method."""

    @pytest.mark.asyncio
    async def test_close_calls_exchange_close(self, mock_ccxt, mock_exchange):
        """Test that close properly closes the exchange connection."""
        fetcher = CCXTFetcher("bitget")

        await fetcher.close()

        mock_exchange.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, mock_ccxt, mock_exchange):
        async with CCXTFetcher("bitget"):
            pass

        mock_exchange.close.assert_called_once()
