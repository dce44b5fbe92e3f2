"""Text rendering of batch results."""

from src.ticker_stats.analytics import TickerSummary
from src.ticker_stats.utils.exceptions import EmptySummaryError, InsufficientDataError

SEPARATOR = ","
SUMMARY_HEADER = "period start,symbol,price,change %,min,max,30d avg"


def format_summary_line(summary: TickerSummary) -> str:
    """Render a summary as one comma-separated report line.

    Fields: last date (ISO-8601), symbol, price, change %, min, max, average.

    Raises:
        EmptySummaryError: If the summary never absorbed a quote.
        InsufficientDataError: If the change cannot be computed (first price is zero).
    """
    if summary.is_empty:
        raise EmptySummaryError(summary.symbol)

    change = summary.change_percent()
    if change is None:
        raise InsufficientDataError(
            f"Cannot compute price change for {summary.symbol}: first price is zero"
        )

    fields = [
        summary.last_date.isoformat(),
        summary.symbol,
        f"${summary.last_price:.2f}",
        f"{change:.2f}%",
        f"${summary.min_low:.2f}",
        f"${summary.max_high:.2f}",
        f"${summary.average():.2f}",
    ]
    return SEPARATOR.join(fields)


def render_prices(title: str, prices: dict[str, float]) -> list[str]:
    """Lines for a max or min result map."""
    return [f"{title}:"] + [f"{symbol}: {value}" for symbol, value in prices.items()]


def render_sma(window: int, smas: dict[str, list[float]]) -> list[str]:
    """Lines for a sliding window result map."""
    return [f"Sliding windows of {window} days"] + [
        f"{symbol}: {values}" for symbol, values in smas.items()
    ]


def render_differences(differences: dict[str, tuple[float, float]]) -> list[str]:
    """Tab separated table of percentage and absolute differences."""
    return ["Ticker\tPercent\tDifference"] + [
        f"{symbol}:\t{perc:.2f}%\t{diff:.2f}"
        for symbol, (perc, diff) in differences.items()
    ]
