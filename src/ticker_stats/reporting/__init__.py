"""Report rendering for ticker-stats."""

from src.ticker_stats.reporting.report import (
    SUMMARY_HEADER,
    format_summary_line,
    render_differences,
    render_prices,
    render_sma,
)

__all__ = [
    "SUMMARY_HEADER",
    "format_summary_line",
    "render_differences",
    "render_prices",
    "render_sma",
]
