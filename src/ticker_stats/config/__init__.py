"""Configuration for ticker-stats."""

from src.ticker_stats.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
