"""
ticker-stats configuration.
All settings are loaded from environment variables with sensible defaults.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.ticker_stats.models.granularity import Granularity


class Settings(BaseSettings):
    """Top-level application settings.

    Every field can be overridden with a ``TICKER_STATS_``-prefixed
    environment variable, e.g. ``TICKER_STATS_DATA_SOURCE=ccxt``.
    """

    data_source: str = Field(default="yahoo", description="'yahoo' or 'ccxt'")
    exchange_id: str = Field(default="bitget", description="ccxt exchange id")
    sandbox: bool = False

    yahoo_base_url: str = "https://query1.finance.yahoo.com"
    request_timeout: float = Field(default=10.0, gt=0)

    granularity: Granularity = Granularity.DAY
    lookback_days: int = Field(default=30, ge=1)

    log_level: str = "INFO"
    log_dir: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="TICKER_STATS_",
        env_file=".env",
        extra="ignore",
    )


# Singleton
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
