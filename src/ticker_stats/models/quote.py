"""Quote model for historical price samples."""

from collections.abc import Iterable
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Quote(BaseModel):
    """One timestamped price observation for a ticker.

    ``adjusted_close`` is the canonical price used by every statistic.
    """

    timestamp: int = Field(..., description="Sample time (Unix timestamp in seconds)")

    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="Highest price during the period")
    low: float = Field(..., description="Lowest price during the period")
    close: float = Field(..., description="Closing price")
    adjusted_close: float = Field(
        ..., alias="adjclose", description="Close adjusted for splits and dividends"
    )
    volume: int = Field(0, description="Traded volume")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def date(self) -> datetime:
        """Sample time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


# A quote series is neither assumed sorted nor deduplicated.
QuoteSeries = list[Quote]


def adjusted_closes(quotes: Iterable[Quote]) -> list[float]:
    """Extract the price series in series order."""
    return [quote.adjusted_close for quote in quotes]
