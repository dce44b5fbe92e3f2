"""Models for the Yahoo Finance chart API response."""

from pydantic import BaseModel, Field


class ChartError(BaseModel):
    code: str | None = None
    description: str | None = None


class QuoteIndicator(BaseModel):
    """Parallel OHLCV arrays. Missing samples are ``null``."""

    open: list[float | None] = Field(default_factory=list)
    high: list[float | None] = Field(default_factory=list)
    low: list[float | None] = Field(default_factory=list)
    close: list[float | None] = Field(default_factory=list)
    volume: list[int | None] = Field(default_factory=list)


class AdjCloseIndicator(BaseModel):
    adjclose: list[float | None] = Field(default_factory=list)


class Indicators(BaseModel):
    quote: list[QuoteIndicator] = Field(default_factory=list)
    adjclose: list[AdjCloseIndicator] = Field(default_factory=list)


class ChartResult(BaseModel):
    """One chart result.

    ``timestamp`` is absent when the ticker had no trading activity in the range.
    """

    meta: dict | None = Field(None, description="Raw instrument metadata")
    timestamp: list[int] = Field(default_factory=list)
    indicators: Indicators = Field(default_factory=Indicators)


class Chart(BaseModel):
    result: list[ChartResult] | None = None
    error: ChartError | None = None


class ChartResponse(BaseModel):
    """Top-level body returned by ``/v8/finance/chart/{symbol}``."""

    chart: Chart

    model_config = {
        "extra": "ignore",
    }
