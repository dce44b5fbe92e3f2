"""Operations the orchestrator can run over a batch of tickers."""

from enum import Enum

from pydantic import BaseModel, Field


class Operation(str, Enum):
    """Available batch operations."""

    MAX = "max"
    MIN = "min"
    SMA = "sma"
    DIFF = "diff"
    SUMMARY = "sum"


class FetchFailure(BaseModel):
    """Diagnostic for a ticker whose fetch failed and was left out of the results."""

    symbol: str = Field(..., description="Ticker symbol that failed")
    error: str = Field(..., description="Error message from the fetcher")

    model_config = {
        "frozen": True,
    }
