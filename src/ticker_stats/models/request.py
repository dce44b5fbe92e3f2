"""Request window shared by every fetch of one batch."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from src.ticker_stats.models.granularity import Granularity


class FetchWindow(BaseModel):
    """Immutable time range and sampling interval for a batch of fetches."""

    start: datetime = Field(..., description="Start of the requested history")
    end: datetime = Field(..., description="End of the requested history")
    granularity: Granularity = Field(Granularity.DAY, description="Sampling interval")

    model_config = {
        "frozen": True,
    }

    @model_validator(mode="after")
    def _check_order(self) -> "FetchWindow":
        if self.start > self.end:
            raise ValueError(f"Start ({self.start}) cannot be after end ({self.end})")
        return self
