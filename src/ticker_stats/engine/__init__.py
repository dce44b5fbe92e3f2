"""Batch orchestration over multiple tickers."""

from src.ticker_stats.engine.operations import FetchFailure, Operation
from src.ticker_stats.engine.orchestrator import Orchestrator

__all__ = [
    "FetchFailure",
    "Operation",
    "Orchestrator",
]
