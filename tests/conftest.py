"""Shared fixtures for ticker-stats tests."""

from datetime import datetime

import pytest

from tests.factories import FakeFetcher, generate_quotes


@pytest.fixture
def fixed_now() -> datetime:
    return datetime.fromisoformat("2024-03-01T12:00:00+00:00")


@pytest.fixture
def start() -> datetime:
    return datetime.fromisoformat("2024-01-30T00:00:00+00:00")


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Fetcher with two healthy tickers and one failing ticker."""
    return FakeFetcher(
        {
            "AAPL": generate_quotes([1.0, 2.0, 3.0, 4.0]),
            "MSFT": generate_quotes([10.0, 30.0, 20.0]),
        },
        failing={"BADTICKER"},
    )
