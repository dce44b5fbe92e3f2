"""Sampling interval for historical quote requests."""

from enum import Enum


class Granularity(str, Enum):
    """Interval between two consecutive quotes.

    The value is the interval string understood by both the Yahoo chart API
    and ccxt timeframes.
    """

    MINUTE = "1m"
    DAY = "1d"
