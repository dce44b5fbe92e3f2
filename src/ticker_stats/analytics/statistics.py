"""Pure statistics over a price series.

Every function takes prices in series order and returns ``None`` when the
series cannot support the statistic, so callers can tell "no value" apart
from a legitimately empty result.
"""

from collections.abc import Sequence
from typing import Optional

import pandas as pd


def _to_series(series: Sequence[float]) -> pd.Series:
    return pd.Series(list(series), dtype="float64")


def max_price(series: Sequence[float]) -> Optional[float]:
    """Greatest price, or None for an empty series."""
    if len(series) == 0:
        return None
    return float(_to_series(series).max())


def min_price(series: Sequence[float]) -> Optional[float]:
    """Least price, or None for an empty series."""
    if len(series) == 0:
        return None
    return float(_to_series(series).min())


def average(series: Sequence[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty series."""
    if len(series) == 0:
        return None
    return float(_to_series(series).mean())


def n_window_sma(n: int, series: Sequence[float]) -> Optional[list[float]]:
    """Simple moving average over every full window of ``n`` prices.

    Args:
        n: Window size, must be positive.
        series: Prices in series order.

    Returns:
        ``len(series) - n + 1`` means, where value ``i`` averages
        ``series[i:i + n]``. None if the series is shorter than the window.

    Raises:
        ValueError: If ``n`` is not positive.
    """
    if n <= 0:
        raise ValueError(f"Window size must be positive, got {n}")
    if len(series) < n:
        return None

    rolling = _to_series(series).rolling(window=n).mean()
    return [float(value) for value in rolling.iloc[n - 1 :]]


def price_difference(series: Sequence[float]) -> Optional[tuple[float, float]]:
    """Percentage and absolute change from the first to the last price.

    Uses series order, not timestamp order. The percentage is
    ``last * 100 / first``, so an unchanged price yields 100.0.

    Returns:
        ``(percentage, absolute_difference)``, or None if the series has fewer
        than two prices or the first price is not positive.
    """
    if len(series) < 2:
        return None

    first = float(series[0])
    last = float(series[-1])
    if first <= 0.0:
        return None

    return last * 100.0 / first, last - first
