"""Moving averages and rolling dispersion shared by every indicator.

All functions accept any ordered sequence of numbers (list, ``numpy`` array,
``pandas`` Series) with the oldest value at index 0.  Series outputs are
freshly allocated ``float64`` arrays that begin at the first bar with enough
history, so they are shorter than the input.  Scalar outputs are ``None``
when fewer than ``period`` values are available.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

PriceInput = Sequence[float] | np.ndarray | pd.Series


def as_array(values: PriceInput) -> np.ndarray:
    """Return *values* as a one-dimensional ``float64`` array."""
    return np.asarray(values, dtype="float64").reshape(-1)


def _empty() -> np.ndarray:
    return np.empty(0, dtype="float64")


# ---------------------------------------------------------------------------
# Simple moving average
# ---------------------------------------------------------------------------


def sma(prices: PriceInput, period: int) -> float | None:
    """Mean of the last ``period`` prices.

    Args:
        prices: Price series, oldest first.
        period: Number of trailing values to average.

    Returns:
        The mean, or ``None`` if fewer than ``period`` prices are given.
    """
    values = as_array(prices)
    if len(values) < period:
        return None
    return float(values[len(values) - period:].mean())


def sma_windowed(prices: PriceInput, period: int) -> float | None:
    """Mean of the per-window means over every ``period``-long window.

    Only agrees with :func:`sma` when the input holds exactly one window.
    """
    means = sma_list(prices, period)
    if len(means) == 0:
        return None
    return float(means.mean())


def sma_list(prices: PriceInput, period: int) -> np.ndarray:
    """Simple Moving Average at every window start.

    Args:
        prices: Price series, oldest first.
        period: Window length.

    Returns:
        ``len(prices) - period + 1`` window means (window ``i`` covers
        ``prices[i:i + period]``), or an empty array when the input is
        shorter than ``period``.
    """
    values = as_array(prices)
    if len(values) < period:
        return _empty()
    rolled = pd.Series(values).rolling(window=period, min_periods=period).mean()
    return rolled.to_numpy(copy=True)[period - 1:]


# ---------------------------------------------------------------------------
# Exponential moving average
# ---------------------------------------------------------------------------


def _ema_from_seed(seed: float, values: np.ndarray, period: int) -> np.ndarray:
    # ewm(adjust=False) with span=period is exactly
    # ema = (price - ema) * 2 / (period + 1) + ema
    seeded = np.concatenate(([seed], values[period:]))
    return pd.Series(seeded).ewm(span=period, adjust=False).mean().to_numpy(copy=True)


def ema(prices: PriceInput, period: int) -> np.ndarray:
    """Exponential Moving Average seeded with the SMA of the first window.

    The seed is the mean of ``prices[:period]``; every later price updates it
    with multiplier ``2 / (period + 1)``.

    Args:
        prices: Price series, oldest first.
        period: EMA period.

    Returns:
        ``len(prices) - period + 1`` values starting with the seed, or an
        empty array when the input is shorter than ``period``.
    """
    values = as_array(prices)
    if len(values) < period:
        return _empty()
    seed = sma(values[:period], period)
    return _ema_from_seed(seed, values, period)


def ema_first_value_seed(prices: PriceInput, period: int) -> np.ndarray:
    """Exponential Moving Average anchored on the earliest price.

    Same recurrence and output length as :func:`ema`, but the seed is
    ``prices[0]`` rather than the mean of the first window.
    """
    values = as_array(prices)
    if len(values) < period:
        return _empty()
    return _ema_from_seed(float(values[0]), values, period)


# ---------------------------------------------------------------------------
# Dispersion
# ---------------------------------------------------------------------------


def standard_deviation(prices: PriceInput, period: int) -> float | None:
    """Population standard deviation of the last ``period`` prices.

    Divides by ``period`` (not ``period - 1``) and looks only at the tail
    window, not across the whole series.

    Returns:
        The deviation, or ``None`` if fewer than ``period`` prices are given.
    """
    values = as_array(prices)
    if len(values) < period:
        return None
    return float(np.std(values[len(values) - period:]))
