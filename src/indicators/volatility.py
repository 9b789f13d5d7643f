"""Volatility indicators: True Range, Average True Range, Bollinger Bands."""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from indicators.primitives import (
    PriceInput,
    as_array,
    ema,
    sma_list,
    standard_deviation,
)
from indicators.types import Bands

logger = logging.getLogger(__name__)

_MIDDLE_BANDS = ("sma", "ema")


# ---------------------------------------------------------------------------
# True Range / ATR
# ---------------------------------------------------------------------------


def true_range(high: float, low: float, prev_close: float) -> float:
    """True Range of one bar.

    TR = max(high - low,  |high - prev_close|,  |low - prev_close|)
    """
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


def true_range_series(
    highs: PriceInput, lows: PriceInput, closes: PriceInput
) -> np.ndarray:
    """True Range for every bar.

    The first bar has no previous close, so its range is ``high - low``.

    Args:
        highs:  High prices, oldest first.
        lows:   Low prices, index-aligned with *highs*.
        closes: Close prices, index-aligned with *highs*.

    Returns:
        One TR value per close.

    Raises:
        ValueError: If *highs* or *lows* hold fewer bars than *closes*.
    """
    c = as_array(closes)
    n = len(c)
    h = as_array(highs)
    lo = as_array(lows)
    if len(h) < n or len(lo) < n:
        raise ValueError("highs and lows must cover every close")
    if n == 0:
        return np.empty(0, dtype="float64")
    h = h[:n]
    lo = lo[:n]

    tr = h - lo
    prev_close = c[:-1]
    tr[1:] = np.maximum.reduce(
        [tr[1:], np.abs(h[1:] - prev_close), np.abs(lo[1:] - prev_close)]
    )
    return tr


def atr(
    highs: PriceInput, lows: PriceInput, closes: PriceInput, period: int = 14
) -> np.ndarray:
    """Average True Range using Wilder's smoothing.

    The first value is the plain mean of the first ``period`` TR values;
    each later TR updates it as ``(prev * (period - 1) + tr) / period``.

    Args:
        highs:  High prices, oldest first.
        lows:   Low prices.
        closes: Close prices.
        period: Smoothing period (default 14).

    Returns:
        ``len(closes) - period + 1`` ATR values, or an empty array when
        fewer than ``period`` bars are given.
    """
    if len(closes) < period:
        return np.empty(0, dtype="float64")

    tr = true_range_series(highs, lows, closes)
    seeded = np.concatenate(([tr[:period].mean()], tr[period:]))
    # Wilder's smoothing: EMA with alpha = 1/period  =>  com = period - 1
    return pd.Series(seeded).ewm(com=period - 1, adjust=False).mean().to_numpy(copy=True)


# ---------------------------------------------------------------------------
# Bollinger Bands
# ---------------------------------------------------------------------------


def bollinger_bands(
    prices: PriceInput,
    period: int = 20,
    width: float = 2.0,
    middle: str = "sma",
) -> Bands:
    """Bollinger Bands around a moving-average middle band.

    The deviation is a single number: the population standard deviation of
    the last ``period`` prices.  Every middle value is shifted by
    ``width * deviation`` to form the upper and lower bands.

    Args:
        prices: Price series, oldest first.
        period: Moving-average and deviation window (default 20).
        width:  Number of deviations between middle and outer bands.
        middle: ``"sma"`` for a windowed SMA middle band, ``"ema"`` for the
                SMA-seeded EMA.

    Returns:
        :class:`Bands`; all three arrays are empty when the input is shorter
        than ``period``.

    Raises:
        ValueError: If *middle* is not ``"sma"`` or ``"ema"``.
    """
    if middle not in _MIDDLE_BANDS:
        raise ValueError(
            f"Unknown middle band '{middle}'. Available: {', '.join(_MIDDLE_BANDS)}"
        )

    deviation = standard_deviation(prices, period)
    if deviation is None:
        deviation = 0.0

    mid = sma_list(prices, period) if middle == "sma" else ema(prices, period)
    offset = width * deviation

    logger.debug(
        "bollinger: period=%d width=%s middle=%s deviation=%.6f",
        period, width, middle, deviation,
    )
    return Bands(lower=mid - offset, middle=mid, upper=mid + offset)


def bandwidth(bands: Bands) -> np.ndarray | None:
    """Bollinger bandwidth, ``(upper - lower) / middle`` for every bar.

    Returns:
        The bandwidth series, or ``None`` when the three bands do not have
        the same length.
    """
    if not len(bands.lower) == len(bands.middle) == len(bands.upper):
        return None
    with np.errstate(divide="ignore", invalid="ignore"):
        return (bands.upper - bands.lower) / bands.middle
