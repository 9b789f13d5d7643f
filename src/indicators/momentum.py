"""Momentum oscillators: RSI, MACD and the Stochastic Oscillator.

Division by zero is not special-cased.  RSI over a window with no losses
yields 100 (an infinite RS ratio); with neither gains nor losses it yields
NaN.  A Stochastic window whose high equals its low yields NaN or +/-inf.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from indicators.primitives import PriceInput, as_array, ema, sma_list, sma_windowed
from indicators.types import MacdResult, OscillatorResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# RSI
# ---------------------------------------------------------------------------


def rsi(closes: PriceInput, period: int = 14) -> np.ndarray:
    """Relative Strength Index with a growing averaging window.

    Every close-to-close move contributes a gain or a loss (the other side
    gets 0).  From close ``period`` onward, the average gain and average loss
    are taken over *all* moves seen so far, not a fixed window, and
    ``RSI = 100 - 100 / (1 + avg_gain / avg_loss)``.

    Args:
        closes: Close prices, oldest first.
        period: Index of the first close that gets an RSI value.

    Returns:
        ``len(closes) - period`` RSI values, or an empty array when there
        are not more than ``period`` closes.
    """
    values = as_array(closes)
    if len(values) <= period:
        return np.empty(0, dtype="float64")

    delta = np.diff(values)
    gain = np.where(delta > 0, delta, 0.0)
    loss = np.where(delta < 0, -delta, 0.0)

    # Running means over the whole history seen so far.
    count = np.arange(1, len(delta) + 1, dtype="float64")
    avg_gain = np.cumsum(gain) / count
    avg_loss = np.cumsum(loss) / count

    with np.errstate(divide="ignore", invalid="ignore"):
        rs = avg_gain[period - 1:] / avg_loss[period - 1:]
        return 100.0 - (100.0 / (1.0 + rs))


# ---------------------------------------------------------------------------
# MACD
# ---------------------------------------------------------------------------


def _left_pad(values: np.ndarray, length: int, fill: float) -> np.ndarray:
    missing = length - len(values)
    if missing <= 0:
        return values
    return np.concatenate((np.full(missing, fill, dtype="float64"), values))


def macd_line(
    prices: PriceInput, short_period: int = 12, long_period: int = 26
) -> np.ndarray:
    """MACD line, ``short EMA - long EMA``.

    The long EMA starts ``long_period - short_period`` bars later than the
    short one.  Those missing leading values are filled with the mean of every
    ``long_period``-long window mean (:func:`sma_windowed`) so that every bar
    of the short EMA gets a line value.

    Returns:
        ``len(prices) - short_period + 1`` values, or an empty array when
        fewer than ``long_period`` prices are given.

    Raises:
        ValueError: If ``short_period`` exceeds ``long_period``.
    """
    if short_period > long_period:
        raise ValueError("short_period must not exceed long_period")

    short_ema = ema(prices, short_period)
    long_ema = ema(prices, long_period)
    if len(long_ema) == 0:
        return np.empty(0, dtype="float64")

    long_ema = _left_pad(long_ema, len(short_ema), sma_windowed(prices, long_period))
    return short_ema - long_ema


def macd_signal(line: PriceInput, signal_period: int = 9) -> np.ndarray:
    """Signal line: EMA of the MACD line, left-padded to the line's length.

    The padding value is :func:`sma_windowed` of the line over
    ``signal_period``.  When the line is shorter than ``signal_period`` there
    is no EMA at all and every signal value is the mean of the whole line.
    """
    values = as_array(line)
    if len(values) == 0:
        return np.empty(0, dtype="float64")

    fill = sma_windowed(values, signal_period)
    if fill is None:
        fill = float(values.mean())
    return _left_pad(ema(values, signal_period), len(values), fill)


def macd(
    prices: PriceInput,
    short_period: int = 12,
    long_period: int = 26,
    signal_period: int = 9,
) -> MacdResult:
    """Moving Average Convergence Divergence.

    Args:
        prices:        Price series (typically close prices), oldest first.
        short_period:  Fast EMA period (default 12).
        long_period:   Slow EMA period (default 26).
        signal_period: Signal line EMA period (default 9).

    Returns:
        :class:`MacdResult` whose line, signal and histogram
        (``line - signal``) have the same length.
    """
    line = macd_line(prices, short_period, long_period)
    signal = macd_signal(line, signal_period)
    logger.debug(
        "macd(%d, %d, %d): %d values", short_period, long_period, signal_period, len(line)
    )
    return MacdResult(line=line, signal=signal, histogram=line - signal)


# ---------------------------------------------------------------------------
# Stochastic Oscillator
# ---------------------------------------------------------------------------


def stochastic(
    highs: PriceInput,
    lows: PriceInput,
    closes: PriceInput,
    period: int = 14,
    period_d: int = 3,
) -> OscillatorResult:
    """Stochastic Oscillator %K and %D.

    When fewer closes than highs/lows are given, the closes are aligned to
    the most recent bars by left-padding them with zeros.  Then for every bar
    ``i`` from ``period - 1`` on::

        %K = 100 * (close[i] - lowest low) / (highest high - lowest low)

    over the ``period`` bars ending at ``i``.  %D is the windowed SMA of %K
    over ``period_d`` values.

    Args:
        highs:    High prices, oldest first.
        lows:     Low prices, index-aligned with *highs*.
        closes:   Close prices; may be shorter than *highs*.
        period:   %K lookback (default 14).
        period_d: %D smoothing (default 3).

    Returns:
        :class:`OscillatorResult`; both arrays are empty when fewer than
        ``period`` bars are given.

    Raises:
        ValueError: If *lows* is shorter than *highs* or *closes* is longer.
    """
    h = as_array(highs)
    lo = as_array(lows)
    c = as_array(closes)
    n = len(h)
    if len(lo) < n:
        raise ValueError("lows must cover every high")
    if len(c) > n:
        raise ValueError("closes must not outnumber highs and lows")
    if n < period:
        empty = np.empty(0, dtype="float64")
        return OscillatorResult(k=empty, d=empty.copy())

    full_closes = _left_pad(c, n, 0.0)
    lowest = pd.Series(lo[:n]).rolling(window=period, min_periods=period).min()
    highest = pd.Series(h).rolling(window=period, min_periods=period).max()
    lowest = lowest.to_numpy(copy=True)[period - 1:]
    highest = highest.to_numpy(copy=True)[period - 1:]

    with np.errstate(divide="ignore", invalid="ignore"):
        k = 100.0 * (full_closes[period - 1:] - lowest) / (highest - lowest)

    return OscillatorResult(k=k, d=sma_list(k, period_d))
