"""Trend classifiers for every indicator family.

Each classifier looks only at the last two or three values of an indicator
(plus, for breakouts and bands, the latest prices) and returns a
:class:`~signals.base.Trend`.  Unlike the indicator computations, which
return empty results on short input, classifiers raise :class:`ValueError`
when they are handed fewer points than the comparison needs.
"""

from __future__ import annotations

from indicators.primitives import PriceInput, as_array, ema
from indicators.types import Bands, MacdResult, OscillatorResult
from signals.base import Trend


def _require(values, minimum: int, label: str) -> None:
    if len(values) < minimum:
        raise ValueError(f"{label} must have at least {minimum} values, got {len(values)}")


def _crossover(prev_a: float, cur_a: float, prev_b: float, cur_b: float) -> Trend:
    """Direction in which series *a* crossed series *b* between two points."""
    if prev_a < prev_b and cur_a > cur_b:
        return Trend.BULLISH
    if prev_a > prev_b and cur_a < cur_b:
        return Trend.BEARISH
    return Trend.NONE


# ---------------------------------------------------------------------------
# Volatility
# ---------------------------------------------------------------------------


def atr_breakout_signal(
    atr: PriceInput,
    multiplier: float,
    close: float,
    high: float,
    low: float,
) -> Trend:
    """Volatility breakout of the latest close.

    The bounds sit ``multiplier`` ATRs above and below the midpoint of the
    latest bar's high and low.  The ATR used is the one of the previous bar,
    so the breakout bar does not widen its own threshold.

    Args:
        atr:        ATR series, at least 2 values.
        multiplier: Number of ATRs between the midpoint and each bound.
        close:      Latest close.
        high:       Latest high.
        low:        Latest low.

    Returns:
        BULLISH above the upper bound, BEARISH below the lower bound.
    """
    _require(atr, 2, "ATR")
    prev_atr = float(as_array(atr)[-2])
    midpoint = (high + low) / 2.0
    upper = midpoint + multiplier * prev_atr
    lower = midpoint - multiplier * prev_atr

    if close > upper:
        return Trend.BULLISH
    if close < lower:
        return Trend.BEARISH
    return Trend.NONE


def bollinger_signal(bands: Bands, prices: PriceInput) -> Trend:
    """Price re-entering the bands.

    BULLISH when price was below the lower band and is now above it,
    BEARISH when price was above the upper band and is now below it.
    The last two band values are compared with the last two prices.
    """
    _require(bands.middle, 2, "Bands")
    _require(prices, 2, "Prices")
    p = as_array(prices)

    if p[-2] < bands.lower[-2] and p[-1] > bands.lower[-1]:
        return Trend.BULLISH
    if p[-2] > bands.upper[-2] and p[-1] < bands.upper[-1]:
        return Trend.BEARISH
    return Trend.NONE


# ---------------------------------------------------------------------------
# Momentum
# ---------------------------------------------------------------------------


def rsi_signal(
    rsi: PriceInput, oversold: float = 30.0, overbought: float = 70.0
) -> Trend:
    """RSI leaving an extreme zone.

    BULLISH when RSI crosses back above *oversold*, BEARISH when it crosses
    back below *overbought*.
    """
    _require(rsi, 2, "RSI")
    values = as_array(rsi)
    prev, cur = values[-2], values[-1]

    if prev < oversold and cur > oversold:
        return Trend.BULLISH
    if prev > overbought and cur < overbought:
        return Trend.BEARISH
    return Trend.NONE


def macd_signal_trend(line: PriceInput, signal: PriceInput) -> Trend:
    """MACD line crossing its signal line between the last two bars."""
    _require(line, 2, "MACD line")
    _require(signal, 2, "Signal line")
    m = as_array(line)
    s = as_array(signal)
    return _crossover(m[-2], m[-1], s[-2], s[-1])


def macd_result_signal(result: MacdResult) -> Trend:
    """:func:`macd_signal_trend` over a :class:`MacdResult`."""
    return macd_signal_trend(result.line, result.signal)


def stochastic_signal(result: OscillatorResult) -> Trend:
    """%K crossing %D between the last two values of each."""
    _require(result.d, 2, "%D")
    _require(result.k, 2, "%K")
    return _crossover(result.k[-2], result.k[-1], result.d[-2], result.d[-1])


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------


def obv_trend(obv: PriceInput) -> Trend:
    """Three-point run of On-Balance Volume.

    BULLISH when the last three values strictly rise, BEARISH when they
    strictly fall.
    """
    _require(obv, 3, "OBV")
    a, b, c = as_array(obv)[-3:]

    if a < b < c:
        return Trend.BULLISH
    if a > b > c:
        return Trend.BEARISH
    return Trend.NONE


def obv_trend_with_ema(
    obv: PriceInput, short_period: int = 12, long_period: int = 24
) -> Trend:
    """Short EMA of On-Balance Volume crossing its long EMA.

    Both EMAs are aligned on their most recent values.  Needs at least
    ``long_period + 1`` OBV values so the long EMA has two points.
    """
    short_ema = ema(obv, short_period)
    long_ema = ema(obv, long_period)
    _require(short_ema, 2, "Short OBV EMA")
    _require(long_ema, 2, "Long OBV EMA")
    return _crossover(short_ema[-2], short_ema[-1], long_ema[-2], long_ema[-1])
