"""Technical indicators module.

Pure functions over ordered price/volume sequences (oldest value first),
built on numpy and pandas.  Series results are ``numpy`` arrays that start
at the first bar with enough history; an empty array means the input was
too short for the requested period.
"""

from indicators.momentum import macd, macd_line, macd_signal, rsi, stochastic
from indicators.primitives import (
    ema,
    ema_first_value_seed,
    sma,
    sma_list,
    sma_windowed,
    standard_deviation,
)
from indicators.types import Bands, MacdResult, OscillatorResult
from indicators.volatility import (
    atr,
    bandwidth,
    bollinger_bands,
    true_range,
    true_range_series,
)
from indicators.volume import obv, obv_period

__all__ = [
    "Bands",
    "MacdResult",
    "OscillatorResult",
    "atr",
    "bandwidth",
    "bollinger_bands",
    "ema",
    "ema_first_value_seed",
    "macd",
    "macd_line",
    "macd_signal",
    "obv",
    "obv_period",
    "rsi",
    "sma",
    "sma_list",
    "sma_windowed",
    "standard_deviation",
    "stochastic",
    "true_range",
    "true_range_series",
]
