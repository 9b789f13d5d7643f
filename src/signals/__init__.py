"""Trend classifiers and the signal engine.

Classify an indicator directly via the functions in
:mod:`signals.classifiers`, or run all of them at once with
:class:`SignalEngine`.
"""

from __future__ import annotations

from signals.base import Trend
from signals.classifiers import (
    atr_breakout_signal,
    bollinger_signal,
    macd_result_signal,
    macd_signal_trend,
    obv_trend,
    obv_trend_with_ema,
    rsi_signal,
    stochastic_signal,
)
from signals.engine import SignalEngine

__all__ = [
    "SignalEngine",
    "Trend",
    "atr_breakout_signal",
    "bollinger_signal",
    "macd_result_signal",
    "macd_signal_trend",
    "obv_trend",
    "obv_trend_with_ema",
    "rsi_signal",
    "stochastic_signal",
]
