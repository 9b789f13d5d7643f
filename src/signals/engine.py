"""Signal evaluation engine.

The :class:`SignalEngine` computes every indicator over one OHLCV series and
runs the matching trend classifier, collecting one
:class:`~signals.base.Trend` per classifier.  Parameters come from the
``indicators`` config section, overridden by whatever the caller passes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pandas as pd

from app.config import load_config
from indicators import atr, bollinger_bands, macd, obv, rsi, stochastic
from indicators.primitives import PriceInput, as_array
from signals.base import Trend
from signals.classifiers import (
    atr_breakout_signal,
    bollinger_signal,
    macd_result_signal,
    obv_trend,
    obv_trend_with_ema,
    rsi_signal,
    stochastic_signal,
)

logger = logging.getLogger(__name__)

_DEFAULT_PARAMS: dict[str, Any] = {
    "atr_period": 14,
    "atr_multiplier": 2.0,
    "bb_period": 20,
    "bb_width": 2.0,
    "bb_middle": "sma",
    "rsi_period": 14,
    "rsi_oversold": 30.0,
    "rsi_overbought": 70.0,
    "macd_short": 12,
    "macd_long": 26,
    "macd_signal": 9,
    "stoch_period": 14,
    "stoch_period_d": 3,
    "obv_short": 12,
    "obv_long": 24,
}

_REQUIRED_COLUMNS = ("high", "low", "close", "volume")


class SignalEngine:
    """Runs every trend classifier over one price history.

    Parameter precedence, lowest first: built-in defaults, the
    ``indicators`` config section, the *params* given here.
    """

    def __init__(self, params: dict[str, Any] | None = None) -> None:
        configured = load_config().get("indicators") or {}
        self.params: dict[str, Any] = {**_DEFAULT_PARAMS, **configured, **(params or {})}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(self, df: pd.DataFrame) -> dict[str, Trend]:
        """Evaluate an OHLCV DataFrame, oldest row first.

        Raises:
            ValueError: If a required column is missing.
        """
        missing = [col for col in _REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"DataFrame is missing columns: {', '.join(missing)}")

        return self.evaluate_series(
            closes=df["close"].to_numpy(),
            highs=df["high"].to_numpy(),
            lows=df["low"].to_numpy(),
            volumes=df["volume"].to_numpy(),
        )

    def evaluate_series(
        self,
        closes: PriceInput,
        highs: PriceInput,
        lows: PriceInput,
        volumes: PriceInput,
    ) -> dict[str, Trend]:
        """Evaluate parallel, index-aligned series.

        Returns:
            Trend per classifier name.  Classifiers without enough history
            are logged and left out; fewer than two bars gives ``{}``.
        """
        c = as_array(closes)
        h = as_array(highs)
        lo = as_array(lows)
        v = as_array(volumes)
        if len(c) < 2:
            logger.info("Skipping evaluation -- insufficient data (%d bars)", len(c))
            return {}

        p = self.params
        checks: dict[str, Callable[[], Trend]] = {
            "atr": lambda: atr_breakout_signal(
                atr(h, lo, c, int(p["atr_period"])),
                float(p["atr_multiplier"]),
                close=float(c[-1]),
                high=float(h[-1]),
                low=float(lo[-1]),
            ),
            "bollinger": lambda: bollinger_signal(
                bollinger_bands(
                    c, int(p["bb_period"]), float(p["bb_width"]), str(p["bb_middle"])
                ),
                c,
            ),
            "rsi": lambda: rsi_signal(
                rsi(c, int(p["rsi_period"])),
                float(p["rsi_oversold"]),
                float(p["rsi_overbought"]),
            ),
            "macd": lambda: macd_result_signal(
                macd(c, int(p["macd_short"]), int(p["macd_long"]), int(p["macd_signal"]))
            ),
            "stochastic": lambda: stochastic_signal(
                stochastic(h, lo, c, int(p["stoch_period"]), int(p["stoch_period_d"]))
            ),
            "obv": lambda: obv_trend(obv(c, v)),
            "obv_ema": lambda: obv_trend_with_ema(
                obv(c, v), int(p["obv_short"]), int(p["obv_long"])
            ),
        }

        results: dict[str, Trend] = {}
        for name, check in checks.items():
            try:
                results[name] = check()
            except ValueError as exc:
                logger.warning("Skipping %s: %s", name, exc)
                continue
            logger.debug("%s -> %s", name, results[name].value)

        return results
