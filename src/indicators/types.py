"""Result bundles for multi-output indicators.

Each bundle only groups parallel ``numpy`` arrays; it carries no behaviour
beyond a length helper.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Bands:
    """Bollinger Bands, index-aligned to each other (not to the input)."""

    lower: np.ndarray
    middle: np.ndarray
    upper: np.ndarray

    def __len__(self) -> int:
        return len(self.middle)


@dataclass(frozen=True)
class MacdResult:
    """MACD line, signal line and histogram, all of equal length."""

    line: np.ndarray
    signal: np.ndarray
    histogram: np.ndarray

    def __len__(self) -> int:
        return len(self.line)


@dataclass(frozen=True)
class OscillatorResult:
    """Stochastic %K and its %D smoothing.

    Attributes:
        k: %K values, one per bar from ``period - 1`` on.
        d: Windowed SMA of ``k``; shorter than ``k`` by ``period_d - 1``.
    """

    k: np.ndarray
    d: np.ndarray
