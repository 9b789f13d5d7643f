"""Base types for the signal layer."""

from __future__ import annotations

from enum import Enum


class Trend(Enum):
    """Direction reported by a trend classifier."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NONE = "NONE"
