"""On-Balance Volume."""

from __future__ import annotations

import numpy as np

from indicators.primitives import PriceInput, as_array


def _signed_volume(closes: np.ndarray, prev_closes: np.ndarray, volumes: np.ndarray) -> np.ndarray:
    return np.sign(closes - prev_closes) * volumes


def obv(closes: PriceInput, volumes: PriceInput) -> np.ndarray:
    """On-Balance Volume over the whole series.

    Starts at the first bar's volume, then adds the bar's volume on an up
    close, subtracts it on a down close and carries the total on an
    unchanged close.

    Args:
        closes:  Close prices, oldest first.
        volumes: Volumes, index-aligned with *closes*.

    Returns:
        One OBV value per close (empty for empty input).  Integer volumes
        give an ``int64`` result, anything else ``float64``.
    """
    dtype = "int64" if np.issubdtype(np.asarray(volumes).dtype, np.integer) else "float64"
    c = as_array(closes)
    v = as_array(volumes)[: len(c)]
    if len(c) == 0:
        return np.empty(0, dtype=dtype)

    steps = np.concatenate(([v[0]], _signed_volume(c[1:], c[:-1], v[1:])))
    return np.cumsum(steps).astype(dtype)


def obv_period(closes: PriceInput, volumes: PriceInput, period: int) -> np.ndarray:
    """On-Balance Volume over the last ``period`` bars only.

    Starts at 0.  Each of the final ``period`` bars is still compared with the
    bar just before it; the very first bar of the series is compared with a
    previous close of 0.

    Returns:
        ``period + 1`` values (the leading 0 included), or an empty array
        when there are not more than ``period`` closes.
    """
    c = as_array(closes)
    v = as_array(volumes)
    n = len(c)
    if n <= period:
        return np.empty(0, dtype="float64")

    start = n - period
    prev = np.concatenate(([0.0], c[:-1]))
    steps = _signed_volume(c[start:], prev[start:], v[start:n])
    return np.concatenate(([0.0], np.cumsum(steps)))
