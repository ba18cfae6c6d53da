"""
Numeric helpers shared by the drift methods and domain monitors.

All functions are single-pass where possible and accept any sequence of floats.
Callers validate input first; helpers return neutral values for empty input
instead of raising.
"""

from __future__ import annotations

from math import floor, inf, isfinite, sqrt
from typing import Iterable, Optional, Sequence, Tuple

from .schema import BaselineStatistics


def _welford(values: Sequence[float], scale: float = 1.0) -> Tuple[int, float, float]:
    count = 0
    mean = 0.0
    m2 = 0.0
    for value in values:
        value = value / scale
        count += 1
        delta = value - mean
        mean += delta / count
        m2 += delta * (value - mean)
    return count, mean, m2


def summarize(values: Sequence[float]) -> BaselineStatistics:
    """
    Mean, population variance, std, min, max and count.

    Uses Welford's update for numerical stability. Variance is M2 / n and is
    0.0 for fewer than two points. Samples whose spread overflows a float are
    accumulated relative to their largest magnitude instead; their variance
    may then be reported as inf while mean and std stay finite.
    """

    lo, hi = combined_range(values)
    count, mean, m2 = _welford(values)

    if count == 0:
        return BaselineStatistics(mean=0.0, variance=0.0, std=0.0, min=0.0, max=0.0, count=0)

    scale = 1.0
    if not (isfinite(mean) and isfinite(m2)):
        scale = max(abs(lo), abs(hi))
        count, mean, m2 = _welford(values, scale)

    variance = m2 / count if count > 1 else 0.0
    # Rounding in M2 can leave a tiny negative residue for constant samples.
    variance = max(variance, 0.0)
    return BaselineStatistics(
        mean=mean * scale,
        variance=variance * scale * scale,
        std=sqrt(variance) * scale,
        min=lo,
        max=hi,
        count=count,
    )


def mean_std(values: Sequence[float]) -> Tuple[float, float]:
    stats = summarize(values)
    return stats.mean, stats.std


def combined_range(*samples: Iterable[float]) -> Tuple[float, float]:
    """Min and max across all samples in a single scan."""

    lo = inf
    hi = -inf
    for sample in samples:
        for value in sample:
            if value < lo:
                lo = value
            if value > hi:
                hi = value
    return lo, hi


def percentile(values: Sequence[float], q: float, presorted: bool = False) -> float:
    """
    Linear-interpolated percentile, q in [0, 100].

    Returns 0.0 for an empty sample.
    """

    if not values:
        return 0.0
    ordered = values if presorted else sorted(values)
    position = (q / 100.0) * (len(ordered) - 1)
    lower = floor(position)
    upper = min(lower + 1, len(ordered) - 1)
    weight = position - lower
    if weight == 0.0:
        return float(ordered[lower])
    return ordered[lower] * (1.0 - weight) + ordered[upper] * weight


def median(values: Sequence[float], presorted: bool = False) -> float:
    return percentile(values, 50.0, presorted=presorted)


def linear_trend(values: Sequence[float], x: Optional[Sequence[float]] = None) -> float:
    """
    Least-squares slope of values against x (defaults to 0..n-1).

    Returns 0.0 for fewer than two points or constant x.
    """

    n = len(values)
    if n < 2:
        return 0.0
    xs = list(x) if x is not None else list(range(n))
    if len(xs) != n:
        raise ValueError("x and values must have the same length")

    mean_x = sum(xs) / n
    mean_y = sum(values) / n
    covariance = 0.0
    spread = 0.0
    for xi, yi in zip(xs, values):
        dx = xi - mean_x
        covariance += dx * (yi - mean_y)
        spread += dx * dx
    return covariance / spread if spread else 0.0
