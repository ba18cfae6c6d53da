"""
Fixed-width histograms for the binned drift methods.

Both samples of a comparison are binned over the same explicit range so their
bucket boundaries line up.
"""

from __future__ import annotations

from math import floor, isfinite
from typing import Iterable, List, Sequence

# Bin counts precomputed for every baseline.
STANDARD_BIN_COUNTS = (3, 5, 10, 20)


def adaptive_bin_count(min_sample_size: int) -> int:
    """
    Fewer bins for smaller samples so buckets stay populated.
    """

    if min_sample_size < 10:
        return 3
    if min_sample_size < 50:
        return 5
    if min_sample_size < 200:
        return 10
    return 20


def histogram(values: Iterable[float], bins: int, lo: float, hi: float) -> List[int]:
    """
    Count values into `bins` equal-width buckets spanning [lo, hi].

    The top edge is inclusive. Values outside the range are clamped into the
    first or last bucket. A zero-width range puts everything into bucket 0.
    """

    if bins < 1:
        raise ValueError(f"bins must be positive, got {bins}")

    counts = [0] * bins
    # A span wider than the largest float is bucketed on halved values.
    scale = 1.0 if isfinite(hi - lo) else 0.5
    start = lo * scale
    width = (hi * scale - start) / bins

    if width == 0:
        counts[0] = sum(1 for _ in values)
        return counts

    for value in values:
        position = (value * scale - start) / width
        if position >= bins:
            index = bins - 1
        elif position < 0:
            index = 0
        else:
            index = floor(position)
        counts[index] += 1
    return counts

    for value in values:
        index = floor((value - lo) / width)
        if index >= bins:
            index = bins - 1
        elif index < 0:
            index = 0
        counts[index] += 1
    return counts


def proportions(counts: Sequence[int], total: int) -> List[float]:
    return [c / total for c in counts]
