"""
Statistical drift methods.

Implements explainable two-sample comparisons:
- PSI (Population Stability Index)
- Kolmogorov-Smirnov statistic
- Jensen-Shannon divergence
- Mean/std shift ("statistical" drift)

Every method is a pure function of (baseline, current). Passing the
BaselineDistribution built from `baseline` as `reference` lets a method reuse
its sorted copy, summary statistics and cached histograms instead of
recomputing them; results are identical either way.
"""

from __future__ import annotations

from math import isclose, isfinite, log
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from driftsense.core.config import DriftMethod

from .histogram import adaptive_bin_count, histogram, proportions
from .numeric import combined_range, summarize
from .schema import BaselineDistribution

# Floor applied to bin proportions inside the PSI log ratio.
PSI_EPSILON = 0.005
# Floor applied to every probability inside KL divergence.
KL_EPSILON = 0.0001
# Score reported when the baseline has zero variance and the current sample differs.
MAX_STATISTICAL_SCORE = 10.0

DriftMethodFn = Callable[..., float]


def _binned_proportions(
    baseline: Sequence[float],
    current: Sequence[float],
    reference: Optional[BaselineDistribution],
) -> Tuple[List[float], List[float]]:
    bins = adaptive_bin_count(min(len(baseline), len(current)))
    lo, hi = combined_range(baseline, current)

    base_counts = None
    if reference is not None:
        stats = reference.statistics
        # Cached histograms span the baseline's own range only.
        if stats.min == lo and stats.max == hi:
            cached = reference.histograms.get(bins)
            if cached is not None:
                base_counts = list(cached)
    if base_counts is None:
        base_counts = histogram(baseline, bins, lo, hi)

    current_counts = histogram(current, bins, lo, hi)
    return (
        proportions(base_counts, len(baseline)),
        proportions(current_counts, len(current)),
    )


def population_stability_index(
    baseline: Sequence[float],
    current: Sequence[float],
    reference: Optional[BaselineDistribution] = None,
) -> float:
    """
    PSI over adaptively binned proportions.

    Proportions are floored at PSI_EPSILON inside the log ratio so empty bins
    neither produce log(0) nor dominate the sum. Always >= 0, unbounded above.
    """

    base_pct, current_pct = _binned_proportions(baseline, current, reference)

    psi = 0.0
    for b, c in zip(base_pct, current_pct):
        if b == 0.0 and c == 0.0:
            continue
        psi += (c - b) * log(max(c, PSI_EPSILON) / max(b, PSI_EPSILON))
    return abs(psi)


def kolmogorov_smirnov(
    baseline: Sequence[float],
    current: Sequence[float],
    reference: Optional[BaselineDistribution] = None,
) -> float:
    """
    Two-sample KS statistic: largest gap between the empirical CDFs.

    Merge-scans both sorted samples. At each distinct value the baseline
    pointer consumes its ties first, then the current pointer; the gap is only
    measured once both have passed the value, so equal samples score 0.
    """

    sorted_base = reference.sorted_data if reference is not None else sorted(baseline)
    sorted_current = sorted(current)
    n_base = len(sorted_base)
    n_current = len(sorted_current)

    i = j = 0
    max_gap = 0.0
    while i < n_base and j < n_current:
        value = min(sorted_base[i], sorted_current[j])
        while i < n_base and sorted_base[i] == value:
            i += 1
        while j < n_current and sorted_current[j] == value:
            j += 1
        gap = abs(i / n_base - j / n_current)
        if gap > max_gap:
            max_gap = gap
    # Once one sample is exhausted the gap only shrinks towards 0.
    return max_gap


def kl_divergence(p: Sequence[float], q: Sequence[float], epsilon: float = KL_EPSILON) -> float:
    divergence = 0.0
    for pi, qi in zip(p, q):
        pi = max(pi, epsilon)
        qi = max(qi, epsilon)
        divergence += pi * log(pi / qi)
    return divergence


def jensen_shannon_divergence(
    baseline: Sequence[float],
    current: Sequence[float],
    reference: Optional[BaselineDistribution] = None,
) -> float:
    """
    Symmetric divergence between the binned distributions.

    JSD = 0.5 * KL(p || m) + 0.5 * KL(q || m) with m = (p + q) / 2.
    """

    p, q = _binned_proportions(baseline, current, reference)
    m = [(pi + qi) / 2.0 for pi, qi in zip(p, q)]
    jsd = 0.5 * kl_divergence(p, m) + 0.5 * kl_divergence(q, m)
    return max(jsd, 0.0)


def statistical_drift(
    baseline: Sequence[float],
    current: Sequence[float],
    reference: Optional[BaselineDistribution] = None,
) -> float:
    """
    Average of the mean shift and the std shift, both in baseline std units.

    A zero-variance baseline has no scale to normalise by. Convention: score 0
    when the current sample is constant at the same value, otherwise
    MAX_STATISTICAL_SCORE. Non-finite results are reported as
    MAX_STATISTICAL_SCORE as well.
    """

    base = reference.statistics if reference is not None else summarize(baseline)
    cur = summarize(current)

    if base.std == 0.0:
        if cur.std == 0.0 and isclose(cur.mean, base.mean, rel_tol=1e-9, abs_tol=1e-12):
            return 0.0
        return MAX_STATISTICAL_SCORE

    mean_diff = abs(cur.mean - base.mean) / base.std
    std_diff = abs(cur.std - base.std) / base.std
    score = (mean_diff + std_diff) / 2.0
    return score if isfinite(score) else MAX_STATISTICAL_SCORE


DRIFT_METHODS: Dict[DriftMethod, DriftMethodFn] = {
    DriftMethod.PSI: population_stability_index,
    DriftMethod.KS: kolmogorov_smirnov,
    DriftMethod.JSD: jensen_shannon_divergence,
    DriftMethod.STATISTICAL: statistical_drift,
}
