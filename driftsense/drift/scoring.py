"""
Score aggregation and severity mapping for drift checks.

Combines the four method scores into one weighted score, scales the threshold
for small samples and maps the result to a severity level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from driftsense.core.config import DriftMethod

from .schema import DriftScores, DriftSeverity, MethodResult

# Below this sample size histogram methods are unreliable and KS is favoured.
SMALL_SAMPLE_SIZE = 20
SMALL_SAMPLE_WEIGHTS: Dict[DriftMethod, float] = {
    DriftMethod.KS: 0.7,
    DriftMethod.JSD: 0.15,
    DriftMethod.STATISTICAL: 0.15,
}
PRIMARY_WEIGHT = 0.6

SEVERITY_ORDER = [
    DriftSeverity.NONE,
    DriftSeverity.LOW,
    DriftSeverity.MEDIUM,
    DriftSeverity.HIGH,
    DriftSeverity.CRITICAL,
]


def combine_scores(scores: DriftScores, primary: DriftMethod, min_sample_size: int) -> float:
    """
    Weighted average of the method scores.

    Small samples with PSI as primary use the fixed KS-heavy blend (PSI gets
    no weight). Otherwise the primary method gets 60% and the remaining 40% is
    split evenly across the other three.
    """

    primary = DriftMethod(primary)
    if min_sample_size < SMALL_SAMPLE_SIZE and primary == DriftMethod.PSI:
        return sum(weight * scores.score_for(method) for method, weight in SMALL_SAMPLE_WEIGHTS.items())

    others = [scores.score_for(method) for method in DriftMethod if method != primary]
    other_weight = (1.0 - PRIMARY_WEIGHT) / len(others)
    return PRIMARY_WEIGHT * scores.score_for(primary) + other_weight * sum(others)


def effective_threshold(threshold: float, min_sample_size: int) -> float:
    """
    Raise the threshold for small samples, whose CDF steps and bins are coarse.
    """

    if min_sample_size <= 10:
        return threshold * 1.75
    if min_sample_size <= SMALL_SAMPLE_SIZE:
        return threshold * 1.5
    return threshold


@dataclass
class SeverityMapper:
    """
    Maps a weighted score to a severity level relative to a threshold.
    """

    threshold: float

    def severity(self, score: float) -> DriftSeverity:
        if score < self.threshold * 0.5:
            return DriftSeverity.NONE
        if score < self.threshold:
            return DriftSeverity.LOW
        if score < self.threshold * 2:
            return DriftSeverity.MEDIUM
        if score < self.threshold * 3:
            return DriftSeverity.HIGH
        return DriftSeverity.CRITICAL

    def classify(self, score: float) -> Tuple[bool, DriftSeverity]:
        """Return (is_drift, severity); severity is NONE unless drift."""
        is_drift = score > self.threshold
        if not is_drift:
            return False, DriftSeverity.NONE
        return True, self.severity(score)


def method_results(scores: DriftScores, threshold: float) -> Dict[str, MethodResult]:
    """Per-method crossing of the unscaled threshold."""

    results: Dict[str, MethodResult] = {}
    for method in DriftMethod:
        score = scores.score_for(method)
        results[method.value] = MethodResult(score=score, is_drift=score > threshold)
    return results


def overall_severity(*severities: DriftSeverity) -> DriftSeverity:
    """
    Return the highest severity among inputs.
    """

    if not severities:
        return DriftSeverity.NONE
    highest_index = max(SEVERITY_ORDER.index(DriftSeverity(s)) for s in severities)
    return SEVERITY_ORDER[highest_index]


def severity_at_least(severity: DriftSeverity, minimum: DriftSeverity) -> bool:
    return SEVERITY_ORDER.index(DriftSeverity(severity)) >= SEVERITY_ORDER.index(DriftSeverity(minimum))
