"""
Schema definitions for drift detection.

All drift outputs are deterministic and explainable. Each result carries the
per-method scores, the weighted score and the threshold it was judged against.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from driftsense.core.config import DriftMethod


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DriftSeverity(str, Enum):
    """Severity levels for drift verdicts."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BaselineStatistics(BaseModel):
    """
    Summary statistics of a sample, computed in a single pass.

    Fields:
    - mean: central tendency
    - variance: population variance (M2 / n)
    - std: square root of variance
    - min/max: observed range
    - count: number of points
    """

    mean: float
    variance: float
    std: float
    min: float
    max: float
    count: int


class BaselineDistribution(BaseModel):
    """
    Reference sample with everything detection needs precomputed.

    Replaced wholesale on every baseline update, never mutated.
    """

    model_config = ConfigDict(frozen=True)

    data: Tuple[float, ...]
    sorted_data: Tuple[float, ...]
    statistics: BaselineStatistics
    histograms: Dict[int, Tuple[int, ...]]
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)


class DriftScores(BaseModel):
    """Raw score of each statistical method."""

    psi: float = Field(ge=0.0)
    ks: float = Field(ge=0.0, le=1.0)
    jsd: float = Field(ge=0.0)
    statistical: float = Field(ge=0.0)

    def score_for(self, method: DriftMethod) -> float:
        return getattr(self, DriftMethod(method).value)


class MethodResult(BaseModel):
    """Per-method threshold crossing (informational, never drives the verdict)."""

    score: float
    is_drift: bool


class DriftResult(BaseModel):
    """
    Outcome of a single drift check.

    Fields:
    - timestamp: when the result was produced (refreshed on cache hits and skips)
    - is_drift: verdict of the weighted score against effective_threshold
    - severity: categorical severity, NONE unless is_drift
    - scores: raw scores of the four methods
    - methods: per-method score against the unscaled threshold
    - average_score: sample-size aware weighted score
    - effective_threshold: threshold after small-sample scaling
    - primary_method: method favoured by the weighting
    - cached: True when served from the result cache
    - skipped: True when short-circuited by adaptive sampling
    - reason: why the check was skipped
    """

    timestamp: datetime = Field(default_factory=utc_now)
    is_drift: bool
    severity: DriftSeverity
    scores: DriftScores
    methods: Dict[str, MethodResult]
    average_score: float = Field(ge=0.0)
    effective_threshold: float = Field(gt=0.0)
    primary_method: DriftMethod
    cached: bool = False
    skipped: bool = False
    reason: Optional[str] = None


class CompressedResult(BaseModel):
    """History entry reduced to its trend-relevant fields."""

    timestamp: datetime
    is_drift: bool
    severity: DriftSeverity
    average_score: float
    compressed: bool = True

    @classmethod
    def from_result(cls, result: DriftResult) -> "CompressedResult":
        return cls(
            timestamp=result.timestamp,
            is_drift=result.is_drift,
            severity=result.severity,
            average_score=result.average_score,
        )


HistoryEntry = Union[DriftResult, CompressedResult]


class DetectionOptions(BaseModel):
    """
    Per-call switches for the detection shortcuts.

    Disable adaptive_sampling when every call must be recomputed.
    """

    model_config = ConfigDict(extra="forbid")

    memoization: bool = True
    adaptive_sampling: bool = True


class EngineStats(BaseModel):
    """Running counters of an engine instance."""

    total_checks: int = 0
    drift_detected: int = 0
    checks_skipped: int = 0
    cache_hits: int = 0
    start_time: datetime = Field(default_factory=utc_now)


class StatsReport(BaseModel):
    """Snapshot of engine counters with derived rates."""

    total_checks: int
    drift_detected: int
    checks_skipped: int
    cache_hits: int
    drift_rate: str
    uptime_seconds: float
    recent_history: List[HistoryEntry]


class Episode(BaseModel):
    """
    Outcome record handed to the external sink.

    reward is high for stable checks and low for drift.
    """

    session_id: str = Field(..., min_length=1)
    task: str = Field(..., min_length=1)
    reward: float = Field(ge=0.0, le=1.0)
    success: bool
    critique: str
