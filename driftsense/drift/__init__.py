"""
Drift module: multi-method distribution drift detection.

Implements the baseline store, PSI / KS / JSD / statistical methods, weighted
scoring with severity levels, result caching, history and the engine façade.
"""

from .baseline import build_baseline, validate_sample
from .cache import AdaptiveSampler, ResultCache, fingerprint
from .engine import DriftEngine
from .history import DriftHistory, build_stats_report
from .methods import (
	DRIFT_METHODS,
	jensen_shannon_divergence,
	kolmogorov_smirnov,
	population_stability_index,
	statistical_drift,
)
from .schema import (
	BaselineDistribution,
	BaselineStatistics,
	CompressedResult,
	DetectionOptions,
	DriftResult,
	DriftScores,
	DriftSeverity,
	EngineStats,
	Episode,
	MethodResult,
	StatsReport,
)
from .scoring import SeverityMapper, combine_scores, effective_threshold, overall_severity
from .sinks import EpisodeSink, InMemoryEpisodeSink, NullEpisodeSink

__all__ = [
	"DriftEngine",
	"DriftResult",
	"DriftScores",
	"DriftSeverity",
	"MethodResult",
	"CompressedResult",
	"DetectionOptions",
	"EngineStats",
	"StatsReport",
	"Episode",
	"BaselineDistribution",
	"BaselineStatistics",
	"build_baseline",
	"validate_sample",
	"DRIFT_METHODS",
	"population_stability_index",
	"kolmogorov_smirnov",
	"jensen_shannon_divergence",
	"statistical_drift",
	"SeverityMapper",
	"combine_scores",
	"effective_threshold",
	"overall_severity",
	"ResultCache",
	"AdaptiveSampler",
	"fingerprint",
	"DriftHistory",
	"build_stats_report",
	"EpisodeSink",
	"InMemoryEpisodeSink",
	"NullEpisodeSink",
]
