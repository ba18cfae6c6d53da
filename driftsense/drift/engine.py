"""
Drift detection engine.

Holds one live baseline, runs the four statistical methods against it,
aggregates their scores into a severity verdict and records every outcome in
its history and in the injected episode sink.

The engine is not internally synchronised. Serialise calls on one instance or
use one instance per stream.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Union
from uuid import uuid4

from pydantic import ValidationError

from driftsense.core.config import DriftConfig, settings
from driftsense.core.exceptions import BaselineNotSetError, ConfigurationError, EpisodeSinkError

from .baseline import build_baseline, validate_sample
from .cache import SKIP_REASON, AdaptiveSampler, ResultCache, fingerprint
from .history import DriftHistory, build_stats_report
from .methods import DRIFT_METHODS
from .schema import (
    BaselineDistribution,
    DetectionOptions,
    DriftResult,
    DriftScores,
    EngineStats,
    Episode,
    HistoryEntry,
    StatsReport,
    utc_now,
)
from .scoring import SeverityMapper, combine_scores, effective_threshold, method_results
from .sinks import EpisodeSink, NullEpisodeSink

logger = logging.getLogger(__name__)

STABLE_REWARD = 0.9
DRIFT_REWARD = 0.3

OptionsLike = Union[DetectionOptions, Mapping, None]


class DriftEngine:
    """
    Multi-method drift detection engine.

    Notes:
    - Configuration is fixed at construction; invalid values raise
      ConfigurationError.
    - Identical samples are served from an LRU cache; samples whose mean and
      std barely moved since the last full check reuse that check's result.
    - Sink failures are logged and swallowed unless propagate_sink_errors is set.

    Example:
        >>> engine = DriftEngine(drift_threshold=0.1, sink=InMemoryEpisodeSink())
        >>> await engine.set_baseline(training_scores, {"model": "v1"})
        >>> result = await engine.detect_drift(production_scores)
        >>> result.is_drift, result.severity
    """

    def __init__(
        self,
        config: Union[DriftConfig, Mapping, None] = None,
        sink: Optional[EpisodeSink] = None,
        **overrides: Any,
    ) -> None:
        self.config = self._resolve_config(config, overrides)
        self.sink = sink if sink is not None else NullEpisodeSink()

        self._baseline: Optional[BaselineDistribution] = None
        self._history = DriftHistory(
            max_size=self.config.max_history_size,
            keep_recent=self.config.compression_keep_recent,
        )
        self._cache = ResultCache(max_size=self.config.max_cache_size)
        self._sampler = AdaptiveSampler(tolerance=self.config.adaptive_tolerance)
        self._stats = EngineStats()

    @staticmethod
    def _resolve_config(config: Union[DriftConfig, Mapping, None], overrides: Dict[str, Any]) -> DriftConfig:
        if config is None:
            data = settings.drift.model_dump()
        elif isinstance(config, DriftConfig):
            data = config.model_dump()
        elif isinstance(config, Mapping):
            data = settings.drift.model_dump()
            data.update(config)
        else:
            raise ConfigurationError(f"Unsupported config type: {type(config).__name__}")
        data.update(overrides)

        try:
            return DriftConfig(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid drift configuration: {exc}") from exc

    @property
    def baseline(self) -> Optional[BaselineDistribution]:
        return self._baseline

    @property
    def has_baseline(self) -> bool:
        return self._baseline is not None

    @property
    def history(self) -> List[HistoryEntry]:
        return list(self._history)

    @property
    def stats(self) -> EngineStats:
        return self._stats.model_copy()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def set_baseline(
        self,
        data: Sequence[float],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> BaselineDistribution:
        """
        Replace the reference distribution.

        Cached results and the adaptive-sampling snapshot belong to the old
        baseline and are dropped.

        Raises:
            DataValidationError: If `data` is empty, not numeric or not finite.
        """

        baseline = build_baseline(data, metadata)
        self._baseline = baseline
        self._cache.clear()
        self._sampler.reset()

        stats = baseline.statistics
        logger.info(
            "Baseline set: %d samples, mean=%.4f, std=%.4f",
            stats.count,
            stats.mean,
            stats.std,
        )

        await self._record_episode(
            session_prefix="baseline",
            task="set_baseline",
            reward=1.0,
            success=True,
            critique=f"Baseline set with {stats.count} samples",
        )
        return baseline

    async def detect_drift(self, current: Sequence[float], options: OptionsLike = None) -> DriftResult:
        """
        Compare `current` against the baseline.

        Raises:
            BaselineNotSetError: If no baseline has been set.
            DataValidationError: If `current` is empty, not numeric or not finite.
        """

        if self._baseline is None:
            raise BaselineNotSetError("Baseline not set. Call set_baseline() first.")

        values = validate_sample(current, label="Current")
        opts = self._resolve_options(options)

        key = None
        if opts.memoization:
            key = fingerprint(values)
            hit = self._cache.get(key)
            if hit is not None:
                result = hit.model_copy(update={"timestamp": utc_now(), "cached": True})
                self._stats.cache_hits += 1
                self._stats.total_checks += 1
                self._history.append(result)
                logger.debug("Drift check served from cache (key=%x)", key)
                await self._record_result_episode(result, note="cached")
                return result

        if opts.adaptive_sampling and self._sampler.should_skip(values):
            previous = self._sampler.last.result
            result = previous.model_copy(
                update={"timestamp": utc_now(), "skipped": True, "reason": SKIP_REASON}
            )
            self._stats.checks_skipped += 1
            self._stats.total_checks += 1
            self._history.append(result)
            logger.debug("Drift check skipped by adaptive sampling")
            await self._record_result_episode(result, note="skipped")
            return result

        result = self._compute(values)

        self._stats.total_checks += 1
        if result.is_drift:
            self._stats.drift_detected += 1
            logger.warning(
                "Drift detected: severity=%s score=%.4f threshold=%.4f",
                result.severity.value,
                result.average_score,
                result.effective_threshold,
            )
        else:
            logger.info(
                "No drift: score=%.4f threshold=%.4f",
                result.average_score,
                result.effective_threshold,
            )

        self._history.append(result)
        self._sampler.record(result, values)
        if key is not None:
            self._cache.put(key, result)

        await self._record_result_episode(result)
        return result

    def get_stats(self, recent: int = 10) -> StatsReport:
        return build_stats_report(self._stats, self._history, recent=recent)

    def _compute(self, values: Sequence[float]) -> DriftResult:
        baseline = self._baseline
        reference = baseline.data

        # Independent read-only computations, joined before aggregation.
        scores = DriftScores(
            **{
                method.value: fn(reference, values, reference=baseline)
                for method, fn in DRIFT_METHODS.items()
            }
        )

        min_sample_size = min(len(reference), len(values))
        primary = self.config.primary_method
        average = combine_scores(scores, primary, min_sample_size)
        threshold = effective_threshold(self.config.drift_threshold, min_sample_size)
        is_drift, severity = SeverityMapper(threshold).classify(average)

        return DriftResult(
            is_drift=is_drift,
            severity=severity,
            scores=scores,
            methods=method_results(scores, self.config.drift_threshold),
            average_score=average,
            effective_threshold=threshold,
            primary_method=primary,
        )

    @staticmethod
    def _resolve_options(options: OptionsLike) -> DetectionOptions:
        if options is None:
            return DetectionOptions()
        if isinstance(options, DetectionOptions):
            return options
        try:
            return DetectionOptions(**dict(options))
        except (TypeError, ValidationError) as exc:
            raise ConfigurationError(f"Invalid detection options: {exc}") from exc

    async def _record_result_episode(self, result: DriftResult, note: Optional[str] = None) -> None:
        critique = f"Drift {'detected' if result.is_drift else 'not detected'}: severity {result.severity.value}"
        if note:
            critique = f"{critique} ({note})"
        await self._record_episode(
            session_prefix="drift-check",
            task="detect_drift",
            reward=DRIFT_REWARD if result.is_drift else STABLE_REWARD,
            success=not result.is_drift,
            critique=critique,
        )

    async def _record_episode(
        self,
        session_prefix: str,
        task: str,
        reward: float,
        success: bool,
        critique: str,
    ) -> Optional[int]:
        episode = Episode(
            session_id=f"{session_prefix}-{uuid4()}",
            task=task,
            reward=reward,
            success=success,
            critique=critique,
        )

        try:
            call = self.sink.store_episode(episode)
            timeout = self.config.sink_timeout_seconds
            if timeout is not None:
                return await asyncio.wait_for(call, timeout)
            return await call
        except Exception as exc:
            if self.config.propagate_sink_errors:
                raise EpisodeSinkError(f"Episode sink rejected {task} episode: {exc}") from exc
            logger.exception("Episode sink failed for %s: %s", task, exc)
            return None
