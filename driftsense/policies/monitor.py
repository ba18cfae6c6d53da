"""
Domain drift monitor.

Wraps a DriftEngine with a DomainPolicy: the engine decides whether data
drifted, the policy decides what that means for the domain (impact, alerts,
recommendation text). Alerts and audit entries are kept in bounded buffers.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from driftsense.core.exceptions import ConfigurationError
from driftsense.drift.engine import DriftEngine, OptionsLike
from driftsense.drift.numeric import linear_trend
from driftsense.drift.schema import BaselineDistribution, DriftResult, DriftSeverity
from driftsense.drift.scoring import severity_at_least
from driftsense.drift.sinks import EpisodeSink

from .config import DomainPolicy, get_policy
from .schema import AuditEntry, DriftAlert, MonitoringReport

AUTO_ADAPT_RECOMMENDATION = "AUTO-ADAPT: Schedule model retraining on recent data"


def assess_impact(result: DriftResult, multiplier: float = 1.0) -> DriftSeverity:
    """
    Business impact of a drift result.

    The weighted score is scaled by the domain multiplier; either the engine
    severity or the scaled score can raise the impact level. Never below LOW.
    """

    adjusted = result.average_score * multiplier
    severity = result.severity

    if severity == DriftSeverity.CRITICAL or adjusted > 0.5:
        return DriftSeverity.CRITICAL
    if severity == DriftSeverity.HIGH or adjusted > 0.3:
        return DriftSeverity.HIGH
    if severity == DriftSeverity.MEDIUM or adjusted > 0.15:
        return DriftSeverity.MEDIUM
    return DriftSeverity.LOW


class DomainMonitor:
    """
    Drift monitor for one domain and one stream of values.

    Example:
        >>> monitor = DomainMonitor("financial", sink=InMemoryEpisodeSink())
        >>> await monitor.set_baseline(training_scores)
        >>> report = await monitor.check(todays_scores, feature="credit_score")
        >>> report.impact, report.recommendations
    """

    def __init__(
        self,
        policy: Union[DomainPolicy, str],
        sink: Optional[EpisodeSink] = None,
        max_alerts: int = 500,
        max_audit_entries: int = 1000,
        **engine_overrides: Any,
    ) -> None:
        self.policy = policy if isinstance(policy, DomainPolicy) else get_policy(policy)

        try:
            engine_config = self.policy.engine_config(**engine_overrides)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid engine settings for {self.policy.name}: {exc}") from exc

        self.engine = DriftEngine(config=engine_config, sink=sink)
        self.logger = logging.getLogger(f"{__name__}.{self.policy.name}")

        self._alerts: Deque[DriftAlert] = deque(maxlen=max_alerts)
        self._audit: Deque[AuditEntry] = deque(maxlen=max_audit_entries)
        self.checks = 0
        self.alerts_triggered = 0

    async def set_baseline(
        self,
        data: Sequence[float],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> BaselineDistribution:
        merged = {"domain": self.policy.name}
        merged.update(metadata or {})
        baseline = await self.engine.set_baseline(data, merged)
        self._log_audit("set_baseline", f"Baseline set with {baseline.statistics.count} samples")
        return baseline

    async def check(
        self,
        values: Sequence[float],
        feature: Optional[str] = None,
        options: OptionsLike = None,
    ) -> MonitoringReport:
        result = await self.engine.detect_drift(values, options)
        self.checks += 1

        impact = assess_impact(result, self.policy.impact_multiplier)
        alerting = result.is_drift and severity_at_least(result.severity, self.policy.alert_severity)

        recommendations = list(self.policy.recommendations.get(result.severity, []))
        if alerting and self.policy.auto_adapt:
            recommendations.append(AUTO_ADAPT_RECOMMENDATION)

        alert = None
        if alerting:
            alert = DriftAlert(
                domain=self.policy.name,
                feature=feature,
                severity=result.severity,
                impact=impact,
                average_score=result.average_score,
            )
            self._alerts.append(alert)
            self.alerts_triggered += 1
            self.logger.warning(
                "Alert triggered: feature=%s severity=%s impact=%s score=%.4f",
                feature or "-",
                result.severity.value,
                impact.value,
                result.average_score,
            )

        self._log_audit(
            "detect_drift",
            f"feature={feature or '-'} drift={result.is_drift} severity={result.severity.value}",
        )

        return MonitoringReport(
            domain=self.policy.name,
            feature=feature,
            drift=result,
            impact=impact,
            recommendations=recommendations,
            alert=alert,
        )

    def score_trend(self, window: int = 20) -> float:
        """Least-squares slope of the most recent weighted scores."""
        scores = [entry.average_score for entry in self.engine.history][-window:]
        return linear_trend(scores)

    def recent_alerts(self, count: int = 10) -> List[DriftAlert]:
        return list(self._alerts)[-count:] if count > 0 else []

    def audit_log(self, count: int = 100) -> List[AuditEntry]:
        return list(self._audit)[-count:] if count > 0 else []

    def clear_memory(self) -> None:
        self._alerts.clear()
        self._audit.clear()
        self.logger.info("Monitor buffers cleared")

    def summary(self) -> Dict[str, Any]:
        stats = self.engine.get_stats()
        return {
            "domain": self.policy.name,
            "checks": self.checks,
            "alerts_triggered": self.alerts_triggered,
            "drift_rate": stats.drift_rate,
            "buffered_alerts": len(self._alerts),
            "buffered_audit_entries": len(self._audit),
        }

    def _log_audit(self, action: str, detail: str) -> None:
        entry = AuditEntry(domain=self.policy.name, action=action, detail=detail)
        self._audit.append(entry)
        self.logger.info("Audit %s: %s", action, detail)
