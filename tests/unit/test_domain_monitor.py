"""
Unit tests for domain policies and the domain monitor.
"""

import asyncio

import pytest

from driftsense.core.config import DriftMethod
from driftsense.core.exceptions import ConfigurationError
from driftsense.drift.schema import DriftResult, DriftScores, DriftSeverity
from driftsense.policies.config import FINANCIAL, HEALTHCARE, MANUFACTURING, POLICIES, DomainPolicy, get_policy
from driftsense.policies.monitor import AUTO_ADAPT_RECOMMENDATION, DomainMonitor, assess_impact

from tests.conftest import gaussian_sample

NO_SHORTCUTS = {"memoization": False, "adaptive_sampling": False}


def make_result(severity: DriftSeverity, score: float) -> DriftResult:
    return DriftResult(
        is_drift=severity != DriftSeverity.NONE,
        severity=severity,
        scores=DriftScores(psi=score, ks=min(score, 1.0), jsd=score, statistical=score),
        methods={},
        average_score=score,
        effective_threshold=0.1,
        primary_method=DriftMethod.PSI,
    )


class TestPolicies:
    """Preset domain policies."""

    def test_presets(self):
        assert FINANCIAL.drift_threshold == 0.15
        assert FINANCIAL.prediction_window == 30
        assert FINANCIAL.auto_adapt is True
        assert HEALTHCARE.drift_threshold == 0.08
        assert HEALTHCARE.prediction_window == 14
        assert HEALTHCARE.impact_multiplier == 1.5
        assert MANUFACTURING.drift_threshold == 0.12
        assert MANUFACTURING.prediction_window == 7
        assert set(POLICIES) == {"financial", "healthcare", "manufacturing"}

    def test_get_policy_is_case_insensitive(self):
        assert get_policy("Healthcare") is HEALTHCARE

    def test_get_policy_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown domain policy 'retail'"):
            get_policy("retail")

    def test_engine_config(self):
        config = FINANCIAL.engine_config(max_cache_size=10)

        assert config.drift_threshold == 0.15
        assert config.prediction_window == 30
        assert config.auto_adapt is True
        assert config.max_cache_size == 10

    def test_custom_policy(self):
        policy = DomainPolicy(name="retail", drift_threshold=0.2, primary_method="ks")
        assert policy.engine_config().primary_method == DriftMethod.KS


class TestAssessImpact:
    @pytest.mark.parametrize(
        "severity,score,multiplier,expected",
        [
            (DriftSeverity.NONE, 0.05, 1.0, DriftSeverity.LOW),
            (DriftSeverity.NONE, 0.12, 1.5, DriftSeverity.MEDIUM),
            (DriftSeverity.HIGH, 0.01, 1.0, DriftSeverity.HIGH),
            (DriftSeverity.MEDIUM, 0.25, 1.3, DriftSeverity.HIGH),
            (DriftSeverity.MEDIUM, 0.4, 1.5, DriftSeverity.CRITICAL),
            (DriftSeverity.CRITICAL, 0.0, 1.0, DriftSeverity.CRITICAL),
        ],
    )
    def test_impact_levels(self, severity, score, multiplier, expected):
        assert assess_impact(make_result(severity, score), multiplier) == expected


class TestDomainMonitor:
    """Alerting, recommendations and bookkeeping."""

    def test_construct_by_name(self, sink):
        monitor = DomainMonitor("manufacturing", sink=sink)

        assert monitor.policy is MANUFACTURING
        assert monitor.engine.config.drift_threshold == 0.12
        assert monitor.engine.sink is sink

    def test_invalid_engine_overrides(self):
        with pytest.raises(ConfigurationError):
            DomainMonitor("financial", drift_threshold=2.0)
        with pytest.raises(ConfigurationError):
            DomainMonitor("financial", no_such_option=1)

    def test_unknown_domain(self):
        with pytest.raises(ConfigurationError):
            DomainMonitor("retail")

    def test_baseline_metadata_includes_domain(self, small_baseline):
        monitor = DomainMonitor("healthcare")
        baseline = asyncio.run(monitor.set_baseline(small_baseline, {"model": "triage-v2"}))

        assert baseline.metadata == {"domain": "healthcare", "model": "triage-v2"}
        assert monitor.audit_log()[-1].action == "set_baseline"

    def test_financial_critical_drift(self, sink, gaussian_baseline, gaussian_shifted):
        monitor = DomainMonitor(FINANCIAL, sink=sink)

        async def scenario():
            await monitor.set_baseline(gaussian_baseline)
            return await monitor.check(gaussian_shifted, feature="credit_score")

        report = asyncio.run(scenario())

        assert report.domain == "financial"
        assert report.feature == "credit_score"
        assert report.drift.is_drift is True
        assert report.drift.severity == DriftSeverity.CRITICAL
        assert report.impact == DriftSeverity.CRITICAL
        assert report.recommendations == FINANCIAL.recommendations[DriftSeverity.CRITICAL] + [
            AUTO_ADAPT_RECOMMENDATION
        ]
        assert report.alert is not None
        assert report.alert.feature == "credit_score"
        assert monitor.alerts_triggered == 1
        assert monitor.recent_alerts() == [report.alert]
        assert len(sink.by_task("detect_drift")) == 1

    def test_stable_data_raises_no_alert(self, gaussian_baseline):
        monitor = DomainMonitor("manufacturing")

        async def scenario():
            await monitor.set_baseline(gaussian_baseline)
            return await monitor.check(gaussian_sample(100.0, 10.0, 1000, seed=99), feature="torque")

        report = asyncio.run(scenario())

        assert report.drift.is_drift is False
        assert report.alert is None
        assert report.recommendations == []
        assert report.impact == DriftSeverity.LOW
        assert monitor.alerts_triggered == 0
        assert monitor.checks == 1

    def test_healthcare_alert_has_no_auto_adapt(self, gaussian_baseline, gaussian_shifted):
        monitor = DomainMonitor("healthcare")

        async def scenario():
            await monitor.set_baseline(gaussian_baseline)
            return await monitor.check(gaussian_shifted)

        report = asyncio.run(scenario())

        assert report.alert is not None
        assert report.recommendations == HEALTHCARE.recommendations[DriftSeverity.CRITICAL]
        assert AUTO_ADAPT_RECOMMENDATION not in report.recommendations

    def test_score_trend_rises_with_growing_shift(self, gaussian_baseline):
        monitor = DomainMonitor("manufacturing")

        async def scenario():
            await monitor.set_baseline(gaussian_baseline)
            for shift in (0.0, 10.0, 20.0, 30.0):
                await monitor.check(gaussian_sample(100.0 + shift, 10.0, 500, seed=11), options=NO_SHORTCUTS)

        asyncio.run(scenario())

        assert monitor.score_trend() > 0.0
        assert monitor.score_trend(window=1) == 0.0

    def test_summary_and_clear_memory(self, gaussian_baseline, gaussian_shifted):
        monitor = DomainMonitor("financial")

        async def scenario():
            await monitor.set_baseline(gaussian_baseline)
            await monitor.check(gaussian_shifted)

        asyncio.run(scenario())
        summary = monitor.summary()

        assert summary["domain"] == "financial"
        assert summary["checks"] == 1
        assert summary["alerts_triggered"] == 1
        assert summary["drift_rate"] == "100.0%"
        assert summary["buffered_audit_entries"] == 2

        monitor.clear_memory()
        assert monitor.recent_alerts() == []
        assert monitor.audit_log() == []
        assert monitor.summary()["alerts_triggered"] == 1

    def test_alert_buffer_is_bounded(self, small_baseline):
        monitor = DomainMonitor("financial", max_alerts=2)

        async def scenario():
            await monitor.set_baseline(small_baseline)
            for shift in (1.0, 2.0, 3.0):
                await monitor.check([v + shift for v in small_baseline], options=NO_SHORTCUTS)

        asyncio.run(scenario())

        assert monitor.alerts_triggered == 3
        assert len(monitor.recent_alerts()) == 2
