"""
Unit tests for bounded history, compression and stats reports.
"""

from datetime import timedelta

import pytest

from driftsense.core.config import DriftMethod
from driftsense.drift.history import DriftHistory, build_stats_report
from driftsense.drift.schema import CompressedResult, DriftResult, DriftScores, DriftSeverity, EngineStats


def make_result(score: float, is_drift: bool = False) -> DriftResult:
    return DriftResult(
        is_drift=is_drift,
        severity=DriftSeverity.HIGH if is_drift else DriftSeverity.NONE,
        scores=DriftScores(psi=score, ks=min(score, 1.0), jsd=score, statistical=score),
        methods={},
        average_score=score,
        effective_threshold=0.1,
        primary_method=DriftMethod.PSI,
    )


class TestDriftHistory:
    """Ordering, eviction and compression."""

    def test_evicts_oldest(self):
        history = DriftHistory(max_size=3, keep_recent=3)
        for i in range(5):
            history.append(make_result(i / 10))

        assert len(history) == 3
        assert history.scores() == pytest.approx([0.2, 0.3, 0.4])

    def test_compresses_beyond_keep_recent(self):
        history = DriftHistory(max_size=10, keep_recent=2)
        for i in range(5):
            history.append(make_result(i / 10, is_drift=i == 0))

        entries = list(history)
        assert all(isinstance(e, CompressedResult) for e in entries[:3])
        assert all(isinstance(e, DriftResult) for e in entries[3:])

        oldest = entries[0]
        assert oldest.compressed is True
        assert oldest.is_drift is True
        assert oldest.severity == DriftSeverity.HIGH
        assert oldest.average_score == 0.0

    def test_compression_preserves_order_and_scores(self):
        history = DriftHistory(max_size=50, keep_recent=5)
        for i in range(20):
            history.append(make_result(i / 100))

        assert history.scores() == pytest.approx([i / 100 for i in range(20)])

    def test_recent(self):
        history = DriftHistory(max_size=10, keep_recent=10)
        for i in range(4):
            history.append(make_result(i / 10))

        assert [e.average_score for e in history.recent(2)] == pytest.approx([0.2, 0.3])
        assert history.recent(0) == []
        assert len(history.recent(100)) == 4

    def test_clear(self):
        history = DriftHistory()
        history.append(make_result(0.1))
        history.clear()
        assert len(history) == 0


class TestStatsReport:
    def test_drift_rate_and_uptime(self):
        stats = EngineStats(total_checks=3, drift_detected=1, checks_skipped=1, cache_hits=0)
        history = DriftHistory()
        history.append(make_result(0.5, is_drift=True))

        report = build_stats_report(stats, history, now=stats.start_time + timedelta(seconds=30))

        assert report.drift_rate == "33.3%"
        assert report.uptime_seconds == pytest.approx(30.0)
        assert report.checks_skipped == 1
        assert len(report.recent_history) == 1

    def test_no_checks(self):
        report = build_stats_report(EngineStats(), DriftHistory())
        assert report.drift_rate == "0%"
        assert report.total_checks == 0
        assert report.recent_history == []
