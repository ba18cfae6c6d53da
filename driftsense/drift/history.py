"""
Bounded result history and running counters.

The newest entries are kept in full; older ones are reduced to
timestamp / verdict / severity / score so long-running engines keep trend
information without holding every score breakdown.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Deque, List, Optional

from .schema import CompressedResult, DriftResult, EngineStats, HistoryEntry, StatsReport, utc_now


class DriftHistory:
    """
    Ordered history of drift results, oldest evicted past max_size.

    Compression is one-way and applied only to entries that are not yet
    compressed. Compressed entries always form a prefix of the history.
    """

    def __init__(self, max_size: int = 1000, keep_recent: int = 100):
        self.max_size = max_size
        self.keep_recent = keep_recent
        self._entries: Deque[HistoryEntry] = deque(maxlen=max_size)

    def append(self, result: DriftResult) -> None:
        self._entries.append(result)
        self._compress()

    def _compress(self) -> None:
        boundary = len(self._entries) - self.keep_recent
        for index in range(boundary - 1, -1, -1):
            entry = self._entries[index]
            if isinstance(entry, CompressedResult):
                break
            self._entries[index] = CompressedResult.from_result(entry)

    def recent(self, count: int = 10) -> List[HistoryEntry]:
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def scores(self) -> List[float]:
        return [entry.average_score for entry in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self):
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]


def build_stats_report(
    stats: EngineStats,
    history: DriftHistory,
    now: Optional[datetime] = None,
    recent: int = 10,
) -> StatsReport:
    """Derive drift rate and uptime from the running counters."""

    now = now or utc_now()
    if stats.total_checks > 0:
        drift_rate = f"{stats.drift_detected / stats.total_checks * 100:.1f}%"
    else:
        drift_rate = "0%"

    return StatsReport(
        total_checks=stats.total_checks,
        drift_detected=stats.drift_detected,
        checks_skipped=stats.checks_skipped,
        cache_hits=stats.cache_hits,
        drift_rate=drift_rate,
        uptime_seconds=(now - stats.start_time).total_seconds(),
        recent_history=history.recent(recent),
    )
