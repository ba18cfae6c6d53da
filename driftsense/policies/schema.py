"""
Schema for domain monitoring reports.

Reports wrap an engine DriftResult with the domain's impact assessment and
recommendation text. They carry no transport or remediation logic.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from driftsense.drift.schema import DriftResult, DriftSeverity, utc_now


class DriftAlert(BaseModel):
    """
    Alert raised when a check reaches the policy's alert severity.

    Fields:
    - alert_id: unique identifier
    - domain: policy name
    - feature: monitored feature, if any
    - severity: drift severity of the check
    - impact: assessed business impact
    - average_score: weighted drift score
    - raised_at: alert timestamp
    """

    alert_id: str = Field(default_factory=lambda: str(uuid4()))
    domain: str
    feature: Optional[str] = None
    severity: DriftSeverity
    impact: DriftSeverity
    average_score: float
    raised_at: datetime = Field(default_factory=utc_now)


class AuditEntry(BaseModel):
    domain: str
    action: str
    detail: str
    timestamp: datetime = Field(default_factory=utc_now)


class MonitoringReport(BaseModel):
    """
    Result of one domain check.

    Fields:
    - domain: policy name
    - feature: monitored feature, if any
    - drift: engine result
    - impact: severity adjusted by the domain's impact multiplier
    - recommendations: policy text for the drift severity
    - alert: alert raised by this check, if any
    """

    domain: str
    feature: Optional[str] = None
    drift: DriftResult
    impact: DriftSeverity
    recommendations: List[str] = Field(default_factory=list)
    alert: Optional[DriftAlert] = None
