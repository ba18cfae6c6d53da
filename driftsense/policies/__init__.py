"""
Policies module: domain-specific drift monitoring built on the drift engine.
"""

from .config import FINANCIAL, HEALTHCARE, MANUFACTURING, POLICIES, DomainPolicy, get_policy
from .monitor import DomainMonitor, assess_impact
from .schema import AuditEntry, DriftAlert, MonitoringReport

__all__ = [
    "DomainPolicy",
    "DomainMonitor",
    "MonitoringReport",
    "DriftAlert",
    "AuditEntry",
    "assess_impact",
    "get_policy",
    "POLICIES",
    "FINANCIAL",
    "HEALTHCARE",
    "MANUFACTURING",
]
