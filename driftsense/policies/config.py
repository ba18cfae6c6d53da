"""
Domain policies for drift monitoring.

A policy supplies the thresholds, impact weighting and recommendation text a
domain wants on top of the generic engine. Presets reflect conventional
tolerances: PSI 0.15 for credit scoring, a stricter 0.08 for clinical models.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from driftsense.core.config import DriftConfig, DriftMethod
from driftsense.core.exceptions import ConfigurationError
from driftsense.drift.schema import DriftSeverity


class DomainPolicy(BaseModel):
	"""
	Domain-specific monitoring policy.

	Notes:
	- drift_threshold / prediction_window / primary_method feed the engine config.
	- impact_multiplier scales the weighted score when assessing business impact.
	- alert_severity: minimum severity that raises an alert.
	- recommendations: text attached per severity (none/low usually empty).
	"""

	model_config = ConfigDict(frozen=True)

	name: str = Field(..., min_length=1)
	drift_threshold: float = Field(0.1, gt=0.0, le=1.0)
	prediction_window: int = Field(7, ge=1)
	primary_method: DriftMethod = DriftMethod.PSI
	auto_adapt: bool = False
	impact_multiplier: float = Field(1.0, gt=0.0)
	alert_severity: DriftSeverity = DriftSeverity.MEDIUM
	recommendations: Dict[DriftSeverity, List[str]] = Field(default_factory=dict)

	def engine_config(self, **overrides: object) -> DriftConfig:
		data = {
			"drift_threshold": self.drift_threshold,
			"prediction_window": self.prediction_window,
			"primary_method": self.primary_method,
			"auto_adapt": self.auto_adapt,
		}
		data.update(overrides)
		return DriftConfig(**data)


FINANCIAL = DomainPolicy(
	name="financial",
	drift_threshold=0.15,
	prediction_window=30,
	auto_adapt=True,
	impact_multiplier=1.3,
	recommendations={
		DriftSeverity.MEDIUM: [
			"Review recent economic indicators",
			"Increase model validation frequency",
		],
		DriftSeverity.HIGH: [
			"URGENT: Consider model recalibration",
			"Review recent economic indicators",
			"Increase model validation frequency",
		],
		DriftSeverity.CRITICAL: [
			"URGENT: Consider model recalibration",
			"CRITICAL: Temporarily halt automated decisions, enable manual review",
		],
	},
)

HEALTHCARE = DomainPolicy(
	name="healthcare",
	drift_threshold=0.08,
	prediction_window=14,
	impact_multiplier=1.5,
	alert_severity=DriftSeverity.LOW,
	recommendations={
		DriftSeverity.LOW: [
			"Monitor patient outcomes closely",
		],
		DriftSeverity.MEDIUM: [
			"Monitor patient outcomes closely",
			"Review recent treatment protocols",
			"Consider model recalibration",
		],
		DriftSeverity.HIGH: [
			"PATIENT SAFETY ALERT: Immediate review required",
			"Activate clinical review board",
			"Consider temporary manual override of predictions",
		],
		DriftSeverity.CRITICAL: [
			"PATIENT SAFETY ALERT: Immediate review required",
			"CRITICAL: Suspend automated recommendations pending review",
		],
	},
)

MANUFACTURING = DomainPolicy(
	name="manufacturing",
	drift_threshold=0.12,
	prediction_window=7,
	impact_multiplier=1.0,
	recommendations={
		DriftSeverity.MEDIUM: [
			"Inspect recent production batches",
			"Review raw material quality",
		],
		DriftSeverity.HIGH: [
			"PRODUCTION ALERT: Quality drift detected",
			"Inspect recent production batches",
			"Increase quality inspection frequency",
		],
		DriftSeverity.CRITICAL: [
			"PRODUCTION ALERT: Quality drift detected",
			"CRITICAL: Consider halting production line for inspection",
		],
	},
)

POLICIES: Dict[str, DomainPolicy] = {
	policy.name: policy for policy in (FINANCIAL, HEALTHCARE, MANUFACTURING)
}


def get_policy(name: str) -> DomainPolicy:
	try:
		return POLICIES[name.lower()]
	except KeyError:
		raise ConfigurationError(
			f"Unknown domain policy '{name}'. Available: {', '.join(sorted(POLICIES))}"
		) from None
