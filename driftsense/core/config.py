"""
Application configuration for driftsense.

Provides environment-aware settings with conservative defaults. Drift thresholds
and cache/history bounds are configurable to avoid hard-coded "magic numbers".
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DriftMethod(str, Enum):
	"""Statistical methods evaluated on every full drift check."""

	PSI = "psi"
	KS = "ks"
	JSD = "jsd"
	STATISTICAL = "statistical"


class DriftConfig(BaseModel):
	"""
	Drift engine configuration.

	Notes:
	- drift_threshold: base threshold in (0, 1]; scaled up for small samples.
	- prediction_window: horizon in days, validated but not used by detection.
	- max_history_size: bound on retained results (oldest evicted first).
	- max_cache_size: bound on memoized results (least recently used evicted).
	- compression_keep_recent: newest history entries kept uncompressed.
	- adaptive_tolerance: relative mean/std change below which a check is skipped.
	- sink_timeout_seconds: optional bound on each outcome sink call.
	- propagate_sink_errors: if False, sink failures are logged and swallowed.
	"""

	model_config = ConfigDict(frozen=True, extra="forbid")

	drift_threshold: float = Field(0.1, gt=0.0, le=1.0)
	prediction_window: int = Field(7, ge=1)
	max_history_size: int = Field(1000, ge=1)
	max_cache_size: int = Field(100, ge=1)
	primary_method: DriftMethod = DriftMethod.PSI
	auto_adapt: bool = False

	compression_keep_recent: int = Field(100, ge=1)
	adaptive_tolerance: float = Field(0.05, gt=0.0)
	sink_timeout_seconds: Optional[float] = Field(None, gt=0.0)
	propagate_sink_errors: bool = False


class Settings(BaseSettings):
	"""
	Global configuration with environment overrides.
	"""

	model_config = SettingsConfigDict(
		env_prefix="DRIFTSENSE_",
		env_file=".env",
		env_nested_delimiter="__",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	log_file_name: Optional[str] = Field(None, description="Log file name; defaults to <logger name>.log")
	log_max_bytes: int = Field(10 * 1024 * 1024, ge=0, description="Rotate the log file past this size")
	log_backup_count: int = Field(5, ge=0, description="Rotated log files to keep")
	drift: DriftConfig = DriftConfig()

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
