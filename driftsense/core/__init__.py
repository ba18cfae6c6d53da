"""
Core module: Configuration, logging, and exception handling.
"""

from .config import DriftConfig, DriftMethod, Settings, settings
from .exceptions import (
    BaselineNotSetError,
    ConfigurationError,
    DataValidationError,
    DriftDetectionError,
    EpisodeSinkError,
)
from .logging_config import setup_logging

__all__ = [
    "DriftConfig",
    "DriftMethod",
    "Settings",
    "settings",
    "setup_logging",
    "DriftDetectionError",
    "ConfigurationError",
    "DataValidationError",
    "BaselineNotSetError",
    "EpisodeSinkError",
]
