"""
Custom exceptions for driftsense.

These exceptions provide clear error semantics across the system.
Use them to distinguish between bad input, misuse of the engine, configuration
problems and failures of the outcome sink.
"""

from typing import Optional


class DriftDetectionError(Exception):
    """Base exception for drift detection failures."""
    pass


class ConfigurationError(DriftDetectionError):
    """Raised when configuration is invalid or missing."""
    pass


class DataValidationError(DriftDetectionError):
    """Raised when an input sample fails validation."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class BaselineNotSetError(DriftDetectionError):
    """Raised when drift detection is requested before a baseline exists."""
    pass


class EpisodeSinkError(DriftDetectionError):
    """Raised when the outcome sink rejects an episode and errors propagate."""
    pass
