"""
Pytest configuration and shared fixtures.

Provides seeded samples, engine configurations and episode sinks for unit and
integration tests.
"""

import random
from typing import List

import pytest

from driftsense.core.config import DriftConfig
from driftsense.drift.sinks import InMemoryEpisodeSink


def gaussian_sample(mean: float, std: float, size: int, seed: int) -> List[float]:
    """Deterministic normal sample."""
    rng = random.Random(seed)
    return [rng.gauss(mean, std) for _ in range(size)]


@pytest.fixture
def test_config() -> DriftConfig:
    """
    Fixture providing an explicit engine configuration.

    Avoids picking up DRIFTSENSE_* environment overrides in unit tests.
    """
    return DriftConfig(
        drift_threshold=0.1,
        prediction_window=7,
        max_history_size=1000,
        max_cache_size=100,
    )


@pytest.fixture
def sink() -> InMemoryEpisodeSink:
    return InMemoryEpisodeSink()


@pytest.fixture
def small_baseline() -> List[float]:
    """Ten evenly spread scores, as produced by a toy scoring model."""
    return [0.5, 0.6, 0.7, 0.8, 0.9, 0.5, 0.6, 0.7, 0.8, 0.9]


@pytest.fixture
def gaussian_baseline() -> List[float]:
    """1000 samples from N(100, 10)."""
    return gaussian_sample(100.0, 10.0, 1000, seed=42)


@pytest.fixture
def gaussian_shifted() -> List[float]:
    """1000 samples from N(130, 10): a 3-sigma mean shift."""
    return gaussian_sample(130.0, 10.0, 1000, seed=7)


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
