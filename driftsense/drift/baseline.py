"""
Baseline construction and sample validation.

A baseline is built once per reference sample and carries everything the
methods can reuse: summary statistics, a sorted copy for KS and histograms at
the standard bin counts over the baseline's own range.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from math import inf, isfinite
from numbers import Real
from typing import Any, Dict, Optional, Tuple

from driftsense.core.exceptions import DataValidationError

from .histogram import STANDARD_BIN_COUNTS, histogram
from .numeric import summarize
from .schema import BaselineDistribution

logger = logging.getLogger(__name__)

# Below this size downstream methods become unreliable.
MIN_RELIABLE_BASELINE_SIZE = 3


def validate_sample(data: Any, label: str = "Baseline") -> Tuple[float, ...]:
    """
    Validate a numeric sample and return it as a tuple of floats.

    Accepts any non-string iterable of real numbers (lists, tuples, numpy
    arrays, pandas Series). Booleans are rejected.

    Raises:
        DataValidationError: If the sample is missing, empty, not a sequence,
            or holds a non-numeric or non-finite value.
    """

    if data is None:
        raise DataValidationError(f"{label} data cannot be empty")

    if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Iterable):
        raise DataValidationError(f"{label} data must be a sequence of numbers")

    values = []
    for index, value in enumerate(data):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise DataValidationError(
                f"Invalid value at index {index}: {value!r}. All values must be finite numbers.",
                index=index,
            )
        try:
            value = float(value)
        except OverflowError:
            # Integers beyond the float range.
            value = inf if value > 0 else -inf
        if not isfinite(value):
            raise DataValidationError(
                f"Invalid value at index {index}: {value}. All values must be finite numbers.",
                index=index,
            )
        values.append(value)

    if not values:
        raise DataValidationError(f"{label} data cannot be empty")

    return tuple(values)


def build_baseline(data: Any, metadata: Optional[Dict[str, Any]] = None) -> BaselineDistribution:
    """
    Validate `data` and precompute the baseline caches.

    Raises:
        DataValidationError: If `data` fails validation.
    """

    values = validate_sample(data, label="Baseline")

    if len(values) < MIN_RELIABLE_BASELINE_SIZE:
        logger.warning(
            "Baseline sample size is very small (%d). Drift detection may be unreliable.",
            len(values),
        )

    statistics = summarize(values)
    histograms = {
        bins: tuple(histogram(values, bins, statistics.min, statistics.max))
        for bins in STANDARD_BIN_COUNTS
    }

    return BaselineDistribution(
        data=values,
        sorted_data=tuple(sorted(values)),
        statistics=statistics,
        histograms=histograms,
        metadata=dict(metadata or {}),
    )
