"""
Unit tests for histogram binning.
"""

import pytest

from driftsense.drift.histogram import adaptive_bin_count, histogram, proportions


@pytest.mark.parametrize(
    "size,expected",
    [(1, 3), (9, 3), (10, 5), (49, 5), (50, 10), (199, 10), (200, 20), (10_000, 20)],
)
def test_adaptive_bin_count(size, expected):
    assert adaptive_bin_count(size) == expected


def test_histogram_top_edge_is_inclusive():
    assert histogram([0.0, 1.0, 2.0, 3.0, 4.0], 5, 0.0, 4.0) == [1, 1, 1, 1, 1]


def test_histogram_zero_width_range_uses_first_bin():
    assert histogram([7.0, 7.0, 7.0], 3, 7.0, 7.0) == [3, 0, 0]


def test_histogram_clamps_out_of_range_values():
    assert histogram([-5.0, 15.0], 2, 0.0, 10.0) == [1, 1]


def test_histogram_rejects_non_positive_bins():
    with pytest.raises(ValueError):
        histogram([1.0], 0, 0.0, 1.0)


def test_proportions():
    assert proportions([1, 3], 4) == [0.25, 0.75]


def test_histogram_span_wider_than_float_range():
    assert histogram([-1e308, 1e308, 0.0], 3, -1e308, 1e308) == [1, 1, 1]


def test_histogram_clamps_values_far_outside_range():
    assert histogram([-1.7e308, 1.7e308], 2, 1e308, 1.5e308) == [1, 1]
