from __future__ import annotations

import math

import numpy as np
import pytest

from graphcalc.sampling import (
    Domain,
    InvalidDomainError,
    NoValidPointsError,
    filter_finite,
    sample_domain,
)


def test_domain_rejects_reversed_empty_and_infinite_bounds() -> None:
    with pytest.raises(InvalidDomainError):
        Domain(5.0, 1.0)
    with pytest.raises(InvalidDomainError):
        Domain(2.0, 2.0)
    with pytest.raises(InvalidDomainError):
        Domain(-math.inf, 0.0)
    assert issubclass(InvalidDomainError, ValueError)


def test_sample_domain_counts_include_grid_endpoint() -> None:
    domain = Domain(-10.0, 10.0)
    assert sample_domain(domain, 0.5).shape == (41,)
    assert sample_domain(domain, 0.25).shape == (81,)

    xs = sample_domain(domain, 0.25)
    assert xs[0] == -10.0
    assert xs[-1] == pytest.approx(10.0)


def test_sample_domain_stops_before_off_grid_end() -> None:
    xs = sample_domain(Domain(0.0, 1.1), 0.5)
    np.testing.assert_allclose(xs, [0.0, 0.5, 1.0])


def test_sample_domain_rejects_bad_step() -> None:
    with pytest.raises(ValueError):
        sample_domain(Domain(0.0, 1.0), 0.0)


def test_filter_finite_drops_nan_and_inf_preserving_order() -> None:
    samples = [(0.0, 1.0), (1.0, math.nan), (2.0, math.inf), (3.0, -2.0), (4.0, -math.inf), (5.0, 0.0)]
    points = filter_finite(samples)

    assert points.shape == (3, 2)
    np.testing.assert_array_equal(points[:, 0], [0.0, 3.0, 5.0])
    np.testing.assert_array_equal(points[:, 1], [1.0, -2.0, 0.0])


def test_filter_finite_raises_when_nothing_survives() -> None:
    with pytest.raises(NoValidPointsError, match="No valid points to plot."):
        filter_finite([(0.0, math.nan), (1.0, math.inf)])
    with pytest.raises(NoValidPointsError):
        filter_finite([])
