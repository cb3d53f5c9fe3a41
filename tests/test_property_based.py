"""Property-based checks for the numeric stages of the plotting pipeline."""

from __future__ import annotations

import numpy as np
import pytest

from graphcalc.sampling import Domain
from graphcalc.smoothing import catmull_rom, smooth_curve
from graphcalc.ticks import plan_axis_ticks
from graphcalc.viewport import Range, Viewport, compute_y_range

try:
    from hypothesis import assume, given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


COORDS = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False, width=64)
POINT = st.tuples(COORDS, COORDS)


@given(p0=POINT, p1=POINT, p2=POINT, p3=POINT)
def test_catmull_rom_passes_through_inner_points(p0, p1, p2, p3) -> None:
    np.testing.assert_array_equal(catmull_rom(p0, p1, p2, p3, 0.0), np.array(p1))
    np.testing.assert_array_equal(catmull_rom(p0, p1, p2, p3, 1.0), np.array(p2))


@given(ys=st.lists(COORDS, min_size=4, max_size=40), step=st.sampled_from([0.05, 0.1, 0.25, 0.5, 1.0]))
def test_smoothed_length_and_endpoints(ys: list[float], step: float) -> None:
    assume(len(set(ys)) > 1)
    points = np.column_stack([np.arange(len(ys), dtype=float), np.asarray(ys)])
    curve = smooth_curve(points, step=step)

    assert curve.shape == ((len(ys) - 3) * round(1 / step) + 1, 2)
    np.testing.assert_array_equal(curve[0], points[1])
    np.testing.assert_array_equal(curve[-1], points[-2])


@given(ys=st.lists(COORDS, min_size=1, max_size=30))
def test_y_range_contains_every_point(ys: list[float]) -> None:
    points = np.column_stack([np.zeros(len(ys)), np.asarray(ys)])
    r = compute_y_range(points)
    assert r.y_min <= min(ys) and max(ys) <= r.y_max


@given(
    start=st.floats(min_value=-1e4, max_value=1e4),
    span=st.floats(min_value=1e-3, max_value=1e4),
)
def test_ticks_are_inside_and_evenly_spaced(start: float, span: float) -> None:
    end = start + span
    assume(end > start)
    ticks = plan_axis_ticks(start, end)
    positions = [t.position for t in ticks]

    assert all(start - 1e-6 <= p <= end + 1e-4 for p in positions)
    if len(positions) > 1:
        gaps = np.diff(positions)
        assert np.allclose(gaps, gaps[0])
        assert gaps[0] == round(gaps[0]) and gaps[0] >= 1


@given(
    lo=st.floats(min_value=-1e3, max_value=1e3),
    hi=st.floats(min_value=-1e3, max_value=1e3),
    width=st.integers(min_value=1, max_value=2000),
    height=st.integers(min_value=1, max_value=2000),
)
def test_reference_lines_stay_on_canvas(lo: float, hi: float, width: int, height: int) -> None:
    assume(lo < hi)
    vp = Viewport(Domain(lo, hi), Range(lo, hi), width, height, axis_margin=0.0)
    assert 0.0 <= vp.x_axis.position <= height
    assert 0.0 <= vp.y_axis.position <= width
    assert vp.x_axis.in_range == (lo <= 0.0 <= hi)
