from __future__ import annotations

import numpy as np
import pytest

from graphcalc.geometry import LabelPlacement, LineSegment, emit_geometry
from graphcalc.plot_settings import DEFAULT_SETTINGS
from graphcalc.sampling import Domain
from graphcalc.ticks import TickMark
from graphcalc.viewport import Range, Viewport


def _viewport() -> Viewport:
    return Viewport(Domain(-10.0, 10.0), Range(-10.0, 10.0), 200, 100)


def test_axes_ticks_labels_and_polyline() -> None:
    geometry = emit_geometry(
        _viewport(),
        np.array([[-10.0, -10.0], [10.0, 10.0]]),
        [TickMark(0.0, "0")],
        [TickMark(5.0, "5")],
    )

    assert geometry.lines_with_role("x_axis") == (LineSegment(0.0, 50.0, 200.0, 50.0, "x_axis"),)
    assert geometry.lines_with_role("y_axis") == (LineSegment(100.0, 0.0, 100.0, 100.0, "y_axis"),)
    assert geometry.lines_with_role("x_tick") == (LineSegment(100.0, 46.0, 100.0, 54.0, "x_tick"),)
    assert geometry.lines_with_role("y_tick") == (LineSegment(96.0, 25.0, 104.0, 25.0, "y_tick"),)
    assert geometry.labels == (
        LabelPlacement(92.0, 56.0, "0", "x"),
        LabelPlacement(106.0, 17.0, "5", "y"),
    )
    assert geometry.polyline == ((0.0, 100.0), (200.0, 0.0))
    assert (geometry.width, geometry.height) == (200.0, 100.0)


def test_axis_lines_come_first() -> None:
    geometry = emit_geometry(_viewport(), np.zeros((1, 2)), [TickMark(0.0, "0")], [])
    assert [line.role for line in geometry.lines] == ["x_axis", "y_axis", "x_tick"]


def test_clamped_axes_are_dashed_and_carry_ticks() -> None:
    viewport = Viewport(Domain(-10.0, 10.0), Range(3.8, 6.2), 200, 100)
    geometry = emit_geometry(viewport, np.array([[0.0, 5.0]]), [TickMark(0.0, "0")], [TickMark(5.0, "5")])

    (x_axis,) = geometry.lines_with_role("x_axis")
    (y_axis,) = geometry.lines_with_role("y_axis")
    assert x_axis.dashed and x_axis.y1 == 90.0
    assert not y_axis.dashed

    (x_tick,) = geometry.lines_with_role("x_tick")
    assert (x_tick.y1, x_tick.y2) == (86.0, 94.0)
    (y_tick,) = geometry.lines_with_role("y_tick")
    assert y_tick.y1 == pytest.approx(50.0)


def test_curve_style_follows_settings() -> None:
    settings = DEFAULT_SETTINGS.replace(curve_color="red", curve_width=3.0)
    geometry = emit_geometry(_viewport(), np.zeros((1, 2)), [], [], settings)
    assert geometry.curve_color == "red"
    assert geometry.curve_width == 3.0
