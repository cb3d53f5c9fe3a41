"""Canvas drawing primitives for one plot.

``emit_geometry`` is a thin translation layer: it takes a
:class:`~graphcalc.viewport.Viewport`, the final curve and both tick plans
and returns a backend-neutral :class:`CanvasGeometry` in canvas pixels
(origin top-left, y down). Backends such as
:mod:`graphcalc.plotly_render` only draw what they are given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .plot_settings import DEFAULT_SETTINGS, PlotSettings
from .ticks import TickMark
from .viewport import Viewport

__all__ = ["CanvasGeometry", "LabelPlacement", "LineSegment", "emit_geometry"]


@dataclass(frozen=True)
class LineSegment:
    """Straight segment in canvas pixels.

    ``role`` is one of ``"x_axis"``, ``"y_axis"``, ``"x_tick"``, ``"y_tick"``.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    role: str
    dashed: bool = False


@dataclass(frozen=True)
class LabelPlacement:
    """Tick label anchored at its top-left corner."""

    x: float
    y: float
    text: str
    axis: str


@dataclass(frozen=True)
class CanvasGeometry:
    """Everything needed to draw one plot on a ``width x height`` canvas."""

    width: float
    height: float
    lines: Tuple[LineSegment, ...] = ()
    polyline: Tuple[Tuple[float, float], ...] = ()
    labels: Tuple[LabelPlacement, ...] = ()
    curve_color: str = DEFAULT_SETTINGS.curve_color
    curve_width: float = DEFAULT_SETTINGS.curve_width

    def lines_with_role(self, role: str) -> Tuple[LineSegment, ...]:
        return tuple(line for line in self.lines if line.role == role)


def emit_geometry(
    viewport: Viewport,
    curve: np.ndarray,
    x_ticks: Sequence[TickMark],
    y_ticks: Sequence[TickMark],
    settings: PlotSettings = DEFAULT_SETTINGS,
) -> CanvasGeometry:
    """Project the axes, ticks, labels and curve of one plot onto the canvas.

    The x ticks sit on the ``y = 0`` reference line and the y ticks on the
    ``x = 0`` reference line, at their clamped positions when those lines are
    out of range.
    """
    width, height = float(viewport.width), float(viewport.height)
    x_axis = viewport.x_axis
    y_axis = viewport.y_axis
    half = settings.tick_half_length
    offset = settings.label_offset
    shift = settings.label_shift

    lines = [
        LineSegment(0.0, x_axis.position, width, x_axis.position, "x_axis", x_axis.dashed),
        LineSegment(y_axis.position, 0.0, y_axis.position, height, "y_axis", y_axis.dashed),
    ]
    labels = []

    ya = x_axis.position
    for tick in x_ticks:
        xc = viewport.x_map(tick.position)
        lines.append(LineSegment(xc, ya - half, xc, ya + half, "x_tick"))
        labels.append(LabelPlacement(xc - shift, ya + offset, tick.label, "x"))

    xa = y_axis.position
    for tick in y_ticks:
        yc = viewport.y_map(tick.position)
        lines.append(LineSegment(xa - half, yc, xa + half, yc, "y_tick"))
        labels.append(LabelPlacement(xa + offset, yc - shift, tick.label, "y"))

    projected = viewport.project(curve)
    polyline = tuple((float(px), float(py)) for px, py in projected)

    return CanvasGeometry(
        width=width,
        height=height,
        lines=tuple(lines),
        polyline=polyline,
        labels=tuple(labels),
        curve_color=settings.curve_color,
        curve_width=settings.curve_width,
    )
