"""Data-space to canvas-space scaling.

Purpose
-------
Turns the final curve into canvas coordinates. This module owns:

- the visible y-range (flat-curve widening plus symmetric padding),
- the two affine maps (x to ``[0, width]``, y to ``[height, 0]``),
- placement of the reference lines for ``y = 0`` and ``x = 0``.

Canvas convention
-----------------
Origin at the top-left corner, y grows downward. Data ``y_max`` maps to
canvas ``0`` and data ``y_min`` maps to canvas ``height``.

Important gotchas
-----------------
A reference line whose data value lies outside the visible interval is not
dropped. It is drawn ``axis_margin`` pixels inside the nearest edge and
flagged ``in_range=False`` so the renderer can dash it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .sampling import Domain

__all__ = ["AxisLine", "LinearMap", "Range", "Viewport", "compute_y_range"]

_FLAT_SPACINGS = 64


@dataclass(frozen=True)
class Range:
    """Vertical interval ``[y_min, y_max]`` used for scaling; always positive height."""

    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        if not self.y_min < self.y_max:
            raise ValueError(f"Range must have positive height, got ({self.y_min}, {self.y_max}).")

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, value: float) -> bool:
        return self.y_min <= value <= self.y_max


def compute_y_range(
    points: np.ndarray,
    *,
    padding_fraction: float = 0.1,
    flat_widening: float = 1.0,
) -> Range:
    """Return the padded y-range of ``points``.

    A flat curve (``y_max == y_min``) is first widened by ``flat_widening`` on
    each side, or by a few float spacings of ``y`` when that is larger, so
    the height stays positive for large values. Then ``padding_fraction`` of
    the height is added above and below.

    Examples
    --------
    >>> import numpy as np
    >>> r = compute_y_range(np.array([[0.0, 5.0], [1.0, 5.0]]))
    >>> round(r.y_min, 10), round(r.y_max, 10)
    (3.8, 6.2)
    """
    ys = np.asarray(points, dtype=float).reshape(-1, 2)[:, 1]
    if ys.size == 0:
        raise ValueError("compute_y_range requires at least one point")
    y_min = float(ys.min())
    y_max = float(ys.max())
    if y_max == y_min:
        widening = max(flat_widening, _FLAT_SPACINGS * float(np.spacing(abs(y_min))))
        y_min -= widening
        y_max += widening
    padding = (y_max - y_min) * padding_fraction
    return Range(y_min - padding, y_max + padding)


@dataclass(frozen=True)
class LinearMap:
    """Affine map sending ``data_start -> canvas_start`` and ``data_end -> canvas_end``."""

    data_start: float
    data_end: float
    canvas_start: float
    canvas_end: float

    def __post_init__(self) -> None:
        if self.data_start == self.data_end:
            raise ValueError("LinearMap needs a non-empty data interval")

    def __call__(self, value: Any) -> Any:
        fraction = (np.asarray(value, dtype=float) - self.data_start) / (self.data_end - self.data_start)
        out = self.canvas_start + fraction * (self.canvas_end - self.canvas_start)
        return float(out) if out.ndim == 0 else out


@dataclass(frozen=True)
class AxisLine:
    """Canvas position of a reference line and whether it is the true axis."""

    position: float
    in_range: bool

    @property
    def dashed(self) -> bool:
        return not self.in_range


@dataclass(frozen=True)
class Viewport:
    """Mapping between one plot's data space and a ``width x height`` canvas.

    Parameters
    ----------
    domain : Domain
        Horizontal data interval.
    y_range : Range
        Vertical data interval (already padded).
    width, height : float
        Canvas size in pixels; must be positive.
    axis_margin : float
        Inset of an out-of-range reference line from the canvas edge.
    """

    domain: Domain
    y_range: Range
    width: float
    height: float
    axis_margin: float = 10.0

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}.")

    @property
    def x_map(self) -> LinearMap:
        return LinearMap(self.domain.x_start, self.domain.x_end, 0.0, float(self.width))

    @property
    def y_map(self) -> LinearMap:
        return LinearMap(self.y_range.y_min, self.y_range.y_max, float(self.height), 0.0)

    def project(self, points: np.ndarray) -> np.ndarray:
        """Map an ``(n, 2)`` data array to canvas pixels."""
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        return np.column_stack([self.x_map(points[:, 0]), self.y_map(points[:, 1])])

    @property
    def x_axis(self) -> AxisLine:
        """Horizontal reference line for ``y = 0`` (canvas y position)."""
        if self.y_range.contains(0.0):
            return AxisLine(self.y_map(0.0), True)
        if 0.0 < self.y_range.y_min:
            return AxisLine(self.height - self.axis_margin, False)
        return AxisLine(self.axis_margin, False)

    @property
    def y_axis(self) -> AxisLine:
        """Vertical reference line for ``x = 0`` (canvas x position)."""
        if self.domain.contains(0.0):
            return AxisLine(self.x_map(0.0), True)
        if 0.0 < self.domain.x_start:
            return AxisLine(self.axis_margin, False)
        return AxisLine(self.width - self.axis_margin, False)
