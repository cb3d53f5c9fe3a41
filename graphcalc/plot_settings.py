"""Tunable constants for sampling, smoothing, scaling and tick layout.

All numbers that shape a plot live on one frozen dataclass so that views,
the pipeline and the notebook panels agree on them. Pass a customised copy
(see :meth:`PlotSettings.replace`) instead of mutating module state.

Examples
--------
>>> from graphcalc.plot_settings import DEFAULT_SETTINGS
>>> DEFAULT_SETTINGS.sample_step
0.25
>>> coarse = DEFAULT_SETTINGS.replace(sample_step=0.5)
>>> coarse.sample_step
0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Any, Tuple


@dataclass(frozen=True)
class PlotSettings:
    """Plot pipeline configuration.

    Parameters
    ----------
    sample_step : float
        Spacing between consecutive x samples in data units.
    smoothing_step : float
        Catmull-Rom parameter step; ``1 / smoothing_step`` should be an integer.
    padding_fraction : float
        Fraction of the y-range added above and below the curve.
    flat_widening : float
        Half-height used when every sample has the same y.
    tick_count : int
        Target number of tick intervals per axis.
    tick_epsilon : float
        Tolerance at the upper end of the tick sweep.
    tick_half_length : float
        Half length of a tick segment in pixels.
    label_offset : float
        Distance in pixels between a tick and its label, across the axis.
    label_shift : float
        Shift in pixels of a label along the axis.
    axis_margin : float
        Distance from the canvas edge of an out-of-range reference line.
    default_domain : tuple[float, float]
        Domain used when bound input is missing or invalid.
    canvas_width, canvas_height : int
        Canvas size used when the caller does not supply one.
    curve_color : str
        Curve stroke color.
    curve_width : float
        Curve stroke width in pixels.
    """

    sample_step: float = 0.25
    smoothing_step: float = 0.05
    padding_fraction: float = 0.1
    flat_widening: float = 1.0
    tick_count: int = 10
    tick_epsilon: float = 1e-4
    tick_half_length: float = 4.0
    label_offset: float = 6.0
    label_shift: float = 8.0
    axis_margin: float = 10.0
    default_domain: Tuple[float, float] = (-10.0, 10.0)
    canvas_width: int = 800
    canvas_height: int = 500
    curve_color: str = "blue"
    curve_width: float = 2.0

    def __post_init__(self) -> None:
        for name in ("sample_step", "smoothing_step", "flat_widening", "tick_epsilon"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")
        if self.smoothing_step > 1.0:
            raise ValueError("smoothing_step must be <= 1.0")
        if self.padding_fraction < 0:
            raise ValueError("padding_fraction must be >= 0")
        if int(self.tick_count) < 1:
            raise ValueError("tick_count must be >= 1")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas size must be positive")
        start, end = self.default_domain
        if not start < end:
            raise ValueError("default_domain must be increasing")

    @property
    def default_canvas_size(self) -> Tuple[int, int]:
        """Return ``(width, height)`` of the fallback canvas."""
        return (self.canvas_width, self.canvas_height)

    def replace(self, **changes: Any) -> "PlotSettings":
        """Return a validated copy with ``changes`` applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(f"Unknown plot setting(s): {', '.join(unknown)}")
        return _dc_replace(self, **changes)


DEFAULT_SETTINGS = PlotSettings()
