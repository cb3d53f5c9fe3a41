"""Expression-to-geometry plotting pipeline.

Purpose
-------
Runs one plot request end to end, synchronously:

1. sweep the domain (:func:`graphcalc.sampling.sample_domain`),
2. evaluate through the :class:`~graphcalc.evaluator.Evaluator`,
3. drop non-finite samples (:func:`graphcalc.sampling.filter_finite`),
4. smooth (:func:`graphcalc.smoothing.smooth_curve`),
5. scale (:func:`graphcalc.viewport.compute_y_range`, ``Viewport``),
6. plan ticks for both axes (:func:`graphcalc.ticks.plan_axis_ticks`),
7. emit canvas geometry (:func:`graphcalc.geometry.emit_geometry`).

Nothing is cached between runs.

Important gotchas
-----------------
This function raises; it does not report. ``EvaluationError``,
``NoValidPointsError`` and ``InvalidDomainError`` reach the caller, and
:class:`graphcalc.plot_view.PlotView` is the boundary that turns them into
user-facing notices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .SymbolTable import SymbolTable
from .evaluator import Evaluator
from .geometry import CanvasGeometry, emit_geometry
from .plot_settings import DEFAULT_SETTINGS, PlotSettings
from .sampling import Domain, filter_finite, sample_domain
from .smoothing import smooth_curve
from .ticks import TickMark, plan_axis_ticks
from .viewport import Viewport, compute_y_range

__all__ = ["PlotResult", "run_plot_pipeline"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class PlotResult:
    """Intermediate and final products of one pipeline run.

    Parameters
    ----------
    expression : str
        The plotted expression text.
    sample_count : int
        Number of raw samples requested from the evaluator.
    points : numpy.ndarray
        ``(n, 2)`` finite samples.
    curve : numpy.ndarray
        Smoothed (or passed-through) data-space curve.
    smoothed : bool
        Whether Catmull-Rom interpolation was applied.
    viewport : Viewport
        Scaling used for this run.
    x_ticks, y_ticks : tuple[TickMark, ...]
        Tick plans in data units.
    geometry : CanvasGeometry
        Canvas drawing primitives.
    """

    expression: str
    sample_count: int
    points: np.ndarray
    curve: np.ndarray
    smoothed: bool
    viewport: Viewport
    x_ticks: Tuple[TickMark, ...]
    y_ticks: Tuple[TickMark, ...]
    geometry: CanvasGeometry


def run_plot_pipeline(
    evaluator: Evaluator,
    symbols: SymbolTable,
    expression: str,
    domain: Domain,
    canvas_size: Tuple[float, float],
    settings: Optional[PlotSettings] = None,
) -> PlotResult:
    """Plot ``expression`` over ``domain`` on a ``canvas_size`` canvas.

    Raises
    ------
    EvaluationError
        The evaluator rejected the expression.
    NoValidPointsError
        Every sample was NaN or infinite.
    ValueError
        The canvas size is not positive.
    """
    settings = settings or DEFAULT_SETTINGS
    width, height = canvas_size

    xs = sample_domain(domain, settings.sample_step)
    samples = evaluator.plot_eval(symbols, expression, xs)
    points = filter_finite(samples)

    curve = smooth_curve(points, settings.smoothing_step)
    smoothed = curve is not points
    y_range = compute_y_range(
        curve,
        padding_fraction=settings.padding_fraction,
        flat_widening=settings.flat_widening,
    )
    viewport = Viewport(domain, y_range, width, height, axis_margin=settings.axis_margin)

    x_ticks = tuple(plan_axis_ticks(domain.x_start, domain.x_end, settings.tick_count, epsilon=settings.tick_epsilon))
    y_ticks = tuple(plan_axis_ticks(y_range.y_min, y_range.y_max, settings.tick_count, epsilon=settings.tick_epsilon))
    geometry = emit_geometry(viewport, curve, x_ticks, y_ticks, settings)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "plot %r: samples=%d finite=%d vertices=%d smoothed=%s y_range=(%g, %g)",
            expression,
            len(samples),
            points.shape[0],
            curve.shape[0],
            smoothed,
            y_range.y_min,
            y_range.y_max,
        )

    return PlotResult(
        expression=expression,
        sample_count=len(xs),
        points=points,
        curve=curve,
        smoothed=smoothed,
        viewport=viewport,
        x_ticks=x_ticks,
        y_ticks=y_ticks,
        geometry=geometry,
    )
