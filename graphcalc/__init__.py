"""Top-level public API for the ``graphcalc`` package.

This module re-exports the calculator surface so users can import from a
single namespace, for example:

>>> from graphcalc import CalculatorSession, PlotView  # doctest: +SKIP

It exposes both the notebook panels and the lower-level pipeline stages
(sampling, smoothing, viewport scaling, tick planning, geometry) for callers
that draw with their own backend.
"""

from .InputConvert import InputConvert, parse_bound
from .SymbolTable import SymbolTable
from .evaluator import EvaluationError, EvaluationResult, Evaluator, Sample, SympyEvaluator
from .geometry import CanvasGeometry, LabelPlacement, LineSegment, emit_geometry
from .pipeline import PlotResult, run_plot_pipeline
from .plot_settings import DEFAULT_SETTINGS, PlotSettings
from .plot_view import PlotView
from .plotly_render import clear_figure, geometry_to_figure, render_geometry
from .sampling import Domain, InvalidDomainError, NoValidPointsError, filter_finite, sample_domain
from .session import CalculatorSession
from .smoothing import catmull_rom, smooth_curve
from .ticks import TickMark, format_tick_label, plan_axis_ticks, tick_step
from .viewport import AxisLine, LinearMap, Range, Viewport, compute_y_range
from .panels import CalculatorPanel, PlotPanel
