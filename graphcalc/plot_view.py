"""One plot window's state and its error boundary.

Purpose
-------
``PlotView`` is the headless counterpart of a plot window. It holds the
symbol table most recently pushed by the session, runs the plotting
pipeline on request and keeps the resulting geometry. It never raises from a
draw: every failure becomes a notice and leaves the canvas cleared.

Architecture notes
------------------
``PlotView`` knows nothing about widgets. :class:`graphcalc.panels.PlotPanel`
wraps it with text boxes, buttons and a Plotly canvas, and forwards
notices to a status line through ``on_notice``.

Examples
--------
>>> view = PlotView()
>>> view.draw("1 0 -2", "-10", "10", canvas_size=(400, 300))
True
>>> view.geometry is not None
True
>>> view.draw("1/0", "-10", "10", canvas_size=(400, 300))
False
>>> view.notices[-1]
'No valid points to plot.'
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import sympy as sp

from .InputConvert import parse_bound
from .SymbolTable import SymbolTable
from .evaluator import EvaluationError, Evaluator, SympyEvaluator
from .geometry import CanvasGeometry
from .pipeline import PlotResult, run_plot_pipeline
from .plot_settings import DEFAULT_SETTINGS, PlotSettings
from .sampling import Domain, InvalidDomainError, NoValidPointsError

__all__ = ["PlotView"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class PlotView:
    """Plot state for one window, fed by a shared symbol table.

    Parameters
    ----------
    symbols : SymbolTable, optional
        Initial table; the session replaces it through
        :meth:`update_symbol_table`.
    evaluator : Evaluator, optional
        Expression evaluator. Defaults to :class:`SympyEvaluator`.
    settings : PlotSettings, optional
        Pipeline configuration.
    on_notice : callable, optional
        Called with each user-facing notice as it is raised.
    """

    def __init__(
        self,
        symbols: Optional[SymbolTable] = None,
        evaluator: Optional[Evaluator] = None,
        settings: PlotSettings = DEFAULT_SETTINGS,
        on_notice: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._symbols = symbols if symbols is not None else SymbolTable()
        self._evaluator: Evaluator = evaluator if evaluator is not None else SympyEvaluator()
        self.settings = settings
        self.on_notice = on_notice
        self._result: Optional[PlotResult] = None
        self._notices: List[str] = []

    @property
    def symbols(self) -> SymbolTable:
        """Return the symbol table this view currently plots against."""
        return self._symbols

    @property
    def evaluator(self) -> Evaluator:
        return self._evaluator

    @property
    def result(self) -> Optional[PlotResult]:
        """Return the last successful pipeline result, or ``None`` after a failure or clear."""
        return self._result

    @property
    def geometry(self) -> Optional[CanvasGeometry]:
        """Return the geometry currently on the canvas, or ``None`` when it is cleared."""
        return None if self._result is None else self._result.geometry

    @property
    def notices(self) -> Tuple[str, ...]:
        """Return all notices raised by this view, oldest first."""
        return tuple(self._notices)

    def update_symbol_table(self, symbols: SymbolTable) -> None:
        """Replace the table used by subsequent draws. The table is never modified."""
        self._symbols = symbols

    def clear(self) -> None:
        self._result = None

    def notify(self, message: str) -> None:
        """Record a user-facing notice and forward it to ``on_notice``."""
        logger.warning(message)
        self._notices.append(message)
        if self.on_notice is not None:
            self.on_notice(message)

    def resolve_domain(self, start_text: Optional[str], end_text: Optional[str]) -> Domain:
        """Parse bound text into a :class:`Domain`, with per-bound fallbacks.

        Empty or unparseable text falls back to the default bound with a
        notice; ``None`` falls back silently. A non-increasing result falls
        back to the default domain with a notice.
        """
        default_start, default_end = self.settings.default_domain
        x_start, start_warning = parse_bound(start_text, default_start, name="start")
        x_end, end_warning = parse_bound(end_text, default_end, name="end")
        for warning in (start_warning, end_warning):
            if warning:
                self.notify(warning)
        try:
            return Domain(x_start, x_end)
        except InvalidDomainError:
            self.notify(
                f"Start must be less than end. Using default domain {default_start:g} to {default_end:g}."
            )
            return Domain(default_start, default_end)

    def draw(
        self,
        expression: str,
        start_text: Optional[str],
        end_text: Optional[str],
        canvas_size: Optional[Tuple[float, float]] = None,
    ) -> bool:
        """Parse the bound text, then :meth:`plot_function`."""
        domain = self.resolve_domain(start_text, end_text)
        return self.plot_function(expression, domain.x_start, domain.x_end, canvas_size=canvas_size)

    def plot_function(
        self,
        expression: str,
        x_start: float = -10.0,
        x_end: float = 10.0,
        canvas_size: Optional[Tuple[float, float]] = None,
    ) -> bool:
        """Run the pipeline for ``expression`` and keep its geometry.

        Returns
        -------
        bool
            ``True`` when geometry was produced. On ``False`` the canvas is
            cleared and the reason is in :attr:`notices`.
        """
        self.clear()
        size = canvas_size or self.settings.default_canvas_size
        try:
            self._result = run_plot_pipeline(
                self._evaluator,
                self._symbols,
                expression,
                Domain(float(x_start), float(x_end)),
                size,
                self.settings,
            )
        except NoValidPointsError as e:
            self.notify(str(e))
        except EvaluationError as e:
            self.notify(str(e))
        except Exception as e:
            logger.debug("plot_function failed", exc_info=True)
            self.notify(f"Error plotting function: {e}")
        return self._result is not None

    def differentiate(self, expression: str) -> Optional[sp.Expr]:
        """Return the evaluator's derivative of ``expression``, or ``None`` with a notice."""
        try:
            return self._evaluator.differentiate(expression)
        except EvaluationError as e:
            self.notify(str(e))
            return None
