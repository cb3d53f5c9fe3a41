"""Calculator session: canonical symbol table and its publication.

Purpose
-------
``CalculatorSession`` is the evaluation context behind the calculator input
line. It owns the canonical :class:`~graphcalc.SymbolTable.SymbolTable`.
After every successful evaluation it pushes the resulting table, by
reference, to each registered :class:`~graphcalc.plot_view.PlotView` and to
every hook. Views never poll and never mutate the table they receive.

Examples
--------
>>> session = CalculatorSession()
>>> view = session.open_plot_view()
>>> session.evaluate("a = 2").message
'a = 2'
>>> view.symbols is session.symbols
True
>>> session.evaluate("1 +").success
False
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Callable, Dict, Hashable, List, Optional

from .SymbolTable import SymbolTable
from .evaluator import EvaluationResult, Evaluator, SympyEvaluator
from .plot_settings import DEFAULT_SETTINGS, PlotSettings
from .plot_view import PlotView

__all__ = ["CalculatorSession"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class CalculatorSession:
    """Owns the symbol table and keeps every plot view in sync with it.

    Parameters
    ----------
    evaluator : Evaluator, optional
        Shared evaluator. Defaults to :class:`SympyEvaluator`.
    settings : PlotSettings, optional
        Settings handed to views opened through :meth:`open_plot_view`.
    symbols : SymbolTable, optional
        Initial table.
    """

    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        settings: PlotSettings = DEFAULT_SETTINGS,
        symbols: Optional[SymbolTable] = None,
    ) -> None:
        self.evaluator: Evaluator = evaluator if evaluator is not None else SympyEvaluator()
        self.settings = settings
        self._symbols = symbols if symbols is not None else SymbolTable()
        self._views: List[PlotView] = []
        self._hooks: Dict[Hashable, Callable[[SymbolTable], Any]] = {}
        self._hook_counter = 0
        self.result_text = ""
        self.error_text = ""

    @property
    def symbols(self) -> SymbolTable:
        """Return the current canonical symbol table."""
        return self._symbols

    @property
    def views(self) -> tuple[PlotView, ...]:
        """Return the registered plot views in registration order."""
        return tuple(self._views)

    def evaluate(self, text: str) -> EvaluationResult:
        """Evaluate one input line.

        On success ``result_text`` holds the result and ``error_text`` is
        cleared, the new table becomes canonical and is published. On failure
        it is the other way round and the table is left alone.
        """
        outcome = self.evaluator.evaluate(self._symbols, text)
        if outcome.success:
            self.result_text = outcome.message
            self.error_text = ""
            self._symbols = outcome.symbols
            self._publish()
        else:
            self.error_text = outcome.message
            self.result_text = ""
            logger.info("evaluate(%r) failed: %s", text, outcome.message)
        return outcome

    def open_plot_view(self, **kwargs: Any) -> PlotView:
        """Create a :class:`PlotView` bound to this session and register it."""
        kwargs.setdefault("evaluator", self.evaluator)
        kwargs.setdefault("settings", self.settings)
        view = PlotView(self._symbols, **kwargs)
        self._views.append(view)
        return view

    def attach_view(self, view: PlotView) -> None:
        """Register an existing view and bring it up to date."""
        if any(v is view for v in self._views):
            return
        self._views.append(view)
        view.update_symbol_table(self._symbols)

    def detach_view(self, view: PlotView) -> None:
        """Stop publishing to ``view``. Unknown views are ignored."""
        self._views = [v for v in self._views if v is not view]

    def add_hook(self, callback: Callable[[SymbolTable], Any], hook_id: Optional[Hashable] = None) -> Hashable:
        """Register ``callback`` to receive every published table.

        Returns
        -------
        hashable
            The hook id, usable with :meth:`remove_hook`.
        """
        if hook_id is None:
            self._hook_counter += 1
            hook_id = f"hook:{self._hook_counter}"
        self._hooks[hook_id] = callback
        return hook_id

    def remove_hook(self, hook_id: Hashable) -> None:
        self._hooks.pop(hook_id, None)

    def _publish(self) -> None:
        table = self._symbols
        logger.info("publishing %r to %d view(s)", table, len(self._views))
        for view in self._views:
            view.update_symbol_table(table)
        for h_id, callback in list(self._hooks.items()):
            try:
                callback(table)
            except Exception as e:
                warnings.warn(f"Hook {h_id} failed: {e}")
