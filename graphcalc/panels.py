"""Notebook widgets for the calculator and its plot windows.

The panels are thin: they read text boxes, call into
:class:`~graphcalc.session.CalculatorSession` / :class:`~graphcalc.plot_view.PlotView`
and copy results back into widgets. All numeric work happens in the
pipeline.

Examples
--------
>>> from graphcalc import CalculatorPanel
>>> panel = CalculatorPanel()  # doctest: +SKIP
>>> panel  # doctest: +SKIP
"""

from __future__ import annotations

import html
from typing import Any, Optional, Tuple

import ipywidgets as widgets
import plotly.graph_objects as go
from IPython.display import display

from .plot_view import PlotView
from .plotly_render import clear_figure, render_geometry
from .session import CalculatorSession

__all__ = ["CalculatorPanel", "PlotPanel"]


def _status_html(message: str, *, error: bool = False) -> str:
    color = "#b91c1c" if error else "#334155"
    return f'<span style="color:{color}">{html.escape(message)}</span>'


class PlotPanel:
    """Plot window: function box, domain boxes, Draw and d/dx buttons, canvas.

    Parameters
    ----------
    view : PlotView, optional
        View to drive. A standalone view is created when omitted.
    function : str
        Initial function text.
    """

    def __init__(self, view: Optional[PlotView] = None, *, function: str = "") -> None:
        self.view = view if view is not None else PlotView()
        self.view.on_notice = self._show_notice
        settings = self.view.settings
        start, end = settings.default_domain

        self.function_box = widgets.Text(value=function, placeholder="f(x)", description="f(x) =")
        self.x_start_box = widgets.Text(value=f"{start:g}", description="from", layout=widgets.Layout(width="140px"))
        self.x_end_box = widgets.Text(value=f"{end:g}", description="to", layout=widgets.Layout(width="140px"))
        self.draw_button = widgets.Button(description="Draw", button_style="primary")
        self.diff_button = widgets.Button(description="d/dx", tooltip="Replace f(x) by its derivative and draw")
        self.status = widgets.HTML(value="")

        self.figure_widget = go.FigureWidget()
        self.figure_widget.update_layout(
            width=settings.canvas_width,
            height=settings.canvas_height,
            margin=dict(l=0, r=0, t=0, b=0),
        )

        self.draw_button.on_click(self._on_draw_clicked)
        self.diff_button.on_click(self._on_diff_clicked)

        controls = widgets.HBox(
            [self.function_box, self.x_start_box, self.x_end_box, self.draw_button, self.diff_button],
            layout=widgets.Layout(align_items="center"),
        )
        self.widget = widgets.VBox([controls, self.status, self.figure_widget])

    def canvas_size(self) -> Tuple[int, int]:
        """Return the current pixel size of the canvas widget."""
        layout = self.figure_widget.layout
        width = layout.width or self.view.settings.canvas_width
        height = layout.height or self.view.settings.canvas_height
        return int(width), int(height)

    def draw(self) -> bool:
        """Draw the current function box contents."""
        self.status.value = ""
        ok = self.view.draw(
            self.function_box.value,
            self.x_start_box.value,
            self.x_end_box.value,
            canvas_size=self.canvas_size(),
        )
        if ok and self.view.geometry is not None:
            render_geometry(self.figure_widget, self.view.geometry)
        else:
            clear_figure(self.figure_widget)
        return ok

    def _show_notice(self, message: str) -> None:
        previous = self.status.value
        line = _status_html(message, error=True)
        self.status.value = f"{previous}<br>{line}" if previous else line

    def _on_draw_clicked(self, _button: Any) -> None:
        self.draw()

    def _on_diff_clicked(self, _button: Any) -> None:
        derivative = self.view.differentiate(self.function_box.value)
        if derivative is None:
            return
        self.function_box.value = str(derivative)
        self.draw()

    def _ipython_display_(self, **kwargs: Any) -> None:
        display(self.widget)


class CalculatorPanel:
    """Calculator window: input line, Evaluate, result/error boxes, New plot.

    Each New plot click opens a :class:`PlotPanel` whose view is registered
    with the session, so later assignments reach it.
    """

    def __init__(self, session: Optional[CalculatorSession] = None) -> None:
        self.session = session if session is not None else CalculatorSession()
        self.plot_panels: list[PlotPanel] = []

        self.input_box = widgets.Text(placeholder="expression or name = expression", continuous_update=False)
        self.evaluate_button = widgets.Button(description="Evaluate", button_style="primary")
        self.plot_button = widgets.Button(description="New plot")
        self.result_box = widgets.Text(value="", disabled=True, description="Result")
        self.error_box = widgets.HTML(value="")
        self.plots_box = widgets.VBox([])

        self.evaluate_button.on_click(self._on_evaluate_clicked)
        self.plot_button.on_click(self._on_plot_clicked)

        self.widget = widgets.VBox(
            [
                widgets.HBox([self.input_box, self.evaluate_button, self.plot_button]),
                self.result_box,
                self.error_box,
                self.plots_box,
            ]
        )

    def evaluate(self) -> bool:
        outcome = self.session.evaluate(self.input_box.value)
        self.result_box.value = self.session.result_text
        self.error_box.value = _status_html(self.session.error_text, error=True) if self.session.error_text else ""
        return outcome.success

    def open_plot(self, function: str = "") -> PlotPanel:
        panel = PlotPanel(self.session.open_plot_view(), function=function)
        self.plot_panels.append(panel)
        self.plots_box.children = tuple(self.plots_box.children) + (panel.widget,)
        return panel

    def _on_evaluate_clicked(self, _button: Any) -> None:
        self.evaluate()

    def _on_plot_clicked(self, _button: Any) -> None:
        self.open_plot()

    def _ipython_display_(self, **kwargs: Any) -> None:
        display(self.widget)
