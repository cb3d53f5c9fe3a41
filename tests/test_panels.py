from __future__ import annotations

from unittest.mock import patch

from graphcalc.panels import CalculatorPanel, PlotPanel
from graphcalc.plot_view import PlotView
from graphcalc.plotly_render import CURVE_TRACE_NAME


def test_plot_panel_draw_renders_curve() -> None:
    panel = PlotPanel(function="x^2")

    assert panel.canvas_size() == (800, 500)
    panel._on_draw_clicked(panel.draw_button)

    (trace,) = panel.figure_widget.data
    assert trace.name == CURVE_TRACE_NAME
    assert len(trace.x) == len(panel.view.geometry.polyline)
    assert len(panel.figure_widget.layout.shapes) >= 2
    assert panel.status.value == ""


def test_plot_panel_failure_clears_canvas_and_shows_notice() -> None:
    panel = PlotPanel(function="x")
    assert panel.draw()

    panel.function_box.value = "1/0"
    assert not panel.draw()
    assert panel.figure_widget.data == ()
    assert "No valid points to plot." in panel.status.value


def test_plot_panel_bad_bound_notice_then_draw() -> None:
    panel = PlotPanel(function="x")
    panel.x_start_box.value = "oops"

    assert panel.draw()
    assert "Invalid start value. Using default -10." in panel.status.value


def test_diff_button_replaces_function_with_derivative() -> None:
    panel = PlotPanel(function="x^3")
    panel._on_diff_clicked(panel.diff_button)

    assert panel.function_box.value == "3*x**2"
    assert panel.view.geometry is not None


def test_diff_button_with_bad_input_keeps_text() -> None:
    panel = PlotPanel(function="")
    panel._on_diff_clicked(panel.diff_button)

    assert panel.function_box.value == ""
    assert "Empty expression." in panel.status.value


def test_calculator_panel_evaluate_and_error_boxes() -> None:
    panel = CalculatorPanel()

    panel.input_box.value = "a = 2"
    panel._on_evaluate_clicked(panel.evaluate_button)
    assert panel.result_box.value == "a = 2"
    assert panel.error_box.value == ""

    panel.input_box.value = "1/0"
    assert not panel.evaluate()
    assert panel.result_box.value == ""
    assert "Division by zero." in panel.error_box.value


def test_new_plot_is_registered_with_session() -> None:
    panel = CalculatorPanel()
    panel._on_plot_clicked(panel.plot_button)
    plot = panel.plot_panels[0]

    assert plot.view in panel.session.views
    assert plot.widget in panel.plots_box.children

    panel.input_box.value = "k = 4"
    panel.evaluate()
    assert plot.view.symbols is panel.session.symbols

    plot.function_box.value = "k x"
    assert plot.draw()


def test_panels_display_their_widget() -> None:
    plot = PlotPanel(PlotView())
    calc = CalculatorPanel()
    with patch("graphcalc.panels.display") as display:
        plot._ipython_display_()
        calc._ipython_display_()

    assert display.call_args_list[0].args == (plot.widget,)
    assert display.call_args_list[1].args == (calc.widget,)


def test_calculator_panel_shows_oversized_result_as_error() -> None:
    panel = CalculatorPanel()
    panel.input_box.value = "10**5000"

    assert not panel.evaluate()
    assert panel.result_box.value == ""
    assert "Result too large to display." in panel.error_box.value
