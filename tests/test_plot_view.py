from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from graphcalc.SymbolTable import SymbolTable
from graphcalc.evaluator import EvaluationResult, Sample
from graphcalc.plot_view import PlotView
from graphcalc.sampling import Domain


def test_draw_success_keeps_geometry() -> None:
    view = PlotView()
    assert view.draw("1 0 -2", "-10", "10", canvas_size=(400, 300))
    assert view.geometry is not None
    assert view.result.smoothed
    assert view.notices == ()


def test_invalid_bound_uses_default_with_notice() -> None:
    view = PlotView()
    assert view.draw("x", "abc", "4", canvas_size=(400, 300))
    assert view.notices == ("Invalid start value. Using default -10.",)
    assert view.result.viewport.domain == Domain(-10.0, 4.0)


def test_empty_bound_uses_default_with_notice() -> None:
    view = PlotView()
    assert view.resolve_domain("", "4") == Domain(-10.0, 4.0)
    assert view.notices == ("Invalid start value. Using default -10.",)


def test_missing_bound_uses_default_silently() -> None:
    view = PlotView()
    assert view.resolve_domain(None, None) == Domain(-10.0, 10.0)
    assert view.notices == ()


def test_reversed_bounds_fall_back_to_default_domain() -> None:
    view = PlotView()
    assert view.resolve_domain("5", "1") == Domain(-10.0, 10.0)
    assert view.notices == ("Start must be less than end. Using default domain -10 to 10.",)


def test_no_valid_points_clears_and_notifies() -> None:
    received: list[str] = []
    view = PlotView(on_notice=received.append)
    assert view.draw("x", "-1", "1", canvas_size=(100, 100))

    assert not view.draw("1/0", "-10", "10", canvas_size=(100, 100))
    assert view.geometry is None
    assert received == ["No valid points to plot."]


def test_evaluation_error_is_reported() -> None:
    view = PlotView()
    assert not view.plot_function("b x")
    assert view.notices[-1] == "Unbound symbol(s): b"


def test_unexpected_failure_is_wrapped(caplog: pytest.LogCaptureFixture) -> None:
    evaluator = MagicMock()
    evaluator.plot_eval.side_effect = RuntimeError("backend down")
    view = PlotView(evaluator=evaluator)

    with caplog.at_level(logging.WARNING, logger="graphcalc.plot_view"):
        assert not view.plot_function("x")

    assert view.notices == ("Error plotting function: backend down",)
    assert "Error plotting function: backend down" in caplog.text


def test_bad_canvas_size_is_reported_not_raised() -> None:
    view = PlotView()
    assert not view.plot_function("x", canvas_size=(0, 100))
    assert view.notices[-1].startswith("Error plotting function:")


def test_custom_evaluator_is_used_for_sampling() -> None:
    class Line:
        def evaluate(self, symbols: SymbolTable, text: str) -> EvaluationResult:
            return EvaluationResult(True, text, symbols)

        def plot_eval(self, symbols: SymbolTable, text: str, x_values: list[float]) -> list[Sample]:
            return [Sample(x, 2 * x) for x in x_values]

        def differentiate(self, text: str) -> str:
            return "2"

    view = PlotView(evaluator=Line())
    assert view.plot_function("anything", 0.0, 1.0, canvas_size=(100, 100))
    assert view.result.points[-1, 1] == pytest.approx(2.0)


def test_update_symbol_table_is_by_reference() -> None:
    view = PlotView()
    table = SymbolTable({"a": 1})
    view.update_symbol_table(table)
    assert view.symbols is table


def test_differentiate_reports_errors() -> None:
    view = PlotView()
    assert str(view.differentiate("x^2")) == "2*x"
    assert view.differentiate("") is None
    assert view.notices == ("Empty expression.",)


def test_gamma_function_plots() -> None:
    view = PlotView()
    assert view.draw("gamma(x)", "1", "5", canvas_size=(400, 300))
    assert view.notices == ()
    assert view.result.points.shape == (17, 2)


def test_huge_constant_plots_with_positive_range() -> None:
    view = PlotView()
    assert view.draw("1e17", "-10", "10", canvas_size=(400, 300))
    assert view.notices == ()
    y_range = view.result.viewport.y_range
    assert y_range.y_min < 1e17 < y_range.y_max
