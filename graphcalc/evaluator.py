"""Expression evaluation behind a narrow, swappable contract.

Purpose
-------
The plotting pipeline never parses text itself. It talks to an
:class:`Evaluator`, which offers exactly three operations:

- ``evaluate(symbols, text)`` for the calculator input line,
- ``plot_eval(symbols, text, x_values)`` to sample a function of ``x``,
- ``differentiate(text)`` for the derivative shortcut.

:class:`SympyEvaluator` is the bundled implementation. Any object that
satisfies the protocol can replace it without touching the pipeline.

Input language
--------------
``SympyEvaluator`` accepts SymPy syntax with ``^`` as power and implicit
multiplication (``2x``, ``3 sin x``), assignments ``name = expression``, and
polynomials written as whitespace-separated coefficients, highest degree
first (``"1 0 -2"`` is ``x**2 - 2``).

Examples
--------
>>> from graphcalc.SymbolTable import SymbolTable
>>> ev = SympyEvaluator()
>>> ok, message, table = ev.evaluate(SymbolTable(), "a = 3")
>>> ok, message
(True, 'a = 3')
>>> [s.y for s in ev.plot_eval(table, "a x", [0.0, 1.0])]
[0.0, 3.0]
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, List, NamedTuple, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    function_exponentiation,
    implicit_application,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from .SymbolTable import SymbolTable
from .numpify import NumpifiedFunction, numpify_cached

__all__ = [
    "EvaluationError",
    "EvaluationResult",
    "Evaluator",
    "Sample",
    "SympyEvaluator",
]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


_TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    implicit_application,
    function_exponentiation,
    convert_xor,
)
_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_POLYNOMIAL_RE = re.compile(rf"^\s*{_NUMBER}(?:\s+{_NUMBER})+\s*$")
_ASSIGNMENT_RE = re.compile(r"^\s*([A-Za-z_]\w*)\s*=(?!=)(.*)$")
# Integers wider than this are not printed in full (about 4000 digits).
_MAX_RESULT_BITS = 13_000


class EvaluationError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


class Sample(NamedTuple):
    """One evaluated point of a sampled function."""

    x: float
    y: float


class EvaluationResult(NamedTuple):
    """Outcome of evaluating one calculator input line.

    Parameters
    ----------
    success : bool
        Whether evaluation succeeded.
    message : str
        Display-ready result on success, display-ready error otherwise.
    symbols : SymbolTable
        Updated table on success; the unchanged input table on failure.
    """

    success: bool
    message: str
    symbols: SymbolTable


@runtime_checkable
class Evaluator(Protocol):
    """Contract for expression evaluators used by the calculator and plots."""

    def evaluate(self, symbols: SymbolTable, text: str) -> EvaluationResult: ...
    def plot_eval(self, symbols: SymbolTable, text: str, x_values: Sequence[float]) -> List[Sample]: ...
    def differentiate(self, text: str) -> sp.Expr: ...


class SympyEvaluator:
    """SymPy-backed :class:`Evaluator`.

    Parameters
    ----------
    variable : str
        Name of the independent variable swept by :meth:`plot_eval`.
    """

    def __init__(self, variable: str = "x") -> None:
        self.variable = sp.Symbol(variable)

    def parse(self, text: str) -> sp.Expr:
        """Parse expression text (no assignment) into a SymPy expression.

        Raises
        ------
        EvaluationError
            If the text is empty, malformed, or not a numeric expression.
        """
        source = (text or "").strip()
        if not source:
            raise EvaluationError("Empty expression.")

        if _POLYNOMIAL_RE.match(source):
            coefficients = [sp.sympify(token) for token in source.split()]
            degree = len(coefficients) - 1
            return sp.Add(*[c * self.variable ** (degree - i) for i, c in enumerate(coefficients)])

        try:
            expr = parse_expr(source, transformations=_TRANSFORMATIONS)
        except Exception as e:
            raise EvaluationError(f"Could not parse {source!r}: {e}") from e
        if not isinstance(expr, sp.Expr):
            raise EvaluationError(f"{source!r} is not a numeric expression.")
        return expr

    def evaluate(self, symbols: SymbolTable, text: str) -> EvaluationResult:
        """Evaluate an expression or assignment against ``symbols``."""
        name, source = _split_assignment(text)
        try:
            value = _check_defined(self.parse(source).xreplace(symbols.bindings()))
            message = _format_value(value)
        except (EvaluationError, ValueError, TypeError, OverflowError) as e:
            return EvaluationResult(False, str(e), symbols)

        if name is None:
            return EvaluationResult(True, message, symbols)
        return EvaluationResult(True, f"{name} = {message}", symbols.assign(name, value))

    def plot_eval(self, symbols: SymbolTable, text: str, x_values: Sequence[float]) -> List[Sample]:
        """Evaluate ``text`` as a function of the plot variable at each x.

        The expression is compiled to NumPy once. Functions NumPy cannot
        evaluate (``gamma``, special functions) are evaluated with SymPy at
        each x instead. Points that still cannot be evaluated, or evaluate to
        a non-real value, come back with ``y = nan``; they are never dropped
        here.

        Raises
        ------
        EvaluationError
            If the text cannot be parsed, or references unbound symbols or
            unknown functions.
        """
        _, source = _split_assignment(text)
        xs = np.asarray(x_values, dtype=float).reshape(-1)
        expr = self.parse(source).xreplace(symbols.bindings(exclude=(self.variable.name,)))

        unbound = sorted(s.name for s in expr.free_symbols if s != self.variable)
        if unbound:
            raise EvaluationError(f"Unbound symbol(s): {', '.join(unbound)}")
        unknown = sorted({str(app.func) for app in expr.atoms(AppliedUndef)})
        if unknown:
            raise EvaluationError(f"Unknown function(s): {', '.join(unknown)}")

        ys = self._evaluate_array(expr, xs)
        return [Sample(float(x), float(y)) for x, y in zip(xs, ys)]

    def differentiate(self, text: str) -> sp.Expr:
        """Return the derivative of ``text`` with respect to the plot variable."""
        _, source = _split_assignment(text)
        return sp.diff(self.parse(source), self.variable)

    def _evaluate_array(self, expr: sp.Expr, xs: np.ndarray) -> np.ndarray:
        if not expr.free_symbols:
            return np.full(xs.shape, _real_or_nan(expr))

        fn: Optional[NumpifiedFunction]
        try:
            fn = numpify_cached(expr, vars=(self.variable,))
        except Exception as e:
            logger.debug("plot_eval: cannot compile %s (%s); evaluating with SymPy", expr, e)
            fn = None

        if fn is not None:
            try:
                with np.errstate(all="ignore"):
                    raw = np.asarray(fn(xs))
                return _as_real(np.broadcast_to(raw, xs.shape))
            except Exception as e:
                logger.debug("plot_eval: vectorised call failed (%s); evaluating point by point", e)

        ys = np.empty(xs.shape, dtype=float)
        for i, x in enumerate(xs):
            ys[i] = self._evaluate_point(fn, expr, x)
        return ys

    def _evaluate_point(self, fn: Optional[NumpifiedFunction], expr: sp.Expr, x: float) -> float:
        """Evaluate at one x: compiled first, then SymPy, nan if both fail."""
        if fn is not None:
            try:
                with np.errstate(all="ignore"):
                    return float(_as_real(np.asarray(fn(x)).reshape(-1))[0])
            except Exception:
                pass
        return _real_or_nan(expr.xreplace({self.variable: sp.Float(x)}))


def _split_assignment(text: str) -> Tuple[Optional[str], str]:
    match = _ASSIGNMENT_RE.match(text or "")
    if match is None:
        return None, text or ""
    return match.group(1), match.group(2)


def _check_defined(value: sp.Expr) -> sp.Expr:
    if value.has(sp.zoo):
        raise EvaluationError("Division by zero.")
    if value.has(sp.nan):
        raise EvaluationError("Undefined result.")
    return value


def _format_value(value: sp.Expr) -> str:
    if value.is_Integer:
        if int(value).bit_length() > _MAX_RESULT_BITS:
            raise EvaluationError("Result too large to display.")
        return str(value)
    if value.is_number:
        number = complex(value.evalf())
        if number.imag == 0:
            return f"{number.real:.10g}"
        return str(sp.N(value, 10))
    return str(value)


def _real_or_nan(value: Any) -> float:
    try:
        number = complex(sp.sympify(value).evalf())
    except Exception:
        return math.nan
    return number.real if number.imag == 0 else math.nan


def _as_real(values: np.ndarray) -> np.ndarray:
    if np.iscomplexobj(values):
        return np.where(values.imag == 0, values.real, np.nan)
    return values.astype(float)
