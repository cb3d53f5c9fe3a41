"""
numpify: compile SymPy expressions into vectorised NumPy callables
==================================================================

The plot bridge evaluates one expression over a whole x sweep at once. This
module prints the expression with SymPy's :class:`~sympy.printing.numpy.NumPyPrinter`,
wraps the printed code in a small generated function and caches the result,
so redrawing the same expression does not recompile it.

Constant expressions are broadcast against the arguments, so ``numpify(5,
vars=x)(xs)`` returns an array shaped like ``xs`` rather than a scalar.

Examples
--------
>>> import numpy as np
>>> import sympy as sp
>>> x = sp.Symbol("x")
>>> f = numpify(x**2 - 2, vars=x)
>>> f(np.array([0.0, 1.0, 2.0]))
array([-2., -1.,  2.])
>>> numpify(5, vars=x)(np.array([1.0, 2.0]))
array([5., 5.])

Logging
-------
Silent by default. Compile timings are logged at DEBUG level on
``logging.getLogger("graphcalc.numpify")``.
"""

from __future__ import annotations

import builtins
import keyword
import logging
import textwrap
import time
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union, cast

import numpy as np
import sympy as sp
from sympy.printing.numpy import NumPyPrinter

__all__ = ["numpify", "numpify_cached", "NumpifiedFunction"]


logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class NumpifiedFunction:
    """Compiled SymPy->NumPy callable that keeps its expression and source."""

    __slots__ = ("_fn", "symbolic", "vars", "source")

    def __init__(
        self,
        fn: Callable[..., Any],
        symbolic: sp.Basic,
        vars: Tuple[sp.Symbol, ...],
        source: str,
    ) -> None:
        self._fn = fn
        self.symbolic = symbolic
        self.vars = vars
        self.source = source

    def __call__(self, *args: Any) -> Any:
        if len(args) != len(self.vars):
            raise TypeError(
                f"Expected {len(self.vars)} positional argument(s), got {len(args)}"
            )
        return self._fn(*args)

    def __repr__(self) -> str:
        names = ", ".join(v.name for v in self.vars)
        return f"NumpifiedFunction({self.symbolic!r}, vars=({names}))"


def numpify(
    expr: Any,
    *,
    vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]] = None,
    cache: bool = True,
) -> NumpifiedFunction:
    """Compile ``expr`` into a NumPy-evaluable function of ``vars``.

    Parameters
    ----------
    expr:
        A SymPy expression or anything :func:`sympy.sympify` accepts.
    vars:
        Positional arguments of the compiled function. ``None`` uses all free
        symbols sorted by :func:`sympy.default_sort_key`.
    cache:
        Reuse compiled functions through :func:`numpify_cached`.

    Raises
    ------
    TypeError
        If ``expr`` is not SymPy-compatible or ``vars`` holds non-symbols.
    ValueError
        If ``expr`` has free symbols that are not in ``vars``.

    Notes
    -----
    The generated function is created with ``exec``; do not compile untrusted
    SymPy objects.
    """
    if cache:
        return numpify_cached(expr, vars=vars)
    return _numpify_uncached(expr, vars=vars)


def _sympify(expr: Any) -> sp.Basic:
    try:
        expr_sym = sp.sympify(expr)
    except (sp.SympifyError, TypeError) as e:
        raise TypeError(f"numpify expects a SymPy-compatible expression, got {type(expr)}") from e
    if not isinstance(expr_sym, sp.Basic):
        raise TypeError(f"numpify expects a SymPy expression, got {type(expr_sym)}")
    return expr_sym


def _normalize_vars(expr: sp.Basic, vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]]) -> Tuple[sp.Symbol, ...]:
    """Normalize vars into a tuple of SymPy Symbols."""
    if vars is None:
        return tuple(sorted(expr.free_symbols, key=sp.default_sort_key))
    if isinstance(vars, sp.Symbol):
        return (vars,)
    try:
        vars_tuple = tuple(vars)
    except TypeError as e:
        raise TypeError("vars must be a SymPy Symbol or an iterable of SymPy Symbols") from e
    for a in vars_tuple:
        if not isinstance(a, sp.Symbol):
            raise TypeError(f"vars must contain only SymPy Symbols, got {type(a)}")
    return cast(Tuple[sp.Symbol, ...], vars_tuple)


def _argument_names(vars_tuple: Tuple[sp.Symbol, ...]) -> list[str]:
    reserved = set(keyword.kwlist) | set(dir(builtins)) | {"numpy"}
    names: list[str] = []
    for idx, sym in enumerate(vars_tuple):
        base = sym.name if sym.name.isidentifier() and not keyword.iskeyword(sym.name) else f"_arg{idx}"
        candidate = base
        suffix = 0
        while candidate in reserved or candidate in names:
            candidate = f"{base}__{suffix}"
            suffix += 1
        names.append(candidate)
    return names


def _numpify_uncached(
    expr: Any,
    *,
    vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]] = None,
) -> NumpifiedFunction:
    """Compile ``expr`` without consulting the cache."""
    expr = _sympify(expr)
    vars_tuple = _normalize_vars(expr, vars)

    log_debug = logger.isEnabledFor(logging.DEBUG)
    t0 = time.perf_counter() if log_debug else 0.0

    missing = {s.name for s in expr.free_symbols} - {v.name for v in vars_tuple}
    if missing:
        raise ValueError(
            "Expression contains unbound symbols: " + ", ".join(sorted(missing))
        )

    arg_names = _argument_names(vars_tuple)
    expr_codegen = expr.xreplace({sym: sp.Symbol(name) for sym, name in zip(vars_tuple, arg_names)})
    printer = NumPyPrinter(settings={"user_functions": {}})
    expr_code = printer.doprint(expr_codegen)

    lines = ["def _generated(" + ", ".join(arg_names) + "):"]
    for nm in arg_names:
        lines.append(f"    {nm} = numpy.asarray({nm}, dtype=float)")
    if not expr.free_symbols and arg_names:
        lines.append(f"    _shape = numpy.broadcast({', '.join(arg_names)}).shape")
        lines.append(f"    return ({expr_code}) + numpy.zeros(_shape)")
    else:
        lines.append(f"    return {expr_code}")
    src = "\n".join(lines)

    glb: Dict[str, Any] = {"numpy": np}
    loc: Dict[str, Any] = {}
    exec(src, glb, loc)
    fn = cast(Callable[..., Any], loc["_generated"])
    fn.__doc__ = textwrap.dedent(
        f"""
        Auto-generated NumPy function from SymPy expression.

        expr: {expr!r}
        vars: {arg_names}
        """
    ).strip()

    if log_debug:
        logger.debug("numpify: compiled %r in %.2f ms", expr, 1000.0 * (time.perf_counter() - t0))

    return NumpifiedFunction(fn=fn, symbolic=expr, vars=vars_tuple, source=src)


_NUMPIFY_CACHE_MAXSIZE = 256


@lru_cache(maxsize=_NUMPIFY_CACHE_MAXSIZE)
def _numpify_cached_impl(expr: sp.Basic, vars_tuple: Tuple[sp.Symbol, ...]) -> NumpifiedFunction:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("numpify_cached: cache MISS (vars=%s)", [a.name for a in vars_tuple])
    return _numpify_uncached(expr, vars=vars_tuple)


def numpify_cached(
    expr: Any,
    *,
    vars: Optional[Union[sp.Symbol, Iterable[sp.Symbol]]] = None,
) -> NumpifiedFunction:
    """Cached version of :func:`numpify`, keyed on the expression and ``vars``.

    Use ``numpify_cached.cache_clear()`` to force recompilation.
    """
    expr_sym = _sympify(expr)
    return _numpify_cached_impl(expr_sym, _normalize_vars(expr_sym, vars))


numpify_cached.cache_info = _numpify_cached_impl.cache_info  # type: ignore[attr-defined]
numpify_cached.cache_clear = _numpify_cached_impl.cache_clear  # type: ignore[attr-defined]
