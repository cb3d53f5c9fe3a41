"""Text-to-number conversion for domain bound input."""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

import sympy as sp


def InputConvert(obj: Any) -> float:
    """
    Convert ``obj`` to a finite real ``float``.

    Rules:
    - Numbers (excluding ``bool``) are cast with ``float``.
    - Strings are stripped, then:
        1) parsed with ``float(s)``,
        2) otherwise parsed as a SymPy expression and evaluated, so ``"pi"``
           or ``"-2*pi"`` are accepted.

    Raises
    ------
    ValueError
        If the input is empty, not a number, complex, or not finite.

    Examples
    --------
    >>> InputConvert(" -2.5 ")
    -2.5
    >>> round(InputConvert("2*pi"), 6)
    6.283185
    """
    if isinstance(obj, bool):
        raise ValueError(f"Could not convert {obj!r} to float.")

    if isinstance(obj, (int, float)):
        value = float(obj)
    elif isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ValueError("Cannot convert empty string to float.")
        try:
            value = float(s)
        except ValueError:
            value = _sympy_value(s)
    else:
        try:
            value = float(obj)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Could not convert {obj!r} to float.") from e

    if not math.isfinite(value):
        raise ValueError(f"Could not convert {obj!r} to a finite float.")
    return value


def _sympy_value(s: str) -> float:
    try:
        expr = sp.sympify(s)
        number = complex(expr.evalf())
    except Exception as e:
        raise ValueError(f"Could not convert {s!r} to float (neither directly nor via SymPy).") from e
    if number.imag != 0:
        raise ValueError(f"Could not convert non-real {s!r} to float: imaginary part is non-zero.")
    return number.real


def parse_bound(text: Optional[str], default: float, *, name: str = "bound") -> Tuple[float, Optional[str]]:
    """Parse one domain bound, falling back to ``default``.

    Returns
    -------
    tuple[float, str or None]
        The bound and a user-facing warning. Empty or unparseable text gets
        a warning; ``None`` (no text supplied) falls back silently.

    Examples
    --------
    >>> parse_bound("3", -10.0, name="start")
    (3.0, None)
    >>> parse_bound("abc", -10.0, name="start")
    (-10.0, 'Invalid start value. Using default -10.')
    >>> parse_bound("", 10.0, name="end")
    (10.0, 'Invalid end value. Using default 10.')
    """
    if text is None:
        return float(default), None
    try:
        return InputConvert(text), None
    except ValueError:
        return float(default), f"Invalid {name} value. Using default {default:g}."
