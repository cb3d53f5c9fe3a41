"""Immutable variable bindings shared by the calculator and its plot views.

A ``SymbolTable`` is published, never edited: :meth:`SymbolTable.assign`
returns a new table and leaves the original untouched, so a plot view holding
an older table keeps a consistent snapshot until the session pushes the next
one.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Dict, Optional

import sympy as sp
from sympy.core.symbol import Symbol


class SymbolTable(Mapping[str, sp.Basic]):
    """Read-only ``name -> value`` mapping of evaluated variables.

    Parameters
    ----------
    entries : Mapping[str, Any], optional
        Initial bindings. Values are converted with :func:`sympy.sympify`.

    Examples
    --------
    >>> table = SymbolTable().assign("a", 2)
    >>> table["a"]
    2
    >>> SymbolTable()["a"]  # doctest: +SKIP
    KeyError: "Unknown variable 'a'."
    """

    __slots__ = ("_values",)

    def __init__(self, entries: Optional[Mapping[str, Any]] = None) -> None:
        values: Dict[str, sp.Basic] = {}
        for name, value in (entries or {}).items():
            _check_name(name)
            values[name] = sp.sympify(value)
        self._values = values

    def __getitem__(self, key: str | Symbol) -> sp.Basic:
        """Return the value bound to a name or to a symbol's name."""
        name = key.name if isinstance(key, Symbol) else key
        try:
            return self._values[name]
        except KeyError:
            raise KeyError(f"Unknown variable {name!r}.") from None

    def __iter__(self) -> Iterator[str]:
        """Iterate names in binding order."""
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def assign(self, name: str, value: Any) -> "SymbolTable":
        """Return a new table with ``name`` bound to ``value``.

        Rebinding an existing name keeps its original position.
        """
        _check_name(name)
        updated = dict(self._values)
        updated[name] = sp.sympify(value)
        return SymbolTable(updated)

    def bindings(self, *, exclude: tuple[str, ...] = ()) -> Dict[Symbol, sp.Basic]:
        """Return a ``Symbol -> value`` substitution dict.

        Parameters
        ----------
        exclude : tuple[str, ...]
            Names to leave unbound (for example the plot variable ``x``).
        """
        return {
            sp.Symbol(name): value
            for name, value in self._values.items()
            if name not in exclude
        }

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value}" for name, value in self._values.items())
        return f"SymbolTable({inner})"


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name.isidentifier():
        raise ValueError(f"Invalid variable name {name!r}.")
