"""Axis tick planning with whole-number steps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

__all__ = ["TickMark", "format_tick_label", "plan_axis_ticks", "tick_step"]


@dataclass(frozen=True)
class TickMark:
    """One tick: position in data units and its label text."""

    position: float
    label: str


def tick_step(span: float, target: int = 10) -> float:
    """Return ``round(span / target)``, or 1 when that rounds to zero.

    Rounding is half-to-even, so ``tick_step(25)`` is ``2``.

    Examples
    --------
    >>> tick_step(20.0)
    2.0
    >>> tick_step(0.001)
    1.0
    """
    step = float(round(span / target))
    if step == 0:
        step = 1.0
    return step


def format_tick_label(value: float) -> str:
    """Format ``value`` rounded to the nearest integer, halves away from zero.

    Examples
    --------
    >>> format_tick_label(2.5), format_tick_label(-2.5), format_tick_label(-0.2)
    ('3', '-3', '0')
    """
    rounded = math.copysign(math.floor(abs(value) + 0.5), value)
    if rounded == 0:
        return "0"
    return f"{rounded:.0f}"


def plan_axis_ticks(start: float, end: float, target: int = 10, *, epsilon: float = 1e-4) -> List[TickMark]:
    """Return ticks at every multiple of :func:`tick_step` inside ``[start, end]``.

    The first tick is ``ceil(start/step)*step`` and the last is
    ``floor(end/step)*step``; ``epsilon`` absorbs floating error at the
    upper end.

    Examples
    --------
    >>> [t.label for t in plan_axis_ticks(-10.0, 10.0)]
    ['-10', '-8', '-6', '-4', '-2', '0', '2', '4', '6', '8', '10']
    """
    if not end > start:
        raise ValueError(f"Tick interval must be increasing, got ({start}, {end}).")
    step = tick_step(end - start, target)
    first = math.ceil(start / step) * step
    last = math.floor(end / step) * step

    ticks: List[TickMark] = []
    k = 0
    value = first
    while value <= last + epsilon:
        ticks.append(TickMark(value, format_tick_label(value)))
        k += 1
        value = first + k * step
    return ticks
