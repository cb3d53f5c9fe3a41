"""Domain sweep and finite-sample filtering.

``sample_domain`` produces the x values handed to the evaluator;
``filter_finite`` turns the evaluator's ``(x, y)`` pairs into an ``(n, 2)``
point array with every NaN/infinite ``y`` removed, preserving order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

__all__ = [
    "Domain",
    "InvalidDomainError",
    "NoValidPointsError",
    "filter_finite",
    "sample_domain",
]


class InvalidDomainError(ValueError):
    """Raised for a domain that is empty, reversed, or not finite."""


class NoValidPointsError(ValueError):
    """Raised when no sample survives the finite filter."""

    def __init__(self, message: str = "No valid points to plot.") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Domain:
    """Horizontal interval ``[x_start, x_end]`` over which a function is sampled."""

    x_start: float
    x_end: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x_start) and math.isfinite(self.x_end)):
            raise InvalidDomainError(f"Domain bounds must be finite, got ({self.x_start}, {self.x_end}).")
        if not self.x_start < self.x_end:
            raise InvalidDomainError(
                f"Domain start must be less than end, got ({self.x_start:g}, {self.x_end:g})."
            )

    @property
    def width(self) -> float:
        return self.x_end - self.x_start

    def contains(self, value: float) -> bool:
        return self.x_start <= value <= self.x_end

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x_start, self.x_end)


def sample_domain(domain: Domain, step: float) -> np.ndarray:
    """Return ``x_start + k*step`` for every k that stays inside the domain.

    The end point is included when it falls on the grid.

    Examples
    --------
    >>> sample_domain(Domain(-1.0, 1.0), 0.5)
    array([-1. , -0.5,  0. ,  0.5,  1. ])
    """
    if not (math.isfinite(step) and step > 0):
        raise ValueError(f"step must be a positive finite number, got {step!r}")
    count = int(math.floor(domain.width / step + 1e-9)) + 1
    return domain.x_start + step * np.arange(count, dtype=float)


def filter_finite(samples: Iterable[Sequence[float]]) -> np.ndarray:
    """Drop samples whose ``y`` is NaN or infinite.

    Parameters
    ----------
    samples : iterable of (x, y)
        Evaluator output, in sweep order.

    Returns
    -------
    numpy.ndarray
        ``(n, 2)`` array of the surviving points, original order kept.

    Raises
    ------
    NoValidPointsError
        If nothing survives.
    """
    points = np.asarray([(float(x), float(y)) for x, y in samples], dtype=float).reshape(-1, 2)
    kept = points[np.isfinite(points[:, 1])]
    if kept.shape[0] == 0:
        raise NoValidPointsError()
    return kept
