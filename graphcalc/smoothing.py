"""Catmull-Rom smoothing of filtered sample points.

Each window of four consecutive points ``(p0, p1, p2, p3)`` contributes the
uniform Catmull-Rom segment from ``p1`` to ``p2``::

    p(t) = 0.5 * ( 2*p1
                 + (-p0 + p2) * t
                 + (2*p0 - 5*p1 + 4*p2 - p3) * t**2
                 + (-p0 + 3*p1 - 3*p2 + p3) * t**3 )

Segments are sampled at ``t = 0, step, 2*step, ...`` with ``t = 1`` left out,
because it equals ``t = 0`` of the next window. The last window's ``t = 1``
point (``p[n-2]``) is appended once, so the smoothed curve runs from the
second to the second-to-last filtered point with no repeated vertices.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

__all__ = ["catmull_rom", "smooth_curve", "needs_smoothing"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def catmull_rom(p0: Any, p1: Any, p2: Any, p3: Any, t: Any) -> np.ndarray:
    """Evaluate the Catmull-Rom segment through ``p1`` and ``p2``.

    Works component-wise and broadcasts: points may be scalars, ``(2,)``
    pairs, or stacked arrays, and ``t`` may be an array.

    The polynomial is evaluated in cubic-Hermite form (tangents
    ``(p2 - p0)/2`` and ``(p3 - p1)/2``). At ``t = 0`` and ``t = 1`` every
    basis weight is exactly 0 or 1, so the segment returns ``p1`` and ``p2``
    bit-for-bit.

    Examples
    --------
    >>> catmull_rom([0, 0], [1, 1], [2, 4], [3, 9], 0.0)
    array([1., 1.])
    >>> catmull_rom([0, 0], [1, 1], [2, 4], [3, 9], 1.0)
    array([2., 4.])
    """
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    t = np.asarray(t, dtype=float)
    t2 = t * t
    t3 = t2 * t

    h00 = 2.0 * t3 - 3.0 * t2 + 1.0
    h10 = t3 - 2.0 * t2 + t
    h01 = -2.0 * t3 + 3.0 * t2
    h11 = t3 - t2

    m1 = 0.5 * (p2 - p0)
    m2 = 0.5 * (p3 - p1)
    return h00 * p1 + h10 * m1 + h01 * p2 + h11 * m2


def needs_smoothing(points: np.ndarray) -> bool:
    """Return False for inputs that are passed through unchanged.

    That is fewer than four points, or a constant function (every ``y``
    exactly equal, no tolerance).
    """
    if points.shape[0] < 4:
        return False
    ys = points[:, 1]
    return not bool(np.all(ys == ys[0]))


def smooth_curve(points: np.ndarray, step: float = 0.05) -> np.ndarray:
    """Return a denser ordered point sequence through ``points``.

    Parameters
    ----------
    points : numpy.ndarray
        ``(n, 2)`` filtered samples in sweep order.
    step : float
        Parameter step per window; ``1/step`` is rounded to the number of
        vertices each window contributes.

    Returns
    -------
    numpy.ndarray
        ``points`` itself when :func:`needs_smoothing` is False, otherwise an
        ``((n - 3) * round(1/step) + 1, 2)`` array.
    """
    points = np.asarray(points, dtype=float)
    if not needs_smoothing(points):
        logger.debug("smooth_curve: pass-through for %d point(s)", points.shape[0])
        return points
    if not 0.0 < step <= 1.0:
        raise ValueError(f"step must be in (0, 1], got {step!r}")

    per_window = max(1, int(round(1.0 / step)))
    t = (np.arange(per_window, dtype=float) * step)[None, :, None]

    p0 = points[:-3][:, None, :]
    p1 = points[1:-2][:, None, :]
    p2 = points[2:-1][:, None, :]
    p3 = points[3:][:, None, :]

    body = catmull_rom(p0, p1, p2, p3, t).reshape(-1, 2)
    curve = np.vstack([body, points[-2:-1]])
    logger.debug("smooth_curve: %d point(s) -> %d vertices", points.shape[0], curve.shape[0])
    return curve
