"""
Scalar and planar geometry helpers for guidance code.

Provides functions for:
- Clamping values to a (possibly reversed) range
- Smooth Hermite blending between two edges
- Half-plane constraints from a directed 2D line
"""

import numpy as np
from typing import Tuple


# Minimum line length for half-plane construction (meters)
EPSILON_LINE = 1e-12


def clamp(value: float, lower_bound: float, upper_bound: float) -> float:
    """
    Clamp a value to the range spanned by two bounds.

    The bounds may be given in either order; the value is clamped to
    [min(lower, upper), max(lower, upper)].

    Example:
        >>> clamp(5.0, 0.0, 1.0)
        1.0
        >>> clamp(5.0, 10.0, 0.0)  # reversed bounds
        5.0
    """
    lo = min(lower_bound, upper_bound)
    hi = max(lower_bound, upper_bound)
    return max(lo, min(value, hi))


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """
    Smooth Hermite interpolation between two edges.

    Maps x to [0, 1] with f(edge0) = 0, f(edge1) = 1 and zero slope at both
    edges:

        t = clamp((x - edge0) / (edge1 - edge0), 0, 1)
        f = 3t² - 2t³

    If the edges coincide (|edge1 - edge0| <= machine epsilon) the result
    is a hard step at edge0: 0 below, 1 at or above.

    Args:
        edge0: Input value mapped to 0.
        edge1: Input value mapped to 1. May be smaller than edge0.
        x: Input value.

    Returns:
        Blend value in [0, 1].
    """
    for name, v in (("edge0", edge0), ("edge1", edge1), ("x", x)):
        if np.ndim(v) != 0:
            raise ValueError(f"{name} must be a scalar, got shape {np.shape(v)}")

    de = edge1 - edge0
    eps = np.finfo(float).eps
    if de > eps or de < -eps:
        t = clamp((x - edge0) / de, 0.0, 1.0)
        return t * t * (3.0 - t - t)
    return 1.0 if (x - edge0) >= 0.0 else 0.0


def line_inequality_constraint_2d(
    point1: np.ndarray,
    point2: np.ndarray,
) -> Tuple[np.ndarray, float]:
    """
    Half-plane constraint A @ p <= b bounded by the line through two points.

    The constraint is satisfied on the side of the directed line
    point1 -> point2 opposite to the normal A. With p = [north, east]
    this is the right-hand side when looking along the line (north-up,
    east-right map view).

    Args:
        point1: First point on the line, shape (2,).
        point2: Second point on the line, shape (2,).

    Returns:
        Tuple (A, b): A of shape (2,) with unit norm, scalar b.
        If the points are closer than EPSILON_LINE the constraint is
        infeasible: A = [0, 0], b = -1.

    Example:
        >>> A, b = line_inequality_constraint_2d(np.array([0.0, 0.0]),
        ...                                      np.array([1.0, 0.0]))
        >>> A @ np.array([0.5, 1.0]) <= b  # east of a northbound line
        True
    """
    point1 = np.asarray(point1, dtype=float)
    point2 = np.asarray(point2, dtype=float)
    if point1.shape != (2,):
        raise ValueError(f"point1 must have shape (2,), got {point1.shape}")
    if point2.shape != (2,):
        raise ValueError(f"point2 must have shape (2,), got {point2.shape}")

    dx = point2[0] - point1[0]
    dy = point2[1] - point1[1]
    length = np.hypot(dx, dy)
    if length <= EPSILON_LINE:
        return np.zeros(2), -1.0

    A = np.array([dy, -dx]) / length
    b = float(A @ point1)
    return A, b
