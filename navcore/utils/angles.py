"""
Angle wrapping and manipulation utilities.

Provides functions for keeping angular quantities inside well-defined
ranges. Wrapping is done by truncated division (not the atan2 trick) so
that it is exact and idempotent: wrapping an already wrapped value returns
the value unchanged, bit for bit.

Ranges:
    - symmetrical_angle: [-π, π)
    - positive_angle:    [0, 2π)

Used by:
    - LLA to NED conversion (longitude difference)
    - Strapdown position update (latitude/longitude range after integration)
    - Sensor-to-body Euler angle transform
"""

import numpy as np
from typing import Tuple, Union

ArrayOrFloat = Union[float, np.ndarray]

TWO_PI = 2.0 * np.pi
HALF_PI = 0.5 * np.pi


def symmetrical_angle(x: ArrayOrFloat) -> ArrayOrFloat:
    """
    Wrap angle to [-π, π) range.

    The angle is first reduced by whole turns towards zero, then shifted by
    one turn if it is still outside the half-open interval.

    Args:
        x: Angle in radians, scalar or array of any shape.

    Returns:
        Wrapped angle(s) in range [-π, π). Same shape as input.

    Example:
        >>> symmetrical_angle(3.5 * np.pi)  # 630° -> -90°
        -1.5707963267948966
        >>> symmetrical_angle(np.pi)  # upper bound is open
        -3.141592653589793
    """
    x = x - TWO_PI * np.fix(x / TWO_PI)
    return x + TWO_PI * ((x < -np.pi) * 1.0 - (x >= np.pi) * 1.0)


def positive_angle(x: ArrayOrFloat) -> ArrayOrFloat:
    """
    Wrap angle to [0, 2π) range.

    Args:
        x: Angle in radians, scalar or array of any shape.

    Returns:
        Wrapped angle(s) in range [0, 2π). Same shape as input.

    Example:
        >>> positive_angle(-0.5 * np.pi)
        4.71238898038469
    """
    x = x - TWO_PI * np.fix(x / TWO_PI)
    y = x + TWO_PI * ((x < 0.0) * 1.0)
    # Tiny negative inputs round up to exactly 2π
    if np.ndim(y) == 0:
        return 0.0 if y >= TWO_PI else y
    return np.where(y >= TWO_PI, 0.0, y)


def average_angle(angle1: ArrayOrFloat, angle2: ArrayOrFloat) -> ArrayOrFloat:
    """
    Average of two angles along the shorter arc.

    Computes the bisector of the shortest arc from angle1 to angle2, so
    that averaging 179° and -179° gives 180° (wrapped to -180°) instead
    of 0°.

    Args:
        angle1: First angle in radians.
        angle2: Second angle in radians.

    Returns:
        Average angle in range [-π, π).

    Example:
        >>> average_angle(np.deg2rad(170.0), np.deg2rad(-170.0))  # -> -180°
        -3.141592653589793
    """
    return symmetrical_angle(angle1 + 0.5 * symmetrical_angle(angle2 - angle1))


def angle_diff(angle1: ArrayOrFloat, angle2: ArrayOrFloat) -> ArrayOrFloat:
    """
    Shortest signed angular difference angle1 - angle2 in [-π, π).

    Example:
        >>> angle_diff(np.pi - 0.1, -np.pi + 0.1)  # Nearly opposite
        -0.2
    """
    if isinstance(angle1, np.ndarray) or isinstance(angle2, np.ndarray):
        return symmetrical_angle(np.asarray(angle1) - np.asarray(angle2))
    return symmetrical_angle(angle1 - angle2)


def ensure_lat_lon_range(phi: float, lam: float) -> Tuple[float, float]:
    """
    Map an integrated (phi, lambda) pair back onto valid latitude/longitude.

    After integrating a position over the pole the latitude can leave the
    range [-π/2, π/2]. Such an overshoot is reflected back across the pole
    and the longitude is moved to the opposite meridian:

        phi > +π/2:  phi <- +π - phi,  lambda <- lambda + π
        phi < -π/2:  phi <- -π - phi,  lambda <- lambda + π

    Args:
        phi: Latitude-like angle in radians (any value).
        lam: Longitude-like angle in radians (any value).

    Returns:
        Tuple (lat, lon) with lat in [-π/2, π/2] and lon in [-π, π).

    Example:
        >>> lat, lon = ensure_lat_lon_range(np.deg2rad(91.0), 0.0)
        >>> np.rad2deg(lat), np.rad2deg(lon)  # (89°, -180°)
    """
    if np.ndim(phi) != 0 or np.ndim(lam) != 0:
        raise ValueError("phi and lam must be scalars")

    # Floored modulo into [-π, π)
    phi = float(np.mod(phi, TWO_PI))
    if phi >= np.pi:
        phi -= TWO_PI

    if phi > HALF_PI:
        phi = np.pi - phi
        lam = lam + np.pi
    elif phi < -HALF_PI:
        phi = -np.pi - phi
        lam = lam + np.pi

    lam = float(np.mod(lam, TWO_PI))
    if lam >= np.pi:
        lam -= TWO_PI

    return phi, lam
