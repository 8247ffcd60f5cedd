"""Coordinate transformations between geodetic (LLA), ECEF and local NED frames.

This module implements the conversions used by the navigation core:
- LLA -> NED by a second-order series around the origin (Drake, 2002).
  Cheap and accurate for short baselines; the truncation error grows with
  the cube of the baseline (a few millimeters at 10 km, meters at 100 km).
- NED -> LLA through ECEF, with geodetic latitude recovered by Bowring's
  closed form refined by a bounded fixed-point iteration.

WGS84 ellipsoid parameters:
- Semi-major axis (a): 6378137.0 m
- Flattening (f): 1/298.257223563
- Semi-minor axis (b): 6356752.314245 m
- First eccentricity squared (e²): 0.00669437999014132

Altitudes are ellipsoidal heights in meters, positive up. Batch variants
apply the scalar conversion row by row for points sharing one origin.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Tuple

from navcore.utils.angles import symmetrical_angle
from navcore.utils.validation import as_scalar

# WGS84 ellipsoid parameters
WGS84_A = 6378137.0  # Semi-major axis (m)
WGS84_F = 1.0 / 298.257223563  # Flattening
WGS84_B = WGS84_A * (1.0 - WGS84_F)  # Semi-minor axis (m)
WGS84_E2 = 0.00669437999014132  # First eccentricity squared
WGS84_EP2 = WGS84_E2 / (1.0 - WGS84_E2)  # Second eccentricity squared

# Bowring's method
BOWRING_MAX_ITER = 5
_AE2 = WGS84_A * WGS84_E2
_BEP2 = WGS84_B * WGS84_EP2


def radii_of_curvature(lat: float) -> Tuple[float, float]:
    """
    Meridian and transverse radii of curvature at a geodetic latitude.

    Args:
        lat: Geodetic latitude in radians.

    Returns:
        Tuple (Rn, Re) in meters:
            Rn: meridian radius, a(1-e²) / (1 - e² sin²φ)^(3/2)
            Re: transverse (prime vertical) radius, a / (1 - e² sin²φ)^(1/2)
    """
    s = np.sin(lat)
    inv_root = 1.0 / np.sqrt(1.0 - WGS84_E2 * s * s)
    Re = WGS84_A * inv_root
    Rn = Re * (1.0 - WGS84_E2) * inv_root * inv_root
    return Rn, Re


def llh_to_ecef(
    lat: float,
    lon: float,
    height: float,
) -> NDArray[np.float64]:
    """Convert geodetic coordinates (LLA) to ECEF Cartesian coordinates.

    Args:
        lat: Latitude in radians (positive north).
        lon: Longitude in radians (positive east).
        height: Height above WGS84 ellipsoid in meters.

    Returns:
        ECEF coordinates as numpy array [x, y, z] in meters.

    Example:
        >>> xyz = llh_to_ecef(0.0, 0.0, 0.0)  # [6378137, 0, 0]
    """
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    N = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat**2)

    x = (N + height) * cos_lat * np.cos(lon)
    y = (N + height) * cos_lat * np.sin(lon)
    z = (N * (1.0 - WGS84_E2) + height) * sin_lat

    return np.array([x, y, z], dtype=np.float64)


def ecef_to_lla_bowring(
    x: float,
    y: float,
    z: float,
    max_iter: int = BOWRING_MAX_ITER,
) -> NDArray[np.float64]:
    """Convert ECEF coordinates to geodetic coordinates with Bowring's method.

    Longitude is exact (atan2). Latitude starts from Bowring's closed-form
    estimate through the parametric latitude β and is refined by
    re-evaluating the formula with the updated β. The loop stops as soon as
    β no longer changes or after `max_iter` refinements; two or three are
    usually enough to reach machine precision.

    Args:
        x: ECEF x-coordinate in meters.
        y: ECEF y-coordinate in meters.
        z: ECEF z-coordinate in meters.
        max_iter: Upper bound on fixed-point refinements.

    Returns:
        Geodetic coordinates [lat, lon, alt] (radians, radians, meters).
    """
    one_minus_f = 1.0 - WGS84_F
    lon = np.arctan2(y, x)
    rho = np.hypot(x, y)

    beta = np.arctan2(z, one_minus_f * rho)
    lat = np.arctan2(z + _BEP2 * np.sin(beta) ** 3, rho - _AE2 * np.cos(beta) ** 3)
    beta_new = np.arctan2(one_minus_f * np.sin(lat), np.cos(lat))

    count = 0
    while beta != beta_new and count < max_iter:
        beta = beta_new
        lat = np.arctan2(z + _BEP2 * np.sin(beta) ** 3, rho - _AE2 * np.cos(beta) ** 3)
        beta_new = np.arctan2(one_minus_f * np.sin(lat), np.cos(lat))
        count += 1

    # Height from the final latitude (valid at the poles, no division by cos)
    sin_lat = np.sin(lat)
    N = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
    alt = rho * np.cos(lat) + (z + WGS84_E2 * N * sin_lat) * sin_lat - N

    return np.array([lat, lon, alt], dtype=np.float64)


def lla_to_ned(
    lat: float,
    lon: float,
    alt: float,
    lat_ref: float,
    lon_ref: float,
    alt_ref: float,
) -> NDArray[np.float64]:
    """Convert a geodetic position to NED coordinates around an origin.

    Second-order series expansion of the geodetic-to-local-tangent transform
    (S. P. Drake, "Converting GPS Coordinates to Navigation Coordinates",
    DSTO-TN-0432, 2002). The longitude difference is wrapped to [-π, π) so
    origins near the antimeridian work.

    This is an approximation: the neglected third-order terms make the
    result drift from the exact transform roughly with R·(d/R)³ for a
    baseline d (millimeters at 10 km). Use it for short baselines only.

    Args:
        lat: Latitude of the target in radians.
        lon: Longitude of the target in radians.
        alt: Altitude of the target in meters (positive up).
        lat_ref: Latitude of the NED origin in radians.
        lon_ref: Longitude of the NED origin in radians.
        alt_ref: Altitude of the NED origin in meters (positive up).

    Returns:
        NED coordinates [north, east, down] in meters.

    Example:
        >>> ned = lla_to_ned(1e-4, 0.0, 0.0, 0.0, 0.0, 0.0)  # ≈ [633.5, 0, 0]
    """
    lat = as_scalar(lat, "lat")
    lon = as_scalar(lon, "lon")
    alt = as_scalar(alt, "alt")
    lat_ref = as_scalar(lat_ref, "lat_ref")
    lon_ref = as_scalar(lon_ref, "lon_ref")
    alt_ref = as_scalar(alt_ref, "alt_ref")

    dphi = lat - lat_ref
    dlam = symmetrical_angle(lon - lon_ref)
    dh = alt - alt_ref

    cp = np.cos(lat_ref)
    sp = np.sin(lat_ref)
    root = np.sqrt(1.0 - WGS84_E2 * sp * sp)
    root3 = root * root * root
    dlam2 = dlam * dlam
    dphi2 = dphi * dphi

    a = WGS84_A
    e2 = WGS84_E2
    north = (
        (a * (1.0 - e2) / root3 + alt_ref) * dphi
        + 1.5 * cp * sp * a * e2 * dphi2
        + sp * sp * dh * dphi
        + 0.5 * sp * cp * (a / root + alt_ref) * dlam2
    )
    east = (
        (a / root + alt_ref) * cp * dlam
        - (a * (1.0 - e2) / root3 + alt_ref) * sp * dphi * dlam
        + cp * dlam * dh
    )
    down = -(
        dh
        - 0.5 * (a - 1.5 * a * e2 * cp * cp + 0.5 * a * e2 + alt_ref) * dphi2
        - 0.5 * cp * cp * (a / root - alt_ref) * dlam2
    )

    return np.array([north, east, down], dtype=np.float64)


def ned_to_lla(
    north: float,
    east: float,
    down: float,
    lat_ref: float,
    lon_ref: float,
    alt_ref: float,
) -> NDArray[np.float64]:
    """Convert NED coordinates around an origin to a geodetic position.

    The origin is converted to ECEF, the NED offset is rotated into ECEF and
    added, and the sum is converted back with Bowring's method. Unlike
    lla_to_ned this path has no truncation error.

    Args:
        north: North offset in meters.
        east: East offset in meters.
        down: Down offset in meters.
        lat_ref: Latitude of the NED origin in radians.
        lon_ref: Longitude of the NED origin in radians.
        alt_ref: Altitude of the NED origin in meters (positive up).

    Returns:
        Geodetic coordinates [lat, lon, alt] (radians, radians, meters).

    Example:
        >>> lla = ned_to_lla(1000.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        >>> # lla[0] ≈ 1000 / 6335439 rad (meridian radius at the equator)
    """
    north = as_scalar(north, "north")
    east = as_scalar(east, "east")
    down = as_scalar(down, "down")
    lat_ref = as_scalar(lat_ref, "lat_ref")
    lon_ref = as_scalar(lon_ref, "lon_ref")
    alt_ref = as_scalar(alt_ref, "alt_ref")

    xyz_ref = llh_to_ecef(lat_ref, lon_ref, alt_ref)

    sin_lat = np.sin(lat_ref)
    cos_lat = np.cos(lat_ref)
    sin_lon = np.sin(lon_ref)
    cos_lon = np.cos(lon_ref)

    # Rotation from NED to ECEF (R_ECEF_NED)
    R = np.array(
        [
            [-sin_lat * cos_lon, -sin_lon, -cos_lat * cos_lon],
            [-sin_lat * sin_lon, cos_lon, -cos_lat * sin_lon],
            [cos_lat, 0.0, -sin_lat],
        ],
        dtype=np.float64,
    )

    xyz = xyz_ref + R @ np.array([north, east, down], dtype=np.float64)

    return ecef_to_lla_bowring(*xyz)


def lla_to_ned_batch(
    lla: NDArray[np.float64],
    lat_ref: float,
    lon_ref: float,
    alt_ref: float,
) -> NDArray[np.float64]:
    """Apply lla_to_ned to each row of an (N, 3) array of [lat, lon, alt].

    Returns:
        Array of shape (N, 3) with [north, east, down] rows.
    """
    lla = np.asarray(lla, dtype=np.float64)
    if lla.ndim != 2 or lla.shape[1] != 3:
        raise ValueError(f"lla must have shape (N, 3), got {lla.shape}")

    ned = np.empty_like(lla)
    for i, (lat, lon, alt) in enumerate(lla):
        ned[i] = lla_to_ned(lat, lon, alt, lat_ref, lon_ref, alt_ref)
    return ned


def ned_to_lla_batch(
    ned: NDArray[np.float64],
    lat_ref: float,
    lon_ref: float,
    alt_ref: float,
) -> NDArray[np.float64]:
    """Apply ned_to_lla to each row of an (N, 3) array of [north, east, down].

    Returns:
        Array of shape (N, 3) with [lat, lon, alt] rows.
    """
    ned = np.asarray(ned, dtype=np.float64)
    if ned.ndim != 2 or ned.shape[1] != 3:
        raise ValueError(f"ned must have shape (N, 3), got {ned.shape}")

    lla = np.empty_like(ned)
    for i, (north, east, down) in enumerate(ned):
        lla[i] = ned_to_lla(north, east, down, lat_ref, lon_ref, alt_ref)
    return lla
