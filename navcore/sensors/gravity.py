"""
WGS84 normal gravity magnitude.

This module implements the WGS84 "close approximation" gravity model, the
normal gravity of the reference ellipsoid evaluated in ellipsoidal harmonic
coordinates (u, β), where β is the parametric (reduced) latitude:

    γ_u = -(GM/(u²+E²) + ω²a²E q'(½ sin²β - 1/6) / ((u²+E²) q₀)) / w + ω² u cos²β / w
    γ_β = ω²a² q sinβ cosβ / (√(u²+E²) w q₀) - ω² √(u²+E²) cosβ sinβ / w
    g   = √(γ_u² + γ_β²)

with E the linear eccentricity, w, q, q₀, q' the auxiliary functions of
NIMA TR8350.2 (Eqs. 4-5 to 4-13). Centrifugal terms are included; effects
of a precessing reference frame are not.

Validity:
    - Geodetic height up to 20,000 m, sub-microgal precision below it.
    - On the ellipsoid surface the result equals Somigliana's formula:
      9.7803253359 m/s² at the equator, 9.8321849378 m/s² at the poles.

Only the magnitude is returned. The strapdown integrator applies it along
+Down in the NED frame.
"""

import numpy as np

from navcore.utils.validation import as_scalar

# WGS84 gravity model constants
GRAVITY_E = 5.2185400842339e5  # Linear eccentricity sqrt(a² - b²) (m)
GRAVITY_E2 = GRAVITY_E * GRAVITY_E
GRAVITY_GM = 3986004.418e8  # Earth's gravitational constant (m³/s²)
GRAVITY_A = 6378137.0  # Semi-major axis (m)
GRAVITY_B = 6356752.3142  # Semi-minor axis (m)
GRAVITY_ECC2 = 6.69437999014e-3  # First eccentricity squared
GRAVITY_B_OVER_A = 0.996647189335
EARTH_RATE = 7.292115e-5  # Earth rotation rate (rad/s)


def gravity_wgs84(lat: float, lon: float, alt: float) -> float:
    """
    Local gravity magnitude from the WGS84 close approximation model.

    Args:
        lat: Geodetic latitude in radians.
        lon: Longitude in radians.
        alt: Altitude above the ellipsoid in meters (positive up).
             Results are reliable up to 20,000 m.

    Returns:
        Gravity magnitude in m/s².

    Example:
        >>> g_equator = gravity_wgs84(0.0, 0.0, 0.0)  # ≈ 9.7803253359
        >>> g_pole = gravity_wgs84(np.pi / 2, 0.0, 0.0)  # ≈ 9.8321849378
    """
    lat = as_scalar(lat, "lat")
    lon = as_scalar(lon, "lon")
    alt = as_scalar(alt, "alt")

    sin_phi = np.sin(lat)
    cos_phi = np.cos(lat)
    sin2_phi = sin_phi * sin_phi

    # Rectangular coordinates (prime vertical radius N)
    N = GRAVITY_A / np.sqrt(1.0 - GRAVITY_ECC2 * sin2_phi)
    x = (N + alt) * cos_phi * np.cos(lon)
    y = (N + alt) * cos_phi * np.sin(lon)
    z = (GRAVITY_B_OVER_A * GRAVITY_B_OVER_A * N + alt) * sin_phi

    # Ellipsoidal harmonic coordinates (u, β)
    D = x * x + y * y + z * z - GRAVITY_E2
    u2 = 0.5 * D * (1.0 + np.sqrt(1.0 + 4.0 * GRAVITY_E2 * z * z / (D * D)))
    u2E2 = u2 + GRAVITY_E2
    u = np.sqrt(u2)
    beta = np.arctan(z * np.sqrt(u2E2) / (u * np.sqrt(x * x + y * y)))

    sin_beta = np.sin(beta)
    cos_beta = np.cos(beta)
    sin2_beta = sin_beta * sin_beta
    cos2_beta = cos_beta * cos_beta

    w = np.sqrt((u2 + GRAVITY_E2 * sin2_beta) / u2E2)
    q = 0.5 * ((1.0 + 3.0 * u2 / GRAVITY_E2) * np.arctan(GRAVITY_E / u) - 3.0 * u / GRAVITY_E)
    q0 = 0.5 * (
        (1.0 + 3.0 * GRAVITY_B * GRAVITY_B / GRAVITY_E2) * np.arctan(GRAVITY_E / GRAVITY_B)
        - 3.0 * GRAVITY_B / GRAVITY_E
    )
    q_prime = 3.0 * ((1.0 + u2 / GRAVITY_E2) * (1.0 - (u / GRAVITY_E) * np.arctan(GRAVITY_E / u))) - 1.0

    omega2 = EARTH_RATE * EARTH_RATE
    a2 = GRAVITY_A * GRAVITY_A

    # Centrifugal contribution
    cf_u = u * cos2_beta * omega2 / w
    cf_beta = np.sqrt(u2E2) * cos_beta * sin_beta * omega2 / w

    gamma_u = (
        -(GRAVITY_GM / u2E2 + omega2 * a2 * GRAVITY_E * q_prime * (0.5 * sin2_beta - 1.0 / 6.0) / (u2E2 * q0)) / w
        + cf_u
    )
    gamma_beta = omega2 * a2 * q * sin_beta * cos_beta / (np.sqrt(u2E2) * w * q0) - cf_beta

    return float(np.sqrt(gamma_u * gamma_u + gamma_beta * gamma_beta))


def gravity_wgs84_batch(lat, lon, alt) -> np.ndarray:
    """
    Evaluate gravity_wgs84 elementwise over arrays of equal size.

    Args:
        lat: Latitudes in radians.
        lon: Longitudes in radians.
        alt: Altitudes in meters (positive up).

    Returns:
        Gravity magnitudes in m/s², shaped like `lat`.
    """
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    alt = np.asarray(alt, dtype=np.float64)
    if not (lat.size == lon.size == alt.size):
        raise ValueError(
            f"lat, lon, alt must have the same number of elements, "
            f"got {lat.size}, {lon.size}, {alt.size}"
        )

    g = np.empty(lat.size, dtype=np.float64)
    for i, (phi, lam, h) in enumerate(zip(lat.ravel(), lon.ravel(), alt.ravel())):
        g[i] = gravity_wgs84(phi, lam, h)
    return g.reshape(lat.shape)
