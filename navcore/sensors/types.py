"""
Navigation data structures.

This module defines the values passed between the strapdown integrator,
the sensor transforms and the caller's control loop:
    - GeodeticPosition: WGS84 latitude, longitude, altitude
    - NavigationState: position, attitude quaternion, body velocity

The library never stores these objects. A caller creates the initial
state, hands it to strapdown_step() together with one IMU sample, and
receives a new state; the old one is left untouched.

Frame Conventions:
    - b: Body frame (x forward, y right, z down)
    - n: Navigation frame, local NED at the current position
    - Quaternion q represents rotation from b to n: v_n = C_b^n(q) @ v_b
"""

from dataclasses import dataclass
from typing import NamedTuple
import warnings

import numpy as np


class GeodeticPosition(NamedTuple):
    """
    Geodetic position on the WGS84 ellipsoid.

    Attributes:
        lat: Latitude in radians, [-π/2, π/2].
        lon: Longitude in radians, [-π, π).
        alt: Altitude above the ellipsoid in meters, positive up.
    """

    lat: float
    lon: float
    alt: float

    def as_array(self) -> np.ndarray:
        """Return [lat, lon, alt] as a float array of shape (3,)."""
        return np.array([self.lat, self.lon, self.alt], dtype=np.float64)

    @classmethod
    def from_degrees(cls, lat_deg: float, lon_deg: float, alt: float = 0.0) -> "GeodeticPosition":
        """Build a position from latitude/longitude in degrees."""
        return cls(float(np.deg2rad(lat_deg)), float(np.deg2rad(lon_deg)), float(alt))


@dataclass(frozen=True)
class NavigationState:
    """
    Strapdown navigation state: position, orientation, body velocity.

    Attributes:
        position_lla: [lat, lon, alt] in (rad, rad, m), shape (3,).
        q: Unit quaternion [w, x, y, z], body to navigation (NED), shape (4,).
        v_body: Velocity [u, v, w] in body axes, m/s, shape (3,).

    Notes:
        - Frozen: an update produces a new NavigationState.
        - A quaternion far from unit norm is accepted with a warning; the
          integrator renormalizes it on the next step.

    Example:
        >>> state = NavigationState(
        ...     position_lla=np.array([0.9, 0.17, 120.0]),
        ...     q=np.array([1.0, 0.0, 0.0, 0.0]),
        ...     v_body=np.array([5.0, 0.0, 0.0]),
        ... )
    """

    position_lla: np.ndarray
    q: np.ndarray
    v_body: np.ndarray

    def __post_init__(self) -> None:
        """Validate shapes and warn about a non-unit quaternion."""
        position_lla = np.asarray(self.position_lla, dtype=np.float64)
        q = np.asarray(self.q, dtype=np.float64)
        v_body = np.asarray(self.v_body, dtype=np.float64)

        if position_lla.shape != (3,):
            raise ValueError(
                f"NavigationState.position_lla must have shape (3,), got {position_lla.shape}"
            )
        if q.shape != (4,):
            raise ValueError(
                f"NavigationState.q must have shape (4,), got {q.shape}"
            )
        if v_body.shape != (3,):
            raise ValueError(
                f"NavigationState.v_body must have shape (3,), got {v_body.shape}"
            )

        # Frozen dataclass: store the converted arrays through object.__setattr__
        object.__setattr__(self, "position_lla", position_lla)
        object.__setattr__(self, "q", q)
        object.__setattr__(self, "v_body", v_body)

        q_norm = np.linalg.norm(q)
        if not np.isclose(q_norm, 1.0, atol=1e-3):
            warnings.warn(
                f"NavigationState initialized with non-unit quaternion "
                f"(||q|| = {q_norm:.6f}). It will be renormalized on update.",
                UserWarning,
            )

    @property
    def position(self) -> GeodeticPosition:
        """Position as a GeodeticPosition tuple."""
        lat, lon, alt = self.position_lla
        return GeodeticPosition(float(lat), float(lon), float(alt))

    @classmethod
    def at_rest(cls, position: GeodeticPosition) -> "NavigationState":
        """Level, north-facing, zero-velocity state at a position."""
        return cls(
            position_lla=np.asarray(position, dtype=np.float64),
            q=np.array([1.0, 0.0, 0.0, 0.0]),
            v_body=np.zeros(3),
        )
