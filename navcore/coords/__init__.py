"""Coordinate systems and transformations for the navigation core.

This module provides functions for working with the frames used by the
integrator, the sensor transforms and the track-error computation:
- LLA (Latitude, Longitude, Altitude) geodetic coordinates on WGS84
- ECEF (Earth-Centered Earth-Fixed) Cartesian coordinates
- NED (North-East-Down) local tangent plane coordinates
- Rotation representations (quaternions, matrices, Euler angles)
"""

from navcore.coords.rotations import (
    IDENTITY_QUAT,
    euler_to_quat,
    euler_to_rotation_matrix,
    quat_multiply,
    quat_normalize,
    quat_to_euler,
    quat_to_rotation_matrix,
    rotation_matrix_to_quat,
    skew,
)
from navcore.coords.transforms import (
    WGS84_A,
    WGS84_E2,
    ecef_to_lla_bowring,
    lla_to_ned,
    lla_to_ned_batch,
    llh_to_ecef,
    ned_to_lla,
    ned_to_lla_batch,
    radii_of_curvature,
)

__all__ = [
    # Constants
    "WGS84_A",
    "WGS84_E2",
    "IDENTITY_QUAT",
    # Geodetic transforms
    "llh_to_ecef",
    "ecef_to_lla_bowring",
    "lla_to_ned",
    "lla_to_ned_batch",
    "ned_to_lla",
    "ned_to_lla_batch",
    "radii_of_curvature",
    # Rotations
    "euler_to_quat",
    "euler_to_rotation_matrix",
    "quat_multiply",
    "quat_normalize",
    "quat_to_euler",
    "quat_to_rotation_matrix",
    "rotation_matrix_to_quat",
    "skew",
]
