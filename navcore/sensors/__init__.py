"""Inertial navigation: gravity, strapdown integration and sensor mounting.

This module provides:
- WGS84 close-approximation gravity magnitude
- One-step strapdown integration on the ellipsoid (NED navigation frame)
- Sensor-to-body transforms with rotation and lever arm
- Navigation state types
"""

from navcore.sensors.gravity import EARTH_RATE, gravity_wgs84, gravity_wgs84_batch
from navcore.sensors.mounting import (
    sensor_to_body_angular_rate_pqr,
    sensor_to_body_euler_zyx,
    sensor_to_body_position_lla,
    sensor_to_body_quaternion_wxyz,
    sensor_to_body_velocity_uvw,
)
from navcore.sensors.strapdown import (
    earth_rate_ned,
    omega_matrix,
    strapdown_step,
    strapdown_update,
    transport_rate_ned,
)
from navcore.sensors.types import GeodeticPosition, NavigationState

__all__ = [
    # Types
    "GeodeticPosition",
    "NavigationState",
    # Gravity
    "EARTH_RATE",
    "gravity_wgs84",
    "gravity_wgs84_batch",
    # Strapdown
    "omega_matrix",
    "earth_rate_ned",
    "transport_rate_ned",
    "strapdown_update",
    "strapdown_step",
    # Mounting
    "sensor_to_body_velocity_uvw",
    "sensor_to_body_angular_rate_pqr",
    "sensor_to_body_quaternion_wxyz",
    "sensor_to_body_euler_zyx",
    "sensor_to_body_position_lla",
]
