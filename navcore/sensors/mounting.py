"""
Sensor-to-body transforms for rigidly mounted sensors.

A sensor is mounted on the vehicle with a fixed rotation and a fixed lever
arm. This module maps its measurements to the body frame origin:
    - Velocity with lever arm compensation:  v_b = R_b2sᵀ v_s - ω × r_b2s
    - Angular rate:                          ω_b = R_b2sᵀ ω_s
    - Orientation as quaternion or ZYX Euler angles
    - Geodetic position with lever arm:      p_b = NED2LLA(-R_b2n r_b2s, p_s)

Frame Conventions:
    - b: Body frame
    - s: Sensor frame
    - n: Navigation frame (NED)
    - R_b2s: rotation from body to sensor frame, v_s = R_b2s @ v_b
    - r_b2s: sensor position relative to the body origin, body axes (m)

All transforms are pure functions of their arguments.
"""

import numpy as np

from navcore.coords.rotations import (
    euler_to_quat,
    quat_multiply,
    quat_normalize,
    quat_to_euler,
    rotation_matrix_to_quat,
    skew,
)
from navcore.coords.transforms import ned_to_lla
from navcore.utils.angles import symmetrical_angle
from navcore.utils.validation import as_matrix3, as_scalar, as_vector


def sensor_to_body_velocity_uvw(
    uvw_sensor: np.ndarray,
    R_b2s: np.ndarray,
    r_b2s: np.ndarray,
    pqr: np.ndarray,
) -> np.ndarray:
    """
    Transform a velocity measurement from the sensor frame to the body origin.

        v_b = R_b2sᵀ v_s - [ω×] r_b2s

    The rotation brings the measurement into body axes; the lever arm term
    removes the velocity the sensor picks up from rotating about the body
    origin.

    Args:
        uvw_sensor: Velocity measured by the sensor, sensor axes, m/s. Shape (3,).
        R_b2s: Rotation from body to sensor frame, shape (3, 3).
        r_b2s: Sensor position w.r.t. body origin, body axes, m. Shape (3,).
        pqr: Angular rate of the body w.r.t. the navigation frame, body
             axes, rad/s. Shape (3,).

    Returns:
        Velocity of the body origin in body axes [u, v, w], m/s.

    Example:
        >>> # Sensor 2 m ahead of the origin, vehicle yawing at 0.5 rad/s
        >>> v_b = sensor_to_body_velocity_uvw(np.array([5.0, 1.0, 0.0]), np.eye(3),
        ...                                   np.array([2.0, 0.0, 0.0]),
        ...                                   np.array([0.0, 0.0, 0.5]))
        >>> # v_b ≈ [5, 0, 0]
    """
    uvw_sensor = as_vector(uvw_sensor, 3, "uvw_sensor")
    R_b2s = as_matrix3(R_b2s, "R_b2s")
    r_b2s = as_vector(r_b2s, 3, "r_b2s")
    pqr = as_vector(pqr, 3, "pqr")

    return R_b2s.T @ uvw_sensor - skew(pqr) @ r_b2s


def sensor_to_body_angular_rate_pqr(
    pqr_sensor: np.ndarray,
    R_b2s: np.ndarray,
) -> np.ndarray:
    """
    Transform an angular rate measurement from sensor axes to body axes.

    Args:
        pqr_sensor: Angular rate measured by the sensor, sensor axes, rad/s.
        R_b2s: Rotation from body to sensor frame, shape (3, 3).

    Returns:
        Angular rate [p, q, r] in body axes, rad/s.
    """
    pqr_sensor = as_vector(pqr_sensor, 3, "pqr_sensor")
    R_b2s = as_matrix3(R_b2s, "R_b2s")
    return R_b2s.T @ pqr_sensor


def sensor_to_body_quaternion_wxyz(
    q_sensor: np.ndarray,
    R_b2s: np.ndarray,
) -> np.ndarray:
    """
    Transform an orientation measurement (quaternion) to the body frame.

    The sensor reports q_s2n (sensor to navigation). The body orientation
    follows from q_b2n = q_s2n ⊗ q(R_b2s). A degenerate input quaternion is
    replaced by the identity before composing.

    Args:
        q_sensor: Sensor orientation [w, x, y, z] w.r.t. the navigation frame.
        R_b2s: Rotation from body to sensor frame, shape (3, 3).

    Returns:
        Body orientation [w, x, y, z] w.r.t. the navigation frame.
    """
    q_s2n = quat_normalize(q_sensor)
    R_b2s = as_matrix3(R_b2s, "R_b2s")
    return quat_multiply(q_s2n, rotation_matrix_to_quat(R_b2s))


def sensor_to_body_euler_zyx(
    roll: float,
    pitch: float,
    yaw: float,
    R_b2s: np.ndarray,
) -> np.ndarray:
    """
    Transform an orientation measurement (ZYX Euler angles) to the body frame.

    Goes through the quaternion transform; each output angle is wrapped to
    [-π, π).

    Args:
        roll: Sensor roll w.r.t. the navigation frame, radians.
        pitch: Sensor pitch w.r.t. the navigation frame, radians.
        yaw: Sensor yaw w.r.t. the navigation frame, radians.
        R_b2s: Rotation from body to sensor frame, shape (3, 3).

    Returns:
        Body Euler angles [roll, pitch, yaw] in radians.
    """
    roll = as_scalar(roll, "roll")
    pitch = as_scalar(pitch, "pitch")
    yaw = as_scalar(yaw, "yaw")

    q_body = sensor_to_body_quaternion_wxyz(euler_to_quat(roll, pitch, yaw), R_b2s)
    return symmetrical_angle(quat_to_euler(q_body))


def sensor_to_body_position_lla(
    lat: float,
    lon: float,
    alt: float,
    R_b2n: np.ndarray,
    r_b2s: np.ndarray,
) -> np.ndarray:
    """
    Transform a geodetic position measurement to the body origin.

    The lever arm is rotated into NED and the body origin is found at the
    negative lever arm from the sensor position.

    Args:
        lat: Sensor latitude in radians.
        lon: Sensor longitude in radians.
        alt: Sensor altitude in meters (positive up).
        R_b2n: Rotation from body to navigation frame, shape (3, 3).
        r_b2s: Sensor position w.r.t. body origin, body axes, m. Shape (3,).

    Returns:
        Body origin position [lat, lon, alt] (rad, rad, m).
    """
    R_b2n = as_matrix3(R_b2n, "R_b2n")
    r_b2s = as_vector(r_b2s, 3, "r_b2s")

    north, east, down = -R_b2n @ r_b2s
    return ned_to_lla(north, east, down, lat, lon, alt)
