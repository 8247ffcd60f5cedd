"""
Strapdown inertial navigation on the WGS84 ellipsoid.

This module implements one discrete step of the strapdown algorithm in a
local-level NED navigation frame, integrated with the explicit Euler
method:

    - Position: latitude/longitude/altitude rates from NED velocity scaled
      by the meridian and transverse radii of curvature
    - Velocity: specific force rotated to NED, plus local gravity, minus the
      Coriolis and transport-rate term (2·ω_ie + ω_en) × v
    - Attitude: quaternion kinematics driven by the gyro rate relative to
      the navigation frame (gyro minus earth and transport rate)

The integrator is stateless. Every call maps (state, IMU sample, dt) to a
new state and the caller threads the result into the next call, strictly
in order per vehicle.

Frame Conventions:
    - b: Body frame (IMU frame; x forward, y right, z down)
    - n: Navigation frame, NED at the current position
    - Quaternion q represents rotation from b to n: v_n = C_b^n(q) @ v_b
    - Velocity is carried in body axes [u, v, w]

Quaternion Convention:
    - Scalar-first: q = [w, x, y, z]
    - Renormalized on input and output; a norm below 1e-12 resets to identity

Accelerometer Convention:
    - accel is specific force. A level vehicle at rest measures
      [0, 0, -g] in body axes (the reaction to gravity points up = -Down).
"""

from typing import Tuple

import numpy as np

from navcore.coords.rotations import quat_normalize, quat_to_rotation_matrix
from navcore.coords.transforms import radii_of_curvature
from navcore.sensors.gravity import EARTH_RATE, gravity_wgs84
from navcore.sensors.types import NavigationState
from navcore.utils.angles import ensure_lat_lon_range
from navcore.utils.validation import as_scalar, as_vector


def omega_matrix(omega_b: np.ndarray) -> np.ndarray:
    """
    Build the Ω(ω) matrix of quaternion kinematics, dq/dt = ½ Ω(ω) q.

        Ω(ω) = [  0    -ωx   -ωy   -ωz ]
               [ ωx     0     ωz   -ωy ]
               [ ωy    -ωz    0     ωx ]
               [ ωz     ωy   -ωx    0  ]

    Args:
        omega_b: Angular rate of the body w.r.t. the navigation frame,
                 in body axes. Shape (3,), rad/s.

    Returns:
        Skew-symmetric 4x4 matrix.
    """
    wx, wy, wz = as_vector(omega_b, 3, "omega_b")

    return np.array(
        [
            [0.0, -wx, -wy, -wz],
            [wx, 0.0, wz, -wy],
            [wy, -wz, 0.0, wx],
            [wz, wy, -wx, 0.0],
        ]
    )


def earth_rate_ned(lat: float) -> np.ndarray:
    """
    Earth rotation rate ω_ie resolved in the NED frame at a latitude.

    Returns:
        [Ω cos φ, 0, -Ω sin φ] in rad/s.
    """
    return np.array([EARTH_RATE * np.cos(lat), 0.0, -EARTH_RATE * np.sin(lat)])


def transport_rate_ned(
    lat: float,
    alt: float,
    v_ned: np.ndarray,
    Rn: float,
    Re: float,
) -> np.ndarray:
    """
    Transport rate ω_en: rotation of the NED frame as it moves over the ellipsoid.

    Args:
        lat: Geodetic latitude in radians.
        alt: Altitude in meters.
        v_ned: Velocity [vN, vE, vD] in m/s.
        Rn: Meridian radius of curvature in meters.
        Re: Transverse radius of curvature in meters.

    Returns:
        [vE/(Re+h), -vN/(Rn+h), -vE·tan φ/(Re+h)] in rad/s.
    """
    v_north, v_east = v_ned[0], v_ned[1]
    return np.array(
        [
            v_east / (Re + alt),
            -v_north / (Rn + alt),
            -v_east * np.tan(lat) / (Re + alt),
        ]
    )


def strapdown_update(
    position_lla: np.ndarray,
    q: np.ndarray,
    v_body: np.ndarray,
    accel: np.ndarray,
    gyro: np.ndarray,
    dt: float,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    One explicit-Euler strapdown step.

    Steps:
        1. Renormalize q (identity if degenerate).
        2. Radii of curvature, local gravity and C_b^n at the current state.
        3. v_n = C_b^n v_b.
        4. Position:  φ' = φ + dt·vN/(Rn+h)
                      λ' = λ + dt·vE/((Re+h) cos φ)
                      h' = h - dt·vD
           then ensure_lat_lon_range() for pole/antimeridian crossings.
        5. Velocity:  v_n' = v_n + dt·(C_b^n f_b - (2ω_ie + ω_en) × v_n + [0, 0, g])
                      v_b' = (C_b^n)ᵀ v_n'
        6. Attitude:  ω_nb = ω_ib - (C_b^n)ᵀ (ω_ie + ω_en)
                      q' = ((1 - dt²|ω_nb|²/8) I + ½ dt Ω(ω_nb)) q
           (second-order truncation of the exponential map), renormalized.

    All right-hand sides use the state at the start of the step.

    Args:
        position_lla: [lat, lon, alt] (rad, rad, m).
        q: Quaternion [w, x, y, z], body to NED.
        v_body: Body-axis velocity [u, v, w] in m/s.
        accel: Specific force in body axes, m/s². Bias may be removed.
        gyro: Angular rate of the body w.r.t. inertial space, body axes, rad/s.
        dt: Time step in seconds.

    Returns:
        Tuple (position_lla', q', v_body').

    Raises:
        ValueError: On wrong vector sizes or non-positive dt.

    Example:
        >>> pos = np.array([np.deg2rad(52.0), np.deg2rad(10.0), 100.0])
        >>> q0 = np.array([1.0, 0.0, 0.0, 0.0])
        >>> g = gravity_wgs84(*pos)
        >>> pos1, q1, v1 = strapdown_update(pos, q0, np.zeros(3),
        ...                                 np.array([0.0, 0.0, -g]),
        ...                                 earth_rate_ned(pos[0]), 0.01)
    """
    position_lla = as_vector(position_lla, 3, "position_lla")
    v_body = as_vector(v_body, 3, "v_body")
    accel = as_vector(accel, 3, "accel")
    gyro = as_vector(gyro, 3, "gyro")
    dt = as_scalar(dt, "dt")
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    # Step 1: unit quaternion
    q = quat_normalize(q)

    # Step 2: ellipsoid geometry, gravity and attitude at the current state
    lat, lon, alt = position_lla
    Rn, Re = radii_of_curvature(lat)
    g = gravity_wgs84(lat, lon, alt)
    C_b_n = quat_to_rotation_matrix(q)
    C_n_b = C_b_n.T

    # Step 3: body velocity in NED
    v_ned = C_b_n @ v_body

    # Step 4: position
    lat_next = lat + dt * v_ned[0] / (Rn + alt)
    lon_next = lon + dt * v_ned[1] / ((Re + alt) * np.cos(lat))
    alt_next = alt - dt * v_ned[2]
    lat_next, lon_next = ensure_lat_lon_range(lat_next, lon_next)
    position_next = np.array([lat_next, lon_next, alt_next])

    # Step 5: velocity
    w_ie = earth_rate_ned(lat)
    w_en = transport_rate_ned(lat, alt, v_ned, Rn, Re)
    coriolis = np.cross(2.0 * w_ie + w_en, v_ned)
    gravity_ned = np.array([0.0, 0.0, g])
    v_ned_next = v_ned + dt * (C_b_n @ accel - coriolis + gravity_ned)
    v_body_next = C_n_b @ v_ned_next

    # Step 6: attitude
    w_nb = gyro - C_n_b @ (w_ie + w_en)
    scale = 1.0 - dt * dt * float(w_nb @ w_nb) / 8.0
    q_next = (scale * np.eye(4) + 0.5 * dt * omega_matrix(w_nb)) @ q
    q_next = quat_normalize(q_next)

    return position_next, q_next, v_body_next


def strapdown_step(
    state: NavigationState,
    accel: np.ndarray,
    gyro: np.ndarray,
    dt: float,
) -> NavigationState:
    """
    Apply strapdown_update() to a NavigationState.

    Args:
        state: Current navigation state (not modified).
        accel: Specific force in body axes, m/s².
        gyro: Angular rate in body axes, rad/s.
        dt: Time step in seconds.

    Returns:
        New NavigationState one step later.

    Example:
        >>> from navcore.sensors.types import GeodeticPosition
        >>> state = NavigationState.at_rest(GeodeticPosition(0.9, 0.17, 50.0))
        >>> for accel, gyro in imu_samples:  # caller-owned loop
        ...     state = strapdown_step(state, accel, gyro, dt=0.01)
    """
    position_lla, q, v_body = strapdown_update(
        state.position_lla, state.q, state.v_body, accel, gyro, dt
    )
    return NavigationState(position_lla=position_lla, q=q, v_body=v_body)
