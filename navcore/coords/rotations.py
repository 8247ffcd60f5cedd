"""Rotation representations and conversions.

This module converts between the attitude representations used at the
boundaries of the navigation core:
- Rotation matrices (3x3 orthonormal, SO(3))
- Unit quaternions q = [qw, qx, qy, qz] (Hamilton product, scalar first)
- Euler angles (roll-pitch-yaw, ZYX/3-2-1 sequence)

Conventions:
- A quaternion q and the matrix R = quat_to_rotation_matrix(q) both map
  body-frame vectors into the navigation frame: v_nav = R @ v_body.
- Composition follows matrix order: quat_to_rotation_matrix(quat_multiply(p, q))
  equals quat_to_rotation_matrix(p) @ quat_to_rotation_matrix(q).
- Euler angles are returned as [roll, pitch, yaw] in radians.
"""

import numpy as np
from numpy.typing import NDArray

from navcore.utils.validation import as_matrix3, as_vector

# Quaternions with a norm below this are treated as degenerate
QUAT_NORM_EPS = 1e-12

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])


def skew(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Skew-symmetric cross-product matrix [v×], so that skew(v) @ w == v × w.

    Args:
        v: 3D vector, shape (3,).

    Returns:
        3x3 skew-symmetric matrix.
    """
    vx, vy, vz = as_vector(v, 3, "v")
    return np.array(
        [
            [0.0, -vz, vy],
            [vz, 0.0, -vx],
            [-vy, vx, 0.0],
        ],
        dtype=np.float64,
    )


def quat_normalize(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Normalize a quaternion to unit length.

    A quaternion whose norm is below QUAT_NORM_EPS carries no usable
    attitude information and is replaced by the identity [1, 0, 0, 0].
    This is the only corrective branch in attitude handling.

    Args:
        q: Quaternion [qw, qx, qy, qz] (any norm).

    Returns:
        Unit quaternion, shape (4,).
    """
    q = as_vector(q, 4, "q")
    n = np.linalg.norm(q)
    if n < QUAT_NORM_EPS:
        return IDENTITY_QUAT.copy()
    return q / n


def quat_multiply(p: NDArray[np.float64], q: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Hamilton product p ⊗ q of two scalar-first quaternions.

    Args:
        p: Left quaternion [pw, px, py, pz].
        q: Right quaternion [qw, qx, qy, qz].

    Returns:
        Product quaternion, shape (4,). Not renormalized.

    Example:
        >>> qz90 = euler_to_quat(0.0, 0.0, np.pi / 2)
        >>> q = quat_multiply(qz90, qz90)  # 180° yaw, ≈ [0, 0, 0, 1]
    """
    pw, px, py, pz = as_vector(p, 4, "p")
    qw, qx, qy, qz = as_vector(q, 4, "q")
    return np.array(
        [
            pw * qw - px * qx - py * qy - pz * qz,
            pw * qx + px * qw + py * qz - pz * qy,
            pw * qy - px * qz + py * qw + pz * qx,
            pw * qz + px * qy - py * qx + pz * qw,
        ],
        dtype=np.float64,
    )


def euler_to_rotation_matrix(
    roll: float,
    pitch: float,
    yaw: float,
) -> NDArray[np.float64]:
    """Rotation matrix R = Rz(yaw) @ Ry(pitch) @ Rx(roll) for ZYX Euler angles."""
    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    return np.array(
        [
            [cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr],
            [sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr],
            [-sp, cp * sr, cp * cr],
        ],
        dtype=np.float64,
    )


def euler_to_quat(
    roll: float,
    pitch: float,
    yaw: float,
) -> NDArray[np.float64]:
    """
    Convert ZYX Euler angles to a unit quaternion.

    Args:
        roll: Rotation about x in radians.
        pitch: Rotation about y in radians.
        yaw: Rotation about z in radians.

    Returns:
        Unit quaternion [qw, qx, qy, qz].
    """
    cr, sr = np.cos(0.5 * roll), np.sin(0.5 * roll)
    cp, sp = np.cos(0.5 * pitch), np.sin(0.5 * pitch)
    cy, sy = np.cos(0.5 * yaw), np.sin(0.5 * yaw)

    return np.array(
        [
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ],
        dtype=np.float64,
    )


def quat_to_euler(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert a quaternion to ZYX Euler angles.

    The quaternion is normalized first. At gimbal lock (pitch = ±90°) the
    pitch sine is clipped to [-1, 1] so arcsin stays defined.

    Args:
        q: Quaternion [qw, qx, qy, qz].

    Returns:
        Euler angles [roll, pitch, yaw] in radians.

    Raises:
        ValueError: If q does not have 4 elements.
    """
    qw, qx, qy, qz = quat_normalize(q)

    roll = np.arctan2(2.0 * (qw * qx + qy * qz), 1.0 - 2.0 * (qx * qx + qy * qy))
    sin_pitch = np.clip(2.0 * (qw * qy - qz * qx), -1.0, 1.0)
    pitch = np.arcsin(sin_pitch)
    yaw = np.arctan2(2.0 * (qw * qz + qx * qy), 1.0 - 2.0 * (qy * qy + qz * qz))

    return np.array([roll, pitch, yaw], dtype=np.float64)


def quat_to_rotation_matrix(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert a unit quaternion to the rotation matrix R with v_nav = R @ v_body.

    The quaternion is used as given; callers normalize beforehand.

    Raises:
        ValueError: If q does not have 4 elements.
    """
    qw, qx, qy, qz = as_vector(q, 4, "q")

    return np.array(
        [
            [
                1.0 - 2.0 * (qy * qy + qz * qz),
                2.0 * (qx * qy - qw * qz),
                2.0 * (qx * qz + qw * qy),
            ],
            [
                2.0 * (qx * qy + qw * qz),
                1.0 - 2.0 * (qx * qx + qz * qz),
                2.0 * (qy * qz - qw * qx),
            ],
            [
                2.0 * (qx * qz - qw * qy),
                2.0 * (qy * qz + qw * qx),
                1.0 - 2.0 * (qx * qx + qy * qy),
            ],
        ],
        dtype=np.float64,
    )


def rotation_matrix_to_quat(R: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert a rotation matrix to a unit quaternion (Shepperd's method).

    The branch is chosen by the largest of trace and diagonal entries so the
    square root argument stays well away from zero. The returned quaternion
    has a non-negative scalar part when the trace branch is used; the sign
    is otherwise arbitrary (q and -q encode the same rotation).

    Raises:
        ValueError: If R is not 3x3.
    """
    R = as_matrix3(R, "R")
    trace = np.trace(R)

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        q = np.array(
            [
                0.25 / s,
                (R[2, 1] - R[1, 2]) * s,
                (R[0, 2] - R[2, 0]) * s,
                (R[1, 0] - R[0, 1]) * s,
            ]
        )
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        q = np.array(
            [
                (R[2, 1] - R[1, 2]) / s,
                0.25 * s,
                (R[0, 1] + R[1, 0]) / s,
                (R[0, 2] + R[2, 0]) / s,
            ]
        )
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        q = np.array(
            [
                (R[0, 2] - R[2, 0]) / s,
                (R[0, 1] + R[1, 0]) / s,
                0.25 * s,
                (R[1, 2] + R[2, 1]) / s,
            ]
        )
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        q = np.array(
            [
                (R[1, 0] - R[0, 1]) / s,
                (R[0, 2] + R[2, 0]) / s,
                (R[1, 2] + R[2, 1]) / s,
                0.25 * s,
            ]
        )

    return quat_normalize(q)
