"""
Along-track and cross-track error against a time-stamped trajectory.

The trajectory is reprojected into a local NED plane centered at the
vehicle, so the vehicle sits at the origin and every distance is a plain
2D Euclidean norm. This flat-earth treatment is only meant for short
trajectories (a few kilometers).

Algorithm:
    1. Reproject the active waypoints to (north, east) around the vehicle.
    2. Find the segment closest to the origin (clamped projection).
    3. Cross-track error = signed distance to that closest point. If the
       vehicle is before the first or past the last waypoint, the boundary
       segment is extended to an infinite line instead.
    4. Along-track error = path length from the closest point to the point
       the vehicle should occupy at the query time (linear interpolation
       in time inside the bracketing segment).

Sign Conventions:
    - cross_track > 0: vehicle is right of the path direction
      (map view, north up, east right)
    - along_track > 0: target point lies ahead of the vehicle's closest
      point, i.e. the vehicle is behind schedule
"""

from typing import Tuple

import numpy as np

from navcore.coords.transforms import lla_to_ned_batch
from navcore.guidance.types import TrackErrorResult, TrajectoryBuffer
from navcore.utils.validation import as_scalar, as_vector

SEGMENT_EPS = 1e-12


def _side_sign(v: np.ndarray, d: np.ndarray) -> float:
    """Sign of the 2D cross product d × v: +1 when v is right of d."""
    return float(np.sign(d[0] * v[1] - d[1] * v[0]))


def closest_segment(points_ne: np.ndarray) -> Tuple[int, float, float]:
    """
    Find the polyline segment closest to the origin.

    Each segment (P1, P2) is projected onto with the parameter
    λ = clip(-(P1·d)/|d|², 0, 1), d = P2 - P1. Segments shorter than
    sqrt(1e-12) m are represented by their first point. On equal distances
    the earlier segment wins.

    Args:
        points_ne: Polyline vertices [north, east], shape (n, 2), n >= 2.

    Returns:
        Tuple (i, ratio, distance): first index of the closest segment,
        projection parameter on it and the distance to the origin in meters.
    """
    best_index = 0
    best_ratio = 0.0
    best_sq_dist = np.inf

    for i in range(points_ne.shape[0] - 1):
        p1 = points_ne[i]
        d = points_ne[i + 1] - p1
        dd = float(d @ d)

        lam = 0.0
        closest = p1
        if dd > SEGMENT_EPS:
            lam = min(max(-float(p1 @ d) / dd, 0.0), 1.0)
            closest = p1 + lam * d
        sq_dist = float(closest @ closest)

        if sq_dist < best_sq_dist:
            best_sq_dist = sq_dist
            best_index = i
            best_ratio = lam

    return best_index, best_ratio, float(np.sqrt(best_sq_dist))


def trajectory_track_error(
    time: float,
    position_lla: np.ndarray,
    trajectory: TrajectoryBuffer,
) -> TrackErrorResult:
    """
    Compute the track error of a vehicle with respect to a trajectory.

    Args:
        time: Query time in seconds, same time base as trajectory.t.
        position_lla: Vehicle position [lat, lon, alt] (rad, rad, m).
        trajectory: Reference trajectory. Only the first num_points
                    waypoints are used.

    Returns:
        TrackErrorResult. `valid` is False when fewer than two waypoints are
        active, the query time is outside [t[0], t[n-1]], the boundary
        segment used for extrapolation is degenerate or the target segment
        spans no time.

    Example:
        >>> traj = TrajectoryBuffer.from_waypoints(
        ...     t=[0.0, 100.0],
        ...     lat=[0.0, 0.0],
        ...     lon=[0.0, 1e-4],
        ... )
        >>> result = trajectory_track_error(50.0, np.array([0.0, 5e-5, 0.0]), traj)
        >>> result.valid, round(result.target_ratio, 3)
        (True, 0.5)
    """
    time = as_scalar(time, "time")
    position_lla = as_vector(position_lla, 3, "position_lla")

    n = trajectory.num_points
    if n < 2:
        return TrackErrorResult.invalid()
    t = trajectory.t[:n]
    if time < t[0] or time > t[n - 1]:
        return TrackErrorResult.invalid()

    # Reproject the active waypoints around the vehicle, at vehicle altitude
    lat_ref, lon_ref, alt_ref = position_lla
    lla = np.column_stack(
        (trajectory.lat[:n], trajectory.lon[:n], np.full(n, alt_ref))
    )
    points = lla_to_ned_batch(lla, lat_ref, lon_ref, alt_ref)[:, :2]

    # Closest point on the path
    i1, ratio, distance = closest_segment(points)
    i2 = i1 + 1
    p1 = points[i1]
    p2 = points[i2]
    d = p2 - p1

    cross_track = _side_sign(-p1, d) * distance
    closest = p1 + ratio * d
    along_track = -float(np.linalg.norm(closest - p1))
    idx_start = i1

    # Before the first or past the last waypoint: extend the boundary segment
    before_start = i1 == 0 and ratio < SEGMENT_EPS
    past_end = i2 == n - 1 and ratio > 1.0 - SEGMENT_EPS
    if before_start or past_end:
        dd = float(d @ d)
        if dd < SEGMENT_EPS:
            return TrackErrorResult.invalid()
        lam = -float(p1 @ d) / dd
        extrapolated = p1 + lam * d
        cross_track = _side_sign(-extrapolated, d) * float(np.linalg.norm(extrapolated))

        if before_start:
            along_track = float(np.linalg.norm(p1 - extrapolated))
            idx_start = i1
        else:
            along_track = -float(np.linalg.norm(extrapolated - p2))
            idx_start = i2

    # Target segment: first waypoint later than the query time
    later = np.nonzero(t > time)[0]
    if later.size > 0:
        idx_end = int(later[0])
    else:
        # time == t[n-1]
        idx_end = n - 1

    # Path length between the start and end waypoints
    idx_a = min(idx_start, idx_end)
    idx_b = max(idx_start, idx_end)
    direction = -1.0 if idx_start > idx_end else 1.0
    for i in range(idx_a + 1, idx_b + 1):
        along_track += direction * float(np.linalg.norm(points[i] - points[i - 1]))

    # Remaining distance from the target point to the end waypoint
    idx_prev = idx_end - 1
    segment_time = t[idx_end] - t[idx_prev]
    if segment_time < SEGMENT_EPS:
        return TrackErrorResult.invalid()
    target_ratio = float((time - t[idx_prev]) / segment_time)
    target = points[idx_prev] + target_ratio * (points[idx_end] - points[idx_prev])
    along_track -= float(np.linalg.norm(points[idx_end] - target))

    return TrackErrorResult(
        valid=True,
        along_track=along_track,
        cross_track=cross_track,
        closest_segment=(i1, i2),
        closest_ratio=float(ratio),
        target_segment=(idx_prev, idx_end),
        target_ratio=target_ratio,
    )
