"""
Reference trajectory and track-error result types.

Frame Conventions:
    - Trajectory points are geodetic (lat, lon in radians), time in seconds
    - Track errors are measured in a local NED plane centered at the
      vehicle, in meters

Index Convention:
    - Waypoint indices are 0-based
    - A segment is the index pair (i, i + 1)
"""

from dataclasses import dataclass
from typing import Tuple
import warnings

import numpy as np

INVALID_SEGMENT = (-1, -1)


@dataclass
class TrajectoryBuffer:
    """
    Fixed-capacity buffer of time-stamped waypoints.

    Control loops typically allocate the arrays once and fill them as a new
    path arrives; `num_points` tells how much of the buffer is valid.

    Attributes:
        t: Waypoint times in seconds, shape (capacity,). Strictly
           increasing over the active part.
        lat: Waypoint latitudes in radians, shape (capacity,).
        lon: Waypoint longitudes in radians, shape (capacity,).
        num_points: Number of active waypoints, 0 <= num_points <= capacity.
                    A larger value is clipped with a RuntimeWarning.

    Example:
        >>> traj = TrajectoryBuffer.from_waypoints(
        ...     t=[0.0, 10.0, 20.0],
        ...     lat=np.deg2rad([52.0, 52.001, 52.002]),
        ...     lon=np.deg2rad([10.0, 10.0, 10.001]),
        ... )
        >>> traj.num_points
        3
    """

    t: np.ndarray
    lat: np.ndarray
    lon: np.ndarray
    num_points: int

    def __post_init__(self):
        """Validate buffer shapes and the active length."""
        self.t = np.asarray(self.t, dtype=np.float64)
        self.lat = np.asarray(self.lat, dtype=np.float64)
        self.lon = np.asarray(self.lon, dtype=np.float64)

        if self.t.ndim != 1:
            raise ValueError(f"TrajectoryBuffer.t must be 1-D, got shape {self.t.shape}")
        if self.lat.shape != self.t.shape or self.lon.shape != self.t.shape:
            raise ValueError(
                f"TrajectoryBuffer arrays must have equal shape, got "
                f"t {self.t.shape}, lat {self.lat.shape}, lon {self.lon.shape}"
            )

        self.num_points = int(self.num_points)
        if self.num_points < 0:
            raise ValueError(f"num_points must be non-negative, got {self.num_points}")
        if self.num_points > self.capacity:
            warnings.warn(
                f"num_points ({self.num_points}) exceeds buffer capacity "
                f"({self.capacity}); clipping to capacity.",
                RuntimeWarning,
            )
            self.num_points = self.capacity

    @property
    def capacity(self) -> int:
        """Total number of waypoint slots."""
        return int(self.t.shape[0])

    @classmethod
    def from_waypoints(cls, t, lat, lon) -> "TrajectoryBuffer":
        """Build a buffer whose capacity equals the number of waypoints given."""
        t = np.asarray(t, dtype=np.float64)
        return cls(t=t, lat=lat, lon=lon, num_points=t.shape[0])


@dataclass(frozen=True)
class TrackErrorResult:
    """
    Along-track and cross-track error of a vehicle against a trajectory.

    Attributes:
        valid: False when the query could not be evaluated (fewer than two
               points, time outside the trajectory, degenerate segment).
               All other fields are meaningless in that case.
        along_track: Signed distance along the path from the vehicle's
                     closest point to where the vehicle should be at the
                     query time, in meters. Positive means behind schedule.
        cross_track: Lateral distance to the path in meters, positive when
                     the vehicle is to the right of the path direction.
        closest_segment: Index pair (i, i + 1) of the segment closest to the
                         vehicle.
        closest_ratio: Position of the closest point on that segment, 0 at
                       the first waypoint and 1 at the second.
        target_segment: Index pair of the segment bracketing the query time.
        target_ratio: Time interpolation ratio within the target segment.
    """

    valid: bool
    along_track: float = 0.0
    cross_track: float = 0.0
    closest_segment: Tuple[int, int] = INVALID_SEGMENT
    closest_ratio: float = 0.0
    target_segment: Tuple[int, int] = INVALID_SEGMENT
    target_ratio: float = 0.0

    @property
    def track_error(self) -> np.ndarray:
        """[along_track, cross_track] in meters."""
        return np.array([self.along_track, self.cross_track])

    @classmethod
    def invalid(cls) -> "TrackErrorResult":
        """Result for a query that cannot be evaluated."""
        return cls(valid=False)
