"""Path following geometry: reference trajectories and track error."""

from navcore.guidance.track_error import (
    SEGMENT_EPS,
    closest_segment,
    trajectory_track_error,
)
from navcore.guidance.types import TrackErrorResult, TrajectoryBuffer

__all__ = [
    "SEGMENT_EPS",
    "TrajectoryBuffer",
    "TrackErrorResult",
    "closest_segment",
    "trajectory_track_error",
]
