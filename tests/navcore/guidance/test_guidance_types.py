"""Unit tests for navcore/guidance/types.py."""

import numpy as np
import pytest

from navcore.guidance.types import TrackErrorResult, TrajectoryBuffer


class TestTrajectoryBuffer:
    def test_from_waypoints(self):
        traj = TrajectoryBuffer.from_waypoints(t=[0.0, 1.0, 2.0], lat=[0.1, 0.2, 0.3], lon=[1.0, 1.0, 1.0])
        assert traj.num_points == 3
        assert traj.capacity == 3
        assert traj.t.dtype == np.float64

    def test_preallocated_buffer(self):
        traj = TrajectoryBuffer(t=np.zeros(100), lat=np.zeros(100), lon=np.zeros(100), num_points=7)
        assert traj.capacity == 100
        assert traj.num_points == 7

    def test_count_above_capacity_is_clipped(self):
        with pytest.warns(RuntimeWarning, match="exceeds buffer capacity"):
            traj = TrajectoryBuffer(t=np.zeros(3), lat=np.zeros(3), lon=np.zeros(3), num_points=5)
        assert traj.num_points == 3

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="num_points must be non-negative"):
            TrajectoryBuffer(t=np.zeros(3), lat=np.zeros(3), lon=np.zeros(3), num_points=-1)

    def test_mismatched_shapes_raise(self):
        with pytest.raises(ValueError, match="equal shape"):
            TrajectoryBuffer(t=np.zeros(3), lat=np.zeros(2), lon=np.zeros(3), num_points=2)

    def test_two_dimensional_time_raises(self):
        with pytest.raises(ValueError, match="must be 1-D"):
            TrajectoryBuffer(t=np.zeros((3, 1)), lat=np.zeros((3, 1)), lon=np.zeros((3, 1)), num_points=2)


class TestTrackErrorResult:
    def test_invalid_defaults(self):
        result = TrackErrorResult.invalid()
        assert not result.valid
        assert result.closest_segment == (-1, -1)
        assert result.target_segment == (-1, -1)
        np.testing.assert_array_equal(result.track_error, [0.0, 0.0])

    def test_track_error_vector(self):
        result = TrackErrorResult(valid=True, along_track=12.5, cross_track=-3.0)
        np.testing.assert_array_equal(result.track_error, [12.5, -3.0])
