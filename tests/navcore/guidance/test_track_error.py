"""
Unit tests for navcore/guidance/track_error.py.

Tests cover:
    - Straight path, vehicle on the line at mid time
    - Cross-track sign (right positive, left negative)
    - Along-track sign (behind / ahead of schedule)
    - Extrapolation before the first and past the last waypoint
    - Multi-segment accumulation in both directions
    - Invalid queries (too few points, time window, degenerate geometry)
    - Active length smaller than buffer capacity
    - Closest-segment search and tie breaking

Paths are laid out on the equator where the local NED reprojection is
exact to well below a centimeter: one microradian of latitude is
Rn(0) * 1e-6 m and one microradian of longitude is a * 1e-6 m.
"""

import unittest

import numpy as np

from navcore.coords.transforms import WGS84_A, WGS84_E2
from navcore.guidance.track_error import closest_segment, trajectory_track_error
from navcore.guidance.types import TrajectoryBuffer

RN_EQUATOR = WGS84_A * (1.0 - WGS84_E2)  # meters per radian of latitude
RE_EQUATOR = WGS84_A  # meters per radian of longitude
D = 1e-4  # path length unit in radians (~637 m)


class TestStraightPath(unittest.TestCase):
    """Two-point path heading east along the equator."""

    def setUp(self) -> None:
        self.traj = TrajectoryBuffer.from_waypoints(
            t=[0.0, 100.0],
            lat=[0.0, 0.0],
            lon=[0.0, D],
        )
        self.length = RE_EQUATOR * D

    def test_on_line_at_mid_time(self) -> None:
        result = trajectory_track_error(50.0, np.array([0.0, 0.5 * D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.cross_track, 0.0, delta=1e-6)
        self.assertAlmostEqual(result.along_track, 0.0, delta=1e-6)
        self.assertAlmostEqual(result.target_ratio, 0.5, places=12)
        self.assertAlmostEqual(result.closest_ratio, 0.5, places=9)
        self.assertEqual(result.closest_segment, (0, 1))
        self.assertEqual(result.target_segment, (0, 1))

    def test_right_of_path_is_positive(self) -> None:
        """Heading east, south is on the right."""
        offset = 1e-6
        result = trajectory_track_error(50.0, np.array([-offset, 0.5 * D, 0.0]), self.traj)
        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.cross_track, RN_EQUATOR * offset, delta=1e-3)

    def test_left_of_path_is_negative(self) -> None:
        offset = 2e-6
        result = trajectory_track_error(50.0, np.array([offset, 0.5 * D, 0.0]), self.traj)
        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.cross_track, -RN_EQUATOR * offset, delta=1e-3)

    def test_behind_schedule_is_positive(self) -> None:
        result = trajectory_track_error(50.0, np.array([0.0, 0.25 * D, 0.0]), self.traj)
        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.along_track, 0.25 * self.length, delta=1e-3)

    def test_ahead_of_schedule_is_negative(self) -> None:
        result = trajectory_track_error(50.0, np.array([0.0, 0.75 * D, 0.0]), self.traj)
        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.along_track, -0.25 * self.length, delta=1e-3)

    def test_vehicle_altitude_does_not_matter(self) -> None:
        ground = trajectory_track_error(20.0, np.array([-1e-6, 0.3 * D, 0.0]), self.traj)
        high = trajectory_track_error(20.0, np.array([-1e-6, 0.3 * D, 120.0]), self.traj)
        np.testing.assert_allclose(high.track_error, ground.track_error, atol=0.05)

    def test_query_at_first_time(self) -> None:
        result = trajectory_track_error(0.0, np.array([0.0, 0.0, 0.0]), self.traj)
        self.assertTrue(result.valid)
        self.assertEqual(result.target_segment, (0, 1))
        self.assertEqual(result.target_ratio, 0.0)
        self.assertAlmostEqual(result.along_track, 0.0, delta=1e-6)

    def test_query_at_last_time(self) -> None:
        """The final timestamp brackets the last segment with ratio 1."""
        result = trajectory_track_error(100.0, np.array([0.0, D, 0.0]), self.traj)
        self.assertTrue(result.valid)
        self.assertEqual(result.target_segment, (0, 1))
        self.assertEqual(result.target_ratio, 1.0)
        self.assertAlmostEqual(result.along_track, 0.0, delta=1e-6)

    def test_track_error_vector(self) -> None:
        result = trajectory_track_error(50.0, np.array([-1e-6, 0.25 * D, 0.0]), self.traj)
        np.testing.assert_array_equal(
            result.track_error, [result.along_track, result.cross_track]
        )


class TestExtrapolation(unittest.TestCase):
    """Vehicle before the first or past the last waypoint."""

    def setUp(self) -> None:
        self.traj = TrajectoryBuffer.from_waypoints(
            t=[0.0, 100.0],
            lat=[0.0, 0.0],
            lon=[0.0, D],
        )

    def test_before_start_on_extended_line(self) -> None:
        result = trajectory_track_error(0.0, np.array([0.0, -0.1 * D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertEqual(result.closest_segment, (0, 1))
        self.assertEqual(result.closest_ratio, 0.0)
        # Target is the first waypoint, 0.1 D ahead of the vehicle
        self.assertAlmostEqual(result.along_track, 0.1 * D * RE_EQUATOR, delta=1e-3)
        self.assertAlmostEqual(result.cross_track, 0.0, delta=1e-6)

    def test_before_start_uses_perpendicular_distance(self) -> None:
        """Cross-track is measured to the extended line, not to the first waypoint."""
        offset = 1e-6
        result = trajectory_track_error(0.0, np.array([-offset, -0.1 * D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.cross_track, RN_EQUATOR * offset, delta=1e-3)
        self.assertAlmostEqual(result.along_track, 0.1 * D * RE_EQUATOR, delta=1e-3)

    def test_past_end(self) -> None:
        result = trajectory_track_error(100.0, np.array([2e-6, 1.2 * D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertEqual(result.closest_ratio, 1.0)
        # Target is the last waypoint, 0.2 D behind the vehicle
        self.assertAlmostEqual(result.along_track, -0.2 * D * RE_EQUATOR, delta=1e-3)
        self.assertAlmostEqual(result.cross_track, -2e-6 * RN_EQUATOR, delta=1e-3)

    def test_past_end_early_time(self) -> None:
        """Vehicle past the end while the target is still mid-path."""
        result = trajectory_track_error(50.0, np.array([0.0, 1.1 * D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertAlmostEqual(result.along_track, -0.6 * D * RE_EQUATOR, delta=1e-3)


class TestMultiSegmentPath(unittest.TestCase):
    """L-shaped path: east along the equator, then north."""

    def setUp(self) -> None:
        self.traj = TrajectoryBuffer.from_waypoints(
            t=[0.0, 100.0, 200.0],
            lat=[0.0, 0.0, D],
            lon=[0.0, D, D],
        )
        self.leg1 = RE_EQUATOR * D
        self.leg2 = RN_EQUATOR * D

    def test_target_on_second_leg(self) -> None:
        result = trajectory_track_error(150.0, np.array([0.0, 0.5 * D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertEqual(result.closest_segment, (0, 1))
        self.assertEqual(result.target_segment, (1, 2))
        self.assertAlmostEqual(result.target_ratio, 0.5, places=12)
        self.assertAlmostEqual(result.along_track, 0.5 * self.leg1 + 0.5 * self.leg2, delta=1e-2)

    def test_vehicle_ahead_on_second_leg(self) -> None:
        result = trajectory_track_error(50.0, np.array([0.75 * D, D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertEqual(result.closest_segment, (1, 2))
        self.assertAlmostEqual(result.closest_ratio, 0.75, places=6)
        self.assertEqual(result.target_segment, (0, 1))
        self.assertAlmostEqual(
            result.along_track, -(0.75 * self.leg2 + 0.5 * self.leg1), delta=1e-2
        )

    def test_vehicle_past_end_target_on_first_leg(self) -> None:
        """Accumulation runs backwards from the last waypoint."""
        result = trajectory_track_error(50.0, np.array([1.2 * D, D, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertEqual(result.closest_segment, (1, 2))
        self.assertEqual(result.closest_ratio, 1.0)
        self.assertAlmostEqual(
            result.along_track, -(0.2 * self.leg2 + self.leg2 + 0.5 * self.leg1), delta=1e-2
        )

    def test_cross_track_on_second_leg(self) -> None:
        """Heading north, east is on the right."""
        result = trajectory_track_error(150.0, np.array([0.5 * D, D + 1e-6, 0.0]), self.traj)

        self.assertTrue(result.valid)
        self.assertEqual(result.closest_segment, (1, 2))
        self.assertAlmostEqual(result.cross_track, RE_EQUATOR * 1e-6, delta=1e-3)
        self.assertAlmostEqual(result.along_track, 0.0, delta=1e-2)


class TestInvalidQueries(unittest.TestCase):
    """Queries that cannot be evaluated return valid=False."""

    def setUp(self) -> None:
        self.position = np.array([0.0, 0.5 * D, 0.0])

    def _assert_invalid(self, result) -> None:
        self.assertFalse(result.valid)
        self.assertEqual(result.closest_segment, (-1, -1))
        self.assertEqual(result.target_segment, (-1, -1))
        self.assertEqual(result.along_track, 0.0)
        self.assertEqual(result.cross_track, 0.0)

    def test_single_point(self) -> None:
        traj = TrajectoryBuffer.from_waypoints(t=[0.0], lat=[0.0], lon=[0.0])
        self._assert_invalid(trajectory_track_error(0.0, self.position, traj))

    def test_empty_buffer(self) -> None:
        traj = TrajectoryBuffer(t=np.zeros(4), lat=np.zeros(4), lon=np.zeros(4), num_points=0)
        self._assert_invalid(trajectory_track_error(0.0, self.position, traj))

    def test_active_length_one(self) -> None:
        traj = TrajectoryBuffer(t=[0.0, 10.0], lat=[0.0, 0.0], lon=[0.0, D], num_points=1)
        self._assert_invalid(trajectory_track_error(5.0, self.position, traj))

    def test_time_before_window(self) -> None:
        traj = TrajectoryBuffer.from_waypoints(t=[10.0, 20.0], lat=[0.0, 0.0], lon=[0.0, D])
        self._assert_invalid(trajectory_track_error(9.999, self.position, traj))

    def test_time_after_window(self) -> None:
        traj = TrajectoryBuffer.from_waypoints(t=[10.0, 20.0], lat=[0.0, 0.0], lon=[0.0, D])
        self._assert_invalid(trajectory_track_error(20.001, self.position, traj))

    def test_time_after_active_part(self) -> None:
        """Only the active part of the buffer defines the time window."""
        traj = TrajectoryBuffer(
            t=[0.0, 10.0, 20.0], lat=[0.0, 0.0, 0.0], lon=[0.0, D, 2 * D], num_points=2
        )
        self._assert_invalid(trajectory_track_error(15.0, self.position, traj))

    def test_degenerate_boundary_segment(self) -> None:
        """Extrapolating along a zero-length first segment is impossible."""
        traj = TrajectoryBuffer.from_waypoints(t=[0.0, 10.0], lat=[0.0, 0.0], lon=[0.0, 0.0])
        self._assert_invalid(trajectory_track_error(5.0, self.position, traj))

    def test_zero_duration_target_segment(self) -> None:
        traj = TrajectoryBuffer.from_waypoints(t=[0.0, 1e-13], lat=[0.0, 0.0], lon=[0.0, D])
        self._assert_invalid(trajectory_track_error(0.0, self.position, traj))


class TestActiveLength(unittest.TestCase):
    def test_unused_slots_ignored(self) -> None:
        full = TrajectoryBuffer.from_waypoints(t=[0.0, 100.0], lat=[0.0, 0.0], lon=[0.0, D])
        padded = TrajectoryBuffer(
            t=[0.0, 100.0, 5.0, -3.0],
            lat=[0.0, 0.0, 1.0, -1.0],
            lon=[0.0, D, 2.0, 3.0],
            num_points=2,
        )
        position = np.array([-1e-6, 0.3 * D, 0.0])
        a = trajectory_track_error(40.0, position, full)
        b = trajectory_track_error(40.0, position, padded)

        self.assertTrue(b.valid)
        self.assertEqual(a, b)


class TestClosestSegment(unittest.TestCase):
    def test_projection_inside_segment(self) -> None:
        points = np.array([[-1.0, 1.0], [1.0, 1.0]])
        self.assertEqual(closest_segment(points), (0, 0.5, 1.0))

    def test_tie_first_found_wins(self) -> None:
        points = np.array([[-1.0, 1.0], [1.0, 1.0], [1.0, -1.0]])
        index, ratio, distance = closest_segment(points)
        self.assertEqual(index, 0)
        self.assertEqual(ratio, 0.5)
        self.assertEqual(distance, 1.0)

    def test_later_segment_closer(self) -> None:
        points = np.array([[10.0, 10.0], [10.0, 5.0], [-2.0, 5.0], [-2.0, -5.0]])
        index, ratio, distance = closest_segment(points)
        self.assertEqual(index, 2)
        self.assertAlmostEqual(ratio, 0.5, places=12)
        self.assertAlmostEqual(distance, 2.0, places=12)

    def test_zero_length_segment_uses_first_point(self) -> None:
        points = np.array([[3.0, 4.0], [3.0, 4.0], [10.0, 10.0]])
        self.assertEqual(closest_segment(points), (0, 0.0, 5.0))

    def test_clamped_to_end(self) -> None:
        points = np.array([[-5.0, -3.0], [-4.0, -3.0]])
        index, ratio, distance = closest_segment(points)
        self.assertEqual((index, ratio), (0, 1.0))
        self.assertAlmostEqual(distance, 5.0, places=12)
