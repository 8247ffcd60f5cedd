"""Unit tests for scalar and planar geometry helpers."""

import numpy as np
import pytest

from navcore.utils.geometry import clamp, line_inequality_constraint_2d, smoothstep


class TestClamp:
    def test_inside_range(self):
        assert clamp(0.3, 0.0, 1.0) == 0.3

    def test_outside_range(self):
        assert clamp(-2.0, 0.0, 1.0) == 0.0
        assert clamp(2.0, 0.0, 1.0) == 1.0

    def test_reversed_bounds(self):
        assert clamp(5.0, 10.0, 0.0) == 5.0
        assert clamp(15.0, 10.0, 0.0) == 10.0
        assert clamp(-1.0, 10.0, 0.0) == 0.0


class TestSmoothstep:
    def test_edges_and_midpoint(self):
        assert smoothstep(0.0, 1.0, 0.0) == 0.0
        assert smoothstep(0.0, 1.0, 1.0) == 1.0
        assert smoothstep(0.0, 1.0, 0.5) == pytest.approx(0.5)

    def test_saturates_outside_edges(self):
        assert smoothstep(2.0, 4.0, -10.0) == 0.0
        assert smoothstep(2.0, 4.0, 10.0) == 1.0

    def test_hermite_value(self):
        # t = 0.25 -> 3t² - 2t³
        assert smoothstep(0.0, 4.0, 1.0) == pytest.approx(0.15625)

    def test_reversed_edges(self):
        # t = (0.25 - 1) / (0 - 1) = 0.75
        assert smoothstep(1.0, 0.0, 0.25) == pytest.approx(0.84375)

    def test_monotonic(self):
        y = [smoothstep(-1.0, 3.0, x) for x in np.linspace(-2.0, 4.0, 61)]
        assert np.all(np.diff(y) >= 0.0)

    def test_degenerate_edges_step(self):
        assert smoothstep(1.0, 1.0, 0.999) == 0.0
        assert smoothstep(1.0, 1.0, 1.0) == 1.0
        assert smoothstep(1.0, 1.0, 3.0) == 1.0

    def test_non_scalar_raises(self):
        with pytest.raises(ValueError, match="x must be a scalar"):
            smoothstep(0.0, 1.0, np.array([0.1, 0.2]))


class TestLineInequalityConstraint2D:
    def test_northbound_line_keeps_east_side(self):
        A, b = line_inequality_constraint_2d(np.array([0.0, 0.0]), np.array([10.0, 0.0]))
        np.testing.assert_allclose(A, [0.0, -1.0])
        assert b == pytest.approx(0.0)
        assert A @ np.array([5.0, 2.0]) <= b  # east
        assert A @ np.array([5.0, -2.0]) > b  # west

    def test_eastbound_line_keeps_south_side(self):
        """The allowed side lies opposite to the normal A."""
        A, b = line_inequality_constraint_2d(np.array([0.0, 0.0]), np.array([0.0, 10.0]))
        np.testing.assert_allclose(A, [1.0, 0.0])
        south = np.array([-2.0, 5.0])
        assert A @ south <= b
        assert A @ (south + 4.0 * A) > b

    def test_unit_normal_and_points_on_line(self):
        p1 = np.array([1.0, 2.0])
        p2 = np.array([4.0, -2.0])
        A, b = line_inequality_constraint_2d(p1, p2)
        assert np.linalg.norm(A) == pytest.approx(1.0)
        assert A @ p1 == pytest.approx(b)
        assert A @ p2 == pytest.approx(b)
        assert A @ (0.5 * (p1 + p2)) == pytest.approx(b)

    def test_coincident_points_infeasible(self):
        p = np.array([3.0, 3.0])
        A, b = line_inequality_constraint_2d(p, p)
        np.testing.assert_array_equal(A, [0.0, 0.0])
        assert b == -1.0
        # 0 <= -1 never holds
        assert not (A @ np.array([0.0, 0.0]) <= b)

    def test_shape_validation(self):
        with pytest.raises(ValueError, match=r"point1 must have shape \(2,\)"):
            line_inequality_constraint_2d(np.zeros(3), np.zeros(2))
