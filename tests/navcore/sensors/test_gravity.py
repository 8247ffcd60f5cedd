"""
Unit tests for navcore/sensors/gravity.py (WGS84 close approximation).

Tests cover:
    - Somigliana values on the ellipsoid (equator, poles)
    - Latitude and altitude dependence
    - Longitude independence (rotational symmetry of the ellipsoid)
    - Batch evaluation

Run with: pytest tests/navcore/sensors/test_gravity.py -v
"""

import unittest

import numpy as np
import pytest

from navcore.sensors.gravity import gravity_wgs84, gravity_wgs84_batch

G_EQUATOR = 9.7803253359
G_POLE = 9.8321849378


class TestGravityWGS84(unittest.TestCase):
    """Test suite for the scalar gravity model."""

    def test_equator_surface(self) -> None:
        self.assertAlmostEqual(gravity_wgs84(0.0, 0.0, 0.0), G_EQUATOR, delta=1e-6)

    def test_poles_surface(self) -> None:
        self.assertAlmostEqual(gravity_wgs84(np.pi / 2, 0.0, 0.0), G_POLE, delta=1e-5)
        self.assertAlmostEqual(gravity_wgs84(-np.pi / 2, 0.0, 0.0), G_POLE, delta=1e-5)

    def test_pole_exceeds_equator(self) -> None:
        self.assertGreater(gravity_wgs84(np.pi / 2, 0.0, 0.0), gravity_wgs84(0.0, 0.0, 0.0))

    def test_increases_with_latitude(self) -> None:
        lats = np.deg2rad(np.arange(0.0, 90.0, 10.0))
        g = [gravity_wgs84(lat, 0.0, 0.0) for lat in lats]
        self.assertTrue(np.all(np.diff(g) > 0.0))

    def test_mid_latitude_value(self) -> None:
        """Normal gravity at 45° is about 9.8062 m/s²."""
        self.assertAlmostEqual(gravity_wgs84(np.deg2rad(45.0), 0.0, 0.0), 9.80620, delta=1e-4)

    def test_free_air_gradient(self) -> None:
        """Gravity drops by roughly 3.1e-6 m/s² per meter of height."""
        lat = np.deg2rad(45.0)
        dg = gravity_wgs84(lat, 0.0, 0.0) - gravity_wgs84(lat, 0.0, 1000.0)
        self.assertGreater(dg, 3.0e-3)
        self.assertLess(dg, 3.2e-3)

    def test_longitude_independent(self) -> None:
        lat = np.deg2rad(37.0)
        g0 = gravity_wgs84(lat, 0.0, 200.0)
        for lon in np.deg2rad([-170.0, -45.0, 60.0, 135.0]):
            self.assertAlmostEqual(gravity_wgs84(lat, lon, 200.0), g0, delta=1e-10)

    def test_scalar_arguments_required(self) -> None:
        with pytest.raises(ValueError, match="alt must be a scalar"):
            gravity_wgs84(0.0, 0.0, np.zeros(3))


class TestGravityWGS84Batch:
    """Test suite for elementwise evaluation."""

    def test_matches_scalar(self):
        lat = np.deg2rad([0.0, 30.0, -60.0])
        lon = np.deg2rad([10.0, 20.0, 30.0])
        alt = np.array([0.0, 100.0, 5000.0])
        g = gravity_wgs84_batch(lat, lon, alt)
        assert g.shape == (3,)
        for i in range(3):
            assert g[i] == gravity_wgs84(lat[i], lon[i], alt[i])

    def test_preserves_shape(self):
        lat = np.zeros((2, 2))
        g = gravity_wgs84_batch(lat, lat, lat)
        assert g.shape == (2, 2)
        np.testing.assert_allclose(g, G_EQUATOR, atol=1e-6)

    def test_size_mismatch_raises(self):
        with pytest.raises(ValueError, match="same number of elements"):
            gravity_wgs84_batch(np.zeros(3), np.zeros(2), np.zeros(3))
