"""Navigation and geodesy computation core.

This package contains stateless building blocks for vehicle navigation:
- utils: Angle normalization and small geometry helpers
- coords: WGS84 geodetic conversions and rotation representations
- sensors: Gravity model, strapdown integration, sensor mounting transforms
- guidance: Track error against a time-stamped trajectory
"""

__version__ = "0.1.0"
