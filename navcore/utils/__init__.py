"""
Utility functions for navigation algorithms.

This module provides common utility functions used across the codebase:
angle wrapping, latitude/longitude range handling, and small scalar and
planar geometry helpers.
"""

from .angles import (
    symmetrical_angle,
    positive_angle,
    average_angle,
    angle_diff,
    ensure_lat_lon_range,
)
from .geometry import clamp, smoothstep, line_inequality_constraint_2d

__all__ = [
    'symmetrical_angle',
    'positive_angle',
    'average_angle',
    'angle_diff',
    'ensure_lat_lon_range',
    'clamp',
    'smoothstep',
    'line_inequality_constraint_2d',
]
