"""
Boundary checks for vector and matrix arguments.

Every public computation converts its inputs with these helpers so that a
malformed shape fails immediately with a ValueError instead of being
broadcast into a wrong result.
"""

import numpy as np


def as_vector(x, size: int, name: str) -> np.ndarray:
    """
    Convert input to a flat float vector with exactly `size` elements.

    Row and column vectors are accepted (any shape with `size` elements),
    matching how measurements usually arrive from control loops.

    Raises:
        ValueError: If the element count differs from `size`.
    """
    arr = np.asarray(x, dtype=np.float64)
    if arr.size != size:
        raise ValueError(f"{name} must have shape ({size},), got {arr.shape}")
    return arr.reshape(size)


def as_matrix3(R, name: str) -> np.ndarray:
    """
    Convert input to a float 3x3 matrix.

    Raises:
        ValueError: If the input is not 3x3.
    """
    arr = np.asarray(R, dtype=np.float64)
    if arr.shape != (3, 3):
        raise ValueError(f"{name} must have shape (3, 3), got {arr.shape}")
    return arr


def as_scalar(x, name: str) -> float:
    """Convert input to float, rejecting arrays with more than one element."""
    if np.ndim(x) != 0:
        raise ValueError(f"{name} must be a scalar, got shape {np.shape(x)}")
    return float(x)
