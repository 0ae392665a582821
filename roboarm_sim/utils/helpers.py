"""
Small stateless helpers used across the roboarm_sim package.

Provides numerical clamping, finite-value guards, and planar distance
helpers shared by the kinematics, classifier, and physics code.
"""

from __future__ import annotations

import math
from typing import Tuple


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def finite_or(value: float, fallback: float = 0.0) -> float:
    """Return *value* if it is a finite float, otherwise *fallback*.

    Args:
        value: Scalar that may be NaN or infinite.
        fallback: Replacement used for non-finite input.

    Returns:
        A finite float.
    """
    value = float(value)
    return value if math.isfinite(value) else fallback


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Euclidean distance between two 2-D points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def point_xy(point: object) -> Tuple[float, float]:
    """Extract an ``(x, y)`` pair from a landmark-like object.

    Accepts MediaPipe ``NormalizedLandmark`` objects (anything with ``x``
    and ``y`` attributes) as well as tuples, lists, and NumPy rows.

    Args:
        point: The landmark to read.

    Returns:
        Tuple of (x, y) floats.
    """
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    return float(point[0]), float(point[1])
