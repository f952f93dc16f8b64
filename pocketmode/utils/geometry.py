"""
Pure geometric helpers for accelerometer vectors and touch points.
No imports from the rest of the project — safe to use anywhere.
"""
from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple

import numpy as np

Vector3 = Tuple[float, float, float]


def normalise(values: Sequence[float]) -> Optional[Vector3]:
    """
    Scale a 3-component vector to unit length.
    Returns None for a malformed or zero-magnitude vector.
    """
    vec = np.asarray(values, dtype=float)
    if vec.shape != (3,) or not np.all(np.isfinite(vec)):
        return None
    magnitude = float(np.linalg.norm(vec))
    if magnitude == 0.0:
        return None
    unit = vec / magnitude
    return (float(unit[0]), float(unit[1]), float(unit[2]))


def inclination(unit: Vector3) -> int:
    """
    Angle in whole degrees (0–180) between the unit gravity vector and the
    device's up axis (component 2).
    """
    cos_val = max(-1.0, min(1.0, unit[2]))
    # half-up rounding, angles are never negative
    return int(math.floor(math.degrees(math.acos(cos_val)) + 0.5))


def dist(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Euclidean distance between two 2D points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])
