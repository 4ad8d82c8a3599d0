#!/usr/bin/env python3
"""
Vector Math - Cosine similarity and great-circle distance primitives.

Both helpers are pure and safe to call with incomplete data: the cosine
similarity returns the neutral midpoint (50) for anything it cannot
compare, so a degenerate vector never poisons a weighted sum.
"""
import math
from typing import Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0
NEUTRAL_SIMILARITY = 50.0


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity rescaled from [-1, 1] to [0, 100].

    Args:
        a: First vector
        b: Second vector

    Returns:
        100 for identical direction, 50 for orthogonal vectors, 0 for
        opposite direction. Returns 50 when either vector is empty,
        all-zero, or the lengths differ.
    """
    if len(a) == 0 or len(a) != len(b):
        return NEUTRAL_SIMILARITY

    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)

    denom = float(np.linalg.norm(vec_a) * np.linalg.norm(vec_b))
    if denom == 0.0:
        return NEUTRAL_SIMILARITY

    raw_cosine = float(np.dot(vec_a, vec_b)) / denom
    raw_cosine = max(-1.0, min(1.0, raw_cosine))

    return (raw_cosine + 1.0) / 2.0 * 100.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    h = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
