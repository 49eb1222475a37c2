"""Distances between point sets used to measure convergence."""

from __future__ import annotations

import numpy as np
from scipy.spatial import cKDTree


def bounding_box_diameter(points) -> float:
    """Length of the diagonal of the axis-aligned bounding box of ``points``."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    if len(pts) == 0:
        return 0.0
    return float(np.linalg.norm(pts.max(axis=0) - pts.min(axis=0)))


def chamfer_distance_normed(points_a, points_b) -> float:
    """Symmetric Chamfer distance, divided by the bounding-box diameter of ``points_a``."""
    a = np.asarray(points_a, dtype=np.float64).reshape(-1, 3)
    b = np.asarray(points_b, dtype=np.float64).reshape(-1, 3)
    if len(a) == 0 and len(b) == 0:
        return 0.0
    if len(a) == 0 or len(b) == 0:
        raise ValueError("cannot compare an empty point set with a non-empty one")

    dist_ab, _ = cKDTree(b).query(a, k=1)
    dist_ba, _ = cKDTree(a).query(b, k=1)
    chamfer = 0.5 * (float(dist_ab.mean()) + float(dist_ba.mean()))

    norm_factor = bounding_box_diameter(a)
    return chamfer / norm_factor if norm_factor > 0.0 else chamfer