"""Traditional smoothing filters used for comparison."""

from __future__ import annotations

import numpy as np

from .mesh import SurfaceMesh

_EPS = 1e-8


def laplacian_filtering(mesh: SurfaceMesh, iterations: int = 3) -> None:
    """Replace each vertex by the mean of its neighbours, ``iterations`` times, in place."""
    for _ in range(iterations):
        points = mesh.points
        updated = points.copy()
        for v in range(mesh.n_vertices()):
            ring = [u for u in mesh.neighbors(v) if u != v]
            if ring:
                updated[v] = points[ring].mean(axis=0)
        mesh.points[...] = updated


def bilateral(mesh: SurfaceMesh, iterations: int = 1) -> None:
    """Bilateral mesh filtering that moves each vertex along its normal, in place."""
    for _ in range(iterations):
        normals = mesh.vertex_normals()
        points = mesh.points
        updated = points.copy()

        for v in range(mesh.n_vertices()):
            ring = list(mesh.neighbors(v))
            if not ring:
                continue
            pi = points[v]
            ni = normals[v]
            rel = points[ring] - pi
            t = np.linalg.norm(rel, axis=1)
            h = rel @ ni

            sigma_c = max(0.0, float(t.max()))
            offsets = np.abs(h)
            spread = _EPS + float(((offsets - offsets.mean()) ** 2).sum())
            sigma_s = np.sqrt(spread / len(offsets))

            wc = np.exp(-0.5 * t * t / (sigma_c * sigma_c + _EPS))
            ws = np.exp(-0.5 * h * h / (sigma_s * sigma_s + _EPS))
            weights = wc * ws
            weight_sum = float(weights.sum())
            if weight_sum > 0.0:
                updated[v] = pi + ni * (float(weights @ h) / weight_sum)

        mesh.points[...] = updated