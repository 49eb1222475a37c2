"""Hybrid noise reduction: anisotropic diffusion followed by quadric/MLS correction."""

from __future__ import annotations

import numpy as np

from .mesh import SurfaceMesh

DIFF_ITERATIONS = 12
OPT_ITERATIONS = 7
SIGMA = 0.05
BASE_TIMESTEP = 0.4
THR = 0.00001
MAX_DISPLACEMENT = 0.9
DIFF_STOP_THRESHOLD = 2e-6
OPT_STOP_THRESHOLD = 3e-6


def edge_stop(grad_norm):
    """Perona-Malik weight ``exp(-g^2 / sigma^2)``; accepts scalars or arrays."""
    grad_norm = np.asarray(grad_norm, dtype=np.float64)
    result = np.exp(-(grad_norm * grad_norm) / (SIGMA * SIGMA))
    return float(result) if result.ndim == 0 else result


def _gaussian_weights(diffs: np.ndarray) -> np.ndarray:
    return np.exp(-np.einsum("ij,ij->i", diffs, diffs) / (2.0 * SIGMA * SIGMA))


def diffusion(mesh: SurfaceMesh) -> None:
    """One step of edge-preserving diffusion with an adaptive time step, in place."""
    mesh.vertex_normals()
    points = mesh.points
    new_points = points.copy()

    for v in range(mesh.n_vertices()):
        ring = list(mesh.neighbors(v))
        if not ring:
            continue
        diffs = points[ring] - points[v]
        distances = np.linalg.norm(diffs, axis=1)
        keep = distances > THR
        if not keep.any():
            continue
        weights = edge_stop(distances[keep])
        total = float(weights.sum())
        if total > THR:
            grad = (weights[:, None] * diffs[keep]).sum(axis=0) / total
            grad_norm = float(np.linalg.norm(grad))
            step = BASE_TIMESTEP * (grad_norm / (grad_norm + THR))
            new_points[v] = points[v] + step * grad

    mesh.points[...] = new_points
    mesh.vertex_normals()


def quadrics_correction(mesh: SurfaceMesh) -> np.ndarray:
    """Per-vertex corrections from a local quadric fit, projected onto the tangent plane."""
    normals = mesh.vertex_normals()
    points = mesh.points
    corrections = np.zeros_like(points)

    for v in range(mesh.n_vertices()):
        n = normals[v]
        q = 0.1 * np.outer(n, n)
        b = np.zeros(3)
        ring = list(mesh.neighbors(v))
        if ring:
            diffs = points[ring] - points[v]
            weighted = _gaussian_weights(diffs)[:, None] * diffs
            q += weighted.T @ diffs
            b = weighted.sum(axis=0)
        corr = q @ b
        corr -= float(np.dot(corr, n)) * n
        corrections[v] = corr
    return corrections


def mls_correction(mesh: SurfaceMesh) -> np.ndarray:
    """Per-vertex displacements towards a Gaussian-weighted centroid, length-limited."""
    points = mesh.points
    corrections = np.zeros_like(points)

    for v in range(mesh.n_vertices()):
        centroid = np.zeros(3)
        total = 0.0
        ring = list(mesh.neighbors(v))
        if ring:
            weights = _gaussian_weights(points[ring] - points[v])
            centroid = (weights[:, None] * points[ring]).sum(axis=0)
            total = float(weights.sum())
        if total > THR:
            centroid = centroid / total

        displacement = centroid - points[v]
        length = float(np.linalg.norm(displacement))
        if length > MAX_DISPLACEMENT:
            displacement = displacement * (MAX_DISPLACEMENT / length)
        corrections[v] = displacement
    return corrections


def correction(mesh: SurfaceMesh, beta: float) -> None:
    """Blend quadric and MLS corrections with weight ``beta`` and apply them in place."""
    quadric = quadrics_correction(mesh)
    mls = mls_correction(mesh)
    mesh.points += beta * quadric + (1.0 - beta) * mls
    mesh.vertex_normals()