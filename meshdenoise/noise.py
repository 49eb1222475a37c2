"""Synthetic noise models applied in place to mesh vertex positions."""

from __future__ import annotations

import numpy as np

from .mesh import SurfaceMesh

_FLICKER_POLES = np.array([0.99886, 0.99332, 0.96900, 0.86650, 0.55000, -0.7616])
_FLICKER_GAINS = np.array([0.0555179, 0.0750759, 0.1538520, 0.3104856, 0.5329522, -0.0168980])


def _generator(rng):
    return rng if rng is not None else np.random.default_rng()


def gaussian_noise(mesh: SurfaceMesh, sigma: float = 0.01, rng=None) -> None:
    """Add zero-mean Gaussian noise to every coordinate."""
    gen = _generator(rng)
    mesh.points += gen.normal(0.0, sigma, size=mesh.points.shape)


def speckle_noise(mesh: SurfaceMesh, sigma: float = 0.0002, rng=None) -> None:
    """Scale every coordinate by ``1 + N(0, sigma)``."""
    gen = _generator(rng)
    mesh.points *= 1.0 + gen.normal(0.0, sigma, size=mesh.points.shape)


def flicker_noise(mesh: SurfaceMesh, amplitude: float = 0.0004, rng=None) -> None:
    """Add pink (1/f) noise from a Kellett filter run over the vertex sequence."""
    gen = _generator(rng)
    whites = gen.uniform(-1.0, 1.0, size=mesh.points.shape) * amplitude
    state = np.zeros((6, 3))
    last = np.zeros(3)
    pink = np.empty_like(whites)
    for i, white in enumerate(whites):
        state = _FLICKER_POLES[:, None] * state + _FLICKER_GAINS[:, None] * white
        pink[i] = state.sum(axis=0) + last + white * 0.5362
        last = white * 0.115926
    mesh.points += pink


def laplacian_noise(mesh: SurfaceMesh, b: float = 0.001, rng=None) -> None:
    """Add Laplace-distributed noise with scale ``b`` to every coordinate."""
    gen = _generator(rng)
    u = gen.uniform(0.0, 1.0, size=mesh.points.shape)
    samples = np.empty_like(u)
    low = u < 0.5
    with np.errstate(divide="ignore"):
        samples[low] = b * np.log(2.0 * u[low])
        samples[~low] = -b * np.log(2.0 - 2.0 * u[~low])
    mesh.points += samples


def partial_gaussian_noise(mesh: SurfaceMesh, sigma: float = 0.001, rng=None) -> None:
    """Add Gaussian noise to the vertices lying right of a line a little left of the x-centre."""
    if mesh.n_vertices() == 0:
        return
    xs = mesh.points[:, 0]
    min_x, max_x = float(xs.min()), float(xs.max())
    center_x = (min_x + max_x) / 2.0
    threshold = center_x - 0.4 * (center_x - min_x)
    selected = xs > threshold
    gen = _generator(rng)
    mesh.points[selected] += gen.normal(0.0, sigma, size=(int(selected.sum()), 3))