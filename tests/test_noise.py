import numpy as np
import pytest

from meshdenoise.mesh import SurfaceMesh
from meshdenoise.noise import (
    flicker_noise,
    gaussian_noise,
    laplacian_noise,
    partial_gaussian_noise,
    speckle_noise,
)

ALL_NOISES = [gaussian_noise, speckle_noise, flicker_noise, laplacian_noise, partial_gaussian_noise]


def cloud(n=2000):
    return SurfaceMesh(np.random.default_rng(99).uniform(1, 2, size=(n, 3)), [])


@pytest.mark.parametrize("noise", ALL_NOISES)
def test_reproducible_with_seed(noise):
    first, second = cloud(), cloud()
    noise(first, rng=np.random.default_rng(7))
    noise(second, rng=np.random.default_rng(7))
    assert np.array_equal(first.points, second.points)


@pytest.mark.parametrize("noise", ALL_NOISES)
def test_changes_positions(noise):
    mesh = cloud()
    original = mesh.points.copy()
    noise(mesh, rng=np.random.default_rng(3))
    assert not np.allclose(mesh.points, original, rtol=0, atol=1e-12)


def test_gaussian_spread_matches_sigma():
    mesh = cloud(20000)
    original = mesh.points.copy()
    gaussian_noise(mesh, 0.01, np.random.default_rng(0))
    delta = mesh.points - original
    assert abs(delta.mean()) < 1e-3
    assert delta.std() == pytest.approx(0.01, rel=0.05)


def test_speckle_keeps_zero_coordinates():
    mesh = SurfaceMesh(np.zeros((100, 3)), [])
    speckle_noise(mesh, 0.1, np.random.default_rng(1))
    assert np.array_equal(mesh.points, np.zeros((100, 3)))


def test_speckle_is_relative():
    mesh = cloud()
    original = mesh.points.copy()
    speckle_noise(mesh, 0.0002, np.random.default_rng(5))
    ratio = mesh.points / original
    assert np.all(np.abs(ratio - 1.0) < 0.0002 * 8)


def test_flicker_bounded_by_filter_gain():
    mesh = cloud()
    original = mesh.points.copy()
    flicker_noise(mesh, 0.0004, np.random.default_rng(2))
    assert np.max(np.abs(mesh.points - original)) < 0.0004 * 50


def test_laplacian_zero_scale_leaves_mesh():
    mesh = cloud()
    original = mesh.points.copy()
    laplacian_noise(mesh, 0.0, np.random.default_rng(4))
    assert np.array_equal(mesh.points, original)


def test_laplacian_spread_matches_scale():
    mesh = cloud(20000)
    original = mesh.points.copy()
    laplacian_noise(mesh, 0.001, np.random.default_rng(6))
    delta = mesh.points - original
    assert np.mean(np.abs(delta)) == pytest.approx(0.001, rel=0.05)


def test_partial_only_touches_right_side():
    xs = np.linspace(0.0, 10.0, 101)
    points = np.column_stack([xs, np.zeros_like(xs), np.zeros_like(xs)])
    mesh = SurfaceMesh(points, [])
    partial_gaussian_noise(mesh, 0.001, np.random.default_rng(8))
    threshold = 5.0 - 0.4 * 5.0
    left = xs <= threshold
    assert np.array_equal(mesh.points[left], points[left])
    assert not np.allclose(mesh.points[~left], points[~left], rtol=0, atol=1e-12)


def test_partial_on_empty_mesh():
    mesh = SurfaceMesh(np.zeros((0, 3)), [])
    partial_gaussian_noise(mesh, 0.001, np.random.default_rng(0))
    assert mesh.n_vertices() == 0