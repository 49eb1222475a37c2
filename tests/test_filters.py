import numpy as np

from meshdenoise.filters import bilateral, laplacian_filtering
from meshdenoise.mesh import SurfaceMesh


def make_grid(n=5, h=0.01, extra_points=()):
    points = [(i * h, j * h, 0.0) for i in range(n) for j in range(n)]
    faces = []
    for i in range(n - 1):
        for j in range(n - 1):
            v00, v10 = i * n + j, (i + 1) * n + j
            v01, v11 = i * n + j + 1, (i + 1) * n + j + 1
            faces.append((v00, v10, v11))
            faces.append((v00, v11, v01))
    points.extend(extra_points)
    return SurfaceMesh(points, faces)


def tetrahedron():
    points = [(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)]
    faces = [(0, 1, 2), (0, 3, 1), (0, 2, 3), (1, 3, 2)]
    return SurfaceMesh(points, faces)


def noisy_grid(seed=5):
    mesh = make_grid(n=7)
    rng = np.random.default_rng(seed)
    mesh.points[:, 2] += rng.normal(0.0, 0.002, size=mesh.n_vertices())
    return mesh


def test_laplacian_keeps_centroid_and_shrinks_tetrahedron():
    mesh = tetrahedron()
    before = np.linalg.norm(mesh.points, axis=1)
    laplacian_filtering(mesh, 1)
    after = np.linalg.norm(mesh.points, axis=1)
    assert np.allclose(mesh.points.mean(axis=0), 0.0)
    assert np.allclose(after, after[0])
    assert np.all(after < before)


def test_laplacian_zero_iterations_is_identity():
    mesh = noisy_grid()
    before = mesh.points.copy()
    laplacian_filtering(mesh, 0)
    assert np.array_equal(mesh.points, before)


def test_laplacian_keeps_flat_mesh_flat():
    mesh = make_grid()
    laplacian_filtering(mesh, 3)
    heights = mesh.points[:, 2]
    assert heights.shape == (25,)
    assert float(np.abs(heights).max()) == 0.0


def test_laplacian_leaves_isolated_vertex():
    mesh = make_grid(extra_points=[(1.0, 2.0, 3.0)])
    laplacian_filtering(mesh)
    assert np.array_equal(mesh.points[-1], [1.0, 2.0, 3.0])


def test_laplacian_reduces_noise():
    mesh = noisy_grid()
    before = float(np.std(mesh.points[:, 2]))
    laplacian_filtering(mesh, 1)
    assert float(np.std(mesh.points[:, 2])) < before


def test_bilateral_leaves_flat_mesh_unchanged():
    mesh = make_grid()
    before = mesh.points.copy()
    bilateral(mesh)
    assert np.allclose(mesh.points, before, atol=1e-15)


def test_bilateral_moves_along_normals():
    mesh = noisy_grid()
    normals = mesh.copy().vertex_normals()
    before = mesh.points.copy()
    bilateral(mesh, 1)
    displacement = mesh.points - before
    assert np.abs(displacement).max() > 0.0
    assert np.allclose(np.cross(displacement, normals), 0.0, atol=1e-12)


def test_bilateral_leaves_isolated_vertex():
    mesh = make_grid(extra_points=[(4.0, 5.0, 6.0)])
    bilateral(mesh, 2)
    assert np.array_equal(mesh.points[-1], [4.0, 5.0, 6.0])


def test_bilateral_zero_iterations_is_identity():
    mesh = noisy_grid()
    before = mesh.points.copy()
    bilateral(mesh, 0)
    assert np.array_equal(mesh.points, before)