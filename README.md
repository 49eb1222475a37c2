# meshdenoise

Denoising of polygon meshes in two stages:

1. **Smoothing** – `meshdenoise.smoothing.diffusion` performs one step of
   feature-preserving diffusion. Each vertex moves toward its neighbours.
   Each neighbour gets a Perona–Malik weight (`edge_stop`), and the step size
   adapts to the length of the weighted gradient.
2. **Optimization** – `meshdenoise.smoothing.correction(mesh, beta)` blends a
   quadric-based correction (`quadrics_correction`), projected onto the
   tangent plane, with a moving-least-squares centroid correction
   (`mls_correction`), which is limited in length. The weight is `beta`.

The package also has these parts:

- noise generators in `meshdenoise.noise`: `gaussian_noise`,
  `speckle_noise`, `flicker_noise`, `laplacian_noise` and
  `partial_gaussian_noise`. Each takes the mesh, a noise parameter and an
  optional `numpy.random.Generator`.
- two classic filters in `meshdenoise.filters` for comparison:
  `laplacian_filtering(mesh, iterations)` and `bilateral(mesh, iterations)`.
- evaluation metrics in `meshdenoise.metrics`. `chamfer_distance_normed`
  gives the symmetric Chamfer distance divided by the bounding-box diameter
  of the first point set. `bounding_box_diameter` gives that diameter.

All smoothing, correction, filter and noise functions change the mesh in
place.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
meshdenoise input.obj
```

The command does the following, in order:

1. It reads the input mesh and adds noise to a copy of it. By default the
   noise is speckle noise.
2. It runs the smoothing stage. After each iteration it prints the Chamfer
   distance between consecutive iterations.
3. It runs the optimization stage. This stage stops early once that
   distance falls below `3e-6`.
4. It writes the input mesh back to its own path.
5. It writes the noised, the smoothed and the optimized meshes.

It returns 1 if the input cannot be read or an output cannot be written.

Options:

- `input` – input mesh (`.obj` or `.off`). The default is
  `vysoke rozlisenie//retheur.obj`.
- `--noised`, `--diffused`, `--optimized` – output paths. The defaults are
  `noised_mesh.off`, `diffusion_mesh.off` and `optimized_mesh.off`.
- `--noise {gaussian,speckle,flicker,laplacian,partial,none}` – noise model.
  The default is `speckle`.
- `--noise-level` – parameter of the noise model. Each model has its own
  default.
- `--seed` – seed for the random generator.
- `--smoother {diffusion,laplacian,bilateral}` – smoothing method. The
  default is `diffusion`. `laplacian` runs 3 Laplacian passes per
  iteration, and `bilateral` runs 1 bilateral pass per iteration.
- `--diffusion-iterations` – number of smoothing iterations. The default
  is 12.
- `--optimization-iterations` – maximum number of optimization iterations.
  The default is 7.
- `--beta` – weight of the quadric correction against the MLS correction.
  The default is 0.6.

Run `meshdenoise --help` for the full usage.

## Library use

```python
import numpy as np
from meshdenoise.mesh import read_mesh, write_mesh
from meshdenoise.noise import speckle_noise
from meshdenoise.smoothing import diffusion, correction
from meshdenoise.metrics import chamfer_distance_normed

mesh = read_mesh("bunny.off")
noisy = mesh.copy()
speckle_noise(noisy, 0.0002, np.random.default_rng(0))

smoothed = noisy.copy()
for _ in range(12):
    diffusion(smoothed)

optimized = smoothed.copy()
for _ in range(7):
    before = optimized.points.copy()
    correction(optimized, 0.6)
    if chamfer_distance_normed(before, optimized.points) < 3e-6:
        break

write_mesh(optimized, "bunny_denoised.off")
```

## Meshes and formats

`meshdenoise.mesh.SurfaceMesh(points, faces)` holds these parts:

- an `(n, 3)` NumPy array of vertex positions, `points`.
- polygonal faces, `faces`.
- per-vertex normals, `normals`. `vertex_normals()` recomputes them as
  angle-weighted unit normals.

`neighbors(v)` returns the vertices that share an edge with `v`. `copy()`
returns an independent copy.

`read_mesh` and `write_mesh` work with OFF and Wavefront OBJ files. The file
extension selects the format, and any other extension raises `ValueError`.
Only vertex positions and polygonal faces are read and written. Lines
starting with `#` are ignored.

## What it does not do

The package does not display meshes. The command only writes its results to
files. To look at them, open them in a separate mesh viewer.