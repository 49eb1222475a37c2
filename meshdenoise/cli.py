"""Command line: add noise to a mesh, smooth it, optimise it and write the stages."""

from __future__ import annotations

import argparse
import sys

import numpy as np

from .filters import bilateral, laplacian_filtering
from .mesh import read_mesh, write_mesh
from .metrics import chamfer_distance_normed
from .noise import (
    flicker_noise,
    gaussian_noise,
    laplacian_noise,
    partial_gaussian_noise,
    speckle_noise,
)
from .smoothing import (
    DIFF_ITERATIONS,
    OPT_ITERATIONS,
    OPT_STOP_THRESHOLD,
    correction,
    diffusion,
)

DEFAULT_INPUT = "vysoke rozlisenie//retheur.obj"

_NOISES = {
    "gaussian": gaussian_noise,
    "speckle": speckle_noise,
    "flicker": flicker_noise,
    "laplacian": laplacian_noise,
    "partial": partial_gaussian_noise,
}

_SMOOTHERS = {
    "diffusion": diffusion,
    "laplacian": lambda mesh: laplacian_filtering(mesh, 3),
    "bilateral": lambda mesh: bilateral(mesh, 1),
}


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meshdenoise",
        description="Add synthetic noise to a mesh, smooth it and refine the result.",
    )
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT, help="input mesh (.obj or .off)")
    parser.add_argument("--noised", default="noised_mesh.off", help="output for the noised mesh")
    parser.add_argument("--diffused", default="diffusion_mesh.off", help="output for the smoothed mesh")
    parser.add_argument("--optimized", default="optimized_mesh.off", help="output for the optimised mesh")
    parser.add_argument("--noise", choices=[*_NOISES, "none"], default="speckle")
    parser.add_argument("--noise-level", type=float, default=None,
                        help="noise parameter; each noise model has its own default")
    parser.add_argument("--smoother", choices=list(_SMOOTHERS), default="diffusion")
    parser.add_argument("--diffusion-iterations", type=int, default=DIFF_ITERATIONS)
    parser.add_argument("--optimization-iterations", type=int, default=OPT_ITERATIONS)
    parser.add_argument("--beta", type=float, default=0.6)
    parser.add_argument("--seed", type=int, default=None)
    return parser


def main(argv=None) -> int:
    """Run the noise, smoothing and optimisation pipeline; return the exit status."""
    args = _parser().parse_args(argv)

    try:
        original = read_mesh(args.input)
    except (OSError, ValueError) as exc:
        print(f"Failed to load mesh from {args.input}: {exc}", file=sys.stderr)
        return 1

    noised = original.copy()
    if args.noise != "none":
        rng = np.random.default_rng(args.seed)
        apply_noise = _NOISES[args.noise]
        if args.noise_level is None:
            apply_noise(noised, rng=rng)
        else:
            apply_noise(noised, args.noise_level, rng=rng)

    smoothed = noised.copy()
    smooth = _SMOOTHERS[args.smoother]
    previous = smoothed.points.copy()
    for i in range(args.diffusion_iterations):
        smooth(smoothed)
        cd = chamfer_distance_normed(previous, smoothed.points)
        print(f"Diffusion: Chamfer distance between iteration {i} and {i + 1}: {cd:g}")
        previous = smoothed.points.copy()

    optimized = smoothed.copy()
    previous = optimized.points.copy()
    for i in range(args.optimization_iterations):
        correction(optimized, args.beta)
        cd = chamfer_distance_normed(previous, optimized.points)
        print(f"Optimization: Chamfer distance between iteration {i} and {i + 1}: {cd:g}")
        previous = optimized.points.copy()
        if cd < OPT_STOP_THRESHOLD:
            print(f"Optimization stage converged after iteration {i + 1}.")
            break

    try:
        write_mesh(original, args.input)
        write_mesh(noised, args.noised)
        write_mesh(smoothed, args.diffused)
        write_mesh(optimized, args.optimized)
    except (OSError, ValueError) as exc:
        print(f"Failed to write mesh files: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())