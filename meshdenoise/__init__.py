"""Denoising of polygon meshes: noise models, diffusion smoothing, quadric/MLS correction, classic filters and Chamfer metrics."""

__version__ = "0.1.0"
__all__ = ["cli", "filters", "mesh", "metrics", "noise", "smoothing"]