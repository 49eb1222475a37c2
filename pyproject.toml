[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshdenoise"
version = "0.1.0"
description = "Denoising of polygon meshes: feature-preserving diffusion followed by quadric and MLS correction"
requires-python = ">=3.10"
keywords = ["mesh", "denoising", "smoothing", "geometry", "chamfer distance", "bilateral filter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
meshdenoise = "meshdenoise.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["meshdenoise"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
