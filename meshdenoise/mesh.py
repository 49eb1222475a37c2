"""Polygon surface mesh with vertex adjacency, normals and OFF/OBJ I/O."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np


class SurfaceMesh:
    """A polygon mesh: an (n, 3) array of vertex positions plus polygonal faces."""

    def __init__(self, points: Iterable[Sequence[float]], faces: Iterable[Sequence[int]] = ()):
        pts = np.array(points, dtype=np.float64)
        if pts.size == 0:
            pts = pts.reshape(0, 3)
        if pts.ndim != 2 or pts.shape[1] != 3:
            raise ValueError("points must have shape (n, 3)")
        self.points = pts
        n = len(pts)

        face_list = []
        for face in faces:
            indices = tuple(int(i) for i in face)
            if len(indices) < 3:
                raise ValueError(f"face {indices} has fewer than three vertices")
            if len(set(indices)) != len(indices):
                raise ValueError(f"face {indices} repeats a vertex")
            if any(i < 0 or i >= n for i in indices):
                raise ValueError(f"face {indices} refers to a missing vertex")
            face_list.append(indices)
        self.faces: tuple[tuple[int, ...], ...] = tuple(face_list)

        adjacency: list[set[int]] = [set() for _ in range(n)]
        for face in self.faces:
            for a, b in zip(face, face[1:] + face[:1]):
                adjacency[a].add(b)
                adjacency[b].add(a)
        self._adjacency = tuple(tuple(sorted(ring)) for ring in adjacency)
        self.normals = np.zeros_like(self.points)

    def n_vertices(self) -> int:
        """Number of vertices."""
        return len(self.points)

    def neighbors(self, v: int) -> tuple[int, ...]:
        """Indices of the vertices sharing an edge with vertex ``v``."""
        if not 0 <= v < len(self._adjacency):
            raise IndexError(f"vertex {v} out of range")
        return self._adjacency[v]

    def vertex_normals(self) -> np.ndarray:
        """Recompute angle-weighted unit vertex normals, store and return them."""
        normals = np.zeros_like(self.points)
        for face in self.faces:
            k = len(face)
            for i, v in enumerate(face):
                p0 = self.points[v]
                a = self.points[face[(i + 1) % k]] - p0
                b = self.points[face[(i - 1) % k]] - p0
                la = np.linalg.norm(a)
                lb = np.linalg.norm(b)
                if la == 0.0 or lb == 0.0:
                    continue
                corner = np.cross(a, b)
                lc = np.linalg.norm(corner)
                if lc == 0.0:
                    continue
                cosine = max(-1.0, min(1.0, float(np.dot(a, b) / (la * lb))))
                normals[v] += math.acos(cosine) * corner / lc
        lengths = np.linalg.norm(normals, axis=1)
        nonzero = lengths > np.finfo(np.float64).tiny
        normals[nonzero] /= lengths[nonzero, None]
        self.normals = normals
        return normals.copy()

    def copy(self) -> "SurfaceMesh":
        """An independent copy of this mesh."""
        duplicate = SurfaceMesh(self.points, self.faces)
        duplicate.normals = self.normals.copy()
        return duplicate


def _content_lines(text: str):
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            yield line


def _read_off(text: str) -> SurfaceMesh:
    lines = list(_content_lines(text))
    if not lines or not lines[0].split()[0].endswith("OFF"):
        raise ValueError("missing OFF header")
    header = lines[0].split()[1:]
    rest = lines[1:]
    if not header:
        if not rest:
            raise ValueError("missing OFF counts")
        header = rest[0].split()
        rest = rest[1:]
    try:
        n_vertices, n_faces = int(header[0]), int(header[1])
    except (IndexError, ValueError) as exc:
        raise ValueError("malformed OFF counts") from exc
    if len(rest) < n_vertices + n_faces:
        raise ValueError("OFF file is truncated")
    try:
        points = [[float(x) for x in line.split()[:3]] for line in rest[:n_vertices]]
        faces = []
        for line in rest[n_vertices:n_vertices + n_faces]:
            tokens = line.split()
            count = int(tokens[0])
            faces.append([int(t) for t in tokens[1:1 + count]])
    except (IndexError, ValueError) as exc:
        raise ValueError("malformed OFF data") from exc
    if any(len(p) != 3 for p in points):
        raise ValueError("OFF vertex with fewer than three coordinates")
    return SurfaceMesh(points, faces)


def _read_obj(text: str) -> SurfaceMesh:
    points: list[list[float]] = []
    faces: list[list[int]] = []
    try:
        for line in _content_lines(text):
            tokens = line.split()
            if tokens[0] == "v":
                coords = [float(x) for x in tokens[1:4]]
                if len(coords) != 3:
                    raise ValueError("OBJ vertex with fewer than three coordinates")
                points.append(coords)
            elif tokens[0] == "f":
                face = []
                for token in tokens[1:]:
                    index = int(token.split("/", 1)[0])
                    face.append(index - 1 if index > 0 else len(points) + index)
                faces.append(face)
    except ValueError as exc:
        raise ValueError(f"malformed OBJ data: {exc}") from exc
    return SurfaceMesh(points, faces)


def read_mesh(path) -> SurfaceMesh:
    """Read a mesh from an ``.off`` or ``.obj`` file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".off":
        return _read_off(path.read_text())
    if suffix == ".obj":
        return _read_obj(path.read_text())
    raise ValueError(f"unsupported mesh format: {path.suffix!r}")


def write_mesh(mesh: SurfaceMesh, path) -> None:
    """Write a mesh to an ``.off`` or ``.obj`` file."""
    path = Path(path)
    suffix = path.suffix.lower()

    def coords(p):
        return " ".join(repr(float(c)) for c in p)

    if suffix == ".off":
        lines = ["OFF", f"{mesh.n_vertices()} {len(mesh.faces)} 0"]
        lines.extend(coords(p) for p in mesh.points)
        lines.extend(f"{len(f)} " + " ".join(str(i) for i in f) for f in mesh.faces)
    elif suffix == ".obj":
        lines = [f"v {coords(p)}" for p in mesh.points]
        lines.extend("f " + " ".join(str(i + 1) for i in f) for f in mesh.faces)
    else:
        raise ValueError(f"unsupported mesh format: {path.suffix!r}")
    path.write_text("\n".join(lines) + "\n")