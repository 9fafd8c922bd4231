"""Base icosahedron for the geodesic sphere."""

from __future__ import annotations

import logging
from math import isfinite, sqrt

from .errors import ConfigError, GeometryError
from .mesh import Mesh
from . import vectors

logger = logging.getLogger(__name__)

PHI = (1 + sqrt(5)) / 2


class IcosahedronBuilder:
    """Build the regular icosahedron as an undirected graph or as a wound mesh."""

    @staticmethod
    def _finalize(vertices, edges, coords, return_coords):
        edges_sorted = sorted(edges)
        return (vertices, edges_sorted, coords) if return_coords else (vertices, edges_sorted)

    @staticmethod
    def undirected_icosahedron(return_coords: bool = False):
        coords = []
        for x in (-1, 1):
            for y in (-PHI, PHI):
                coords.append((float(x), y, 0.0))
                coords.append((0.0, float(x), y))
                coords.append((y, 0.0, float(x)))
        vertices = list(range(12))
        edges = set()
        target_dist2 = 4.0  # edge length 2 in the (0, ±1, ±φ) construction
        for i in range(12):
            for j in range(i + 1, 12):
                if abs(vectors.dist2(coords[i], coords[j]) - target_dist2) < 0.1:
                    edges.add((i, j))
        return IcosahedronBuilder._finalize(vertices, edges, coords, return_coords)

    @staticmethod
    def _faces_from_edges(vertices, edges):
        adjacency = {v: set() for v in vertices}
        for u, v in edges:
            adjacency[u].add(v)
            adjacency[v].add(u)
        faces = []
        for i in vertices:
            for j in sorted(adjacency[i]):
                if j <= i:
                    continue
                for k in sorted(adjacency[i] & adjacency[j]):
                    if k > j:
                        faces.append((i, j, k))
        return faces

    @staticmethod
    def _orient_outward(face, coords):
        a, b, c = face
        normal = vectors.cross(
            vectors.subtract(coords[b], coords[a]),
            vectors.subtract(coords[c], coords[a]),
        )
        if vectors.norm(normal) < 1e-12:
            raise GeometryError(f"Degenerate icosahedron face {face}")
        centroid = vectors.mean(coords[v] for v in face)
        facing = vectors.dot(normal, centroid)
        if abs(facing) < 1e-12:
            raise GeometryError(f"Cannot establish outward winding for face {face}")
        return (a, b, c) if facing > 0 else (a, c, b)

    @staticmethod
    def build(radius: float = 1.0) -> Mesh:
        if not (isfinite(radius) and radius > 0):
            raise ConfigError(f"radius must be a positive finite number, got {radius}")
        vertices, edges, coords = IcosahedronBuilder.undirected_icosahedron(return_coords=True)
        faces = IcosahedronBuilder._faces_from_edges(vertices, edges)
        if len(faces) != 20:
            raise GeometryError(f"Expected 20 icosahedron faces, found {len(faces)}")
        faces = [IcosahedronBuilder._orient_outward(face, coords) for face in faces]
        scaled = [vectors.normalize(p, radius) for p in coords]
        logger.debug("Built icosahedron: %d vertices, %d faces, radius %g", len(scaled), len(faces), radius)
        return Mesh.from_lists(scaled, faces)


def build_icosahedron(radius: float = 1.0) -> Mesh:
    """Return the 12-vertex, 20-triangle icosahedron with vertices at ``radius``."""
    return IcosahedronBuilder.build(radius)


__all__ = ["IcosahedronBuilder", "build_icosahedron", "PHI"]
