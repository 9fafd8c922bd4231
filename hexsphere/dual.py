"""Dual tessellation of a projected geodesic mesh into pentagon/hexagon tiles."""

from __future__ import annotations

import logging
from math import atan2, pi
from typing import Dict, List, Optional, Sequence

import numpy as np

from .errors import GeometryError
from .mesh import Mesh
from .projection import to_sphere
from .tiles import Tile, TileGraph
from . import vectors

logger = logging.getLogger(__name__)

ICOSAHEDRON_VERTICES = 12
TAU = 2 * pi


def triangle_corners(mesh: Mesh, radius: float) -> np.ndarray:
    """Centroid of every triangle, pushed out onto the sphere. Row ``i`` belongs to triangle ``i``."""
    centroids = mesh.positions()[mesh.faces()].mean(axis=1)
    return to_sphere(centroids, radius=radius)


def order_around(center: Sequence[float], points: Dict[int, Sequence[float]]) -> List[int]:
    """Sort point ids counter-clockwise around ``center`` as seen from outside the sphere.

    Angles are taken in the tangent basis ``(t, n x t, n)`` where ``n`` is the
    outward direction of ``center`` and ``t`` points at the first point, which
    therefore always comes first in the result.
    """
    normal = vectors.normalize(center)
    ids = list(points)
    ref = vectors.subtract(points[ids[0]], center)
    tangent = vectors.subtract(ref, vectors.scale(normal, vectors.dot(ref, normal)))
    if vectors.norm(tangent) < 1e-15:
        raise GeometryError("Boundary point coincides with the tile centre direction")
    tangent = vectors.normalize(tangent)
    bitangent = vectors.cross(normal, tangent)

    keyed = []
    for pid in ids:
        w = vectors.subtract(points[pid], center)
        if pid == ids[0]:
            angle = 0.0  # the reference point opens the boundary
        else:
            angle = atan2(vectors.dot(w, bitangent), vectors.dot(w, tangent)) % TAU
        keyed.append((angle, pid))
    keyed.sort()
    return [pid for _, pid in keyed]


def build_dual(mesh: Mesh, radius: Optional[float] = None, original_count: int = ICOSAHEDRON_VERTICES) -> TileGraph:
    """Turn every vertex of ``mesh`` into a tile bounded by its surrounding triangle centroids.

    Vertices ``0 .. original_count-1`` are the icosahedron vertices and must
    have degree 5; every other vertex must have degree 6. The returned graph
    has no neighbour links yet (see :func:`hexsphere.adjacency.link_tiles`).
    """
    if radius is None:
        radius = float(np.linalg.norm(mesh.positions(), axis=1).mean())
    corners = [tuple(p) for p in triangle_corners(mesh, radius).tolist()]
    incident = mesh.vertex_triangles()

    tiles: Dict[int, Tile] = {}
    for v in range(mesh.vertex_count):
        tris = incident.get(v, [])
        degree = len(tris)
        if degree < 5:
            raise GeometryError(f"Vertex {v} has only {degree} surrounding triangles")
        expected = 5 if v < original_count else 6
        if degree != expected:
            raise GeometryError(f"Vertex {v} has degree {degree}, expected {expected}")

        site = mesh.vertices[v]
        boundary = order_around(site, {t: corners[t] for t in tris})
        center = vectors.mean(corners[t] for t in boundary)
        if vectors.norm(center) < 1e-15:
            raise GeometryError(f"Tile {v} has a degenerate centre")
        tiles[v] = Tile(id=v, center=vectors.normalize(center), boundary=tuple(boundary))

    graph = TileGraph(tiles, tuple(corners), radius)
    logger.debug("Built dual: %d tiles (%d pentagons), %d corners", len(graph), len(graph.pentagons()), len(corners))
    return graph


__all__ = ["build_dual", "order_around", "triangle_corners"]
