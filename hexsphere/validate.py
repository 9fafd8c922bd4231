"""Invariant checks and summary statistics for meshes and tile graphs."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Optional

import numpy as np
from scipy.spatial import cKDTree

from .errors import GeometryError
from .mesh import Mesh
from .projection import default_epsilon
from .tiles import TileGraph

logger = logging.getLogger(__name__)

PENTAGON_COUNT = 12
ROUNDING_ULPS = 16


def validate_mesh(mesh: Mesh, radius: float, epsilon: Optional[float] = None) -> None:
    """Raise GeometryError unless ``mesh`` is a closed, welded manifold on the sphere."""
    if epsilon is None:
        epsilon = default_epsilon(radius)
    _validate_mesh_structure(mesh)
    _validate_face_integrity(mesh)
    _validate_vertex_uniqueness(mesh, epsilon)
    _validate_manifold(mesh)
    _validate_radius(mesh, radius, epsilon)
    logger.debug("Mesh validation passed: %d vertices, %d triangles", mesh.vertex_count, mesh.triangle_count)


def _validate_mesh_structure(mesh: Mesh) -> None:
    if mesh.vertex_count == 0 or mesh.triangle_count == 0:
        raise GeometryError("Mesh data is empty")


def _validate_face_integrity(mesh: Mesh) -> None:
    faces = mesh.faces()
    if faces.min() < 0 or faces.max() >= mesh.vertex_count:
        raise GeometryError("Face indices exceed vertex count")
    sorted_faces = np.sort(faces, axis=1)
    duplicate_mask = np.any(sorted_faces[:, :-1] == sorted_faces[:, 1:], axis=1)
    if np.any(duplicate_mask):
        raise GeometryError(f"Found {int(duplicate_mask.sum())} faces with duplicate vertices")
    used = np.unique(faces)
    if used.size != mesh.vertex_count:
        raise GeometryError(f"Found {mesh.vertex_count - used.size} unused vertices in mesh")


def _validate_manifold(mesh: Mesh) -> None:
    bad = {edge: count for edge, count in mesh.edge_counts().items() if count != 2}
    if bad:
        edge, count = next(iter(bad.items()))
        raise GeometryError(f"{len(bad)} non-manifold edges, e.g. {edge} used by {count} triangles")
    chi = mesh.euler_characteristic()
    if chi != 2:
        raise GeometryError(f"Euler characteristic is {chi}, expected 2 for a sphere")


def radius_tolerance(radius: float, epsilon: float) -> float:
    """On-sphere tolerance: ``epsilon``, but never finer than float rounding at ``radius``."""
    return max(epsilon, ROUNDING_ULPS * np.finfo(np.float64).eps * radius)


def _validate_radius(mesh: Mesh, radius: float, epsilon: float) -> None:
    tolerance = radius_tolerance(radius, epsilon)
    lengths = np.linalg.norm(mesh.positions(), axis=1)
    worst = float(np.max(np.abs(lengths - radius)))
    if worst > tolerance:
        raise GeometryError(f"Vertex off the sphere by {worst:g} (tolerance {tolerance:g})")


def _validate_vertex_uniqueness(mesh: Mesh, epsilon: float) -> None:
    tree = cKDTree(mesh.positions())
    pairs = tree.query_pairs(r=epsilon)
    if pairs:
        u, v = min(pairs)
        raise GeometryError(f"Found {len(pairs)} pairs of co-located vertices, e.g. {u} and {v}")


def validate_tile_graph(graph: TileGraph, frequency: Optional[int] = None) -> None:
    if frequency is not None:
        expected = 10 * frequency ** 2 + 2
        if len(graph) != expected:
            raise GeometryError(f"Tile graph has {len(graph)} tiles, expected {expected}")
    pentagons = len(graph.pentagons())
    if pentagons != PENTAGON_COUNT:
        raise GeometryError(f"Tile graph has {pentagons} pentagons, expected {PENTAGON_COUNT}")
    for tile in graph.values():
        if tile.sides not in (5, 6):
            raise GeometryError(f"Tile {tile.id} has {tile.sides} sides")
        if len(tile.neighbors) != tile.sides:
            raise GeometryError(f"Tile {tile.id} has {len(tile.neighbors)} neighbours for {tile.sides} sides")
        for other in tile.neighbors:
            if tile.id not in graph[other].neighbors:
                raise GeometryError(f"Adjacency is not symmetric between {tile.id} and {other}")
    logger.debug("Tile graph validation passed: %d tiles", len(graph))


def mesh_stats(mesh: Mesh) -> Dict[str, Any]:
    positions = mesh.positions()
    edges = np.array(mesh.edges(), dtype=np.int64).reshape(-1, 2)
    lengths = np.linalg.norm(positions[edges[:, 0]] - positions[edges[:, 1]], axis=1)
    degree = Counter(len(tris) for tris in mesh.vertex_triangles().values())
    return {
        "vertices": mesh.vertex_count,
        "edges": int(edges.shape[0]),
        "triangles": mesh.triangle_count,
        "euler_characteristic": mesh.euler_characteristic(),
        "vertex_degrees": dict(sorted(degree.items())),
        "edge_length": {
            "min": float(lengths.min()) if lengths.size else None,
            "max": float(lengths.max()) if lengths.size else None,
            "mean": float(lengths.mean()) if lengths.size else None,
        },
    }


def tile_stats(graph: TileGraph) -> Dict[str, Any]:
    sides = Counter(tile.sides for tile in graph.values())
    return {
        "tiles": len(graph),
        "pentagons": len(graph.pentagons()),
        "hexagons": len(graph.hexagons()),
        "corners": len(graph.corners),
        "sides": dict(sorted(sides.items())),
        "radius": graph.radius,
    }


__all__ = [
    "validate_mesh", "validate_tile_graph", "mesh_stats", "tile_stats",
    "radius_tolerance", "PENTAGON_COUNT", "ROUNDING_ULPS",
]
