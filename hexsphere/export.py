"""Render buffers and per-tile metadata for downstream collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .errors import ConfigError
from .mesh import Mesh
from .projection import to_lat_lon
from .tiles import TileGraph
from .vectors import Point
from . import vectors

logger = logging.getLogger(__name__)

APEX_MODES = ("sphere", "planar")


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class RenderBuffers:
    """Flat vertex/index buffers, ready to upload to a GPU pipeline."""

    positions: np.ndarray
    indices: np.ndarray
    normals: np.ndarray
    triangle_tiles: Optional[np.ndarray] = None

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "positions": self.positions.tolist(),
            "indices": self.indices.tolist(),
            "normals": self.normals.tolist(),
        }
        if self.triangle_tiles is not None:
            data["triangle_tiles"] = self.triangle_tiles.tolist()
        return data


@dataclass(frozen=True)
class TileRecord:
    id: int
    center: Point
    is_pentagon: bool
    boundary: Tuple[Point, ...]
    neighbors: Tuple[int, ...]
    lat: float
    lon: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "center": list(self.center),
            "is_pentagon": self.is_pentagon,
            "boundary": [list(p) for p in self.boundary],
            "neighbors": list(self.neighbors),
            "lat": self.lat,
            "lon": self.lon,
        }


class MeshSink(Protocol):
    """Narrow adapter a rendering collaborator implements to receive buffers."""

    def submit_mesh(self, buffers: RenderBuffers) -> Any:
        ...


def triangle_area(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    return 0.5 * vectors.norm(vectors.cross(vectors.subtract(b, a), vectors.subtract(c, a)))


def polygon_area(points: Sequence[Sequence[float]]) -> float:
    """Area of a closed (near-)planar polygon from its vector area."""
    total = (0.0, 0.0, 0.0)
    k = len(points)
    for i in range(k):
        total = vectors.add(total, vectors.cross(points[i], points[(i + 1) % k]))
    return 0.5 * vectors.norm(total)


def _normals(positions: np.ndarray) -> np.ndarray:
    lengths = np.linalg.norm(positions, axis=1, keepdims=True)
    return positions / lengths


def export_tile_buffers(graph: TileGraph, apex: str = "sphere") -> RenderBuffers:
    """Fan-triangulate every tile from its centre.

    Positions hold the shared corners first, then one apex per tile at index
    ``len(graph.corners) + tile.id``. A tile with ``k`` corners yields ``k``
    triangles ``(apex, b[j], b[j+1])``, wound like the tile boundary.

    ``apex="sphere"`` puts the apex at ``center * radius`` so every buffer
    vertex lies on the sphere; the fan then bulges outward and its area
    differs from the tile polygon's. Only ``apex="planar"`` (apex at the corner
    mean) gives a fan whose area equals the polygon area.
    """
    if apex not in APEX_MODES:
        raise ConfigError(f"apex must be one of {APEX_MODES}, got {apex!r}")
    corner_count = len(graph.corners)
    apexes: List[Point] = [(0.0, 0.0, 0.0)] * len(graph)
    indices: List[Tuple[int, int, int]] = []
    owners: List[int] = []
    for tile in graph.values():
        if apex == "sphere":
            apexes[tile.id] = vectors.scale(tile.center, graph.radius)
        else:
            apexes[tile.id] = vectors.mean(graph.boundary_points(tile.id))
        apex_idx = corner_count + tile.id
        k = len(tile.boundary)
        for j in range(k):
            indices.append((apex_idx, tile.boundary[j], tile.boundary[(j + 1) % k]))
            owners.append(tile.id)

    positions = np.array(list(graph.corners) + apexes, dtype=np.float64).reshape(-1, 3)
    buffers = RenderBuffers(
        positions=_frozen(positions),
        indices=_frozen(np.array(indices, dtype=np.int64).reshape(-1, 3)),
        normals=_frozen(_normals(positions)),
        triangle_tiles=_frozen(np.array(owners, dtype=np.int64)),
    )
    logger.debug("Exported tile buffers: %d vertices, %d triangles", buffers.vertex_count, buffers.triangle_count)
    return buffers


def export_mesh_buffers(mesh: Mesh) -> RenderBuffers:
    """Buffers for the plain triangulated sphere, without tile fans."""
    positions = np.array(mesh.positions(), dtype=np.float64)
    return RenderBuffers(
        positions=_frozen(positions),
        indices=_frozen(np.array(mesh.faces(), dtype=np.int64)),
        normals=_frozen(_normals(positions)),
    )


def export_tile_records(graph: TileGraph) -> List[TileRecord]:
    ids = sorted(graph)
    if not ids:
        return []
    latlon = to_lat_lon([graph[i].center for i in ids])
    records = []
    for row, tile_id in enumerate(ids):
        tile = graph[tile_id]
        records.append(TileRecord(
            id=tile.id,
            center=tile.center,
            is_pentagon=tile.is_pentagon,
            boundary=tuple(graph.boundary_points(tile.id)),
            neighbors=tile.neighbors,
            lat=float(latlon[row, 0]),
            lon=float(latlon[row, 1]),
        ))
    return records


__all__ = [
    "RenderBuffers", "TileRecord", "MeshSink", "APEX_MODES",
    "export_tile_buffers", "export_mesh_buffers", "export_tile_records",
    "polygon_area", "triangle_area",
]
