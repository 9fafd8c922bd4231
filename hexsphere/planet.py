"""Planet: runs the hex-sphere pipeline for one configuration."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from .adjacency import link_tiles
from .config import SphereConfig
from .dual import build_dual
from .errors import ConfigError
from .export import (
    MeshSink, RenderBuffers, TileRecord,
    export_mesh_buffers, export_tile_buffers, export_tile_records,
)
from .mesh import Mesh
from .polyhedra import build_icosahedron
from .projection import project_to_sphere
from .subdivide import subdivide
from .tiles import TileGraph
from .validate import mesh_stats, tile_stats, validate_mesh, validate_tile_graph

logger = logging.getLogger(__name__)

RENDER_MODES = ("tiles", "triangles")


class Planet:
    """Geodesic mesh and tile graph of one sphere.

    Construction validates ``config`` and then builds everything eagerly:
    icosahedron, subdivision, projection, dual tiles and adjacency. The
    results are immutable; a different sphere means a new Planet.
    """

    def __init__(self, config: SphereConfig):
        self.config = config.validate()
        cfg = self.config
        start = time.time()

        base = build_icosahedron(cfg.radius)
        mesh = subdivide(base, cfg.frequency, method=cfg.method)
        mesh = project_to_sphere(mesh, cfg.radius, epsilon=cfg.resolved_epsilon)
        validate_mesh(mesh, cfg.radius, cfg.resolved_epsilon)

        tiles = link_tiles(build_dual(mesh, radius=cfg.radius, original_count=base.vertex_count))
        validate_tile_graph(tiles, cfg.frequency)

        self._mesh = mesh
        self._tiles = tiles
        logger.info(
            "Generated planet r=%g n=%d: %d tiles (%d pentagons) in %.3fs",
            cfg.radius, cfg.frequency, len(tiles), len(tiles.pentagons()), time.time() - start,
        )

    @classmethod
    def generate(cls, radius: float = 1.0, frequency: int = 1, epsilon: Optional[float] = None,
                 method: str = "linear") -> "Planet":
        return cls(SphereConfig(radius=radius, frequency=frequency, epsilon=epsilon, method=method))

    @property
    def mesh(self) -> Mesh:
        return self._mesh

    @property
    def tiles(self) -> TileGraph:
        return self._tiles

    def render_buffers(self, mode: str = "tiles", apex: str = "sphere") -> RenderBuffers:
        """Buffers for ``mode`` ("tiles" fans or plain "triangles").

        Tile fans use ``apex`` as in :func:`hexsphere.export.export_tile_buffers`:
        the default "sphere" keeps every vertex on the sphere, while only
        "planar" makes each fan's area equal its tile polygon's.
        """
        if mode == "tiles":
            return export_tile_buffers(self._tiles, apex=apex)
        if mode == "triangles":
            return export_mesh_buffers(self._mesh)
        raise ConfigError(f"mode must be one of {RENDER_MODES}, got {mode!r}")

    def tile_records(self) -> List[TileRecord]:
        return export_tile_records(self._tiles)

    def attach(self, sink: MeshSink, mode: str = "tiles", apex: str = "sphere") -> Any:
        """Hand this planet's buffers to a renderer and return whatever handle it gives back."""
        return sink.submit_mesh(self.render_buffers(mode=mode, apex=apex))

    def stats(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "mesh": mesh_stats(self._mesh),
            "tiles": tile_stats(self._tiles),
        }

    def __repr__(self) -> str:
        return f"Planet(radius={self.config.radius}, frequency={self.config.frequency}, tiles={len(self._tiles)})"


def generate_planet(config: SphereConfig) -> Planet:
    return Planet(config)


__all__ = ["Planet", "generate_planet", "RENDER_MODES"]
