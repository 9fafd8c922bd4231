"""Hexagon-tiled geodesic spheres: icosahedron, subdivision, dual tiles, adjacency and render buffers."""

from .errors import HexSphereError, ConfigError, GeometryError
from .config import SphereConfig, load_config
from .mesh import Mesh
from .tiles import Tile, TileGraph
from .polyhedra import IcosahedronBuilder, build_icosahedron
from .subdivide import Subdivider, subdivide
from .projection import project_to_sphere, to_lat_lon
from .dual import build_dual
from .adjacency import link_tiles, to_networkx, tiles_within, tile_distance
from .export import (
    MeshSink, RenderBuffers, TileRecord,
    export_mesh_buffers, export_tile_buffers, export_tile_records,
)
from .planet import Planet, generate_planet

__version__ = "0.1.0"

__all__ = [
    "HexSphereError", "ConfigError", "GeometryError",
    "SphereConfig", "load_config",
    "Mesh", "Tile", "TileGraph",
    "IcosahedronBuilder", "build_icosahedron",
    "Subdivider", "subdivide",
    "project_to_sphere", "to_lat_lon",
    "build_dual",
    "link_tiles", "to_networkx", "tiles_within", "tile_distance",
    "MeshSink", "RenderBuffers", "TileRecord",
    "export_mesh_buffers", "export_tile_buffers", "export_tile_records",
    "Planet", "generate_planet",
]
