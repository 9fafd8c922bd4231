"""Tile-to-tile adjacency derived from shared polygon edges."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Tuple

import networkx as nx

from .errors import GeometryError
from .mesh import canonical_edge
from .tiles import Tile, TileGraph

logger = logging.getLogger(__name__)


def build_edge_index(graph: TileGraph) -> Dict[Tuple[int, int], List[int]]:
    """Map each undirected corner pair to the tiles whose boundary uses it."""
    index: Dict[Tuple[int, int], List[int]] = defaultdict(list)
    for tile in graph.values():
        for u, v in tile.boundary_edges():
            index[canonical_edge(u, v)].append(tile.id)
    return index


def check_symmetric(graph: TileGraph) -> None:
    for tile in graph.values():
        for other in tile.neighbors:
            if tile.id not in graph[other].neighbors:
                raise GeometryError(f"Adjacency is not symmetric: {tile.id} -> {other} has no reverse link")


def link_tiles(graph: TileGraph) -> TileGraph:
    """Return a copy of ``graph`` whose tiles list their neighbours in boundary order."""
    index = build_edge_index(graph)
    for edge, owners in index.items():
        if len(owners) != 2:
            raise GeometryError(f"Boundary edge {edge} is shared by {len(owners)} tiles, expected 2")

    linked: Dict[int, Tile] = {}
    for tile in graph.values():
        neighbors = []
        for u, v in tile.boundary_edges():
            a, b = index[canonical_edge(u, v)]
            neighbors.append(b if a == tile.id else a)
        if len(set(neighbors)) != len(neighbors):
            raise GeometryError(f"Tile {tile.id} shares more than one edge with a neighbour: {neighbors}")
        linked[tile.id] = Tile(id=tile.id, center=tile.center, boundary=tile.boundary, neighbors=tuple(neighbors))

    result = graph.with_tiles(linked)
    check_symmetric(result)
    logger.debug("Linked %d tiles across %d shared edges", len(result), len(index))
    return result


# ----------------------------
# Graph views for consumers
# ----------------------------

def to_networkx(graph: TileGraph) -> nx.Graph:
    G = nx.Graph()
    for tile in graph.values():
        G.add_node(tile.id, center=tile.center, is_pentagon=tile.is_pentagon)
    for tile in graph.values():
        for other in tile.neighbors:
            G.add_edge(tile.id, other)
    return G


def tiles_within(graph: TileGraph, tile_id: int, steps: int) -> Dict[int, int]:
    """Hop distance from ``tile_id`` to every tile at most ``steps`` hops away."""
    if tile_id not in graph:
        raise KeyError(tile_id)
    return dict(nx.single_source_shortest_path_length(to_networkx(graph), tile_id, cutoff=steps))


def tile_distance(graph: TileGraph, a: int, b: int) -> int:
    return nx.shortest_path_length(to_networkx(graph), a, b)


__all__ = ["link_tiles", "build_edge_index", "check_symmetric", "to_networkx", "tiles_within", "tile_distance"]
