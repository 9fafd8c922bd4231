import sys
from pathlib import Path

import networkx as nx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from hexsphere.adjacency import (
    build_edge_index, check_symmetric, link_tiles, tile_distance, tiles_within, to_networkx,
)
from hexsphere.dual import build_dual
from hexsphere.errors import GeometryError
from hexsphere.polyhedra import build_icosahedron
from hexsphere.projection import project_to_sphere
from hexsphere.subdivide import subdivide
from hexsphere.tiles import Tile


def linked_graph(n):
    mesh = project_to_sphere(subdivide(build_icosahedron(), n), 1.0)
    return link_tiles(build_dual(mesh, radius=1.0))


@pytest.fixture(scope="module")
def graph3():
    return linked_graph(3)


@pytest.mark.parametrize("n", [1, 2, 3])
def test_edge_index_every_edge_shared_twice(n):
    mesh = project_to_sphere(subdivide(build_icosahedron(), n), 1.0)
    index = build_edge_index(build_dual(mesh, radius=1.0))
    assert len(index) == 30 * n ** 2
    assert {len(owners) for owners in index.values()} == {2}


def test_neighbor_count_matches_sides(graph3):
    for tile in graph3.values():
        assert len(tile.neighbors) == tile.sides
        assert len(set(tile.neighbors)) == tile.sides
        assert tile.id not in tile.neighbors


def test_adjacency_symmetric(graph3):
    for tile in graph3.values():
        for other in tile.neighbors:
            assert tile.id in graph3[other].neighbors
    check_symmetric(graph3)


def test_neighbor_lies_across_boundary_edge(graph3):
    for tile in graph3.values():
        for k, (u, v) in enumerate(tile.boundary_edges()):
            other = graph3.neighbor_at(tile.id, k)
            # both tiles run counter-clockwise, so the shared edge is reversed
            assert (v, u) in graph3[other].boundary_edges()


def test_neighbor_at_wraps(graph3):
    tile = graph3[20]
    assert graph3.neighbor_at(20, tile.sides) == tile.neighbors[0]
    assert graph3.neighbor_at(20, -1) == tile.neighbors[-1]


def test_icosahedron_dual_is_dodecahedron():
    G = to_networkx(linked_graph(1))
    assert G.number_of_nodes() == 12
    assert G.number_of_edges() == 30
    assert all(d == 5 for _, d in G.degree())
    assert nx.is_connected(G)


def test_networkx_view(graph3):
    G = to_networkx(graph3)
    assert G.number_of_nodes() == 92
    assert G.number_of_edges() == 270
    assert G.nodes[0]["is_pentagon"] is True
    assert G.nodes[50]["is_pentagon"] is False


def test_tiles_within(graph3):
    ring = tiles_within(graph3, 0, 1)
    assert ring[0] == 0
    assert sorted(k for k, d in ring.items() if d == 1) == sorted(graph3[0].neighbors)
    assert len(tiles_within(graph3, 0, 100)) == len(graph3)
    with pytest.raises(KeyError):
        tiles_within(graph3, 10_000, 1)


def test_tile_distance(graph3):
    neighbor = graph3[0].neighbors[0]
    assert tile_distance(graph3, 0, 0) == 0
    assert tile_distance(graph3, 0, neighbor) == 1
    # pentagons sit on icosahedron vertices, n = 3 hops apart along an edge
    assert min(tile_distance(graph3, 0, p) for p in range(1, 12)) == 3


def test_asymmetric_links_rejected(graph3):
    tiles = dict(graph3.tiles)
    t = tiles[0]
    stranger = next(i for i in graph3 if i != 0 and i not in t.neighbors)
    tiles[0] = Tile(id=0, center=t.center, boundary=t.boundary, neighbors=(stranger,) + t.neighbors[1:])
    with pytest.raises(GeometryError):
        check_symmetric(graph3.with_tiles(tiles))


def test_open_tiling_rejected(graph3):
    tiles = dict(graph3.tiles)
    del tiles[30]
    with pytest.raises(GeometryError):
        link_tiles(graph3.with_tiles(tiles))
