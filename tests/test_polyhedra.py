import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from hexsphere import vectors
from hexsphere.errors import ConfigError
from hexsphere.polyhedra import PHI, IcosahedronBuilder, build_icosahedron


def test_undirected_icosahedron():
    vertices, edges = IcosahedronBuilder.undirected_icosahedron()

    assert len(vertices) == 12
    assert set(vertices) == set(range(12))

    assert len(edges) == 30
    assert len(set(edges)) == len(edges)

    degree = {v: 0 for v in vertices}
    for u, v in edges:
        assert isinstance(u, int) and isinstance(v, int)
        assert u < v  # undirected edges stored in ascending order
        degree[u] += 1
        degree[v] += 1
    assert set(degree.values()) == {5}


def test_golden_ratio_coordinates():
    _, _, coords = IcosahedronBuilder.undirected_icosahedron(return_coords=True)
    for p in coords:
        magnitudes = sorted(abs(c) for c in p)
        assert magnitudes[0] == 0.0
        assert magnitudes[1] == pytest.approx(1.0)
        assert magnitudes[2] == pytest.approx(PHI)


@pytest.mark.parametrize("radius", [1.0, 2.5, 6371.0])
def test_icosahedron_mesh(radius):
    mesh = build_icosahedron(radius)

    assert mesh.vertex_count == 12
    assert mesh.triangle_count == 20
    assert set(mesh.edge_counts().values()) == {2}
    assert len(mesh.edges()) == 30
    assert mesh.euler_characteristic() == 2
    for p in mesh.vertices:
        assert vectors.norm(p) == pytest.approx(radius, rel=1e-12)


def test_faces_wound_outward():
    mesh = build_icosahedron()
    for a, b, c in mesh.triangles:
        pa, pb, pc = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
        normal = vectors.cross(vectors.subtract(pb, pa), vectors.subtract(pc, pa))
        assert vectors.dot(normal, vectors.mean([pa, pb, pc])) > 0


def test_each_edge_traversed_once_per_direction():
    mesh = build_icosahedron()
    directed = set()
    for a, b, c in mesh.triangles:
        for edge in ((a, b), (b, c), (c, a)):
            assert edge not in directed
            directed.add(edge)
    assert len(directed) == 60


@pytest.mark.parametrize("radius", [0.0, -1.0, float("inf")])
def test_invalid_radius_rejected(radius):
    with pytest.raises(ConfigError):
        build_icosahedron(radius)


def test_deterministic():
    assert build_icosahedron(3.0) == build_icosahedron(3.0)
