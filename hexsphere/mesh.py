"""Immutable triangle mesh shared by the geometry stages."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .vectors import Point

Triangle = Tuple[int, int, int]
Edge = Tuple[int, int]


def canonical_edge(u: int, v: int) -> Edge:
    return (u, v) if u <= v else (v, u)


@dataclass(frozen=True)
class Mesh:
    """Vertices addressed by their index, triangles wound outward.

    A well-formed mesh is a closed manifold: every undirected edge is shared
    by exactly two triangles.
    """

    vertices: Tuple[Point, ...]
    triangles: Tuple[Triangle, ...]

    @classmethod
    def from_lists(cls, vertices: Sequence[Sequence[float]], triangles: Sequence[Sequence[int]]) -> "Mesh":
        return cls(
            vertices=tuple((float(x), float(y), float(z)) for x, y, z in vertices),
            triangles=tuple((int(a), int(b), int(c)) for a, b, c in triangles),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def edge_counts(self) -> Counter:
        counts: Counter = Counter()
        for a, b, c in self.triangles:
            counts[canonical_edge(a, b)] += 1
            counts[canonical_edge(b, c)] += 1
            counts[canonical_edge(c, a)] += 1
        return counts

    def edges(self) -> List[Edge]:
        return sorted(self.edge_counts())

    def vertex_triangles(self) -> Dict[int, List[int]]:
        """Map each vertex id to the indices of the triangles that use it."""
        incident: Dict[int, List[int]] = defaultdict(list)
        for tri_idx, tri in enumerate(self.triangles):
            for vertex in tri:
                incident[vertex].append(tri_idx)
        return incident

    def euler_characteristic(self) -> int:
        return self.vertex_count - len(self.edge_counts()) + self.triangle_count

    def positions(self) -> np.ndarray:
        arr = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        arr.setflags(write=False)
        return arr

    def faces(self) -> np.ndarray:
        arr = np.array(self.triangles, dtype=np.int64).reshape(-1, 3)
        arr.setflags(write=False)
        return arr


__all__ = ["Mesh", "Triangle", "Edge", "canonical_edge"]
