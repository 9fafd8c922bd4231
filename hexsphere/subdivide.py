"""Geodesic subdivision of a triangle mesh with exact vertex welding.

Every triangle of the input becomes ``n**2`` smaller triangles. Vertices that
lie on a shared edge are created once and looked up again by the neighbouring
triangle through a cache keyed on the parent vertex ids, so the result is a
closed manifold without co-located duplicates. Original vertex ids are kept.
"""

from __future__ import annotations

import logging
import numbers
from collections import deque
from typing import Deque, Dict, List, Tuple

from .errors import ConfigError
from .mesh import Mesh, Triangle
from .vectors import Point, add, lerp, scale, subtract

logger = logging.getLogger(__name__)

METHODS = ("linear", "quarter")


def check_frequency(frequency) -> int:
    if isinstance(frequency, bool) or not isinstance(frequency, numbers.Integral):
        raise ConfigError(f"frequency must be an integer, got {frequency!r}")
    if frequency < 1:
        raise ConfigError(f"frequency must be >= 1, got {frequency}")
    return int(frequency)


def _is_power_of_two(value: int) -> bool:
    return value & (value - 1) == 0


class Subdivider:
    """One subdivision run. The vertex cache lives and dies with the instance."""

    def __init__(self, mesh: Mesh, frequency: int):
        self.mesh = mesh
        self.frequency = check_frequency(frequency)
        self.positions: List[Point] = list(mesh.vertices)
        self.cache: Dict[Tuple[int, ...], int] = {}

    def _new_vertex(self, position: Point) -> int:
        self.positions.append(position)
        return len(self.positions) - 1

    # ----------------------------
    # n-way linear subdivision
    # ----------------------------

    def _edge_point(self, u: int, v: int, step: int) -> int:
        """Vertex ``step/n`` of the way from ``u`` to ``v``, shared by both faces on the edge."""
        n = self.frequency
        if step == 0:
            return u
        if step == n:
            return v
        lo, hi = (u, v) if u < v else (v, u)
        offset = step if u == lo else n - step
        key = (lo, hi, offset)
        idx = self.cache.get(key)
        if idx is None:
            idx = self._new_vertex(lerp(self.positions[lo], self.positions[hi], offset / n))
            self.cache[key] = idx
        return idx

    def _split_face_linear(self, face: Triangle) -> List[Triangle]:
        n = self.frequency
        a, b, c = face
        pa = self.positions[a]
        ab = subtract(self.positions[b], pa)
        ac = subtract(self.positions[c], pa)

        grid: Dict[Tuple[int, int], int] = {}
        for i in range(n + 1):
            for j in range(n + 1 - i):
                if j == 0:
                    grid[i, j] = self._edge_point(a, b, i)
                elif i == 0:
                    grid[i, j] = self._edge_point(a, c, j)
                elif i + j == n:
                    grid[i, j] = self._edge_point(b, c, j)
                else:
                    # interior lattice points belong to this face only
                    grid[i, j] = self._new_vertex(add(pa, add(scale(ab, i / n), scale(ac, j / n))))

        out: List[Triangle] = []
        for i in range(n):
            for j in range(n - i):
                out.append((grid[i, j], grid[i + 1, j], grid[i, j + 1]))
                if i + j < n - 1:
                    out.append((grid[i + 1, j], grid[i + 1, j + 1], grid[i, j + 1]))
        return out

    def linear(self) -> Mesh:
        worklist: Deque[Triangle] = deque(self.mesh.triangles)
        triangles: List[Triangle] = []
        while worklist:
            triangles.extend(self._split_face_linear(worklist.popleft()))
        return Mesh(vertices=tuple(self.positions), triangles=tuple(triangles))

    # ----------------------------
    # recursive quartering
    # ----------------------------

    def _midpoint(self, u: int, v: int) -> int:
        key = (u, v) if u < v else (v, u)
        idx = self.cache.get(key)
        if idx is None:
            idx = self._new_vertex(lerp(self.positions[key[0]], self.positions[key[1]], 0.5))
            self.cache[key] = idx
        return idx

    def quarter(self) -> Mesh:
        n = self.frequency
        if not _is_power_of_two(n):
            raise ConfigError(f"quarter subdivision needs a power-of-two frequency, got {n}")
        depth = n.bit_length() - 1

        worklist: Deque[Tuple[Triangle, int]] = deque((tri, 0) for tri in self.mesh.triangles)
        triangles: List[Triangle] = []
        while worklist:
            tri, level = worklist.popleft()
            if level == depth:
                triangles.append(tri)
                continue
            a, b, c = tri
            ab = self._midpoint(a, b)
            bc = self._midpoint(b, c)
            ca = self._midpoint(c, a)
            worklist.append(((a, ab, ca), level + 1))
            worklist.append(((ab, b, bc), level + 1))
            worklist.append(((ca, bc, c), level + 1))
            worklist.append(((ab, bc, ca), level + 1))
        return Mesh(vertices=tuple(self.positions), triangles=tuple(triangles))


def subdivide(mesh: Mesh, frequency: int, method: str = "linear") -> Mesh:
    """Split every triangle of ``mesh`` into ``frequency**2`` triangles.

    ``method`` is ``"linear"`` (any frequency) or ``"quarter"`` (powers of two,
    repeated midpoint splits). Both give the same vertex positions where both
    apply; positions stay on the flat parent faces until projection.
    """
    if method not in METHODS:
        raise ConfigError(f"method must be one of {METHODS}, got {method!r}")
    runner = Subdivider(mesh, frequency)
    result = runner.linear() if method == "linear" else runner.quarter()
    logger.debug(
        "Subdivided %d -> %d triangles (%s, n=%d), %d vertices, %d cached edge points",
        mesh.triangle_count, result.triangle_count, method, runner.frequency,
        result.vertex_count, len(runner.cache),
    )
    return result


__all__ = ["Subdivider", "subdivide", "check_frequency", "METHODS"]
