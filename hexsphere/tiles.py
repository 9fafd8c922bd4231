"""Tile and TileGraph value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

from .vectors import Point


@dataclass(frozen=True)
class Tile:
    """One face of the dual mesh.

    ``boundary`` lists corner ids counter-clockwise as seen from outside the
    sphere. Once linked, ``neighbors[k]`` is the tile across the edge
    ``boundary[k] -> boundary[(k + 1) % len(boundary)]``.
    """

    id: int
    center: Point
    boundary: Tuple[int, ...]
    neighbors: Tuple[int, ...] = ()
    is_pentagon: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "is_pentagon", len(self.boundary) == 5)

    @property
    def sides(self) -> int:
        return len(self.boundary)

    def boundary_edges(self) -> List[Tuple[int, int]]:
        k = len(self.boundary)
        return [(self.boundary[i], self.boundary[(i + 1) % k]) for i in range(k)]


class TileGraph(Mapping):
    """Read-only mapping from tile id to :class:`Tile`, plus the shared corner positions."""

    def __init__(self, tiles: Mapping[int, Tile], corners: Tuple[Point, ...], radius: float):
        self._tiles: Mapping[int, Tile] = MappingProxyType(dict(tiles))
        self.corners: Tuple[Point, ...] = tuple(corners)
        self.radius = float(radius)

    def __getitem__(self, tile_id: int) -> Tile:
        return self._tiles[tile_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __repr__(self) -> str:
        return f"TileGraph(tiles={len(self)}, pentagons={len(self.pentagons())}, radius={self.radius})"

    @property
    def tiles(self) -> Mapping[int, Tile]:
        return self._tiles

    def pentagons(self) -> List[Tile]:
        return [tile for tile in self._tiles.values() if tile.is_pentagon]

    def hexagons(self) -> List[Tile]:
        return [tile for tile in self._tiles.values() if not tile.is_pentagon]

    def boundary_points(self, tile_id: int) -> List[Point]:
        return [self.corners[c] for c in self._tiles[tile_id].boundary]

    def neighbor_at(self, tile_id: int, k: int) -> int:
        """Neighbour across boundary edge ``k`` of ``tile_id``."""
        tile = self._tiles[tile_id]
        if not tile.neighbors:
            raise LookupError(f"tile {tile_id} has not been linked to its neighbours")
        return tile.neighbors[k % len(tile.neighbors)]

    def with_tiles(self, tiles: Dict[int, Tile]) -> "TileGraph":
        return TileGraph(tiles, self.corners, self.radius)


__all__ = ["Tile", "TileGraph"]
