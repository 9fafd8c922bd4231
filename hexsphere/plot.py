"""Quick 3D preview of a tile graph with matplotlib."""

from __future__ import annotations

from typing import Any, Optional, Tuple

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from .tiles import TileGraph

PENTAGON_COLOR = "#d1342b"
HEXAGON_COLOR = "#5fa8d3"


def plot_tiles(
    graph: TileGraph,
    ax: Optional[Any] = None,
    pentagon_color: str = PENTAGON_COLOR,
    hexagon_color: str = HEXAGON_COLOR,
    alpha: float = 0.9,
    figsize: Tuple[float, float] = (6, 6),
) -> Tuple[Any, Any]:
    """Draw every tile as a filled polygon, pentagons highlighted.

    Returns the figure and 3D axis for further customization.
    """
    if ax is None:
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(111, projection="3d")
    else:
        fig = ax.figure

    polygons = []
    colors = []
    for tile in graph.values():
        polygons.append(graph.boundary_points(tile.id))
        colors.append(pentagon_color if tile.is_pentagon else hexagon_color)

    collection = Poly3DCollection(polygons, facecolors=colors, edgecolors="black", linewidths=0.4, alpha=alpha)
    ax.add_collection3d(collection)

    r = graph.radius * 1.05
    ax.set_xlim(-r, r)
    ax.set_ylim(-r, r)
    ax.set_zlim(-r, r)
    ax.set_box_aspect([1, 1, 1])
    ax.set_axis_off()
    ax.set_title(f"{len(graph)} tiles ({len(graph.pentagons())} pentagons)")
    return fig, ax


def save_plot(graph: TileGraph, path: str, dpi: int = 120) -> None:
    fig, _ = plot_tiles(graph)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)


__all__ = ["plot_tiles", "save_plot"]
