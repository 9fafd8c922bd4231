import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from hexsphere import Planet
from hexsphere.plot import HEXAGON_COLOR, PENTAGON_COLOR, plot_tiles, save_plot


def test_plot_tiles_draws_every_tile():
    graph = Planet.generate(frequency=2).tiles
    fig, ax = plot_tiles(graph)
    try:
        fig.canvas.draw()
        collection = ax.collections[0]
        assert len(collection.get_paths()) == len(graph)
        assert ax.get_title() == "42 tiles (12 pentagons)"
        assert PENTAGON_COLOR != HEXAGON_COLOR
    finally:
        plt.close(fig)


def test_plot_tiles_reuses_axis():
    graph = Planet.generate(frequency=1).tiles
    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")
    try:
        out_fig, out_ax = plot_tiles(graph, ax=ax)
        assert out_fig is fig
        assert out_ax is ax
    finally:
        plt.close(fig)


def test_save_plot(tmp_path):
    path = tmp_path / "tiles.png"
    save_plot(Planet.generate(frequency=2, radius=3.0).tiles, str(path), dpi=50)
    assert path.exists()
    assert path.stat().st_size > 0
