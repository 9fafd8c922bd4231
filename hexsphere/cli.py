#!/usr/bin/env python3
"""
hexsphere command line.

Generate a hex-tiled sphere and report on it:

  hexsphere --frequency 4 --stats
  hexsphere --config planet.json --out_json planet_tiles.json --plot planet.png

Outputs:
- Console summary
- Optional JSON with tile records and render buffers
- Optional PNG preview
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import SphereConfig, load_config
from .errors import ConfigError, GeometryError
from .export import APEX_MODES
from .logging_config import setup_logging
from .planet import RENDER_MODES, Planet
from .subdivide import METHODS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="hexsphere", description="Generate a hexagon-tiled geodesic sphere.")
    ap.add_argument("--config", default=None, help="JSON file with radius/frequency/epsilon/method (or a 'sphere' object)")
    ap.add_argument("--radius", type=float, default=None, help="Sphere radius (default 1.0)")
    ap.add_argument("--frequency", type=int, default=None, help="Subdivision frequency n; tiles = 10n^2 + 2 (default 1)")
    ap.add_argument("--epsilon", type=float, default=None, help="Coincidence tolerance (default 1e-7 * radius)")
    ap.add_argument("--method", choices=METHODS, default=None, help="Subdivision scheme (default linear)")
    ap.add_argument("--mode", choices=RENDER_MODES, default="tiles",
                    help="tiles: fan-triangulated tiles; triangles: the geodesic triangle mesh")
    ap.add_argument("--apex", choices=APEX_MODES, default="sphere",
                    help="Where the fan apex of each tile sits: on the sphere or in the tile plane")
    ap.add_argument("--out_json", default=None, help="Write tile records and render buffers here")
    ap.add_argument("--plot", default=None, help="Save a PNG preview of the tiles here")
    ap.add_argument("--stats", action="store_true", help="Print mesh and tile statistics")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def resolve_config(args: argparse.Namespace) -> SphereConfig:
    config = load_config(args.config) if args.config else SphereConfig()
    overrides = {
        key: getattr(args, key)
        for key in ("radius", "frequency", "epsilon", "method")
        if getattr(args, key) is not None
    }
    return replace(config, **overrides).validate()


def print_summary(planet: Planet) -> None:
    stats = planet.stats()
    mesh, tiles = stats["mesh"], stats["tiles"]
    print(f"{'radius':12s} {planet.config.radius:g}")
    print(f"{'frequency':12s} {planet.config.frequency}")
    print("-" * 40)
    print(f"{'vertices':12s} {mesh['vertices']:8d}")
    print(f"{'edges':12s} {mesh['edges']:8d}")
    print(f"{'triangles':12s} {mesh['triangles']:8d}")
    print(f"{'tiles':12s} {tiles['tiles']:8d}")
    print(f"{'pentagons':12s} {tiles['pentagons']:8d}")
    print(f"{'hexagons':12s} {tiles['hexagons']:8d}")
    edge = mesh["edge_length"]
    print(f"{'edge length':12s} min {edge['min']:.6g}  max {edge['max']:.6g}  mean {edge['mean']:.6g}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = resolve_config(args)
        planet = Planet(config)
        buffers = planet.render_buffers(mode=args.mode, apex=args.apex)
    except OSError as e:
        logger.error("Cannot read configuration: %s", e)
        return 2
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    except GeometryError as e:
        logger.error("Geometry construction failed: %s", e)
        return 1

    if args.stats:
        print_summary(planet)

    if args.out_json:
        out = {
            "config": planet.config.to_dict(),
            "tiles": [record.to_dict() for record in planet.tile_records()],
            "buffers": buffers.to_dict(),
        }
        with open(args.out_json, "w", encoding="utf-8") as f:
            json.dump(out, f)
        print(f"Wrote: {args.out_json}")

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from .plot import save_plot
        save_plot(planet.tiles, args.plot)
        print(f"Wrote: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
