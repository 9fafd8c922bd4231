"""Projection of mesh vertices onto a sphere, plus lat/lon conversion."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.linalg import norm

from .errors import ConfigError, GeometryError
from .mesh import Mesh

logger = logging.getLogger(__name__)

DEFAULT_EPSILON_SCALE = 1e-7


def default_epsilon(radius: float) -> float:
    return DEFAULT_EPSILON_SCALE * radius


def to_sphere(vertices: np.ndarray, radius: float = 1.0, epsilon: Optional[float] = None) -> np.ndarray:
    """Rescale an (N, 3) array of points to magnitude ``radius`` along their directions."""
    if not (np.isfinite(radius) and radius > 0):
        raise ConfigError(f"radius must be a positive finite number, got {radius}")
    if epsilon is None:
        epsilon = default_epsilon(radius)
    vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    length = norm(vertices, axis=1).reshape((-1, 1))
    degenerate = np.flatnonzero(length[:, 0] < epsilon)
    if degenerate.size:
        raise GeometryError(
            f"{degenerate.size} vertices lie at the origin and have no direction (first id {int(degenerate[0])})"
        )
    return vertices / length * radius


def project_to_sphere(mesh: Mesh, radius: float, epsilon: Optional[float] = None) -> Mesh:
    projected = to_sphere(mesh.positions(), radius=radius, epsilon=epsilon)
    logger.debug("Projected %d vertices onto radius %g", mesh.vertex_count, radius)
    return Mesh(
        vertices=tuple(tuple(p) for p in projected.tolist()),
        triangles=mesh.triangles,
    )


def to_lat_lon(vertices) -> np.ndarray:
    """
    Convert an array of 3D Cartesian coordinates to latitude and longitude.

    Parameters:
        vertices (array-like): An (N, 3) array of 3D Cartesian coordinates (x, y, z).

    Returns:
        np.ndarray: An (N, 2) array of (latitude, longitude) in degrees.
    """
    vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
    x = vertices[:, 0]
    y = vertices[:, 1]
    z = vertices[:, 2]
    hyp = np.hypot(x, y)
    lat_deg = np.degrees(np.arctan2(z, hyp))
    lon_deg = np.degrees(np.arctan2(y, x))
    return np.column_stack((lat_deg, lon_deg))


__all__ = ["project_to_sphere", "to_sphere", "to_lat_lon", "default_epsilon", "DEFAULT_EPSILON_SCALE"]
