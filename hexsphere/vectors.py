"""Tuple-based 3-vector helpers shared by the pipeline stages."""

from __future__ import annotations

from math import sqrt
from typing import Iterable, Sequence, Tuple

Point = Tuple[float, float, float]


def subtract(p: Sequence[float], q: Sequence[float]) -> Point:
    return (p[0] - q[0], p[1] - q[1], p[2] - q[2])


def add(p: Sequence[float], q: Sequence[float]) -> Point:
    return (p[0] + q[0], p[1] + q[1], p[2] + q[2])


def scale(p: Sequence[float], factor: float) -> Point:
    return (p[0] * factor, p[1] * factor, p[2] * factor)


def cross(u: Sequence[float], v: Sequence[float]) -> Point:
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def dot(u: Sequence[float], v: Sequence[float]) -> float:
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def norm(vector: Sequence[float]) -> float:
    return sqrt(vector[0] ** 2 + vector[1] ** 2 + vector[2] ** 2)


def dist2(p: Sequence[float], q: Sequence[float]) -> float:
    return (p[0] - q[0]) ** 2 + (p[1] - q[1]) ** 2 + (p[2] - q[2]) ** 2


def normalize(vector: Sequence[float], length: float = 1.0) -> Point:
    """Rescale ``vector`` to ``length``; the caller guarantees it is non-zero."""
    magnitude = norm(vector)
    return scale(vector, length / magnitude)


def lerp(p: Sequence[float], q: Sequence[float], t: float) -> Point:
    return (
        p[0] + (q[0] - p[0]) * t,
        p[1] + (q[1] - p[1]) * t,
        p[2] + (q[2] - p[2]) * t,
    )


def mean(points: Iterable[Sequence[float]]) -> Point:
    sx = sy = sz = 0.0
    count = 0
    for p in points:
        sx += p[0]
        sy += p[1]
        sz += p[2]
        count += 1
    return (sx / count, sy / count, sz / count)
