"""Generation parameters for a hex-sphere."""

from __future__ import annotations

import json
import math
import numbers
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .errors import ConfigError
from .projection import default_epsilon
from .subdivide import METHODS, check_frequency

DEFAULT_RADIUS = 1.0
DEFAULT_FREQUENCY = 1
DEFAULT_METHOD = "linear"


def _positive_real(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigError(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {value}")
    if not value > 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return float(value)


@dataclass(frozen=True)
class SphereConfig:
    """Radius, subdivision frequency and coincidence tolerance of one sphere."""

    radius: float = DEFAULT_RADIUS
    frequency: int = DEFAULT_FREQUENCY
    epsilon: Optional[float] = None
    method: str = DEFAULT_METHOD

    def validate(self) -> "SphereConfig":
        _positive_real("radius", self.radius)
        check_frequency(self.frequency)
        if self.epsilon is not None:
            _positive_real("epsilon", self.epsilon)
        if self.method not in METHODS:
            raise ConfigError(f"method must be one of {METHODS}, got {self.method!r}")
        if self.method == "quarter" and self.frequency & (self.frequency - 1):
            raise ConfigError(f"quarter subdivision needs a power-of-two frequency, got {self.frequency}")
        return self

    @property
    def resolved_epsilon(self) -> float:
        return self.epsilon if self.epsilon is not None else default_epsilon(self.radius)

    @property
    def tile_count(self) -> int:
        return 10 * self.frequency ** 2 + 2

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SphereConfig":
        if "sphere" in data and isinstance(data["sphere"], dict):
            data = data["sphere"]
        unknown = set(data) - {"radius", "frequency", "epsilon", "method"}
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(
            radius=data.get("radius", DEFAULT_RADIUS),
            frequency=data.get("frequency", DEFAULT_FREQUENCY),
            epsilon=data.get("epsilon"),
            method=data.get("method", DEFAULT_METHOD),
        ).validate()


def load_config(path: str) -> SphereConfig:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: configuration must be a JSON object")
    return SphereConfig.from_dict(data)


__all__ = ["SphereConfig", "load_config", "DEFAULT_RADIUS", "DEFAULT_FREQUENCY", "DEFAULT_METHOD"]
