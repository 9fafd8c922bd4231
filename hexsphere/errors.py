"""Exception types raised by the hex-sphere pipeline."""


class HexSphereError(ValueError):
    """Base class for every error raised by hexsphere."""


class ConfigError(HexSphereError):
    """Invalid generation parameters (radius, frequency, epsilon, method)."""


class GeometryError(HexSphereError):
    """An internal geometric or topological invariant does not hold."""


__all__ = ["HexSphereError", "ConfigError", "GeometryError"]
