"""Exception types raised by island generation."""


class IslandGenError(Exception):
    """Base class for all island generator errors."""


class ConfigError(IslandGenError, ValueError):
    """Invalid generation parameters, raised before any work starts."""


class GeometryInvariantViolation(IslandGenError, AssertionError):
    """A generated cell map broke a geometric invariant.

    This indicates a bug in the generator, never bad input.
    """


class HeightmapExportError(IslandGenError, OSError):
    """Writing a heightmap image failed."""
