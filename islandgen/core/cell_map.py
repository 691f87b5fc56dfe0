"""
Cell map data model.

A CellMap is an arena of cells keyed by CellKey. Adjacency is stored as plain
key tuples, never as references between Cell objects, so a map has no
reference cycles and can be serialized as-is.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, Tuple, TypeVar

import numpy as np
from shapely.geometry import LinearRing

from ..errors import ConfigError, GeometryInvariantViolation

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class CellKey:
    """Hashable, totally ordered identity of a cell: its site coordinates.

    Keys compare by x, then y, using exact float equality. NaN and infinity
    are rejected so the ordering is total.
    """

    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ConfigError(f"cell coordinates must be finite, got ({self.x}, {self.y})")
        # Normalise numpy scalars and -0.0 so equal keys hash equally
        object.__setattr__(self, "x", float(self.x) + 0.0)
        object.__setattr__(self, "y", float(self.y) + 0.0)

    @classmethod
    def from_point(cls, point: Iterable[float]) -> "CellKey":
        x, y = point
        return cls(float(x), float(y))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y])


@dataclass
class CellData:
    """Payload written by the island shaper."""

    height: float = 0.0
    visited: bool = False


@dataclass(eq=False)
class Cell(Generic[T]):
    """A Voronoi cell: geometry and adjacency are fixed, payload is mutable."""

    key: CellKey
    polygon: np.ndarray  # (k, 2) counter-clockwise vertices
    neighbors: Tuple[CellKey, ...] = ()
    payload: T = field(default_factory=CellData)


CellMap = Dict[CellKey, Cell]


def check_cell_map(cells: CellMap) -> None:
    """
    Verify the structural invariants of a cell map.

    Raises GeometryInvariantViolation when a neighbor key is missing from the
    map, a cell lists itself, adjacency is asymmetric or a polygon is not a
    simple closed ring.
    """
    for key, cell in cells.items():
        if cell.key != key:
            raise GeometryInvariantViolation(f"cell stored under {key} has key {cell.key}")

        for neighbor in cell.neighbors:
            if neighbor == key:
                raise GeometryInvariantViolation(f"cell {key} lists itself as a neighbor")
            if neighbor not in cells:
                raise GeometryInvariantViolation(f"cell {key} has unknown neighbor {neighbor}")
            if key not in cells[neighbor].neighbors:
                raise GeometryInvariantViolation(
                    f"asymmetric adjacency: {neighbor} is a neighbor of {key} but not vice versa"
                )

        if len(cell.polygon) < 3 or not LinearRing(cell.polygon).is_simple:
            raise GeometryInvariantViolation(f"polygon of cell {key} is not a simple ring")
