from __future__ import annotations
import logging
from enum import Enum
from typing import Iterator, List, Optional
import numpy as np

from . import hexgrid
from .hexgrid import Cube, CubeLike, Point, PointLike, Rect, RADIAN_INCREMENT, TAU

logger = logging.getLogger(__name__)


class Reference(Enum):
    """Direction of angle 0, in sectors counterclockwise from east."""
    EAST = 0
    WEST = 3

    @property
    def offset(self) -> float:
        return self.value * RADIAN_INCREMENT


class HexLayout:
    """
    A hex grid placed in world space.

    - Cells are cube positions (see hexgrid.Cube).
    - `size` is the distance between adjacent centers (inner diameter).
    - `origin` is the world position of the center of Cube(0, 0, 0).
    - `reference` picks the direction of angle 0. Both historical
      conventions are available; they are never mixed within one layout.
    """

    def __init__(
        self,
        size: float = 1.0,
        origin: Optional[PointLike] = None,
        reference: Reference = Reference.EAST,
    ):
        size = float(size)
        if not size > 0:
            raise ValueError(f"Hex size must be positive, got {size}")
        self.size = size

        if origin is None:
            self.origin = np.zeros(2, dtype=float)
        else:
            self.origin = np.array(origin, dtype=float)
        if self.origin.shape != (2,):
            raise ValueError(f"Origin must be a 2D point, got shape {self.origin.shape}")

        self.reference = Reference(reference)
        logger.debug("HexLayout(size=%s, origin=%s, reference=%s)", self.size, self.origin, self.reference.name)

    def __repr__(self) -> str:
        return f"HexLayout(size={self.size}, origin={tuple(self.origin)}, reference={self.reference.name})"

    # --- coordinate helpers ---
    def to_cartesian(self, v: CubeLike) -> Point:
        return hexgrid.to_cartesian(v, self.size) + self.origin

    def to_hex(self, xy: PointLike) -> Cube:
        return hexgrid.to_hex(np.asarray(xy, dtype=float) - self.origin, self.size)

    def cell_at(self, xy: PointLike) -> Cube:
        """Cell whose hexagon contains the world point `xy`."""
        return hexgrid.nearest_cell(self.to_hex(xy))

    def distance(self, a: CubeLike, b: CubeLike) -> float:
        """Straight-line world distance between two positions."""
        return hexgrid.euclidean_distance(a, b) * self.size

    # --- polar ---
    def angle(self, v: CubeLike) -> float:
        a = hexgrid.angle(v)
        if hexgrid.manhattan_magnitude(v) == 0:
            # the origin has no direction, whatever the reference
            return a
        return (a - self.reference.offset) % TAU

    def from_polar(self, magnitude: float, angle: float) -> Cube:
        return hexgrid.from_polar(magnitude, angle + self.reference.offset)

    # --- areas ---
    def vertices(self, v: CubeLike) -> Iterator[Point]:
        for p in hexgrid.vertices(v, self.size):
            yield p + self.origin

    def is_within_area(self, v: CubeLike, area: Rect) -> bool:
        return all(area.has_point(p) for p in self.vertices(v))

    def positions_in_rect(self, rect: Rect) -> List[Cube]:
        return hexgrid.positions_in_rect(rect.translated(-self.origin), self.size)
