from __future__ import annotations
from typing import Iterable


class HexGridError(Exception):
    """Base class for every error raised by hexcube."""


class InvalidHexVectorError(HexGridError, ValueError):
    """
    A cube position that is not on the hex-grid plane.

    Raised when the components do not sum to zero, or when none of them
    carries the Manhattan magnitude.
    """
    def __init__(self, vector: Iterable[float], reason: str = "components do not sum to zero"):
        self.vector = tuple(vector)
        self.reason = reason
        super().__init__(f"Invalid hex vector {self.vector}: {reason}")


class SectorError(HexGridError, ArithmeticError):
    """An angle normalised to a sector index outside 0..5."""
    def __init__(self, sector: float):
        self.sector = sector
        super().__init__(f"Sector index {sector!r} is outside 0..5")


class GeometryError(HexGridError, ArithmeticError):
    """Degenerate construction, e.g. two parallel axis rank lines."""
