"""
Hex-grid geometry in cube coordinates.

Core modules:
- hexgrid: cube positions, directions, distance/angle and cartesian conversion
- layout: HexLayout (hex size, world origin, angle reference)
- traversal: depth-first / breadth-first iteration over a caller's tree
- errors: exception types
"""
from .errors import GeometryError, HexGridError, InvalidHexVectorError, SectorError
from .hexgrid import (
    Cube,
    Rect,
    DIRECTIONS,
    EAST, NNE, NNW, WEST, SSW, SSE, NORTH, SOUTH,
    adjacent,
    angle,
    euclidean_distance,
    euclidean_magnitude,
    from_polar,
    is_within_area,
    line,
    manhattan_distance,
    manhattan_magnitude,
    nearest_cell,
    positions_in_rect,
    ring,
    round_cube,
    spiral,
    to_cartesian,
    to_hex,
    vertices,
)
from .layout import HexLayout, Reference

__version__ = "0.1.0"
