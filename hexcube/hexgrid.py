from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator, List, Sequence, Tuple, Union
import numpy as np

from .errors import GeometryError, InvalidHexVectorError, SectorError

logger = logging.getLogger(__name__)

# Pointy-top regular hexagons with inner diameter 1: adjacent centers are
# WIDTH apart, and angles start at 0 to the east and grow counterclockwise.
SQRT3 = float(np.sqrt(3.0))
TAU = 2.0 * math.pi

DEGREE_INCREMENT = 60.0
RADIAN_INCREMENT = TAU / 6

WIDTH = 1.0
SIDE_LENGTH = WIDTH / SQRT3
HEIGHT = 2.0 * SIDE_LENGTH

# relative to the manhattan magnitude, plus an absolute floor for float noise
ZERO_SUM_TOLERANCE = 1e-6
_ZERO_SUM_FLOOR = 1e-12

_COS_120 = math.cos(TAU / 3)

Point = np.ndarray
PointLike = Union[np.ndarray, Sequence[float]]


def _frozen(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


def rotated(v: PointLike, angle: float) -> Point:
    """Rotate a 2D vector counterclockwise by `angle` radians."""
    c, s = math.cos(angle), math.sin(angle)
    x, y = float(v[0]), float(v[1])
    return np.array([c * x - s * y, s * x + c * y], dtype=float)


# Components of this vector can be negated to reach the 4 diagonal neighbours.
DIAGONAL_OFFSET = _frozen(np.array([WIDTH / 2.0, HEIGHT * 3.0 / 4.0]))

# Cube axes in 2D world space, 120 degrees apart.
CUBE_Z_AXIS = _frozen(np.array([0.0, 1.0]))
CUBE_X_AXIS = _frozen(rotated(CUBE_Z_AXIS, TAU / -3))
CUBE_Y_AXIS = _frozen(rotated(CUBE_Z_AXIS, TAU / 3))

_X_RANK_DIRECTION = _frozen(rotated(CUBE_X_AXIS, TAU / -3))
_Y_RANK_DIRECTION = _frozen(rotated(CUBE_Y_AXIS, TAU / 3))


@dataclass(frozen=True)
class Cube:
    """
    A position on the hex-grid plane in cube coordinates.

    Cell centers have integral components that sum to zero; fractional
    positions are allowed anywhere on the plane.
    """
    x: float
    y: float
    z: float

    # numpy scalars defer to __rmul__ instead of broadcasting over the cube
    __array_ufunc__ = None

    def __post_init__(self):
        # + 0.0 folds -0.0 into 0.0 so equal cells print the same
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, float(getattr(self, name)) + 0.0)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Cube) -> Cube:
        if not isinstance(other, Cube):
            return NotImplemented
        return Cube(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Cube) -> Cube:
        if not isinstance(other, Cube):
            return NotImplemented
        return Cube(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Cube:
        return Cube(-self.x, -self.y, -self.z)

    def __mul__(self, k: float) -> Cube:
        if not isinstance(k, Real):
            return NotImplemented
        return Cube(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def is_valid(self, tolerance: float = ZERO_SUM_TOLERANCE) -> bool:
        """True if the components sum to zero within `tolerance`."""
        total = self.x + self.y + self.z
        return abs(total) <= tolerance * manhattan_magnitude(self) + _ZERO_SUM_FLOOR


CubeLike = Union[Cube, Sequence[float]]

# --- directions ---

EAST = E = Cube(1, -1, 0)
NORTH_NORTH_EAST = NNE = Cube(0, -1, 1)
NORTH_NORTH_WEST = NNW = Cube(-1, 0, 1)
WEST = W = Cube(-1, 1, 0)
SOUTH_SOUTH_WEST = SSW = Cube(0, 1, -1)
SOUTH_SOUTH_EAST = SSE = Cube(1, 0, -1)

# Not cardinal directions: half a lattice step each way, straight up/down.
NORTH = N = Cube(-0.5, -0.5, 1)
SOUTH = S = Cube(0.5, 0.5, -1)

DIRECTIONS: Tuple[Cube, ...] = (EAST, NNE, NNW, WEST, SSW, SSE)

# Sector k runs from DIRECTIONS[k] to DIRECTIONS[k + 1]: (base, increment).
_SECTORS: Tuple[Tuple[Cube, Cube], ...] = (
    (EAST, Cube(-1, 0, 1)),
    (NNE, Cube(-1, 1, 0)),
    (NNW, Cube(0, 1, -1)),
    (WEST, Cube(1, 0, -1)),
    (SSW, Cube(1, -1, 0)),
    (SSE, Cube(0, -1, 1)),
)


def as_cube(v: CubeLike) -> Cube:
    if isinstance(v, Cube):
        return v
    x, y, z = v
    return Cube(x, y, z)


def _require_valid(v: Cube) -> None:
    if not v.is_valid():
        logger.warning("Invalid hex vector: %s", v)
        raise InvalidHexVectorError(v)


def _require_size(size: float) -> None:
    if not size > 0:
        raise ValueError(f"Hex size must be positive, got {size}")

# --- magnitude and distance ---

def manhattan_magnitude(v: CubeLike) -> float:
    """
    Number of moves between adjacent hexes needed to get from the origin
    to `v`. Works for fractional positions too.
    """
    return max(abs(c) for c in as_cube(v))


def euclidean_magnitude(v: CubeLike) -> float:
    """
    Straight-line distance from the origin to `v`, in units of WIDTH.

    Off the six primary axes the two components that do not carry the
    Manhattan magnitude are the legs of a triangle with a 120 degree angle
    between them, so the law of cosines gives the third side.
    """
    v = as_cube(v)
    _require_valid(v)

    coords = list(v)
    if all(c == 0 for c in coords):
        return 0.0

    manhattan = manhattan_magnitude(v)
    if any(c == 0 for c in coords):
        return manhattan * WIDTH

    sides = [abs(c) for c in coords]
    try:
        sides.remove(manhattan)
    except ValueError:
        logger.warning("Invalid hex vector: %s", v)
        raise InvalidHexVectorError(v, "no component carries the Manhattan magnitude") from None

    a, b = sides
    return WIDTH * math.sqrt(a * a + b * b - 2.0 * a * b * _COS_120)


def manhattan_distance(a: CubeLike, b: CubeLike) -> float:
    return manhattan_magnitude(as_cube(a) - as_cube(b))


def euclidean_distance(a: CubeLike, b: CubeLike) -> float:
    return euclidean_magnitude(as_cube(a) - as_cube(b))

# --- polar ---

def angle(v: CubeLike) -> float:
    """
    2D orientation from the origin to `v`, in radians within [0, tau).

    The angle is exact on the six directions and linear in lattice steps
    between them. The origin returns 0.

    Raises
    ------
    InvalidHexVectorError
        `v` is not on the hex-grid plane.
    """
    v = as_cube(v)
    _require_valid(v)

    manhattan = manhattan_magnitude(v)
    if manhattan == 0:
        return 0.0

    noise = ZERO_SUM_TOLERANCE * manhattan
    x, y, z = (0.0 if abs(c) <= noise else c for c in v)

    if x > 0 and y < 0 and z >= 0:
        factor = 0 + z / manhattan      # east -> north-north-east
    elif z > 0 and y < 0 and x <= 0:
        factor = 1 + -x / manhattan     # north-north-east -> north-north-west
    elif x < 0 and z > 0 and y >= 0:
        factor = 2 + y / manhattan      # north-north-west -> west
    elif y > 0 and x < 0 and z <= 0:
        factor = 3 + -z / manhattan     # west -> south-south-west
    elif z < 0 and y > 0 and x >= 0:
        factor = 4 + x / manhattan      # south-south-west -> south-south-east
    elif x > 0 and z < 0 and y <= 0:
        factor = 5 + -y / manhattan     # south-south-east -> east
    else:
        logger.warning("Invalid hex vector: %s", v)
        raise InvalidHexVectorError(v, "matches no angular sector")

    return RADIAN_INCREMENT * factor


def from_polar(magnitude: float, angle: float) -> Cube:
    """
    Hex-grid position at Manhattan distance `magnitude` and hex angle
    `angle` from the origin. Inverse of manhattan_magnitude/angle.

    Does not round to the nearest hex center.
    """
    if not math.isfinite(angle):
        raise ValueError(f"angle must be finite, got {angle!r}")

    angle = math.fmod(angle, TAU)
    if angle < 0:
        angle += TAU

    sector = angle / RADIAN_INCREMENT
    if sector >= 6.0:
        # just under tau can round up to a full turn
        sector = 0.0
    if not 0.0 <= sector < 6.0:
        logger.error("Sector index %r out of range for angle %r", sector, angle)
        raise SectorError(sector)

    index = int(sector)
    base, increment = _SECTORS[index]
    lateral_offset = (sector - index) * magnitude

    return magnitude * base + lateral_offset * increment

# --- cartesian ---

@dataclass(frozen=True, eq=False)
class _Line:
    point: np.ndarray
    direction: np.ndarray

    def intersection(self, other: _Line) -> Point:
        m = np.column_stack([self.direction, -other.direction])
        if abs(float(np.linalg.det(m))) < 1e-12:
            raise GeometryError("Axis rank lines are parallel")
        t, _ = np.linalg.solve(m, other.point - self.point)
        return self.point + t * self.direction


def _cube_x_rank(v: Cube) -> _Line:
    return _Line((v.x - v.z) / SQRT3 * CUBE_X_AXIS, _X_RANK_DIRECTION)


def _cube_y_rank(v: Cube) -> _Line:
    return _Line((v.y - v.z) / SQRT3 * CUBE_Y_AXIS, _Y_RANK_DIRECTION)


def to_cartesian(v: CubeLike, size: float = 1.0) -> Point:
    """
    Cube -> 2D world position of `v`.

    The X rank line runs parallel to the Y axis and the Y rank line parallel
    to the X axis; they cross at the point. `size` scales the whole grid
    (distance between adjacent centers).
    """
    _require_size(size)
    v = as_cube(v)
    _require_valid(v)
    return _cube_x_rank(v).intersection(_cube_y_rank(v)) * size


def to_hex(point: PointLike, size: float = 1.0) -> Cube:
    """2D world position -> fractional cube position, by axis projection."""
    _require_size(size)
    p = np.asarray(point, dtype=float) / size
    x = 2.0 / SQRT3 * float(np.dot(p, CUBE_X_AXIS))
    y = 2.0 / SQRT3 * float(np.dot(p, CUBE_Y_AXIS))
    return Cube(x, y, -(x + y))

# --- cells ---

def adjacent(v: CubeLike) -> Iterator[Cube]:
    """The 6 neighbours of `v`: E, NNE, NNW, W, SSW, SSE."""
    v = as_cube(v)
    for d in DIRECTIONS:
        yield v + d


def vertices(v: CubeLike, size: float = 1.0) -> Iterator[Point]:
    """Corners of the hexagon around `v`, counterclockwise from 30 degrees."""
    center = to_cartesian(v, size)
    radius = SIDE_LENGTH * size
    for k in range(6):
        theta = math.radians(30.0 + DEGREE_INCREMENT * k)
        yield center + radius * np.array([math.cos(theta), math.sin(theta)])


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; edges count as inside."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect extents must be non-negative, got {self.width}x{self.height}")

    @classmethod
    def from_corners(cls, a: PointLike, b: PointLike) -> Rect:
        x0, x1 = sorted((float(a[0]), float(b[0])))
        y0, y1 = sorted((float(a[1]), float(b[1])))
        return cls(x0, y0, x1 - x0, y1 - y0)

    def has_point(self, p: PointLike) -> bool:
        px, py = float(p[0]), float(p[1])
        return (self.x <= px <= self.x + self.width) and (self.y <= py <= self.y + self.height)

    def corners(self) -> List[Point]:
        x0, y0 = self.x, self.y
        x1, y1 = x0 + self.width, y0 + self.height
        return [np.array(c, dtype=float) for c in ((x0, y0), (x1, y0), (x1, y1), (x0, y1))]

    def translated(self, offset: PointLike) -> Rect:
        return Rect(self.x + float(offset[0]), self.y + float(offset[1]), self.width, self.height)


def is_within_area(v: CubeLike, area: Rect, size: float = 1.0) -> bool:
    return all(area.has_point(p) for p in vertices(v, size))


def _round_half_away(c: float) -> float:
    return math.copysign(math.floor(abs(c) + 0.5), c)


def round_cube(v: CubeLike) -> Cube:
    """
    Snap x and y to the nearest integers and rebuild z from them, so the
    result always sums to zero. Cheaper than nearest_cell but can pick a
    neighbour of the true nearest cell near hex corners.
    """
    v = as_cube(v)
    x, y = _round_half_away(v.x), _round_half_away(v.y)
    return Cube(x, y, -(x + y))


def nearest_cell(v: CubeLike) -> Cube:
    """
    Round a fractional cube position to the nearest hex using cube-rounding.
    This is the usual cube-rounding step: round all three, then rebuild the
    component that moved furthest from the other two.
    """
    x, y, z = as_cube(v)
    rx, ry, rz = round(x), round(y), round(z)
    dx, dy, dz = abs(rx - x), abs(ry - y), abs(rz - z)

    if dx > dy and dx > dz:
        rx = -ry - rz
    elif dy > dz:
        ry = -rx - rz
    else:
        rz = -rx - ry
    return Cube(rx, ry, rz)


def positions_in_rect(rect: Rect, size: float = 1.0) -> List[Cube]:
    """
    Cells under the corners of `rect`, without duplicates.

    Only the four corners are sampled, so cells that overlap the rectangle
    without holding one of its corners are not returned.
    """
    seen = set()
    out: List[Cube] = []
    for corner in rect.corners():
        cell = round_cube(to_hex(corner, size))
        if cell not in seen:
            seen.add(cell)
            out.append(cell)
    return out

# --- lines and rings ---

def line(a: CubeLike, b: CubeLike) -> List[Cube]:
    """
    Cells on the straight line from `a` to `b`: interpolate in cube space
    and round. Returns inclusive list [a ... b] of cell centers.
    """
    ac = nearest_cell(a)
    bc = nearest_cell(b)
    n = int(manhattan_distance(ac, bc))
    if n == 0:
        return [ac]

    results: List[Cube] = []
    for i in range(n + 1):
        t = i / n
        results.append(nearest_cell(ac + (bc - ac) * t))
    return results


def ring(center: CubeLike, radius: int) -> Iterator[Cube]:
    """Cells at exactly `radius` moves from `center`, 6 * radius of them."""
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    center = as_cube(center)
    if radius == 0:
        yield center
        return

    cell = center + SSW * radius
    for d in DIRECTIONS:
        for _ in range(radius):
            yield cell
            cell = cell + d


def spiral(center: CubeLike, radius: int) -> Iterator[Cube]:
    """Cells within `radius` moves of `center`, innermost ring first."""
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    for r in range(radius + 1):
        yield from ring(center, r)
