import math

import numpy as np
import pytest

from hexcube.hexgrid import EAST, NNE, SIDE_LENGTH, WEST, Cube, Rect
from hexcube.layout import HexLayout, Reference

ORIGIN = Cube(0, 0, 0)


def assert_cube_approx(actual, expected):
    assert tuple(actual) == pytest.approx(tuple(expected), abs=1e-9)


def test_defaults():
    layout = HexLayout()
    np.testing.assert_allclose(layout.to_cartesian(EAST), [1.0, 0.0], atol=1e-12)
    assert layout.reference is Reference.EAST
    assert layout.angle(EAST) == 0


def test_size_and_origin():
    layout = HexLayout(size=10, origin=(100, 50))
    np.testing.assert_allclose(layout.to_cartesian(ORIGIN), [100.0, 50.0], atol=1e-9)
    np.testing.assert_allclose(layout.to_cartesian(EAST), [110.0, 50.0], atol=1e-9)
    assert_cube_approx(layout.to_hex((110, 50)), EAST)
    assert layout.distance(ORIGIN, NNE) == pytest.approx(10)


def test_cell_at():
    layout = HexLayout(size=10, origin=(100, 50))
    assert layout.cell_at((106, 50)) == EAST
    assert layout.cell_at((104, 52)) == ORIGIN


def test_vertices_follow_origin():
    layout = HexLayout(size=2, origin=(-5, 5))
    for p in layout.vertices(ORIGIN):
        assert float(np.linalg.norm(p - layout.origin)) == pytest.approx(2 * SIDE_LENGTH)


def test_area_queries():
    layout = HexLayout(size=10, origin=(100, 50))
    assert layout.is_within_area(ORIGIN, Rect(90, 40, 20, 20))
    assert not layout.is_within_area(EAST, Rect(90, 40, 20, 20))
    assert layout.positions_in_rect(Rect(99, 49, 2, 2)) == [ORIGIN]


def test_west_reference():
    layout = HexLayout(reference=Reference.WEST)
    assert layout.angle(WEST) == pytest.approx(0)
    assert layout.angle(EAST) == pytest.approx(math.pi)
    assert_cube_approx(layout.from_polar(1, 0), WEST)


@pytest.mark.parametrize("reference", list(Reference))
def test_polar_round_trip(reference):
    layout = HexLayout(reference=reference)
    for v in (Cube(3, -1, -2), Cube(-2, -2, 4), Cube(0.5, 0.25, -0.75)):
        magnitude = max(abs(c) for c in v)
        assert_cube_approx(layout.from_polar(magnitude, layout.angle(v)), v)


@pytest.mark.parametrize("size", [0, -1.5])
def test_invalid_size(size):
    with pytest.raises(ValueError):
        HexLayout(size=size)


def test_invalid_origin():
    with pytest.raises(ValueError):
        HexLayout(origin=(1, 2, 3))


@pytest.mark.parametrize("reference", list(Reference))
def test_origin_angle_is_zero(reference):
    assert HexLayout(reference=reference).angle(ORIGIN) == 0


def test_origin_angle_still_validates():
    with pytest.raises(ValueError):
        HexLayout(reference=Reference.WEST).angle(Cube(1, 1, 1))
