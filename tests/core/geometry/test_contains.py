import numpy as np
import pytest

from selo_project.src.core.geometry.contains import is_containing
from selo_project.src.models.primitives import Line, LineString, MultiPolygon, Ring


@pytest.mark.parametrize(
    "point, expected",
    [
        ((0.5, 0.5), True),
        ((0.0, 0.5), False),
        ((1.5, 0.5), False),
    ],
)
def test_point_in_square(unit_square, point, expected):
    assert is_containing(unit_square, np.array(point)) is expected


def test_point_in_hole_is_not_contained(square_with_hole):
    assert not is_containing(square_with_hole, np.array([1.5, 1.5]))
    assert is_containing(square_with_hole, np.array([0.5, 0.5]))


def test_winding_does_not_matter(unit_square):
    assert is_containing(unit_square.flip(), np.array([0.5, 0.5]))


def test_lines_and_rings(unit_square):
    assert is_containing(unit_square, Line((0.2, 0.2), (0.8, 0.8)))
    assert not is_containing(unit_square, LineString([(0.5, 0.5), (2.0, 0.5)]))
    inner = Ring([(0.25, 0.25), (0.75, 0.25), (0.75, 0.75)])
    assert is_containing(unit_square, inner)
    assert not is_containing(inner, unit_square)


def test_empty_geometry_contains_nothing(unit_square):
    assert not is_containing(MultiPolygon(), np.array([0.5, 0.5]))
    assert not is_containing(unit_square, Ring())
