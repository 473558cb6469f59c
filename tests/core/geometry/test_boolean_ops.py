"""Tests for the boolean overlay operations and their tolerant variants."""

import numpy as np
import pytest

from selo_project.src.core.errors import DimensionMismatchError, PrecisionMismatchError
from selo_project.src.core.geometry.boolean_ops import (
    difference,
    difference_approx,
    intersection,
    intersection_approx,
    to_multipolygon,
    union,
    union_all,
    union_approx,
)
from selo_project.src.models.primitives import MultiPolygon, Polygon, Ring, Triangle
from selo_project.src.services.settings_service import KernelSettings


def rect(x0, y0, x1, y1, dtype=None) -> Ring:
    """Axis-aligned CCW rectangle."""
    return Ring([(x0, y0), (x1, y0), (x1, y1), (x0, y1)], dtype=dtype)


# ---------------------------------------------------------------------------
# Exact operations
# ---------------------------------------------------------------------------


def test_union_of_adjacent_halves_merges():
    left = rect(0, 0, 0.5, 1)
    right = rect(0.5, 0, 1, 1)
    result = union(left, right)
    assert len(result) == 1
    assert result.area() == pytest.approx(1.0)


def test_intersection_of_offset_squares():
    result = intersection(rect(0, 0, 1, 1), rect(0.5, 0, 1.5, 1))
    assert len(result) == 1
    assert result.area() == pytest.approx(0.5)


def test_difference_punches_hole():
    result = difference(rect(0, 0, 2, 2), rect(0.5, 0.5, 1.5, 1.5))
    assert len(result) == 1
    polygon = result[0]
    assert len(polygon.interiors) == 1
    assert polygon.exterior.area() > 0
    assert polygon.interiors[0].area() < 0
    assert result.area() == pytest.approx(3.0)


def test_difference_with_holed_polygon_leaves_the_hole(square_with_hole):
    result = difference(rect(0, 0, 3, 3), square_with_hole)
    assert len(result) == 1
    assert result.area() == pytest.approx(1.0)


def test_disjoint_union_keeps_both():
    result = union(rect(0, 0, 1, 1), Triangle((5, 5), (6, 5), (5, 6)))
    assert len(result) == 2
    assert result.area() == pytest.approx(1.5)


def test_overlapping_multipolygon_members_count_once():
    overlapping = MultiPolygon([Polygon(rect(0, 0, 2, 1)), Polygon(rect(1, 0, 3, 1))])
    result = union(overlapping, rect(10, 10, 11, 11))
    assert len(result) == 2
    assert result.area() == pytest.approx(4.0)

    assert intersection(overlapping, rect(0, 0, 3, 1)).area() == pytest.approx(3.0)
    assert difference(overlapping, rect(0, 0, 1, 1)).area() == pytest.approx(2.0)


def test_clockwise_operand_gives_clockwise_result():
    result = union(rect(0, 0, 1, 1).flip(), rect(0.5, 0, 1.5, 1))
    assert len(result) == 1
    assert result[0].exterior.area() < 0
    assert result.area() == pytest.approx(-1.5)


def test_empty_operands(unit_square):
    empty = Ring()
    assert union(empty, unit_square) == to_multipolygon(unit_square)
    assert union(unit_square, MultiPolygon()) == to_multipolygon(unit_square)
    assert intersection(unit_square, empty).is_empty()
    assert difference(unit_square, empty) == to_multipolygon(unit_square)
    assert difference(empty, unit_square).is_empty()


def test_precision_is_kept():
    result = union(rect(0, 0, 1, 1, np.float32), rect(0.5, 0, 1.5, 1, np.float32))
    assert result[0].exterior.dtype == np.float32


def test_mixed_precision_raises():
    with pytest.raises(PrecisionMismatchError):
        union(rect(0, 0, 1, 1, np.float32), rect(0.5, 0, 1.5, 1, np.float64))


def test_3d_operand_raises():
    ring_3d = Ring([(0, 0, 0), (1, 0, 0), (1, 1, 0)])
    with pytest.raises(DimensionMismatchError):
        intersection(ring_3d, rect(0, 0, 1, 1))


def test_unsupported_operand_raises(unit_square):
    with pytest.raises(TypeError):
        union(unit_square, "square")


# ---------------------------------------------------------------------------
# Tolerant operations
# ---------------------------------------------------------------------------


def test_union_approx_closes_narrow_gap():
    a = rect(0, 0, 1, 1)
    b = rect(1.001, 0, 2.001, 1)
    assert len(union(a, b)) == 2

    result = union_approx(a, b, 0.01)
    assert len(result) == 1
    assert result.area() == pytest.approx(2.001, abs=1e-6)


def test_intersection_approx_drops_sliver():
    a = rect(0, 0, 1, 1)
    b = rect(0.999, 0, 1.999, 1)
    assert intersection(a, b).area() == pytest.approx(0.001)
    assert intersection_approx(a, b, 0.01).is_empty()


def test_intersection_approx_keeps_real_overlap():
    result = intersection_approx(rect(0, 0, 1, 1), rect(0.5, 0, 1.5, 1), 0.01)
    assert len(result) == 1
    assert result.area() == pytest.approx(0.5, abs=1e-6)


def test_difference_approx_drops_boundary_sliver():
    a = rect(0, 0, 2, 1)
    b = rect(1, 0.001, 2, 1.001)
    assert difference(a, b).area() == pytest.approx(1.001)

    result = difference_approx(a, b, 0.01)
    assert len(result) == 1
    assert result.area() == pytest.approx(1.0, abs=1e-6)


def test_zero_tolerance_matches_exact():
    a, b = rect(0, 0, 1, 1), rect(0.5, 0.5, 1.5, 1.5)
    assert union_approx(a, b, 0.0).area() == pytest.approx(union(a, b).area())


def test_approx_takes_engine_settings():
    a = rect(0, 0, 1, 1)
    b = rect(1.001, 0, 2.001, 1)
    result = union_approx(a, b, 0.01, KernelSettings(buffer_join_style="round"))
    assert len(result) == 1
    assert result.area() == pytest.approx(2.001, abs=1e-4)


def test_negative_tolerance_raises(unit_square):
    with pytest.raises(ValueError):
        union_approx(unit_square, unit_square, -0.1)


# ---------------------------------------------------------------------------
# Many-way union
# ---------------------------------------------------------------------------


def test_union_all_dissolves_overlapping_rings():
    rings = [rect(0, 0, 1, 1), rect(0.5, 0, 1.5, 1).flip(), rect(5, 5, 6, 6)]
    result = union_all(rings)
    assert len(result) == 2
    assert result.area() == pytest.approx(2.5)
    assert all(p.exterior.area() > 0 for p in result)


def test_union_all_of_nothing():
    assert union_all([]) == MultiPolygon()


def test_union_all_skips_degenerate_rings(unit_square):
    result = union_all([unit_square, Ring([(3, 3), (4, 4)])])
    assert len(result) == 1
    assert result.area() == pytest.approx(1.0)
