"""Tests for polygon/point triangulation and triangle stitching."""

import numpy as np
import pytest

from selo_project.src.core.errors import DimensionMismatchError
from selo_project.src.core.geometry.triangulation import stitch, triangulate, triangulate_points
from selo_project.src.models.primitives import MultiPolygon, Polygon, Ring, Triangle
from selo_project.src.services.settings_service import KernelSettings, SettingsService


def _total_area(triangles) -> float:
    return float(sum(t.area() for t in triangles))


def test_square_gives_two_ccw_triangles(unit_square):
    triangles = triangulate(unit_square.to_polygon())
    assert len(triangles) == 2
    assert all(t.area() > 0 for t in triangles)
    assert _total_area(triangles) == pytest.approx(1.0)


def test_clockwise_polygon_still_gives_ccw_triangles(unit_square):
    triangles = triangulate(unit_square.flip().to_polygon())
    assert all(t.area() > 0 for t in triangles)


def test_polygon_with_hole(square_with_hole):
    triangles = triangulate(square_with_hole)
    assert len(triangles) == 8
    assert _total_area(triangles) == pytest.approx(8.0)


def test_constraint_edges_are_kept():
    # A concave "L" whose convex hull would add a triangle outside
    ell = Polygon(Ring([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]))
    triangles = triangulate(ell)
    assert _total_area(triangles) == pytest.approx(3.0)


def test_near_duplicate_vertices_are_snapped(unit_square):
    polygon = Polygon(Ring([(0, 0), (1, 0), (1, 1e-5), (1, 1), (0, 1)]))
    assert len(triangulate(polygon)) == 2


def test_snap_radius_comes_from_given_settings():
    polygon = Polygon(Ring([(0, 0), (1, 0), (1, 0.01), (1, 1), (0, 1)]))
    assert len(triangulate(polygon)) > 2
    assert len(triangulate(polygon, settings=KernelSettings(triangulation_snap_radius=0.05))) == 2
    assert len(triangulate(polygon, snap_radius=0.0, settings=KernelSettings(triangulation_snap_radius=0.05))) > 2


def test_stored_snap_radius_is_not_read():
    polygon = Polygon(Ring([(0, 0), (1, 0), (1, 0.01), (1, 1), (0, 1)]))
    SettingsService().set("triangulation_snap_radius", 0.05)
    assert len(triangulate(polygon)) > 2


def test_float32_is_kept(unit_square):
    polygon = Polygon(Ring(unit_square.points, dtype=np.float32))
    assert all(t.dtype == np.float32 for t in triangulate(polygon))


def test_degenerate_polygon_gives_nothing(caplog):
    with caplog.at_level("WARNING"):
        assert triangulate(Polygon(Ring([(0, 0), (1, 1)]))) == []
    assert "Cannot triangulate" in caplog.text


def test_3d_polygon_is_rejected():
    with pytest.raises(DimensionMismatchError):
        triangulate(Polygon(Ring([(0, 0, 0), (1, 0, 0), (1, 1, 0)])))


# ---------------------------------------------------------------------------
# Point clouds
# ---------------------------------------------------------------------------


def test_triangulate_points():
    points = [(0, 0), (1, 0), (1, 1), (0, 1), (1, 1)]
    triangles = triangulate_points(points)
    assert len(triangles) == 2
    assert all(t.area() > 0 for t in triangles)
    assert _total_area(triangles) == pytest.approx(1.0)


def test_triangulate_points_needs_three_unique(caplog):
    with caplog.at_level("WARNING"):
        assert triangulate_points([(0, 0), (1, 1), (1, 1)]) == []
    assert "requires at least 3" in caplog.text


# ---------------------------------------------------------------------------
# Stitching
# ---------------------------------------------------------------------------


def test_stitch_restores_polygon_with_hole(square_with_hole):
    result = stitch(triangulate(square_with_hole))
    assert len(result) == 1
    assert len(result[0].interiors) == 1
    assert result[0].exterior.area() > 0
    assert result.area() == pytest.approx(8.0)


def test_stitch_separates_disjoint_triangles():
    triangles = [Triangle((0, 0), (1, 0), (0, 1)), Triangle((5, 5), (6, 5), (5, 6))]
    assert len(stitch(triangles)) == 2


def test_stitch_drops_degenerate_triangles():
    triangles = [Triangle((0, 0), (1, 0), (0, 1)), Triangle((0, 0), (1, 1), (2, 2))]
    result = stitch(triangles)
    assert len(result) == 1
    assert result.area() == pytest.approx(0.5)


def test_stitch_nothing():
    assert stitch([]) == MultiPolygon()


def test_stitch_rejects_3d_triangles():
    triangles = [Triangle((0, 0, 0), (1, 0, 0), (1, 1, 0)), Triangle((0, 0, 0), (1, 1, 0), (0, 1, 0))]
    with pytest.raises(DimensionMismatchError):
        stitch(triangles)
