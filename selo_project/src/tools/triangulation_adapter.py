#!/usr/bin/env python3
"""Bridge between kernel geometry and the Delaunay triangulators.

Two engines are wrapped here:

* GEOS constrained Delaunay (``shapely.constrained_delaunay_triangles``)
  for polygons with holes, plus GEOS coverage union for stitching
  triangles back together.
* Qhull (``scipy.spatial.Delaunay``) for unconstrained point clouds.

Neither engine guarantees a winding for its triangles, so everything
coming back is oriented counter-clockwise.
"""

import logging
from typing import List, Sequence

import numpy as np
import shapely
import shapely.geometry as sg
from scipy.spatial import Delaunay, QhullError
from shapely.errors import GEOSException

from ..core.errors import EngineError
from ..models.primitives import MultiPolygon, Polygon, Triangle
from .overlay_adapter import from_overlay, polygon_to_shapely

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constrained triangulation (GEOS)
# ---------------------------------------------------------------------------

def to_triangulator(polygon: Polygon, snap_radius: float = 0.0):
    """Shapely polygon ready for constrained triangulation, or ``None`` if degenerate.

    Vertices closer than *snap_radius* along a ring are merged first; the
    engine fails on near-coincident constraint vertices.
    """
    shp = polygon_to_shapely(polygon)
    if shp is None:
        return None
    if snap_radius > 0:
        shp = shapely.remove_repeated_points(shp, tolerance=snap_radius)
    return shp


def run_constrained(shp) -> shapely.Geometry:
    try:
        return shapely.constrained_delaunay_triangles(shp)
    except GEOSException as e:
        logger.error(f"Constrained triangulation failed: {e}")
        raise EngineError(f"Constrained triangulation failed: {e}") from e


def from_triangulator(collection, dtype=np.float64) -> List[Triangle]:
    """Kernel triangles (CCW) from the engine's collection of triangle polygons."""
    triangles = []
    for part in shapely.get_parts(collection):
        if not isinstance(part, sg.Polygon) or part.is_empty:
            continue
        coords = np.asarray(part.exterior.coords)[:3, :2].astype(dtype)
        triangles.append(Triangle.from_array(coords).orient_default())
    return triangles


# ---------------------------------------------------------------------------
# Unconstrained triangulation (Qhull)
# ---------------------------------------------------------------------------

def run_delaunay(points: np.ndarray) -> np.ndarray:
    """Simplex index array of the Delaunay triangulation of *points* (float64)."""
    try:
        tri = Delaunay(np.asarray(points, dtype=np.float64))
    except QhullError as e:
        logger.error(f"Qhull triangulation failed for {len(points)} points: {e}")
        raise EngineError(f"Qhull triangulation failed: {e}") from e
    return tri.simplices


def from_delaunay(points: np.ndarray, simplices: np.ndarray) -> List[Triangle]:
    return [Triangle.from_array(points[s]).orient_default() for s in simplices]


# ---------------------------------------------------------------------------
# Stitching (GEOS coverage union)
# ---------------------------------------------------------------------------

def to_stitcher(triangles: Sequence[Triangle]) -> List[sg.Polygon]:
    polys = []
    for t in triangles:
        if t.area() == 0:
            logger.debug(f"Dropping degenerate triangle {t!r}")
            continue
        polys.append(sg.Polygon(np.asarray(t.orient_default().points, dtype=np.float64)))
    return polys


def run_stitch(polygons: List[sg.Polygon]) -> shapely.Geometry:
    try:
        return shapely.coverage_union_all(polygons)
    except GEOSException as e:
        logger.error(f"Stitching {len(polygons)} triangles failed: {e}")
        raise EngineError(f"Stitching failed: {e}") from e


def from_stitcher(geom, dtype=np.float64) -> MultiPolygon:
    return from_overlay(geom, dtype=dtype)
