#!/usr/bin/env python3
"""Triangulation of polygons and point sets, and stitching triangles back.

This module provides:

* :func:`triangulate` - constrained Delaunay triangulation of a polygon
  with holes (GEOS); every polygon edge appears as a triangle edge.
* :func:`triangulate_points` - unconstrained Delaunay triangulation of a
  2-D point cloud (Qhull), as used for TIN surfaces.
* :func:`stitch` - merge an edge-sharing triangle soup into polygons.

All triangles are returned counter-clockwise.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np

from ...models.primitives import MultiPolygon, Polygon, Triangle
from ...services.settings_service import KernelSettings
from ...tools.triangulation_adapter import (
    from_delaunay,
    from_stitcher,
    from_triangulator,
    run_constrained,
    run_delaunay,
    run_stitch,
    to_stitcher,
    to_triangulator,
)
from ..errors import DimensionMismatchError
from ..vector import as_points

__all__ = ["triangulate", "triangulate_points", "stitch"]

logger = logging.getLogger(__name__)


def triangulate(
        polygon: Polygon,
        snap_radius: Optional[float] = None,
        settings: Optional[KernelSettings] = None,
) -> List[Triangle]:
    """Constrained Delaunay triangulation of *polygon*.

    Args:
        polygon: 2-D polygon, holes allowed. Must not self-intersect.
        snap_radius: Vertices closer than this are merged first. Defaults
            to the ``triangulation_snap_radius`` of *settings*.
        settings: Engine settings; a fresh :class:`KernelSettings` when
            omitted.

    Returns:
        List[Triangle]: CCW triangles covering the polygon; empty for a
        degenerate polygon.

    Raises:
        EngineError: If the engine rejects the polygon (e.g. it is
            self-intersecting).

    """
    if polygon.dim != 2:
        raise DimensionMismatchError("triangulate expects a 2-D polygon")
    if snap_radius is None:
        snap_radius = (settings or KernelSettings()).triangulation_snap_radius

    shp = to_triangulator(polygon, snap_radius)
    if shp is None:
        logger.warning(f"Cannot triangulate polygon with {len(polygon.exterior)} exterior points")
        return []

    triangles = from_triangulator(run_constrained(shp), dtype=polygon.dtype)
    logger.debug(f"Triangulated polygon with {len(polygon.interiors)} hole(s) into {len(triangles)} triangles")
    return triangles


def triangulate_points(points) -> List[Triangle]:
    """Delaunay triangulation of a 2-D point set.

    Fewer than three points, or duplicates leaving fewer than three unique
    points, yield an empty list with a warning.
    """
    pts = as_points(points, dim=2)
    unique = np.unique(pts, axis=0)
    if len(unique) < 3:
        logger.warning(f"Cannot triangulate {len(unique)} unique points: requires at least 3")
        return []
    simplices = run_delaunay(unique)
    triangles = from_delaunay(unique, simplices)
    logger.info(f"Triangulated {len(unique)} points into {len(triangles)} triangles")
    return triangles


def stitch(triangles: Iterable[Triangle]) -> MultiPolygon:
    """Merge triangles sharing full edges into polygons (CCW, holes CW).

    Degenerate triangles are dropped. Triangles must not overlap.

    Raises:
        DimensionMismatchError: For 3-D triangles.

    """
    triangles = list(triangles)
    if not triangles:
        return MultiPolygon()
    if any(t.dim != 2 for t in triangles):
        raise DimensionMismatchError("stitch expects 2-D triangles")
    dtype = triangles[0].dtype
    polys = to_stitcher(triangles)
    if not polys:
        return MultiPolygon()
    result = from_stitcher(run_stitch(polys), dtype=dtype)
    logger.debug(f"Stitched {len(polys)} triangles into {len(result)} polygon(s)")
    return result
