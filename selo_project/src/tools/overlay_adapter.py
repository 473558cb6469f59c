from __future__ import annotations

"""overlay_adapter.py
Bridge between kernel polygons and the GEOS overlay engine (via *shapely*).

Kernel polygons become shapely polygons with a counter-clockwise shell and
clockwise holes.  Engine results are flattened to their polygonal parts
(touching operands can yield stray points or lines, which carry no area)
and normalised back to the same winding before being turned into kernel
primitives of the caller's precision.
"""

import logging
from typing import Callable, List

import numpy as np
import shapely
import shapely.geometry as sg
from shapely.errors import GEOSException

from ..core.errors import EngineError
from ..models.primitives import Line, LineString, MultiPolygon, MultiRing, Polygon, Ring, Triangle

__all__ = [
    "to_overlay",
    "from_overlay",
    "ring_to_shapely",
    "polygon_to_shapely",
    "run_overlay",
    "run_union_all",
    "to_overlay_any",
    "OVERLAY_OPS",
]

logger = logging.getLogger(__name__)

OVERLAY_OPS: dict[str, Callable] = {
    "union": shapely.union,
    "intersection": shapely.intersection,
    "difference": shapely.difference,
}


# ---------------------------------------------------------------------------
# Kernel -> engine
# ---------------------------------------------------------------------------

def _xy(points: np.ndarray) -> np.ndarray:
    return np.asarray(points, dtype=np.float64)


def ring_to_shapely(ring: Ring) -> sg.Polygon | None:
    """Hole-free shapely polygon for *ring*; ``None`` for fewer than three points."""
    if len(ring) < 3:
        return None
    return sg.Polygon(_xy(ring.points))


def polygon_to_shapely(polygon: Polygon) -> sg.Polygon | None:
    """Shapely polygon for a kernel polygon, skipping degenerate rings."""
    if len(polygon.exterior) < 3:
        logger.debug(f"Skipping polygon with {len(polygon.exterior)} exterior points")
        return None
    holes = [_xy(h.points) for h in polygon.interiors if len(h) >= 3]
    return sg.Polygon(_xy(polygon.exterior.points), holes)


def to_overlay(geometry) -> shapely.Geometry:
    """Convert a 2-D Ring/Triangle/Polygon/MultiPolygon for the overlay engine.

    Members of a MultiPolygon are dissolved into one valid area first, so
    overlapping members count once.

    Returns:
        A shapely (Multi)Polygon with CCW shells and CW holes; an empty
        polygon when nothing non-degenerate remains.

    """
    if isinstance(geometry, Triangle):
        geometry = geometry.to_ring()
    if isinstance(geometry, Ring):
        parts = [ring_to_shapely(geometry)]
    elif isinstance(geometry, Polygon):
        parts = [polygon_to_shapely(geometry)]
    elif isinstance(geometry, MultiPolygon):
        parts = [polygon_to_shapely(p) for p in geometry]
    elif isinstance(geometry, MultiRing):
        parts = [ring_to_shapely(r) for r in geometry]
    else:
        raise TypeError(f"Unsupported overlay operand: {type(geometry).__name__}")

    parts = [p for p in parts if p is not None]
    if not parts:
        return sg.Polygon()
    if len(parts) == 1:
        geom = parts[0]
    elif isinstance(geometry, MultiPolygon):
        geom = run_union_all(parts)
    else:
        geom = sg.MultiPolygon(parts)
    return shapely.orient_polygons(geom, exterior_cw=False)


# ---------------------------------------------------------------------------
# Engine -> kernel
# ---------------------------------------------------------------------------

def _polygonal_parts(geom) -> List[sg.Polygon]:
    parts = []
    for part in shapely.get_parts(geom):
        if isinstance(part, sg.Polygon):
            if not part.is_empty and part.area > 0:
                parts.append(part)
        elif isinstance(part, (sg.MultiPolygon, sg.GeometryCollection)):
            parts.extend(_polygonal_parts(part))
    return parts


def from_overlay(geom, dtype=np.float64) -> MultiPolygon:
    """Convert an engine result into a kernel :class:`MultiPolygon`.

    Args:
        geom: Any shapely geometry returned by the engine.
        dtype: Coordinate precision of the produced primitives.

    Returns:
        MultiPolygon: Polygonal parts only, CCW exteriors and CW holes.

    """
    if geom is None or geom.is_empty:
        return MultiPolygon()
    polygons = []
    for part in _polygonal_parts(geom):
        part = shapely.orient_polygons(part, exterior_cw=False)
        exterior = Ring(np.asarray(part.exterior.coords)[:, :2], dtype=dtype)
        holes = [Ring(np.asarray(h.coords)[:, :2], dtype=dtype) for h in part.interiors]
        polygons.append(Polygon(exterior, MultiRing(holes)))
    return MultiPolygon(polygons)


def run_overlay(op: str, lhs, rhs):
    """Run the named overlay operation on two shapely geometries.

    Raises:
        EngineError: If GEOS rejects the input (e.g. invalid topology).

    """
    try:
        return OVERLAY_OPS[op](lhs, rhs)
    except GEOSException as e:
        logger.error(f"Overlay engine failed during {op}: {e}")
        raise EngineError(f"Overlay engine failed during {op}: {e}") from e


def run_union_all(geoms):
    """Dissolve any number of shapely geometries into one."""
    try:
        return shapely.union_all(geoms)
    except GEOSException as e:
        logger.error(f"Overlay engine failed to union {len(geoms)} geometries: {e}")
        raise EngineError(f"Overlay engine failed during union_all: {e}") from e


def to_overlay_any(geometry):
    """Like :func:`to_overlay`, also accepting points, lines and line strings."""
    if isinstance(geometry, np.ndarray) and geometry.ndim == 1:
        return sg.Point(_xy(geometry))
    if isinstance(geometry, (Line, LineString)):
        if len(geometry.points) < 2:
            return sg.LineString()
        return sg.LineString(_xy(geometry.points))
    return to_overlay(geometry)
