from __future__ import annotations

"""buffer_adapter.py
Bridge between kernel polygons and the GEOS offset (buffer) engine.

GEOS buffers polygons of either winding, but the kernel hands it
counter-clockwise shells with clockwise holes so the sign of *distance* has
one meaning everywhere: positive grows the solid area, negative shrinks it.
Results come back through the overlay adapter's conversion, so they share
its winding normalisation.
"""

import logging
from collections.abc import Iterable
from typing import List

import numpy as np
import shapely
import shapely.geometry as sg
from shapely.errors import GEOSException

from ..core.errors import EngineError
from ..models.primitives import MultiPolygon, MultiRing, Polygon, Ring, Triangle
from .overlay_adapter import from_overlay, polygon_to_shapely, run_union_all

__all__ = ["to_buffer_input", "from_buffer_output", "run_buffer"]

logger = logging.getLogger(__name__)


def to_buffer_input(geometry) -> List[shapely.Geometry]:
    """Shapely geometries to offset, one per kernel component.

    Members of a :class:`MultiRing` are offset independently, so the list
    keeps them apart.  A :class:`MultiPolygon` is one area: its members are
    dissolved and offset together, so growth that closes the gap between
    two members merges them.
    """
    if isinstance(geometry, Triangle):
        geometry = geometry.to_ring()
    if isinstance(geometry, Ring):
        polygons: Iterable[Polygon] = [geometry.to_polygon()]
    elif isinstance(geometry, Polygon):
        polygons = [geometry]
    elif isinstance(geometry, MultiRing):
        polygons = [r.to_polygon() for r in geometry]
    elif isinstance(geometry, MultiPolygon):
        polygons = list(geometry)
    else:
        raise TypeError(f"Cannot buffer {type(geometry).__name__}")

    out = []
    for polygon in polygons:
        shp = polygon_to_shapely(polygon.orient_default())
        if shp is not None:
            out.append(shapely.orient_polygons(shp, exterior_cw=False))
    if isinstance(geometry, MultiPolygon) and len(out) > 1:
        return [shapely.orient_polygons(run_union_all(out), exterior_cw=False)]
    return out


def run_buffer(
        polygons: List[sg.Polygon],
        distance: float,
        join_style: str = "mitre",
        mitre_limit: float = 10.0,
        quad_segs: int = 8,
) -> List[shapely.Geometry]:
    """Offset every polygon by *distance* (positive = outward)."""
    try:
        return [
            shapely.buffer(
                p,
                distance,
                quad_segs=quad_segs,
                join_style=join_style,
                mitre_limit=mitre_limit,
            )
            for p in polygons
        ]
    except GEOSException as e:
        logger.error(f"Buffer engine failed for distance {distance}: {e}")
        raise EngineError(f"Buffer engine failed for distance {distance}: {e}") from e


def from_buffer_output(results: List[shapely.Geometry], dtype=np.float64) -> MultiPolygon:
    """Concatenate the offset components into one kernel MultiPolygon."""
    polygons = []
    for geom in results:
        polygons.extend(from_overlay(geom, dtype=dtype))
    return MultiPolygon(polygons)
