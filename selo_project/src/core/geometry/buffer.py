#!/usr/bin/env python3
"""Offsetting (buffering) of polygonal geometry.

The result is always a :class:`MultiPolygon`: growing a horseshoe can close
it into a ring with a hole and shrinking a dumbbell can split it in two.
"""

import logging
from typing import Optional

import numpy as np

from ...models.primitives import MultiPolygon, layout
from ...models.workplane import Workplane
from ...services.settings_service import KernelSettings
from ...tools.buffer_adapter import from_buffer_output, run_buffer, to_buffer_input
from ..errors import InvalidGeometryError
from .embedding import transform
from .orientation import winding_sign

__all__ = ["buffer", "engine_offset", "restore_winding"]

logger = logging.getLogger(__name__)


def _buffer_params(settings: Optional[KernelSettings]) -> dict:
    settings = settings or KernelSettings()
    return {
        "join_style": settings.buffer_join_style,
        "mitre_limit": settings.buffer_mitre_limit,
        "quad_segs": settings.buffer_quad_segs,
    }


def restore_winding(result: MultiPolygon, sign: float) -> MultiPolygon:
    """Re-wind a kernel (CCW) result to the caller's convention."""
    return result if sign > 0 else result.orient_reversed()


def engine_offset(geom, distance: float, settings: Optional[KernelSettings] = None):
    """Offset a shapely geometry in place of the engine; a zero distance is a no-op."""
    if distance == 0 or geom.is_empty:
        return geom
    return run_buffer([geom], distance, **_buffer_params(settings))[0]


def buffer(geometry, distance: float, settings: Optional[KernelSettings] = None) -> MultiPolygon:
    """Expand (positive *distance*) or shrink (negative) polygonal geometry.

    Args:
        geometry: Ring, Triangle, Polygon, MultiRing or MultiPolygon. 3-D
            input is buffered within the workplane it spans.
        distance: Offset distance, in coordinate units.
        settings: Join style, mitre limit and arc segments for the engine.
            Defaults to a fresh :class:`KernelSettings`.

    Returns:
        MultiPolygon: The offset geometry in the precision and winding of
        the input. Empty when the input is degenerate or shrinks away.

    """
    dtype, dim = layout(geometry)
    if dim == 3:
        try:
            workplane = Workplane.from_primitive(geometry)
        except InvalidGeometryError as e:
            logger.warning(f"Cannot buffer 3-D geometry without a workplane: {e}")
            return MultiPolygon()
        return transform(workplane, geometry, lambda flat: buffer(flat, distance, settings))

    dtype = dtype or np.dtype(np.float64)
    sign = winding_sign(geometry)
    polygons = to_buffer_input(geometry)
    if not polygons:
        logger.debug(f"Nothing to buffer in degenerate {type(geometry).__name__}")
        return MultiPolygon()

    result = from_buffer_output(run_buffer(polygons, distance, **_buffer_params(settings)), dtype=dtype)
    logger.debug(f"Buffered {len(polygons)} component(s) by {distance}: {len(result)} polygon(s)")
    return restore_winding(result, sign)
