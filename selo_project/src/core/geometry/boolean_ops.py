#!/usr/bin/env python3
"""Boolean combination of 2-D polygonal areas.

Operands may be :class:`Ring`, :class:`Triangle`, :class:`Polygon` or
:class:`MultiPolygon`.  Results are true set operations returned as a
:class:`MultiPolygon` in the precision of the operands and wound like the
first operand's exterior (counter-clockwise when it is degenerate).

Each exact operation has an ``*_approx`` twin taking an explicit tolerance.
Those grow or shrink the operands by the tolerance before the exact
operation and undo it on the result, which suppresses slivers and merges
features closer than about twice the tolerance.  There is no default
tolerance.
"""

import logging
from typing import Iterable, Optional

import numpy as np

from ...models.primitives import MultiPolygon, Polygon, Ring, Triangle, layout
from ...services.settings_service import KernelSettings
from ...tools.overlay_adapter import (
    from_overlay,
    ring_to_shapely,
    run_overlay,
    run_union_all,
    to_overlay,
)
from ..errors import DimensionMismatchError, EngineError
from ..vector import check_compatible
from .buffer import engine_offset, restore_winding
from .orientation import winding_sign

__all__ = [
    "union",
    "intersection",
    "difference",
    "union_approx",
    "intersection_approx",
    "difference_approx",
    "union_all",
    "to_multipolygon",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def to_multipolygon(geometry) -> MultiPolygon:
    """Wrap any polygonal operand as a MultiPolygon without touching its winding."""
    if isinstance(geometry, MultiPolygon):
        return geometry
    if isinstance(geometry, Polygon):
        return geometry.to_multi()
    if isinstance(geometry, Triangle):
        return geometry.to_polygon().to_multi()
    if isinstance(geometry, Ring):
        return geometry.to_polygon().to_multi()
    raise TypeError(f"Unsupported boolean operand: {type(geometry).__name__}")


def _is_empty(geometry) -> bool:
    return to_multipolygon(geometry).is_empty()


def _common_dtype(a, b) -> np.dtype:
    dtype_a, dim_a = layout(a)
    dtype_b, dim_b = layout(b)
    if dim_a != 2 or dim_b != 2:
        raise DimensionMismatchError("Boolean operations are defined on 2-D geometry only")
    # Empty operands carry a placeholder precision
    if _is_empty(a):
        dtype_a = None
    if _is_empty(b):
        dtype_b = None
    if dtype_a is not None and dtype_b is not None:
        check_compatible(np.empty((0, 2), dtype_a), np.empty((0, 2), dtype_b))
    return dtype_a or dtype_b or np.dtype(np.float64)


def _empty_result(op: str, a, b) -> Optional[MultiPolygon]:
    """Short-circuit results for empty operands, ``None`` when both are non-empty."""
    a_empty, b_empty = _is_empty(a), _is_empty(b)
    if not (a_empty or b_empty):
        return None
    if op == "union":
        return to_multipolygon(b) if a_empty else to_multipolygon(a)
    if op == "intersection":
        return MultiPolygon()
    # difference
    return MultiPolygon() if a_empty else to_multipolygon(a)


def _exact(op: str, a, b) -> MultiPolygon:
    dtype = _common_dtype(a, b)
    shortcut = _empty_result(op, a, b)
    if shortcut is not None:
        logger.debug(f"{op}: empty operand, skipping engine")
        return shortcut

    sign = winding_sign(a)
    raw = run_overlay(op, to_overlay(a), to_overlay(b))
    result = from_overlay(raw, dtype=dtype)
    logger.debug(f"{op}: {len(result)} polygon(s)")
    return restore_winding(result, sign)


def _approx(
        op: str,
        a,
        b,
        tolerance: float,
        grow_a: float,
        grow_b: float,
        grow_result: float,
        settings: Optional[KernelSettings] = None,
) -> MultiPolygon:
    if tolerance < 0:
        raise ValueError(f"Tolerance must be non-negative, got {tolerance}")
    dtype = _common_dtype(a, b)
    shortcut = _empty_result(op, a, b)
    if shortcut is not None:
        return shortcut

    sign = winding_sign(a)
    lhs = engine_offset(to_overlay(a), grow_a * tolerance, settings)
    rhs = engine_offset(to_overlay(b), grow_b * tolerance, settings)
    raw = engine_offset(run_overlay(op, lhs, rhs), grow_result * tolerance, settings)
    result = from_overlay(raw, dtype=dtype)
    logger.debug(f"{op} (tolerance {tolerance}): {len(result)} polygon(s)")
    return restore_winding(result, sign)


# ---------------------------------------------------------------------------
# Exact operations
# ---------------------------------------------------------------------------

def union(a, b) -> MultiPolygon:
    """Area covered by *a* or *b*."""
    return _exact("union", a, b)


def intersection(a, b) -> MultiPolygon:
    """Area covered by both *a* and *b*."""
    return _exact("intersection", a, b)


def difference(a, b) -> MultiPolygon:
    """Area of *a* not covered by *b*."""
    return _exact("difference", a, b)


# ---------------------------------------------------------------------------
# Approximate operations
# ---------------------------------------------------------------------------

def union_approx(a, b, tolerance: float, settings: Optional[KernelSettings] = None) -> MultiPolygon:
    """Union that also closes gaps narrower than about ``2 * tolerance``.

    Both operands grow by *tolerance*, are united, and the result shrinks
    back by *tolerance*.
    """
    return _approx("union", a, b, tolerance, 1.0, 1.0, -1.0, settings)


def intersection_approx(a, b, tolerance: float, settings: Optional[KernelSettings] = None) -> MultiPolygon:
    """Intersection that drops overlaps thinner than about ``2 * tolerance``.

    Both operands shrink by *tolerance*, are intersected, and the result
    grows back by *tolerance*.
    """
    return _approx("intersection", a, b, tolerance, -1.0, -1.0, 1.0, settings)


def difference_approx(a, b, tolerance: float, settings: Optional[KernelSettings] = None) -> MultiPolygon:
    """Difference that drops slivers of *a* along the boundary of *b*.

    *a* shrinks and *b* grows by *tolerance* before subtracting; the result
    grows back by *tolerance*, which restores boundaries far from *b*.
    """
    return _approx("difference", a, b, tolerance, -1.0, 1.0, 1.0, settings)


# ---------------------------------------------------------------------------
# Many-way union
# ---------------------------------------------------------------------------

def union_all(rings: Iterable[Ring]) -> MultiPolygon:
    """Dissolve any number of rings into one MultiPolygon (CCW).

    If the engine rejects the input the rings are returned unmerged, one
    polygon each.
    """
    rings = list(rings)
    if not rings:
        return MultiPolygon()
    dtype = next((r.dtype for r in rings if len(r)), np.dtype(np.float64))
    parts = [p for p in (ring_to_shapely(r) for r in rings) if p is not None]
    try:
        merged = run_union_all(parts)
    except EngineError as e:
        logger.warning(f"union_all fell back to {len(rings)} unmerged rings: {e}")
        return MultiPolygon(Polygon(r) for r in rings)
    result = from_overlay(merged, dtype=dtype)
    logger.info(f"Merged {len(rings)} rings into {len(result)} polygon(s)")
    return result
