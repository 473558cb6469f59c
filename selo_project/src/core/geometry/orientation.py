"""Signed area, normals and winding helpers.

A ring's *area* is half the sum of the wedge products of consecutive
points.  In 2-D this is a signed scalar (positive = counter-clockwise); in
3-D it is a vector whose direction is the ring normal and whose length is
the enclosed area.  Primitives call into these helpers from their
``area()``/``normal()``/``orient()`` methods.
"""

from __future__ import annotations

import logging

import numpy as np

from ..vector import abs_diff_eq, dot, normalize, wedge

logger = logging.getLogger(__name__)


def zero_area(dim: int, dtype) -> np.ndarray | np.floating:
    """Neutral element for area sums of the given layout."""
    if dim == 2:
        return np.dtype(dtype).type(0)
    return np.zeros(3, dtype=dtype)


def ring_area(points: np.ndarray):
    """Generalised signed area of the closed chain *points* (no closing duplicate)."""
    if len(points) < 3:
        return zero_area(points.shape[1], points.dtype)
    # Measured relative to the first point to keep magnitudes small
    rel = points - points[0]
    half = points.dtype.type(0.5)
    return wedge(rel[:-1], rel[1:]).sum(axis=0) * half


def area_to_normal(area):
    """Turn a generalised area into a normal: a sign in 2-D, a unit vector in 3-D."""
    if np.ndim(area) == 0:
        return np.sign(area)
    return normalize(area)


def points_normal(points: np.ndarray):
    return area_to_normal(ring_area(points))


def is_aligned(normal, direction) -> bool:
    """``True`` unless *normal* points against *direction*.

    A zero normal (degenerate ring) counts as aligned, so orienting a
    degenerate ring never flips it.
    """
    if np.ndim(normal) == 0:
        return bool(normal * direction >= 0)
    normal = np.asarray(normal)
    return bool(dot(normal, np.asarray(direction, dtype=normal.dtype)) >= 0)


def same_orientation(a, b, tolerance: float = 0.0) -> bool:
    """Compare the winding of two primitives.

    Args:
        a: Primitive exposing ``normal()``.
        b: Primitive exposing ``normal()``.
        tolerance: Allowed distance between 3-D unit normals. Ignored in
            2-D where normals are exact signs.

    Returns:
        bool: Whether both primitives wind the same way.

    """
    na, nb = a.normal(), b.normal()
    if np.ndim(na) == 0:
        return bool(na == nb)
    if tolerance > 0:
        return abs_diff_eq(na, nb, tolerance)
    return bool(np.array_equal(na, nb))


def winding_sign(geometry) -> float:
    """+1.0 for counter-clockwise 2-D input, -1.0 for clockwise.

    Polygons report the winding of their exterior.  Degenerate or empty
    geometry reports +1.0, the kernel default.
    """
    exterior = getattr(geometry, "exterior", None)
    if exterior is not None:
        area = exterior.area()
    elif hasattr(geometry, "polygons"):
        first = next((p for p in geometry.polygons if len(p.exterior) >= 3), None)
        area = first.exterior.area() if first is not None else 0.0
    else:
        area = geometry.area()
    return -1.0 if float(area) < 0 else 1.0
