#!/usr/bin/env python3
"""Splitting of rings that run along the same edge twice.

Overlay engines and hand-drawn input sometimes produce an exterior ring that
walks an edge forwards and later backwards (a "bowtie" glued along a full
edge).  :func:`split_ring_polygon` cuts such a ring at the doubled edge into
two rings, repeating until no doubled edge is left.
"""

import logging
from typing import List, Optional

import numpy as np

from ...models.primitives import MultiPolygon, MultiRing, Polygon, Ring
from .contains import is_containing

__all__ = ["split_ring_polygon", "find_double_edge"]

logger = logging.getLogger(__name__)


def _edge_key(a: np.ndarray, b: np.ndarray) -> frozenset:
    return frozenset((a.tobytes(), b.tobytes()))


def find_double_edge(ring: Ring) -> Optional[int]:
    """Index of the second traversal of the first doubled edge, if any.

    Edge ``i`` runs from point ``i`` to point ``i + 1`` (wrapping).  Both
    directions count as the same edge.
    """
    pts = ring.points
    n = len(pts)
    seen = set()
    for i in range(n):
        key = _edge_key(pts[i], pts[(i + 1) % n])
        if key in seen:
            return i
        seen.add(key)
    return None


def _split_at(ring: Ring, j: int) -> tuple[Ring, Ring]:
    """Cut *ring* around its edge ``j``.

    The first ring keeps every point except the doubled edge's endpoints
    and bridges the gap directly; the second is the quadrilateral from the
    point before the edge to the point after it.
    """
    pts = ring.points
    n = len(pts)
    cut = {j % n, (j + 1) % n}
    keep = [pts[i] for i in range(n) if i not in cut]
    loop = [pts[(j + k) % n] for k in (-1, 0, 1, 2)]
    return Ring(np.asarray(keep)), Ring(np.asarray(loop))


def _assign_holes(pieces: List[Polygon], holes: MultiRing) -> List[Polygon]:
    buckets: List[list] = [[] for _ in pieces]
    for hole in holes:
        if len(hole) == 0:
            continue
        for idx, piece in enumerate(pieces):
            if is_containing(piece.exterior, hole.points[0]):
                buckets[idx].append(hole)
                break
        else:
            logger.warning("Dropping hole that lies outside every split piece")
    return [Polygon(p.exterior, MultiRing(b)) for p, b in zip(pieces, buckets)]


def split_ring_polygon(polygon: Polygon) -> MultiPolygon:
    """Split *polygon* wherever its exterior traverses an edge twice.

    Args:
        polygon: 2-D polygon whose exterior may double back over an edge.

    Returns:
        MultiPolygon: The input unchanged (as a single member) when it has
        no doubled edge, otherwise the split pieces in traversal order.
        Holes are handed to the piece containing them.

    """
    pieces: List[Polygon] = []
    # Explicit stack instead of recursion; LIFO keeps the depth-first order
    stack = [polygon.exterior]
    while stack:
        ring = stack.pop()
        j = find_double_edge(ring)
        # Both halves must shrink, a quadrilateral cannot be cut further
        if j is None or len(ring) <= 4:
            pieces.append(Polygon(ring))
            continue
        first, second = _split_at(ring, j)
        logger.debug(f"Split ring of {len(ring)} points into {len(first)} + {len(second)}")
        stack.append(second)
        stack.append(first)

    if len(pieces) == 1:
        return polygon.to_multi()
    return MultiPolygon(_assign_holes(pieces, polygon.interiors))
