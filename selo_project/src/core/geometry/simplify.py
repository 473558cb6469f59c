"""Point-grouping simplification.

Runs of consecutive points closer than ``eps`` to their predecessor are
collapsed into their centroid.  The run wrapping around the ring's start is
merged with the first run.  A ring left with fewer than three points has no
simplified form and yields ``None``.
"""

import logging
from typing import List, Optional

import numpy as np

from ...models.primitives import MultiPolygon, MultiRing, Polygon, Ring

__all__ = ["simplify", "simplify_ring"]

logger = logging.getLogger(__name__)


def _close(a: np.ndarray, b: np.ndarray, eps: float) -> bool:
    d = a - b
    return bool(np.dot(d, d) < eps * eps)


def simplify_ring(ring: Ring, eps: float) -> Optional[Ring]:
    pts = ring.points
    groups: List[List[np.ndarray]] = []
    for p in pts:
        # Consecutive points only; comparing against the group's last point is enough
        if groups and _close(p, groups[-1][-1], eps):
            groups[-1].append(p)
        else:
            groups.append([p])

    if len(pts) > 1 and _close(pts[0], pts[-1], eps):
        last = groups.pop()
        if groups:
            groups[0].extend(last)

    if len(groups) < 3:
        logger.debug(f"Ring of {len(pts)} points collapses to {len(groups)} group(s)")
        return None
    centroids = np.asarray([np.mean(g, axis=0) for g in groups], dtype=ring.dtype)
    return Ring(centroids)


def _simplify_multi_ring(rings: MultiRing, eps: float) -> Optional[MultiRing]:
    out = []
    for ring in rings:
        simplified = simplify_ring(ring, eps)
        if simplified is None:
            return None
        out.append(simplified)
    return MultiRing(out)


def _simplify_polygon(polygon: Polygon, eps: float) -> Optional[Polygon]:
    exterior = simplify_ring(polygon.exterior, eps)
    if exterior is None:
        return None
    # Collapsed holes vanish; the surviving holes are kept
    holes = [h for h in (simplify_ring(r, eps) for r in polygon.interiors) if h is not None]
    return Polygon(exterior, MultiRing(holes))


def simplify(geometry, eps: float):
    """Simplify a Ring, MultiRing, Polygon or MultiPolygon.

    Args:
        geometry: The primitive to simplify.
        eps: Points closer than this to their predecessor are merged.

    Returns:
        The simplified primitive of the same type, or ``None`` when it
        collapses. A collapsing hole is dropped from its polygon; any
        collapsing member makes a MultiRing or MultiPolygon collapse.

    """
    if isinstance(geometry, Ring):
        return simplify_ring(geometry, eps)
    if isinstance(geometry, MultiRing):
        return _simplify_multi_ring(geometry, eps)
    if isinstance(geometry, Polygon):
        return _simplify_polygon(geometry, eps)
    if isinstance(geometry, MultiPolygon):
        out = []
        for polygon in geometry:
            simplified = _simplify_polygon(polygon, eps)
            if simplified is None:
                return None
            out.append(simplified)
        return MultiPolygon(out)
    raise TypeError(f"Cannot simplify {type(geometry).__name__}")
