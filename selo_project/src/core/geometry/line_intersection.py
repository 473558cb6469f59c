#!/usr/bin/env python3
"""Tolerance-aware classification of 2-D segment intersections.

:func:`line_intersection` reports one of five outcomes:

* :class:`Simple` - the supporting lines cross; each segment's parameter at
  the crossing is classified by :class:`IntersectionKind`.
* :class:`CollinearOverlap` - collinear with a shared sub-segment longer
  than the tolerance.
* :class:`CollinearTouch` - collinear, meeting in a single point.
* :class:`CollinearDisjoint` - collinear without contact.
* :class:`ParallelNonCollinear` - parallel, offset from each other.

The bands are fixed: a parameter below ``-tolerance`` is outside the source
end, above ``1 + tolerance`` outside the destination end, anything in
between counts as inside.  Near-tolerance cases are never retried.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from ...models.primitives import Line
from ..errors import DimensionMismatchError, InvalidGeometryError
from ..vector import abs_diff_eq, check_compatible, wedge

__all__ = [
    "Band",
    "IntersectionKind",
    "LineIntersection",
    "Simple",
    "CollinearOverlap",
    "CollinearTouch",
    "CollinearDisjoint",
    "ParallelNonCollinear",
    "line_intersection",
    "intersect_line_point",
    "line_intersections",
    "first_line_intersection",
    "intersection_points",
    "first_intersection_point",
]

logger = logging.getLogger(__name__)

# Parallelism and collinearity are judged against a looser bound than the
# band classification.
RELAXED_FACTOR = 10.0


class Band(enum.Enum):
    INSIDE = "inside"
    OUTSIDE_SRC = "outside_src"
    OUTSIDE_DST = "outside_dst"


@dataclass(frozen=True, slots=True)
class IntersectionKind:
    """Where a crossing lies relative to one segment.

    Attributes:
        band: Inside the segment or beyond one of its ends.
        scalar: Segment parameter of the crossing (0 = src, 1 = dst).

    """

    band: Band
    scalar: float

    @classmethod
    def classify(cls, scalar: float, tolerance: float) -> "IntersectionKind":
        if scalar < -tolerance:
            return cls(Band.OUTSIDE_SRC, scalar)
        if scalar > 1.0 + tolerance:
            return cls(Band.OUTSIDE_DST, scalar)
        return cls(Band.INSIDE, scalar)

    def is_endpoint(self, tolerance: float) -> bool:
        return abs(self.scalar) <= tolerance or abs(self.scalar - 1.0) <= tolerance

    def touches_segment(self) -> bool:
        return self.band is Band.INSIDE

    def is_true_intersection(self) -> bool:
        return self.band is Band.INSIDE and 0.0 < self.scalar < 1.0


class LineIntersection:
    """Base class of the five intersection outcomes."""

    __slots__ = ()

    def intersect(self) -> bool:
        """Segments share at least one point (crossing, touch or overlap)."""
        return False

    def is_true_intersection(self) -> bool:
        """Proper crossing strictly inside both segments."""
        return False

    def intersect_exclude_endpoints(self, tolerance: float) -> bool:
        """Proper crossing at least *tolerance* (in parameter space) away from all endpoints."""
        return False

    def pos(self) -> Optional[np.ndarray]:
        """A representative shared point, ``None`` if the segments do not meet."""
        return None


@dataclass(frozen=True, slots=True, eq=False)
class Simple(LineIntersection):
    point: np.ndarray
    kind_a: IntersectionKind
    kind_b: IntersectionKind

    def intersect(self) -> bool:
        return self.kind_a.touches_segment() and self.kind_b.touches_segment()

    def is_true_intersection(self) -> bool:
        return self.kind_a.is_true_intersection() and self.kind_b.is_true_intersection()

    def intersect_exclude_endpoints(self, tolerance: float) -> bool:
        # Scalars are segment parameters, so the margin shrinks with segment length
        if not (self.kind_a.touches_segment() and self.kind_b.touches_segment()):
            return False
        a, b = self.kind_a.scalar, self.kind_b.scalar
        return tolerance < a < 1.0 - tolerance and tolerance < b < 1.0 - tolerance

    def pos(self) -> Optional[np.ndarray]:
        return self.point if self.intersect() else None


@dataclass(frozen=True, slots=True)
class CollinearOverlap(LineIntersection):
    line: Line

    def intersect(self) -> bool:
        return True

    def pos(self) -> Optional[np.ndarray]:
        return self.line.center()


@dataclass(frozen=True, slots=True, eq=False)
class CollinearTouch(LineIntersection):
    point: np.ndarray

    def intersect(self) -> bool:
        return True

    def pos(self) -> Optional[np.ndarray]:
        return self.point


@dataclass(frozen=True, slots=True)
class CollinearDisjoint(LineIntersection):
    pass


@dataclass(frozen=True, slots=True)
class ParallelNonCollinear(LineIntersection):
    pass


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

def _require_segment(line: Line, name: str) -> None:
    if line.dim != 2:
        raise DimensionMismatchError(f"Segment intersection is 2-D only, {name} is {line.dim}-D")
    if np.array_equal(line.src, line.dst):
        raise InvalidGeometryError(f"Segment {name} has zero length: {line!r}")


def _collinear(a: Line, b: Line, r: np.ndarray, tolerance) -> LineIntersection:
    # Distances along a's unit direction rather than raw parameters, which
    # lose precision when a is very short.
    ssn_src = a.dtype.type(0)
    ssn_dst = a.scalar_of_normed(a.dst)
    osn_src = a.scalar_of_normed(a.project(b.src))
    osn_dst = a.scalar_of_normed(a.project(b.dst))
    if osn_src > osn_dst:
        osn_src, osn_dst = osn_dst, osn_src

    if osn_src > ssn_dst + tolerance or osn_dst < ssn_src - tolerance:
        return CollinearDisjoint()
    if abs(osn_src - ssn_dst) <= tolerance:
        return CollinearTouch(a.dst)
    if abs(osn_dst - ssn_src) <= tolerance:
        return CollinearTouch(a.src)

    overlap_src = r * max(a.dtype.type(0), osn_src / ssn_dst) + a.src
    overlap_dst = r * min(a.dtype.type(1), osn_dst / ssn_dst) + a.src
    if abs_diff_eq(overlap_src, overlap_dst, tolerance):
        # Shared stretch no longer than the tolerance: a single contact point
        return CollinearTouch((overlap_src + overlap_dst) * a.dtype.type(0.5))
    return CollinearOverlap(Line(overlap_src, overlap_dst))


def line_intersection(a: Line, b: Line, tolerance: float) -> LineIntersection:
    """Classify how segment *a* meets segment *b*.

    Args:
        a: First segment; its parameter is reported as ``kind_a``.
        b: Second segment; its parameter is reported as ``kind_b``.
        tolerance: Absolute tolerance, also used (relaxed tenfold) for the
            parallel and collinear tests.

    Returns:
        LineIntersection: One of the five outcome classes.

    Raises:
        InvalidGeometryError: If either segment has zero length.
        PrecisionMismatchError: If the segments use different float types.

    """
    _require_segment(a, "a")
    _require_segment(b, "b")
    check_compatible(a.points, b.points)

    tol = a.dtype.type(tolerance)
    relaxed = tol * a.dtype.type(RELAXED_FACTOR)
    r = a.to_dst()
    s = b.to_dst()
    det = wedge(r, s)
    offset = b.src - a.src

    if abs(det) <= relaxed:
        if abs(wedge(offset, r)) > relaxed:
            return ParallelNonCollinear()
        return _collinear(a, b, r, tol)

    t = wedge(offset, s) / det
    u = wedge(offset, r) / det
    return Simple(
        r * t + a.src,
        IntersectionKind.classify(float(t), float(tol)),
        IntersectionKind.classify(float(u), float(tol)),
    )


def intersect_line_point(a: Line, b: Line, tolerance: float = 0.0) -> Optional[np.ndarray]:
    """Crossing point of two segments if they properly cross, else ``None``."""
    result = line_intersection(a, b, tolerance)
    if result.is_true_intersection():
        return result.pos()
    return None


# ---------------------------------------------------------------------------
# Whole primitives
# ---------------------------------------------------------------------------

def line_intersections(a, b, tolerance: float) -> Iterator[Tuple[Line, Line, LineIntersection]]:
    """Every pair of edges of *a* and *b* that meet, with its classification.

    *a* and *b* are any primitives with edges (lines, line strings, rings,
    polygons, triangles and their multi forms).  Pairs are visited in edge
    order of *a*, then of *b*; touches and overlaps are reported as well as
    proper crossings.
    """
    edges_b = b.lines()
    for line_a in a.lines():
        for line_b in edges_b:
            result = line_intersection(line_a, line_b, tolerance)
            if result.intersect():
                yield line_a, line_b, result


def first_line_intersection(a, b, tolerance: float) -> Optional[Tuple[Line, Line, LineIntersection]]:
    """First meeting edge pair of :func:`line_intersections`, ``None`` if disjoint."""
    return next(line_intersections(a, b, tolerance), None)


def intersection_points(a, b, tolerance: float) -> Iterator[np.ndarray]:
    """Points where an edge of *a* properly crosses an edge of *b*.

    Vertex touches and collinear overlaps are not crossings and are skipped.

    Example:
        >>> a = Ring([(-1, -1), (1, -1), (1, 1), (-1, 1)])
        >>> b = Ring([(0, 0), (2, 0), (2, 2), (0, 2)])
        >>> [tuple(p) for p in intersection_points(a, b, 1e-6)]
        [(1.0, 0.0), (0.0, 1.0)]

    """
    for _, _, result in line_intersections(a, b, tolerance):
        if result.is_true_intersection():
            yield result.pos()


def first_intersection_point(a, b, tolerance: float) -> Optional[np.ndarray]:
    """First proper crossing of :func:`intersection_points`, ``None`` if there is none."""
    return next(intersection_points(a, b, tolerance), None)
