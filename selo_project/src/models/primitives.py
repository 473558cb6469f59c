"""Immutable geometry primitives.

Every primitive wraps read-only numpy coordinate arrays of shape ``(N, D)``
(``D`` = 2 or 3, dtype float32 or float64).  One implementation serves all
four combinations; the layout travels with the arrays.

Construction never fails on degenerate input.  A ring with fewer than three
points, or a polygon with an empty exterior, is a valid value that
downstream operations turn into an empty result.

Canonical forms:

* :class:`LineString` and :class:`Ring` drop consecutive identical points.
* :class:`Ring` never stores the duplicated closing point; the closing edge
  is implicit (see :meth:`Ring.to_linestring` for explicit closure).
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..core.errors import InvalidGeometryError
from ..core.geometry import orientation
from ..core.vector import (
    abs_diff_eq,
    as_points,
    check_compatible,
    dot,
    freeze,
    norm,
    normalize,
)

__all__ = [
    "Line",
    "LineString",
    "MultiLineString",
    "Ring",
    "MultiRing",
    "Polygon",
    "MultiPolygon",
    "Triangle",
    "MultiTriangle",
    "layout",
    "point_arrays",
    "polygons_of",
]

logger = logging.getLogger(__name__)

PointMap = Callable[[np.ndarray], np.ndarray]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _dedup_exact(points: np.ndarray) -> np.ndarray:
    if len(points) < 2:
        return points
    keep = np.ones(len(points), dtype=bool)
    keep[1:] = np.any(points[1:] != points[:-1], axis=1)
    return points[keep]


def _dedup_approx(points: np.ndarray, tolerance: float) -> np.ndarray:
    if len(points) < 2:
        return points
    kept = [points[0]]
    for p in points[1:]:
        if not abs_diff_eq(p, kept[-1], tolerance):
            kept.append(p)
    return np.asarray(kept, dtype=points.dtype)


def _coords(points: np.ndarray) -> List[Tuple[float, ...]]:
    return [tuple(float(c) for c in p) for p in points]


def _layout_of(arrays: Iterable[np.ndarray], fallback: np.ndarray) -> Tuple[np.dtype, int]:
    """Return the shared (dtype, dim) of the non-empty arrays, checking consistency."""
    reference = None
    for arr in arrays:
        if len(arr) == 0:
            continue
        if reference is None:
            reference = arr
        else:
            check_compatible(reference, arr)
    if reference is None:
        reference = fallback
    return reference.dtype, reference.shape[1]


class _Primitive:
    """Shared value semantics: equality, hashing and layout accessors."""

    __slots__ = ()

    def _key(self) -> tuple:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    @staticmethod
    def _array_key(arr: np.ndarray) -> tuple:
        return (arr.dtype.str, arr.shape, arr.tobytes())


# ---------------------------------------------------------------------------
# Line
# ---------------------------------------------------------------------------

class Line(_Primitive):
    """A directed segment from :attr:`src` to :attr:`dst`."""

    __slots__ = ("points",)

    def __init__(self, src, dst, dtype=None):
        pts = as_points([np.asarray(src), np.asarray(dst)], dtype=dtype)
        self.points = pts

    @classmethod
    def checked(cls, src, dst, dtype=None) -> "Line":
        """Build a line, rejecting zero-length segments."""
        line = cls(src, dst, dtype=dtype)
        if np.array_equal(line.points[0], line.points[1]):
            raise InvalidGeometryError(f"Line endpoints are identical: {line.points[0].tolist()}")
        return line

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Line":
        return cls(arr[0], arr[1], dtype=arr.dtype)

    def _key(self) -> tuple:
        return self._array_key(self.points)

    def __repr__(self) -> str:
        return f"Line({self.points[0].tolist()}, {self.points[1].tolist()})"

    @property
    def src(self) -> np.ndarray:
        return self.points[0]

    @property
    def dst(self) -> np.ndarray:
        return self.points[1]

    @property
    def dtype(self) -> np.dtype:
        return self.points.dtype

    @property
    def dim(self) -> int:
        return self.points.shape[1]

    def center(self) -> np.ndarray:
        return (self.src + self.dst) * self.dtype.type(0.5)

    def to_dst(self) -> np.ndarray:
        """Vector from src to dst."""
        return self.dst - self.src

    def dir(self) -> np.ndarray:
        """Unit direction vector (zero for a degenerate line)."""
        return normalize(self.to_dst())

    def length(self):
        return norm(self.to_dst())

    def pos_scaled(self, t: float) -> np.ndarray:
        """Point at parameter *t* (0 = src, 1 = dst)."""
        return self.src + self.to_dst() * self.dtype.type(t)

    def scalar_of(self, p: np.ndarray):
        """Parameter of the orthogonal projection of *p* (0 = src, 1 = dst)."""
        d = self.to_dst()
        return dot(p - self.src, d) / dot(d, d)

    def scalar_of_normed(self, p: np.ndarray):
        """Signed distance from src of the projection of *p* along the line."""
        return dot(p - self.src, self.dir())

    def project(self, p: np.ndarray) -> np.ndarray:
        """Orthogonal projection of *p* onto the infinite line."""
        return self.src + self.dir() * self.scalar_of_normed(p)

    def lines(self) -> List["Line"]:
        return [self]

    def flip(self) -> "Line":
        return Line(self.dst, self.src)

    def map_points(self, fn: PointMap) -> "Line":
        return Line.from_array(as_points(fn(self.points)))

    def to_coords(self) -> List[Tuple[float, ...]]:
        return _coords(self.points)


# ---------------------------------------------------------------------------
# LineString
# ---------------------------------------------------------------------------

class LineString(_Primitive):
    """An open polyline; consecutive duplicates are removed."""

    __slots__ = ("points",)

    def __init__(self, points=(), dtype=None, dim: Optional[int] = None):
        self.points = freeze(_dedup_exact(as_points(points, dtype=dtype, dim=dim)))

    def _key(self) -> tuple:
        return self._array_key(self.points)

    def __repr__(self) -> str:
        return f"LineString({self.points.tolist()})"

    def __len__(self) -> int:
        return len(self.points)

    @property
    def dtype(self) -> np.dtype:
        return self.points.dtype

    @property
    def dim(self) -> int:
        return self.points.shape[1]

    def closed(self) -> bool:
        """``True`` when the first and last points coincide."""
        return len(self.points) > 1 and bool(np.array_equal(self.points[0], self.points[-1]))

    def to_ring(self) -> Optional["Ring"]:
        """The ring enclosed by a closed line string, ``None`` if it is open."""
        if not self.closed():
            return None
        return Ring(self.points)

    def close(self) -> "LineString":
        """Return a copy with the first point appended when the string is open."""
        if len(self.points) == 0 or self.closed():
            return self
        return LineString(np.vstack([self.points, self.points[:1]]))

    def lines(self) -> List[Line]:
        return [Line.from_array(self.points[i:i + 2]) for i in range(len(self.points) - 1)]

    def flip(self) -> "LineString":
        return LineString(self.points[::-1])

    def dedup_approx(self, tolerance: float) -> "LineString":
        return LineString(_dedup_approx(self.points, tolerance), dtype=self.dtype, dim=self.dim)

    def map_points(self, fn: PointMap) -> "LineString":
        return LineString(fn(self.points))

    def to_coords(self) -> List[Tuple[float, ...]]:
        return _coords(self.points)


class MultiLineString(_Primitive):
    __slots__ = ("line_strings",)

    def __init__(self, line_strings: Iterable = ()):
        self.line_strings: Tuple[LineString, ...] = tuple(
            ls if isinstance(ls, LineString) else LineString(ls) for ls in line_strings
        )

    def _key(self) -> tuple:
        return tuple(ls._key() for ls in self.line_strings)

    def __repr__(self) -> str:
        return f"MultiLineString({list(self.line_strings)!r})"

    def __len__(self) -> int:
        return len(self.line_strings)

    def __iter__(self) -> Iterator[LineString]:
        return iter(self.line_strings)

    def lines(self) -> List[Line]:
        return [line for ls in self.line_strings for line in ls.lines()]

    def flip(self) -> "MultiLineString":
        return MultiLineString(ls.flip() for ls in self.line_strings)

    def dedup_approx(self, tolerance: float) -> "MultiLineString":
        return MultiLineString(ls.dedup_approx(tolerance) for ls in self.line_strings)

    def map_points(self, fn: PointMap) -> "MultiLineString":
        return MultiLineString(ls.map_points(fn) for ls in self.line_strings)

    def to_coords(self):
        return [ls.to_coords() for ls in self.line_strings]


# ---------------------------------------------------------------------------
# Ring
# ---------------------------------------------------------------------------

class Ring(_Primitive):
    """A closed chain of points stored without the closing duplicate.

    Example:
        >>> Ring([(0, 0), (1, 0), (1, 1), (0, 0)]).to_coords()
        [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]

    """

    __slots__ = ("points",)

    def __init__(self, points=(), dtype=None, dim: Optional[int] = None):
        pts = _dedup_exact(as_points(points, dtype=dtype, dim=dim))
        if len(pts) > 0 and np.array_equal(pts[0], pts[-1]):
            pts = pts[:-1]
        self.points = freeze(pts)

    def _key(self) -> tuple:
        return self._array_key(self.points)

    def __repr__(self) -> str:
        return f"Ring({self.points.tolist()})"

    def __len__(self) -> int:
        return len(self.points)

    @property
    def dtype(self) -> np.dtype:
        return self.points.dtype

    @property
    def dim(self) -> int:
        return self.points.shape[1]

    @property
    def points_open(self) -> np.ndarray:
        return self.points

    def iter_points_closed(self) -> np.ndarray:
        """Points with the first one repeated at the end."""
        if len(self.points) == 0:
            return self.points
        return freeze(np.vstack([self.points, self.points[:1]]))

    def is_empty(self) -> bool:
        return len(self.points) == 0

    # --- Conversions -------------------------------------------------------
    def to_linestring(self) -> LineString:
        return LineString(self.iter_points_closed(), dtype=self.dtype, dim=self.dim)

    def to_polygon(self) -> "Polygon":
        return Polygon(self)

    def to_multi(self) -> "MultiRing":
        return MultiRing([self])

    def to_coords(self) -> List[Tuple[float, ...]]:
        return _coords(self.points)

    # --- Edges -------------------------------------------------------------
    def lines(self) -> List[Line]:
        """All edges including the implicit closing edge."""
        n = len(self.points)
        if n < 2:
            return []
        return [Line.from_array(self.points[[i, (i + 1) % n]]) for i in range(n)]

    # --- Winding -----------------------------------------------------------
    def area(self):
        return orientation.ring_area(self.points)

    def normal(self):
        return orientation.area_to_normal(self.area())

    def flip(self) -> "Ring":
        return Ring(self.points[::-1])

    def orient(self, direction) -> "Ring":
        """Return the ring wound so that its normal agrees with *direction*."""
        if orientation.is_aligned(self.normal(), direction):
            return self
        return self.flip()

    def orient_default(self) -> "Ring":
        return self.orient(1.0)

    def orient_reversed(self) -> "Ring":
        return self.orient(-1.0)

    # --- Cleanup and comparison -------------------------------------------
    def dedup_approx(self, tolerance: float) -> "Ring":
        pts = _dedup_approx(self.points, tolerance)
        while len(pts) > 1 and abs_diff_eq(pts[0], pts[-1], tolerance):
            pts = pts[:-1]
        return Ring(pts, dtype=self.dtype, dim=self.dim)

    def inside_eq(self, other: "Ring") -> bool:
        """Same points in the same cyclic order, starting anywhere."""
        return self._cyclic_match(other, lambda a, b: bool(np.array_equal(a, b)))

    def inside_abs_diff_eq(self, other: "Ring", tolerance: float) -> bool:
        """Like :meth:`inside_eq` with every point compared within *tolerance*."""
        def close(a, b):
            return all(abs_diff_eq(p, q, tolerance) for p, q in zip(a, b))
        return self._cyclic_match(other, close)

    def _cyclic_match(self, other: "Ring", equal) -> bool:
        if len(self.points) != len(other.points):
            return False
        if len(self.points) == 0:
            return True
        return any(
            equal(self.points, np.roll(other.points, -shift, axis=0))
            for shift in range(len(other.points))
        )

    def center(self) -> np.ndarray:
        if len(self.points) == 0:
            return np.zeros(self.dim, dtype=self.dtype)
        return self.points.mean(axis=0, dtype=self.dtype)

    def with_point(self, index: int, point) -> Optional["Ring"]:
        """Return a copy with *point* at *index*.

        Returns ``None`` when the new point equals one of its neighbours,
        since the canonical form would silently drop it.
        """
        n = len(self.points)
        p = np.asarray(point, dtype=self.dtype)
        if n > 1:
            prev_p = self.points[(index - 1) % n]
            next_p = self.points[(index + 1) % n]
            if np.array_equal(p, prev_p) or np.array_equal(p, next_p):
                return None
        pts = np.array(self.points)
        pts[index] = p
        return Ring(pts)

    def map_points(self, fn: PointMap) -> "Ring":
        return Ring(fn(self.points))


class MultiRing(_Primitive):
    """An ordered collection of rings (holes of a polygon, or components)."""

    __slots__ = ("rings",)

    def __init__(self, rings: Iterable = (), dtype=None):
        self.rings: Tuple[Ring, ...] = tuple(
            r if isinstance(r, Ring) else Ring(r, dtype=dtype) for r in rings
        )
        _layout_of((r.points for r in self.rings), np.empty((0, 2)))

    def _key(self) -> tuple:
        return tuple(r._key() for r in self.rings)

    def __repr__(self) -> str:
        return f"MultiRing({list(self.rings)!r})"

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[Ring]:
        return iter(self.rings)

    def __getitem__(self, idx: int) -> Ring:
        return self.rings[idx]

    def iter_rings(self) -> Iterator[Ring]:
        return iter(self.rings)

    def lines(self) -> List[Line]:
        return [line for ring in self.rings for line in ring.lines()]

    def area(self):
        areas = [r.area() for r in self.rings]
        if not areas:
            return orientation.zero_area(2, np.float64)
        return sum(areas[1:], areas[0])

    def normal(self):
        return orientation.area_to_normal(self.area())

    def flip(self) -> "MultiRing":
        return MultiRing(r.flip() for r in self.rings)

    def orient(self, direction) -> "MultiRing":
        return MultiRing(r.orient(direction) for r in self.rings)

    def orient_default(self) -> "MultiRing":
        return self.orient(1.0)

    def orient_reversed(self) -> "MultiRing":
        return self.orient(-1.0)

    def dedup_approx(self, tolerance: float) -> "MultiRing":
        return MultiRing(r.dedup_approx(tolerance) for r in self.rings)

    def inside_eq(self, other: "MultiRing") -> bool:
        return len(self) == len(other) and all(a.inside_eq(b) for a, b in zip(self, other))

    def center(self) -> np.ndarray:
        if not self.rings:
            return np.zeros(2)
        return np.mean([r.center() for r in self.rings], axis=0)

    def map_points(self, fn: PointMap) -> "MultiRing":
        return MultiRing(r.map_points(fn) for r in self.rings)

    def to_coords(self):
        return [r.to_coords() for r in self.rings]


# ---------------------------------------------------------------------------
# Polygon
# ---------------------------------------------------------------------------

class Polygon(_Primitive):
    """An exterior ring with zero or more hole rings.

    Holes are expected to lie inside the exterior without crossing it; this
    is assumed, not checked.  Solid versus hole is decided by relative
    winding, see :meth:`orient`.
    """

    __slots__ = ("exterior", "interiors")

    def __init__(self, exterior=(), interiors: Iterable = (), dtype=None):
        self.exterior: Ring = exterior if isinstance(exterior, Ring) else Ring(exterior, dtype=dtype)
        hole_dtype = dtype if dtype is not None else (self.exterior.dtype if len(self.exterior) else None)
        self.interiors: MultiRing = (
            interiors if isinstance(interiors, MultiRing) else MultiRing(interiors, dtype=hole_dtype)
        )
        _layout_of((r.points for r in self.iter_rings()), self.exterior.points)

    def _key(self) -> tuple:
        return (self.exterior._key(), self.interiors._key())

    def __repr__(self) -> str:
        return f"Polygon({self.exterior!r}, {self.interiors!r})"

    @property
    def dtype(self) -> np.dtype:
        return _layout_of((r.points for r in self.iter_rings()), self.exterior.points)[0]

    @property
    def dim(self) -> int:
        return _layout_of((r.points for r in self.iter_rings()), self.exterior.points)[1]

    def is_empty(self) -> bool:
        return len(self.exterior) < 3

    def iter_rings(self) -> Iterator[Ring]:
        """Exterior first, then the holes in order."""
        yield self.exterior
        yield from self.interiors

    def lines(self) -> List[Line]:
        return self.exterior.lines() + self.interiors.lines()

    def to_multi(self) -> "MultiPolygon":
        return MultiPolygon([self])

    def area(self):
        """Sum of the signed ring areas; holes wound oppositely subtract."""
        total = self.exterior.area()
        for hole in self.interiors:
            total = total + hole.area()
        return total

    def normal(self):
        return orientation.area_to_normal(self.area())

    def flip(self) -> "Polygon":
        return Polygon(self.exterior.flip(), self.interiors.flip())

    def orient(self, direction) -> "Polygon":
        """Exterior aligned with *direction*, every hole against it."""
        return Polygon(
            self.exterior.orient(direction),
            self.interiors.orient(-np.asarray(direction)),
        )

    def orient_default(self) -> "Polygon":
        return self.orient(1.0)

    def orient_reversed(self) -> "Polygon":
        return self.orient(-1.0)

    def dedup_approx(self, tolerance: float) -> "Polygon":
        return Polygon(self.exterior.dedup_approx(tolerance), self.interiors.dedup_approx(tolerance))

    def inside_eq(self, other: "Polygon") -> bool:
        return self.exterior.inside_eq(other.exterior) and self.interiors.inside_eq(other.interiors)

    def inside_abs_diff_eq(self, other: "Polygon", tolerance: float) -> bool:
        if len(self.interiors) != len(other.interiors):
            return False
        pairs = zip(self.iter_rings(), other.iter_rings())
        return all(a.inside_abs_diff_eq(b, tolerance) for a, b in pairs)

    def center(self) -> np.ndarray:
        return self.exterior.center()

    def map_points(self, fn: PointMap) -> "Polygon":
        return Polygon(self.exterior.map_points(fn), self.interiors.map_points(fn))

    def to_coords(self):
        return [r.to_coords() for r in self.iter_rings()]


class MultiPolygon(_Primitive):
    __slots__ = ("polygons",)

    def __init__(self, polygons: Iterable = ()):
        self.polygons: Tuple[Polygon, ...] = tuple(
            p if isinstance(p, Polygon) else Polygon(*p) for p in polygons
        )

    def _key(self) -> tuple:
        return tuple(p._key() for p in self.polygons)

    def __repr__(self) -> str:
        return f"MultiPolygon({list(self.polygons)!r})"

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def __getitem__(self, idx: int) -> Polygon:
        return self.polygons[idx]

    def is_empty(self) -> bool:
        return all(p.is_empty() for p in self.polygons)

    def iter_rings(self) -> Iterator[Ring]:
        for polygon in self.polygons:
            yield from polygon.iter_rings()

    def lines(self) -> List[Line]:
        return [line for p in self.polygons for line in p.lines()]

    def area(self):
        areas = [p.area() for p in self.polygons]
        if not areas:
            return orientation.zero_area(2, np.float64)
        return sum(areas[1:], areas[0])

    def normal(self):
        return orientation.area_to_normal(self.area())

    def flip(self) -> "MultiPolygon":
        return MultiPolygon(p.flip() for p in self.polygons)

    def orient(self, direction) -> "MultiPolygon":
        return MultiPolygon(p.orient(direction) for p in self.polygons)

    def orient_default(self) -> "MultiPolygon":
        return self.orient(1.0)

    def orient_reversed(self) -> "MultiPolygon":
        return self.orient(-1.0)

    def dedup_approx(self, tolerance: float) -> "MultiPolygon":
        return MultiPolygon(p.dedup_approx(tolerance) for p in self.polygons)

    def center(self) -> np.ndarray:
        if not self.polygons:
            return np.zeros(2)
        return np.mean([p.center() for p in self.polygons], axis=0)

    def map_points(self, fn: PointMap) -> "MultiPolygon":
        return MultiPolygon(p.map_points(fn) for p in self.polygons)

    def to_coords(self):
        return [p.to_coords() for p in self.polygons]


# ---------------------------------------------------------------------------
# Triangles
# ---------------------------------------------------------------------------

class Triangle(_Primitive):
    """Three points; unlike :class:`Ring` no deduplication happens."""

    __slots__ = ("points",)

    def __init__(self, a, b, c, dtype=None):
        self.points = as_points([np.asarray(a), np.asarray(b), np.asarray(c)], dtype=dtype)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Triangle":
        return cls(arr[0], arr[1], arr[2], dtype=arr.dtype)

    def _key(self) -> tuple:
        return self._array_key(self.points)

    def __repr__(self) -> str:
        return f"Triangle({self.points.tolist()})"

    @property
    def dtype(self) -> np.dtype:
        return self.points.dtype

    @property
    def dim(self) -> int:
        return self.points.shape[1]

    def to_ring(self) -> Ring:
        return Ring(self.points)

    def to_polygon(self) -> Polygon:
        return Polygon(self.to_ring())

    def lines(self) -> List[Line]:
        return [Line.from_array(self.points[[i, (i + 1) % 3]]) for i in range(3)]

    def area(self):
        return orientation.ring_area(self.points)

    def normal(self):
        return orientation.area_to_normal(self.area())

    def flip(self) -> "Triangle":
        return Triangle.from_array(self.points[::-1])

    def orient(self, direction) -> "Triangle":
        if orientation.is_aligned(self.normal(), direction):
            return self
        return self.flip()

    def orient_default(self) -> "Triangle":
        return self.orient(1.0)

    def center(self) -> np.ndarray:
        return self.points.mean(axis=0, dtype=self.dtype)

    def map_points(self, fn: PointMap) -> "Triangle":
        return Triangle.from_array(as_points(fn(self.points)))

    def to_coords(self) -> List[Tuple[float, ...]]:
        return _coords(self.points)


class MultiTriangle(_Primitive):
    __slots__ = ("triangles",)

    def __init__(self, triangles: Iterable[Triangle] = ()):
        self.triangles: Tuple[Triangle, ...] = tuple(triangles)

    def _key(self) -> tuple:
        return tuple(t._key() for t in self.triangles)

    def __repr__(self) -> str:
        return f"MultiTriangle({list(self.triangles)!r})"

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)

    def lines(self) -> List[Line]:
        return [line for t in self.triangles for line in t.lines()]

    def area(self):
        areas = [t.area() for t in self.triangles]
        if not areas:
            return orientation.zero_area(2, np.float64)
        return sum(areas[1:], areas[0])

    def flip(self) -> "MultiTriangle":
        return MultiTriangle(t.flip() for t in self.triangles)

    def map_points(self, fn: PointMap) -> "MultiTriangle":
        return MultiTriangle(t.map_points(fn) for t in self.triangles)

    def to_coords(self):
        return [t.to_coords() for t in self.triangles]


def polygons_of(rings: Sequence[Ring]) -> MultiPolygon:
    """Wrap each ring as a hole-free polygon."""
    return MultiPolygon(Polygon(r) for r in rings)


def point_arrays(primitive) -> List[np.ndarray]:
    """All coordinate arrays held by *primitive*, in traversal order."""
    if hasattr(primitive, "points"):
        return [primitive.points]
    if hasattr(primitive, "iter_rings"):
        return [r.points for r in primitive.iter_rings()]
    members = getattr(primitive, "line_strings", None) or getattr(primitive, "triangles", ())
    return [m.points for m in members]


def layout(primitive) -> Tuple[Optional[np.dtype], int]:
    """``(dtype, dim)`` of the coordinates of *primitive*.

    Empty collections report ``(None, 2)``.
    """
    arrays = [arr for arr in point_arrays(primitive) if len(arr)]
    if not arrays:
        arrays = point_arrays(primitive)
        if arrays:
            return arrays[0].dtype, arrays[0].shape[1]
        return None, 2
    dtype, dim = _layout_of(arrays, arrays[0])
    return dtype, dim
