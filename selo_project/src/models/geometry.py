from __future__ import annotations

"""selo_project.src.models.geometry

Tagged wrapper over every primitive kind, plus a dimension-tagged variant
for consumers that handle 2-D and 3-D geometry through one channel
(serialisers, debug viewers).
"""

import enum
from dataclasses import dataclass
from typing import Callable, Union

from .primitives import (
    Line,
    LineString,
    MultiLineString,
    MultiPolygon,
    MultiRing,
    Polygon,
    Ring,
    Triangle,
    layout,
)

Primitive = Union[Line, LineString, MultiLineString, Triangle, Ring, MultiRing, Polygon, MultiPolygon]


class GeometryKind(enum.Enum):
    LINE = "line"
    LINE_STRING = "line_string"
    MULTI_LINE_STRING = "multi_line_string"
    TRIANGLE = "triangle"
    RING = "ring"
    MULTI_RING = "multi_ring"
    POLYGON = "polygon"
    MULTI_POLYGON = "multi_polygon"


_KIND_BY_TYPE = {
    Line: GeometryKind.LINE,
    LineString: GeometryKind.LINE_STRING,
    MultiLineString: GeometryKind.MULTI_LINE_STRING,
    Triangle: GeometryKind.TRIANGLE,
    Ring: GeometryKind.RING,
    MultiRing: GeometryKind.MULTI_RING,
    Polygon: GeometryKind.POLYGON,
    MultiPolygon: GeometryKind.MULTI_POLYGON,
}


@dataclass(frozen=True, slots=True)
class Geometry:
    """A primitive together with its kind tag."""

    kind: GeometryKind
    value: Primitive

    @classmethod
    def of(cls, value: Primitive) -> "Geometry":
        """Wrap *value*, deriving the tag from its type."""
        try:
            kind = _KIND_BY_TYPE[type(value)]
        except KeyError as e:
            raise TypeError(f"Not a geometry primitive: {type(value).__name__}") from e
        return cls(kind, value)

    @property
    def dim(self) -> int:
        return layout(self.value)[1]

    def map(self, fn: Callable[[Primitive], Primitive]) -> "Geometry":
        return Geometry.of(fn(self.value))

    def lines(self):
        return self.value.lines()


@dataclass(frozen=True, slots=True)
class DynamicGeometry:
    """A :class:`Geometry` tagged with its dimension (2 or 3)."""

    dim: int
    geometry: Geometry

    @classmethod
    def of(cls, value: Primitive) -> "DynamicGeometry":
        geometry = Geometry.of(value)
        return cls(geometry.dim, geometry)
