#!/usr/bin/env python3
"""Workplane model for the Selo kernel.

A workplane is a 3-D plane given by a unit normal and an origin on the plane.
It maps coplanar 3-D geometry onto the XY plane (and back) so the 2-D
algorithms can run on it unchanged.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from ..core.errors import InvalidGeometryError
from ..core.vector import as_points, freeze, rotation_arc

logger = logging.getLogger(__name__)

Z_AXIS = np.array([0.0, 0.0, 1.0])


def _unit_normal(normal) -> np.ndarray:
    n = np.asarray(normal, dtype=np.float64)
    if n.shape != (3,):
        raise InvalidGeometryError(f"Workplane normal must be a 3-vector, got shape {n.shape}")
    length = np.linalg.norm(n)
    if not np.all(np.isfinite(n)) or not np.isfinite(length) or length == 0.0:
        raise InvalidGeometryError(f"Cannot derive a workplane from normal {n.tolist()}")
    return n / length


class Workplane:
    """Plane (unit normal + origin) used to embed coplanar 3-D geometry.

    Instances are immutable values stored in float64 regardless of the
    precision of the geometry they embed.

    Attributes:
        normal (np.ndarray): Unit normal, shape ``(3,)``.
        origin (np.ndarray): A point on the plane, shape ``(3,)``.

    """

    __slots__ = ("normal", "origin")

    def __init__(self, normal, origin):
        o = np.array(origin, dtype=np.float64)
        if o.shape != (3,) or not np.all(np.isfinite(o)):
            raise InvalidGeometryError(f"Invalid workplane origin {o.tolist()}")
        self.normal = freeze(_unit_normal(normal))
        self.origin = freeze(o)

    def __repr__(self) -> str:
        return f"Workplane(normal={self.normal.tolist()}, origin={self.origin.tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Workplane):
            return NotImplemented
        return bool(np.array_equal(self.normal, other.normal) and np.array_equal(self.origin, other.origin))

    def __hash__(self) -> int:
        return hash((self.normal.tobytes(), self.origin.tobytes()))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_normal_and_origin(cls, normal, origin) -> "Workplane":
        return cls(normal, origin)

    @classmethod
    def from_primitive(cls, primitive) -> "Workplane":
        """Plane through the first point of *primitive*, normal from its area vector.

        Raises:
            InvalidGeometryError: If the primitive is not 3-D, is empty, or
                encloses no area (zero normal).

        """
        rings = list(primitive.iter_rings()) if hasattr(primitive, "iter_rings") else [primitive]
        first = next((r.points for r in rings if len(r.points)), None)
        if first is None:
            raise InvalidGeometryError("Cannot derive a workplane from empty geometry")
        if first.shape[1] != 3:
            raise InvalidGeometryError("Workplanes can only be derived from 3-D geometry")
        return cls(np.asarray(primitive.area(), dtype=np.float64), first[0])

    @classmethod
    def from_three_points(cls, points: Sequence) -> "Workplane":
        """Plane through three points, origin at their centroid."""
        a, b, c = (np.asarray(p, dtype=np.float64) for p in points)
        return cls(np.cross(b - a, c - a), (a + b + c) / 3.0)

    @classmethod
    def from_points(cls, points) -> "Workplane":
        """Best-fit plane through three or more roughly coplanar points.

        The normal is the average of the unit cross products at every
        vertex triple (previous, current, next), which tolerates mild
        non-planarity. The origin is the centroid.

        Raises:
            InvalidGeometryError: For fewer than three points or a
                degenerate (collinear) point set.

        """
        pts = np.asarray(as_points(points, dim=3), dtype=np.float64)
        if len(pts) < 3:
            raise InvalidGeometryError(f"A workplane needs at least 3 points, got {len(pts)}")
        prev_pts = np.roll(pts, 1, axis=0)
        next_pts = np.roll(pts, -1, axis=0)
        crosses = np.cross(pts - prev_pts, next_pts - prev_pts)
        lengths = np.linalg.norm(crosses, axis=1)
        # Collinear triples carry no direction
        valid = lengths > 0
        unit = crosses[valid] / lengths[valid][:, None]
        return cls(unit.sum(axis=0), pts.mean(axis=0))

    # ------------------------------------------------------------------
    # Canonical form
    # ------------------------------------------------------------------
    def hesse_normal_form(self) -> "Workplane":
        """Same plane with the origin moved to the point closest to (0, 0, 0)."""
        distance = float(np.dot(self.origin, self.normal))
        return Workplane(self.normal, self.normal * distance)

    def normalize(self) -> "Workplane":
        return self.hesse_normal_form()

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    def xy_projection(self) -> np.ndarray:
        """4x4 affine matrix taking the plane onto z = 0."""
        rotation = rotation_arc(self.normal, Z_AXIS)
        transformed_origin = rotation @ self.origin
        matrix = np.eye(4)
        matrix[:3, :3] = rotation
        matrix[2, 3] = -transformed_origin[2]
        return matrix

    def xy_injection(self) -> np.ndarray:
        """Inverse of :meth:`xy_projection`."""
        return np.linalg.inv(self.xy_projection())

    def xy_projection_injection(self) -> Tuple[np.ndarray, np.ndarray]:
        projection = self.xy_projection()
        return projection, np.linalg.inv(projection)

    def project_point(self, point) -> np.ndarray:
        """Orthogonal projection of *point* onto the plane."""
        p = np.asarray(point, dtype=np.float64)
        distance = float(np.dot(self.normal, p - self.origin))
        return p - distance * self.normal

    def distance_to(self, point) -> float:
        """Signed distance of *point* from the plane along the normal."""
        p = np.asarray(point, dtype=np.float64)
        return float(np.dot(self.normal, p - self.origin))
