"""Embedding of coplanar 3-D primitives into a workplane's 2-D frame.

``embed`` rotates the workplane onto z = 0 and drops the z coordinate;
``unembed`` restores it.  Both keep the coordinate precision of the input
primitive, the transform itself is evaluated in float64.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from ...models.primitives import layout
from ...models.workplane import Workplane
from ..errors import DimensionMismatchError

logger = logging.getLogger(__name__)


def _apply_affine(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    return points.astype(np.float64) @ matrix[:3, :3].T + matrix[:3, 3]


def embed(primitive, workplane: Workplane):
    """Project a 3-D *primitive* lying on *workplane* into 2-D coordinates.

    Args:
        primitive: Any kernel primitive with 3-D points.
        workplane: Plane the primitive (approximately) lies on.

    Returns:
        The same primitive type with 2-D points.

    Raises:
        DimensionMismatchError: If *primitive* is not 3-D.

    """
    if layout(primitive)[1] == 2:
        raise DimensionMismatchError("embed expects 3-D geometry")
    projection = workplane.xy_projection()

    def to_2d(points: np.ndarray) -> np.ndarray:
        if len(points) == 0:
            return np.empty((0, 2), dtype=points.dtype)
        return _apply_affine(projection, points)[:, :2].astype(points.dtype)

    return primitive.map_points(to_2d)


def unembed(primitive, workplane: Workplane):
    """Lift a 2-D *primitive* from the workplane frame back into 3-D."""
    if layout(primitive)[1] == 3:
        raise DimensionMismatchError("unembed expects 2-D geometry")
    injection = workplane.xy_injection()

    def to_3d(points: np.ndarray) -> np.ndarray:
        if len(points) == 0:
            return np.empty((0, 3), dtype=points.dtype)
        lifted = np.column_stack([points.astype(np.float64), np.zeros(len(points))])
        return _apply_affine(injection, lifted).astype(points.dtype)

    return primitive.map_points(to_3d)


def transform(workplane: Workplane, primitive, fn: Callable[[Any], Any]):
    """Embed *primitive*, run the 2-D function *fn* on it, unembed the result."""
    return unembed(fn(embed(primitive, workplane)), workplane)


@dataclass(frozen=True, slots=True)
class FlatPrimitive:
    """A 2-D primitive paired with the workplane it was flattened from."""

    primitive: Any
    workplane: Workplane

    @classmethod
    def new(cls, primitive_3d, workplane: Workplane) -> "FlatPrimitive":
        return cls(embed(primitive_3d, workplane), workplane)

    def map_geometry(self, fn: Callable[[Any], Any]) -> "FlatPrimitive":
        """Apply a 2-D transformation, keeping the workplane."""
        return FlatPrimitive(fn(self.primitive), self.workplane)

    def unpack(self):
        """The primitive back in 3-D coordinates."""
        return unembed(self.primitive, self.workplane)
