"""Bucketing of 3-D primitives by the plane they lie on."""

import logging
from typing import Iterable, List, Tuple

from ...models.workplane import Workplane
from ..errors import InvalidGeometryError
from ..vector import abs_diff_eq
from .embedding import embed

__all__ = ["group_primitives"]

logger = logging.getLogger(__name__)


def group_primitives(primitives: Iterable, tolerance: float) -> List[Tuple[Workplane, list]]:
    """Group coplanar 3-D primitives and flatten each group into 2-D.

    Workplanes are compared in Hesse normal form: normals and origins must
    agree within *tolerance*. Primitives wound in opposite directions land
    in different groups.

    Args:
        primitives: 3-D Rings, Polygons, Triangles, ...
        tolerance: Distance tolerance for normal and origin comparison.

    Returns:
        List[Tuple[Workplane, list]]: One entry per plane, in order of first
        appearance, with the embedded 2-D primitives of that plane.

    """
    groups: List[Tuple[Workplane, list]] = []
    skipped = 0
    for primitive in primitives:
        try:
            workplane = Workplane.from_primitive(primitive).hesse_normal_form()
        except InvalidGeometryError as e:
            logger.warning(f"Skipping primitive without a workplane: {e}")
            skipped += 1
            continue

        for existing, members in groups:
            if (abs_diff_eq(workplane.normal, existing.normal, tolerance)
                    and abs_diff_eq(workplane.origin, existing.origin, tolerance)):
                members.append(embed(primitive, existing))
                break
        else:
            groups.append((workplane, [embed(primitive, workplane)]))

    logger.debug(f"Grouped primitives into {len(groups)} plane(s), skipped {skipped}")
    return groups
