"""Containment test between 2-D geometries."""

import logging

from ...tools.overlay_adapter import to_overlay_any

logger = logging.getLogger(__name__)


def is_containing(container, item) -> bool:
    """``True`` if *item* lies in the interior of *container*.

    *container* is any polygonal primitive; *item* may also be a line,
    line string or a single point (1-D numpy array).  Points on the
    boundary of *container* are not contained.
    """
    outer = to_overlay_any(container)
    inner = to_overlay_any(item)
    if outer.is_empty or inner.is_empty:
        return False
    return bool(outer.contains(inner))
