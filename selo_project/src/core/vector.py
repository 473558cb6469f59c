"""Scalar/vector helpers shared by every primitive.

Points are plain numpy arrays: a single point has shape ``(D,)`` and a point
sequence shape ``(N, D)`` with ``D`` either 2 or 3.  Only ``float32`` and
``float64`` are accepted.  The helpers never promote silently; combining the
two precisions (or the two dimensions) raises instead.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from .errors import DimensionMismatchError, PrecisionMismatchError

logger = logging.getLogger(__name__)

FLOAT_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))
DIMENSIONS = (2, 3)


def _resolve_dtype(arr: np.ndarray, dtype) -> np.dtype:
    if dtype is not None:
        resolved = np.dtype(dtype)
        if resolved not in FLOAT_DTYPES:
            raise TypeError(f"Unsupported coordinate dtype {resolved}; use float32 or float64")
        return resolved
    if arr.dtype in FLOAT_DTYPES:
        return arr.dtype
    return np.dtype(np.float64)


def freeze(arr: np.ndarray) -> np.ndarray:
    """Mark *arr* read-only and return it."""
    arr.flags.writeable = False
    return arr


def as_point(values, dtype=None) -> np.ndarray:
    """Coerce *values* into a read-only single point of shape ``(D,)``."""
    arr = np.asarray(values)
    out = np.array(arr, dtype=_resolve_dtype(arr, dtype), copy=True)
    if out.ndim != 1 or out.shape[0] not in DIMENSIONS:
        raise ValueError(f"A point needs 2 or 3 coordinates, got shape {out.shape}")
    return freeze(out)


def as_points(values: Iterable, dtype=None, dim: Optional[int] = None) -> np.ndarray:
    """Coerce *values* into a read-only ``(N, D)`` coordinate array.

    Args:
        values: Array-like of points (numpy array, list of tuples, ...).
        dtype: Optional float dtype. Float input keeps its own precision,
            anything else becomes ``float64``.
        dim: Dimension to use when *values* is empty (defaults to 2).

    Returns:
        np.ndarray: A fresh, non-writeable array.

    """
    if isinstance(values, np.ndarray):
        arr = values
    else:
        arr = np.asarray(list(values))
    resolved = _resolve_dtype(arr, dtype)
    if arr.size == 0:
        width = dim if dim is not None else (arr.shape[-1] if arr.ndim == 2 and arr.shape[-1] in DIMENSIONS else 2)
        return freeze(np.empty((0, width), dtype=resolved))
    out = np.array(arr, dtype=resolved, copy=True)
    if out.ndim != 2 or out.shape[1] not in DIMENSIONS:
        raise ValueError(f"Point arrays must have shape (N, 2) or (N, 3), got {out.shape}")
    if dim is not None and out.shape[1] != dim:
        raise DimensionMismatchError(f"Expected {dim}-D points, got {out.shape[1]}-D")
    return freeze(out)


def check_compatible(a: np.ndarray, b: np.ndarray) -> None:
    """Raise if *a* and *b* differ in precision or dimension."""
    if a.dtype != b.dtype:
        raise PrecisionMismatchError(f"Cannot combine {a.dtype} with {b.dtype} coordinates")
    if a.shape[-1] != b.shape[-1]:
        raise DimensionMismatchError(
            f"Cannot combine {a.shape[-1]}-D with {b.shape[-1]}-D coordinates",
        )


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

def dot(a: np.ndarray, b: np.ndarray):
    """Inner product along the last axis."""
    check_compatible(a, b)
    return np.sum(a * b, axis=-1)


def wedge(a: np.ndarray, b: np.ndarray):
    """Exterior product: a scalar for 2-D input, the cross product for 3-D."""
    check_compatible(a, b)
    if a.shape[-1] == 2:
        # np.cross on 2-vectors is deprecated, do the perp-dot by hand
        return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]
    return np.cross(a, b)


def norm_squared(v: np.ndarray):
    return np.sum(v * v, axis=-1)


def norm(v: np.ndarray):
    return np.sqrt(norm_squared(v))


def normalize(v: np.ndarray) -> np.ndarray:
    """Return *v* scaled to unit length; a zero vector stays zero."""
    length = norm(v)
    if not np.isfinite(length) or length == 0:
        return np.zeros_like(v)
    return v / length


def abs_diff_eq(a: np.ndarray, b: np.ndarray, tolerance: float) -> bool:
    """``True`` when the squared distance between *a* and *b* is below ``tolerance**2``."""
    d = a - b
    return bool(dot(d, d) < tolerance * tolerance)


def rotation_arc(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """3x3 rotation matrix turning unit vector *src* onto unit vector *dst*.

    Uses the shortest arc.  For antiparallel input the rotation is half a
    turn around an arbitrary axis orthogonal to *src*.
    """
    src = np.asarray(src, dtype=np.float64)
    dst = np.asarray(dst, dtype=np.float64)
    c = float(np.dot(src, dst))
    axis = np.cross(src, dst)
    if c < -1.0 + 1e-12:
        helper = np.array([1.0, 0.0, 0.0]) if abs(src[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
        axis = np.cross(src, helper)
        axis /= np.linalg.norm(axis)
        # R = 2 a a^T - I is the half-turn around a
        return 2.0 * np.outer(axis, axis) - np.eye(3)
    k = np.array([
        [0.0, -axis[2], axis[1]],
        [axis[2], 0.0, -axis[0]],
        [-axis[1], axis[0], 0.0],
    ])
    return np.eye(3) + k + (k @ k) / (1.0 + c)
