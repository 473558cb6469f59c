"""Exception hierarchy for the Selo geometry kernel.

Degenerate input is normally represented rather than rejected, so these are
reserved for the few places where an operation cannot produce a meaningful
value at all.
"""


class GeometryError(Exception):
    """Base class for all kernel errors."""


class InvalidGeometryError(GeometryError):
    """Input violates a precondition (zero-length segment, undefined plane, ...)."""


class PrecisionMismatchError(GeometryError):
    """Raised when float32 and float64 coordinates are combined."""


class DimensionMismatchError(GeometryError):
    """Raised when 2-D and 3-D coordinates are combined."""


class EngineError(GeometryError):
    """An external engine (GEOS, Qhull) failed on the supplied geometry."""
