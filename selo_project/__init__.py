"""selo_project package

Coplanar computational-geometry kernel.  The implementation lives under
:pymod:`selo_project.src`; the most used names are re-exported here::

    from selo_project import Ring, union, buffer
"""

from .src.core.errors import (
    DimensionMismatchError,
    EngineError,
    GeometryError,
    InvalidGeometryError,
    PrecisionMismatchError,
)
from .src.core.geometry.boolean_ops import (
    difference,
    difference_approx,
    intersection,
    intersection_approx,
    union,
    union_all,
    union_approx,
)
from .src.core.geometry.buffer import buffer
from .src.core.geometry.contains import is_containing
from .src.core.geometry.embedding import FlatPrimitive, embed, transform, unembed
from .src.core.geometry.grouping import group_primitives
from .src.core.geometry.line_intersection import (
    CollinearDisjoint,
    CollinearOverlap,
    CollinearTouch,
    ParallelNonCollinear,
    Simple,
    first_intersection_point,
    first_line_intersection,
    intersect_line_point,
    intersection_points,
    line_intersection,
    line_intersections,
)
from .src.core.geometry.orientation import same_orientation
from .src.core.geometry.simplify import simplify
from .src.core.geometry.split import split_ring_polygon
from .src.core.geometry.triangulation import stitch, triangulate, triangulate_points
from .src.models.geometry import DynamicGeometry, Geometry, GeometryKind
from .src.models.primitives import (
    Line,
    LineString,
    MultiLineString,
    MultiPolygon,
    MultiRing,
    MultiTriangle,
    Polygon,
    Ring,
    Triangle,
)
from .src.models.workplane import Workplane
from .src.services.settings_service import KernelSettings, SettingsService
from .src.utils.logging_utils import setup_logging

__version__ = "0.1.0"
