import numpy as np
import pytest

from selo_project.src.core.errors import DimensionMismatchError, PrecisionMismatchError
from selo_project.src.core.vector import (
    abs_diff_eq,
    as_point,
    as_points,
    dot,
    norm,
    normalize,
    rotation_arc,
    wedge,
)


def test_dot_and_norm():
    """Dot product and Euclidean length of simple vectors."""
    a = as_point([1.0, 2.0])
    b = as_point([3.0, 4.0])
    assert dot(a, b) == 11.0
    assert norm(as_point([3.0, 4.0])) == 5.0


def test_wedge_2d_is_signed_scalar():
    x = as_point([1.0, 0.0])
    y = as_point([0.0, 1.0])
    assert wedge(x, y) == 1.0
    assert wedge(y, x) == -1.0


def test_wedge_3d_is_cross_product():
    x = as_point([1.0, 0.0, 0.0])
    y = as_point([0.0, 1.0, 0.0])
    np.testing.assert_array_equal(wedge(x, y), [0.0, 0.0, 1.0])


def test_wedge_vectorised_over_rows():
    a = as_points([(1.0, 0.0), (0.0, 1.0)])
    b = as_points([(0.0, 1.0), (1.0, 0.0)])
    np.testing.assert_array_equal(wedge(a, b), [1.0, -1.0])


def test_abs_diff_eq_uses_squared_distance():
    a = as_point([0.0, 0.0])
    assert abs_diff_eq(a, as_point([0.0, 0.09]), 0.1)
    assert not abs_diff_eq(a, as_point([0.08, 0.08]), 0.1)


def test_mixed_precision_is_rejected():
    """float32 and float64 coordinates must never be combined silently."""
    a = as_point(np.array([1.0, 2.0], dtype=np.float32))
    b = as_point(np.array([1.0, 2.0], dtype=np.float64))
    with pytest.raises(PrecisionMismatchError):
        dot(a, b)
    with pytest.raises(PrecisionMismatchError):
        wedge(a, b)


def test_mixed_dimension_is_rejected():
    with pytest.raises(DimensionMismatchError):
        dot(as_point([1.0, 0.0]), as_point([1.0, 0.0, 0.0]))


def test_as_points_dtype_handling():
    assert as_points([(1, 2), (3, 4)]).dtype == np.float64
    assert as_points(np.zeros((2, 2), dtype=np.float32)).dtype == np.float32
    assert as_points([(1, 2)], dtype=np.float32).dtype == np.float32
    with pytest.raises(TypeError):
        as_points([(1, 2)], dtype=np.int32)


def test_as_points_is_read_only_copy():
    source = np.array([[0.0, 0.0], [1.0, 1.0]])
    pts = as_points(source)
    source[0, 0] = 5.0
    assert pts[0, 0] == 0.0
    with pytest.raises(ValueError):
        pts[0, 0] = 1.0


def test_as_points_empty_and_bad_shape():
    assert as_points([]).shape == (0, 2)
    assert as_points([], dim=3).shape == (0, 3)
    with pytest.raises(ValueError):
        as_points([(1.0, 2.0, 3.0, 4.0)])


def test_normalize_zero_vector_stays_zero():
    np.testing.assert_array_equal(normalize(np.zeros(3)), np.zeros(3))


@pytest.mark.parametrize(
    "src",
    [
        (0.0, 0.0, 1.0),
        (1.0, 0.0, 0.0),
        (0.0, 0.0, -1.0),
        (1.0, 1.0, 1.0),
    ],
)
def test_rotation_arc_maps_source_onto_target(src):
    """The rotation takes any unit vector onto +Z, antiparallel case included."""
    src = np.asarray(src) / np.linalg.norm(src)
    rot = rotation_arc(src, np.array([0.0, 0.0, 1.0]))
    np.testing.assert_allclose(rot @ src, [0.0, 0.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)
    assert np.isclose(np.linalg.det(rot), 1.0)
