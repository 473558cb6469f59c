import numpy as np

from selo_project.src.core.geometry.grouping import group_primitives
from selo_project.src.models.primitives import Polygon, Ring, Triangle


def square_at(z: float, offset: float = 0.0) -> Ring:
    return Ring([
        (offset, 0, z), (offset + 1, 0, z), (offset + 1, 1, z), (offset, 1, z),
    ])


def test_primitives_are_grouped_by_plane():
    groups = group_primitives(
        [square_at(0.0), square_at(5.0), Polygon(square_at(0.0, offset=3.0))],
        tolerance=1e-6,
    )
    assert len(groups) == 2
    (plane_a, members_a), (plane_b, members_b) = groups
    assert len(members_a) == 2
    assert len(members_b) == 1
    np.testing.assert_allclose(plane_b.origin, [0.0, 0.0, 5.0])
    assert all(m.dim == 2 for m in members_a + members_b)


def test_embedded_members_keep_their_shape():
    (_, members), = group_primitives([square_at(2.0)], tolerance=1e-6)
    assert members[0].area() == np.float64(1.0)


def test_nearby_planes_merge_within_tolerance():
    groups = group_primitives([square_at(0.0), square_at(1e-4)], tolerance=1e-2)
    assert len(groups) == 1
    assert len(groups[0][1]) == 2


def test_opposite_windings_are_separate():
    groups = group_primitives([square_at(0.0), square_at(0.0).flip()], tolerance=1e-6)
    assert len(groups) == 2


def test_degenerate_primitives_are_skipped(caplog):
    collinear = Triangle((0, 0, 0), (1, 1, 1), (2, 2, 2))
    with caplog.at_level("WARNING"):
        groups = group_primitives([collinear, square_at(0.0)], tolerance=1e-6)
    assert len(groups) == 1
    assert "Skipping primitive" in caplog.text


def test_empty_input():
    assert group_primitives([], tolerance=1e-6) == []
