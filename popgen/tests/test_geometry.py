import warnings

import pytest
from shapely.geometry import Point

from popgen.geometry import Boundary, to_xy
from popgen.network import Node

TRIANGLE = [(10.0, 20.0), (20.0, 10.0), (20.0, 20.0)]
NON_CONVEX = [(20.0, 20.0), (10.0, 20.0), (12.0, 12.0), (20.0, 10.0)]


def test_empty_boundary_contains_nothing():
    assert not Boundary().contains((10.0, 20.0))


@pytest.mark.parametrize("points", [TRIANGLE[:1], TRIANGLE[:2]])
def test_degenerate_boundary_contains_nothing(points):
    boundary = Boundary(points)
    assert not boundary.contains((10.0, 20.0))
    assert not boundary.contains((15.0, 15.0))


@pytest.mark.parametrize("point, expected", [
    ((19.0, 19.0), True),
    ((21.0, 19.0), False),
    ((20.0, 20.0), False),  # vertex
    ((20.0, 19.0), False),  # edge
    ((15.0, 15.0), False),  # closing edge
])
def test_triangle_containment(point, expected):
    assert Boundary(TRIANGLE).contains(point) is expected


@pytest.mark.parametrize("point, expected", [
    ((19.0, 19.0), True),
    ((21.0, 19.0), False),
    ((11.0, 11.0), False),  # inside the bounding box, in the notch
    ((5.0, 5.0), False),
])
def test_non_convex_containment(point, expected):
    assert Boundary(NON_CONVEX).contains(point) is expected


def test_closed_ring_equals_open_ring():
    closed = Boundary(TRIANGLE + [TRIANGLE[0]])
    opened = Boundary(TRIANGLE)
    for point in [(19.0, 19.0), (20.0, 19.0), (21.0, 19.0)]:
        assert closed.contains(point) == opened.contains(point)


def test_none_points_are_ignored():
    boundary = Boundary()
    boundary.add_point(None)
    for point in TRIANGLE:
        boundary.add_point(point)
        boundary.add_point(None)
    assert len(boundary) == 3
    assert boundary.contains((19.0, 19.0))


def test_incremental_points_update_containment():
    boundary = Boundary(TRIANGLE[:2])
    assert not boundary.contains((19.0, 19.0))
    boundary.add_point(TRIANGLE[2])
    assert boundary.contains((19.0, 19.0))


def test_accepts_points_and_nodes():
    boundary = Boundary([Point(10, 20), (20.0, 10.0, 115.0), Node('n', 20.0, 20.0)])
    assert boundary.points == TRIANGLE
    assert boundary.contains(Node('q', 19.0, 19.0))
    assert boundary.contains(Point(19, 19))


def test_center_is_bounding_box_center():
    boundary = Boundary(NON_CONVEX)
    assert boundary.bounds == (10.0, 10.0, 20.0, 20.0)
    assert to_xy(boundary.center()) == (15.0, 15.0)
    # the centroid of this polygon is not the center of its bounding box
    assert to_xy(boundary.geometry.centroid) != (15.0, 15.0)


def test_center_of_empty_boundary_fails():
    with pytest.raises(ValueError):
        Boundary().center()


def test_self_intersecting_ring_uses_even_odd_rule():
    bowtie = Boundary([(0, 0), (2, 2), (2, 0), (0, 2)])
    with pytest.warns(UserWarning, match="self-intersecting"):
        assert bowtie.contains((0.5, 1.0))
    assert bowtie.contains((1.5, 1.0))
    assert not bowtie.contains((1.0, 0.5))
    assert not bowtie.contains((1.0, 1.0))


def test_collinear_ring_contains_nothing_without_warning():
    line = Boundary([(0, 0), (1, 1), (2, 2), (3, 3)])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert line.geometry.is_empty
        assert not line.contains((1.0, 1.0))
        assert not line.contains((1.0, 2.0))


def test_center_follows_added_points():
    boundary = Boundary(TRIANGLE)
    assert boundary.center() is boundary.center()
    assert to_xy(boundary.center()) == (15.0, 15.0)
    boundary.add_point((30.0, 20.0))
    assert to_xy(boundary.center()) == (20.0, 15.0)
