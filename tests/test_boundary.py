import math

import pytest

from shclip.core.boundary import CLIP_ORDER, Boundary, inside, intersect
from shclip.core.geometry import ClipRectangle, Point


RECT = ClipRectangle(200, 150, 600, 450)


@pytest.mark.parametrize(
    "boundary, point, expected",
    [
        (Boundary.LEFT, Point(200, 0), True),
        (Boundary.LEFT, Point(199.9, 300), False),
        (Boundary.RIGHT, Point(600, 300), True),
        (Boundary.RIGHT, Point(600.1, 300), False),
        (Boundary.BOTTOM, Point(0, 150), True),
        (Boundary.BOTTOM, Point(400, 149.9), False),
        (Boundary.TOP, Point(400, 450), True),
        (Boundary.TOP, Point(400, 450.1), False),
    ],
)
def test_inside_per_boundary(boundary, point, expected):
    """Points on the boundary line count as inside"""
    assert inside(point, boundary, RECT) is expected
    assert boundary.inside(point, RECT) is expected


def test_inside_only_checks_its_own_axis():
    far_above = Point(400, 10_000)
    assert inside(far_above, Boundary.LEFT, RECT)
    assert inside(far_above, Boundary.RIGHT, RECT)
    assert inside(far_above, Boundary.BOTTOM, RECT)
    assert not inside(far_above, Boundary.TOP, RECT)


def test_clip_order_has_every_boundary_once():
    assert CLIP_ORDER == (Boundary.LEFT, Boundary.RIGHT, Boundary.BOTTOM, Boundary.TOP)
    assert set(CLIP_ORDER) == set(Boundary)


def test_intersect_left_and_right():
    # diamond edge (400,500) -> (150,300) crosses x=200 at y=340
    assert intersect(Point(400, 500), Point(150, 300), Boundary.LEFT, RECT) == Point(200, 340)
    # diamond edge (650,300) -> (400,500) crosses x=600 at y=340
    assert intersect(Point(650, 300), Point(400, 500), Boundary.RIGHT, RECT) == Point(600, 340)


def test_intersect_bottom_and_top():
    assert intersect(Point(200, 260), Point(400, 100), Boundary.BOTTOM, RECT) == Point(337.5, 150)
    assert intersect(Point(600, 340), Point(400, 500), Boundary.TOP, RECT) == Point(462.5, 450)


def test_intersect_is_symmetric_in_direction():
    """Entering and leaving the same edge give the same crossing point"""
    a, b = Point(100, 200), Point(300, 400)
    assert intersect(a, b, Boundary.LEFT, RECT) == intersect(b, a, Boundary.LEFT, RECT)


def test_intersect_zero_length_segment_returns_endpoint():
    p = Point(100, 300)
    result = intersect(p, p, Boundary.LEFT, RECT)
    assert result == p
    assert math.isfinite(result.x) and math.isfinite(result.y)


@pytest.mark.parametrize(
    "boundary, p1, p2",
    [
        (Boundary.LEFT, Point(100, 200), Point(100, 400)),
        (Boundary.RIGHT, Point(700, 200), Point(700, 400)),
        (Boundary.BOTTOM, Point(300, 100), Point(500, 100)),
        (Boundary.TOP, Point(300, 450), Point(500, 450)),
    ],
)
def test_intersect_parallel_segment_falls_back_to_first_point(boundary, p1, p2):
    """No division by zero: a segment parallel to the boundary yields p1"""
    result = intersect(p1, p2, boundary, RECT)
    assert result == p1
    assert math.isfinite(result.x) and math.isfinite(result.y)


def test_line_value():
    assert Boundary.LEFT.line_value(RECT) == 200
    assert Boundary.RIGHT.line_value(RECT) == 600
    assert Boundary.BOTTOM.line_value(RECT) == 150
    assert Boundary.TOP.line_value(RECT) == 450
