import dataclasses

import pytest

from shclip.core.geometry import (
    ClipRectangle,
    Point,
    Viewport,
    as_polygon,
    polygon_from_flat,
    polygon_to_flat,
)


def test_point_is_immutable_and_unpackable():
    p = Point(1.5, 2.5)
    x, y = p
    assert (x, y) == (1.5, 2.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 3.0


def test_point_of_pair():
    assert Point.of((3, 4)) == Point(3.0, 4.0)
    p = Point(1, 2)
    assert Point.of(p) is p


def test_clip_rectangle_validation():
    with pytest.raises(ValueError):
        ClipRectangle(10, 0, 0, 10)
    with pytest.raises(ValueError):
        ClipRectangle(0, 10, 10, 0)
    # zero-area rectangles are allowed
    line = ClipRectangle(5, 0, 5, 10)
    assert line.width == 0
    assert line.height == 10


def test_clip_rectangle_from_sequence():
    rect = ClipRectangle.from_sequence([200, 150, 600, 450])
    assert rect == ClipRectangle(200.0, 150.0, 600.0, 450.0)
    assert ClipRectangle.from_sequence(rect) is rect
    with pytest.raises(ValueError):
        ClipRectangle.from_sequence([1, 2, 3])


def test_clip_rectangle_contains_and_corners():
    rect = ClipRectangle(0, 0, 4, 2)
    assert rect.contains(Point(4, 2))
    assert not rect.contains(Point(4.1, 1))
    assert rect.corners() == (Point(0, 0), Point(4, 0), Point(4, 2), Point(0, 2))
    assert str(rect) == "(0, 0)-(4, 2)"


def test_viewport_of():
    assert Viewport.of((800, 600)) == Viewport(800, 600)
    assert str(Viewport(800, 600)) == "800x600"


def test_flat_conversion():
    polygon = polygon_from_flat([400, 500, 150, 300])
    assert polygon == (Point(400, 500), Point(150, 300))
    assert polygon_to_flat(polygon) == [400, 500, 150, 300]
    assert polygon_from_flat([]) == ()


def test_flat_conversion_rejects_odd_length():
    with pytest.raises(ValueError):
        polygon_from_flat([1, 2, 3])


def test_as_polygon_mixed_input():
    assert as_polygon([(1, 2), Point(3, 4)]) == (Point(1, 2), Point(3, 4))
