"""
Clip window boundaries.

Each boundary is one half-plane of the clip rectangle. A boundary knows
whether a point is on its inside and where a segment crosses its line.
"""
from __future__ import annotations

import logging
from enum import Enum

from shclip.core.geometry import ClipRectangle, Point

logger = logging.getLogger(__name__)


class Boundary(Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTTOM = "bottom"
    TOP = "top"

    def __str__(self) -> str:
        return self.value

    @property
    def is_vertical(self) -> bool:
        """True for boundaries whose line is x = const."""
        return self in (Boundary.LEFT, Boundary.RIGHT)

    def line_value(self, rect: ClipRectangle) -> float:
        """Return the constant coordinate of the boundary line."""
        if self is Boundary.LEFT:
            return rect.xmin
        if self is Boundary.RIGHT:
            return rect.xmax
        if self is Boundary.BOTTOM:
            return rect.ymin
        return rect.ymax

    def inside(self, point: Point, rect: ClipRectangle) -> bool:
        """
        Return True if the point is on the inside of this boundary.

        Points lying exactly on the boundary line are inside.

        :param point: Point to test
        :param rect: Clip rectangle
        :return: True if inside
        """
        if self is Boundary.LEFT:
            return point.x >= rect.xmin
        if self is Boundary.RIGHT:
            return point.x <= rect.xmax
        if self is Boundary.BOTTOM:
            return point.y >= rect.ymin
        return point.y <= rect.ymax

    def intersect(self, p1: Point, p2: Point, rect: ClipRectangle) -> Point:
        """
        Return the point where the segment p1 -> p2 crosses the boundary line.

        The caller is expected to pass a segment with exactly one endpoint
        inside. When the segment runs parallel to the boundary line the
        crossing is undefined; in that case the inside endpoint is returned
        (p1 if neither or both endpoints are inside).

        :param p1: Segment start
        :param p2: Segment end
        :param rect: Clip rectangle
        :return: Crossing point on the boundary line
        """
        value = self.line_value(rect)
        dx = p2.x - p1.x
        dy = p2.y - p1.y

        if self.is_vertical:
            if dx == 0:
                return self._degenerate_fallback(p1, p2, rect)
            return Point(value, p1.y + dy * (value - p1.x) / dx)

        if dy == 0:
            return self._degenerate_fallback(p1, p2, rect)
        return Point(p1.x + dx * (value - p1.y) / dy, value)

    def _degenerate_fallback(self, p1: Point, p2: Point, rect: ClipRectangle) -> Point:
        fallback = p2 if (self.inside(p2, rect) and not self.inside(p1, rect)) else p1
        logger.debug("degenerate segment %s -> %s on %s boundary, using %s",
                     p1, p2, self, fallback)
        return fallback


# Fixed pass order of the clipper. Any permutation gives the same polygon.
CLIP_ORDER: tuple[Boundary, ...] = (
    Boundary.LEFT,
    Boundary.RIGHT,
    Boundary.BOTTOM,
    Boundary.TOP,
)


def inside(point: Point, boundary: Boundary, rect: ClipRectangle) -> bool:
    """Return True if the point is on the inside of the boundary."""
    return boundary.inside(point, rect)


def intersect(p1: Point, p2: Point, boundary: Boundary, rect: ClipRectangle) -> Point:
    """Return the crossing of segment p1 -> p2 with the boundary line."""
    return boundary.intersect(p1, p2, rect)
