"""
Sutherland-Hodgeman polygon clipping against an axis-aligned rectangle.

The subject polygon is clipped against one boundary at a time; every pass
consumes the previous pass's output and produces a new tuple. Inputs are
never mutated.

Known limitation: a concave or self-intersecting subject polygon is still
clipped, but the result can contain zero-area edges running along the
window boundary where separate visible pieces would be.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence, Union

from shclip.core.boundary import CLIP_ORDER, Boundary
from shclip.core.geometry import (
    ClipRectangle,
    Point,
    Polygon,
    Viewport,
    as_polygon,
    polygon_from_flat,
)
from shclip.core.normalizer import normalize
from shclip.utils.log_util import log_io

logger = logging.getLogger(__name__)


def clip_against_boundary(polygon: Polygon, boundary: Boundary, rect: ClipRectangle) -> Polygon:
    """
    Clip a polygon against a single boundary.

    :param polygon: Input polygon (may be empty)
    :param boundary: Boundary to clip against
    :param rect: Clip rectangle
    :return: Clipped polygon, in the input's traversal order
    """
    if not polygon:
        return ()

    output: list[Point] = []
    prev = polygon[-1]
    prev_inside = boundary.inside(prev, rect)
    for current in polygon:
        current_inside = boundary.inside(current, rect)
        if current_inside:
            if not prev_inside:
                # entering
                output.append(boundary.intersect(prev, current, rect))
            output.append(current)
        elif prev_inside:
            # leaving
            output.append(boundary.intersect(prev, current, rect))
        prev, prev_inside = current, current_inside

    return tuple(output)


def _check_order(order: Sequence[Boundary]) -> None:
    if len(order) != len(Boundary) or set(order) != set(Boundary):
        raise ValueError(
            f"Clip order must contain each boundary exactly once, got {list(order)}."
        )


def clip(polygon: Iterable[Union[Point, Sequence[float]]],
         rect: Union[ClipRectangle, Sequence[float]],
         order: Sequence[Boundary] = CLIP_ORDER) -> Polygon:
    """
    Clip a polygon against the four boundaries of a rectangle.

    :param polygon: Points of the subject polygon, Point or (x, y) pairs
    :param rect: ClipRectangle or (xmin, ymin, xmax, ymax)
    :param order: Boundary pass order. Defaults to left, right, bottom, top.
    :return: Visible part of the polygon (possibly empty or degenerate)
    """
    order = tuple(order)
    _check_order(order)
    rect = ClipRectangle.from_sequence(rect)

    working = as_polygon(polygon)
    for boundary in order:
        if not working:
            break
        before = len(working)
        working = clip_against_boundary(working, boundary, rect)
        logger.debug("%s pass: %d -> %d vertices", boundary, before, len(working))
    return working


@log_io()
def sutherland_hodgeman(flat_polygon: Sequence[float],
                        rect: Union[ClipRectangle, Sequence[float]],
                        viewport: Union[Viewport, Sequence[float]]) -> list[float]:
    """
    Clip a flat pixel-space polygon and return renderer-ready NDC coordinates.

    :param flat_polygon: x0, y0, x1, y1, ... in pixels
    :param rect: Clip rectangle in pixels
    :param viewport: Viewport size in pixels
    :return: x0, y0, x1, y1, ... in NDC, to be drawn as a closed line loop
    """
    # a bad viewport fails even when nothing is visible
    viewport = Viewport.of(viewport)
    clipped = clip(polygon_from_flat(flat_polygon), rect)
    return normalize(clipped, viewport)
