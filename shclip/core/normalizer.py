"""Pixel space to normalized device coordinates."""
from __future__ import annotations

from typing import Iterable, Sequence, Union

from shclip.core.geometry import Point, Viewport


def to_ndc(point: Point, viewport: Union[Viewport, Sequence[float]]) -> Point:
    """
    Map a pixel-space point into NDC (-1..1 on both axes).

    :param point: Pixel-space point
    :param viewport: Viewport or (width, height) pair
    :return: NDC point
    """
    vp = Viewport.of(viewport)
    return Point(2.0 * point.x / vp.width - 1.0, 2.0 * point.y / vp.height - 1.0)


def normalize(polygon: Iterable[Point],
              viewport: Union[Viewport, Sequence[float]]) -> list[float]:
    """
    Normalize a pixel-space polygon and flatten it for the renderer.

    Raises ValueError for a non-positive viewport before any division.

    :param polygon: Pixel-space points
    :param viewport: Viewport or (width, height) pair
    :return: Interleaved (x0, y0, x1, y1, ...) in NDC
    """
    vp = Viewport.of(viewport)
    ndc: list[float] = []
    for p in polygon:
        q = to_ndc(Point.of(p), vp)
        ndc.append(q.x)
        ndc.append(q.y)
    return ndc
