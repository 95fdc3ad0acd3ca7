from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from shclip.core.clipper import clip
from shclip.core.geometry import ClipRectangle, Point, Viewport
from shclip.core.normalizer import normalize


@dataclass(frozen=True)
class RenderContext:
    """
    Immutable per-frame render state.

    Key points:
    - The viewer keeps one RenderContext and replaces it on resize or toggle.
    - The clipping functions never read it implicitly; it is passed per frame.
    - No Qt/VTK objects are stored here.
    """
    viewport: Viewport
    show_clipped: bool = True

    def toggled(self) -> RenderContext:
        """Return a copy with show_clipped flipped."""
        return replace(self, show_clipped=not self.show_clipped)

    def resized(self, width: float, height: float) -> RenderContext:
        """Return a copy with a new viewport size."""
        return replace(self, viewport=Viewport(width, height))

    @staticmethod
    def default() -> RenderContext:
        return RenderContext(viewport=Viewport(800, 600))


def frame_vertices(polygon: Iterable[Point],
                   rect: ClipRectangle,
                   context: RenderContext) -> list[float]:
    """
    Return the flat NDC vertices to draw for one frame.

    The clipped polygon is returned when context.show_clipped is set,
    otherwise the original polygon is normalized as is.
    """
    points = tuple(polygon)
    if context.show_clipped:
        points = clip(points, rect)
    return normalize(points, context.viewport)
