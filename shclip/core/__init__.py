"""Clipping core - pure, Qt/VTK-independent functionality."""

from shclip.core.boundary import CLIP_ORDER, Boundary, inside, intersect
from shclip.core.clipper import clip, clip_against_boundary, sutherland_hodgeman
from shclip.core.geometry import (
    ClipRectangle,
    Point,
    Polygon,
    Viewport,
    as_polygon,
    polygon_from_flat,
    polygon_to_flat,
)
from shclip.core.normalizer import normalize, to_ndc
from shclip.core.render_context import RenderContext, frame_vertices

__all__ = [
    "CLIP_ORDER",
    "Boundary",
    "ClipRectangle",
    "Point",
    "Polygon",
    "RenderContext",
    "Viewport",
    "as_polygon",
    "clip",
    "clip_against_boundary",
    "frame_vertices",
    "inside",
    "intersect",
    "normalize",
    "polygon_from_flat",
    "polygon_to_flat",
    "sutherland_hodgeman",
    "to_ndc",
]
