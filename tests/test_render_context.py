import pytest

from shclip.core.geometry import ClipRectangle, Viewport, as_polygon
from shclip.core.normalizer import normalize
from shclip.core.render_context import RenderContext, frame_vertices


RECT = ClipRectangle(200, 150, 600, 450)
DIAMOND = as_polygon([(400, 500), (150, 300), (400, 100), (650, 300)])


def test_default_context():
    ctx = RenderContext.default()
    assert ctx.viewport == Viewport(800, 600)
    assert ctx.show_clipped is True


def test_toggled_returns_new_context():
    ctx = RenderContext.default()
    toggled = ctx.toggled()
    assert toggled.show_clipped is False
    assert ctx.show_clipped is True
    assert toggled.toggled() == ctx


def test_resized_keeps_mode():
    ctx = RenderContext(viewport=Viewport(800, 600), show_clipped=False)
    resized = ctx.resized(1024, 768)
    assert resized.viewport == Viewport(1024, 768)
    assert resized.show_clipped is False


def test_resized_rejects_empty_viewport():
    with pytest.raises(ValueError):
        RenderContext.default().resized(0, 768)


def test_frame_vertices_clipped():
    ndc = frame_vertices(DIAMOND, RECT, RenderContext.default())
    assert len(ndc) == 16
    assert all(-0.5 <= v <= 0.5 for v in ndc)


def test_frame_vertices_unclipped():
    ctx = RenderContext(viewport=Viewport(800, 600), show_clipped=False)
    assert frame_vertices(DIAMOND, RECT, ctx) == normalize(DIAMOND, (800, 600))


def test_frame_vertices_follow_viewport():
    small = frame_vertices(DIAMOND, RECT, RenderContext(viewport=Viewport(400, 300)))
    large = frame_vertices(DIAMOND, RECT, RenderContext(viewport=Viewport(800, 600)))
    assert small != large
    assert len(small) == len(large)
