"""
Scene definition for the viewer: subject polygon, clip window, initial window size.

Scene files are JSON objects:

    {
        "polygon": [x0, y0, x1, y1, ...],
        "clip_rect": [xmin, ymin, xmax, ymax],
        "window": [width, height]
    }

Keys missing from a file keep their default values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shclip.core.geometry import ClipRectangle, Polygon, Viewport, polygon_from_flat, polygon_to_flat
from shclip.utils.json_loader import SettingsError, deep_merge, read_json_dict, report_failure

logger = logging.getLogger(__name__)

DEFAULT_SCENE: dict[str, Any] = {
    # Diamond centred in an 800x600 window, clip window 400 by 300 centred.
    "polygon": [400, 500, 150, 300, 400, 100, 650, 300],
    "clip_rect": [200, 150, 600, 450],
    "window": [800, 600],
}


@dataclass(frozen=True)
class Scene:
    polygon: Polygon
    clip_rect: ClipRectangle
    window: Viewport

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """
        Build a Scene from a JSON-like dict.

        :raise ValueError: malformed polygon, rectangle or window size
        """
        try:
            return cls(
                polygon=polygon_from_flat(list(data["polygon"])),
                clip_rect=ClipRectangle.from_sequence(list(data["clip_rect"])),
                window=Viewport.of(list(data["window"])),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid scene definition: {e}") from e

    @classmethod
    def default(cls) -> Scene:
        return cls.from_dict(DEFAULT_SCENE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "polygon": polygon_to_flat(self.polygon),
            "clip_rect": [self.clip_rect.xmin, self.clip_rect.ymin,
                          self.clip_rect.xmax, self.clip_rect.ymax],
            "window": [self.window.width, self.window.height],
        }


def load_scene(
        path: Path,
        *,
        strict: bool = False,
        quarantine_broken: bool = False,
        warnings: list[str] | None = None,
) -> Scene:
    """
    Load a scene file, falling back to the default scene on failure.

    :param path: scene JSON file
    :param strict: raise SettingsError instead of falling back
    :param quarantine_broken: rename files that fail to parse
    :param warnings: collects fallback reasons in non-strict mode
    :return: Scene
    """
    if warnings is None:
        warnings = []

    data = read_json_dict(
        path,
        strict=strict,
        quarantine_broken=quarantine_broken,
        warnings=warnings,
        logger=logger,
    )
    if data is None:
        return Scene.default()

    try:
        scene = Scene.from_dict(deep_merge(DEFAULT_SCENE, data))
    except ValueError as e:
        report_failure(f"Invalid scene in {path}: {e}",
                       strict=strict, warnings=warnings, logger=logger, exc=e)
        return Scene.default()

    logger.info("scene loaded from %s: %d vertices, clip window %s",
                path, len(scene.polygon), scene.clip_rect)
    return scene


__all__ = ["DEFAULT_SCENE", "Scene", "SettingsError", "load_scene"]
