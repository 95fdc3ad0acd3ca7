import json
from pathlib import Path

import pytest

from shclip.app.scene_loader import DEFAULT_SCENE, Scene, SettingsError, load_scene
from shclip.core.geometry import ClipRectangle, Point, Viewport
from shclip.utils import resource_paths


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


def test_packaged_scene_matches_default():
    warnings = []
    scene = load_scene(resource_paths.scene_json_path(), warnings=warnings)
    assert warnings == []
    assert scene == Scene.default()
    assert scene.to_dict() == DEFAULT_SCENE


def test_default_scene_values():
    scene = Scene.default()
    assert scene.polygon[0] == Point(400, 500)
    assert len(scene.polygon) == 4
    assert scene.clip_rect == ClipRectangle(200, 150, 600, 450)
    assert scene.window == Viewport(800, 600)


def test_missing_file_falls_back(tmp_path):
    warnings = []
    scene = load_scene(tmp_path / "missing.json", warnings=warnings)
    assert scene == Scene.default()
    assert len(warnings) == 1
    assert "missing" in warnings[0]


def test_missing_file_strict_raises(tmp_path):
    with pytest.raises(SettingsError):
        load_scene(tmp_path / "missing.json", strict=True)


def test_partial_file_is_merged_with_defaults(tmp_path):
    path = _write(tmp_path / "scene.json", {"clip_rect": [0, 0, 100, 50]})
    scene = load_scene(path)
    assert scene.clip_rect == ClipRectangle(0, 0, 100, 50)
    assert scene.polygon == Scene.default().polygon
    assert scene.window == Viewport(800, 600)


def test_invalid_rect_falls_back(tmp_path):
    path = _write(tmp_path / "scene.json", {"clip_rect": [600, 150, 200, 450]})
    warnings = []
    scene = load_scene(path, warnings=warnings)
    assert scene == Scene.default()
    assert warnings and "Invalid scene" in warnings[0]


@pytest.mark.parametrize(
    "data",
    [
        {"polygon": [1, 2, 3]},
        {"window": [0, 600]},
        {"polygon": 5},
    ],
)
def test_invalid_scene_strict_raises(tmp_path, data):
    path = _write(tmp_path / "scene.json", data)
    with pytest.raises(SettingsError):
        load_scene(path, strict=True)


def test_broken_json_is_quarantined(tmp_path):
    path = _write(tmp_path / "scene.json", "{ not json")
    warnings = []
    scene = load_scene(path, quarantine_broken=True, warnings=warnings)
    assert scene == Scene.default()
    assert not path.exists()
    assert list(tmp_path.glob("scene.broken-*"))
    assert "quarantined" in warnings[0]


def test_from_dict_missing_key():
    with pytest.raises(ValueError):
        Scene.from_dict({"polygon": [0, 0, 1, 1]})
