from __future__ import annotations

import sys
from pathlib import Path


def app_base_dir() -> Path:
    """
    Return base directory for bundled resources

    - In PyInstaller onefile/onedir: use sys._MEIPASS/shclip (temporary extraction dir).
    - In development or an installed package: the shclip package directory.
    """
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS) / "shclip"  # type: ignore[attr-defined]
    # shclip/utils/resource_paths.py -> parents[1] is the package directory.
    return Path(__file__).resolve().parents[1]


def settings_dir() -> Path:
    """Return the directory for settings files (shortcuts.json, scene.json)."""
    return app_base_dir() / "settings"


def shortcuts_json_path() -> Path:
    return settings_dir() / "shortcuts.json"


def scene_json_path() -> Path:
    return settings_dir() / "scene.json"
