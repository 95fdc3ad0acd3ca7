from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ORG_DOMAIN = "shclip.org"
APP_NAME = "SHClip"


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value

    def __repr__(self):
        return self.value


# ----------------------
# デフォルト設定
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "view": {
        "show_clipped": True,
        "line_width": 2.0,
    },
}

SECTIONS = tuple(DEFAULTS)


# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"


@dataclass
class ViewConfig:
    show_clipped: bool = True
    line_width: float = 2.0


@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    view: ViewConfig = field(default_factory=ViewConfig)


# ----------------------
# Validation
# ----------------------
def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    try:
        return RunMode(str(v).strip().lower())
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])


def _validate_logging_level(v: Any) -> str:
    v = str(v).strip().upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR") else DEFAULTS["general"]["logging_level"]


def _validate_bool(v: Any, default: bool) -> bool:
    # QSettings (INI) が bool を "true"/"false" の文字列で返すことがある
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return default


def _validate_line_width(v: Any) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return DEFAULTS["view"]["line_width"]
    return f if 0 < f <= 20 else DEFAULTS["view"]["line_width"]


# ---------------------
# AppSettingsManager
# ---------------------
class AppSettingsManager:
    """
    Application settings backed by QSettings.

    - Code defaults live in DEFAULTS; QSettings only holds user overrides.
    - Every value is validated on load and on set; invalid values fall back to defaults.
    - set_* writes to QSettings immediately.
    """
    def __init__(self, org_domain: str = ORG_DOMAIN, app_name: str = APP_NAME):
        self._settings = QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # 読み取り
    @property
    def data(self) -> AppSettingsData:
        return self._data

    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    @property
    def show_clipped(self) -> bool:
        return self._data.view.show_clipped

    @property
    def line_width(self) -> float:
        return self._data.view.line_width

    # 書き込み
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_show_clipped(self, v: bool) -> None:
        flag = _validate_bool(v, DEFAULTS["view"]["show_clipped"])
        self._settings.setValue("view/show_clipped", flag)
        self._data.view.show_clipped = flag

    def set_line_width(self, v: float) -> None:
        width = _validate_line_width(v)
        self._settings.setValue("view/line_width", width)
        self._data.view.line_width = width

    # Reset
    def reset_all_to_default(self) -> None:
        """Remove all user overrides (shortcuts are managed separately)."""
        for section in SECTIONS:
            self._settings.remove(section)
        self._data = self._load_effective()

    def reset_section(self, section: str) -> None:
        """Reset one section to its defaults."""
        if section not in SECTIONS:
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "view": asdict(self._data.view),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- internals ---------------
    def _load_effective(self) -> AppSettingsData:
        """Apply QSettings overrides on top of DEFAULTS and build the model."""
        g = dict(DEFAULTS["general"])
        vw = dict(DEFAULTS["view"])

        v = self._settings.value("general/run_mode", None)
        if v is not None:
            g["run_mode"] = v
        v = self._settings.value("general/logging_level", None)
        if v is not None:
            g["logging_level"] = v
        v = self._settings.value("view/show_clipped", None)
        if v is not None:
            vw["show_clipped"] = v
        v = self._settings.value("view/line_width", None)
        if v is not None:
            vw["line_width"] = v

        data = AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g["run_mode"]),
                logging_level=_validate_logging_level(g["logging_level"]),
            ),
            view=ViewConfig(
                show_clipped=_validate_bool(vw["show_clipped"], DEFAULTS["view"]["show_clipped"]),
                line_width=_validate_line_width(vw["line_width"]),
            ),
        )
        logger.debug("effective settings: %s", data)
        return data
