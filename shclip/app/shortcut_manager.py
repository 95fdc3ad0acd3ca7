import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QSettings
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QWidget

from shclip.app.app_settings_manager import APP_NAME, ORG_DOMAIN, AppSettingsManager
from shclip.ui.error_notifier import ErrorNotifier

logger = logging.getLogger(__name__)


class ShortcutManager:
    """
    Keyboard shortcuts for the viewer.

    - Defaults come from `shortcuts.json` in config_path, e.g.
      {"toggle_clipped": "C", "quit": "Escape"}
    - User overrides live in QSettings under `shortcuts/<command>`.
    - Each command becomes a QAction on parent; register the handler with add_callback.
    - A failing callback is reported through ErrorNotifier. In development mode
      the exception is re-raised afterwards.
    """
    def __init__(self, parent: QWidget, config_path: Path,
                 settings_manager: Optional[AppSettingsManager] = None):
        self.parent = parent
        self.config_path = Path(config_path)
        self._shortcut_settings = QSettings(ORG_DOMAIN, APP_NAME)
        self._settings_manager = settings_manager or AppSettingsManager()

        self._actions: dict[str, QAction] = {}
        self._callbacks: dict[str, Callable[[], None]] = {}
        self._default_shortcuts = self._load_default_shortcuts()
        self._shortcuts = self._apply_user_overrides(self._default_shortcuts)
        self._register_actions()

        logger.debug("ShortcutManager initialized (run mode: %s, %d commands)",
                     self._settings_manager.run_mode.value, len(self._actions))

    def _load_default_shortcuts(self) -> dict[str, str]:
        path = self.config_path / "shortcuts.json"
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.error("Error loading %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("%s must contain a JSON object", path)
            return {}
        logger.debug("Loaded default shortcuts: %s", data)
        return {str(k): str(v) for k, v in data.items()}

    def _apply_user_overrides(self, defaults: dict[str, str]) -> dict[str, str]:
        merged = dict(defaults)
        for cmd, default_seq in defaults.items():
            user_seq = self._shortcut_settings.value(f"shortcuts/{cmd}", default_seq)
            if user_seq:
                merged[cmd] = str(user_seq)
        return merged

    def _register_actions(self) -> None:
        for cmd, seq in self._shortcuts.items():
            action = QAction(cmd.replace("_", " ").title(), self.parent)
            action.setShortcut(QKeySequence(seq))
            action.triggered.connect(lambda checked=False, c=cmd: self._on_action_triggered(c))
            self.parent.addAction(action)
            self._actions[cmd] = action

    def _on_action_triggered(self, cmd: str) -> None:
        cb = self._callbacks.get(cmd)
        if cb is None:
            ErrorNotifier.instance().notify(
                title="Unregistered Shortcut",
                msg=f"Command '{cmd}' is not registered.",
                severity="error",
                dedup_seconds=1.0,
            )
            return

        logger.info("Shortcut triggered: %s -> %s.%s",
                    cmd, getattr(cb, "__module__", ""), getattr(cb, "__qualname__", repr(cb)))
        try:
            cb()
        except Exception:
            ErrorNotifier.instance().notify(
                title="Shortcut Error",
                msg=f"Error in shortcut callback for '{cmd}'",
                exc_info=sys.exc_info(),
                severity="error",
                dedup_seconds=1.0,
            )
            if self._settings_manager.dev_mode:
                raise

    def add_callback(self, command_name: str, callback: Callable[[], None]) -> None:
        """
        Register the handler of a command.
        :param command_name: Command name (e.g., "toggle_clipped").
        :param callback: Callable without arguments.
        """
        if command_name not in self._actions:
            raise KeyError(f"Command '{command_name}' not found in registered actions.")
        self._callbacks[command_name] = callback

    def shortcut_of(self, cmd: str) -> str:
        return self._actions[cmd].shortcut().toString()

    def update_shortcut(self, cmd: str, new_seq: str) -> bool:
        """
        Change the key sequence of a command and persist it.
        :return: False if the command is unknown or the sequence is already used.
        """
        action = self._actions.get(cmd)
        if action is None:
            return False
        normalized = QKeySequence(new_seq).toString()
        if any(a.shortcut().toString() == normalized
               for c, a in self._actions.items() if c != cmd):
            return False
        action.setShortcut(QKeySequence(new_seq))
        self._shortcut_settings.setValue(f"shortcuts/{cmd}", new_seq)
        self._shortcuts[cmd] = new_seq
        return True

    def reset_to_default(self) -> None:
        self._shortcut_settings.remove("shortcuts")
        self._shortcuts = dict(self._default_shortcuts)
        for cmd, action in self._actions.items():
            action.setShortcut(QKeySequence(self._shortcuts[cmd]))

    def actions(self):
        return self._actions.values()
