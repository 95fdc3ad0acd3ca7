from __future__ import annotations

import logging
import time
import traceback
from functools import partial
from typing import Optional

from PySide6.QtCore import QObject, Qt, QTimer
from PySide6.QtWidgets import QApplication, QMessageBox

from shclip.utils.json_loader import truthy_env

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
}
_DIALOG_SEVERITIES = ("error", "critical")
STATUS_TIMEOUT_MS = 5000


class ErrorNotifier(QObject):
    """
    Log problems and show them to the user.

    Errors open a message box with the traceback in its details area,
    warnings and infos go to the status bar of the active window.
    A message identical to one shown less than dedup_seconds ago is
    only logged.

    Usage:
    >>> ErrorNotifier.instance().notify("Scene", "scene.json missing", severity="warning")
    """
    _instance: Optional[ErrorNotifier] = None

    def __init__(self):
        super().__init__()
        self.dev_mode = truthy_env("SHCLIP_DEV")
        self._last_shown: dict[tuple[str, str, str], float] = {}

    @classmethod
    def instance(cls) -> ErrorNotifier:
        if cls._instance is None:
            cls._instance = ErrorNotifier()
        return cls._instance

    @classmethod
    def configure(cls, settings_manager) -> None:
        """Follow the run mode of the application settings."""
        cls.instance().dev_mode = bool(getattr(settings_manager, "dev_mode", False))

    def notify(self,
               title: str,
               msg: str,
               *,
               detail: Optional[str] = None,
               exc_info: Optional[tuple] = None,
               severity: str = "error",
               dedup_seconds: float = 2.0,
               ) -> bool:
        """
        Log the message and schedule its display on the GUI thread.

        :return: True if the message will be shown, False if deduplicated
        """
        has_exc = bool(exc_info) and exc_info[0] is not None
        level = _LOG_LEVELS.get(severity, logging.ERROR)
        logger.log(level, "%s: %s", title, msg, exc_info=exc_info if has_exc else None)

        if not self._should_show((severity, title, msg), dedup_seconds):
            return False

        if severity in _DIALOG_SEVERITIES:
            if has_exc and not detail:
                detail = "".join(traceback.format_exception(*exc_info))
            QTimer.singleShot(0, partial(self._show_dialog, title, msg, detail,
                                         severity == "critical"))
        else:
            QTimer.singleShot(0, partial(self._show_status, f"{title}: {msg}"))
        return True

    def _should_show(self, key: tuple[str, str, str], dedup_seconds: float) -> bool:
        now = time.monotonic()
        last = self._last_shown.get(key)
        if last is not None and now - last < dedup_seconds:
            return False
        self._last_shown[key] = now
        return True

    def _show_dialog(self, title: str, msg: str, detail: Optional[str], critical: bool) -> None:
        box = QMessageBox()
        box.setIcon(QMessageBox.Critical if critical else QMessageBox.Warning)
        box.setWindowTitle(title)
        box.setText(msg)
        if detail:
            box.setDetailedText(detail)
            if self.dev_mode:
                box.setTextInteractionFlags(Qt.TextSelectableByMouse)
        box.exec()

    @staticmethod
    def _show_status(text: str) -> None:
        app = QApplication.instance()
        window = app.activeWindow() if app else None
        if window is not None and hasattr(window, "statusBar"):
            window.statusBar().showMessage(text, STATUS_TIMEOUT_MS)
