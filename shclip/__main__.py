# NOTE:
# Startup diagnostics (logging / crash handler) must be set up
#  before creating the QApplication instance.
import logging
import sys
from pathlib import Path

from shclip.app.logging_setup import (
    LogSystem,
    apply_logging_policy,
    install_qt_message_handler,
    setup_startup_logging,
)

logger = logging.getLogger(__name__)

APP_NAME = "shclip"


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv if argv is None else argv
    setup_startup_logging(app_name=APP_NAME)
    install_qt_message_handler()

    from PySide6 import QtWidgets

    from shclip.app.app_settings_manager import AppSettingsManager
    from shclip.ui.error_notifier import ErrorNotifier
    from shclip.ui.mainwindow import MainWindow

    logs = LogSystem.from_levels(APP_NAME)

    # 既存の QApplication インスタンスを取得。なければ新規作成。
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(argv)

    logger.info("App start")
    settings_mgr = AppSettingsManager()
    apply_logging_policy(logs, settings_mgr)
    ErrorNotifier.configure(settings_mgr)

    scene_path = Path(argv[1]) if len(argv) > 1 else None
    main_window = MainWindow(settings_mgr, scene_path=scene_path)

    # Qt 終了時にログを確実に止める
    app.aboutToQuit.connect(logs.stop)
    try:
        rc = app.exec()
        logger.info("App exit (rc=%s)", rc)
        return rc
    finally:
        main_window.deleteLater()
        logs.stop()


if __name__ == "__main__":
    sys.exit(main())
