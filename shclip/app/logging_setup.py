from __future__ import annotations

import faulthandler
import logging
import logging.config
import os
import queue
import sys
import traceback
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from shclip.app.app_settings_manager import AppSettingsManager, RunMode
from shclip.utils.log_util import level_from_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogPaths:
    log_file: Path
    crash_file: Path
    log_dir: Path


def _project_root_from_package() -> Path:
    """
    In development, return the project root directory.
    shclip/app/logging_setup.py -> parents[2] is assumed to be the project root.
    """
    return Path(__file__).resolve().parents[2]


def _app_base_dir() -> Path:
    """
    Frozen (PyInstaller): directory of the executable.
    Development: the project root.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return _project_root_from_package()


def _find_writable_log_dir(app_name: str) -> Path:
    """
    First, app_base_dir/logs
    Second, ~/.<app_name>/logs
    Finally, ./logs
    """
    candidates = [
        _app_base_dir() / "logs",
        Path.home() / f".{app_name.lower()}" / "logs",
    ]
    for d in candidates:
        try:
            d.mkdir(parents=True, exist_ok=True)
            test = d / ".write_test"
            test.write_text("ok", encoding="utf-8")
            test.unlink(missing_ok=True)
            return d
        except OSError:
            continue
    d = Path.cwd() / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


def default_log_dir(app_name: str) -> Path:
    return _find_writable_log_dir(app_name)


def setup_startup_logging(
        app_name: str,
        *,
        level_file: int = logging.DEBUG,
        level_console: int = logging.INFO,
        max_bytes: int = 2_000_000,
        backup_count: int = 5,
    ) -> LogPaths:
    """
    Startup logging setup, before QApplication exists.
    - Rotating file handler + console
    - uncaught exception logging
    - faulthandler (crash logging)
    """
    log_dir = default_log_dir(app_name)
    log_file = log_dir / f"{app_name}.log"
    crash_file = log_dir / f"{app_name}.crash.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Prevent duplicate registration of handlers.
    if root.handlers:
        root.handlers.clear()

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    fh = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    fh.setLevel(level_file)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level_console)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    try:
        f = open(crash_file, "w", encoding="utf-8")
        faulthandler.enable(file=f)
        # faulthandler needs the file object to stay alive.
        root._shclip_crash_fh = f
    except OSError:
        logger.warning("crash log unavailable: %s", crash_file)

    def _excepthook(exc_type, exc, tb):
        logging.critical(
            "Uncaught exception: \n%s",
            "".join(traceback.format_exception(exc_type, exc, tb)),
        )

    sys.excepthook = _excepthook

    logging.info("=================================================")
    logging.info("%s starting...", app_name)
    logging.info("frozen=%s", getattr(sys, "frozen", False))
    logging.info("sys.executable=%s", sys.executable)
    logging.info("cwd=%s", os.getcwd())
    logging.info("log_file=%s", log_file)
    logging.info("crash_file=%s", crash_file)
    logging.info("=================================================")

    return LogPaths(log_file=log_file, crash_file=crash_file, log_dir=log_dir)


def build_config(app_name: str,
                 root_level: int,
                 console_level: int,
                 log_dir: Path | None = None) -> dict:
    """Build a logging config dict. File output goes through a queue."""
    log_dir = log_dir or default_log_dir(app_name)
    log_file = str(log_dir / f"{app_name}.log")

    fmt = "%(asctime)s.%(msecs)03d %(levelname)s %(process)d %(threadName)s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": fmt, "datefmt": datefmt},
        },
        "handlers": {
            "queue": {"class": "logging.handlers.QueueHandler", "queue": queue.Queue(-1)},
            "console": {"class": "logging.StreamHandler", "formatter": "standard",
                        "level": console_level},
        },
        "root": {"level": root_level, "handlers": ["queue", "console"]},
        # Consumed by LogSystem, not by dictConfig.
        "_file_settings": {
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": int(os.getenv("SHCLIP_LOG_BACKUP_COUNT", 5)),
            "encoding": "utf-8",
            "format": fmt,
            "datefmt": datefmt,
        },
    }


class LogSystem:
    """Thin wrapper owning the QueueListener that writes the log file."""
    def __init__(self, cfg: dict):
        file_settings = cfg.pop("_file_settings")
        logging.config.dictConfig(cfg)

        root_logger = logging.getLogger()
        qh: QueueHandler | None = None
        self._console_handler: logging.Handler | None = None
        for h in root_logger.handlers:
            if qh is None and isinstance(h, QueueHandler):
                qh = h
            elif self._console_handler is None and isinstance(h, logging.StreamHandler):
                self._console_handler = h
        if qh is None:
            raise RuntimeError("QueueHandler not found.")

        self._file_handler = RotatingFileHandler(
            file_settings["filename"],
            maxBytes=file_settings["maxBytes"],
            backupCount=file_settings["backupCount"],
            encoding=file_settings["encoding"],
        )
        self._file_handler.setFormatter(
            logging.Formatter(file_settings["format"], file_settings["datefmt"])
        )

        self.log_file = Path(file_settings["filename"])
        self.listener = QueueListener(qh.queue, self._file_handler, respect_handler_level=True)
        self.listener.start()
        self._running = True

    @classmethod
    def from_levels(cls,
                    app_name: str,
                    root_level: int | str | None = None,
                    console_level: int | str | None = None,
                    log_dir: Path | None = None) -> LogSystem:
        """
        Configure logging for app_name.
        Levels default to SHCLIP_LOG_LEVEL (INFO when unset).
        """
        env_level = level_from_name(os.getenv("SHCLIP_LOG_LEVEL", "INFO"))
        root = level_from_name(root_level, env_level) if root_level is not None else env_level
        console = level_from_name(console_level, root) if console_level is not None else root
        return cls(build_config(app_name, root, console, log_dir))

    def apply_levels(self, root_level: int, console_level: int | None = None,
                     file_level: int | None = None) -> None:
        """Update levels after startup."""
        logging.getLogger().setLevel(root_level)
        if self._console_handler is not None and console_level is not None:
            self._console_handler.setLevel(console_level)
        if file_level is not None:
            self._file_handler.setLevel(file_level)

    def stop(self) -> None:
        """Flush pending records and stop the listener. Safe to call twice."""
        if not self._running:
            return
        self._running = False
        self.listener.stop()
        self._file_handler.flush()


def apply_logging_policy(logs: LogSystem, settings: AppSettingsManager) -> None:
    """Switch levels according to the run mode and the configured logging level."""
    mode = getattr(settings, "run_mode", RunMode.PRODUCTION)

    if mode in (RunMode.DEVELOPMENT, RunMode.VERBOSE):
        logs.apply_levels(root_level=logging.DEBUG,
                          console_level=logging.DEBUG,
                          file_level=logging.DEBUG)
    else:
        console = level_from_name(getattr(settings, "logging_level", "INFO"))
        logs.apply_levels(root_level=logging.DEBUG,
                          console_level=console,
                          file_level=logging.DEBUG)
    logger.debug("logging policy applied for run mode %s", mode)


def install_qt_message_handler() -> None:
    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    qt_logger = logging.getLogger("Qt")
    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def handler(msg_type, context, message):
        qt_logger.log(levels.get(msg_type, logging.ERROR), message)

    qInstallMessageHandler(handler)
    qt_logger.info("Qt message handler installed.")
