import copy
import logging
from pathlib import Path

from PySide6.QtWidgets import QFileDialog, QLabel, QMainWindow

from shclip.app.app_settings_manager import AppSettingsManager
from shclip.app.scene_loader import Scene, load_scene
from shclip.app.shortcut_manager import ShortcutManager
from shclip.status import STATUS_FIELDS, StatusField
from shclip.ui.error_notifier import ErrorNotifier
from shclip.utils import resource_paths
from shclip.viewers.clip_viewer import ClipViewer, FrameInfo

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window hosting the clip viewer."""

    def __init__(self,
                 settings_mgr: AppSettingsManager | None = None,
                 scene_path: Path | None = None):
        """
        :param settings_mgr: Application settings manager.
        :param scene_path: Scene JSON to load, the packaged scene if None.
        """
        super().__init__()
        self.setting = settings_mgr or AppSettingsManager()
        self.scene_path = Path(scene_path) if scene_path else resource_paths.scene_json_path()

        self.shortcut_mgr = ShortcutManager(
            parent=self,
            config_path=resource_paths.settings_dir(),
            settings_manager=self.setting,
        )

        # インスタンス毎にステータスを保持する
        self.status_fields: dict[str, StatusField] = {
            k: copy.deepcopy(v) for k, v in STATUS_FIELDS.items()
        }
        self._status_label: dict[str, QLabel] = {}

        self.setWindowTitle("Sutherland-Hodgeman Polygon Clipping")
        self._setup_status_bar()
        self._setup_viewer(self._read_scene())
        self._setup_menus()
        self._register_shortcuts()

        self.show()

    def _read_scene(self) -> Scene:
        warnings: list[str] = []
        scene = load_scene(self.scene_path, warnings=warnings)
        for w in warnings:
            ErrorNotifier.instance().notify("Scene", w, severity="warning")
        return scene

    def _setup_viewer(self, scene: Scene) -> None:
        self.viewer = ClipViewer(scene=scene, settings_manager=self.setting, parent=self)
        self.viewer.frameRendered.connect(self._on_frame_rendered)
        self.setCentralWidget(self.viewer)
        self.viewer.render_frame()
        self.resize(int(scene.window.width), int(scene.window.height))

    def _setup_menus(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction("&Open scene...", self.open_scene)
        file_menu.addAction("&Reload scene", self.reload_scene)
        file_menu.addSeparator()
        file_menu.addAction("&Quit", self.close)

        view_menu = menubar.addMenu("&View")
        view_menu.addAction("Toggle &clipped", self.viewer.toggle_clipped)

    def _setup_status_bar(self) -> None:
        for key in self.status_fields:
            label = QLabel("", self)
            self.statusBar().addPermanentWidget(label)
            self._status_label[key] = label

    def _register_shortcuts(self) -> None:
        handlers = {
            "toggle_clipped": self.viewer.toggle_clipped,
            "reload_scene": self.reload_scene,
            "quit": self.close,
        }
        for cmd, handler in handlers.items():
            try:
                self.shortcut_mgr.add_callback(cmd, handler)
            except KeyError:
                logger.warning("No shortcut defined for %s", cmd)

    # =====================================================
    # Scene
    # =====================================================

    def reload_scene(self) -> None:
        logger.info("reloading scene from %s", self.scene_path)
        self.viewer.set_scene(self._read_scene())

    def open_scene(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open scene", str(self.scene_path.parent), "Scene (*.json)")
        if not path:
            return
        self.scene_path = Path(path)
        self.reload_scene()

    # =====================================================
    # Status
    # =====================================================

    def update_status(self, **kwargs) -> None:
        for key, value in kwargs.items():
            field = self.status_fields.get(key)
            if field is None:
                continue
            field.value = value
            self._status_label[key].setText(field.text())

    def _on_frame_rendered(self, info: FrameInfo) -> None:
        self.update_status(
            mode=info.context.show_clipped,
            vertex_count=info.vertex_count,
            viewport=str(info.context.viewport),
            clip_rect=str(self.viewer.scene.clip_rect),
        )
