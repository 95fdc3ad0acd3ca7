"""VTK viewer widget drawing the subject polygon and the clip window as line loops."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import vtk
from PySide6 import QtCore, QtWidgets
from vtkmodules.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor

import shclip.utils.vtk_helpers as vtk_helpers
from shclip.app.app_settings_manager import AppSettingsManager
from shclip.app.scene_loader import Scene
from shclip.core import RenderContext, frame_vertices, normalize

logger = logging.getLogger(__name__)

POLYGON_COLOR = (1.0, 0.95, 0.1)
WINDOW_COLOR = (0.3, 0.7, 1.0)


@dataclass(frozen=True)
class FrameInfo:
    """What was drawn in the last frame."""
    context: RenderContext
    vertex_count: int


class ClipViewer(QtWidgets.QWidget):
    """
    Draws one frame per change of scene, viewport or display mode.

    - The render state is a RenderContext replaced on resize/toggle.
    - Each frame calls the clipping core with the current context and
      uploads the NDC result into a VTK polydata.
    """

    frameRendered = QtCore.Signal(object)  # FrameInfo

    def __init__(
            self,
            scene: Scene | None = None,
            settings_manager: AppSettingsManager | None = None,
            parent: QtWidgets.QWidget | None = None,
    ) -> None:
        """
        :param scene: Scene to display, the default diamond scene if None
        :param settings_manager: Application settings manager
        :param parent: Parent widget
        """
        super().__init__(parent)
        self.setting = settings_manager or AppSettingsManager()
        self.scene = scene or Scene.default()
        self.context = RenderContext(viewport=self.scene.window,
                                     show_clipped=self.setting.show_clipped)

        self._setup_ui()
        self._setup_vtk_rendering()
        self._setup_actors()
        self.interactor.Initialize()
        self.vtk_widget.installEventFilter(self)
        self.render_frame()

    def _setup_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.vtk_widget = QVTKRenderWindowInteractor(self)
        layout.addWidget(self.vtk_widget)
        self.setLayout(layout)
        self.resize(int(self.scene.window.width), int(self.scene.window.height))

    def _setup_vtk_rendering(self) -> None:
        render_window = self.vtk_widget.GetRenderWindow()
        self.renderer = vtk.vtkRenderer()
        self.renderer.SetBackground(0.0, 0.0, 0.0)
        render_window.AddRenderer(self.renderer)

        self.interactor = render_window.GetInteractor()
        # 2D only: no camera interaction.
        self.interactor.SetInteractorStyle(vtk.vtkInteractorStyleUser())
        logger.debug("VTK rendering components initialized.")

    def _setup_actors(self) -> None:
        width = self.setting.line_width
        self._window_data = vtk_helpers.line_loop_polydata([])
        self._window_actor = vtk_helpers.make_line_loop_actor(
            self._window_data, color=WINDOW_COLOR, line_width=max(1.0, width / 2))
        self._polygon_data = vtk_helpers.line_loop_polydata([])
        self._polygon_actor = vtk_helpers.make_line_loop_actor(
            self._polygon_data, color=POLYGON_COLOR, line_width=width)
        self.renderer.AddActor2D(self._window_actor)
        self.renderer.AddActor2D(self._polygon_actor)

    # =====================================================
    # Frame
    # =====================================================

    def render_frame(self) -> FrameInfo:
        """Clip (or not), normalize and draw the current scene."""
        ndc = frame_vertices(self.scene.polygon, self.scene.clip_rect, self.context)
        vtk_helpers.update_line_loop(self._polygon_data, ndc)
        vtk_helpers.update_line_loop(
            self._window_data, normalize(self.scene.clip_rect.corners(), self.context.viewport))
        if self.isVisible():
            self.update_view()

        info = FrameInfo(context=self.context, vertex_count=len(ndc) // 2)
        logger.debug("frame rendered: %s", info)
        self.frameRendered.emit(info)
        return info

    def update_view(self) -> None:
        self.vtk_widget.GetRenderWindow().Render()

    # =====================================================
    # State changes
    # =====================================================

    def toggle_clipped(self) -> None:
        self.context = self.context.toggled()
        logger.info("show clipped: %s", self.context.show_clipped)
        self.render_frame()

    def set_viewport(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            # minimized window
            logger.debug("ignoring empty viewport %dx%d", width, height)
            return
        self.context = self.context.resized(width, height)
        self.render_frame()

    def set_scene(self, scene: Scene) -> None:
        self.scene = scene
        self.render_frame()

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if obj is self.vtk_widget and event.type() == QtCore.QEvent.Resize:
            size = event.size()
            self.set_viewport(size.width(), size.height())
        return super().eventFilter(obj, event)

    def closeEvent(self, event) -> None:
        self.vtk_widget.Finalize()
        super().closeEvent(event)
