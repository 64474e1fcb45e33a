"""
Main Application Window
=======================
The window around the 3D city scene: year counter, key help, detail panel and
the frame loop.

Why is this file needed?
------------------------
1. Layout: It places the year counter above the scene and floats the detail
   panel over it.
2. Routing: It turns Qt key/mouse events into NavigationController commands and
   rebuilds the scene when the controller reports a new year.
3. Frame loop: A QTimer moves the camera, picks the block under the crosshair
   and renders, once per tick.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QMessageBox
from PySide6.QtCore import Qt, QEvent, QObject, QPoint, QTimer
from PySide6.QtGui import QCursor, QKeyEvent, QMouseEvent, QCloseEvent

from cityblocks.config import DEFAULT_YEAR, FRAME_INTERVAL_MS, VISIBLE_APP_NAME
from cityblocks.controller.navigation import NavigationController
from cityblocks.model.io import Dataset
from cityblocks.model.state import ViewState
from cityblocks.model.years import YearIndex, resolve_start_year
from cityblocks.view.registry import PickRegistry
from cityblocks.view.widgets.info_panel import InfoPanel
from cityblocks.view.widgets.scene_3d import CityScene

logger = logging.getLogger(__name__)

# Qt key -> controller key name
KEY_NAMES = {
    Qt.Key_W: "W",
    Qt.Key_A: "A",
    Qt.Key_S: "S",
    Qt.Key_D: "D",
    Qt.Key_Q: "Q",
    Qt.Key_E: "E",
    Qt.Key_P: "P",
}

HELP_TEXT = "W/A/S/D: walk   Q/E: previous/next year   click: look around   Esc: release mouse   P: pause"


class MainWindow(QMainWindow):
    def __init__(self, dataset: Optional[Dataset] = None) -> None:
        super().__init__()
        self.dataset: Optional[Dataset] = dataset

        self.state = ViewState()
        self.registry = PickRegistry()
        year_index = dataset.year_index if dataset is not None else YearIndex({})
        self.controller = NavigationController(self.state, year_index)
        self.controller.add_year_listener(self.on_year_changed)

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1280, 800)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP BAR ---
        top_bar = QWidget()
        top_bar.setStyleSheet("QWidget { background-color: #F5F7FA; }")
        top_layout = QHBoxLayout(top_bar)
        top_layout.setContentsMargins(10, 6, 10, 6)

        self.lbl_year = QLabel("Year: -")
        self.lbl_year.setStyleSheet("QLabel { font-size: 18px; font-weight: bold; }")
        top_layout.addWidget(self.lbl_year)
        top_layout.addStretch()

        self.lbl_help = QLabel(HELP_TEXT)
        self.lbl_help.setStyleSheet("QLabel { color: #555; }")
        top_layout.addWidget(self.lbl_help)

        main_layout.addWidget(top_bar)

        # --- 2. SCENE ---
        self.scene = CityScene(self.state, self.registry)
        main_layout.addWidget(self.scene, stretch=1)

        self.info_panel = InfoPanel(self.scene)
        self.info_panel.move(10, 10)

        # All input on the render widget goes through the controller,
        # VTK's own camera/keyboard bindings never see it
        self.scene.plotter.setFocusPolicy(Qt.StrongFocus)
        self.scene.plotter.setMouseTracking(True)
        self.scene.plotter.installEventFilter(self)

        # --- 3. FRAME LOOP ---
        self.timer = QTimer(self)
        self.timer.setInterval(FRAME_INTERVAL_MS)
        self.timer.timeout.connect(self.on_frame)

        if dataset is not None:
            self._show_start_year()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self) -> None:
        """Start the frame loop (no-op without data)."""
        if self.dataset is None or self.state.year is None:
            return
        self.scene.plotter.setFocus()
        self.timer.start()

    def show_error(self, message: str) -> None:
        """Visible error state for a dataset that could not be loaded."""
        self.timer.stop()
        self.lbl_year.setText("No data")
        self.lbl_year.setStyleSheet("QLabel { font-size: 18px; font-weight: bold; color: #B00020; }")
        self.lbl_help.setText(message)
        QMessageBox.critical(self, "Dataset Error", message)

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def on_year_changed(self, year: int) -> None:
        self._rebuild(year)

    def on_frame(self) -> None:
        if not self.controller.advance_frame():
            return
        self.scene.apply_camera()
        record = self.registry.lookup(self.scene.pick_center())
        self.info_panel.show_record(record)
        self.scene.render()

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is not self.scene.plotter:
            return super().eventFilter(watched, event)

        etype = event.type()
        if etype == QEvent.KeyPress:
            self._handle_key(event, pressed=True)
            return True
        if etype == QEvent.KeyRelease:
            self._handle_key(event, pressed=False)
            return True
        if etype == QEvent.MouseButtonPress:
            self._grab_pointer()
            return True
        if etype == QEvent.MouseMove:
            self._handle_mouse_move(event)
            return True
        if etype in (QEvent.MouseButtonRelease, QEvent.MouseButtonDblClick, QEvent.Wheel):
            return True
        return super().eventFilter(watched, event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        self._handle_key(event, pressed=True)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        self._handle_key(event, pressed=False)

    def _handle_key(self, event: QKeyEvent, pressed: bool) -> None:
        # Auto-repeat sends release/press pairs while a key is held
        if event.isAutoRepeat():
            return
        if pressed and event.key() == Qt.Key_Escape:
            self._release_pointer()
            return
        name = KEY_NAMES.get(event.key())
        if name is None:
            return
        if pressed:
            self.controller.key_down(name)
        else:
            self.controller.key_up(name)

    def _view_center(self) -> QPoint:
        return self.scene.plotter.rect().center()

    def _grab_pointer(self) -> None:
        if self.state.pointer_grabbed:
            return
        self.controller.set_pointer_grabbed(True)
        self.scene.plotter.setFocus()
        self.scene.plotter.grabMouse()
        self.scene.plotter.setCursor(Qt.BlankCursor)
        QCursor.setPos(self.scene.plotter.mapToGlobal(self._view_center()))
        logger.debug("Pointer grabbed.")

    def _release_pointer(self) -> None:
        if not self.state.pointer_grabbed:
            return
        self.controller.set_pointer_grabbed(False)
        self.scene.plotter.releaseMouse()
        self.scene.plotter.unsetCursor()
        logger.debug("Pointer released.")

    def _handle_mouse_move(self, event: QMouseEvent) -> None:
        if not self.state.pointer_grabbed:
            return
        center = self._view_center()
        pos = event.position().toPoint()
        dx = pos.x() - center.x()
        dy = pos.y() - center.y()
        if dx == 0 and dy == 0:
            return
        self.controller.mouse_moved(dx, dy)
        # Re-center so the next event is again a relative movement
        QCursor.setPos(self.scene.plotter.mapToGlobal(center))

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _show_start_year(self) -> None:
        year = resolve_start_year(self.dataset.year_index, DEFAULT_YEAR)
        if year is None:
            self.lbl_year.setText("No data")
            self.lbl_help.setText(f"No valid rows in '{self.dataset.source}'.")
            logger.error(f"Dataset '{self.dataset.source}' has no valid rows.")
            return
        self.state.year = year
        self._rebuild(year)

    def _rebuild(self, year: int) -> None:
        """Tear down and rebuild the scene for the given year."""
        records = self.dataset.year_index[year]
        self.info_panel.show_record(None)
        self.scene.build_year(records, self.dataset.global_max)
        self.lbl_year.setText(f"Year: {year}")

    def closeEvent(self, event: QCloseEvent) -> None:
        self.timer.stop()
        self._release_pointer()
        self.scene.close()
        event.accept()
