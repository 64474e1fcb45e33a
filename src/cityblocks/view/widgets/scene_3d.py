"""
3D City Scene (PyVista Wrapper)
"""

from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Sequence

import numpy as np
import numpy.typing as npt

from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel
from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor
import pyvista as pv
from vtkmodules.vtkRenderingCore import vtkPropPicker

from cityblocks.config import GRASS_TEXTURE_PATH
from cityblocks.controller.layout import (
    FLOOR_CENTER_Y, FLOOR_COLOR, FLOOR_SIZE, SKY_COLOR, ColorBucket, YearLayout, compute_layout
)
from cityblocks.controller.navigation import look_direction
from cityblocks.model.records import CityRecord
from cityblocks.model.state import ViewState
from cityblocks.view.formatting import bucket_label
from cityblocks.view.registry import PickRegistry

logger = logging.getLogger(__name__)

FIELD_OF_VIEW = 75.0
CLIPPING_RANGE = (0.1, 1000.0)
FLOOR_TEXTURE_REPEAT = 500.0

PlotterFactory = Callable[[QWidget], pv.BasePlotter]


class CityScene(QWidget):
    """
    Walk-through view of one year's city blocks.

    Every year change tears the whole scene down and builds it again; the pick
    registry is rebuilt together with the actors.
    """

    def __init__(
        self,
        state: ViewState,
        registry: PickRegistry,
        parent: Optional[QWidget] = None,
        plotter_factory: Optional[PlotterFactory] = None,
    ) -> None:
        super().__init__(parent)
        self.state = state
        self.registry = registry

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        # Tests pass an off-screen pv.Plotter, which is not a widget
        factory = plotter_factory or QtInteractor
        self.plotter: pv.BasePlotter = factory(self)
        if isinstance(self.plotter, QWidget):
            self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._floor_actor: Optional[pv.Actor] = None
        self._block_actors: List[pv.Actor] = []
        self._legend_shown: bool = False

        self._picker = vtkPropPicker()
        self._floor_texture: Optional[pv.Texture] = self._load_floor_texture()

        self._setup_crosshair()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def build_year(self, records: Sequence[CityRecord], global_max: float) -> YearLayout:
        """
        Replace the scene with the blocks of one year and reset the camera.

        Args:
            records: The year's records in source order.
            global_max: Dataset-wide maximum emissions (height denominator).
        """
        self.clear_scene()

        layout = compute_layout(records, global_max)

        self.plotter.set_background(SKY_COLOR)
        self._add_floor()

        for block in layout.blocks:
            box = pv.Box(bounds=block.bounds)
            actor = self.plotter.add_mesh(
                box,
                color=block.color,
                pickable=True,
                show_scalar_bar=False,
                reset_camera=False,
            )
            self._block_actors.append(actor)
            self.registry.register(actor, block.record)

        for spec in layout.lights:
            light = pv.Light(
                position=spec.position,
                focal_point=(0.0, 0.0, 0.0),
                color=spec.color,
                intensity=spec.intensity,
                positional=True,
                cone_angle=90.0,
                attenuation_values=spec.attenuation,
            )
            self.plotter.add_light(light)

        self._add_legend()

        self.state.reset_camera(layout.side)
        self.apply_camera()
        self.plotter.render()

        logger.info(f"Scene built: {len(layout)} block(s), grid side {layout.side}.")
        return layout

    def clear_scene(self) -> None:
        """Remove every actor and light and forget all pick entries."""
        for actor in self._block_actors:
            self.plotter.remove_actor(actor, render=False)
        self._block_actors.clear()

        if self._floor_actor is not None:
            self.plotter.remove_actor(self._floor_actor, render=False)
            self._floor_actor = None

        if self._legend_shown:
            self.plotter.remove_legend(render=False)
            self._legend_shown = False

        self.plotter.remove_all_lights()
        self.registry.clear()

    def apply_camera(self) -> None:
        """Copy the ViewState pose onto the VTK camera."""
        cam = self.plotter.camera
        pos = self.state.position
        cam.position = (float(pos[0]), float(pos[1]), float(pos[2]))
        cam.focal_point = tuple(float(v) for v in pos + self._look_vector())
        cam.up = (0.0, 1.0, 0.0)
        cam.view_angle = FIELD_OF_VIEW
        cam.clipping_range = CLIPPING_RANGE

    def pick_center(self) -> Optional[pv.Actor]:
        """Nearest actor on the camera's forward ray (the viewport center)."""
        renderer = self.plotter.renderer
        w, h = renderer.GetSize()
        if w < 1 or h < 1:
            return None
        if not self._picker.Pick(w / 2.0, h / 2.0, 0.0, renderer):
            return None
        return self._picker.GetActor()

    def render(self) -> None:
        self.plotter.render()

    @property
    def block_actors(self) -> List[pv.Actor]:
        return list(self._block_actors)

    @property
    def floor_actor(self) -> Optional[pv.Actor]:
        return self._floor_actor

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(SKY_COLOR)
        self.plotter.enable_anti_aliasing()
        self.plotter.camera.view_angle = FIELD_OF_VIEW

    def _look_vector(self) -> npt.NDArray[np.float64]:
        return look_direction(self.state.theta, self.state.phi)

    @staticmethod
    def _load_floor_texture() -> Optional[pv.Texture]:
        if not os.path.exists(GRASS_TEXTURE_PATH):
            logger.info("No floor texture found, using a flat floor color.")
            return None
        try:
            texture = pv.read_texture(GRASS_TEXTURE_PATH)
            texture.repeat = True
            return texture
        except Exception as e:
            logger.warning(f"Could not load floor texture '{GRASS_TEXTURE_PATH}': {e}")
            return None

    def _add_floor(self) -> None:
        x_len, y_len, z_len = FLOOR_SIZE
        floor = pv.Cube(center=(0.0, FLOOR_CENTER_Y, 0.0), x_length=x_len, y_length=y_len, z_length=z_len)

        if self._floor_texture is not None:
            floor = floor.texture_map_to_plane(
                origin=(-x_len / 2, 0.0, -z_len / 2),
                point_u=(x_len / 2, 0.0, -z_len / 2),
                point_v=(-x_len / 2, 0.0, z_len / 2),
            )
            floor.active_texture_coordinates = floor.active_texture_coordinates * FLOOR_TEXTURE_REPEAT
            self._floor_actor = self.plotter.add_mesh(
                floor, texture=self._floor_texture, lighting=False, pickable=True, reset_camera=False
            )
        else:
            self._floor_actor = self.plotter.add_mesh(
                floor, color=FLOOR_COLOR, lighting=False, pickable=True, reset_camera=False
            )

    def _add_legend(self) -> None:
        entries = [[bucket_label(bucket), bucket.color] for bucket in ColorBucket]
        self.plotter.add_legend(
            labels=entries,
            bcolor="white",
            border=True,
            size=(0.22, 0.18),
            loc="lower right",
            face="rectangle",
        )
        self._legend_shown = True

    def _setup_crosshair(self) -> None:
        """Floating '+' in the middle of the view."""
        self.crosshair = QLabel("+", self)
        self.crosshair.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.crosshair.setStyleSheet("QLabel { color: white; font-size: 22px; font-weight: bold; background: transparent; }")
        self.crosshair.adjustSize()
        self._center_crosshair()

    def _center_crosshair(self) -> None:
        x = (self.width() - self.crosshair.width()) // 2
        y = (self.height() - self.crosshair.height()) // 2
        self.crosshair.move(x, y)
        self.crosshair.raise_()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._center_crosshair()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
