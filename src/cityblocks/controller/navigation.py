"""
Navigation Controller
=====================
Keyboard/mouse handling for the walk-through view, kept free of Qt so it can be
driven from tests.

Keys (case-insensitive names):
    W / S   walk forward / backward along the look direction
    A / D   strafe left / right
    Q / E   previous / next reporting year (only if that year exists)
    P       pause / resume the frame loop
"""
from __future__ import annotations

import logging
import math
from typing import Callable, List, Tuple, TYPE_CHECKING

import numpy as np

from cityblocks.model.state import ViewState
from cityblocks.model.years import YearIndex

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MOVE_SPEED = 2.0
MOVE_SCALE = 1.0 / 100.0  # applied once per frame
MOUSE_SENSITIVITY = 1.0 / 100.0  # radians per pixel
THETA_MIN = 0.1
THETA_MAX = math.pi - 0.1

KEY_FORWARD = "W"
KEY_BACK = "S"
KEY_LEFT = "A"
KEY_RIGHT = "D"
KEY_PREV_YEAR = "Q"
KEY_NEXT_YEAR = "E"
KEY_PAUSE = "P"

YearChangedCallback = Callable[[int], None]


def look_direction(theta: float, phi: float) -> npt.NDArray[np.float64]:
    """Unit vector of the spherical angles (theta from +Y, phi from +X to +Z)."""
    return np.array(
        [
            math.sin(theta) * math.cos(phi),
            math.cos(theta),
            math.sin(theta) * math.sin(phi),
        ],
        dtype=np.float64,
    )


def clamp_theta(theta: float) -> float:
    return min(THETA_MAX, max(THETA_MIN, theta))


class NavigationController:
    """Owns the ViewState and applies input to it."""

    def __init__(self, state: ViewState, year_index: YearIndex) -> None:
        self.state = state
        self.year_index = year_index
        self._year_listeners: List[YearChangedCallback] = []

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def add_year_listener(self, callback: YearChangedCallback) -> None:
        """Called with the new year after every successful year change."""
        self._year_listeners.append(callback)

    def key_down(self, key: str) -> bool:
        """
        Handle a key press.

        Returns:
            True if the key is bound (even if the command was a no-op).
        """
        key = key.upper()
        if key == KEY_FORWARD:
            self.state.dz = MOVE_SPEED
        elif key == KEY_BACK:
            self.state.dz = -MOVE_SPEED
        elif key == KEY_LEFT:
            self.state.dx = -MOVE_SPEED
        elif key == KEY_RIGHT:
            self.state.dx = MOVE_SPEED
        elif key == KEY_PREV_YEAR:
            self.previous_year()
        elif key == KEY_NEXT_YEAR:
            self.next_year()
        elif key == KEY_PAUSE:
            self.toggle_pause()
        else:
            return False
        return True

    def key_up(self, key: str) -> bool:
        key = key.upper()
        if key in (KEY_FORWARD, KEY_BACK):
            self.state.dz = 0.0
        elif key in (KEY_LEFT, KEY_RIGHT):
            self.state.dx = 0.0
        else:
            return False
        return True

    def mouse_moved(self, dx_px: float, dy_px: float) -> None:
        """Turn the view by a relative pointer movement (only while grabbed)."""
        if not self.state.pointer_grabbed:
            return
        self.state.theta = clamp_theta(self.state.theta + dy_px * MOUSE_SENSITIVITY)
        self.state.phi += dx_px * MOUSE_SENSITIVITY

    def set_pointer_grabbed(self, grabbed: bool) -> None:
        self.state.pointer_grabbed = grabbed
        if not grabbed:
            # Key-up events are lost while focus moves elsewhere
            self.state.stop_moving()

    def toggle_pause(self) -> bool:
        self.state.paused = not self.state.paused
        logger.info("Frame loop paused." if self.state.paused else "Frame loop resumed.")
        return self.state.paused

    def previous_year(self) -> bool:
        return self.step_year(-1)

    def next_year(self) -> bool:
        return self.step_year(+1)

    def step_year(self, delta: int) -> bool:
        """
        Move to year + delta if exactly that year exists.

        Missing years are not skipped over and there is no wraparound.

        Returns:
            True if the year changed.
        """
        if self.state.year is None:
            return False
        target = self.state.year + delta
        if not self.year_index.has_year(target):
            logger.debug(f"Year {target} not available, staying at {self.state.year}.")
            return False

        self.state.year = target
        logger.info(f"Switched to year {target}.")
        for callback in self._year_listeners:
            callback(target)
        return True

    def advance_frame(self) -> bool:
        """
        Apply the held movement keys once.

        Returns:
            False while paused (nothing should be updated), True otherwise.
        """
        if self.state.paused:
            return False

        direction = self.look_direction()
        vx, vz = direction[0], direction[2]
        dx, dz = self.state.dx, self.state.dz

        pos = self.state.position
        pos[0] += (vx * dz - vz * dx) * MOVE_SCALE
        pos[2] += (vz * dz + vx * dx) * MOVE_SCALE
        return True

    def look_direction(self) -> npt.NDArray[np.float64]:
        return look_direction(self.state.theta, self.state.phi)

    def focal_point(self) -> Tuple[float, float, float]:
        """Point one unit ahead of the camera, for camera.focal_point."""
        target = self.state.position + self.look_direction()
        return float(target[0]), float(target[1]), float(target[2])
