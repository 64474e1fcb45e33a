"""
View State (Data Model)
=======================
Holds the mutable state of a running session in one explicitly constructed
object: the camera pose, the selected year and the held movement keys.

Views read from this object; the NavigationController writes to it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Eye height above the ground plane when a year is (re)built
EYE_HEIGHT = 0.15


@dataclass
class ViewState:
    """
    Camera pose and input state.

    theta is the polar angle measured from +Y (pi/2 = horizontal),
    phi the azimuth in the XZ plane measured from +X towards +Z.
    """
    position: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    theta: float = math.pi / 2
    phi: float = math.pi / 2

    year: Optional[int] = None

    # Held-key movement deltas: dx strafes, dz moves along the look direction
    dx: float = 0.0
    dz: float = 0.0

    paused: bool = False
    pointer_grabbed: bool = False

    def reset_camera(self, side: int) -> None:
        """Place the camera west of a grid of the given side, facing +X."""
        self.position = np.array([-2.0 * side, EYE_HEIGHT, 0.0], dtype=np.float64)
        self.theta = math.pi / 2
        self.phi = 0.0
        logger.debug(f"Camera reset to {self.position.tolist()} for grid side {side}.")

    def stop_moving(self) -> None:
        self.dx = 0.0
        self.dz = 0.0
