# test_state.py
"""Unit tests for cityblocks.model.state"""

import math

import numpy as np

from cityblocks.model.state import EYE_HEIGHT, ViewState


def test_defaults():
    state = ViewState()
    assert state.year is None
    assert (state.dx, state.dz) == (0.0, 0.0)
    assert not state.paused
    assert not state.pointer_grabbed


def test_instances_do_not_share_position():
    a, b = ViewState(), ViewState()
    a.position[0] = 5.0
    assert b.position[0] == 0.0


def test_reset_camera_faces_grid():
    state = ViewState(theta=1.0, phi=2.0)
    state.reset_camera(side=3)
    assert np.allclose(state.position, [-6.0, EYE_HEIGHT, 0.0])
    assert state.theta == math.pi / 2
    assert state.phi == 0.0


def test_stop_moving():
    state = ViewState(dx=2.0, dz=-2.0)
    state.stop_moving()
    assert (state.dx, state.dz) == (0.0, 0.0)
