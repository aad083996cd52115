from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import math  # noqa: E402

import pytest  # noqa: E402

from orbit_anim.physics.state import AnimatorState  # noqa: E402
from orbit_anim.visualization.surface import RecordingSurface  # noqa: E402


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(device_pixel_ratio=1.0)


@pytest.fixture
def posed_state():
    """State factory with explicit angles and no rotation of the orbital plane."""
    def make(orbit_phase=0.0, yaw=0.0, pitch_phase=0.0, roll=0.0):
        s = AnimatorState(now=0.0)
        s.orbit_phase = orbit_phase
        s.yaw = yaw
        s.pitch_phase = pitch_phase
        s.roll = roll
        return s
    return make


@pytest.fixture
def quarter_turns():
    return [0.0, math.pi / 2, math.pi, 3 * math.pi / 2, 2 * math.pi]
