"""
Animation settings (constants + small helpers).
Units: logical (CSS) pixels, seconds (s), radians (rad).
"""
from __future__ import annotations

import math
import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
VALIDATE_ON_IMPORT = False

# Surface (logical size is fixed, the backing store follows the DPR)
LOGICAL_WIDTH = 100
LOGICAL_HEIGHT = 100
MIN_DPR = 1.0
DEFAULT_DPR = 2.0  # used for exports where no display reports one

# Bodies
CENTRAL_RADIUS = 25.0
SATELLITE_RADIUS = 10.0

# Orbit ellipse
ORBIT_A = 40.0  # semi-major
ORBIT_B = 20.0  # semi-minor
PATH_SAMPLES = 100

# Angular rates (rad/s)
ORBIT_SPEED = 4.0
YAW_SPEED = 0.0
PITCH_SPEED = 3.0   # phase rate of the tilt oscillation
ROLL_SPEED = 0.021

# Pitch oscillates in [-PITCH_AMPLITUDE, +PITCH_AMPLITUDE]
PITCH_AMPLITUDE = math.pi / 7

# Projection
FOCAL_LENGTH = 500.0

# Clock
MAX_DELTA_TIME = 0.033  # s, cap after a stall

# Shading
LIGHT_OFFSET = 0.35        # highlight offset toward upper-left, fraction of r
HIGHLIGHT_RADIUS = 0.08    # inner gradient circle, fraction of r
GRADIENT_BASE_STOP = 0.6

SHADOW_ALPHA = 0.22
SHADOW_OFFSET_Y = 0.9
SHADOW_RADIUS_X = 1.35
SHADOW_RADIUS_Y = 0.45
CENTRAL_SHADOW_INTENSITY = 1.0
SATELLITE_SHADOW_INTENSITY = 0.9

# Colours
CENTRAL_COLOR = {"base": "#04294c", "mid": "#0d4b80", "rim": "#032037"}
SATELLITE_COLOR = {"base": "#073067", "mid": "#1a67a6", "rim": "#021a2f"}
PATH_STROKE_STYLE = "rgba(255,255,255,0.3)"
PATH_LINE_WIDTH = 1.0

# Labels of the toggle control
LABEL_RUNNING = "Pause"
LABEL_PAUSED = "Resume"

# Interactive window / export
FRAME_INTERVAL_MS = 16
DEFAULT_EXPORT_FPS = 30
DEFAULT_EXPORT_FRAMES = 120
BACKGROUND_COLOR = "#0b1220"
GRADIENT_RESOLUTION = 64  # texels per side of a rasterised sphere gradient


def clamp_delta_time(raw: float) -> float:
    return max(0.0, min(float(MAX_DELTA_TIME), float(raw)))


def clamp_device_pixel_ratio(dpr: Optional[float]) -> float:
    return max(float(MIN_DPR), float(dpr or 1.0))


def validate_settings() -> None:
    if LOGICAL_WIDTH <= 0 or LOGICAL_HEIGHT <= 0:
        raise ValueError("LOGICAL_WIDTH and LOGICAL_HEIGHT must be > 0")
    if CENTRAL_RADIUS <= 0:
        raise ValueError("CENTRAL_RADIUS must be > 0")
    if SATELLITE_RADIUS <= 0:
        raise ValueError("SATELLITE_RADIUS must be > 0")
    if ORBIT_A <= 0 or ORBIT_B <= 0:
        raise ValueError("ORBIT_A and ORBIT_B must be > 0")
    if PATH_SAMPLES < 2:
        raise ValueError("PATH_SAMPLES must be >= 2")
    if MAX_DELTA_TIME <= 0:
        raise ValueError("MAX_DELTA_TIME must be > 0")
    if FOCAL_LENGTH <= 0:
        raise ValueError("FOCAL_LENGTH must be > 0")

    # Rotations preserve length, so the orbit never leaves this sphere.
    if max(ORBIT_A, ORBIT_B) >= FOCAL_LENGTH:
        raise ValueError("orbit extent must stay inside FOCAL_LENGTH")

    if not 0.0 < GRADIENT_BASE_STOP < 1.0:
        raise ValueError("GRADIENT_BASE_STOP must be in (0, 1)")
    if DEFAULT_EXPORT_FPS <= 0:
        raise ValueError("DEFAULT_EXPORT_FPS must be > 0")
    if DEFAULT_EXPORT_FRAMES <= 0:
        raise ValueError("DEFAULT_EXPORT_FRAMES must be > 0")


if VALIDATE_ON_IMPORT:
    validate_settings()
