from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from orbit_anim.config.settings import FOCAL_LENGTH


@dataclass(frozen=True)
class Projection:
    screen_x: float
    screen_y: float
    scale_factor: float


def perspective_factor(z, focal_length: float = FOCAL_LENGTH):
    """
    f / (f - z). Grows as z approaches the focal distance (toward the viewer).
    Works on scalars and arrays.
    """
    z = np.asarray(z, dtype=float)
    if np.any(z >= focal_length):
        raise ValueError(f"Point at or behind the eye: z >= focal_length ({focal_length})")
    return focal_length / (focal_length - z)


def project(x: float, y: float, z: float, cx: float, cy: float,
            scale: float = 1.0, focal_length: float = FOCAL_LENGTH) -> Projection:
    """
    Perspective-project a 3D point onto the canvas centred at (cx, cy).
    The origin always lands on (cx, cy).
    """
    s = float(perspective_factor(z, focal_length))
    return Projection(
        screen_x=float(cx + x * s * scale),
        screen_y=float(cy + y * s * scale),
        scale_factor=s,
    )


def project_many(x, y, z, cx: float, cy: float,
                 scale: float = 1.0, focal_length: float = FOCAL_LENGTH):
    """
    Vectorised `project` for arrays of points.
    Returns (screen_x, screen_y, scale_factor) arrays.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    s = perspective_factor(z, focal_length)
    return cx + x * s * scale, cy + y * s * scale, s
