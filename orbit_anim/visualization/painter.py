# orbit_anim/visualization/painter.py
"""
Depth-ordered painter for one animation frame.

Paint order: behind half of the path, satellite if it is on the far side,
central body, front half of the path, satellite if it is on the near side.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from orbit_anim.config.settings import (
    PATH_SAMPLES,
    PATH_STROKE_STYLE,
    PATH_LINE_WIDTH,
    LIGHT_OFFSET,
    HIGHLIGHT_RADIUS,
    GRADIENT_BASE_STOP,
    SHADOW_ALPHA,
    SHADOW_OFFSET_Y,
    SHADOW_RADIUS_X,
    SHADOW_RADIUS_Y,
)
from orbit_anim.models.body import Body, ProjectedPoint, SphereColor
from orbit_anim.physics.geometry import (
    orbit_point,
    sample_angles,
    partition_by_depth,
    segment_runs,
    rotate,
)
from orbit_anim.physics.projection import Projection, project, project_many


@dataclass
class FrameInfo:
    pitch: float
    points: List[ProjectedPoint]
    behind: List[ProjectedPoint]
    front: List[ProjectedPoint]
    satellite: ProjectedPoint
    satellite_projection: Projection
    central_projection: Projection
    satellite_first: bool


def sphere_gradient(surface, x, y, r, color: SphereColor):
    """Radial gradient lit from the upper left."""
    lx = x - r * LIGHT_OFFSET
    ly = y - r * LIGHT_OFFSET
    grad = surface.create_radial_gradient(lx, ly, r * HIGHLIGHT_RADIUS, x, y, r)
    grad.add_color_stop(0.0, color.mid)
    grad.add_color_stop(GRADIENT_BASE_STOP, color.base)
    grad.add_color_stop(1.0, color.rim)
    return grad


def soft_shadow(surface, x, y, r, intensity=0.45):
    surface.save()
    surface.fill_style = f"rgba(0,0,0,{SHADOW_ALPHA * intensity:.4f})"
    surface.begin_path()
    surface.ellipse(x, y + r * SHADOW_OFFSET_Y, r * SHADOW_RADIUS_X, r * SHADOW_RADIUS_Y)
    surface.fill()
    surface.restore()


def draw_body(surface, body: Body, proj: Projection):
    r = body.screen_radius(proj.scale_factor)
    soft_shadow(surface, proj.screen_x, proj.screen_y, r, body.shadow_intensity)
    surface.begin_path()
    surface.arc(proj.screen_x, proj.screen_y, r)
    surface.fill_style = sphere_gradient(surface, proj.screen_x, proj.screen_y, r, body.color)
    surface.fill()


def draw_path(surface, runs: List[List[ProjectedPoint]]):
    if not runs:
        return
    surface.save()
    surface.stroke_style = PATH_STROKE_STYLE
    surface.line_width = PATH_LINE_WIDTH
    surface.begin_path()
    for run in runs:
        surface.move_to(run[0].screen_x, run[0].screen_y)
        for p in run[1:]:
            surface.line_to(p.screen_x, p.screen_y)
    surface.stroke()
    surface.restore()


def orbit_path_points(cx, cy, roll, pitch, yaw, samples=PATH_SAMPLES) -> List[ProjectedPoint]:
    angles = sample_angles(samples)
    x3, y3, z3 = orbit_point(angles, roll, pitch, yaw)
    sx, sy, _ = project_many(x3, y3, z3, cx, cy)
    return [
        ProjectedPoint(i, float(x3[i]), float(y3[i]), float(z3[i]), float(sx[i]), float(sy[i]))
        for i in range(len(angles))
    ]


def satellite_point(cx, cy, orbit_phase, roll, pitch, yaw):
    # Same vectorised path as the samples, so the dot lands exactly on the path.
    x3, y3, z3 = orbit_point(np.array([orbit_phase]), roll, pitch, yaw)
    x3, y3, z3 = float(x3[0]), float(y3[0]), float(z3[0])
    proj = project(x3, y3, z3, cx, cy)
    return ProjectedPoint(-1, x3, y3, z3, proj.screen_x, proj.screen_y), proj


def paint_frame(surface, state, width, height, central: Body, sat: Body,
                samples=PATH_SAMPLES) -> FrameInfo:
    """
    Paint the current pose of `state` onto `surface` (logical size width x height).
    Does not advance the state.
    """
    cx = width / 2
    cy = height / 2
    surface.clear_rect(0, 0, width, height)

    pitch = state.pitch
    roll = state.roll
    yaw = state.yaw

    points = orbit_path_points(cx, cy, roll, pitch, yaw, samples)
    behind, front = partition_by_depth(points)

    draw_path(surface, segment_runs(points, front=False))

    sat_point, sat_proj = satellite_point(cx, cy, state.orbit_phase, roll, pitch, yaw)
    ox, oy, oz = rotate(0.0, 0.0, 0.0, roll, pitch, yaw)
    central_proj = project(ox, oy, oz, cx, cy)

    satellite_first = sat_point.z3 > 0
    if satellite_first:
        draw_body(surface, sat, sat_proj)

    draw_body(surface, central, central_proj)

    draw_path(surface, segment_runs(points, front=True))

    if not satellite_first:
        draw_body(surface, sat, sat_proj)

    return FrameInfo(
        pitch=pitch,
        points=points,
        behind=behind,
        front=front,
        satellite=sat_point,
        satellite_projection=sat_proj,
        central_projection=central_proj,
        satellite_first=satellite_first,
    )
