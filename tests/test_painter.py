from __future__ import annotations

import math

import pytest

from orbit_anim.config import settings
from orbit_anim.models.body import central_body, satellite
from orbit_anim.physics.geometry import segment_runs
from orbit_anim.visualization.painter import paint_frame, sphere_gradient
from orbit_anim.visualization.surface import RadialGradient


def _sequence(surface):
    """Compact paint log: clear / path / shadow / disk:<radius>."""
    seq = []
    for op in surface.ops:
        kind = op[0]
        if kind == "clear":
            seq.append("clear")
        elif kind == "stroke":
            seq.append("path")
        elif kind == "fill":
            shape = op[1][0]
            if shape[0] == "ellipse":
                seq.append("shadow")
            else:
                seq.append(f"disk:{shape[3]:.2f}")
    return seq


def _polylines(points, front):
    return [[(p.screen_x, p.screen_y) for p in run] for run in segment_runs(points, front=front)]


def test_far_side_satellite_is_painted_before_central_body(surface, posed_state) -> None:
    state = posed_state(orbit_phase=math.pi / 2)  # z3 = +B
    info = paint_frame(surface, state, 100, 100, central_body(), satellite())

    assert info.satellite_first is True
    assert info.satellite.z3 == pytest.approx(settings.ORBIT_B)
    sat_r = settings.SATELLITE_RADIUS * info.satellite_projection.scale_factor
    assert _sequence(surface) == [
        "clear", "path",
        "shadow", f"disk:{sat_r:.2f}",
        "shadow", "disk:25.00",
        "path",
    ]


def test_near_side_satellite_is_painted_last(surface, posed_state) -> None:
    state = posed_state(orbit_phase=3 * math.pi / 2)  # z3 = -B
    info = paint_frame(surface, state, 100, 100, central_body(), satellite())

    assert info.satellite_first is False
    sat_r = settings.SATELLITE_RADIUS * info.satellite_projection.scale_factor
    assert _sequence(surface) == [
        "clear", "path",
        "shadow", "disk:25.00",
        "path",
        "shadow", f"disk:{sat_r:.2f}",
    ]


def test_path_halves_follow_depth(surface, posed_state) -> None:
    state = posed_state(roll=0.4, pitch_phase=1.0)
    info = paint_frame(surface, state, 100, 100, central_body(), satellite())

    strokes = surface.of_kind("stroke")
    assert len(strokes) == 2
    behind_paths, front_paths = strokes[0][1], strokes[1][1]
    assert behind_paths == _polylines(info.points, front=False)
    assert front_paths == _polylines(info.points, front=True)

    # the halves meet at the depth crossings: no segment missing, none twice
    drawn = sum(len(p) - 1 for p in behind_paths + front_paths)
    assert drawn == settings.PATH_SAMPLES
    assert strokes[0][2] == settings.PATH_STROKE_STYLE
    assert strokes[0][3] == settings.PATH_LINE_WIDTH


def test_central_body_sits_at_canvas_center(surface, posed_state) -> None:
    state = posed_state(orbit_phase=1.0, yaw=0.5, pitch_phase=2.0, roll=0.3)
    info = paint_frame(surface, state, 100, 100, central_body(), satellite())
    assert (info.central_projection.screen_x, info.central_projection.screen_y) == (50.0, 50.0)


def test_clear_covers_logical_surface(surface, posed_state) -> None:
    paint_frame(surface, posed_state(), 100, 100, central_body(), satellite())
    assert surface.ops[0] == ("clear", 0.0, 0.0, 100.0, 100.0)


def test_shadow_intensity_differs_per_body(surface, posed_state) -> None:
    paint_frame(surface, posed_state(orbit_phase=math.pi / 2), 100, 100, central_body(), satellite())
    shadows = [op for op in surface.of_kind("fill") if op[1][0][0] == "ellipse"]
    sat_shadow, central_shadow = shadows
    assert sat_shadow[2] == f"rgba(0,0,0,{0.22 * 0.9:.4f})"
    assert central_shadow[2] == f"rgba(0,0,0,{0.22 * 1.0:.4f})"

    # ellipse below and wider than the body
    _, x, y, rx, ry = central_shadow[1][0]
    assert (x, y, rx, ry) == pytest.approx((50.0, 50.0 + 25 * 0.9, 25 * 1.35, 25 * 0.45))


def test_shadow_does_not_leak_fill_style(surface, posed_state) -> None:
    paint_frame(surface, posed_state(), 100, 100, central_body(), satellite())
    assert isinstance(surface.fill_style, RadialGradient)


def test_sphere_gradient_geometry(surface) -> None:
    grad = sphere_gradient(surface, 50.0, 50.0, 20.0, central_body().color)
    assert (grad.x0, grad.y0, grad.r0) == pytest.approx((43.0, 43.0, 1.6))
    assert (grad.x1, grad.y1, grad.r1) == (50.0, 50.0, 20.0)
    assert grad.stops == [(0.0, "#0d4b80"), (0.6, "#04294c"), (1.0, "#032037")]
