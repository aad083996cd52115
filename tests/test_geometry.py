from __future__ import annotations

import math

import numpy as np
import pytest

from orbit_anim.config import settings
from orbit_anim.physics.geometry import (
    orbit_point,
    partition_by_depth,
    rotate,
    sample_angles,
    segment_runs,
)
from orbit_anim.visualization.painter import orbit_path_points, satellite_point


def test_zero_rotation_is_the_plain_ellipse() -> None:
    angles = np.linspace(0.0, 2 * math.pi, 37)
    x, y, z = orbit_point(angles, 0.0, 0.0, 0.0)
    np.testing.assert_allclose(x, settings.ORBIT_A * np.cos(angles))
    np.testing.assert_allclose(y, 0.0)
    np.testing.assert_allclose(z, settings.ORBIT_B * np.sin(angles))


def test_angle_zero_without_rotation() -> None:
    x, y, z = orbit_point(0.0, 0.0, 0.0, 0.0)
    assert (float(x), float(y), float(z)) == (40.0, 0.0, 0.0)


def test_rotation_preserves_length() -> None:
    rng = np.random.default_rng(7)
    pts = rng.uniform(-50, 50, size=(3, 20))
    x3, y3, z3 = rotate(pts[0], pts[1], pts[2], 0.4, -0.3, 1.2)
    np.testing.assert_allclose(np.sqrt(x3**2 + y3**2 + z3**2), np.linalg.norm(pts, axis=0))


def test_roll_then_pitch_then_yaw_order() -> None:
    # roll of 90 deg moves +x to +y; pitch of 90 deg then moves +y to +z;
    # yaw of 90 deg then moves +z to +x.
    half = math.pi / 2
    x3, y3, z3 = rotate(1.0, 0.0, 0.0, half, half, half)
    assert (x3, y3, z3) == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)

    x3, y3, z3 = rotate(1.0, 0.0, 0.0, half, half, 0.0)
    assert (x3, y3, z3) == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)


def test_sample_angles_close_the_loop() -> None:
    angles = sample_angles(100)
    assert len(angles) == 101
    assert angles[0] == 0.0
    assert angles[-1] == pytest.approx(2 * math.pi)


@pytest.mark.parametrize("roll,pitch,yaw", [
    (0.0, 0.0, 0.0),
    (0.3, math.pi / 7, 0.0),
    (1.1, -0.2, 2.5),
])
def test_depth_partition_is_exhaustive_and_disjoint(roll, pitch, yaw) -> None:
    points = orbit_path_points(50, 50, roll, pitch, yaw)
    behind, front = partition_by_depth(points)

    assert all(p.z3 <= 0 for p in behind)
    assert all(p.z3 > 0 for p in front)
    assert {p.index for p in behind}.isdisjoint({p.index for p in front})
    assert sorted(p.index for p in behind + front) == [p.index for p in points]


def test_segment_runs_share_the_boundary_samples() -> None:
    points = orbit_path_points(50, 50, 0.0, 0.0, 0.0, samples=8)
    # sin(pi) is a hair above zero, so sample 4 lands in front
    front = segment_runs(points, front=True)
    behind = segment_runs(points, front=False)
    assert [[p.index for p in run] for run in front] == [[0, 1, 2, 3, 4, 5]]
    assert [[p.index for p in run] for run in behind] == [[5, 6, 7, 8]]
    assert segment_runs(points[:1], front=True) == []


@pytest.mark.parametrize("roll,pitch,yaw", [
    (0.4, math.sin(1.0) * math.pi / 7, 0.0),
    (1.1, -0.2, 2.5),
])
def test_segment_runs_cover_every_segment_once(roll, pitch, yaw) -> None:
    points = orbit_path_points(50, 50, roll, pitch, yaw)
    segments = []
    for front in (False, True):
        for run in segment_runs(points, front=front):
            segments += [(a.index, b.index) for a, b in zip(run, run[1:])]
    assert sorted(segments) == [(i, i + 1) for i in range(settings.PATH_SAMPLES)]
