# orbit_anim/physics/geometry.py
import numpy as np

from orbit_anim.config.settings import ORBIT_A, ORBIT_B, PITCH_AMPLITUDE, PATH_SAMPLES


def pitch_from_phase(pitch_phase):
    """
    Tilt of the orbital plane. Oscillates smoothly in [-PITCH_AMPLITUDE, PITCH_AMPLITUDE]
    instead of accumulating like the other angles.
    """
    return float(np.sin(pitch_phase) * PITCH_AMPLITUDE)


def ellipse_point(angle, a=ORBIT_A, b=ORBIT_B):
    """
    Point on the unrotated orbit: the ellipse lies in the x/z plane.
    Accepts a scalar or a numpy array of angles.
    """
    angle = np.asarray(angle, dtype=float)
    x = a * np.cos(angle)
    y = np.zeros_like(angle)
    z = b * np.sin(angle)
    return x, y, z


def rotate(x, y, z, roll, pitch, yaw):
    """
    Apply roll (Z axis), then pitch (X axis), then yaw (Y axis).
    Inputs may be scalars or equally shaped arrays; the angles are scalars.
    Returns (x3, y3, z3).
    """
    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cw, sw = np.cos(yaw), np.sin(yaw)

    # roll
    x1 = x * cr - y * sr
    y1 = x * sr + y * cr
    z1 = z

    # pitch
    x2 = x1
    y2 = y1 * cp - z1 * sp
    z2 = y1 * sp + z1 * cp

    # yaw
    x3 = x2 * cw + z2 * sw
    y3 = y2
    z3 = -x2 * sw + z2 * cw
    return x3, y3, z3


def orbit_point(angle, roll, pitch, yaw, a=ORBIT_A, b=ORBIT_B):
    """
    Rotated orbit position(s) for `angle`. Used for both the path samples and
    the satellite so the dot always sits on the drawn path.
    """
    x, y, z = ellipse_point(angle, a, b)
    return rotate(x, y, z, roll, pitch, yaw)


def sample_angles(n=PATH_SAMPLES):
    # n + 1 samples: the last one closes the loop at 2*pi
    return np.arange(n + 1, dtype=float) / n * 2.0 * np.pi


def partition_by_depth(points):
    """
    Split projected points into (behind, front) by post-rotation depth.
    behind: z3 <= 0, front: z3 > 0. Sample order is preserved.
    """
    behind = [p for p in points if p.z3 <= 0]
    front = [p for p in points if p.z3 > 0]
    return behind, front


def segment_runs(points, front):
    """
    Group the path segments (i, i + 1) of one depth half into polylines.

    A segment belongs to the front half when either end has z3 > 0, otherwise
    to the behind half, so the two halves share their boundary samples and
    together stroke every segment exactly once. `points` must be the full
    sample list in index order.
    """
    runs = []
    current = []
    for a, b in zip(points, points[1:]):
        if (a.z3 > 0 or b.z3 > 0) == front:
            if not current:
                current.append(a)
            current.append(b)
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs
