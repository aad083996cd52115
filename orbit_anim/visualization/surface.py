"""
2D immediate-mode drawing surface used by the painter.

The painter only needs a handful of canvas-style primitives (paths, filled
arcs and ellipses, radial gradients, save/restore and an affine transform).
`DrawingSurface` holds the shared paint state; backends implement the
primitives. `RecordingSurface` keeps a list of operations and is used for
headless runs and tests.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from matplotlib.colors import to_rgba

RGBA = Tuple[float, float, float, float]
Transform = Tuple[float, float, float, float, float, float]

IDENTITY: Transform = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

_RGBA_RE = re.compile(r"rgba?\(\s*([^)]*)\)")


def parse_color(color) -> RGBA:
    """
    CSS-ish colour to an (r, g, b, a) tuple in [0, 1].
    Accepts 'rgba(255,255,255,0.3)', 'rgb(0,0,0)' and anything matplotlib understands.
    """
    if isinstance(color, str):
        m = _RGBA_RE.fullmatch(color.strip())
        if m:
            parts = [p.strip() for p in m.group(1).split(",")]
            if len(parts) not in (3, 4):
                raise ValueError(f"Cannot parse colour {color!r}")
            r, g, b = (float(p) / 255.0 for p in parts[:3])
            a = float(parts[3]) if len(parts) == 4 else 1.0
            return r, g, b, a
    return tuple(float(c) for c in to_rgba(color))


@dataclass
class RadialGradient:
    """Two-circle radial gradient, same geometry as a canvas createRadialGradient."""
    x0: float
    y0: float
    r0: float
    x1: float
    y1: float
    r1: float
    stops: List[Tuple[float, str]] = field(default_factory=list)

    def add_color_stop(self, offset: float, color: str) -> None:
        if not 0.0 <= offset <= 1.0:
            raise ValueError("gradient stop offset must be in [0, 1]")
        self.stops.append((float(offset), color))
        self.stops.sort(key=lambda s: s[0])


def apply_transform(t: Transform, x: float, y: float) -> Tuple[float, float]:
    a, b, c, d, e, f = t
    return a * x + c * y + e, b * x + d * y + f


class DrawingSurface:
    """
    Paint state + primitives. Subclasses override the drawing hooks.
    Coordinates passed in are logical; `transform` maps them to backing pixels.
    """
    def __init__(self):
        self.width = 0
        self.height = 0
        self.transform: Transform = IDENTITY
        self.fill_style = "#000000"
        self.stroke_style = "#000000"
        self.line_width = 1.0
        self._stack = []
        self._subpaths: List[List[Tuple[float, float]]] = []
        self._shapes = []

    # -- surface / state ---------------------------------------------------
    def set_backing_size(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def set_transform(self, a, b, c, d, e, f) -> None:
        """Replace (not multiply) the current transform."""
        self.transform = (float(a), float(b), float(c), float(d), float(e), float(f))

    def save(self) -> None:
        self._stack.append((self.fill_style, self.stroke_style, self.line_width, self.transform))

    def restore(self) -> None:
        if not self._stack:
            return
        self.fill_style, self.stroke_style, self.line_width, self.transform = self._stack.pop()

    # -- paths -------------------------------------------------------------
    def begin_path(self) -> None:
        self._subpaths = []
        self._shapes = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((float(x), float(y)))

    def arc(self, x: float, y: float, r: float) -> None:
        """Full circle sub-path."""
        self._shapes.append(("circle", float(x), float(y), float(r)))

    def ellipse(self, x: float, y: float, rx: float, ry: float) -> None:
        """Full axis-aligned ellipse sub-path."""
        self._shapes.append(("ellipse", float(x), float(y), float(rx), float(ry)))

    def create_radial_gradient(self, x0, y0, r0, x1, y1, r1) -> RadialGradient:
        return RadialGradient(float(x0), float(y0), float(r0), float(x1), float(y1), float(r1))

    # -- backend hooks -----------------------------------------------------
    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        raise NotImplementedError

    def stroke(self) -> None:
        raise NotImplementedError

    def fill(self) -> None:
        raise NotImplementedError


class RecordingSurface(DrawingSurface):
    """
    Backend that records every drawing operation as a tuple.
    ops entries: ("clear", ...), ("stroke", subpaths, style, width),
    ("fill", shapes, style), ("transform", t), ("backing", w, h).
    """
    def __init__(self, device_pixel_ratio: float = 1.0):
        super().__init__()
        self.device_pixel_ratio = device_pixel_ratio
        self.ops = []

    def set_backing_size(self, width: int, height: int) -> None:
        super().set_backing_size(width, height)
        self.ops.append(("backing", self.width, self.height))

    def set_transform(self, a, b, c, d, e, f) -> None:
        super().set_transform(a, b, c, d, e, f)
        self.ops.append(("transform", self.transform))

    def clear_rect(self, x, y, w, h) -> None:
        self.ops.append(("clear", float(x), float(y), float(w), float(h)))

    def stroke(self) -> None:
        paths = [list(p) for p in self._subpaths]
        self.ops.append(("stroke", paths, self.stroke_style, self.line_width))

    def fill(self) -> None:
        self.ops.append(("fill", list(self._shapes), self.fill_style))

    def reset(self) -> None:
        self.ops = []

    def of_kind(self, kind: str):
        return [op for op in self.ops if op[0] == kind]
