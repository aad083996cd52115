# orbit_anim/visualization/mpl_surface.py
"""
matplotlib backend for the drawing surface.

Every primitive becomes an artist on a frameless axes whose data coordinates
are backing-store pixels (y grows downward). Radial gradients are rasterised
with numpy and clipped to their disk. Artists get increasing zorders so the
painter's call order is the paint order.
"""
from __future__ import annotations

import numpy as np
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Ellipse

from orbit_anim.config.settings import BACKGROUND_COLOR, GRADIENT_RESOLUTION
from orbit_anim.visualization.surface import (
    DrawingSurface,
    RadialGradient,
    apply_transform,
    parse_color,
)


def gradient_parameter(px, py, g: RadialGradient):
    """
    Gradient position t for each pixel (canvas two-circle semantics): the
    largest t whose interpolated circle passes through the pixel with a
    non-negative radius. Pixels no circle reaches get NaN.
    """
    cdx, cdy = g.x1 - g.x0, g.y1 - g.y0
    dr = g.r1 - g.r0
    pdx, pdy = px - g.x0, py - g.y0

    a = cdx * cdx + cdy * cdy - dr * dr
    b = pdx * cdx + pdy * cdy + g.r0 * dr
    c = pdx * pdx + pdy * pdy - g.r0 * g.r0

    if abs(a) < 1e-12:
        with np.errstate(divide="ignore", invalid="ignore"):
            t = c / (2.0 * b)
        return np.where(g.r0 + t * dr >= 0, t, np.nan)

    disc = b * b - a * c
    with np.errstate(invalid="ignore"):
        root = np.sqrt(disc)
    t1 = (b + root) / a
    t2 = (b - root) / a
    t1 = np.where(g.r0 + t1 * dr >= 0, t1, np.nan)
    t2 = np.where(g.r0 + t2 * dr >= 0, t2, np.nan)
    t = np.fmax(t1, t2)
    return np.where(disc >= 0, t, np.nan)


def rasterize_gradient(g: RadialGradient, x0, y0, x1, y1, resolution=GRADIENT_RESOLUTION):
    """RGBA image (resolution x resolution) of `g` over the box [x0, x1] x [y0, y1]."""
    if not g.stops:
        return np.zeros((resolution, resolution, 4), dtype=float)

    xs = x0 + (np.arange(resolution) + 0.5) / resolution * (x1 - x0)
    ys = y0 + (np.arange(resolution) + 0.5) / resolution * (y1 - y0)
    px, py = np.meshgrid(xs, ys)

    t = gradient_parameter(px, py, g)
    outside = np.isnan(t)
    t = np.clip(np.nan_to_num(t, nan=0.0), 0.0, 1.0)

    offsets = np.array([s[0] for s in g.stops], dtype=float)
    colors = np.array([parse_color(s[1]) for s in g.stops], dtype=float)

    img = np.empty(t.shape + (4,), dtype=float)
    for ch in range(4):
        img[..., ch] = np.interp(t, offsets, colors[:, ch])
    img[outside] = 0.0
    return img


class MatplotlibSurface(DrawingSurface):
    """
    Drawing surface on a matplotlib axes.
    fit_figure=True resizes the figure so one backing pixel is one output
    pixel (used for exports; never set it on an interactive window).
    """
    def __init__(self, ax, device_pixel_ratio=None, fit_figure=False):
        super().__init__()
        self.ax = ax
        self.fig = ax.figure
        self._dpr_override = device_pixel_ratio
        self.fit_figure = bool(fit_figure)
        self._artists = []
        self._z = 0

        ax.set_axis_off()
        ax.set_facecolor(BACKGROUND_COLOR)
        self.fig.patch.set_facecolor(BACKGROUND_COLOR)

    @property
    def device_pixel_ratio(self):
        if self._dpr_override is not None:
            return self._dpr_override
        return getattr(self.fig.canvas, "device_pixel_ratio", 1.0)

    def set_backing_size(self, width, height):
        super().set_backing_size(width, height)
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_aspect("equal")
        if self.fit_figure:
            dpi = self.fig.dpi
            self.fig.set_size_inches(self.width / dpi, self.height / dpi)

    # -- helpers -----------------------------------------------------------
    def _next_z(self):
        self._z += 1
        return self._z

    def _add(self, artist):
        artist.set_zorder(self._next_z())
        self._artists.append(artist)
        return artist

    def _to_px(self, x, y):
        return apply_transform(self.transform, x, y)

    def _px_per_unit(self):
        a, b, c, d, _, _ = self.transform
        return float(np.hypot(a, b)), float(np.hypot(c, d))

    # -- primitives --------------------------------------------------------
    def clear_rect(self, x, y, w, h):
        # Only whole-surface clears are issued by the painter.
        for artist in self._artists:
            artist.remove()
        self._artists = []
        self._z = 0

    def _points_per_unit(self):
        """Line-width points per data unit (one backing pixel) on the current axes."""
        self.ax.apply_aspect()
        (x0, _), (x1, _) = self.ax.transData.transform([(0.0, 0.0), (1.0, 0.0)])
        return abs(x1 - x0) * 72.0 / self.fig.dpi

    def stroke(self):
        rgba = parse_color(self.stroke_style)
        sx, _ = self._px_per_unit()
        lw = self.line_width * sx * self._points_per_unit()
        for sub in self._subpaths:
            if len(sub) < 2:
                continue
            pts = [self._to_px(x, y) for x, y in sub]
            xs, ys = zip(*pts)
            self._add(self.ax.add_line(Line2D(xs, ys, color=rgba, linewidth=lw,
                                              solid_capstyle="round")))

    def fill(self):
        for shape in self._shapes:
            if shape[0] == "circle":
                self._fill_circle(*shape[1:])
            elif shape[0] == "ellipse":
                self._fill_ellipse(*shape[1:])

    def _fill_gradient(self, clip, x, y, rx, ry):
        cx, cy = self._to_px(x, y)
        sx, sy = self._px_per_unit()
        w, h = rx * sx, ry * sy
        img = rasterize_gradient(self.fill_style, x - rx, y - ry, x + rx, y + ry)
        im = self.ax.imshow(
            img,
            extent=(cx - w, cx + w, cy + h, cy - h),
            origin="upper",
            interpolation="bilinear",
        )
        im.set_clip_path(clip)
        self._add(im)
        # imshow resets the limits
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)

    def _fill_circle(self, x, y, r):
        cx, cy = self._to_px(x, y)
        sx, _ = self._px_per_unit()
        r_px = r * sx

        if isinstance(self.fill_style, RadialGradient):
            self._fill_gradient(Circle((cx, cy), r_px, transform=self.ax.transData), x, y, r, r)
            return

        patch = Circle((cx, cy), r_px, facecolor=parse_color(self.fill_style), edgecolor="none")
        self._add(self.ax.add_patch(patch))

    def _fill_ellipse(self, x, y, rx, ry):
        cx, cy = self._to_px(x, y)
        sx, sy = self._px_per_unit()

        if isinstance(self.fill_style, RadialGradient):
            clip = Ellipse((cx, cy), 2 * rx * sx, 2 * ry * sy, transform=self.ax.transData)
            self._fill_gradient(clip, x, y, rx, ry)
            return

        patch = Ellipse((cx, cy), 2 * rx * sx, 2 * ry * sy,
                        facecolor=parse_color(self.fill_style), edgecolor="none")
        self._add(self.ax.add_patch(patch))

    def artists(self):
        return list(self._artists)
