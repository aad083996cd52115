# orbit_anim/visualization/animation.py
import logging
import os
import time

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, FFMpegWriter, PillowWriter
from matplotlib.widgets import Button

from orbit_anim.config.settings import (
    LOGICAL_WIDTH,
    LOGICAL_HEIGHT,
    FRAME_INTERVAL_MS,
    DEFAULT_EXPORT_FPS,
    DEFAULT_EXPORT_FRAMES,
    DEFAULT_DPR,
    OUTPUT_DIR,
    clamp_device_pixel_ratio,
)
from orbit_anim.models.body import central_body, satellite
from orbit_anim.physics.state import AnimatorState
from orbit_anim.simulation.runner import FrameLoop, run_frames
from orbit_anim.visualization.mpl_surface import MatplotlibSurface
from orbit_anim.visualization.painter import paint_frame
from orbit_anim.visualization.surface import RecordingSurface

log = logging.getLogger(__name__)

# [left, bottom, width, height] in figure fractions
CANVAS_POSITION = [0.0, 0.12, 1.0, 0.88]
BUTTON_POSITION = [0.35, 0.02, 0.3, 0.08]


def _now_ms():
    return time.perf_counter() * 1000.0


class OrbitAnimator:
    """
    Owns the animation state and paints one frame per `step(now_ms)`.
    The surface must provide the DrawingSurface primitives and a
    `device_pixel_ratio` attribute.
    """
    def __init__(self, surface, state=None, now_ms=None,
                 width=LOGICAL_WIDTH, height=LOGICAL_HEIGHT):
        self.surface = surface
        if state is None:
            start = _now_ms() if now_ms is None else float(now_ms)
            state = AnimatorState(now=start / 1000.0)
        self.state = state
        self.width = width
        self.height = height
        self.central = central_body()
        self.satellite = satellite()
        self.dpr = 1.0
        self.last_frame = None
        self.animation = None
        self.button = None
        self.stopped = False
        self.resize()

    def resize(self):
        """
        Size the backing store to logical size x DPR and reset the transform
        so drawing happens in logical pixels.
        """
        dpr = clamp_device_pixel_ratio(getattr(self.surface, "device_pixel_ratio", 1.0))
        self.surface.set_backing_size(round(self.width * dpr), round(self.height * dpr))
        self.surface.set_transform(dpr, 0, 0, dpr, 0, 0)
        self.dpr = dpr
        log.debug("resize: logical=%dx%d dpr=%.2f backing=%dx%d",
                  self.width, self.height, dpr, self.surface.width, self.surface.height)

    def step(self, now_ms):
        dt = self.state.advance(now_ms / 1000.0)
        self.state.accumulate(dt)
        self.last_frame = paint_frame(
            self.surface, self.state, self.width, self.height, self.central, self.satellite
        )
        return self.last_frame

    def toggle(self):
        label = self.state.toggle()
        log.debug("toggle: running=%s", self.state.running)
        return label

    def stop(self):
        self.stopped = True
        if self.animation is not None and self.animation.event_source is not None:
            self.animation.event_source.stop()
        log.debug("animation stopped")

    def export(self, path, frames=DEFAULT_EXPORT_FRAMES, fps=DEFAULT_EXPORT_FPS):
        """
        Render `frames` more frames on a synthetic clock and save them to `path`
        (.gif with Pillow, anything else with ffmpeg). Needs a MatplotlibSurface.
        """
        fig = getattr(self.surface, "fig", None)
        if fig is None:
            raise TypeError("export needs a surface drawn on a matplotlib figure")

        # A list, not the generator: FuncAnimation iterates frames more than once
        # (init draw + save); replaying a timestamp yields dt == 0.
        timestamps = list(FrameLoop(fps=fps, start_ms=self.state.last * 1000.0).timestamps(frames))
        self.animation = FuncAnimation(
            fig,
            self.step,
            frames=timestamps,
            blit=False,
            cache_frame_data=False,
        )
        self.animation.save(path, writer=_writer_for(path, fps), dpi=fig.dpi)
        log.info("[OK] Saved: %s (%d frames @ %d fps)", path, frames, fps)
        return path


def show_interactive():
    """
    Open a window with the looping animation and a Pause/Resume button.
    Blocks until the window is closed.
    """
    fig = plt.figure(figsize=(3.0, 3.4))
    ax = fig.add_axes(CANVAS_POSITION)
    surface = MatplotlibSurface(ax)
    animator = OrbitAnimator(surface)

    button_ax = fig.add_axes(BUTTON_POSITION)
    button = Button(button_ax, animator.state.label)
    animator.button = button

    def on_click(event):
        button.label.set_text(animator.toggle())
        fig.canvas.draw_idle()

    button.on_clicked(on_click)
    fig.canvas.mpl_connect("resize_event", lambda event: animator.resize())
    fig.canvas.mpl_connect("close_event", lambda event: animator.stop())

    animator.animation = FuncAnimation(
        fig,
        lambda frame: animator.step(_now_ms()),
        interval=FRAME_INTERVAL_MS,
        blit=False,
        cache_frame_data=False,
    )
    log.info("Interactive animation started (dpr=%.2f)", animator.dpr)
    plt.show()
    return animator


def _writer_for(path, fps):
    if path.lower().endswith(".gif"):
        return PillowWriter(fps=fps)
    return FFMpegWriter(fps=fps, bitrate=1800)


def export_animation(path=None, frames=DEFAULT_EXPORT_FRAMES, fps=DEFAULT_EXPORT_FPS,
                     dpr=DEFAULT_DPR):
    """
    Render `frames` frames with a synthetic clock and save them as .gif or .mp4.
    Returns the output path.
    """
    if path is None:
        path = os.path.join(OUTPUT_DIR, "orbit.gif")
    out_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(out_dir, exist_ok=True)

    fig = plt.figure()
    try:
        ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
        surface = MatplotlibSurface(ax, device_pixel_ratio=dpr, fit_figure=True)
        OrbitAnimator(surface, now_ms=0.0).export(path, frames=frames, fps=fps)
    finally:
        plt.close(fig)
    return path


def render_headless(frames=DEFAULT_EXPORT_FRAMES, fps=DEFAULT_EXPORT_FPS, dpr=1.0):
    """Run the animation loop on a RecordingSurface (no display, no files)."""
    surface = RecordingSurface(device_pixel_ratio=dpr)
    animator = OrbitAnimator(surface, now_ms=0.0)
    run_frames(animator.step, frames, fps=fps)
    log.info("Rendered %d frames headless: %s", frames, animator.state)
    return animator
