import logging
from typing import Callable, Optional

from orbit_anim.config.settings import DEFAULT_EXPORT_FPS

log = logging.getLogger(__name__)


class FrameLoop:
    """
    Headless frame scheduler.

    Mirrors a display-refresh scheduler: the callback receives a timestamp in
    milliseconds and re-requests itself to keep looping. Timestamps are
    synthetic (1000 / fps apart) so runs are reproducible. The loop ends when
    its frame budget is used up or `stop()` is called.
    """
    def __init__(self, fps: float = DEFAULT_EXPORT_FPS, start_ms: float = 0.0):
        if fps <= 0:
            raise ValueError("fps must be > 0")
        self.interval_ms = 1000.0 / float(fps)
        self.now_ms = float(start_ms)
        self.frames = 0
        self.stopped = False
        self._pending: Optional[Callable[[float], None]] = None

    def request_frame(self, callback: Callable[[float], None]) -> None:
        if not self.stopped:
            self._pending = callback

    def stop(self) -> None:
        self.stopped = True
        self._pending = None

    def timestamps(self, count: int):
        """Yield the next `count` frame timestamps (ms), e.g. as FuncAnimation frames."""
        while not self.stopped and self.frames < count:
            self.now_ms += self.interval_ms
            self.frames += 1
            yield self.now_ms

    def run(self, max_frames: int) -> int:
        """Invoke pending callbacks until `max_frames` ran or the loop stopped."""
        while self._pending is not None and not self.stopped and self.frames < max_frames:
            cb = self._pending
            self._pending = None
            self.now_ms += self.interval_ms
            cb(self.now_ms)
            self.frames += 1
        log.debug("frame loop finished after %d frames", self.frames)
        return self.frames


def run_frames(step: Callable[[float], object], frames: int, fps: float = DEFAULT_EXPORT_FPS,
               start_ms: float = 0.0) -> FrameLoop:
    """
    Drive `step(now_ms)` for `frames` frames on a FrameLoop.
    Returns the loop (its `now_ms` is the last timestamp delivered).
    """
    loop = FrameLoop(fps=fps, start_ms=start_ms)

    def tick(now_ms):
        step(now_ms)
        loop.request_frame(tick)

    loop.request_frame(tick)
    loop.run(frames)
    return loop
