# orbit_anim/physics/state.py
from orbit_anim.config.settings import (
    ORBIT_SPEED,
    YAW_SPEED,
    PITCH_SPEED,
    ROLL_SPEED,
    LABEL_RUNNING,
    LABEL_PAUSED,
    clamp_delta_time,
)
from orbit_anim.physics.geometry import pitch_from_phase


class AnimatorState:
    """
    Clock + rotation accumulators of the animation.
    [orbit_phase, yaw, pitch_phase, roll] in radians, last timestamp in seconds.
    """
    def __init__(self, now=0.0, running=True):
        self.last = float(now)
        self.running = bool(running)

        self.orbit_phase = 0.0
        self.yaw = 0.0
        self.pitch_phase = 0.0
        self.roll = 0.0

    def advance(self, now):
        """
        Clamp the time since the previous frame to [0, MAX_DELTA_TIME] and
        remember `now` as the new reference. Call once per frame.
        """
        now = float(now)
        dt = clamp_delta_time(now - self.last)
        self.last = now
        return dt

    def accumulate(self, dt):
        if not self.running:
            return
        self.orbit_phase += ORBIT_SPEED * dt
        self.yaw += YAW_SPEED * dt
        self.pitch_phase += PITCH_SPEED * dt
        self.roll += ROLL_SPEED * dt

    def set_running(self, running):
        self.running = bool(running)

    def toggle(self):
        self.running = not self.running
        return self.label

    @property
    def label(self):
        return LABEL_RUNNING if self.running else LABEL_PAUSED

    @property
    def pitch(self):
        return pitch_from_phase(self.pitch_phase)

    def angles(self):
        return self.orbit_phase, self.yaw, self.pitch_phase, self.roll

    def __repr__(self):
        return (
            f"AnimatorState(running={self.running}, orbit_phase={self.orbit_phase:.3f}, "
            f"yaw={self.yaw:.3f}, pitch_phase={self.pitch_phase:.3f}, roll={self.roll:.3f})"
        )
