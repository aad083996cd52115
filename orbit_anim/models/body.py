# orbit_anim/models/body.py
from __future__ import annotations

from dataclasses import dataclass

from orbit_anim.config.settings import (
    CENTRAL_RADIUS,
    SATELLITE_RADIUS,
    CENTRAL_COLOR,
    SATELLITE_COLOR,
    CENTRAL_SHADOW_INTENSITY,
    SATELLITE_SHADOW_INTENSITY,
)


@dataclass(frozen=True)
class SphereColor:
    mid: str    # highlight
    base: str
    rim: str

    @classmethod
    def from_dict(cls, d):
        return cls(mid=d["mid"], base=d["base"], rim=d["rim"])


@dataclass(frozen=True)
class Body:
    """
    A shaded sphere. Perspective-scaled bodies have their radius multiplied
    by the projection scale factor; the central body is drawn at its nominal size.
    """
    name: str
    radius: float
    color: SphereColor
    shadow_intensity: float
    perspective_scaled: bool = True

    def screen_radius(self, scale_factor: float) -> float:
        return self.radius * scale_factor if self.perspective_scaled else self.radius


@dataclass(frozen=True)
class ProjectedPoint:
    """Post-rotation 3D coordinate of a sample plus its 2D projection."""
    index: int
    x3: float
    y3: float
    z3: float
    screen_x: float
    screen_y: float


def central_body() -> Body:
    return Body(
        name="central",
        radius=CENTRAL_RADIUS,
        color=SphereColor.from_dict(CENTRAL_COLOR),
        shadow_intensity=CENTRAL_SHADOW_INTENSITY,
        perspective_scaled=False,
    )


def satellite() -> Body:
    return Body(
        name="satellite",
        radius=SATELLITE_RADIUS,
        color=SphereColor.from_dict(SATELLITE_COLOR),
        shadow_intensity=SATELLITE_SHADOW_INTENSITY,
    )
