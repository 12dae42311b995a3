"""
World/screen mapping under pan and zoom.

    screen = world * scale + pan
"""

import math
from dataclasses import dataclass, replace
from typing import Tuple

from ..layout_constants import MAX_ZOOM, MIN_ZOOM, VIEW_ZOOM_INTENSITY


@dataclass(frozen=True)
class Viewport:
    pan_x: float = 0.0
    pan_y: float = 0.0
    scale: float = 1.0

    def to_dict(self) -> dict:
        return {"panX": self.pan_x, "panY": self.pan_y, "scale": self.scale}

    @staticmethod
    def from_dict(data: dict) -> "Viewport":
        return Viewport(
            pan_x=float(data.get("panX", 0.0)),
            pan_y=float(data.get("panY", 0.0)),
            scale=float(data.get("scale", 1.0)),
        )


def to_world(screen_x: float, screen_y: float, viewport: Viewport) -> Tuple[float, float]:
    return ((screen_x - viewport.pan_x) / viewport.scale,
            (screen_y - viewport.pan_y) / viewport.scale)


def to_screen(world_x: float, world_y: float, viewport: Viewport) -> Tuple[float, float]:
    return (world_x * viewport.scale + viewport.pan_x,
            world_y * viewport.scale + viewport.pan_y)


def clamp_scale(scale: float, min_zoom: float = MIN_ZOOM, max_zoom: float = MAX_ZOOM) -> float:
    return min(max(min_zoom, scale), max_zoom)


def zoom_at(viewport: Viewport, new_scale: float, anchor_x: float, anchor_y: float) -> Viewport:
    """
    Change the scale while keeping the world point under the screen
    anchor in place. The scale is clamped to [MIN_ZOOM, MAX_ZOOM].
    """
    new_scale = clamp_scale(new_scale)
    world_x, world_y = to_world(anchor_x, anchor_y, viewport)
    return Viewport(
        pan_x=anchor_x - world_x * new_scale,
        pan_y=anchor_y - world_y * new_scale,
        scale=new_scale,
    )


def wheel_factor(delta_y: float, intensity: float) -> float:
    """Multiplicative zoom step for one wheel notch (wheel up zooms in)."""
    if delta_y == 0:
        return 1.0
    return math.exp(-math.copysign(1.0, delta_y) * intensity)


def wheel_zoom(viewport: Viewport, delta_y: float, anchor_x: float, anchor_y: float) -> Viewport:
    factor = wheel_factor(delta_y, VIEW_ZOOM_INTENSITY)
    return zoom_at(viewport, viewport.scale * factor, anchor_x, anchor_y)


def pan_by(viewport: Viewport, start_pan: Tuple[float, float], dx: float, dy: float) -> Viewport:
    """Pan relative to the pan captured at drag start."""
    return replace(viewport, pan_x=start_pan[0] + dx, pan_y=start_pan[1] + dy)
