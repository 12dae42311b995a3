"""
Interactive move and corner-anchored resize.

Both operations are computed from the geometry captured at pointer-down,
never from the previous frame, so repeated or coalesced pointer-move
events cannot accumulate drift.

Resize keeps one corner of the rotated rectangle fixed in world space
while the opposite corner (the handle) follows the pointer:

    fixed  = handle + 2 (mod 4)
    v      = (handle_start + delta) - fixed
    w'     = (v . u_x) * sign_x(handle)      u_x = ( cos, sin)
    h'     = (v . u_y) * sign_y(handle)      u_y = (-sin, cos)
    center = fixed + R(sign(handle) * (w', h') / 2)
"""

import math
from typing import NamedTuple, Optional, Tuple

from ..layout_constants import GRID_SIZE
from .rotation import CORNER_SIGNS, bottom_right_corner, corner_position, rotate_vector


class Snapshot(NamedTuple):
    """Geometry of a zone frozen at pointer-down."""

    x: float
    y: float
    w: float
    h: float
    rotation: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    @staticmethod
    def of(zone) -> "Snapshot":
        return Snapshot(zone.x, zone.y, zone.w, zone.h, zone.rotation)


def snap_to_grid(value: float, grid: float = GRID_SIZE) -> float:
    """Round to the nearest grid step (halves round up)."""
    return math.floor(value / grid + 0.5) * grid


def snap_size(value: float, grid: float = GRID_SIZE) -> float:
    """Snap a length and clamp it to at least one grid step."""
    return max(grid, snap_to_grid(value, grid))


def move_from_snapshot(snapshot: Snapshot, world_dx: float, world_dy: float,
                       grid: float = GRID_SIZE) -> Tuple[float, float]:
    """New top-left after dragging by a world delta, delta snapped to the grid."""
    return (snapshot.x + snap_to_grid(world_dx, grid),
            snapshot.y + snap_to_grid(world_dy, grid))


def handle_corner_for(rotation: float) -> int:
    """Corner index dragged by the resize handle, fixed for the whole drag."""
    return bottom_right_corner(rotation)


def fixed_corner_for(handle: int) -> int:
    return (handle + 2) % 4


def resize_from_snapshot(snapshot: Snapshot, world_dx: float, world_dy: float,
                         handle: Optional[int] = None,
                         grid: float = GRID_SIZE) -> Tuple[float, float, float, float]:
    """
    Resize a rotated rectangle by dragging its *handle* corner.

    Returns the new ``(x, y, w, h)``. The opposite corner keeps its world
    position; sizes are snapped to *grid* and never drop below one step.
    Rotation is left untouched.
    """
    if handle is None:
        handle = handle_corner_for(snapshot.rotation)
    fixed = fixed_corner_for(handle)
    cx, cy = snapshot.center
    rot = snapshot.rotation

    fixed_pt = corner_position(cx, cy, snapshot.w, snapshot.h, rot, fixed)
    handle_pt = corner_position(cx, cy, snapshot.w, snapshot.h, rot, handle)

    live_x = handle_pt.x + world_dx
    live_y = handle_pt.y + world_dy
    vx = live_x - fixed_pt.x
    vy = live_y - fixed_pt.y

    rad = math.radians(rot)
    cos_t, sin_t = math.cos(rad), math.sin(rad)
    along_w = vx * cos_t + vy * sin_t
    along_h = -vx * sin_t + vy * cos_t

    sx, sy = CORNER_SIGNS[handle]
    new_w = snap_size(along_w * sx, grid)
    new_h = snap_size(along_h * sy, grid)

    ox, oy = rotate_vector(sx * new_w / 2, sy * new_h / 2, rad)
    new_cx = fixed_pt.x + ox
    new_cy = fixed_pt.y + oy
    return (new_cx - new_w / 2, new_cy - new_h / 2, new_w, new_h)
