"""
Rotation geometry for zones.

Rotation is stored in degrees, clockwise on screen (the y axis points
down), about the center of the unrotated local box.
"""

import math
from typing import List, Tuple

from .zone_model import Point, Rect


# Corner indices, clockwise from top-left
TL, TR, BR, BL = 0, 1, 2, 3

# Local sign of each corner relative to the box center
CORNER_SIGNS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),  # TL
    (1, -1),   # TR
    (1, 1),    # BR
    (-1, 1),   # BL
)

_ANGLE_EPS = 1e-9


def normalize_rotation(degrees: float) -> float:
    """Map any angle into [0, 360)."""
    r = math.fmod(degrees, 360.0)
    if r < 0:
        r += 360.0
    if r >= 360.0:
        r = 0.0
    return r


def is_quarter_turned(degrees: float, eps: float = 1e-6) -> bool:
    """True when the rotation is an odd multiple of 90 degrees."""
    return abs(normalize_rotation(degrees) % 180.0 - 90.0) < eps


def rotate_vector(x: float, y: float, radians: float) -> Tuple[float, float]:
    """Apply the 2D rotation matrix to (x, y)."""
    c = math.cos(radians)
    s = math.sin(radians)
    return (x * c - y * s, x * s + y * c)


def axis_aligned_bounds(zone) -> Rect:
    """
    Axis-aligned bounding box of a (possibly rotated) zone.

    Unrotated zones return their own box. Otherwise the box is grown to
    ``w|cos| + h|sin|`` by ``w|sin| + h|cos|`` around the same center.
    This over-approximates the rotated shape and is only meant for
    overlap heuristics.
    """
    if math.fmod(zone.rotation, 360.0) == 0:
        return Rect(zone.x, zone.y, zone.w, zone.h)

    cx = zone.x + zone.w / 2
    cy = zone.y + zone.h / 2
    rad = math.radians(zone.rotation)
    abs_cos = abs(math.cos(rad))
    abs_sin = abs(math.sin(rad))

    new_w = zone.w * abs_cos + zone.h * abs_sin
    new_h = zone.w * abs_sin + zone.h * abs_cos
    return Rect(cx - new_w / 2, cy - new_h / 2, new_w, new_h)


def corner_position(cx: float, cy: float, w: float, h: float,
                    rotation: float, corner: int) -> Point:
    """World position of *corner* of a w x h box centered at (cx, cy)."""
    sx, sy = CORNER_SIGNS[corner]
    ox, oy = rotate_vector(sx * w / 2, sy * h / 2, math.radians(rotation))
    return Point(cx + ox, cy + oy)


def rotated_corners(zone) -> List[Point]:
    """The four world-space corners of a zone, clockwise from local top-left."""
    cx, cy = zone.x + zone.w / 2, zone.y + zone.h / 2
    return [corner_position(cx, cy, zone.w, zone.h, zone.rotation, k) for k in range(4)]


def bottom_right_corner(rotation: float) -> int:
    """
    Index of the local corner that appears bottom-right on screen.

    Picks the corner whose rotated offset maximizes x + y. Ties (at odd
    multiples of 45 degrees) go to the lower index.
    """
    rad = math.radians(rotation)
    best, best_score = BR, None
    for k, (sx, sy) in enumerate(CORNER_SIGNS):
        ox, oy = rotate_vector(sx, sy, rad)
        score = ox + oy
        if best_score is None or score > best_score + _ANGLE_EPS:
            best, best_score = k, score
    return best
