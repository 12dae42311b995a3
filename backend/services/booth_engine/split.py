"""
Equal splitting of rectangular zones.

A zone is divided into N children of equal size along one of its local
axes. The axis follows the visual direction the user asked for, so a
zone turned by 90 or 270 degrees splits along its local height when a
horizontal split is requested.
"""

import enum
import logging
import math
from dataclasses import replace
from typing import List

from .rotation import is_quarter_turned, rotate_vector
from .zone_model import Zone, new_zone_id

logger = logging.getLogger(__name__)


class SplitDirection(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def splits_local_width(rotation: float, direction: SplitDirection) -> bool:
    if is_quarter_turned(rotation):
        return direction == SplitDirection.VERTICAL
    return direction == SplitDirection.HORIZONTAL


def split_zone(zone: Zone, parts: int, direction: SplitDirection) -> List[Zone]:
    """
    Split a rectangular zone into *parts* equal children.

    Children keep every cosmetic field of the parent, get fresh ids, are
    unlocked, and share the parent's manual area evenly. Sizes are not
    grid-snapped, so the children's areas sum exactly to the parent's.

    Raises ``ValueError`` for fewer than 2 parts or a polygon zone.
    """
    if parts < 2:
        raise ValueError(f"Cannot split into {parts} parts; need at least 2")
    if zone.is_polygon:
        raise ValueError("Polygon zones cannot be split")

    direction = SplitDirection(direction)
    along_width = splits_local_width(zone.rotation, direction)
    child_w = zone.w / parts if along_width else zone.w
    child_h = zone.h if along_width else zone.h / parts

    rad = math.radians(zone.rotation)
    parent_cx = zone.x + zone.w / 2
    parent_cy = zone.y + zone.h / 2

    if zone.use_manual_area:
        manual_area = (zone.manual_area / parts) if zone.manual_area else 0.0
    else:
        manual_area = None

    children = []
    for i in range(parts):
        if along_width:
            offset_x = (i * child_w + child_w / 2) - zone.w / 2
            offset_y = 0.0
        else:
            offset_x = 0.0
            offset_y = (i * child_h + child_h / 2) - zone.h / 2

        dx, dy = rotate_vector(offset_x, offset_y, rad)
        child_cx = parent_cx + dx
        child_cy = parent_cy + dy

        children.append(replace(
            zone,
            id=new_zone_id(),
            x=child_cx - child_w / 2,
            y=child_cy - child_h / 2,
            w=child_w,
            h=child_h,
            label=f"{zone.label or 'B'}-{i + 1}",
            locked=False,
            manual_area=manual_area,
            extra=dict(zone.extra),
        ))

    logger.debug(f"Split zone {zone.id} into {parts} ({direction.value})")
    return children
