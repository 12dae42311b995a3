"""
Booth Engine: 2D layout geometry and interaction core.

Rotated bounds, pillar intrusion and net area, polygon normalization,
equal splitting, corner-anchored resize, viewport mapping, and the
editor state machine. Everything here is pure and synchronous.
"""

from .zone_model import BoothOpening, Point, Rect, StandType, Zone, ZoneKind
from .rotation import axis_aligned_bounds, rotate_vector, rotated_corners
from .area import (
    effective_area,
    intersection_area,
    layout_summary,
    net_usable_area,
    polygon_area,
    to_meters,
    to_square_meters,
)
from .polygon import denormalize_points, normalize_points, toggle_open_edge, wall_sides
from .split import SplitDirection, split_zone
from .resize import Snapshot, handle_corner_for, move_from_snapshot, resize_from_snapshot, snap_to_grid
from .viewport import Viewport, to_screen, to_world, zoom_at
from .interaction import EditorMode, EditorState, Event, EventType, dispatch, replay

__all__ = [
    "BoothOpening",
    "Point",
    "Rect",
    "StandType",
    "Zone",
    "ZoneKind",
    "axis_aligned_bounds",
    "rotate_vector",
    "rotated_corners",
    "effective_area",
    "intersection_area",
    "layout_summary",
    "net_usable_area",
    "polygon_area",
    "to_meters",
    "to_square_meters",
    "denormalize_points",
    "normalize_points",
    "toggle_open_edge",
    "wall_sides",
    "SplitDirection",
    "split_zone",
    "Snapshot",
    "handle_corner_for",
    "move_from_snapshot",
    "resize_from_snapshot",
    "snap_to_grid",
    "Viewport",
    "to_screen",
    "to_world",
    "zoom_at",
    "EditorMode",
    "EditorState",
    "Event",
    "EventType",
    "dispatch",
    "replay",
]
