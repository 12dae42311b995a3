"""
Shared preparation step for every export format.

Computes the content bounds (rotation-aware, background included), an
origin shifted by the padding, and per-zone presentation fields in real
units so the SVG and DXF writers only have to draw.
"""

import math
from typing import Dict, List, Optional

from services.booth_engine import (
    axis_aligned_bounds,
    net_usable_area,
    to_meters,
    to_square_meters,
)
from services.booth_engine.rotation import is_quarter_turned
from services.booth_engine.zone_model import StandType, Zone, ZoneKind
from services.layout_constants import (
    EMPTY_EXPORT_BOUNDS,
    EXPORT_TARGET_WIDTH,
    MIN_LABEL_FONT_SIZE,
)


def content_bounds(zones: List[Zone], background: Optional[dict] = None):
    """(min_x, min_y, max_x, max_y) over zone bounds and the background."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for zone in zones:
        box = axis_aligned_bounds(zone)
        min_x = min(min_x, box.x)
        min_y = min(min_y, box.y)
        max_x = max(max_x, box.right)
        max_y = max(max_y, box.bottom)

    if background and background.get("w") and background.get("h"):
        bx, by = background.get("x", 0.0), background.get("y", 0.0)
        min_x = min(min_x, bx)
        min_y = min(min_y, by)
        max_x = max(max_x, bx + background["w"])
        max_y = max(max_y, by + background["h"])

    defaults = EMPTY_EXPORT_BOUNDS
    if not math.isfinite(min_x):
        min_x = defaults[0]
    if not math.isfinite(min_y):
        min_y = defaults[1]
    if not math.isfinite(max_x):
        max_x = defaults[2]
    if not math.isfinite(max_y):
        max_y = defaults[3]
    return min_x, min_y, max_x, max_y


def effective_font_size(zone: Zone) -> float:
    if zone.font_size:
        return zone.font_size
    return max(MIN_LABEL_FONT_SIZE, min(zone.w, zone.h) / 6)


def prepare_export_data(zones: List[Zone], scale_ratio: float,
                        background: Optional[dict] = None,
                        padding: float = 0.0) -> Dict:
    """
    Normalize a snapshot for export.

    Returned items carry the original zone (shifted so the padded content
    starts at 0,0) plus ``net_area``/``gross_area`` in world units and m²,
    dimensions in meters, and the display size swapped for zones turned
    by 90 or 270 degrees.
    """
    min_x, min_y, max_x, max_y = content_bounds(zones, background)
    origin_x = min_x - padding
    origin_y = min_y - padding
    width = (max_x - min_x) + padding * 2
    height = (max_y - min_y) + padding * 2
    scale = EXPORT_TARGET_WIDTH / width if width > 0 else 1.0

    items = []
    for zone in zones:
        net = net_usable_area(zone, zones) if zone.kind == ZoneKind.BOOTH else 0.0
        gross = zone.w * zone.h
        width_m = to_meters(zone.w, scale_ratio)
        height_m = to_meters(zone.h, scale_ratio)
        turned = is_quarter_turned(zone.rotation)
        items.append({
            "zone": zone,
            "x": zone.x - origin_x,
            "y": zone.y - origin_y,
            "net_area": net,
            "gross_area": gross,
            "net_area_m2": to_square_meters(net, scale_ratio),
            "gross_area_m2": to_square_meters(gross, scale_ratio),
            "manual_area": zone.manual_area if zone.use_manual_area else None,
            "width_m": width_m,
            "height_m": height_m,
            "display_width_m": height_m if turned else width_m,
            "display_height_m": width_m if turned else height_m,
            "has_pillar": zone.kind == ZoneKind.BOOTH and net < gross,
            "font_size": effective_font_size(zone),
            "stand_type": (zone.stand_type or StandType.STANDARD) if zone.kind == ZoneKind.BOOTH else None,
        })

    bg_box = None
    if background:
        bg_box = {
            "ref": background.get("ref"),
            "x": background.get("x", 0.0) - origin_x,
            "y": background.get("y", 0.0) - origin_y,
            "w": background.get("w", 0.0),
            "h": background.get("h", 0.0),
        }

    return {
        "width": width,
        "height": height,
        "origin": (origin_x, origin_y),
        "target_width": EXPORT_TARGET_WIDTH,
        "target_height": height * scale,
        "scale": scale,
        "items": items,
        "background": bg_box,
    }
