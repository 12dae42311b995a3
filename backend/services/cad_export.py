"""
DXF export of a booth layout using ezdxf.

World units are converted to meters through the project's scale ratio.
DXF's y axis points up, so the layout is mirrored vertically to keep
the drawing in the same orientation as the editor canvas.

Layers:
  BOOTHS   – booth floor outlines
  WALLS    – closed booth walls / closed polygon edges
  PILLARS  – pillar outlines
  LABELS   – booth label and usable area text
"""

import logging
import math
from pathlib import Path
from typing import List, Optional

import ezdxf
from ezdxf import units
from ezdxf.enums import TextEntityAlignment

from services.booth_engine import rotated_corners, to_meters, wall_sides
from services.booth_engine.polygon import closed_edges
from services.booth_engine.rotation import rotate_vector
from services.booth_engine.zone_model import Zone, ZoneKind
from services.export_data import prepare_export_data

logger = logging.getLogger(__name__)

_SIDE_CORNERS = {
    "top": (0, 1),
    "right": (1, 2),
    "bottom": (2, 3),
    "left": (3, 0),
}


def _world_polygon(zone: Zone) -> List[tuple]:
    """World-space outline of a zone, rotation applied."""
    if not zone.points:
        return [tuple(p) for p in rotated_corners(zone)]
    cx, cy = zone.x + zone.w / 2, zone.y + zone.h / 2
    rad = math.radians(zone.rotation)
    out = []
    for p in zone.points:
        ox, oy = rotate_vector(p.x * zone.w - zone.w / 2, p.y * zone.h - zone.h / 2, rad)
        out.append((cx + ox, cy + oy))
    return out


def build_dxf(zones: List[Zone], scale_ratio: float,
              background: Optional[dict] = None):
    """Build an in-memory ezdxf document for the layout."""
    data = prepare_export_data(zones, scale_ratio, background)
    origin_x, origin_y = data["origin"]

    def to_dxf(pt):
        return (to_meters(pt[0] - origin_x, scale_ratio),
                -to_meters(pt[1] - origin_y, scale_ratio))

    doc = ezdxf.new("R2010")
    doc.units = units.M
    msp = doc.modelspace()

    doc.layers.add("BOOTHS", color=5)
    doc.layers.add("WALLS", color=7)
    doc.layers.add("PILLARS", color=8)
    doc.layers.add("LABELS", color=10)

    for item in data["items"]:
        zone: Zone = item["zone"]
        outline = [to_dxf(p) for p in _world_polygon(zone)]

        if zone.kind == ZoneKind.PILLAR:
            msp.add_lwpolyline(outline, close=True, dxfattribs={"layer": "PILLARS", "lineweight": 35})
            continue

        msp.add_lwpolyline(outline, close=True, dxfattribs={"layer": "BOOTHS", "lineweight": 13})

        if zone.points:
            n = len(outline)
            for i in closed_edges(zone):
                msp.add_line(outline[i], outline[(i + 1) % n],
                             dxfattribs={"layer": "WALLS", "lineweight": 50})
        else:
            walls = wall_sides(zone)
            for side, (a, b) in _SIDE_CORNERS.items():
                if walls[side]:
                    msp.add_line(outline[a], outline[b],
                                 dxfattribs={"layer": "WALLS", "lineweight": 50})

        center = to_dxf((zone.x + zone.w / 2, zone.y + zone.h / 2))
        text_height = max(0.2, min(item["width_m"], item["height_m"]) / 8)
        if zone.label:
            msp.add_text(
                zone.label,
                height=text_height,
                dxfattribs={"layer": "LABELS"},
            ).set_placement(
                (center[0], center[1] + text_height * 0.8),
                align=TextEntityAlignment.MIDDLE_CENTER,
            )
        area = item["manual_area"] if item["manual_area"] is not None else item["net_area_m2"]
        msp.add_text(
            f"{area:.2f} m2",
            height=text_height * 0.6,
            dxfattribs={"layer": "LABELS"},
        ).set_placement(
            (center[0], center[1] - text_height * 0.6),
            align=TextEntityAlignment.MIDDLE_CENTER,
        )

    return doc


def generate_dxf(zones: List[Zone], scale_ratio: float, output_path: str,
                 background: Optional[dict] = None) -> str:
    """Write the layout to *output_path* and return the path."""
    doc = build_dxf(zones, scale_ratio, background)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    doc.saveas(output_path)
    logger.info(f"Wrote DXF with {len(zones)} zones to {output_path}")
    return str(output_path)
