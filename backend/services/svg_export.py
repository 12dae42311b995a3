"""
Standalone SVG export of a booth layout.

Booth floors with their closed walls, hatched pillars, polygon outlines
with per-edge walls, and labels showing size and usable area in meters.
"""

import xml.etree.ElementTree as ET
from typing import List, Optional

from services.booth_engine import wall_sides
from services.booth_engine.polygon import closed_edges
from services.booth_engine.zone_model import Zone, ZoneKind
from services.export_data import prepare_export_data
from services.layout_constants import (
    DEFAULT_BOOTH_FONT_COLOR,
    DEFAULT_PILLAR_FONT_COLOR,
    EXPORT_PADDING,
    WALL_THICKNESS,
)

SVG_NS = "http://www.w3.org/2000/svg"
WALL_COLOR = "#0f172a"
BOOTH_FLOOR = "#ffffff"
MUTED_TEXT = "#94a3b8"
WARNING_TEXT = "#b91c1c"


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _booth_walls(group: ET.Element, zone: Zone):
    t = WALL_THICKNESS
    off = -t / 2
    walls = wall_sides(zone)
    rects = {
        "top": (off, off, zone.w + t, t),
        "bottom": (off, zone.h + off, zone.w + t, t),
        "left": (off, 0, t, zone.h),
        "right": (zone.w + off, 0, t, zone.h),
    }
    for side, (x, y, w, h) in rects.items():
        if walls[side]:
            ET.SubElement(group, "rect", {
                "x": _fmt(x), "y": _fmt(y), "width": _fmt(w), "height": _fmt(h),
                "fill": WALL_COLOR,
            })


def _polygon_shape(group: ET.Element, zone: Zone, fill: str):
    local = [(p.x * zone.w, p.y * zone.h) for p in zone.points]
    ET.SubElement(group, "polygon", {
        "points": " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in local),
        "fill": fill,
        "stroke": "#cbd5e1",
        "stroke-width": "1",
    })
    n = len(local)
    for i in closed_edges(zone):
        (x1, y1), (x2, y2) = local[i], local[(i + 1) % n]
        ET.SubElement(group, "line", {
            "x1": _fmt(x1), "y1": _fmt(y1), "x2": _fmt(x2), "y2": _fmt(y2),
            "stroke": WALL_COLOR, "stroke-width": str(WALL_THICKNESS),
            "stroke-linecap": "square",
        })


def _labels(group: ET.Element, item: dict):
    zone: Zone = item["zone"]
    font_size = item["font_size"]
    default_color = DEFAULT_BOOTH_FONT_COLOR if zone.kind == ZoneKind.BOOTH else DEFAULT_PILLAR_FONT_COLOR
    font_color = zone.font_color or default_color
    text_group = ET.SubElement(group, "g", {
        "transform": f"translate({_fmt(zone.w / 2)}, {_fmt(zone.h / 2)}) rotate({_fmt(-zone.rotation)})",
        "text-anchor": "middle",
        "dominant-baseline": "middle",
    })
    if zone.label:
        label = ET.SubElement(text_group, "text", {
            "x": "0", "y": "-2", "font-weight": "bold",
            "font-size": _fmt(font_size), "fill": font_color,
        })
        label.text = zone.label

    if zone.kind != ZoneKind.BOOTH:
        return

    small = max(10.0, font_size * 0.5)
    dims = ET.SubElement(text_group, "text", {
        "x": "0", "y": _fmt(font_size), "font-size": _fmt(small),
        "fill": MUTED_TEXT, "font-family": "monospace",
    })
    dims.text = f"{_fmt(item['display_width_m'])}×{_fmt(item['display_height_m'])} m"

    area = item["manual_area"] if item["manual_area"] is not None else item["net_area_m2"]
    area_text = ET.SubElement(text_group, "text", {
        "x": "0", "y": _fmt(font_size + small), "font-size": _fmt(small),
        "fill": MUTED_TEXT, "font-family": "monospace",
    })
    area_text.text = f"({area:.2f} m²)"

    if item["has_pillar"]:
        warn = ET.SubElement(text_group, "text", {
            "x": "0", "y": _fmt(font_size + small * 2.1), "font-size": _fmt(small),
            "fill": WARNING_TEXT, "font-weight": "bold",
        })
        warn.text = f"⚠ {item['net_area_m2']:.2f} m²"


def build_svg(zones: List[Zone], scale_ratio: float,
              background: Optional[dict] = None) -> str:
    """Render the layout to an SVG document string."""
    data = prepare_export_data(zones, scale_ratio, background, EXPORT_PADDING)
    width, height = data["width"], data["height"]

    root = ET.Element("svg", {
        "xmlns": SVG_NS,
        "width": _fmt(width),
        "height": _fmt(height),
        "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
    })
    defs = ET.SubElement(root, "defs")
    pattern = ET.SubElement(defs, "pattern", {
        "id": "pillarPattern", "patternUnits": "userSpaceOnUse",
        "width": "10", "height": "10", "patternTransform": "rotate(45)",
    })
    ET.SubElement(pattern, "line", {
        "x1": "0", "y1": "0", "x2": "0", "y2": "10",
        "stroke": "#64748b", "stroke-width": "2",
    })
    ET.SubElement(root, "rect", {"width": "100%", "height": "100%", "fill": "#f8fafc"})

    bg = data["background"]
    if bg and bg.get("ref"):
        ET.SubElement(root, "image", {
            "href": bg["ref"], "x": _fmt(bg["x"]), "y": _fmt(bg["y"]),
            "width": _fmt(bg["w"]), "height": _fmt(bg["h"]),
        })

    for item in data["items"]:
        zone: Zone = item["zone"]
        group = ET.SubElement(root, "g", {
            "id": zone.id,
            "transform": (
                f"translate({_fmt(item['x'])}, {_fmt(item['y'])}) "
                f"rotate({_fmt(zone.rotation)}, {_fmt(zone.w / 2)}, {_fmt(zone.h / 2)})"
            ),
        })
        if zone.kind == ZoneKind.BOOTH:
            fill = zone.color or BOOTH_FLOOR
            if zone.points:
                _polygon_shape(group, zone, fill)
            else:
                ET.SubElement(group, "rect", {
                    "width": _fmt(zone.w), "height": _fmt(zone.h),
                    "fill": fill, "stroke": "#cbd5e1", "stroke-width": "1",
                })
                _booth_walls(group, zone)
        else:
            ET.SubElement(group, "rect", {
                "width": _fmt(zone.w), "height": _fmt(zone.h),
                "fill": "url(#pillarPattern)", "stroke": "#475569", "stroke-width": "1",
            })
        _labels(group, item)

    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n' + body
