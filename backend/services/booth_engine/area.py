"""
Intersection and usable-area calculations.

Pillar intrusion is measured on the axis-aligned bounds of both zones,
not by exact polygon clipping. A booth's gross area is always its
``w * h`` box, even for polygon booths; those rely on the manual area
override for a correct figure.
"""

from typing import Dict, Iterable, List

from shapely.geometry import Polygon

from ..layout_constants import CM2_PER_M2, CM_PER_M
from .rotation import axis_aligned_bounds
from .zone_model import Zone, ZoneKind


def intersection_area(a, b) -> float:
    """Overlap area of the axis-aligned bounds of two zones (0 if disjoint)."""
    box_a = axis_aligned_bounds(a)
    box_b = axis_aligned_bounds(b)

    x_overlap = max(0.0, min(box_a.right, box_b.right) - max(box_a.x, box_b.x))
    y_overlap = max(0.0, min(box_a.bottom, box_b.bottom) - max(box_a.y, box_b.y))
    return x_overlap * y_overlap


def net_usable_area(booth: Zone, all_zones: Iterable[Zone]) -> float:
    """
    Gross area of *booth* minus the area lost to overlapping pillars.

    Ignores ``use_manual_area``; see :func:`effective_area` for the value
    that should be displayed. Never negative, never above ``w * h``.
    """
    gross = booth.w * booth.h
    lost = sum(
        intersection_area(booth, pillar)
        for pillar in all_zones
        if pillar.kind == ZoneKind.PILLAR
    )
    return min(gross, max(0.0, gross - lost))


def effective_area(booth: Zone, all_zones: Iterable[Zone]) -> float:
    """Area to report for a booth: the manual override when enabled."""
    if booth.use_manual_area:
        return float(booth.manual_area or 0.0)
    return net_usable_area(booth, all_zones)


def polygon_area(zone: Zone) -> float:
    """True area of a polygon zone (shoelace); box area for rectangles."""
    if not zone.points:
        return zone.w * zone.h
    poly = Polygon([(p.x * zone.w, p.y * zone.h) for p in zone.points])
    return abs(poly.area)


def to_square_meters(area: float, scale_ratio: float) -> float:
    """Convert world-unit area to m² given centimeters per world unit."""
    return area * scale_ratio * scale_ratio / CM2_PER_M2


def to_meters(length: float, scale_ratio: float) -> float:
    return length * scale_ratio / CM_PER_M


def layout_summary(zones: List[Zone], scale_ratio: float) -> Dict:
    """
    Per-booth and total areas in m².

    Returns a dict with ``total_area``, ``usable_area``,
    ``pillar_intrusion``, ``pillar_count`` and a ``booths`` list.
    """
    rows = []
    total_gross = 0.0
    total_usable = 0.0

    for booth in zones:
        if booth.kind != ZoneKind.BOOTH:
            continue
        gross_px = booth.w * booth.h
        net_px = net_usable_area(booth, zones)
        gross_m2 = to_square_meters(gross_px, scale_ratio)
        net_m2 = to_square_meters(net_px, scale_ratio)
        total_gross += gross_m2
        total_usable += net_m2
        rows.append({
            "id": booth.id,
            "label": booth.label,
            "type": booth.booth_opening.name if booth.booth_opening else None,
            "dimensions": f"{round(booth.w)}x{round(booth.h)}",
            "gross_area_m2": round(gross_m2, 2),
            "usable_area_m2": round(net_m2, 2),
            "polygon_area_m2": round(to_square_meters(polygon_area(booth), scale_ratio), 2),
            "has_pillar_intrusion": net_px < gross_px,
            "notes": booth.notes,
        })

    return {
        "total_area": total_gross,
        "usable_area": total_usable,
        "pillar_intrusion": total_gross - total_usable,
        "pillar_count": sum(1 for z in zones if z.kind == ZoneKind.PILLAR),
        "booths": rows,
    }
