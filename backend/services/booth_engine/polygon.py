"""
Polygon normalization and booth wall helpers.

Free-drawn polygons are stored as a bounding box (``x, y, w, h``) plus
vertices normalized to the unit square of that box.
"""

from typing import Dict, List, Optional, Sequence

from .zone_model import BoothOpening, Point, Zone


def normalize_points(points: Sequence) -> Optional[Dict]:
    """
    Convert world-space vertices into the normalized zone representation.

    Returns ``None`` for an empty input. Otherwise returns a dict with
    ``x, y`` (the min corner), ``w, h`` (extent, floored at 1 so
    collinear input never yields a zero-size box) and ``points``.
    """
    if not points:
        return None

    xs = [float(p[0]) for p in points]
    ys = [float(p[1]) for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    w = max(1.0, max_x - min_x)
    h = max(1.0, max_y - min_y)

    normalized = [Point((px - min_x) / w, (py - min_y) / h) for px, py in zip(xs, ys)]
    return {"x": min_x, "y": min_y, "w": w, "h": h, "points": normalized}


def denormalize_points(zone: Zone) -> List[Point]:
    """World-space vertices of a polygon zone in its unrotated frame."""
    if not zone.points:
        return [
            Point(zone.x, zone.y),
            Point(zone.x + zone.w, zone.y),
            Point(zone.x + zone.w, zone.y + zone.h),
            Point(zone.x, zone.y + zone.h),
        ]
    return [Point(p.x * zone.w + zone.x, p.y * zone.h + zone.y) for p in zone.points]


def toggle_open_edge(zone: Zone, edge_index: int) -> Zone:
    """Open a closed polygon edge, or close an open one."""
    current = list(zone.open_edge_indices)
    if edge_index in current:
        current.remove(edge_index)
    else:
        current.append(edge_index)
    return zone.with_updates(open_edge_indices=current)


_OPEN_SIDES = {
    BoothOpening.SINGLE_OPEN: {"bottom"},
    BoothOpening.DOUBLE_CORNER: {"bottom", "right"},
    BoothOpening.DOUBLE_PARALLEL: {"bottom", "top"},
    BoothOpening.THREE_OPEN: {"bottom", "left", "right"},
    BoothOpening.ISLAND: {"top", "bottom", "left", "right"},
}


def wall_sides(zone: Zone) -> Dict[str, bool]:
    """Which sides of a rectangular booth carry a wall."""
    open_sides = _OPEN_SIDES.get(zone.booth_opening, set())
    return {side: side not in open_sides for side in ("top", "bottom", "left", "right")}


def closed_edges(zone: Zone) -> List[int]:
    """Indices of polygon edges that have a wall."""
    if not zone.points:
        return []
    open_set = set(zone.open_edge_indices)
    return [i for i in range(len(zone.points)) if i not in open_set]
