"""
Polygon normalization, edge toggling and booth walls.

Run: pytest test_polygon.py
"""

import math

import pytest

from services.booth_engine import (
    BoothOpening,
    Point,
    Zone,
    ZoneKind,
    denormalize_points,
    normalize_points,
    toggle_open_edge,
    wall_sides,
)
from services.booth_engine.polygon import closed_edges


def _ring(n, cx=300.0, cy=-120.0, radius=80.0):
    return [
        (cx + radius * math.cos(2 * math.pi * i / n), cy + radius * math.sin(2 * math.pi * i / n) * 0.6)
        for i in range(n)
    ]


def test_empty_input_returns_none():
    assert normalize_points([]) is None


@pytest.mark.parametrize("n", range(3, 11))
def test_round_trip_reconstructs_vertices(n):
    original = _ring(n)
    result = normalize_points(original)

    for p in result["points"]:
        assert 0.0 <= p.x <= 1.0
        assert 0.0 <= p.y <= 1.0

    for (ox, oy), p in zip(original, result["points"]):
        assert p.x * result["w"] + result["x"] == pytest.approx(ox)
        assert p.y * result["h"] + result["y"] == pytest.approx(oy)


def test_collinear_points_floor_extent_at_one():
    result = normalize_points([(0, 10), (50, 10), (100, 10)])
    assert result["w"] == 100
    assert result["h"] == 1
    assert all(p.y == 0 for p in result["points"])


def test_denormalize_polygon_zone():
    zone = Zone(
        id="poly", kind=ZoneKind.BOOTH, x=10, y=20, w=100, h=50,
        points=(Point(0, 0), Point(1, 0), Point(0.5, 1)),
    )
    assert denormalize_points(zone) == [Point(10, 20), Point(110, 20), Point(60, 70)]


def test_denormalize_rectangle_gives_corners():
    zone = Zone(id="r", kind=ZoneKind.BOOTH, x=0, y=0, w=10, h=5)
    assert denormalize_points(zone) == [Point(0, 0), Point(10, 0), Point(10, 5), Point(0, 5)]


def test_toggle_open_edge():
    zone = Zone(
        id="poly", kind=ZoneKind.BOOTH, x=0, y=0, w=100, h=100,
        points=(Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)),
    )
    opened = toggle_open_edge(zone, 2)
    assert opened.open_edge_indices == (2,)
    assert closed_edges(opened) == [0, 1, 3]
    assert toggle_open_edge(opened, 2).open_edge_indices == ()


def test_wall_sides_per_opening():
    def walls(opening):
        zone = Zone(id="b", kind=ZoneKind.BOOTH, x=0, y=0, w=10, h=10, booth_opening=opening)
        return {side for side, closed in wall_sides(zone).items() if closed}

    assert walls(BoothOpening.SINGLE_OPEN) == {"top", "left", "right"}
    assert walls(BoothOpening.DOUBLE_CORNER) == {"top", "left"}
    assert walls(BoothOpening.DOUBLE_PARALLEL) == {"left", "right"}
    assert walls(BoothOpening.THREE_OPEN) == {"top"}
    assert walls(BoothOpening.ISLAND) == set()
