"""
Rotated bounds and corner helpers.

Run: pytest test_rotation.py
"""

import math

import pytest

from services.booth_engine import Zone, ZoneKind, axis_aligned_bounds, rotate_vector, rotated_corners
from services.booth_engine.rotation import BL, BR, TL, TR, bottom_right_corner, is_quarter_turned


def _zone(x, y, w, h, rotation=0.0):
    return Zone(id="z", kind=ZoneKind.BOOTH, x=x, y=y, w=w, h=h, rotation=rotation)


def test_unrotated_bounds_are_the_zone_box():
    box = axis_aligned_bounds(_zone(10, 20, 200, 100))
    assert tuple(box) == (10, 20, 200, 100)


def test_full_turn_counts_as_unrotated():
    box = axis_aligned_bounds(_zone(10, 20, 200, 100, rotation=360))
    assert tuple(box) == (10, 20, 200, 100)


def test_quarter_turn_swaps_extent_around_center():
    box = axis_aligned_bounds(_zone(0, 0, 200, 100, rotation=90))
    assert box.x == pytest.approx(50)
    assert box.y == pytest.approx(-50)
    assert box.w == pytest.approx(100)
    assert box.h == pytest.approx(200)


def test_45_degree_square_bounds():
    box = axis_aligned_bounds(_zone(0, 0, 100, 100, rotation=45))
    side = 100 * math.sqrt(2)
    assert box.w == pytest.approx(side)
    assert box.h == pytest.approx(side)
    assert box.center.x == pytest.approx(50)
    assert box.center.y == pytest.approx(50)


@pytest.mark.parametrize("rotation", [0, 15, 30, 45, 90, 137, 180, 225, 300, -60])
def test_bounds_contain_every_rotated_corner(rotation):
    zone = _zone(40, -20, 120, 70, rotation=rotation)
    box = axis_aligned_bounds(zone)
    for corner in rotated_corners(zone):
        assert box.x - 1e-9 <= corner.x <= box.right + 1e-9
        assert box.y - 1e-9 <= corner.y <= box.bottom + 1e-9


def test_rotate_vector_quarter_turn():
    x, y = rotate_vector(1.0, 0.0, math.pi / 2)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_bottom_right_corner_follows_rotation():
    assert bottom_right_corner(0) == BR
    assert bottom_right_corner(90) == TR
    assert bottom_right_corner(180) == TL
    assert bottom_right_corner(270) == BL


def test_is_quarter_turned():
    assert is_quarter_turned(90)
    assert is_quarter_turned(270)
    assert is_quarter_turned(-90)
    assert not is_quarter_turned(0)
    assert not is_quarter_turned(180)
    assert not is_quarter_turned(45)


@pytest.mark.parametrize("rotation", [0, 30, 45, 90, 137, 180, 270, -60])
def test_bounds_area_never_shrinks(rotation):
    box = axis_aligned_bounds(_zone(0, 0, 120, 70, rotation))
    if rotation % 90 == 0:
        assert box.w * box.h == pytest.approx(120 * 70)
    else:
        assert box.w * box.h > 120 * 70
