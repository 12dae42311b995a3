"""
Editor state machine, driven by event replay.

Run: pytest test_interaction.py
"""

import math

import pytest

from services.booth_engine import EditorMode, EditorState, Event, EventType, ZoneKind, dispatch, replay
from services.booth_engine.interaction import DragKind
from services.booth_engine.viewport import Viewport


def ev(type_, **kw):
    return Event(type=EventType(type_), **kw)


def add_booth(state=None):
    return dispatch(ev("ADD_ZONE", kind=ZoneKind.BOOTH), state or EditorState())


def only_id(state):
    assert len(state.selected_ids) == 1
    return next(iter(state.selected_ids))


# ---------------------------------------------------------------------------
# Adding zones
# ---------------------------------------------------------------------------

def test_add_booth_spawns_under_screen_point():
    state = add_booth()
    zone = state.zones[0]
    assert (zone.x, zone.y, zone.w, zone.h) == (100, 100, 200, 200)
    assert zone.label == "B-1"
    assert state.selected_ids == {zone.id}


def test_add_pillar_clamps_negative_spawn():
    state = EditorState(viewport=Viewport(pan_x=500, pan_y=500, scale=1))
    state = dispatch(ev("ADD_ZONE", kind=ZoneKind.PILLAR), state)
    pillar = state.zones[0]
    assert pillar.kind == ZoneKind.PILLAR
    assert (pillar.x, pillar.y, pillar.w, pillar.h) == (100, 100, 40, 40)


# ---------------------------------------------------------------------------
# Move / resize / pan
# ---------------------------------------------------------------------------

def test_move_drag_snaps_and_commits():
    state = add_booth()
    zid = only_id(state)
    state = dispatch(ev("POINTER_DOWN_ZONE", zone_id=zid, x=150, y=150), state)
    assert state.mode == EditorMode.DRAGGING_MOVE

    state = dispatch(ev("POINTER_MOVE", x=173, y=150), state)
    assert state.zone(zid).x == 125

    state = dispatch(ev("POINTER_UP"), state)
    assert state.mode == EditorMode.IDLE
    assert state.session is None
    assert state.zone(zid).x == 125


def test_move_accounts_for_zoom():
    state = add_booth(EditorState(viewport=Viewport(scale=2)))
    zid = only_id(state)
    state = replay([
        ev("POINTER_DOWN_ZONE", zone_id=zid, x=300, y=300),
        ev("POINTER_MOVE", x=340, y=300),
    ], state)
    assert state.zone(zid).x == state.zones[0].x == 70


def test_escape_cancels_move():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("POINTER_DOWN_ZONE", zone_id=zid, x=150, y=150),
        ev("POINTER_MOVE", x=400, y=400),
        ev("KEY_DOWN", key="Escape"),
    ], state)
    zone = state.zone(zid)
    assert (zone.x, zone.y) == (100, 100)
    assert state.mode == EditorMode.IDLE
    assert state.session is None


def test_resize_keeps_top_left_for_unrotated_booth():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("POINTER_DOWN_HANDLE", zone_id=zid, x=300, y=300),
        ev("POINTER_MOVE", x=350, y=310),
    ], state)
    assert state.mode == EditorMode.DRAGGING_RESIZE
    zone = state.zone(zid)
    assert (zone.x, zone.y) == pytest.approx((100, 100))
    assert (zone.w, zone.h) == pytest.approx((250, 210))


def test_escape_cancels_resize():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("POINTER_DOWN_HANDLE", zone_id=zid, x=300, y=300),
        ev("POINTER_MOVE", x=500, y=500),
        ev("KEY_DOWN", key="Escape"),
    ], state)
    zone = state.zone(zid)
    assert (zone.x, zone.y, zone.w, zone.h) == (100, 100, 200, 200)


def test_pan_and_cancel():
    state = add_booth()
    state = replay([
        ev("POINTER_DOWN_CANVAS", x=0, y=0),
        ev("POINTER_MOVE", x=30, y=40),
    ], state)
    assert state.mode == EditorMode.PANNING
    assert state.selected_ids == frozenset()
    assert (state.viewport.pan_x, state.viewport.pan_y) == (30, 40)

    state = dispatch(ev("KEY_DOWN", key="Escape"), state)
    assert (state.viewport.pan_x, state.viewport.pan_y) == (0, 0)
    assert state.mode == EditorMode.IDLE


def test_wheel_zooms_around_pointer():
    state = dispatch(ev("WHEEL", x=0, y=0, delta_y=-100), EditorState())
    assert state.viewport.scale == pytest.approx(math.exp(0.1))
    assert (state.viewport.pan_x, state.viewport.pan_y) == (0, 0)


# ---------------------------------------------------------------------------
# Locks
# ---------------------------------------------------------------------------

def test_locked_zone_selects_but_does_not_move():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("UPDATE_SELECTED", updates={"locked": True}),
        ev("POINTER_DOWN_CANVAS", x=-50, y=-50),
        ev("POINTER_UP"),
        ev("POINTER_DOWN_ZONE", zone_id=zid, x=150, y=150),
        ev("POINTER_MOVE", x=250, y=250),
    ], state)
    assert state.selected_ids == {zid}
    assert state.mode == EditorMode.IDLE
    assert (state.zone(zid).x, state.zone(zid).y) == (100, 100)


def test_locked_zone_ignores_geometry_updates_but_takes_cosmetic_ones():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("UPDATE_SELECTED", updates={"locked": True}),
        ev("UPDATE_SELECTED", updates={"x": 999, "label": "Corner"}),
    ], state)
    zone = state.zone(zid)
    assert zone.x == 100
    assert zone.label == "Corner"

    state = dispatch(ev("UPDATE_SELECTED", updates={"locked": False, "x": 5}), state)
    assert state.zone(zid).x == 5
    assert not state.zone(zid).locked


def test_locked_zone_survives_delete_and_arrows():
    state = add_booth()
    locked_id = only_id(state)
    state = dispatch(ev("UPDATE_SELECTED", updates={"locked": True}), state)
    state = add_booth(state)
    free_id = only_id(state)
    state = dispatch(ev("POINTER_DOWN_ZONE", zone_id=locked_id, shift=True, x=0, y=0), state)
    state = dispatch(ev("POINTER_UP"), state)
    assert state.selected_ids == {locked_id, free_id}

    state = dispatch(ev("KEY_DOWN", key="ArrowRight"), state)
    assert state.zone(locked_id).x == 100
    assert state.zone(free_id).x == 101

    state = dispatch(ev("KEY_DOWN", key="Delete"), state)
    assert [z.id for z in state.zones] == [locked_id]
    assert state.selected_ids == {locked_id}


# ---------------------------------------------------------------------------
# Selection, duplicate, keyboard
# ---------------------------------------------------------------------------

def test_shift_click_toggles_and_group_moves():
    state = add_booth()
    first = only_id(state)
    state = add_booth(state)
    second = only_id(state)

    state = replay([
        ev("POINTER_DOWN_ZONE", zone_id=first, shift=True, x=0, y=0),
        ev("POINTER_UP"),
        ev("POINTER_DOWN_ZONE", zone_id=second, x=0, y=0),
        ev("POINTER_MOVE", x=20, y=0),
        ev("POINTER_UP"),
    ], state)
    assert state.selected_ids == {first, second}
    assert state.zone(first).x == 120
    assert state.zone(second).x == 120

    state = dispatch(ev("POINTER_DOWN_ZONE", zone_id=first, shift=True, x=0, y=0), state)
    assert state.selected_ids == {second}


def test_ctrl_pointer_down_duplicates():
    state = add_booth()
    zid = only_id(state)
    state = dispatch(ev("UPDATE_SELECTED", updates={"locked": True}), state)
    state = dispatch(ev("POINTER_DOWN_ZONE", zone_id=zid, ctrl=True, x=0, y=0), state)

    assert len(state.zones) == 2
    copy_id = only_id(state)
    assert copy_id != zid
    copy = state.zone(copy_id)
    assert (copy.x, copy.y) == (110, 110)
    assert not copy.locked
    assert state.mode == EditorMode.DRAGGING_MOVE
    assert state.session.kind == DragKind.MOVE


def test_escape_after_ctrl_duplicate_removes_the_copy():
    state = add_booth()
    zid = only_id(state)
    original = state.zone(zid)
    state = replay([
        ev("POINTER_DOWN_ZONE", zone_id=zid, ctrl=True, x=0, y=0),
        ev("POINTER_MOVE", x=60, y=40),
        ev("KEY_DOWN", key="Escape"),
    ], state)

    assert len(state.zones) == 1
    assert state.zone(zid) == original
    assert state.selected_ids == frozenset()
    assert state.session is None
    assert state.mode == EditorMode.IDLE


def test_arrow_keys_nudge():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("KEY_DOWN", key="ArrowRight"),
        ev("KEY_DOWN", key="ArrowDown", shift=True),
        ev("KEY_DOWN", key="ArrowUp"),
    ], state)
    zone = state.zone(zid)
    assert (zone.x, zone.y) == (101, 109)


def test_escape_clears_selection_when_idle():
    state = dispatch(ev("KEY_DOWN", key="Escape"), add_booth())
    assert state.selected_ids == frozenset()


# ---------------------------------------------------------------------------
# Polygon drawing
# ---------------------------------------------------------------------------

def _draw(points, state=None):
    events = [ev("ENTER_DRAW_MODE")]
    events += [ev("POINTER_DOWN_CANVAS", x=x, y=y) for x, y in points]
    return replay(events, state)


def test_enter_finishes_polygon_with_manual_area():
    state = _draw([(0, 0), (100, 0), (100, 100)])
    assert state.mode == EditorMode.DRAWING_POLYGON
    assert len(state.drawing_points) == 3

    state = dispatch(ev("KEY_DOWN", key="Enter"), state)
    assert state.mode == EditorMode.IDLE
    assert len(state.zones) == 1
    booth = state.zones[0]
    assert booth.kind == ZoneKind.BOOTH
    assert (booth.x, booth.y, booth.w, booth.h) == (0, 0, 100, 100)
    assert [tuple(p) for p in booth.points] == [(0, 0), (1, 0), (1, 1)]
    assert booth.use_manual_area and booth.manual_area == 0
    assert state.selected_ids == {booth.id}
    assert state.drawing_points == ()


def test_click_near_first_point_closes_loop():
    state = _draw([(0, 0), (100, 0), (100, 100), (3, 4)])
    assert state.mode == EditorMode.IDLE
    assert len(state.zones) == 1
    assert len(state.zones[0].points) == 3


def test_double_click_finishes_polygon():
    state = _draw([(0, 0), (80, 0), (40, 60)])
    state = dispatch(ev("DOUBLE_CLICK", x=40, y=60), state)
    assert state.mode == EditorMode.IDLE
    assert len(state.zones) == 1


def test_finishing_with_too_few_points_keeps_drawing():
    state = _draw([(0, 0), (100, 0)])
    state = dispatch(ev("KEY_DOWN", key="Enter"), state)
    assert state.mode == EditorMode.DRAWING_POLYGON
    assert state.drawing_points == ()
    assert state.zones == ()


def test_escape_while_drawing_drops_points_then_exits():
    state = _draw([(0, 0), (100, 0), (100, 100)])
    state = dispatch(ev("KEY_DOWN", key="Escape"), state)
    assert len(state.drawing_points) == 2
    state = replay([ev("KEY_DOWN", key="Escape")] * 2, state)
    assert state.drawing_points == ()
    assert state.mode == EditorMode.DRAWING_POLYGON
    state = dispatch(ev("KEY_DOWN", key="Escape"), state)
    assert state.mode == EditorMode.IDLE


def test_pointer_move_tracks_cursor_while_drawing():
    state = _draw([(0, 0)])
    state = dispatch(ev("POINTER_MOVE", x=42, y=17), state)
    assert tuple(state.cursor) == (42, 17)


def test_toggle_wall_on_drawn_polygon():
    state = dispatch(ev("KEY_DOWN", key="Enter"), _draw([(0, 0), (100, 0), (100, 100)]))
    zid = state.zones[0].id
    state = dispatch(ev("TOGGLE_WALL", zone_id=zid, edge_index=1), state)
    assert state.zone(zid).open_edge_indices == (1,)
    state = dispatch(ev("TOGGLE_WALL", zone_id=zid, edge_index=7), state)
    assert state.zone(zid).open_edge_indices == (1,)


# ---------------------------------------------------------------------------
# Split
# ---------------------------------------------------------------------------

def test_split_replaces_booth_with_children():
    state = add_booth()
    zid = only_id(state)
    state = dispatch(ev("SPLIT", zone_id=zid, parts=2), state)
    assert state.zone(zid) is None
    assert len(state.zones) == 2
    assert state.selected_ids == {z.id for z in state.zones}
    assert sum(z.w * z.h for z in state.zones) == pytest.approx(40000)


def test_split_rejected_for_pillars_locked_and_bad_parts():
    state = dispatch(ev("ADD_ZONE", kind=ZoneKind.PILLAR), EditorState())
    pid = only_id(state)
    assert dispatch(ev("SPLIT", zone_id=pid, parts=2), state) == state

    state = add_booth()
    zid = only_id(state)
    assert dispatch(ev("SPLIT", zone_id=zid, parts=1), state) == state
    locked = dispatch(ev("UPDATE_SELECTED", updates={"locked": True}), state)
    assert dispatch(ev("SPLIT", zone_id=zid, parts=3), locked) == locked


# ---------------------------------------------------------------------------
# Background image
# ---------------------------------------------------------------------------

def test_background_move_and_cancel():
    state = replay([
        ev("SET_BACKGROUND", background={"ref": "hall.png", "x": 0, "y": 0, "w": 1000, "h": 500}),
        ev("TOGGLE_BACKGROUND_EDIT"),
        ev("POINTER_DOWN_CANVAS", x=10, y=10),
        ev("POINTER_MOVE", x=30, y=10),
    ])
    assert state.mode == EditorMode.BACKGROUND_MOVE
    assert state.background.x == 20

    state = dispatch(ev("KEY_DOWN", key="Escape"), state)
    assert state.background.x == 0
    assert state.mode == EditorMode.IDLE


def test_wheel_scales_background_while_editing():
    state = replay([
        ev("SET_BACKGROUND", background={"ref": "hall.png", "x": 0, "y": 0, "w": 1000, "h": 500}),
        ev("TOGGLE_BACKGROUND_EDIT"),
        ev("WHEEL", x=0, y=0, delta_y=100),
    ])
    factor = math.exp(-0.05)
    assert state.background.w == pytest.approx(1000 * factor)
    assert state.background.h == pytest.approx(500 * factor)
    assert state.viewport.scale == 1


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def test_state_round_trips_through_dict_mid_drag():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("POINTER_DOWN_ZONE", zone_id=zid, x=150, y=150),
        ev("POINTER_MOVE", x=180, y=160),
    ], state)
    restored = EditorState.from_dict(state.to_dict())
    assert restored == state

    nxt = dispatch(Event.from_dict({"type": "POINTER_MOVE", "x": 200, "y": 150}), restored)
    assert nxt.zone(zid).x == 150


# ---------------------------------------------------------------------------
# Pointer presses on zones outside idle mode
# ---------------------------------------------------------------------------

def test_zone_click_while_drawing_adds_a_point():
    state = add_booth()
    zid = only_id(state)
    state = _draw([(10, 10)], state)
    state = dispatch(ev("POINTER_DOWN_ZONE", zone_id=zid, x=150, y=150), state)
    assert state.mode == EditorMode.DRAWING_POLYGON
    assert len(state.drawing_points) == 2
    assert (state.drawing_points[1].x, state.drawing_points[1].y) == (150, 150)
    assert len(state.zones) == 1

    state = dispatch(ev("POINTER_DOWN_HANDLE", zone_id=zid, x=300, y=300), state)
    assert state.mode == EditorMode.DRAWING_POLYGON
    assert len(state.drawing_points) == 3


def test_zone_press_while_editing_background_moves_the_background():
    state = add_booth()
    zid = only_id(state)
    state = replay([
        ev("SET_BACKGROUND", background={"ref": "hall.png", "x": 0, "y": 0, "w": 1000, "h": 500}),
        ev("TOGGLE_BACKGROUND_EDIT"),
        ev("POINTER_DOWN_ZONE", zone_id=zid, x=150, y=150),
        ev("POINTER_MOVE", x=170, y=150),
    ], state)
    assert state.mode == EditorMode.BACKGROUND_MOVE
    assert state.background.x == 20
    assert state.zone(zid).x == 100


def test_event_parts_from_json_are_integers():
    state = add_booth()
    zid = only_id(state)
    event = Event.from_dict({"type": "SPLIT", "zoneId": zid, "parts": 2.0})
    assert event.parts == 2
    assert isinstance(event.parts, int)
    assert len(dispatch(event, state).zones) == 2
