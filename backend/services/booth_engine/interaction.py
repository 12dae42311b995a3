"""
Interaction state machine for the booth editor.

All pointer, wheel and keyboard input is expressed as an :class:`Event`
and folded into an immutable :class:`EditorState` by :func:`dispatch`:

    IDLE --down on zone--> DRAGGING_MOVE / DRAGGING_RESIZE --up--> IDLE
    IDLE --down on canvas--> PANNING (or BACKGROUND_MOVE) --up--> IDLE
    IDLE --enter draw mode--> DRAWING_POLYGON --close/Enter/dbl-click--> IDLE

Escape cancels an active drag by restoring the pointer-down snapshot.
The reducer owns no geometry; it only calls into the sibling modules.
Lock checks happen here, the geometry functions never see the flag.
"""

import enum
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional, Tuple

from ..layout_constants import (
    BACKGROUND_ZOOM_INTENSITY,
    BOOTH_LABEL_PREFIX,
    CLOSE_LOOP_TOLERANCE_PX,
    DEFAULT_BOOTH_FONT_COLOR,
    DEFAULT_BOOTH_H,
    DEFAULT_BOOTH_W,
    DEFAULT_PILLAR_FONT_COLOR,
    DEFAULT_PILLAR_FONT_SIZE,
    DEFAULT_PILLAR_H,
    DEFAULT_PILLAR_W,
    DEFAULT_SCALE_RATIO,
    DUPLICATE_OFFSET,
    MIN_POLYGON_POINTS,
    NUDGE_STEP,
    NUDGE_STEP_FAST,
    SPAWN_MIN_WORLD,
    SPAWN_SCREEN_POINT,
)
from .polygon import normalize_points, toggle_open_edge
from .resize import Snapshot, handle_corner_for, move_from_snapshot, resize_from_snapshot
from .split import SplitDirection, split_zone
from .viewport import Viewport, pan_by, to_world, wheel_factor, wheel_zoom
from .zone_model import (
    BoothOpening,
    Point,
    StandType,
    Zone,
    ZoneKind,
    new_zone_id,
    updates_from_keys,
)

logger = logging.getLogger(__name__)

GEOMETRY_FIELDS = {"x", "y", "w", "h", "rotation", "points"}
ARROW_KEYS = {
    "ArrowUp": (0, -1),
    "ArrowDown": (0, 1),
    "ArrowLeft": (-1, 0),
    "ArrowRight": (1, 0),
}


class EditorMode(enum.Enum):
    IDLE = "IDLE"
    DRAGGING_MOVE = "DRAGGING_MOVE"
    DRAGGING_RESIZE = "DRAGGING_RESIZE"
    PANNING = "PANNING"
    BACKGROUND_MOVE = "BACKGROUND_MOVE"
    DRAWING_POLYGON = "DRAWING_POLYGON"


class DragKind(enum.Enum):
    MOVE = "MOVE"
    RESIZE = "RESIZE"
    PAN = "PAN"
    BACKGROUND_MOVE = "BACKGROUND_MOVE"


_MODE_FOR_DRAG = {
    DragKind.MOVE: EditorMode.DRAGGING_MOVE,
    DragKind.RESIZE: EditorMode.DRAGGING_RESIZE,
    DragKind.PAN: EditorMode.PANNING,
    DragKind.BACKGROUND_MOVE: EditorMode.BACKGROUND_MOVE,
}


class EventType(enum.Enum):
    POINTER_DOWN_ZONE = "POINTER_DOWN_ZONE"
    POINTER_DOWN_HANDLE = "POINTER_DOWN_HANDLE"
    POINTER_DOWN_CANVAS = "POINTER_DOWN_CANVAS"
    POINTER_MOVE = "POINTER_MOVE"
    POINTER_UP = "POINTER_UP"
    DOUBLE_CLICK = "DOUBLE_CLICK"
    WHEEL = "WHEEL"
    KEY_DOWN = "KEY_DOWN"
    ENTER_DRAW_MODE = "ENTER_DRAW_MODE"
    TOGGLE_BACKGROUND_EDIT = "TOGGLE_BACKGROUND_EDIT"
    SET_BACKGROUND = "SET_BACKGROUND"
    ADD_ZONE = "ADD_ZONE"
    UPDATE_SELECTED = "UPDATE_SELECTED"
    SPLIT = "SPLIT"
    TOGGLE_WALL = "TOGGLE_WALL"


# ---------------------------------------------------------------------------
# State records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BackgroundImage:
    ref: str
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def to_dict(self) -> dict:
        return {"ref": self.ref, "x": self.x, "y": self.y, "w": self.w, "h": self.h}

    @staticmethod
    def from_dict(data: Optional[dict]) -> Optional["BackgroundImage"]:
        if not data or not data.get("ref"):
            return None
        return BackgroundImage(
            ref=data["ref"],
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            w=float(data.get("w", 0.0)),
            h=float(data.get("h", 0.0)),
        )


@dataclass(frozen=True)
class DragSession:
    """Everything captured at pointer-down; discarded at pointer-up."""

    kind: DragKind
    start_x: float
    start_y: float
    snapshots: Dict[str, Snapshot] = field(default_factory=dict)
    active_id: Optional[str] = None
    handle: Optional[int] = None
    start_pan: Tuple[float, float] = (0.0, 0.0)
    start_background: Optional[Tuple[float, float]] = None
    # zone created by this drag (ctrl-duplicate), removed again on cancel
    created_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "startX": self.start_x,
            "startY": self.start_y,
            "snapshots": {zid: list(s) for zid, s in self.snapshots.items()},
            "activeId": self.active_id,
            "handle": self.handle,
            "startPan": list(self.start_pan),
            "startBackground": list(self.start_background) if self.start_background else None,
            "createdId": self.created_id,
        }

    @staticmethod
    def from_dict(data: Optional[dict]) -> Optional["DragSession"]:
        if not data:
            return None
        start_bg = data.get("startBackground")
        return DragSession(
            kind=DragKind(data["kind"]),
            start_x=float(data["startX"]),
            start_y=float(data["startY"]),
            snapshots={zid: Snapshot(*s) for zid, s in (data.get("snapshots") or {}).items()},
            active_id=data.get("activeId"),
            handle=data.get("handle"),
            start_pan=tuple(data.get("startPan") or (0.0, 0.0)),
            start_background=tuple(start_bg) if start_bg else None,
            created_id=data.get("createdId"),
        )


@dataclass(frozen=True)
class EditorState:
    zones: Tuple[Zone, ...] = ()
    selected_ids: FrozenSet[str] = frozenset()
    viewport: Viewport = Viewport()
    mode: EditorMode = EditorMode.IDLE
    session: Optional[DragSession] = None
    drawing_points: Tuple[Point, ...] = ()
    cursor: Optional[Point] = None
    background: Optional[BackgroundImage] = None
    editing_background: bool = False
    scale_ratio: float = DEFAULT_SCALE_RATIO

    def zone(self, zone_id: Optional[str]) -> Optional[Zone]:
        for z in self.zones:
            if z.id == zone_id:
                return z
        return None

    @property
    def selected_zones(self) -> Tuple[Zone, ...]:
        return tuple(z for z in self.zones if z.id in self.selected_ids)

    def to_dict(self) -> dict:
        return {
            "zones": [z.to_dict() for z in self.zones],
            "selectedIds": sorted(self.selected_ids),
            "viewport": self.viewport.to_dict(),
            "mode": self.mode.value,
            "session": self.session.to_dict() if self.session else None,
            "drawingPoints": [{"x": p.x, "y": p.y} for p in self.drawing_points],
            "cursor": {"x": self.cursor.x, "y": self.cursor.y} if self.cursor else None,
            "background": self.background.to_dict() if self.background else None,
            "editingBackground": self.editing_background,
            "scaleRatio": self.scale_ratio,
        }

    @staticmethod
    def from_dict(data: dict) -> "EditorState":
        cursor = data.get("cursor")
        return EditorState(
            zones=tuple(Zone.from_dict(z) for z in data.get("zones") or []),
            selected_ids=frozenset(data.get("selectedIds") or []),
            viewport=Viewport.from_dict(data.get("viewport") or {}),
            mode=EditorMode(data.get("mode", EditorMode.IDLE.value)),
            session=DragSession.from_dict(data.get("session")),
            drawing_points=tuple(Point(p["x"], p["y"]) for p in data.get("drawingPoints") or []),
            cursor=Point(cursor["x"], cursor["y"]) if cursor else None,
            background=BackgroundImage.from_dict(data.get("background")),
            editing_background=bool(data.get("editingBackground", False)),
            scale_ratio=float(data.get("scaleRatio") or DEFAULT_SCALE_RATIO),
        )


@dataclass(frozen=True)
class Event:
    type: EventType
    x: float = 0.0
    y: float = 0.0
    zone_id: Optional[str] = None
    key: Optional[str] = None
    shift: bool = False
    ctrl: bool = False
    delta_y: float = 0.0
    kind: Optional[ZoneKind] = None
    updates: Optional[dict] = None
    parts: Optional[int] = None
    direction: Optional[SplitDirection] = None
    edge_index: Optional[int] = None
    background: Optional[dict] = None

    @staticmethod
    def from_dict(data: dict) -> "Event":
        kind = data.get("kind")
        direction = data.get("direction")
        return Event(
            type=EventType(data["type"]),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            zone_id=data.get("zoneId"),
            key=data.get("key"),
            shift=bool(data.get("shift", False)),
            ctrl=bool(data.get("ctrl", False)),
            delta_y=float(data.get("deltaY", 0.0)),
            kind=ZoneKind(kind) if kind else None,
            updates=data.get("updates"),
            parts=int(data["parts"]) if data.get("parts") is not None else None,
            direction=SplitDirection(direction) if direction else None,
            edge_index=data.get("edgeIndex"),
            background=data.get("background"),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _replace_zones(state: EditorState, updated: Dict[str, Zone]) -> EditorState:
    if not updated:
        return state
    return replace(state, zones=tuple(updated.get(z.id, z) for z in state.zones))


def _start_session(state: EditorState, session: DragSession, **changes) -> EditorState:
    return replace(state, session=session, mode=_MODE_FOR_DRAG[session.kind], **changes)


def _end_session(state: EditorState) -> EditorState:
    """Commit whatever the active drag has produced and go idle."""
    if state.session is None:
        return state
    return replace(state, session=None, mode=EditorMode.IDLE)


def _cancel_session(state: EditorState) -> EditorState:
    """Undo the active drag by restoring its pointer-down snapshot."""
    session = state.session
    if session.kind in (DragKind.MOVE, DragKind.RESIZE):
        restored = {}
        for zone in state.zones:
            snap = session.snapshots.get(zone.id)
            if snap is not None:
                restored[zone.id] = replace(zone, x=snap.x, y=snap.y, w=snap.w, h=snap.h)
        state = _replace_zones(state, restored)
        if session.created_id is not None:
            state = replace(
                state,
                zones=tuple(z for z in state.zones if z.id != session.created_id),
                selected_ids=state.selected_ids - {session.created_id},
            )
    elif session.kind == DragKind.PAN:
        state = replace(state, viewport=replace(
            state.viewport, pan_x=session.start_pan[0], pan_y=session.start_pan[1]))
    elif session.kind == DragKind.BACKGROUND_MOVE and state.background and session.start_background:
        bx, by = session.start_background
        state = replace(state, background=replace(state.background, x=bx, y=by))
    return replace(state, session=None, mode=EditorMode.IDLE)


def _snapshots(state: EditorState, ids) -> Dict[str, Snapshot]:
    return {z.id: Snapshot.of(z) for z in state.zones if z.id in ids}


def _finish_drawing(state: EditorState) -> EditorState:
    if len(state.drawing_points) < MIN_POLYGON_POINTS:
        return replace(state, drawing_points=(), cursor=None)

    normalized = normalize_points(state.drawing_points)
    booth = Zone(
        id=new_zone_id(),
        kind=ZoneKind.BOOTH,
        x=normalized["x"],
        y=normalized["y"],
        w=normalized["w"],
        h=normalized["h"],
        points=tuple(normalized["points"]),
        stand_type=StandType.STANDARD,
        label=f"{BOOTH_LABEL_PREFIX}-{len(state.zones) + 1}",
        use_manual_area=True,
        manual_area=0.0,
    )
    logger.debug(f"Closed polygon booth {booth.id} with {len(booth.points)} vertices")
    return replace(
        state,
        zones=state.zones + (booth,),
        selected_ids=frozenset({booth.id}),
        drawing_points=(),
        cursor=None,
        mode=EditorMode.IDLE,
    )


# ---------------------------------------------------------------------------
# Pointer events
# ---------------------------------------------------------------------------

def _on_pointer_down_zone(state: EditorState, event: Event) -> EditorState:
    if state.editing_background or state.mode == EditorMode.DRAWING_POLYGON:
        return _on_pointer_down_canvas(state, event)
    state = _end_session(state)
    zone = state.zone(event.zone_id)
    if zone is None:
        return state

    if event.ctrl:
        copy = replace(
            zone,
            id=new_zone_id(),
            x=zone.x + DUPLICATE_OFFSET,
            y=zone.y + DUPLICATE_OFFSET,
            locked=False,
            extra=dict(zone.extra),
        )
        session = DragSession(
            kind=DragKind.MOVE,
            start_x=event.x,
            start_y=event.y,
            snapshots={copy.id: Snapshot.of(copy)},
            active_id=copy.id,
            created_id=copy.id,
        )
        return _start_session(
            state, session,
            zones=state.zones + (copy,),
            selected_ids=frozenset({copy.id}),
        )

    selection = set(state.selected_ids)
    if event.shift:
        selection ^= {zone.id}
    elif zone.id not in selection:
        selection = {zone.id}
    state = replace(state, selected_ids=frozenset(selection))

    if zone.locked:
        logger.debug(f"Zone {zone.id} is locked; not starting a move")
        return state

    session = DragSession(
        kind=DragKind.MOVE,
        start_x=event.x,
        start_y=event.y,
        snapshots=_snapshots(state, selection),
        active_id=zone.id,
    )
    return _start_session(state, session)


def _on_pointer_down_handle(state: EditorState, event: Event) -> EditorState:
    if state.editing_background or state.mode == EditorMode.DRAWING_POLYGON:
        return _on_pointer_down_canvas(state, event)
    state = _end_session(state)
    zone = state.zone(event.zone_id)
    if zone is None:
        return state

    state = replace(state, selected_ids=frozenset({zone.id}))
    if zone.locked:
        logger.debug(f"Zone {zone.id} is locked; not starting a resize")
        return state

    session = DragSession(
        kind=DragKind.RESIZE,
        start_x=event.x,
        start_y=event.y,
        snapshots={zone.id: Snapshot.of(zone)},
        active_id=zone.id,
        handle=handle_corner_for(zone.rotation),
    )
    return _start_session(state, session)


def _on_pointer_down_canvas(state: EditorState, event: Event) -> EditorState:
    state = replace(_end_session(state), selected_ids=frozenset())

    if state.editing_background and state.background is not None:
        session = DragSession(
            kind=DragKind.BACKGROUND_MOVE,
            start_x=event.x,
            start_y=event.y,
            start_background=(state.background.x, state.background.y),
        )
        return _start_session(state, session)

    if state.mode == EditorMode.DRAWING_POLYGON:
        wx, wy = to_world(event.x, event.y, state.viewport)
        points = state.drawing_points
        if len(points) >= MIN_POLYGON_POINTS:
            first = points[0]
            if math.hypot(first.x - wx, first.y - wy) < CLOSE_LOOP_TOLERANCE_PX / state.viewport.scale:
                return _finish_drawing(state)
        return replace(state, drawing_points=points + (Point(wx, wy),))

    session = DragSession(
        kind=DragKind.PAN,
        start_x=event.x,
        start_y=event.y,
        start_pan=(state.viewport.pan_x, state.viewport.pan_y),
    )
    return _start_session(state, session)


def _on_pointer_move(state: EditorState, event: Event) -> EditorState:
    if state.mode == EditorMode.DRAWING_POLYGON:
        state = replace(state, cursor=Point(*to_world(event.x, event.y, state.viewport)))

    session = state.session
    if session is None:
        return state

    dx = event.x - session.start_x
    dy = event.y - session.start_y
    scale = state.viewport.scale

    if session.kind == DragKind.PAN:
        return replace(state, viewport=pan_by(state.viewport, session.start_pan, dx, dy))

    if session.kind == DragKind.BACKGROUND_MOVE:
        if state.background is None or session.start_background is None:
            return state
        bx, by = session.start_background
        return replace(state, background=replace(
            state.background, x=bx + dx / scale, y=by + dy / scale))

    if session.kind == DragKind.MOVE:
        moved = {}
        for zone in state.zones:
            snap = session.snapshots.get(zone.id)
            if snap is None or zone.locked:
                continue
            x, y = move_from_snapshot(snap, dx / scale, dy / scale)
            moved[zone.id] = replace(zone, x=x, y=y)
        return _replace_zones(state, moved)

    zone = state.zone(session.active_id)
    snap = session.snapshots.get(session.active_id)
    if zone is None or snap is None or zone.locked:
        return state
    x, y, w, h = resize_from_snapshot(snap, dx / scale, dy / scale, session.handle)
    return _replace_zones(state, {zone.id: replace(zone, x=x, y=y, w=w, h=h)})


def _on_pointer_up(state: EditorState, event: Event) -> EditorState:
    return _end_session(state)


def _on_double_click(state: EditorState, event: Event) -> EditorState:
    if state.mode == EditorMode.DRAWING_POLYGON:
        return _finish_drawing(state)
    return state


def _on_wheel(state: EditorState, event: Event) -> EditorState:
    bg = state.background
    if state.editing_background and bg is not None and bg.w > 0 and bg.h > 0:
        factor = wheel_factor(event.delta_y, BACKGROUND_ZOOM_INTENSITY)
        wx, wy = to_world(event.x, event.y, state.viewport)
        return replace(state, background=replace(
            bg,
            x=wx - (wx - bg.x) * factor,
            y=wy - (wy - bg.y) * factor,
            w=bg.w * factor,
            h=bg.h * factor,
        ))
    return replace(state, viewport=wheel_zoom(state.viewport, event.delta_y, event.x, event.y))


# ---------------------------------------------------------------------------
# Keyboard
# ---------------------------------------------------------------------------

def _on_key_down(state: EditorState, event: Event) -> EditorState:
    key = event.key

    if key == "Escape":
        if state.session is not None:
            return _cancel_session(state)
        if state.mode == EditorMode.DRAWING_POLYGON:
            if state.drawing_points:
                return replace(state, drawing_points=state.drawing_points[:-1])
            return replace(state, mode=EditorMode.IDLE, cursor=None)
        if state.selected_ids:
            return replace(state, selected_ids=frozenset())
        return state

    if key == "Enter":
        if state.mode == EditorMode.DRAWING_POLYGON:
            return _finish_drawing(state)
        return state

    if not state.selected_ids:
        return state

    if key in ("Delete", "Backspace"):
        kept = tuple(z for z in state.zones if z.id not in state.selected_ids or z.locked)
        still_selected = frozenset(z.id for z in kept if z.id in state.selected_ids)
        return replace(state, zones=kept, selected_ids=still_selected)

    if key in ARROW_KEYS:
        step = NUDGE_STEP_FAST if event.shift else NUDGE_STEP
        ux, uy = ARROW_KEYS[key]
        moved = {
            z.id: replace(z, x=z.x + ux * step, y=z.y + uy * step)
            for z in state.selected_zones
            if not z.locked
        }
        return _replace_zones(state, moved)

    return state


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _on_enter_draw_mode(state: EditorState, event: Event) -> EditorState:
    state = _end_session(state)
    return replace(
        state,
        mode=EditorMode.DRAWING_POLYGON,
        drawing_points=(),
        cursor=None,
        editing_background=False,
        selected_ids=frozenset(),
    )


def _on_toggle_background_edit(state: EditorState, event: Event) -> EditorState:
    state = _end_session(state)
    return replace(state, editing_background=not state.editing_background)


def _on_set_background(state: EditorState, event: Event) -> EditorState:
    return replace(state, background=BackgroundImage.from_dict(event.background))


def _on_add_zone(state: EditorState, event: Event) -> EditorState:
    kind = event.kind or ZoneKind.BOOTH
    wx, wy = to_world(SPAWN_SCREEN_POINT[0], SPAWN_SCREEN_POINT[1], state.viewport)
    if wx < 0:
        wx = SPAWN_MIN_WORLD
    if wy < 0:
        wy = SPAWN_MIN_WORLD

    if kind == ZoneKind.BOOTH:
        zone = Zone(
            id=new_zone_id(),
            kind=kind,
            x=wx,
            y=wy,
            w=DEFAULT_BOOTH_W,
            h=DEFAULT_BOOTH_H,
            booth_opening=BoothOpening.SINGLE_OPEN,
            stand_type=StandType.STANDARD,
            label=f"{BOOTH_LABEL_PREFIX}-{len(state.zones) + 1}",
            font_color=DEFAULT_BOOTH_FONT_COLOR,
        )
    else:
        zone = Zone(
            id=new_zone_id(),
            kind=kind,
            x=wx,
            y=wy,
            w=DEFAULT_PILLAR_W,
            h=DEFAULT_PILLAR_H,
            font_size=DEFAULT_PILLAR_FONT_SIZE,
            font_color=DEFAULT_PILLAR_FONT_COLOR,
        )
    return replace(state, zones=state.zones + (zone,), selected_ids=frozenset({zone.id}))


def _on_update_selected(state: EditorState, event: Event) -> EditorState:
    if not state.selected_ids or not event.updates:
        return state
    updates = updates_from_keys(event.updates)
    updated = {}
    for zone in state.selected_zones:
        changes = dict(updates)
        if zone.locked and updates.get("locked") is not False:
            changes = {k: v for k, v in changes.items() if k not in GEOMETRY_FIELDS}
        if not changes:
            continue
        try:
            updated[zone.id] = zone.with_updates(**changes)
        except ValueError as e:
            logger.warning(f"Rejected update for zone {zone.id}: {e}")
    return _replace_zones(state, updated)


def _on_split(state: EditorState, event: Event) -> EditorState:
    zone = state.zone(event.zone_id)
    parts = event.parts or 0
    if zone is None or not zone.is_booth:
        return state
    if zone.locked or zone.is_polygon or parts < 2:
        logger.debug(f"Split of zone {zone.id} rejected (locked/polygon/parts={parts})")
        return state

    children = split_zone(zone, parts, event.direction or SplitDirection.HORIZONTAL)
    remaining = tuple(z for z in state.zones if z.id != zone.id)
    return replace(
        state,
        zones=remaining + tuple(children),
        selected_ids=frozenset(c.id for c in children),
    )


def _on_toggle_wall(state: EditorState, event: Event) -> EditorState:
    zone = state.zone(event.zone_id)
    if zone is None or not zone.points or event.edge_index is None:
        return state
    if not 0 <= event.edge_index < len(zone.points):
        return state
    return _replace_zones(state, {zone.id: toggle_open_edge(zone, event.edge_index)})


_HANDLERS = {
    EventType.POINTER_DOWN_ZONE: _on_pointer_down_zone,
    EventType.POINTER_DOWN_HANDLE: _on_pointer_down_handle,
    EventType.POINTER_DOWN_CANVAS: _on_pointer_down_canvas,
    EventType.POINTER_MOVE: _on_pointer_move,
    EventType.POINTER_UP: _on_pointer_up,
    EventType.DOUBLE_CLICK: _on_double_click,
    EventType.WHEEL: _on_wheel,
    EventType.KEY_DOWN: _on_key_down,
    EventType.ENTER_DRAW_MODE: _on_enter_draw_mode,
    EventType.TOGGLE_BACKGROUND_EDIT: _on_toggle_background_edit,
    EventType.SET_BACKGROUND: _on_set_background,
    EventType.ADD_ZONE: _on_add_zone,
    EventType.UPDATE_SELECTED: _on_update_selected,
    EventType.SPLIT: _on_split,
    EventType.TOGGLE_WALL: _on_toggle_wall,
}


def dispatch(event: Event, state: EditorState) -> EditorState:
    """Fold one input event into the editor state and return the next state."""
    return _HANDLERS[event.type](state, event)


def replay(events, state: Optional[EditorState] = None) -> EditorState:
    """Apply a sequence of events starting from *state* (or an empty editor)."""
    state = state or EditorState()
    for event in events:
        state = dispatch(event, state)
    return state
