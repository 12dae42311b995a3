"""
Zone model for the booth planner.

A zone is either a booth (exhibitor space) or a pillar (structural
obstruction). Zones are immutable records: every edit produces a new
zone via ``dataclasses.replace`` so editor states can be compared and
replayed. Defaults for optional fields live here, at the data-model
boundary, and never inside the geometry functions.
"""

import enum
import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, NamedTuple, Optional, Tuple


DEFAULT_ROTATION = 0.0


class ZoneKind(enum.Enum):
    BOOTH = "BOOTH"
    PILLAR = "PILLAR"


class BoothOpening(enum.Enum):
    """Wall configuration of a rectangular booth (which sides are open)."""

    SINGLE_OPEN = "单开"
    DOUBLE_CORNER = "双开 (转角)"
    DOUBLE_PARALLEL = "双开 (对通)"
    THREE_OPEN = "三开"
    ISLAND = "岛型 (全开)"


class StandType(enum.Enum):
    RAW = "光地"
    STANDARD = "标摊"
    SPECIAL = "特装"


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.y + self.h / 2)

    @property
    def area(self) -> float:
        return self.w * self.h


def _parse_enum(enum_cls, raw):
    """Accept either the member name or its stored value."""
    if raw is None or isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError:
        pass
    try:
        return enum_cls[raw]
    except KeyError:
        raise ValueError(f"Unknown {enum_cls.__name__}: {raw!r}")


def new_zone_id() -> str:
    return str(uuid.uuid4())


# Python field name -> persisted key
FIELD_KEYS = {
    "id": "id",
    "kind": "type",
    "x": "x",
    "y": "y",
    "w": "w",
    "h": "h",
    "rotation": "rotation",
    "points": "points",
    "open_edge_indices": "openEdgeIndices",
    "booth_opening": "boothType",
    "stand_type": "standType",
    "locked": "locked",
    "use_manual_area": "useManualArea",
    "manual_area": "manualArea",
    "label": "label",
    "color": "color",
    "font_size": "fontSize",
    "font_color": "fontColor",
    "notes": "notes",
}
KEY_FIELDS = {v: k for k, v in FIELD_KEYS.items()}


@dataclass(frozen=True)
class Zone:
    """A booth or pillar placed on the canvas.

    ``x, y`` is the world-space top-left of the unrotated local box and
    ``w, h`` its size. ``rotation`` is in degrees about the box center.
    When ``points`` is set the zone is a polygon whose vertices are
    normalized to the ``w x h`` box.
    """

    id: str
    kind: ZoneKind
    x: float
    y: float
    w: float
    h: float
    rotation: float = DEFAULT_ROTATION
    points: Optional[Tuple[Point, ...]] = None
    open_edge_indices: Tuple[int, ...] = ()
    booth_opening: Optional[BoothOpening] = None
    stand_type: Optional[StandType] = None
    locked: bool = False
    use_manual_area: bool = False
    manual_area: Optional[float] = None
    label: Optional[str] = None
    color: Optional[str] = None
    font_size: Optional[float] = None
    font_color: Optional[str] = None
    notes: Optional[str] = None
    # Unknown persisted keys, written back untouched
    extra: Dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.w > 0 or not self.h > 0:
            raise ValueError(f"Zone {self.id}: size must be positive, got {self.w}x{self.h}")
        if self.points is not None:
            if len(self.points) < 3:
                raise ValueError(f"Zone {self.id}: polygon needs at least 3 points")
            for p in self.points:
                if not (0.0 <= p.x <= 1.0 and 0.0 <= p.y <= 1.0):
                    raise ValueError(f"Zone {self.id}: polygon point {tuple(p)} outside the unit square")
            for idx in self.open_edge_indices:
                if not 0 <= idx < len(self.points):
                    raise ValueError(f"Zone {self.id}: open edge {idx} out of range")

    # ---- shape helpers ---------------------------------------------------

    @property
    def is_booth(self) -> bool:
        return self.kind == ZoneKind.BOOTH

    @property
    def is_pillar(self) -> bool:
        return self.kind == ZoneKind.PILLAR

    @property
    def is_polygon(self) -> bool:
        return bool(self.points)

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.y + self.h / 2)

    @property
    def gross_area(self) -> float:
        return self.w * self.h

    def with_updates(self, **updates) -> "Zone":
        """Return a copy with *updates* applied; the id never changes."""
        updates.pop("id", None)
        if "points" in updates and updates["points"] is not None:
            updates["points"] = tuple(Point(*p) for p in updates["points"])
        if "open_edge_indices" in updates:
            updates["open_edge_indices"] = tuple(updates["open_edge_indices"] or ())
        return replace(self, **updates)

    # ---- persistence -----------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize using the persisted (camelCase) key names."""
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "rotation": self.rotation,
            "locked": self.locked,
            "openEdgeIndices": list(self.open_edge_indices),
            "useManualArea": self.use_manual_area,
        })
        if self.points is not None:
            data["points"] = [{"x": p.x, "y": p.y} for p in self.points]
        if self.booth_opening is not None:
            data["boothType"] = self.booth_opening.value
        if self.stand_type is not None:
            data["standType"] = self.stand_type.value
        if self.manual_area is not None:
            data["manualArea"] = self.manual_area
        for name in ("label", "color", "font_size", "font_color", "notes"):
            value = getattr(self, name)
            if value is not None:
                data[FIELD_KEYS[name]] = value
        return data

    @staticmethod
    def from_dict(data: dict) -> "Zone":
        """Build a zone from its persisted form, keeping unknown keys."""
        if "w" not in data or "h" not in data:
            raise ValueError(f"Zone {data.get('id')}: missing w/h")
        points = data.get("points")
        if points:
            points = tuple(
                Point(float(p["x"]), float(p["y"])) if isinstance(p, dict) else Point(*p)
                for p in points
            )
        else:
            points = None
        extra = {k: v for k, v in data.items() if k not in KEY_FIELDS}
        return Zone(
            id=str(data.get("id") or new_zone_id()),
            kind=_parse_enum(ZoneKind, data.get("type", ZoneKind.BOOTH.value)),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            w=float(data["w"]),
            h=float(data["h"]),
            rotation=float(data.get("rotation") or DEFAULT_ROTATION),
            points=points,
            open_edge_indices=tuple(int(i) for i in data.get("openEdgeIndices") or ()),
            booth_opening=_parse_enum(BoothOpening, data.get("boothType")),
            stand_type=_parse_enum(StandType, data.get("standType")),
            locked=bool(data.get("locked", False)),
            use_manual_area=bool(data.get("useManualArea", False)),
            manual_area=data.get("manualArea"),
            label=data.get("label"),
            color=data.get("color"),
            font_size=data.get("fontSize"),
            font_color=data.get("fontColor"),
            notes=data.get("notes"),
            extra=extra,
        )


def updates_from_keys(raw: dict) -> dict:
    """Translate a partial update keyed by persisted names to field names.

    Keys already using field names pass through; enum values are parsed.
    """
    updates = {}
    for key, value in raw.items():
        name = KEY_FIELDS.get(key, key)
        if name not in FIELD_KEYS:
            raise ValueError(f"Unknown zone field: {key!r}")
        if name == "kind":
            value = _parse_enum(ZoneKind, value)
        elif name == "booth_opening":
            value = _parse_enum(BoothOpening, value)
        elif name == "stand_type":
            value = _parse_enum(StandType, value)
        elif name == "points" and value is not None:
            value = [Point(p["x"], p["y"]) if isinstance(p, dict) else Point(*p) for p in value]
        updates[name] = value
    return updates

