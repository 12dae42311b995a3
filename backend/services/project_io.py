"""
Project import/export in the planner's JSON persistence format.

    {
      "version": 1,
      "items": [<zone>, ...],
      "backgroundImage": <ref or null>,
      "bgImagePosition": {"x", "y"} | null,
      "bgImageDimensions": {"w", "h"} | null,
      "scaleRatio": <cm per world unit>
    }

Zones round-trip through ``Zone.to_dict``/``Zone.from_dict`` so unknown
keys written by other tools survive a load/save cycle.
"""

import json
import logging
from typing import List, Optional

from services.booth_engine import EditorState, Zone
from services.booth_engine.interaction import BackgroundImage
from services.layout_constants import DEFAULT_SCALE_RATIO

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def export_project(state: EditorState) -> dict:
    """Snapshot of the persistent part of an editor state."""
    bg = state.background
    return {
        "version": FORMAT_VERSION,
        "items": [z.to_dict() for z in state.zones],
        "backgroundImage": bg.ref if bg else None,
        "bgImagePosition": {"x": bg.x, "y": bg.y} if bg else None,
        "bgImageDimensions": {"w": bg.w, "h": bg.h} if bg else None,
        "scaleRatio": state.scale_ratio,
    }


def import_project(data: dict) -> EditorState:
    """
    Build a fresh editor state (idle, nothing selected, default view)
    from a persisted project dict.

    Raises ``ValueError`` when ``items`` is missing or a zone is invalid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ValueError("Project data must contain an 'items' list")

    zones = tuple(Zone.from_dict(item) for item in data["items"])

    background: Optional[BackgroundImage] = None
    if data.get("backgroundImage"):
        pos = data.get("bgImagePosition") or {}
        dims = data.get("bgImageDimensions") or {}
        background = BackgroundImage(
            ref=data["backgroundImage"],
            x=float(pos.get("x", 0.0)),
            y=float(pos.get("y", 0.0)),
            w=float(dims.get("w", 0.0)),
            h=float(dims.get("h", 0.0)),
        )

    logger.info(f"Imported project with {len(zones)} zones")
    return EditorState(
        zones=zones,
        background=background,
        scale_ratio=float(data.get("scaleRatio") or DEFAULT_SCALE_RATIO),
    )


def zones_from_items(items: List[dict]) -> List[Zone]:
    return [Zone.from_dict(item) for item in items]


def dumps_project(state: EditorState) -> str:
    return json.dumps(export_project(state), ensure_ascii=False, indent=2)


def loads_project(text: str) -> EditorState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid project JSON: {e}") from e
    return import_project(data)
