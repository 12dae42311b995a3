"""
Geometry routes.

Thin HTTP wrappers around the pure booth_engine functions so a client
can compute bounds, usable area, polygon normalization, splits, resizes
and zoom steps without reimplementing them.
"""

from fastapi import APIRouter, HTTPException

from schemas import (
    BoundsRequest,
    NetAreaRequest,
    NetAreaResponse,
    NormalizeRequest,
    NormalizeResponse,
    RectOut,
    ResizeRequest,
    SplitRequest,
    ZonesResponse,
    ZoomRequest,
)
from services.booth_engine import (
    Snapshot,
    SplitDirection,
    Viewport,
    Zone,
    axis_aligned_bounds,
    effective_area,
    net_usable_area,
    normalize_points,
    polygon_area,
    resize_from_snapshot,
    split_zone,
    to_square_meters,
    zoom_at,
)
from services.booth_engine.viewport import wheel_zoom

router = APIRouter(prefix="/api/geometry", tags=["geometry"])


def _parse_zone(raw: dict) -> Zone:
    try:
        return Zone.from_dict(raw)
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post('/bounds', response_model=RectOut)
async def post_bounds(req: BoundsRequest):
    """Axis-aligned bounding box of a (possibly rotated) zone."""
    box = axis_aligned_bounds(_parse_zone(req.zone))
    return {"x": box.x, "y": box.y, "w": box.w, "h": box.h}


@router.post('/net-area', response_model=NetAreaResponse)
async def post_net_area(req: NetAreaRequest):
    """Usable area of one booth after pillar intrusion."""
    zones = [_parse_zone(z) for z in req.zones]
    booth = next((z for z in zones if z.id == req.booth_id), None)
    if booth is None:
        raise HTTPException(status_code=404, detail="Booth not found in zones")

    gross = booth.w * booth.h
    net = net_usable_area(booth, zones)
    drawn = polygon_area(booth)
    return {
        "booth_id": booth.id,
        "gross_area": gross,
        "net_area": net,
        "effective_area": effective_area(booth, zones),
        "gross_area_m2": to_square_meters(gross, req.scale_ratio),
        "net_area_m2": to_square_meters(net, req.scale_ratio),
        "polygon_area": drawn,
        "polygon_area_m2": to_square_meters(drawn, req.scale_ratio),
        "has_pillar_intrusion": net < gross,
    }


@router.post('/normalize', response_model=NormalizeResponse)
async def post_normalize(req: NormalizeRequest):
    """Bounding box plus unit-square vertices for a drawn polygon."""
    result = normalize_points([(p.x, p.y) for p in req.points])
    if result is None:
        return {"polygon": None}
    result["points"] = [{"x": p.x, "y": p.y} for p in result["points"]]
    return {"polygon": result}


@router.post('/split', response_model=ZonesResponse)
async def post_split(req: SplitRequest):
    """Split a rectangular zone into equal children."""
    zone = _parse_zone(req.zone)
    try:
        children = split_zone(zone, req.parts, SplitDirection(req.direction))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"zones": [c.to_dict() for c in children]}


@router.post('/resize')
async def post_resize(req: ResizeRequest):
    """Resize from the rotation-aware bottom-right handle by a world delta."""
    zone = _parse_zone(req.zone)
    if req.grid <= 0:
        raise HTTPException(status_code=400, detail="grid must be positive")
    x, y, w, h = resize_from_snapshot(Snapshot.of(zone), req.dx, req.dy, grid=req.grid)
    return {"zone": zone.with_updates(x=x, y=y, w=w, h=h).to_dict()}


@router.post('/zoom')
async def post_zoom(req: ZoomRequest):
    """Zoom about a screen anchor, by explicit scale or by one wheel step."""
    viewport = Viewport(pan_x=req.viewport.panX, pan_y=req.viewport.panY, scale=req.viewport.scale)
    if viewport.scale <= 0:
        raise HTTPException(status_code=400, detail="scale must be positive")
    if req.new_scale is not None:
        result = zoom_at(viewport, req.new_scale, req.anchor_x, req.anchor_y)
    elif req.delta_y is not None:
        result = wheel_zoom(viewport, req.delta_y, req.anchor_x, req.anchor_y)
    else:
        raise HTTPException(status_code=400, detail="Provide new_scale or delta_y")
    return {"viewport": result.to_dict()}
