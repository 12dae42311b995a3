"""
Stateless export routes: post a plan, get SVG or DXF back.
"""

import os
import uuid

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse, Response

from config import EXPORT_DIR
from schemas import PlanIn
from services.cad_export import generate_dxf
from services.project_io import import_project
from services.svg_export import build_svg

router = APIRouter(prefix="/api/export", tags=["export"])


def _load(plan: PlanIn):
    try:
        state = import_project(plan.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    background = state.background.to_dict() if state.background else None
    return state, background


@router.post('/svg')
async def post_export_svg(plan: PlanIn):
    state, background = _load(plan)
    svg = build_svg(list(state.zones), state.scale_ratio, background)
    return Response(content=svg, media_type="image/svg+xml")


@router.post('/dxf')
async def post_export_dxf(plan: PlanIn):
    state, background = _load(plan)
    path = os.path.join(str(EXPORT_DIR), f"plan_{uuid.uuid4().hex[:8]}.dxf")
    try:
        generate_dxf(list(state.zones), state.scale_ratio, path, background)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"DXF export failed: {e}")
    return FileResponse(path, media_type="application/dxf", filename="floor_plan.dxf")
