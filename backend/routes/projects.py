"""
Saved floor-plan projects: CRUD plus per-project export.
"""

import os

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from config import EXPORT_DIR
from database import get_db
from schemas import ProjectCreate, ProjectDetail, ProjectOut, ProjectUpdate
from services.cad_export import generate_dxf
from services.project_io import import_project
from services.projects import (
    create_project,
    delete_project,
    get_project_by_id,
    list_projects,
    project_plan,
    project_to_detail,
    update_project,
)
from services.svg_export import build_svg

router = APIRouter(prefix="/api/projects", tags=["projects"])


async def _get_or_404(db: AsyncSession, project_id: str):
    row = await get_project_by_id(db, project_id)
    if not row:
        raise HTTPException(status_code=404, detail="Project not found")
    return row


@router.post('', response_model=ProjectDetail, status_code=201)
async def post_project(req: ProjectCreate, db: AsyncSession = Depends(get_db)):
    """Save a new floor plan."""
    try:
        row = await create_project(db, req.name, req.plan.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return project_to_detail(row)


@router.get('', response_model=list[ProjectOut])
async def get_projects(db: AsyncSession = Depends(get_db)):
    return await list_projects(db)


@router.get('/{project_id}', response_model=ProjectDetail)
async def get_project(project_id: str, db: AsyncSession = Depends(get_db)):
    row = await _get_or_404(db, project_id)
    return project_to_detail(row)


@router.put('/{project_id}', response_model=ProjectDetail)
async def put_project(project_id: str, req: ProjectUpdate, db: AsyncSession = Depends(get_db)):
    """Rename a project and/or replace its plan."""
    row = await _get_or_404(db, project_id)
    plan = req.plan.model_dump() if req.plan is not None else None
    try:
        row = await update_project(db, row, name=req.name, plan=plan)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return project_to_detail(row)


@router.delete('/{project_id}', status_code=204)
async def remove_project(project_id: str, db: AsyncSession = Depends(get_db)):
    row = await _get_or_404(db, project_id)
    await delete_project(db, row)
    return Response(status_code=204)


@router.get('/{project_id}/export/json')
async def export_project_json(project_id: str, db: AsyncSession = Depends(get_db)):
    """Download the plan in its persistence format."""
    row = await _get_or_404(db, project_id)
    return JSONResponse(
        content=project_plan(row),
        headers={"Content-Disposition": f'attachment; filename="{row.id}.json"'},
    )


@router.get('/{project_id}/export/svg')
async def export_project_svg(project_id: str, db: AsyncSession = Depends(get_db)):
    row = await _get_or_404(db, project_id)
    state = import_project(project_plan(row))
    background = state.background.to_dict() if state.background else None
    svg = build_svg(list(state.zones), state.scale_ratio, background)
    return Response(content=svg, media_type="image/svg+xml")


@router.get('/{project_id}/export/dxf')
async def export_project_dxf(project_id: str, db: AsyncSession = Depends(get_db)):
    row = await _get_or_404(db, project_id)
    state = import_project(project_plan(row))
    background = state.background.to_dict() if state.background else None
    path = os.path.join(str(EXPORT_DIR), f"{row.id}.dxf")
    try:
        generate_dxf(list(state.zones), state.scale_ratio, path, background)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"DXF export failed: {e}")
    return FileResponse(path, media_type="application/dxf", filename=f"{row.name}.dxf")
