import json
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Project
from services.project_io import export_project, import_project

logger = logging.getLogger(__name__)


async def create_project(db: AsyncSession, name: str, plan: dict):
    """Validate *plan* and store it as a new Project row."""
    state = import_project(plan)
    row = Project(
        name=name,
        scale_ratio=state.scale_ratio,
        plan_json=json.dumps(export_project(state), ensure_ascii=False),
    )
    db.add(row)
    await db.flush()
    await db.commit()
    await db.refresh(row)
    logger.info(f"Saved project {row.id} with {len(state.zones)} zones")
    return row


async def get_project_by_id(db: AsyncSession, project_id: str):
    """Retrieve a single project row by its primary key."""
    result = await db.execute(select(Project).where(Project.id == project_id))
    return result.scalars().first()


async def list_projects(db: AsyncSession):
    """All projects, most recently created first."""
    result = await db.execute(select(Project).order_by(Project.created_at.desc()))
    return result.scalars().all()


async def update_project(db: AsyncSession, row: Project,
                         name: Optional[str] = None, plan: Optional[dict] = None):
    if name is not None:
        row.name = name
    if plan is not None:
        state = import_project(plan)
        row.scale_ratio = state.scale_ratio
        row.plan_json = json.dumps(export_project(state), ensure_ascii=False)
    await db.flush()
    await db.commit()
    await db.refresh(row)
    logger.info(f"Updated project {row.id}")
    return row


async def delete_project(db: AsyncSession, row: Project):
    await db.delete(row)
    await db.commit()
    logger.info(f"Deleted project {row.id}")


def project_plan(row: Project) -> dict:
    """Decode the stored plan document of a Project row."""
    return json.loads(row.plan_json)


def project_to_detail(row: Project) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
        "scale_ratio": row.scale_ratio,
        "plan": project_plan(row),
    }
