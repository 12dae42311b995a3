"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from services.layout_constants import DEFAULT_SCALE_RATIO, GRID_SIZE


# ---------- Shared ----------
class PointIn(BaseModel):
    x: float
    y: float


class RectOut(BaseModel):
    x: float
    y: float
    w: float
    h: float


class ViewportIn(BaseModel):
    panX: float = 0.0
    panY: float = 0.0
    scale: float = 1.0


# ---------- Plan (persisted project document) ----------
class PlanIn(BaseModel):
    """Floor plan in the persistence format; zone items stay raw dicts."""
    version: int = 1
    items: list[dict] = []
    backgroundImage: Optional[str] = None
    bgImagePosition: Optional[dict] = None
    bgImageDimensions: Optional[dict] = None
    scaleRatio: float = DEFAULT_SCALE_RATIO


# ---------- Project ----------
class ProjectCreate(BaseModel):
    name: str = "Untitled plan"
    plan: PlanIn = PlanIn()


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    plan: Optional[PlanIn] = None


class ProjectOut(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    scale_ratio: float

    class Config:
        from_attributes = True


class ProjectDetail(ProjectOut):
    plan: dict


# ---------- Geometry ----------
class BoundsRequest(BaseModel):
    zone: dict


class NetAreaRequest(BaseModel):
    booth_id: str
    zones: list[dict]
    scale_ratio: float = DEFAULT_SCALE_RATIO


class NetAreaResponse(BaseModel):
    booth_id: str
    gross_area: float
    net_area: float
    effective_area: float
    gross_area_m2: float
    net_area_m2: float
    polygon_area: float
    polygon_area_m2: float
    has_pillar_intrusion: bool


class NormalizeRequest(BaseModel):
    points: list[PointIn]


class NormalizedPolygon(BaseModel):
    x: float
    y: float
    w: float
    h: float
    points: list[PointIn]


class NormalizeResponse(BaseModel):
    polygon: Optional[NormalizedPolygon] = None


class SplitRequest(BaseModel):
    zone: dict
    parts: int
    direction: str = Field("horizontal", description="'horizontal' or 'vertical'")


class ZonesResponse(BaseModel):
    zones: list[dict]


class ResizeRequest(BaseModel):
    zone: dict
    dx: float = Field(..., description="World-space pointer delta x")
    dy: float = Field(..., description="World-space pointer delta y")
    grid: float = GRID_SIZE


class ZoomRequest(BaseModel):
    viewport: ViewportIn = ViewportIn()
    anchor_x: float
    anchor_y: float
    new_scale: Optional[float] = None
    delta_y: Optional[float] = None


# ---------- Editor ----------
class EditorDispatchRequest(BaseModel):
    state: Optional[dict] = None
    event: Optional[dict] = None
    events: list[dict] = []


class EditorDispatchResponse(BaseModel):
    state: dict


# ---------- Analysis ----------
class AnalysisRequest(BaseModel):
    zones: list[dict]
    scale_ratio: float = DEFAULT_SCALE_RATIO


class AnalysisResponse(BaseModel):
    totalArea: float
    usableArea: float
    pillarIntrusion: float
    suggestion: str
    provider: str
    error: Optional[str] = None
