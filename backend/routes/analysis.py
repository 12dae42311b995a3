from fastapi import APIRouter, HTTPException

from schemas import AnalysisRequest, AnalysisResponse
from services.layout_advisor import analyze_layout
from services.project_io import zones_from_items

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post('/analysis', response_model=AnalysisResponse)
async def post_analysis(req: AnalysisRequest):
    """Area totals plus an AI (or rule-based) review of the layout."""
    try:
        zones = zones_from_items(req.zones)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await analyze_layout(zones, req.scale_ratio)
