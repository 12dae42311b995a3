"""
Editor route: the interaction reducer over HTTP.

The client posts its current editor state with one event (or a batch)
and gets the next state back. The server keeps nothing between calls.
"""

import logging

from fastapi import APIRouter, HTTPException

from schemas import EditorDispatchRequest, EditorDispatchResponse
from services.booth_engine import EditorState, Event, dispatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/editor", tags=["editor"])


@router.post('/dispatch', response_model=EditorDispatchResponse)
async def post_dispatch(req: EditorDispatchRequest):
    raw_events = list(req.events)
    if req.event is not None:
        raw_events.append(req.event)
    if not raw_events:
        raise HTTPException(status_code=400, detail="No event given")

    try:
        state = EditorState.from_dict(req.state) if req.state else EditorState()
        events = [Event.from_dict(e) for e in raw_events]
        for event in events:
            state = dispatch(event, state)
    except (KeyError, ValueError, TypeError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid editor payload: {e}")

    logger.debug(f"Dispatched {len(events)} event(s); mode={state.mode.value}")
    return {"state": state.to_dict()}
