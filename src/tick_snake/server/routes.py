"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from tick_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    SessionSummary,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a session and start ticking it."""
    manager = _get_manager(request)
    try:
        hosted = manager.create_session(
            grid_width=body.grid_width,
            grid_height=body.grid_height,
            initial_length=body.initial_length,
            base_interval=body.base_interval,
            frame_ms=body.frame_ms,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return hosted.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List sessions still being played."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current snapshot."""
    hosted = _get_manager(request).get_session(session_id)
    if hosted is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = hosted.summary().model_dump(mode="json")
    result["snapshot"] = hosted.session.snapshot().to_dict()
    return result


@router.post("/{session_id}/direction")
async def request_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Buffer a direction for the next move."""
    manager = _get_manager(request)
    try:
        accepted = await manager.request_direction(session_id, body.direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return DirectionResponse(accepted=accepted)


@router.post("/{session_id}/end")
async def end_session(session_id: str, request: Request) -> dict:
    """End the session (player quit)."""
    manager = _get_manager(request)
    try:
        await manager.end_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    hosted = manager.get_session(session_id)
    state = hosted.session.state.value if hosted is not None else "ended"
    return {"session_id": session_id, "state": state}
