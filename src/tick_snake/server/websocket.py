"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from tick_snake.server.models import SessionStatus
from tick_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


async def _send_snapshot(websocket: WebSocket, snapshot: dict) -> None:
    await websocket.send_text(json.dumps(snapshot, separators=(",", ":")))


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send directions or quit, receive state each move."""
    manager = _get_manager(websocket)
    hosted = manager.get_session(session_id)
    if hosted is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    hosted.players.append(websocket)
    logger.info("Player connected to session %s.", session_id)

    # Send initial state so the client can draw before the first move.
    await _send_snapshot(websocket, hosted.session.snapshot().to_dict())

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            if msg.get("action") == "quit":
                try:
                    await manager.end_session(session_id)
                except KeyError:
                    break
                continue

            direction = msg.get("direction")
            if not isinstance(direction, str):
                continue
            if hosted.status != SessionStatus.ACTIVE:
                continue
            try:
                await manager.request_direction(session_id, direction)
            except (KeyError, ValueError):
                continue
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in hosted.players:
            hosted.players.remove(websocket)


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only state stream."""
    manager = _get_manager(websocket)
    hosted = manager.get_session(session_id)
    if hosted is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    hosted.spectators.append(websocket)
    logger.info("Spectator connected to session %s.", session_id)

    await _send_snapshot(websocket, hosted.session.snapshot().to_dict())

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        if websocket in hosted.spectators:
            hosted.spectators.remove(websocket)
