"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections import deque
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from tick_snake.config import SessionConfig
from tick_snake.session import GameSession, TickOutcome
from tick_snake.server.models import SessionStatus, SessionSummary
from tick_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class HostedSession:
    """A game session plus the driver state around it."""

    session_id: str
    session: GameSession
    frame_ms: int
    status: SessionStatus = SessionStatus.ACTIVE
    players: list[WebSocket] = field(default_factory=list)
    spectators: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            state=self.session.state.value,
            score=self.session.score,
            frame_ms=self.frame_ms,
        )


class SessionManager:
    """Central registry managing all hosted sessions."""

    def __init__(
        self, max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self._sessions: dict[str, HostedSession] = {}
        self._max_finished_sessions = max_finished_sessions
        # Finished session ids, oldest retirement first.
        self._retired: deque[str] = deque()

    def create_session(
        self,
        grid_width: int = 50,
        grid_height: int = 50,
        initial_length: int = 3,
        base_interval: int = 12,
        frame_ms: int = 16,
        seed: int | None = None,
    ) -> HostedSession:
        """Create a session and start its tick loop."""
        config = SessionConfig(
            grid_width=grid_width,
            grid_height=grid_height,
            initial_length=initial_length,
            base_interval=base_interval,
            seed=seed,
        )
        session_id = uuid.uuid4().hex[:12]
        hosted = HostedSession(
            session_id=session_id,
            session=GameSession(config),
            frame_ms=frame_ms,
        )
        self._sessions[session_id] = hosted
        if hosted.session.is_terminal:
            self._retire(hosted)
        else:
            hosted._task = asyncio.create_task(self._tick_loop(hosted))
        logger.info(
            "Session %s created (%dx%d, frame=%dms).",
            session_id, grid_width, grid_height, frame_ms,
        )
        return hosted

    def get_session(self, session_id: str) -> HostedSession | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions still being played."""
        return [
            h.summary() for h in self._sessions.values()
            if h.status == SessionStatus.ACTIVE
        ]

    async def request_direction(
        self, session_id: str, direction: Direction | str,
    ) -> bool:
        """Forward a direction request. Raises KeyError or ValueError."""
        hosted = self._require(session_id)
        async with hosted.lock:
            return hosted.session.request_direction(direction)

    async def end_session(self, session_id: str) -> None:
        """End a session at the player's request and notify listeners."""
        hosted = self._require(session_id)
        async with hosted.lock:
            hosted.session.request_end()
            self._retire(hosted)
            state = hosted.session.snapshot().to_dict()
        await self._broadcast(hosted, state)

    def _require(self, session_id: str) -> HostedSession:
        hosted = self._sessions.get(session_id)
        if hosted is None:
            raise KeyError(f"Session {session_id} not found.")
        return hosted

    async def _tick_loop(self, hosted: HostedSession) -> None:
        """Tick the session every frame, broadcasting state after each move."""
        frame = hosted.frame_ms / 1000.0
        try:
            while hosted.status == SessionStatus.ACTIVE:
                await asyncio.sleep(frame)
                async with hosted.lock:
                    if hosted.status != SessionStatus.ACTIVE:
                        break
                    outcome = hosted.session.tick()
                    if hosted.session.is_terminal:
                        self._retire(hosted)
                    state = hosted.session.snapshot().to_dict()
                if outcome is not TickOutcome.WAITING:
                    await self._broadcast(hosted, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", hosted.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", hosted.session_id)
            self._retire(hosted)
        finally:
            if hosted.status == SessionStatus.FINISHED:
                await self._disconnect_all(hosted)

    def _retire(self, hosted: HostedSession) -> None:
        """Move a session to FINISHED once and enforce the retention limit.

        Retired sessions stay queryable until more than
        ``max_finished_sessions`` newer ones have finished after them.
        """
        if hosted.status == SessionStatus.FINISHED:
            return
        hosted.status = SessionStatus.FINISHED
        hosted.finished_at = time.monotonic()
        self._retired.append(hosted.session_id)
        logger.info(
            "Session %s finished (%s, score=%d).",
            hosted.session_id,
            hosted.session.state.value,
            hosted.session.score,
        )

        evicted = 0
        while len(self._retired) > self._max_finished_sessions:
            self._sessions.pop(self._retired.popleft(), None)
            evicted += 1
        if evicted:
            logger.info(
                "Evicted %d finished sessions, %d retained.",
                evicted, len(self._retired),
            )

    async def _disconnect_all(self, hosted: HostedSession) -> None:
        """Close every socket still attached to a finished session."""
        sockets = [*hosted.players, *hosted.spectators]
        hosted.players.clear()
        hosted.spectators.clear()
        for ws in sockets:
            if ws.client_state != WebSocketState.CONNECTED:
                continue
            try:
                await ws.close(code=1000, reason="Session finished.")
            except Exception:
                logger.warning(
                    "Socket close failed in session %s.", hosted.session_id,
                    exc_info=True,
                )

    async def _broadcast(self, hosted: HostedSession, state: dict) -> None:
        """Push one snapshot to all listeners, dropping sockets that fail."""
        payload = json.dumps(state, separators=(",", ":"))
        for sockets in (hosted.players, hosted.spectators):
            # Snapshot the list; a disconnect handler may remove entries.
            failed = [
                ws for ws in tuple(sockets)
                if not await _send(ws, payload)
            ]
            for ws in failed:
                if ws in sockets:
                    sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            h._task for h in self._sessions.values()
            if h._task and not h._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")


async def _send(ws: WebSocket, payload: str) -> bool:
    """Send *payload* if the socket is open. False means the send failed."""
    if ws.client_state != WebSocketState.CONNECTED:
        return True
    try:
        await ws.send_text(payload)
    except Exception:
        return False
    return True
