"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from tick_snake.server.routes import router
from tick_snake.server.session_manager import SessionManager
from tick_snake.server.websocket import ws_router


def create_app(manager: SessionManager | None = None) -> FastAPI:
    """Build the API around *manager*, or a fresh registry if none is given.

    The registry is attached to ``app.state`` up front so handlers can reach
    it even when the ASGI lifespan is not run. Shutdown stops its tick loops.
    """
    registry = manager if manager is not None else SessionManager()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            yield
        finally:
            await registry.cleanup()

    app = FastAPI(title="Tick Snake API", version="0.1.0", lifespan=lifespan)
    app.state.session_manager = registry
    app.include_router(router)
    app.include_router(ws_router)
    return app
