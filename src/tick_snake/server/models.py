"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle of a hosted session, as seen by the driver."""

    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_width: int = Field(default=50, ge=1, le=500)
    grid_height: int = Field(default=50, ge=1, le=500)
    initial_length: int = Field(default=3, ge=1)
    base_interval: int = Field(default=12, ge=1, le=1000)
    frame_ms: int = Field(default=16, ge=1, le=2000)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=8)


class DirectionResponse(BaseModel):
    accepted: bool


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    state: str
    score: int
    frame_ms: int
