"""Pydantic request/response schemas for the renderer feed."""

from __future__ import annotations

from pydantic import BaseModel


class Point(BaseModel):
    latitude: float
    longitude: float


class CreateSessionRequest(BaseModel):
    route: list[Point] = []
    phase: str = "idle"


class CreateSessionResponse(BaseModel):
    session_id: str
    route_length: int
    phase: str


class PhaseRequest(BaseModel):
    phase: str


class FixRequest(BaseModel):
    latitude: float
    longitude: float
    speed: float | None = None
    heading: float | None = None
    accuracy: float | None = None
    timestamp: float | None = None


class FixResponse(BaseModel):
    accepted: bool
    transitions: int


class ProgressResponse(BaseModel):
    session_id: str
    nearest_index: int
    matched_index: int
    progress_percent: float
    travelled: list[Point]
    remaining: list[Point]


class HealthResponse(BaseModel):
    status: str
    version: str
    sessions: int
