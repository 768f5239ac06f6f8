"""FastAPI renderer feed — lets a map view poll tracking sessions over HTTP."""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from ride_tracking.config import TrackingConfig
from ride_tracking.web.schemas import (
    CreateSessionRequest,
    CreateSessionResponse,
    FixRequest,
    FixResponse,
    HealthResponse,
    PhaseRequest,
    Point,
    ProgressResponse,
)
from ride_tracking.web.service import SessionRegistry, UnknownSessionError

load_dotenv()  # loads .env from project root; must run before env vars are consumed

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

VERSION = "0.1.0"

app = FastAPI(title="Ride Tracking", version=VERSION)

registry = SessionRegistry(TrackingConfig.from_env())


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session {session_id} not found")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION, sessions=len(registry))


@app.post("/api/sessions", response_model=CreateSessionResponse, status_code=201)
def create_session(req: CreateSessionRequest) -> CreateSessionResponse:
    """Open a tracking session for one ride."""
    try:
        session_id, session = registry.create(req)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CreateSessionResponse(
        session_id=session_id,
        route_length=len(session.tracker.route),
        phase=session.phase.value,
    )


@app.put("/api/sessions/{session_id}/phase")
def set_phase(session_id: str, req: PhaseRequest) -> dict:
    try:
        phase = registry.set_phase(session_id, req.phase)
    except UnknownSessionError as exc:
        raise _not_found(session_id) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"session_id": session_id, "phase": phase.value}


@app.post("/api/sessions/{session_id}/fixes", response_model=FixResponse)
def push_fix(session_id: str, req: FixRequest) -> FixResponse:
    """Feed one raw location fix; sub-threshold fixes are accepted=False, not errors."""
    try:
        accepted = registry.push_fix(session_id, req)
        session = registry.get(session_id)
    except UnknownSessionError as exc:
        raise _not_found(session_id) from exc
    return FixResponse(accepted=accepted, transitions=session.animator.generation)


@app.get("/api/sessions/{session_id}/frame")
def get_frame(session_id: str) -> dict:
    """Current marker, route split and camera, ready to draw."""
    try:
        return registry.frame(session_id)
    except UnknownSessionError as exc:
        raise _not_found(session_id) from exc


@app.get("/api/sessions/{session_id}/progress", response_model=ProgressResponse)
def get_progress(session_id: str) -> ProgressResponse:
    try:
        progress = registry.get(session_id).progress
    except UnknownSessionError as exc:
        raise _not_found(session_id) from exc
    return ProgressResponse(
        session_id=session_id,
        nearest_index=progress.nearest_index,
        matched_index=progress.matched_index,
        progress_percent=progress.progress_percent,
        travelled=[Point(latitude=p.latitude, longitude=p.longitude) for p in progress.travelled],
        remaining=[Point(latitude=p.latitude, longitude=p.longitude) for p in progress.remaining],
    )


@app.delete("/api/sessions/{session_id}", status_code=204)
def delete_session(session_id: str) -> None:
    try:
        registry.delete(session_id)
    except UnknownSessionError as exc:
        raise _not_found(session_id) from exc
