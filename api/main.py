"""FastAPI application for the coding-mentor persona pipeline.

This module exposes the orchestrator to a presentation layer:
- GET /health - Liveness check
- GET /personas - Persona registry in display order (no instructions)
- GET /turns/current - In-flight flag, persona states and latest turn
- POST /turns - Submit a question; lifecycle events stream back as SSE

Requirements:
- GROQ_API_KEY must be set in environment (read per completion call)
- Only one turn runs at a time; a second submission gets 409
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from mentor.events import QueueEventSink
from mentor.orchestrator import Orchestrator
from mentor.providers.groq import GroqProvider
from mentor.types import Turn

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Coding Mentor API",
    description="Routes coding questions to mentor personas and streams their progress",
    version="1.0.0",
)

# Global orchestrator instance (initialized lazily)
_orchestrator: Orchestrator | None = None


def get_orchestrator() -> Orchestrator:
    """Get or initialize the orchestrator singleton."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = Orchestrator(GroqProvider())
    return _orchestrator


def set_orchestrator(orchestrator: Orchestrator | None) -> None:
    """Replace the orchestrator singleton (tests, alternative providers)."""
    global _orchestrator
    _orchestrator = orchestrator


class TurnRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=8000)


class PersonaInfo(BaseModel):
    id: str
    name: str
    localized_name: str
    role: str
    icon: str
    color: str


def _sse_frame(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def _stream_turn(sink: QueueEventSink, task: asyncio.Task[Turn | None]) -> AsyncIterator[str]:
    """Relay lifecycle events until the turn settles."""
    try:
        async for event in sink.events():
            yield _sse_frame(event.to_dict())
    finally:
        # No mid-flight abort: a disconnected client still lets the turn settle
        await task


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    orchestrator = get_orchestrator()
    return {"status": "ok", "in_flight": orchestrator.in_flight}


@app.get("/personas", response_model=list[PersonaInfo])
async def list_personas() -> list[PersonaInfo]:
    """List personas in registry order with display metadata."""
    registry = get_orchestrator().registry
    return [
        PersonaInfo(
            id=p.id,
            name=p.name,
            localized_name=p.localized_name,
            role=p.role,
            icon=p.icon,
            color=p.color,
        )
        for p in registry.all()
    ]


@app.get("/turns/current")
async def current_turn() -> dict[str, Any]:
    """Return the in-flight flag, persona states and the latest turn."""
    orchestrator = get_orchestrator()
    turn = orchestrator.current_turn
    return {
        "in_flight": orchestrator.in_flight,
        "persona_states": {pid: state.value for pid, state in orchestrator.persona_states.items()},
        "turn": turn.to_dict() if turn else None,
    }


@app.post("/turns")
async def submit_turn(request: TurnRequest) -> StreamingResponse:
    """Run a turn and stream its lifecycle events as Server-Sent Events."""
    question = request.question.strip()
    if not question:
        raise HTTPException(status_code=422, detail="question must not be blank")

    orchestrator = get_orchestrator()
    if orchestrator.in_flight:
        raise HTTPException(status_code=409, detail="A turn is already in progress")

    sink = QueueEventSink()
    task = asyncio.create_task(orchestrator.run_turn(question, sink=sink))

    # Let the task take the in-flight flag; a lost race settles it with None
    await asyncio.sleep(0)
    if task.done() and task.result() is None:
        raise HTTPException(status_code=409, detail="A turn is already in progress")

    logger.info("Streaming turn for question (%d chars)", len(question))
    return StreamingResponse(
        _stream_turn(sink, task),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(_request, exc):
    """Global exception handler to ensure consistent error responses."""
    logger.error("Unhandled API error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
