"""Tests for the coding-mentor HTTP API (personas, current turn, SSE turns)."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import PropertyMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from api.main import app, get_orchestrator, set_orchestrator
from mentor.orchestrator import Orchestrator
from mentor.providers.base import TransportError


@pytest.fixture
def client():
    """Create a test client."""
    yield TestClient(app)
    set_orchestrator(None)


def _use_script(make_provider, script) -> Orchestrator:
    orchestrator = Orchestrator(make_provider(script))
    set_orchestrator(orchestrator)
    return orchestrator


def _sse_events(body: str) -> list[dict]:
    return [json.loads(line[len("data: "):]) for line in body.splitlines() if line.startswith("data: ")]


def test_health(client, make_provider):
    _use_script(make_provider, [])

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "in_flight": False}


def test_list_personas_in_registry_order(client, make_provider):
    _use_script(make_provider, [])

    response = client.get("/personas")

    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data] == ["architect", "instructor", "reviewer", "debugger"]
    assert data[0]["localized_name"] == "သုတ"
    assert data[3]["icon"] == "🐛"
    assert all("instruction" not in p for p in data)


def test_submit_turn_streams_lifecycle(client, make_provider):
    _use_script(make_provider, ['["architect","instructor"]', "PLAN", "CODE"])

    response = client.post("/turns", json={"question": "React ကို ဘယ်ကစပြီး သင်ရမလဲ?"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    events = _sse_events(response.text)
    assert [e["type"] for e in events] == [
        "turn_started",
        "personas_selected",
        "persona_thinking",
        "persona_done",
        "persona_thinking",
        "persona_done",
        "turn_settled",
    ]
    assert events[0]["question"] == "React ကို ဘယ်ကစပြီး သင်ရမလဲ?"
    assert events[1]["persona_ids"] == ["architect", "instructor"]
    assert events[5]["result"]["text"] == "CODE"
    assert events[-1]["turn"]["outcome"] == "success"


def test_submit_turn_error_outcome_streams_partial_transcript(client, make_provider):
    _use_script(make_provider, ['["architect","reviewer"]', "PLAN", TransportError("upstream down")])

    response = client.post("/turns", json={"question": "review my plan"})

    events = _sse_events(response.text)
    turn = events[-1]["turn"]
    assert turn["outcome"] == "error"
    assert [r["persona_id"] for r in turn["results"]] == ["architect", "debugger"]
    assert turn["results"][1]["is_error"] is True
    assert "upstream down" in turn["results"][1]["text"]


def test_current_turn_after_submission(client, make_provider):
    _use_script(make_provider, ['["debugger"]', "FIXED"])

    before = client.get("/turns/current").json()
    assert before["turn"] is None
    assert set(before["persona_states"].values()) == {"idle"}

    client.post("/turns", json={"question": "Cannot read property of undefined"})
    after = client.get("/turns/current").json()

    assert after["in_flight"] is False
    assert after["persona_states"]["debugger"] == "done"
    assert after["turn"]["results"][0]["text"] == "FIXED"


@pytest.mark.parametrize("question", ["", "   "])
def test_blank_question_rejected(client, make_provider, question):
    provider_script = []
    orchestrator = _use_script(make_provider, provider_script)

    response = client.post("/turns", json={"question": question})

    assert response.status_code == 422
    assert orchestrator.current_turn is None


def test_submit_while_in_flight_returns_409(client, make_provider):
    orchestrator = _use_script(make_provider, [])

    with patch.object(Orchestrator, "in_flight", new_callable=PropertyMock, return_value=True):
        response = client.post("/turns", json={"question": "another one"})

    assert response.status_code == 409
    assert orchestrator.current_turn is None
    assert orchestrator.provider.calls == []


def test_get_orchestrator_builds_default_once():
    set_orchestrator(None)
    try:
        first = get_orchestrator()
        assert first is get_orchestrator()
        assert first.provider.model == "llama3-70b-8192"
    finally:
        set_orchestrator(None)


@pytest.mark.asyncio
async def test_submit_during_running_turn_returns_409(make_provider):
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow_answer(system, user):
        started.set()
        await release.wait()
        return "PLAN"

    orchestrator = _use_script(make_provider, ['["architect"]', slow_answer])
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            first = asyncio.create_task(client.post("/turns", json={"question": "first"}))
            await asyncio.wait_for(started.wait(), timeout=5)

            busy = await client.post("/turns", json={"question": "second"})

            # Stale in_flight read: the scheduled turn itself is rejected
            with patch.object(Orchestrator, "in_flight", new_callable=PropertyMock, return_value=False):
                raced = await client.post("/turns", json={"question": "third"})

            assert busy.status_code == 409
            assert raced.status_code == 409
            assert len(orchestrator.provider.calls) == 2

            release.set()
            response = await asyncio.wait_for(first, timeout=5)
    finally:
        set_orchestrator(None)

    assert response.status_code == 200
    events = _sse_events(response.text)
    assert events[-1]["turn"]["question"] == "first"
    assert events[-1]["turn"]["outcome"] == "success"
    assert orchestrator.current_turn.question == "first"
