"""Shared test fixtures for pytest.

Provides a scripted completion provider and a recording lifecycle sink used
across the mentor test files.
"""

from __future__ import annotations

from typing import Any

import pytest

from mentor.events import LifecycleEventSink
from mentor.providers.base import CompletionProvider
from mentor.types import PersonaResult, ProviderConfig, Turn

FAKE_CONFIG = ProviderConfig(
    api_key_env="FAKE_API_KEY",
    base_url="http://fake.local",
    model="fake-model",
)


class FakeProvider(CompletionProvider):
    """Completion provider that replays a script of outcomes in call order.

    Each script item is a string (returned), an exception (raised) or an
    async callable ``(system, user) -> str`` (awaited).
    """

    def __init__(self, script: list[Any] | None = None) -> None:
        super().__init__(FAKE_CONFIG)
        self.script = list(script or [])
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_instruction: str, user_message: str) -> str:
        self.calls.append((system_instruction, user_message))
        if not self.script:
            raise AssertionError("FakeProvider script exhausted")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return await item(system_instruction, user_message)
        return item


class RecordingSink(LifecycleEventSink):
    """Sink that records every callback as ``(name, *args)``."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    @property
    def names(self) -> list[str]:
        return [e[0] for e in self.events]

    def turn_started(self, question: str) -> None:
        self.events.append(("turn_started", question))

    def personas_selected(self, persona_ids: list[str]) -> None:
        self.events.append(("personas_selected", persona_ids))

    def persona_thinking(self, persona_id: str) -> None:
        self.events.append(("persona_thinking", persona_id))

    def persona_done(self, persona_id: str, result: PersonaResult) -> None:
        self.events.append(("persona_done", persona_id, result))

    def turn_settled(self, turn: Turn) -> None:
        self.events.append(("turn_settled", turn))


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def groq_api_key(monkeypatch) -> str:
    """Set a fake Groq credential for the duration of a test."""
    monkeypatch.setenv("GROQ_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def make_provider():
    """Factory for ``FakeProvider`` instances: ``make_provider([...script])``."""
    return FakeProvider
