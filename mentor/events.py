"""Lifecycle events emitted by the orchestrator.

Sinks are passive observers: they receive immutable values (or copies) and
must not block. ``QueueEventSink`` buffers events for an async consumer such
as the SSE endpoint.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Literal

from mentor.types import PersonaId, PersonaResult, Turn

logger = logging.getLogger(__name__)

EventType = Literal[
    "turn_started",
    "personas_selected",
    "persona_thinking",
    "persona_done",
    "turn_settled",
]

# Large enough for a four-persona turn many times over
EVENT_QUEUE_SIZE = 100


@dataclass(frozen=True)
class LifecycleEvent:
    """A single lifecycle transition, ready for JSON encoding."""

    type: EventType
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, **self.payload}


class LifecycleEventSink:
    """Observer interface for turn lifecycle transitions.

    Every method is a no-op; subclasses override what they need.
    """

    def turn_started(self, question: str) -> None:
        pass

    def personas_selected(self, persona_ids: list[PersonaId]) -> None:
        pass

    def persona_thinking(self, persona_id: PersonaId) -> None:
        pass

    def persona_done(self, persona_id: PersonaId, result: PersonaResult) -> None:
        pass

    def turn_settled(self, turn: Turn) -> None:
        pass


class QueueEventSink(LifecycleEventSink):
    """Sink that converts callbacks into ``LifecycleEvent``s on an asyncio queue."""

    def __init__(self, maxsize: int = EVENT_QUEUE_SIZE) -> None:
        self.queue: asyncio.Queue[LifecycleEvent] = asyncio.Queue(maxsize=maxsize)

    def _put(self, event: LifecycleEvent) -> None:
        try:
            # Never block the orchestrator
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            if event.type != "turn_settled":
                logger.warning("Event queue full, dropping %s event", event.type)
                return
            # turn_settled ends the consumer's iteration, so it always gets a slot
            dropped = self.queue.get_nowait()
            logger.warning("Event queue full, dropping %s event to deliver turn_settled", dropped.type)
            self.queue.put_nowait(event)

    def turn_started(self, question: str) -> None:
        self._put(LifecycleEvent("turn_started", {"question": question}))

    def personas_selected(self, persona_ids: list[PersonaId]) -> None:
        self._put(LifecycleEvent("personas_selected", {"persona_ids": list(persona_ids)}))

    def persona_thinking(self, persona_id: PersonaId) -> None:
        self._put(LifecycleEvent("persona_thinking", {"persona_id": persona_id}))

    def persona_done(self, persona_id: PersonaId, result: PersonaResult) -> None:
        self._put(LifecycleEvent("persona_done", {"persona_id": persona_id, "result": result.to_dict()}))

    def turn_settled(self, turn: Turn) -> None:
        self._put(LifecycleEvent("turn_settled", {"turn": turn.to_dict()}))

    async def events(self) -> AsyncIterator[LifecycleEvent]:
        """Yield events until (and including) ``turn_settled``."""
        while True:
            event = await self.queue.get()
            yield event
            if event.type == "turn_settled":
                return
