"""Turn orchestrator — routes a question and runs the chosen personas.

Per turn::

    Idle → Routing → PersonaRunning(1) → ... → PersonaRunning(n) → Settled

Personas run strictly in plan order. Each one sees the question plus the
full output of every persona before it, so calls can never overlap.
Only one turn may be in flight per orchestrator; a question submitted
meanwhile is rejected, not queued.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from mentor.events import LifecycleEventSink
from mentor.personas.defaults import DEFAULT_PERSONA_ID, ERROR_PERSONA_ID
from mentor.personas.registry import PersonaRegistry
from mentor.providers.base import CompletionProvider
from mentor.router import PersonaRouter
from mentor.types import (
    PersonaDefinition,
    PersonaId,
    PersonaResult,
    PersonaState,
    Turn,
    TurnOutcome,
)

logger = logging.getLogger(__name__)

ERROR_TEXT_PREFIX = "Error ဖြစ်သွားတယ်: "


def build_persona_prompt(
    question: str,
    previous: list[tuple[PersonaDefinition, PersonaResult]],
) -> str:
    """Build the user message for the next persona.

    The first persona gets the bare question; later personas also get a
    "Previous agents" block with each earlier answer, in invocation order.
    """
    prompt = f"User question: {question}"
    if previous:
        blocks = "\n\n".join(f"[{persona.name}]: {result.text}" for persona, result in previous)
        prompt += f"\n\nPrevious agents:\n{blocks}"
    return prompt


def elapsed_seconds(start: float, end: float) -> float:
    """Wall-clock seconds between two monotonic readings, one decimal."""
    return round(max(0.0, end - start), 1)


class Orchestrator:
    """Drives one turn at a time from question to settled transcript.

    Usage::

        orchestrator = Orchestrator(GroqProvider())
        turn = await orchestrator.run_turn("React ကို ဘယ်ကစပြီး သင်ရမလဲ?")
        for result in turn.results:
            print(result.persona_id, result.elapsed_seconds, result.text)

    The orchestrator owns the in-flight flag, the current turn and the
    persona-state map. Observers read them through the properties below
    and never mutate them.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        router: PersonaRouter | None = None,
        registry: PersonaRegistry | None = None,
        sink: LifecycleEventSink | None = None,
    ) -> None:
        self.provider = provider
        if registry is None:
            registry = router.registry if router is not None else PersonaRegistry.default()
        self.registry = registry
        self.router = router or PersonaRouter(provider, self.registry)
        self.sink = sink or LifecycleEventSink()
        self._in_flight = False
        self._current_turn: Turn | None = None
        self._states: dict[PersonaId, PersonaState] = {
            persona_id: PersonaState.IDLE for persona_id in self.registry.ids()
        }

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def current_turn(self) -> Turn | None:
        return self._current_turn

    @property
    def persona_states(self) -> dict[PersonaId, PersonaState]:
        return dict(self._states)

    # ------------------------------------------------------------------
    # Turn execution
    # ------------------------------------------------------------------

    async def run_turn(self, question: str, sink: LifecycleEventSink | None = None) -> Turn | None:
        """Process one question end to end.

        Args:
            question: The user's free-form question.
            sink: Observer for this turn only (defaults to the instance sink).

        Returns:
            The settled Turn, or ``None`` if the question was rejected
            (blank, or another turn is still in flight).
        """
        if self._in_flight:
            logger.warning("Turn already in flight, rejecting question")
            return None
        if not question or not question.strip():
            logger.warning("Empty question, ignoring")
            return None

        sink = sink or self.sink
        with self._acquire():
            return await self._run(question.strip(), sink)

    @contextmanager
    def _acquire(self) -> Iterator[None]:
        self._in_flight = True
        try:
            yield
        finally:
            self._in_flight = False

    async def _run(self, question: str, sink: LifecycleEventSink) -> Turn:
        self._states = {persona_id: PersonaState.IDLE for persona_id in self.registry.ids()}
        turn = self._advance(Turn(question=question))
        logger.info("Turn started (%d chars)", len(question))
        self._emit(sink.turn_started, question)

        # Routing
        try:
            plan = await self.router.route(question)
        except Exception as exc:
            logger.error("Routing failed: %s", exc)
            return self._settle(turn, sink, TurnOutcome.ERROR, str(exc))

        plan = [persona_id for persona_id in plan if persona_id in self.registry]
        if not plan and DEFAULT_PERSONA_ID in self.registry:
            plan = [DEFAULT_PERSONA_ID]
        if not plan:
            logger.error("No registered persona can answer")
            return self._settle(turn, sink, TurnOutcome.ERROR, "No personas available")
        turn = self._advance(turn.with_plan(plan))
        self._emit(sink.personas_selected, list(plan))

        # Personas, strictly one after another
        completed: list[tuple[PersonaDefinition, PersonaResult]] = []
        for persona_id in plan:
            persona = self.registry.get(persona_id)
            self._states[persona_id] = PersonaState.THINKING
            self._emit(sink.persona_thinking, persona_id)

            prompt = build_persona_prompt(question, completed)
            start = time.monotonic()
            try:
                text = await self.provider.complete(persona.instruction, prompt)
            except Exception as exc:
                self._states[persona_id] = PersonaState.IDLE
                logger.error("Persona %s failed: %s", persona_id, exc)
                turn = turn.with_result(
                    PersonaResult(
                        persona_id=ERROR_PERSONA_ID,
                        text=f"{ERROR_TEXT_PREFIX}{exc}",
                        elapsed_seconds=0.0,
                        is_error=True,
                    )
                )
                return self._settle(turn, sink, TurnOutcome.ERROR, str(exc))

            result = PersonaResult(
                persona_id=persona_id,
                text=text,
                elapsed_seconds=elapsed_seconds(start, time.monotonic()),
            )
            turn = self._advance(turn.with_result(result))
            completed.append((persona, result))
            self._states[persona_id] = PersonaState.DONE
            logger.info("Persona %s done in %.1fs", persona_id, result.elapsed_seconds)
            self._emit(sink.persona_done, persona_id, result)

        return self._settle(turn, sink, TurnOutcome.SUCCESS)

    def _advance(self, turn: Turn) -> Turn:
        self._current_turn = turn
        return turn

    def _settle(
        self,
        turn: Turn,
        sink: LifecycleEventSink,
        outcome: TurnOutcome,
        error: str | None = None,
    ) -> Turn:
        turn = self._advance(turn.settle(outcome, error))
        logger.info(
            "Turn settled: %s (%d/%d personas answered)",
            outcome.value,
            sum(1 for r in turn.results if not r.is_error),
            len(turn.persona_ids),
        )
        self._emit(sink.turn_settled, turn)
        return turn

    def _emit(self, callback, *args) -> None:
        """Deliver an event; a failing observer never affects the turn."""
        try:
            callback(*args)
        except Exception:
            logger.exception("Lifecycle sink %s raised", getattr(callback, "__name__", callback))
