#!/usr/bin/env python3
"""Ask the coding mentors one question from the terminal.

Routes the question, runs each selected persona in order and prints the
lifecycle as it happens.

Usage:
    python -m scripts.ask_mentors "useState ဘယ်လိုသုံးရမလဲ?"
    python -m scripts.ask_mentors --list
    python -m scripts.ask_mentors -v "Cannot read property of undefined"

Environment:
    GROQ_API_KEY - Required.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Ensure imports work when invoked as a script
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from mentor.events import LifecycleEventSink  # noqa: E402
from mentor.orchestrator import Orchestrator  # noqa: E402
from mentor.personas.registry import PersonaRegistry  # noqa: E402
from mentor.providers.groq import GroqProvider  # noqa: E402
from mentor.types import PersonaResult, Turn, TurnOutcome  # noqa: E402

logger = logging.getLogger(__name__)


class ConsoleSink(LifecycleEventSink):
    """Prints lifecycle events to stdout."""

    def __init__(self, registry: PersonaRegistry) -> None:
        self.registry = registry

    def _label(self, persona_id: str) -> str:
        persona = self.registry.get(persona_id)
        if persona is None:
            return persona_id
        return f"{persona.icon} {persona.name} ({persona.localized_name})"

    def personas_selected(self, persona_ids: list[str]) -> None:
        print(f"⚡ Router → {', '.join(self._label(pid) for pid in persona_ids)}")

    def persona_thinking(self, persona_id: str) -> None:
        print(f"\n{self._label(persona_id)} ... thinking")

    def persona_done(self, persona_id: str, result: PersonaResult) -> None:
        print(f"{self._label(persona_id)} [{result.elapsed_seconds:.1f}s]")
        print(result.text)

    def turn_settled(self, turn: Turn) -> None:
        if turn.outcome == TurnOutcome.ERROR:
            for result in turn.results:
                if result.is_error:
                    print(f"\n{self._label(result.persona_id)}")
                    print(result.text)
            if not turn.results:
                print(f"\n❌ {turn.error}")
        print(f"\n— {turn.outcome.value} ({len(turn.results)} result(s))")


async def ask(question: str) -> int:
    provider = GroqProvider()
    orchestrator = Orchestrator(provider)
    try:
        turn = await orchestrator.run_turn(question, sink=ConsoleSink(orchestrator.registry))
    finally:
        await provider.close()

    if turn is None:
        logger.error("Question was empty")
        return 1
    return 0 if turn.outcome == TurnOutcome.SUCCESS else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Ask the coding mentors a question")
    parser.add_argument("question", nargs="?", help="Question to ask")
    parser.add_argument("--list", action="store_true", help="List personas and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.list:
        for persona in PersonaRegistry.default().all():
            print(f"{persona.icon} {persona.id:<11} {persona.localized_name} — {persona.role}")
        return 0

    if not args.question:
        parser.error("a question is required (or use --list)")

    return asyncio.run(ask(args.question))


if __name__ == "__main__":
    sys.exit(main())
