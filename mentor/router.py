"""Persona router — classifies a question into an ordered persona plan.

The router asks the completion service which personas should answer, then
validates the reply against the registry. It never fails outward: any
completion error, undecodable reply or empty plan falls back to the single
default persona.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from mentor.personas.defaults import DEFAULT_PERSONA_ID
from mentor.personas.registry import PersonaRegistry
from mentor.providers.base import CompletionError, CompletionProvider
from mentor.types import PersonaId

logger = logging.getLogger(__name__)

ROUTER_INSTRUCTION = """\
You are a smart router for a Coding Mentor AI system with 4 agents:
- architect: For roadmap, planning, "where to start", tech stack questions
- instructor: For "how to code", learning concepts, code examples, tutorials
- reviewer: For "is my code good?", code review, best practices check, security, pasting code for feedback
- debugger: For errors, bugs, "why doesn't this work", fixing issues

Analyze the user's question and return ONLY a JSON array of agent IDs needed.
Rules:
- Return minimum agents needed (usually 1-2)
- Only use all 4 for very broad/complex questions
- Return format: ["architect"] or ["instructor","reviewer"] etc.
- No explanation, just the JSON array."""

_FENCE_RE = re.compile(r"```json|```")


def strip_code_fences(raw: str) -> str:
    """Remove fenced-code markers and surrounding whitespace."""
    return _FENCE_RE.sub("", raw).strip()


def parse_persona_ids(raw: str | None) -> list[Any] | None:
    """Decode router output as a flat JSON array.

    Returns:
        The decoded list, or ``None`` if the text is empty, not JSON, or not
        an array.
    """
    if not raw or not raw.strip():
        return None

    try:
        decoded = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as e:
        logger.warning("Router output is not JSON: %s", e)
        return None

    if not isinstance(decoded, list):
        logger.warning("Router output is not an array: %s", type(decoded).__name__)
        return None
    return decoded


class PersonaRouter:
    """Selects the minimal persona subset for a question.

    Usage::

        router = PersonaRouter(GroqProvider())
        plan = await router.route("How do I use useState?")
        # e.g. ["instructor"]
    """

    def __init__(
        self,
        provider: CompletionProvider,
        registry: PersonaRegistry | None = None,
    ) -> None:
        self.provider = provider
        self.registry = registry if registry is not None else PersonaRegistry.default()

    async def route(self, question: str) -> list[PersonaId]:
        """Return a deduplicated, registry-valid, order-preserving plan."""
        try:
            raw = await self.provider.complete(ROUTER_INSTRUCTION, question)
        except CompletionError as exc:
            logger.warning("Routing call failed, falling back to %s: %s", DEFAULT_PERSONA_ID, exc)
            return [DEFAULT_PERSONA_ID]

        decoded = parse_persona_ids(raw)
        if decoded is None:
            logger.warning("Unparseable router output %r, falling back to %s", (raw or "")[:200], DEFAULT_PERSONA_ID)
            return [DEFAULT_PERSONA_ID]

        plan = self.validate(decoded)
        if not plan:
            logger.warning("Router selected no known personas (%r), falling back to %s", decoded, DEFAULT_PERSONA_ID)
            return [DEFAULT_PERSONA_ID]

        logger.info("Routed question to: %s", ", ".join(plan))
        return plan

    def validate(self, ids: list[Any]) -> list[PersonaId]:
        """Drop unknown ids and collapse duplicates to their first occurrence."""
        plan: list[PersonaId] = []
        for persona_id in ids:
            if persona_id in self.registry and persona_id not in plan:
                plan.append(persona_id)
        return plan
