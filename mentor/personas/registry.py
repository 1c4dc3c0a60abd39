"""Persona registry — ordered, read-only lookup of persona definitions."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from mentor.types import PersonaDefinition, PersonaId

logger = logging.getLogger(__name__)


class PersonaRegistry:
    """Ordered mapping of ``PersonaId`` → ``PersonaDefinition``.

    Iteration order is declaration order. Lookups of unknown ids return
    ``None`` and never raise.
    """

    def __init__(self, personas: Iterable[PersonaDefinition]) -> None:
        self._personas: dict[PersonaId, PersonaDefinition] = {}
        for persona in personas:
            if persona.id in self._personas:
                raise ValueError(f"Duplicate persona id: {persona.id}")
            self._personas[persona.id] = persona
        logger.debug("Persona registry built: %s", ", ".join(self._personas))

    @classmethod
    def default(cls) -> PersonaRegistry:
        """Registry of the built-in personas from ``defaults``."""
        from mentor.personas.defaults import ALL_DEFAULT_PERSONAS

        return cls(ALL_DEFAULT_PERSONAS)

    def get(self, persona_id: Any) -> PersonaDefinition | None:
        """Get a persona by id (``None`` for unknown or non-string ids)."""
        if not isinstance(persona_id, str):
            return None
        return self._personas.get(persona_id)

    def all(self) -> list[PersonaDefinition]:
        """Return all personas in declaration order."""
        return list(self._personas.values())

    def ids(self) -> list[PersonaId]:
        return list(self._personas)

    def __contains__(self, persona_id: object) -> bool:
        return isinstance(persona_id, str) and persona_id in self._personas

    def __len__(self) -> int:
        return len(self._personas)
