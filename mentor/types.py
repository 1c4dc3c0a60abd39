"""Mentor module types — shared dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

PersonaId = str


# ---------------------------------------------------------------------------
# Persona definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PersonaDefinition:
    """A mentor persona: identity, display metadata and system instruction."""

    id: PersonaId  # e.g. "architect"
    name: str  # display name, e.g. "Architect"
    localized_name: str  # Burmese display name
    role: str  # short role description
    instruction: str  # system-level directive
    icon: str = ""
    color: str = ""


class PersonaState(str, Enum):
    """Per-persona, per-turn status."""

    IDLE = "idle"
    THINKING = "thinking"
    DONE = "done"


# ---------------------------------------------------------------------------
# Provider configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration for a chat-completion provider."""

    api_key_env: str  # e.g. "GROQ_API_KEY"
    base_url: str  # e.g. "https://api.groq.com/openai"
    model: str
    chat_path: str = "/v1/chat/completions"
    max_tokens: int = 1000
    timeout_seconds: int = 60


# ---------------------------------------------------------------------------
# Turn / results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PersonaResult:
    """Output of one persona invocation (or the synthetic failure entry)."""

    persona_id: PersonaId
    text: str
    elapsed_seconds: float = 0.0
    is_error: bool = False

    def to_dict(self) -> dict:
        return {
            "persona_id": self.persona_id,
            "text": self.text,
            "elapsed_seconds": self.elapsed_seconds,
            "is_error": self.is_error,
        }


class TurnOutcome(str, Enum):
    """Terminal state of a turn."""

    SUCCESS = "success"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Turn:
    """Snapshot of one question plus its processing record.

    Turns are immutable: the orchestrator advances a turn by building a new
    snapshot (``with_plan``, ``with_result``, ``settle``), so a snapshot handed
    to a sink or caller never changes underneath it.
    """

    question: str
    persona_ids: tuple[PersonaId, ...] = ()
    results: tuple[PersonaResult, ...] = ()
    outcome: TurnOutcome | None = None
    error: str | None = None
    started_at: datetime = field(default_factory=_utcnow)
    settled_at: datetime | None = None

    @property
    def is_settled(self) -> bool:
        return self.outcome is not None

    def with_plan(self, persona_ids: list[PersonaId]) -> Turn:
        return replace(self, persona_ids=tuple(persona_ids))

    def with_result(self, result: PersonaResult) -> Turn:
        return replace(self, results=self.results + (result,))

    def settle(self, outcome: TurnOutcome, error: str | None = None) -> Turn:
        """Return the settled snapshot; a turn settles exactly once."""
        if self.is_settled:
            raise RuntimeError("Turn already settled")
        return replace(self, outcome=outcome, error=error, settled_at=_utcnow())

    def to_dict(self) -> dict:
        return {
            "question": self.question,
            "persona_ids": list(self.persona_ids),
            "results": [r.to_dict() for r in self.results],
            "outcome": self.outcome.value if self.outcome else None,
            "error": self.error,
            "started_at": self.started_at.isoformat(),
            "settled_at": self.settled_at.isoformat() if self.settled_at else None,
        }
