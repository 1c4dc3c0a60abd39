"""Coding Mentor — persona routing and orchestration.

Architecture::

    question
       │
    ┌──┴─────┐
    │ Router │  ← one completion call picks the persona plan
    └──┬─────┘
       │  ["architect", "instructor", ...]
    ┌──┴───────────┐
    │ Orchestrator │  ← runs personas in order, chaining prior answers
    └──┬───────────┘
       │  turn_started / personas_selected / persona_thinking /
       │  persona_done / turn_settled
       ▼
    Lifecycle sink (SSE endpoint, CLI, ...)

Submodules:
- personas:     Fixed persona table and registry
- providers:    Chat-completion client (Groq) and error types
- router:       PersonaRouter — question → ordered persona ids
- orchestrator: Orchestrator — single-flight, sequential turn runner
- events:       Lifecycle sink interface and queue-backed sink
- types:        Shared dataclasses and enums
"""

from mentor.events import LifecycleEvent, LifecycleEventSink, QueueEventSink
from mentor.orchestrator import Orchestrator
from mentor.personas import PersonaRegistry
from mentor.providers import (
    CompletionError,
    CompletionProvider,
    ConfigError,
    GroqProvider,
    ServiceError,
    TransportError,
)
from mentor.router import PersonaRouter
from mentor.types import (
    PersonaDefinition,
    PersonaResult,
    PersonaState,
    ProviderConfig,
    Turn,
    TurnOutcome,
)

__all__ = [
    "CompletionError",
    "CompletionProvider",
    "ConfigError",
    "GroqProvider",
    "LifecycleEvent",
    "LifecycleEventSink",
    "Orchestrator",
    "PersonaDefinition",
    "PersonaRegistry",
    "PersonaResult",
    "PersonaRouter",
    "PersonaState",
    "ProviderConfig",
    "QueueEventSink",
    "ServiceError",
    "TransportError",
    "Turn",
    "TurnOutcome",
]
