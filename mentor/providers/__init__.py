"""Completion provider adapters — abstract base, errors and the Groq client."""

from __future__ import annotations

from .base import (
    CompletionError,
    CompletionProvider,
    ConfigError,
    ServiceError,
    TransportError,
)
from .groq import GROQ_CONFIG, GroqProvider

__all__ = [
    "CompletionError",
    "CompletionProvider",
    "ConfigError",
    "GROQ_CONFIG",
    "GroqProvider",
    "ServiceError",
    "TransportError",
]
