"""Mentor personas — fixed persona table and registry.

The four personas share one record shape; they differ only in content.
"""

from __future__ import annotations

from .defaults import DEFAULT_PERSONA_ID, ERROR_PERSONA_ID
from .registry import PersonaRegistry

__all__ = ["DEFAULT_PERSONA_ID", "ERROR_PERSONA_ID", "PersonaRegistry"]
