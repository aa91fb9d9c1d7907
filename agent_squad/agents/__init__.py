"""Agents - persona definitions and registry."""

from .personas import (
    Persona,
    PersonaRegistry,
    PERSONAS,
    persona_registry,
    REQUIREMENTS,
    BUILD,
    REVIEW,
    VALIDATION,
    DEPLOYMENT,
)

__all__ = [
    "Persona",
    "PersonaRegistry",
    "PERSONAS",
    "persona_registry",
    "REQUIREMENTS",
    "BUILD",
    "REVIEW",
    "VALIDATION",
    "DEPLOYMENT",
]
