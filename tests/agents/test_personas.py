"""Tests for the persona registry."""

import dataclasses
import pytest

from agent_squad.agents import PersonaRegistry, persona_registry, REQUIREMENTS, BUILD
from agent_squad.errors import UnknownPersona


class TestPersonaRegistry:
    """SUT: PersonaRegistry"""

    def test_exactly_five_in_order(self):
        """The pipeline has five personas in a fixed order."""
        titles = [p.step_title for p in persona_registry.list()]
        assert titles == [
            "Requirements Analysis",
            "Code Generation",
            "Code Review",
            "Quality Assurance",
            "Deployment",
        ]
        assert len(persona_registry) == 5

    def test_get_by_id(self):
        """get() should find a persona by id."""
        persona = persona_registry.get("coder-agent")
        assert persona.name == "Morgan the Builder"
        assert persona.message_kind == "code"

    def test_get_unknown_id(self):
        """get() should raise UnknownPersona for an unknown id."""
        with pytest.raises(UnknownPersona):
            persona_registry.get("nobody")

    def test_get_at(self):
        """get_at() should follow pipeline positions."""
        assert persona_registry.get_at(REQUIREMENTS).id == "prompt-agent"
        assert persona_registry.get_at(BUILD).id == "coder-agent"

    @pytest.mark.parametrize("index", [-1, 5])
    def test_get_at_out_of_range(self, index):
        """get_at() should reject positions outside the table."""
        with pytest.raises(UnknownPersona):
            persona_registry.get_at(index)

    def test_personas_are_immutable(self):
        """Persona records cannot be modified."""
        persona = persona_registry.get_at(0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            persona.name = "Someone else"

    def test_short_name(self):
        """short_name is the first word of the display name."""
        assert [p.short_name for p in persona_registry.list()] == [
            "Alex", "Morgan", "Jordan", "Riley", "Casey"
        ]

    def test_custom_table(self):
        """A registry can be built over a different table."""
        registry = PersonaRegistry(persona_registry.list()[:2])
        assert len(registry) == 2
        with pytest.raises(UnknownPersona):
            registry.get("qa-agent")
