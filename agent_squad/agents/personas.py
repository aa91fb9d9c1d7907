"""Persona Registry - the five fixed agent personas."""

from dataclasses import dataclass
from typing import Dict, Tuple

from ..errors import UnknownPersona


@dataclass(frozen=True)
class Persona:
    """Immutable persona definition dispatched to the LLM gateway."""

    id: str
    name: str
    role: str
    instructions: str
    avatar: str
    color: str
    step_title: str
    message_kind: str = "message"

    @property
    def short_name(self) -> str:
        """First word of the display name, used as the workflow step owner."""
        return self.name.split(" ", 1)[0]


PERSONAS: Tuple[Persona, ...] = (
    Persona(
        id="prompt-agent",
        name="Alex the Interpreter",
        role="Prompt Architect",
        instructions=(
            "You are Alex, a skilled prompt architect. Your job is to analyze user requests "
            "and break them down into clear, actionable development requirements. Ask "
            "clarifying questions when needed and provide structured project plans."
        ),
        avatar="🎯",
        color="bg-purple-500",
        step_title="Requirements Analysis",
    ),
    Persona(
        id="coder-agent",
        name="Morgan the Builder",
        role="Full-Stack Developer",
        instructions=(
            "You are Morgan, an expert full-stack developer. Generate clean, efficient, and "
            "well-documented code based on requirements. Focus on React, TypeScript, and "
            "modern web development practices."
        ),
        avatar="💻",
        color="bg-green-500",
        step_title="Code Generation",
        message_kind="code",
    ),
    Persona(
        id="reviewer-agent",
        name="Jordan the Guardian",
        role="Code Reviewer",
        instructions=(
            "You are Jordan, a senior code reviewer. Analyze code for bugs, security issues, "
            "performance problems, and adherence to best practices. Provide constructive "
            "feedback and suggestions."
        ),
        avatar="🔍",
        color="bg-blue-500",
        step_title="Code Review",
        message_kind="review",
    ),
    Persona(
        id="qa-agent",
        name="Riley the Validator",
        role="QA Engineer",
        instructions=(
            "You are Riley, a QA engineer focused on testing and quality assurance. Create "
            "test cases, identify edge cases, and ensure software reliability and user "
            "experience."
        ),
        avatar="🧪",
        color="bg-orange-500",
        step_title="Quality Assurance",
        message_kind="test",
    ),
    Persona(
        id="deployment-agent",
        name="Casey the Deployer",
        role="DevOps Engineer",
        instructions=(
            "You are Casey, a DevOps specialist. Handle deployment strategies, environment "
            "setup, CI/CD pipelines, and production readiness assessments."
        ),
        avatar="🚀",
        color="bg-red-500",
        step_title="Deployment",
        message_kind="deployment",
    ),
)

# Positions in PERSONAS
REQUIREMENTS = 0
BUILD = 1
REVIEW = 2
VALIDATION = 3
DEPLOYMENT = 4


class PersonaRegistry:
    """Read-only lookup over the persona table."""

    def __init__(self, personas: Tuple[Persona, ...] = PERSONAS):
        self._personas = personas
        self._by_id: Dict[str, Persona] = {p.id: p for p in personas}

    def get(self, persona_id: str) -> Persona:
        """
        Get a persona by id.

        Raises:
            UnknownPersona: If no persona has this id
        """
        try:
            return self._by_id[persona_id]
        except KeyError:
            raise UnknownPersona(
                f"Unknown persona: {persona_id}. "
                f"Available: {', '.join(self._by_id.keys())}"
            ) from None

    def get_at(self, index: int) -> Persona:
        """
        Get a persona by its position in the pipeline.

        Raises:
            UnknownPersona: If index is outside the table
        """
        if not 0 <= index < len(self._personas):
            raise UnknownPersona(f"No persona at position {index}")
        return self._personas[index]

    def list(self) -> Tuple[Persona, ...]:
        """All personas in pipeline order."""
        return self._personas

    def __len__(self) -> int:
        return len(self._personas)


# Global singleton
persona_registry = PersonaRegistry()
